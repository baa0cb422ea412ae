import pytest

from simfixture.engine.runtime import AwaitRun, Failure, Run, Success
from simfixture.engine.runtime.messages import send_reply
from simfixture.engine.simulation import Simulation
from simfixture.exceptions import (
    SimulationDefinitionError,
    SimulationTimeout,
    UnexpectedControllerReply,
)
from simfixture.fixture import RunCoordinator, SimulationHandle

from .conftest import FakeRuntime


def make_handle(simulation, timeout_seconds: int = 2) -> SimulationHandle:
    return SimulationHandle(
        name=simulation.name,
        timeout_seconds=timeout_seconds,
        payload=simulation,
    )


class TestRunCoordinator:
    @pytest.mark.asyncio
    async def test_run_returns_run_id(self, checkout_simulation):
        runtime = FakeRuntime(
            replies=[
                Success("checkout_flow-1"),
                Success("checkout_flow-1"),
            ]
        )

        run_id = await RunCoordinator(runtime).run(make_handle(checkout_simulation))

        assert run_id == "checkout_flow-1"

        submitted, awaited = runtime.asked
        assert isinstance(submitted, Run)
        assert submitted.simulation is checkout_simulation
        assert submitted.simulation_id == "checkout_flow"
        assert submitted.timings == checkout_simulation.timings
        assert awaited == AwaitRun(run_id="checkout_flow-1")

    @pytest.mark.asyncio
    async def test_sets_up_simulation_before_submitting(self, checkout_simulation):
        runtime = FakeRuntime(replies=[Success("run-1"), Success("run-1")])

        await RunCoordinator(runtime).run(make_handle(checkout_simulation))

        assert checkout_simulation.ready is True

    @pytest.mark.asyncio
    async def test_controller_never_replies(self, checkout_simulation):
        runtime = FakeRuntime()

        with pytest.raises(SimulationTimeout) as error:
            await RunCoordinator(runtime).run(
                make_handle(checkout_simulation, timeout_seconds=1)
            )

        assert error.value.seconds == 1
        assert str(error.value) == "Reached simulation timeout of 1 seconds"
        assert runtime.pending[0].cancelled() is True

    @pytest.mark.asyncio
    async def test_late_reply_is_discarded(self, checkout_simulation):
        runtime = FakeRuntime()

        with pytest.raises(SimulationTimeout) as error:
            await RunCoordinator(runtime).run(
                make_handle(checkout_simulation, timeout_seconds=1)
            )

        assert error.value.seconds == 1

        late = runtime.pending[0]
        assert late.cancelled() is True
        assert send_reply(late, Success("checkout_flow-1")) is False
        assert len(runtime.asked) == 1

    @pytest.mark.asyncio
    async def test_run_never_completes(self, checkout_simulation):
        runtime = FakeRuntime(replies=[Success("run-1")])

        with pytest.raises(SimulationTimeout):
            await RunCoordinator(runtime).run(
                make_handle(checkout_simulation, timeout_seconds=1)
            )

        assert len(runtime.asked) == 2

    @pytest.mark.asyncio
    async def test_failure_is_reraised_verbatim(self, checkout_simulation):
        error = OSError("disk full")
        runtime = FakeRuntime(replies=[Failure(error)])

        with pytest.raises(OSError) as raised:
            await RunCoordinator(runtime).run(make_handle(checkout_simulation))

        assert raised.value is error
        assert len(runtime.asked) == 1

    @pytest.mark.asyncio
    async def test_unexpected_reply(self, checkout_simulation):
        runtime = FakeRuntime(replies=["started"])

        with pytest.raises(UnexpectedControllerReply) as error:
            await RunCoordinator(runtime).run(make_handle(checkout_simulation))

        assert error.value.reply == "started"

    @pytest.mark.asyncio
    async def test_invalid_simulation_is_never_submitted(self):
        runtime = FakeRuntime()

        with pytest.raises(SimulationDefinitionError):
            await RunCoordinator(runtime).run(make_handle(Simulation("empty")))

        assert runtime.asked == []
