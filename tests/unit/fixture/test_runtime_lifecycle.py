from unittest.mock import MagicMock, patch

import pytest

from simfixture.exceptions import TerminationTimeout
from simfixture.fixture import RuntimeLifecycle


class TestRuntimeLifecycleStart:
    def test_start_registers_termination_before_starting(self, fake_runtime_factory):
        factory = fake_runtime_factory()
        lifecycle = RuntimeLifecycle(factory)

        signal = lifecycle.start()
        runtime = factory.created[0]

        assert lifecycle.started is True
        assert runtime.start_calls == 1
        assert signal.fulfilled is False
        assert lifecycle.signal is signal

    def test_double_start_raises(self, fake_runtime_factory):
        lifecycle = RuntimeLifecycle(fake_runtime_factory())
        lifecycle.start()

        with pytest.raises(RuntimeError):
            lifecycle.start()

    def test_garbage_collection_is_off_by_default(self, fake_runtime_factory):
        lifecycle = RuntimeLifecycle(fake_runtime_factory())

        with patch("simfixture.fixture.runtime_lifecycle.gc.collect") as collect:
            lifecycle.start()

        collect.assert_not_called()
        assert lifecycle.rss_before_start is None

    def test_garbage_collection_when_enabled(self, fake_runtime_factory):
        lifecycle = RuntimeLifecycle(fake_runtime_factory(), collect_garbage=True)

        with patch("simfixture.fixture.runtime_lifecycle.gc.collect") as collect:
            lifecycle.start()

        assert collect.call_count == 3
        assert lifecycle.rss_before_start > 0


class TestRuntimeLifecycleStop:
    def test_stop_without_start_raises(self, fake_runtime_factory):
        with pytest.raises(RuntimeError):
            RuntimeLifecycle(fake_runtime_factory()).stop()

    def test_stop_twice_raises(self, fake_runtime_factory):
        lifecycle = RuntimeLifecycle(fake_runtime_factory())
        lifecycle.start()
        lifecycle.stop()

        with pytest.raises(RuntimeError):
            lifecycle.stop()

    def test_stop_exactly_once_when_body_faults(self):
        runtime = MagicMock()
        lifecycle = RuntimeLifecycle(lambda: runtime)

        def faulting_body():
            raise ValueError("body failed")

        with pytest.raises(ValueError):
            lifecycle.start()
            try:
                faulting_body()
            finally:
                lifecycle.stop()

        runtime.shutdown.assert_called_once_with()
        assert lifecycle.stopped is True


class TestRuntimeLifecycleTermination:
    @pytest.mark.asyncio
    async def test_await_termination(self, fake_runtime_factory):
        lifecycle = RuntimeLifecycle(fake_runtime_factory())
        signal = lifecycle.start()
        lifecycle.stop()

        await lifecycle.await_termination(signal, 1)

        assert signal.fulfilled is True

    @pytest.mark.asyncio
    async def test_await_termination_times_out(self, fake_runtime_factory):
        lifecycle = RuntimeLifecycle(fake_runtime_factory(terminates=False))
        signal = lifecycle.start()
        lifecycle.stop()

        with pytest.raises(TerminationTimeout):
            await lifecycle.await_termination(signal, 0.05)
