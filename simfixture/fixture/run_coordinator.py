import asyncio
from typing import Any

from simfixture.engine.runtime import AwaitRun, Failure, Run, Runtime, Success
from simfixture.exceptions import (
    AskTimeout,
    SimulationTimeout,
    UnexpectedControllerReply,
)

from .models import SimulationHandle


class RunCoordinator:
    def __init__(self, runtime: Runtime) -> None:
        self._runtime = runtime

    async def run(self, simulation: SimulationHandle) -> str:
        timings = simulation.payload.set_up()

        run_id = self._unwrap(
            await self._ask(
                Run(
                    simulation=simulation.payload,
                    simulation_id=simulation.name,
                    description=simulation.name,
                    timings=timings,
                ),
                simulation.timeout_seconds,
            )
        )

        self._unwrap(
            await self._ask(
                AwaitRun(run_id=run_id),
                simulation.timeout_seconds,
            )
        )

        return run_id

    async def _ask(self, message: Any, timeout: int) -> Any:
        reply = self._runtime.ask(message, timeout=timeout)

        try:
            return await asyncio.wait_for(
                asyncio.wrap_future(reply),
                timeout=timeout,
            )

        except (asyncio.TimeoutError, AskTimeout) as err:
            # wait_for cancels the pending reply, so a late answer is dropped
            raise SimulationTimeout(timeout) from err

    def _unwrap(self, reply: Any) -> str:
        match reply:
            case Success(value=str() as run_id):
                return run_id

            case Failure(error=error):
                raise error

            case _:
                raise UnexpectedControllerReply(reply)
