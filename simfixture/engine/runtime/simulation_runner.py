import asyncio
import time
from typing import Any, Dict, List

from simfixture.engine.results import (
    RequestRecord,
    ResultsStore,
    RunCompleted,
    RunHeader,
)
from simfixture.engine.simulation import Step
from simfixture.logging import Logger
from simfixture.logging.simfixture_logging_models import (
    RunDebug,
    RunError,
    RunInfo,
    RunTrace,
)

from .messages import Run


class SimulationRunner:
    def __init__(
        self,
        run_id: str,
        run: Run,
        store: ResultsStore,
        logger: Logger,
        flush_size: int = 1000,
    ) -> None:
        self.run_id = run_id
        self._run = run
        self._timings = run.timings
        self._steps: List[Step] = run.simulation.steps
        self._store = store
        self._logger = logger
        self._flush_size = flush_size
        self._pending: List[RequestRecord] = []
        self._write_lock = asyncio.Lock()
        self._requests = 0
        self._started_at = time.time()

        defaults = {
            "simulation": run.simulation_id,
            "vus": self._timings.vus,
            "duration": self._timings.duration_seconds,
        }

        self._models = {
            "trace": (RunTrace, defaults),
            "debug": (RunDebug, defaults),
            "info": (RunInfo, defaults),
            "error": (RunError, defaults),
        }

    async def prepare(self):
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(
            None,
            self._store.create,
            RunHeader(
                run_id=self.run_id,
                simulation=self._run.simulation_id,
                description=self._run.description,
                started_at=self._started_at,
                vus=self._timings.vus,
                duration_seconds=self._timings.duration_seconds,
                iterations=self._timings.iterations,
            ),
        )

    async def run(self) -> str:
        async with self._logger.context(
            name="simulation_runner",
            models=self._models,
        ) as ctx:
            await ctx.log_prepared(
                f"Run {self.run_id} starting {self._timings.vus} virtual users",
                name="info",
            )

            deadline = time.monotonic() + self._timings.duration_seconds

            try:
                await asyncio.gather(
                    *[
                        self._virtual_user(vu, deadline)
                        for vu in range(self._timings.vus)
                    ]
                )

                await self._flush()

                loop = asyncio.get_running_loop()
                await loop.run_in_executor(
                    None,
                    self._store.complete,
                    RunCompleted(
                        run_id=self.run_id,
                        finished_at=time.time(),
                        requests=self._requests,
                    ),
                )

            except Exception as err:
                await ctx.log_prepared(
                    f"Run {self.run_id} failed with {str(err)}",
                    name="error",
                )
                raise

            await ctx.log_prepared(
                f"Run {self.run_id} completed {self._requests} requests",
                name="info",
            )

        return self.run_id

    async def _virtual_user(self, vu: int, deadline: float):
        delay = self._timings.start_delay(vu)
        if delay > 0:
            await asyncio.sleep(delay)

        session: Dict[str, Any] = {
            "vu": vu,
            "run_id": self.run_id,
        }

        iterations = self._timings.iterations
        iteration = 0

        while time.monotonic() < deadline and (
            iterations is None or iteration < iterations
        ):
            for step in self._steps:
                if time.monotonic() >= deadline:
                    return

                await self._execute(step, vu, session)

            iteration += 1

            # steps that never suspend would otherwise starve the other VUs
            await asyncio.sleep(0)

    async def _execute(self, step: Step, vu: int, session: Dict[str, Any]):
        start = time.time()

        try:
            await step.call(session)
            record = RequestRecord(
                step=step.name,
                vu=vu,
                start=start,
                end=time.time(),
                ok=True,
            )

        except Exception as err:
            record = RequestRecord(
                step=step.name,
                vu=vu,
                start=start,
                end=time.time(),
                ok=False,
                error=f"{type(err).__name__}: {err}",
            )

        self._requests += 1
        self._pending.append(record)

        if len(self._pending) >= self._flush_size:
            await self._flush()

    async def _flush(self):
        records, self._pending = self._pending, []

        if len(records) == 0:
            return

        loop = asyncio.get_running_loop()
        async with self._write_lock:
            await loop.run_in_executor(
                None,
                self._store.append,
                self.run_id,
                records,
            )
