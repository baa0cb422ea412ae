import asyncio
import functools
import inspect
import time
from typing import Any, Callable

from simfixture.config import FixtureConfig, TimeParser
from simfixture.engine.assertions import AssertionValidator
from simfixture.engine.reports import ReportsGenerator
from simfixture.engine.results import (
    DataReader,
    FileResultsStore,
    MemoryResultsStore,
    ResultsStore,
)
from simfixture.engine.runtime import Runtime
from simfixture.engine.simulation import Simulation
from simfixture.exceptions import (
    AssertionFailure,
    ReportGenerationError,
    SimulationTimeout,
    TerminationTimeout,
)
from simfixture.logging import Logger, LoggerStream
from simfixture.logging.simfixture_logging_models import (
    FixtureDebug,
    FixtureError,
    FixtureFatal,
    FixtureInfo,
    FixtureTrace,
)

from .assertion_gate import AssertionGate
from .models import FixtureOutcome, SimulationHandle
from .names import extract_tier, normalize_name
from .report_emitter import ReportEmitter
from .run_coordinator import RunCoordinator
from .runtime_lifecycle import RuntimeFactory, RuntimeLifecycle
from .tier_gate import should_skip, skip_reason

TERMINATION_TIMEOUT_SECONDS = 10

TestBody = Callable[[Simulation], Any]


class SimulationFixture:
    """Runs one load simulation per test invocation.

    ``run()`` blocks the calling thread until the simulation finished, its
    assertions were checked, the report was written and the runtime fully
    terminated. A custom ``runtime_factory`` must build runtimes writing to
    the same ``store`` the fixture reads results from.
    """

    def __init__(
        self,
        config: FixtureConfig | None = None,
        runtime_factory: RuntimeFactory | None = None,
        store: ResultsStore | None = None,
        reports_generator: ReportsGenerator | None = None,
        validator: AssertionValidator | None = None,
    ) -> None:
        if config is None:
            config = FixtureConfig()

        if store is None and config.results_write:
            store = FileResultsStore(config.results_directory)

        elif store is None:
            store = MemoryResultsStore()

        if runtime_factory is None:
            runtime_factory = functools.partial(Runtime, store)

        self._config = config
        self._store = store
        self._runtime_factory = runtime_factory
        self._data_reader = DataReader(store)
        self._gate = AssertionGate(self._data_reader, validator=validator)
        self._emitter = ReportEmitter(config, generator=reports_generator)
        self._logger = Logger()
        self._runner_type = self.__class__.__name__

    @property
    def config(self) -> FixtureConfig:
        return self._config

    def run(
        self,
        test_name: str,
        body: TestBody,
        payload: Simulation | None = None,
        timeout: int | float | str | None = None,
    ) -> FixtureOutcome:
        return asyncio.run(
            self.execute(
                test_name,
                body,
                payload=payload,
                timeout=timeout,
            )
        )

    async def execute(
        self,
        test_name: str,
        body: TestBody,
        payload: Simulation | None = None,
        timeout: int | float | str | None = None,
    ) -> FixtureOutcome:
        start = time.time()
        name = normalize_name(test_name)

        if timeout is None:
            timeout_seconds = self._config.simulation_timeout

        else:
            timeout_seconds = TimeParser(timeout).seconds

        default_config = {
            "test": name,
            "runner_type": self._runner_type,
            "timeout": timeout_seconds,
        }

        self._logger.configure(
            name="simulation_fixture",
            template="{timestamp} - {level} - {thread_id} - {filename}:{function_name}.{line_number} - {message}",
            path=self._config.log_path,
            models={
                "trace": (FixtureTrace, default_config),
                "debug": (FixtureDebug, default_config),
                "info": (FixtureInfo, default_config),
                "error": (FixtureError, default_config),
                "fatal": (FixtureFatal, default_config),
            },
        )

        try:
            async with self._logger.context(name="simulation_fixture") as ctx:
                tier = extract_tier(name)

                if should_skip(tier, self._config.run_config()):
                    reason = skip_reason(tier)
                    await ctx.log_prepared(
                        f"{reason} for test {name}",
                        name="info",
                    )

                    return FixtureOutcome.canceled(
                        name,
                        reason,
                        duration_seconds=time.time() - start,
                    )

                if payload is None:
                    payload = Simulation(name)

                handle = SimulationHandle(
                    name=name,
                    timeout_seconds=timeout_seconds,
                    payload=payload,
                )

                lifecycle = RuntimeLifecycle(
                    self._runtime_factory,
                    collect_garbage=self._config.runtime_collect_garbage,
                )

                try:
                    await ctx.log_prepared(
                        f"Starting runtime for test {name}",
                        name="debug",
                    )
                    await asyncio.to_thread(lifecycle.start)

                    if lifecycle.rss_before_start is not None:
                        await ctx.log_prepared(
                            f"Process RSS before runtime start for test {name} is {lifecycle.rss_before_start} bytes",
                            name="debug",
                        )

                    return await self._run_simulation(handle, lifecycle, body, start, ctx)

                finally:
                    if lifecycle.started:
                        await self._terminate(name, lifecycle, ctx)

        finally:
            await self._logger.close()

    async def _run_simulation(
        self,
        handle: SimulationHandle,
        lifecycle: RuntimeLifecycle,
        body: TestBody,
        start: float,
        ctx: LoggerStream,
    ) -> FixtureOutcome:
        name = handle.name

        result = body(handle.payload)
        if inspect.isawaitable(result):
            result = await result

        if isinstance(result, FixtureOutcome) and not result.is_succeeded:
            await ctx.log_prepared(
                f"Test body for test {name} returned {result.result.value} outcome, skipping simulation",
                name="info",
            )
            return result

        await ctx.log_prepared(
            f"Running simulation {name} with timeout of {handle.timeout_seconds} seconds",
            name="info",
        )

        try:
            run_id = await RunCoordinator(lifecycle.runtime).run(handle)

        except SimulationTimeout as err:
            await ctx.log_prepared(str(err), name="error")

            return FixtureOutcome.failed(
                name,
                str(err),
                duration_seconds=time.time() - start,
                error=err,
            )

        reports_start = time.time()

        await ctx.log_prepared(
            f"Simulation {name} completed as run {run_id}, validating assertions",
            name="debug",
        )

        loop = asyncio.get_running_loop()
        results = await loop.run_in_executor(None, self._data_reader.open, run_id)
        assertion_results = await loop.run_in_executor(
            None,
            self._gate.validate,
            run_id,
            handle.payload.declared_assertions,
        )

        report_path: str | None = None
        report_error: str | None = None

        try:
            report_path = await self._emitter.maybe_emit(
                run_id,
                results,
                assertion_results,
                reports_start,
                ctx,
            )

        except ReportGenerationError as err:
            report_error = str(err)
            await ctx.log_prepared(report_error, name="error")

        outcome_fields = {
            "duration_seconds": time.time() - start,
            "run_id": run_id,
            "report_path": report_path,
            "assertion_results": assertion_results,
            "report_error": report_error,
        }

        if failures := self._gate.failures(assertion_results):
            error = AssertionFailure(failures)
            await ctx.log_prepared(str(error), name="error")

            return FixtureOutcome.failed(
                name,
                str(error),
                error=error,
                **outcome_fields,
            )

        await ctx.log_prepared(
            f"Test {name} passed {len(assertion_results)} assertion(s)",
            name="info",
        )

        return FixtureOutcome.succeeded(name, **outcome_fields)

    async def _terminate(
        self,
        name: str,
        lifecycle: RuntimeLifecycle,
        ctx: LoggerStream,
    ):
        await ctx.log_prepared(f"Stopping runtime for test {name}", name="trace")
        lifecycle.stop()

        try:
            await lifecycle.await_termination(
                lifecycle.signal,
                TERMINATION_TIMEOUT_SECONDS,
            )

        except TerminationTimeout as err:
            await ctx.log_prepared(
                f"Runtime for test {name} failed to terminate: {err}",
                name="fatal",
            )
            raise

        await ctx.log_prepared(f"Runtime for test {name} terminated", name="trace")
