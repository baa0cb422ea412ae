import asyncio
import time
from typing import Sequence

import jinja2

from simfixture.config import FixtureConfig
from simfixture.engine.assertions import AssertionResult
from simfixture.engine.reports import ReportsGenerator
from simfixture.engine.results import RunResults
from simfixture.exceptions import ReportGenerationError
from simfixture.logging import LoggerStream


class ReportEmitter:
    def __init__(
        self,
        config: FixtureConfig,
        generator: ReportsGenerator | None = None,
    ) -> None:
        if generator is None:
            generator = ReportsGenerator(config.reports_directory)

        self._config = config
        self._generator = generator

    @property
    def enabled(self) -> bool:
        return self._config.results_write and self._config.reports_enabled

    async def maybe_emit(
        self,
        run_id: str,
        results: RunResults,
        assertion_results: Sequence[AssertionResult],
        start: float,
        ctx: LoggerStream,
    ) -> str | None:
        if not self.enabled:
            await ctx.log_prepared(
                f"Reports disabled, skipping report generation for run {run_id}",
                name="debug",
            )
            return None

        await ctx.log_prepared(f"Generating reports for run {run_id}...", name="info")

        loop = asyncio.get_running_loop()

        try:
            index_path = await loop.run_in_executor(
                None,
                self._generator.generate_for,
                results,
                assertion_results,
            )

        except (OSError, jinja2.TemplateError) as err:
            raise ReportGenerationError(run_id, str(err)) from err

        report_path = str(index_path.absolute())

        await ctx.log_prepared_batch(
            {
                "info": [
                    f"Reports generated in {time.time() - start:.2f}s",
                    f"Please open the following file: {report_path}",
                ]
            }
        )

        return report_path
