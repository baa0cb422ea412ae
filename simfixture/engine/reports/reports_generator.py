import pathlib
from typing import Sequence

from jinja2 import DictLoader, Environment, select_autoescape

from simfixture.engine.assertions import AssertionResult
from simfixture.engine.results import RunResults

from .templates import INDEX_TEMPLATE


def _format_stat(value: int | float | str | None) -> str:
    if value is None:
        return "-"

    if isinstance(value, float):
        return f"{value:.2f}"

    return str(value)


class ReportsGenerator:
    index_filename = "index.html"

    def __init__(self, directory: str) -> None:
        self.directory = pathlib.Path(directory)
        self._environment = Environment(
            loader=DictLoader({self.index_filename: INDEX_TEMPLATE}),
            autoescape=select_autoescape(["html", "xml"]),
        )
        self._environment.filters["stat"] = _format_stat

    def generate_for(
        self,
        results: RunResults,
        assertion_results: Sequence[AssertionResult],
    ) -> pathlib.Path:
        rows = [results.global_stats.summary()]
        rows.extend(
            stats.summary()
            for _, stats in sorted(results.step_stats.items())
        )

        html = self._environment.get_template(self.index_filename).render(
            results=results,
            assertion_results=assertion_results,
            columns=list(rows[0].keys()),
            rows=rows,
        )

        report_directory = self.directory / results.run_id
        report_directory.mkdir(parents=True, exist_ok=True)

        index_path = report_directory / self.index_filename
        index_path.write_text(html, encoding="utf-8")

        return index_path
