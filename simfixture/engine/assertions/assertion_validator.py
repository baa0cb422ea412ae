from typing import List, Sequence

from simfixture.engine.results import RequestStats, RunResults

from .assertion import Assertion, format_value
from .assertion_result import AssertionResult


class AssertionValidator:
    def validate(
        self,
        results: RunResults,
        assertions: Sequence[Assertion],
    ) -> List[AssertionResult]:
        return [self._validate(results, assertion) for assertion in assertions]

    def _validate(
        self,
        results: RunResults,
        assertion: Assertion,
    ) -> AssertionResult:
        stats = results.stats(assertion.scope)

        if stats is None:
            return AssertionResult(
                passed=False,
                message=f"{assertion.message}, but no requests were recorded for step {assertion.scope!r}",
                assertion=assertion,
            )

        actual = self._actual(stats, assertion)

        if actual is None:
            return AssertionResult(
                passed=False,
                message=f"{assertion.message}, but no requests were recorded",
                assertion=assertion,
            )

        if assertion.check(actual):
            return AssertionResult(
                passed=True,
                message=assertion.message,
                assertion=assertion,
                actual=actual,
            )

        return AssertionResult(
            passed=False,
            message=f"{assertion.message}, but actually found {format_value(actual)}",
            assertion=assertion,
            actual=actual,
        )

    def _actual(self, stats: RequestStats, assertion: Assertion) -> float | None:
        match assertion.target:
            case "response_time":
                if assertion.stat == "percentile":
                    return stats.percentile(assertion.percentile)

                return getattr(stats, assertion.stat)

            case "requests_per_sec":
                return stats.requests_per_sec

            case "all_requests":
                count = stats.count

            case "failed_requests":
                count = stats.failed

            case "successful_requests":
                count = stats.ok

            case _:
                return None

        if assertion.stat == "percent":
            return stats.percent(count)

        return float(count)
