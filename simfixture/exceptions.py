from __future__ import annotations

from typing import TYPE_CHECKING, Any, Sequence

if TYPE_CHECKING:
    from simfixture.engine.assertions import AssertionResult


class SimFixtureError(Exception):
    pass


class ConfigParseError(SimFixtureError):
    def __init__(self, key: str, value: Any, reason: str) -> None:
        self.key = key
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid value {value!r} for {key}: {reason}")


class SimulationDefinitionError(SimFixtureError):
    pass


class SimulationTimeout(SimFixtureError):
    def __init__(self, seconds: int | float) -> None:
        self.seconds = seconds
        super().__init__(f"Reached simulation timeout of {seconds} seconds")


class TerminationTimeout(SimFixtureError):
    def __init__(self, seconds: int | float) -> None:
        self.seconds = seconds
        super().__init__(f"Runtime did not terminate within {seconds} seconds")


class AskTimeout(SimFixtureError):
    def __init__(self, seconds: int | float) -> None:
        self.seconds = seconds
        super().__init__(f"No controller reply within {seconds} seconds")


class UnexpectedControllerReply(SimFixtureError):
    def __init__(self, reply: Any) -> None:
        self.reply = reply
        super().__init__(f"Controller replied an unexpected message {reply!r}")


class ResultsUnavailable(SimFixtureError):
    def __init__(self, run_id: str, reason: str) -> None:
        self.run_id = run_id
        self.reason = reason
        super().__init__(f"Results for run {run_id} are unavailable: {reason}")


class AssertionFailure(SimFixtureError):
    def __init__(self, failures: Sequence[AssertionResult]) -> None:
        self.failures = list(failures)
        messages = "\n\t".join(failure.message for failure in self.failures)
        super().__init__(
            f"{len(self.failures)} simulation assertion(s) failed: (\n\t{messages}\n)"
        )


class ReportGenerationError(SimFixtureError):
    def __init__(self, run_id: str, reason: str) -> None:
        self.run_id = run_id
        self.reason = reason
        super().__init__(f"Report generation failed for run {run_id}: {reason}")
