from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from simfixture.engine.assertions import AssertionResult

from .fixture_result import FixtureResult


@dataclass(slots=True)
class FixtureOutcome:
    name: str
    result: FixtureResult
    duration_seconds: float = 0.0
    message: str | None = None
    run_id: str | None = None
    report_path: str | None = None
    assertion_results: List[AssertionResult] = field(default_factory=list)
    error: Exception | None = None
    report_error: str | None = None

    @classmethod
    def succeeded(cls, name: str, **kwargs) -> FixtureOutcome:
        return cls(name=name, result=FixtureResult.SUCCEEDED, **kwargs)

    @classmethod
    def failed(cls, name: str, message: str, **kwargs) -> FixtureOutcome:
        return cls(name=name, result=FixtureResult.FAILED, message=message, **kwargs)

    @classmethod
    def canceled(cls, name: str, reason: str, **kwargs) -> FixtureOutcome:
        return cls(name=name, result=FixtureResult.CANCELED, message=reason, **kwargs)

    @property
    def is_succeeded(self) -> bool:
        return self.result == FixtureResult.SUCCEEDED

    @property
    def is_failed(self) -> bool:
        return self.result == FixtureResult.FAILED

    @property
    def is_canceled(self) -> bool:
        return self.result == FixtureResult.CANCELED

    @property
    def failures(self) -> List[AssertionResult]:
        return [result for result in self.assertion_results if not result.passed]
