from __future__ import annotations

from .assertion import (
    Assertion,
    AssertionCondition,
    AssertionStat,
    AssertionTarget,
)


class ConditionBuilder:
    __slots__ = ("_scope", "_target", "_stat", "_percentile")

    def __init__(
        self,
        scope: str | None,
        target: AssertionTarget,
        stat: AssertionStat,
        percentile: float | None = None,
    ) -> None:
        self._scope = scope
        self._target = target
        self._stat = stat
        self._percentile = percentile

    def lt(self, value: float) -> Assertion:
        return self._build("lt", value)

    def lte(self, value: float) -> Assertion:
        return self._build("lte", value)

    def gt(self, value: float) -> Assertion:
        return self._build("gt", value)

    def gte(self, value: float) -> Assertion:
        return self._build("gte", value)

    def is_(self, value: float) -> Assertion:
        return self._build("is", value)

    def between(self, low: float, high: float) -> Assertion:
        if low > high:
            raise ValueError(f"Lower bound {low} is greater than upper bound {high}")

        return self._build("between", low, high)

    def _build(self, condition: AssertionCondition, *values: float) -> Assertion:
        return Assertion(
            scope=self._scope,
            target=self._target,
            stat=self._stat,
            condition=condition,
            values=tuple(float(value) for value in values),
            percentile=self._percentile,
        )


class ResponseTimeBuilder:
    __slots__ = ("_scope",)

    def __init__(self, scope: str | None) -> None:
        self._scope = scope

    @property
    def min(self):
        return ConditionBuilder(self._scope, "response_time", "min")

    @property
    def max(self):
        return ConditionBuilder(self._scope, "response_time", "max")

    @property
    def mean(self):
        return ConditionBuilder(self._scope, "response_time", "mean")

    @property
    def stdev(self):
        return ConditionBuilder(self._scope, "response_time", "stdev")

    def percentile(self, value: float):
        if not 0 < value <= 100:
            raise ValueError(f"Percentile must be in (0, 100], got {value}")

        return ConditionBuilder(
            self._scope,
            "response_time",
            "percentile",
            percentile=float(value),
        )


class CountBuilder:
    __slots__ = ("_scope", "_target")

    def __init__(self, scope: str | None, target: AssertionTarget) -> None:
        self._scope = scope
        self._target = target

    @property
    def count(self):
        return ConditionBuilder(self._scope, self._target, "count")

    @property
    def percent(self):
        return ConditionBuilder(self._scope, self._target, "percent")


class ScopeBuilder:
    __slots__ = ("_scope",)

    def __init__(self, scope: str | None = None) -> None:
        self._scope = scope

    @property
    def response_time(self):
        return ResponseTimeBuilder(self._scope)

    @property
    def all_requests(self):
        return CountBuilder(self._scope, "all_requests")

    @property
    def failed_requests(self):
        return CountBuilder(self._scope, "failed_requests")

    @property
    def successful_requests(self):
        return CountBuilder(self._scope, "successful_requests")

    @property
    def requests_per_sec(self):
        return ConditionBuilder(self._scope, "requests_per_sec", "mean")


def global_stats() -> ScopeBuilder:
    return ScopeBuilder()


def details(step: str) -> ScopeBuilder:
    return ScopeBuilder(step)
