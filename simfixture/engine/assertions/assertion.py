from typing import Literal

import msgspec

AssertionTarget = Literal[
    "response_time",
    "all_requests",
    "failed_requests",
    "successful_requests",
    "requests_per_sec",
]

AssertionStat = Literal[
    "min",
    "max",
    "mean",
    "stdev",
    "percentile",
    "count",
    "percent",
]

AssertionCondition = Literal["lt", "lte", "gt", "gte", "is", "between"]


_TARGET_LABELS: dict[str, str] = {
    "response_time": "response time",
    "all_requests": "all requests",
    "failed_requests": "failed requests",
    "successful_requests": "successful requests",
}

_STAT_LABELS: dict[str, str] = {
    "min": "min",
    "max": "max",
    "mean": "mean",
    "stdev": "standard deviation",
    "count": "count",
    "percent": "percentage",
}

_CONDITION_LABELS: dict[str, str] = {
    "lt": "is less than",
    "lte": "is less than or equal to",
    "gt": "is greater than",
    "gte": "is greater than or equal to",
    "is": "is",
}


def format_value(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))

    return f"{value:.2f}".rstrip("0").rstrip(".")


def ordinal(value: float) -> str:
    if not float(value).is_integer():
        return f"{format_value(value)}th"

    number = int(value)
    if 10 <= number % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(number % 10, "th")

    return f"{number}{suffix}"


class Assertion(msgspec.Struct, frozen=True, kw_only=True):
    target: AssertionTarget
    stat: AssertionStat
    condition: AssertionCondition
    values: tuple[float, ...]
    scope: str | None = None
    percentile: float | None = None

    @property
    def scope_label(self) -> str:
        return "Global" if self.scope is None else self.scope

    @property
    def message(self) -> str:
        if self.target == "requests_per_sec":
            metric = "mean requests per second"

        elif self.stat == "percentile":
            metric = f"{ordinal(self.percentile)} percentile of response time"

        else:
            metric = f"{_STAT_LABELS[self.stat]} of {_TARGET_LABELS[self.target]}"

        if self.condition == "between":
            low, high = self.values
            expectation = f"is between {format_value(low)} and {format_value(high)}"

        else:
            expectation = (
                f"{_CONDITION_LABELS[self.condition]} {format_value(self.values[0])}"
            )

        return f"{self.scope_label}: {metric} {expectation}"

    def check(self, actual: float) -> bool:
        match self.condition:
            case "lt":
                return actual < self.values[0]
            case "lte":
                return actual <= self.values[0]
            case "gt":
                return actual > self.values[0]
            case "gte":
                return actual >= self.values[0]
            case "is":
                return actual == self.values[0]
            case "between":
                low, high = self.values
                return low <= actual <= high

        return False
