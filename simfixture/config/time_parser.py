import math
import re
from datetime import timedelta

_TIME_PATTERN = re.compile(r"(?P<val>\d+(\.\d+)?)(?P<unit>[smhdw]?)", flags=re.I)


class TimeParser:
    def __init__(self, time_amount: str | int | float) -> None:
        self._units = {
            "s": "seconds",
            "m": "minutes",
            "h": "hours",
            "d": "days",
            "w": "weeks",
        }

        if isinstance(time_amount, (int, float)):
            self.time = float(time_amount)

        else:
            self.time = self.parse(time_amount)

    @property
    def seconds(self) -> int:
        return int(math.ceil(self.time))

    def parse(self, time_amount: str) -> float:
        matches = list(_TIME_PATTERN.finditer(time_amount.strip()))
        consumed = "".join(match.group(0) for match in matches)

        if len(matches) == 0 or consumed != time_amount.strip().replace(" ", ""):
            raise ValueError(f"Invalid time amount {time_amount!r}")

        values: dict[str, float] = {}
        for match in matches:
            unit = self._units.get(match.group("unit").lower(), "seconds")
            values[unit] = values.get(unit, 0.0) + float(match.group("val"))

        return timedelta(**values).total_seconds()
