from __future__ import annotations

from collections import defaultdict
from typing import Dict, List, Sequence

import numpy as np

from .records import RequestRecord, RunCompleted, RunHeader

QUANTILES = [50, 75, 90, 95, 99]


class RequestStats:
    __slots__ = (
        "name",
        "durations",
        "count",
        "ok",
        "failed",
        "elapsed",
    )

    def __init__(
        self,
        name: str,
        records: Sequence[RequestRecord],
        elapsed: float,
    ) -> None:
        self.name = name
        self.durations = np.array(
            [record.elapsed_ms for record in records],
            dtype=np.float64,
        )
        self.count = len(records)
        self.ok = sum(1 for record in records if record.ok)
        self.failed = self.count - self.ok
        self.elapsed = elapsed

    @property
    def empty(self) -> bool:
        return self.count == 0

    @property
    def min(self) -> float | None:
        return None if self.empty else float(np.min(self.durations))

    @property
    def max(self) -> float | None:
        return None if self.empty else float(np.max(self.durations))

    @property
    def mean(self) -> float | None:
        return None if self.empty else float(np.mean(self.durations))

    @property
    def stdev(self) -> float | None:
        return None if self.empty else float(np.std(self.durations))

    @property
    def requests_per_sec(self) -> float:
        if self.elapsed <= 0:
            return float(self.count)

        return self.count / self.elapsed

    def percentile(self, value: float) -> float | None:
        if self.empty:
            return None

        return float(np.percentile(self.durations, value))

    def percent(self, count: int) -> float:
        if self.empty:
            return 0.0

        return count / self.count * 100

    def summary(self) -> Dict[str, str | int | float | None]:
        summary: Dict[str, str | int | float | None] = {
            "name": self.name,
            "count": self.count,
            "ok": self.ok,
            "failed": self.failed,
            "min": self.min,
            "max": self.max,
            "mean": self.mean,
            "stdev": self.stdev,
            "requests_per_sec": self.requests_per_sec,
        }

        summary.update(
            {
                f"{quantile}th_quantile": self.percentile(quantile)
                for quantile in QUANTILES
            }
        )

        return summary


class RunResults:
    """Recorded data of one completed run, read back from a results store."""

    def __init__(
        self,
        header: RunHeader,
        requests: List[RequestRecord],
        completed: RunCompleted,
    ) -> None:
        self.header = header
        self.completed = completed
        self.elapsed = max(completed.finished_at - header.started_at, 0.0)

        by_step: Dict[str, List[RequestRecord]] = defaultdict(list)
        for record in requests:
            by_step[record.step].append(record)

        self.global_stats = RequestStats("Global", requests, self.elapsed)
        self.step_stats: Dict[str, RequestStats] = {
            step: RequestStats(step, records, self.elapsed)
            for step, records in by_step.items()
        }

    @property
    def run_id(self) -> str:
        return self.header.run_id

    @property
    def simulation(self) -> str:
        return self.header.simulation

    def stats(self, scope: str | None = None) -> RequestStats | None:
        if scope is None:
            return self.global_stats

        return self.step_stats.get(scope)
