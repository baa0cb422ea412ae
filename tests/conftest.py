import time

import pytest

from simfixture.config import FixtureConfig
from simfixture.engine.results import (
    MemoryResultsStore,
    RequestRecord,
    RunCompleted,
    RunHeader,
)
from simfixture.logging import LoggingConfig


@pytest.fixture(autouse=True)
def configure_log_level():
    config = LoggingConfig()
    config.update(log_level="error")
    yield
    config.update(log_level="info", log_output="stdout")


@pytest.fixture
def results_directory(tmp_path) -> str:
    return str(tmp_path / "results")


@pytest.fixture
def reports_directory(tmp_path) -> str:
    return str(tmp_path / "reports")


@pytest.fixture
def fixture_config(results_directory: str, reports_directory: str) -> FixtureConfig:
    return FixtureConfig(
        results_directory=results_directory,
        reports_directory=reports_directory,
        simulation_timeout=5,
    )


@pytest.fixture
def memory_store() -> MemoryResultsStore:
    return MemoryResultsStore()


def record_run(
    store,
    run_id: str,
    durations_ms: dict[str, list[float]],
    failed: dict[str, int] | None = None,
    simulation: str = "checkout_flow",
    elapsed: float = 1.0,
):
    if failed is None:
        failed = {}

    started_at = time.time() - elapsed
    store.create(
        RunHeader(
            run_id=run_id,
            simulation=simulation,
            description=simulation,
            started_at=started_at,
            vus=1,
            duration_seconds=elapsed,
        )
    )

    records = []
    for step, durations in durations_ms.items():
        for idx, duration in enumerate(durations):
            start = started_at + idx * 0.01
            records.append(
                RequestRecord(
                    step=step,
                    vu=0,
                    start=start,
                    end=start + duration / 1000,
                    ok=idx >= failed.get(step, 0),
                    error=None if idx >= failed.get(step, 0) else "ValueError: boom",
                )
            )

    store.append(run_id, records)
    store.complete(
        RunCompleted(
            run_id=run_id,
            finished_at=started_at + elapsed,
            requests=len(records),
        )
    )
