import threading
from typing import Dict, List

import msgspec

from simfixture.exceptions import ResultsUnavailable

from .records import RequestRecord, RunCompleted, RunHeader
from .results_store import ResultsStore
from .run_results import RunResults


class DataReader:
    def __init__(self, store: ResultsStore) -> None:
        self._store = store
        self._opened: Dict[str, RunResults] = {}
        self._lock = threading.Lock()

    def open(self, run_id: str) -> RunResults:
        with self._lock:
            if (results := self._opened.get(run_id)) is not None:
                return results

        try:
            records = self._store.load(run_id)

        except (
            OSError,
            KeyError,
            msgspec.DecodeError,
            msgspec.ValidationError,
        ) as err:
            raise ResultsUnavailable(run_id, str(err)) from err

        header: RunHeader | None = None
        completed: RunCompleted | None = None
        requests: List[RequestRecord] = []

        for record in records:
            if isinstance(record, RunHeader):
                header = record

            elif isinstance(record, RunCompleted):
                completed = record

            else:
                requests.append(record)

        if header is None:
            raise ResultsUnavailable(run_id, "missing run header")

        if completed is None:
            raise ResultsUnavailable(run_id, "run did not complete")

        results = RunResults(header, requests, completed)

        with self._lock:
            self._opened[run_id] = results

        return results
