import pathlib
import threading
from abc import ABC, abstractmethod
from collections import defaultdict
from typing import Dict, List, Sequence

import msgspec

from .records import Record, RequestRecord, RunCompleted, RunHeader


class ResultsStore(ABC):
    """Append-only record log keyed by run id.

    Records are encoded as msgspec JSON lines whatever the backing storage,
    so every store is read back through the same decoder.
    """

    def __init__(self) -> None:
        self._encoder = msgspec.json.Encoder()
        self._decoder = msgspec.json.Decoder(Record)

    def create(self, header: RunHeader) -> None:
        self._write_lines(header.run_id, [self._encoder.encode(header)], create=True)

    def append(self, run_id: str, records: Sequence[RequestRecord]) -> None:
        if len(records) == 0:
            return

        self._write_lines(
            run_id,
            [self._encoder.encode(record) for record in records],
        )

    def complete(self, completed: RunCompleted) -> None:
        self._write_lines(completed.run_id, [self._encoder.encode(completed)])

    def load(self, run_id: str) -> List[Record]:
        return [
            self._decoder.decode(line) for line in self._read_lines(run_id) if line.strip()
        ]

    @abstractmethod
    def _write_lines(self, run_id: str, lines: List[bytes], create: bool = False): ...

    @abstractmethod
    def _read_lines(self, run_id: str) -> List[bytes]: ...


class FileResultsStore(ResultsStore):
    filename = "simulation.log"

    def __init__(self, directory: str) -> None:
        super().__init__()
        self.directory = pathlib.Path(directory)

    def path(self, run_id: str) -> pathlib.Path:
        return self.directory / run_id / self.filename

    def _write_lines(self, run_id: str, lines: List[bytes], create: bool = False):
        path = self.path(run_id)

        if create:
            path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "wb" if create else "ab") as logfile:
            logfile.write(b"\n".join(lines) + b"\n")

    def _read_lines(self, run_id: str) -> List[bytes]:
        with open(self.path(run_id), "rb") as logfile:
            return logfile.read().splitlines()


class MemoryResultsStore(ResultsStore):
    def __init__(self) -> None:
        super().__init__()
        self._lines: Dict[str, List[bytes]] = defaultdict(list)
        self._lock = threading.Lock()

    def _write_lines(self, run_id: str, lines: List[bytes], create: bool = False):
        with self._lock:
            if create:
                self._lines[run_id] = []

            elif run_id not in self._lines:
                raise KeyError(f"Unknown run {run_id}")

            self._lines[run_id].extend(lines)

    def _read_lines(self, run_id: str) -> List[bytes]:
        with self._lock:
            if run_id not in self._lines:
                raise KeyError(f"Unknown run {run_id}")

            return list(self._lines[run_id])
