from .data_reader import DataReader as DataReader
from .records import (
    Record as Record,
    RequestRecord as RequestRecord,
    RunCompleted as RunCompleted,
    RunHeader as RunHeader,
)
from .results_store import (
    FileResultsStore as FileResultsStore,
    MemoryResultsStore as MemoryResultsStore,
    ResultsStore as ResultsStore,
)
from .run_results import RequestStats as RequestStats, RunResults as RunResults
