from .assertions import (
    Assertion as Assertion,
    AssertionResult as AssertionResult,
    AssertionValidator as AssertionValidator,
    details as details,
    global_stats as global_stats,
)
from .reports import ReportsGenerator as ReportsGenerator
from .results import (
    DataReader as DataReader,
    FileResultsStore as FileResultsStore,
    MemoryResultsStore as MemoryResultsStore,
    ResultsStore as ResultsStore,
    RunResults as RunResults,
)
from .runtime import Runtime as Runtime
from .simulation import Simulation as Simulation, Step as Step
from .timings import Timings as Timings
