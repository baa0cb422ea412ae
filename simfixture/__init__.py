from .config import FixtureConfig as FixtureConfig
from .engine import (
    Simulation as Simulation,
    details as details,
    global_stats as global_stats,
)
from .fixture import (
    FixtureOutcome as FixtureOutcome,
    FixtureResult as FixtureResult,
    SimulationFixture as SimulationFixture,
)
