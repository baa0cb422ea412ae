from .fixture_outcome import FixtureOutcome as FixtureOutcome
from .fixture_result import FixtureResult as FixtureResult
from .simulation_handle import SimulationHandle as SimulationHandle
