from .fixture_config import FixtureConfig as FixtureConfig
from .run_config import RunConfig as RunConfig
from .time_parser import TimeParser as TimeParser
