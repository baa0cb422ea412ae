from .models import Entry, LogLevel


class FixtureTrace(Entry, kw_only=True):
    test: str
    runner_type: str
    timeout: int
    level: LogLevel = LogLevel.TRACE


class FixtureDebug(Entry, kw_only=True):
    test: str
    runner_type: str
    timeout: int
    level: LogLevel = LogLevel.DEBUG


class FixtureInfo(Entry, kw_only=True):
    test: str
    runner_type: str
    timeout: int
    level: LogLevel = LogLevel.INFO


class FixtureError(Entry, kw_only=True):
    test: str
    runner_type: str
    timeout: int
    level: LogLevel = LogLevel.ERROR


class FixtureFatal(Entry, kw_only=True):
    test: str
    runner_type: str
    timeout: int
    level: LogLevel = LogLevel.FATAL


class RunTrace(Entry, kw_only=True):
    simulation: str
    vus: int
    duration: float
    level: LogLevel = LogLevel.TRACE


class RunDebug(Entry, kw_only=True):
    simulation: str
    vus: int
    duration: float
    level: LogLevel = LogLevel.DEBUG


class RunInfo(Entry, kw_only=True):
    simulation: str
    vus: int
    duration: float
    level: LogLevel = LogLevel.INFO


class RunError(Entry, kw_only=True):
    simulation: str
    vus: int
    duration: float
    level: LogLevel = LogLevel.ERROR


class RuntimeDebug(Entry, kw_only=True):
    runtime: str
    level: LogLevel = LogLevel.DEBUG


class RuntimeFatal(Entry, kw_only=True):
    runtime: str
    level: LogLevel = LogLevel.FATAL
