import contextvars
from typing import List, Literal

from simfixture.logging.models import LogLevel, LogLevelName

from .stream_type import StreamType

LogOutput = Literal["stdout", "stderr"]

_global_log_level = contextvars.ContextVar("_global_log_level", default=LogLevel.INFO)
_global_disabled_loggers = contextvars.ContextVar(
    "_global_disabled_loggers", default=()
)
_global_log_output_type = contextvars.ContextVar(
    "_global_log_output_type", default=StreamType.STDOUT
)


class LoggingConfig:
    def __init__(self) -> None:
        self._log_level: contextvars.ContextVar[LogLevel] = _global_log_level
        self._log_output_type: contextvars.ContextVar[StreamType] = (
            _global_log_output_type
        )
        self._disabled_loggers: contextvars.ContextVar[tuple[str, ...]] = (
            _global_disabled_loggers
        )

    def update(
        self,
        log_level: LogLevelName | None = None,
        log_output: LogOutput | None = None,
    ):
        if log_level:
            self._log_level.set(LogLevel.to_level(log_level))

        if log_output:
            self._log_output_type.set(StreamType(log_output))

    def disable(self, logger_name: str):
        disabled = self._disabled_loggers.get()
        if logger_name not in disabled:
            self._disabled_loggers.set((*disabled, logger_name))

    def enable(self, logger_name: str):
        self._disabled_loggers.set(
            tuple(name for name in self._disabled_loggers.get() if name != logger_name)
        )

    def enabled(self, logger_name: str, log_level: LogLevel) -> bool:
        return (
            logger_name not in self._disabled_loggers.get()
            and log_level.severity >= self._log_level.get().severity
        )

    @property
    def level(self) -> LogLevel:
        return self._log_level.get()

    @property
    def output(self) -> StreamType:
        return self._log_output_type.get()

    @property
    def disabled(self) -> List[str]:
        return list(self._disabled_loggers.get())
