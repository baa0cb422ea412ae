import asyncio
import io
import os
import pathlib
import sys
from typing import (
    Any,
    Dict,
    TextIO,
    TypeVar,
)

import msgspec

from simfixture.logging.config import LoggingConfig, StreamType
from simfixture.logging.models import Entry, Log, LogLevel

T = TypeVar("T", bound=Entry)

DEFAULT_TEMPLATE = "{timestamp} - {level} - {thread_id} - {filename}:{function_name}.{line_number} - {message}"


class LoggerStream:
    def __init__(
        self,
        name: str | None = None,
        template: str | None = None,
        filename: str | None = None,
        directory: str | None = None,
        models: dict[
            str,
            tuple[
                type[T],
                dict[str, Any],
            ],
        ]
        | None = None,
    ) -> None:
        if name is None:
            name = "default"

        self._name = name
        self._default_template = template
        self._default_logfile = filename
        self._default_log_directory = directory

        self._config = LoggingConfig()
        self._loop: asyncio.AbstractEventLoop | None = None
        self._files: Dict[str, io.BufferedWriter] = {}
        self._default_logfile_path: str | None = None
        self._initialized = False

        self._models: Dict[str, tuple[type[Entry], dict[str, Any]]] = {}

        if models is None:
            models = {}

        for model_name, (model, defaults) in models.items():
            self._models[model_name] = (model, defaults)

        self._models.setdefault(
            "default",
            (
                Entry,
                {"level": LogLevel.INFO},
            ),
        )

    @property
    def name(self):
        return self._name

    async def initialize(self):
        self._loop = asyncio.get_running_loop()

        if self._initialized:
            return

        if self._default_logfile:
            self._default_logfile_path = await self.open_file(
                self._default_logfile,
                directory=self._default_log_directory,
            )

        self._initialized = True

    async def open_file(
        self,
        filename: str,
        directory: str | None = None,
    ) -> str:
        if directory is None:
            directory = os.getcwd()

        logfile_path = str(pathlib.Path(directory, filename).absolute())

        if (logfile := self._files.get(logfile_path)) and logfile.closed is False:
            return logfile_path

        self._files[logfile_path] = await self._loop.run_in_executor(
            None,
            self._open_file,
            logfile_path,
        )

        return logfile_path

    def _open_file(self, logfile_path: str):
        path = pathlib.Path(logfile_path)
        path.parent.mkdir(parents=True, exist_ok=True)

        return open(path, "ab+")

    async def log_prepared(
        self,
        message: str,
        name: str = "default",
        template: str | None = None,
    ):
        frame = sys._getframe(1)
        await self._log(
            self._to_log(
                self._to_entry(message, name),
                frame,
            ),
            template=template,
        )

    async def log_prepared_batch(
        self,
        model_messages: dict[str, list[str]],
        template: str | None = None,
    ):
        frame = sys._getframe(1)
        logs = [
            self._to_log(
                self._to_entry(message, name),
                frame,
            )
            for name, messages in model_messages.items()
            for message in messages
        ]

        for log in logs:
            await self._log(log, template=template)

    def _to_entry(
        self,
        message: str,
        name: str,
    ) -> Entry:
        model, defaults = self._models.get(
            name,
            self._models["default"],
        )

        return model(
            message=message,
            **defaults,
        )

    def _to_log(self, entry: Entry, frame) -> Log:
        code = frame.f_code
        return Log(
            entry=entry,
            filename=code.co_filename,
            function_name=code.co_name,
            line_number=frame.f_lineno,
        )

    async def _log(
        self,
        log: Log,
        template: str | None = None,
    ):
        if self._config.enabled(self._name, log.entry.level) is False:
            return

        if self._initialized is False:
            await self.initialize()

        if self._default_logfile_path:
            await self._loop.run_in_executor(
                None,
                self._write_to_file,
                log,
                self._default_logfile_path,
            )
            return

        if template is None:
            template = self._default_template or DEFAULT_TEMPLATE

        line = log.entry.to_template(
            template,
            context={
                "filename": log.filename,
                "function_name": log.function_name,
                "line_number": log.line_number,
                "thread_id": log.thread_id,
                "timestamp": log.timestamp,
            },
        )

        # contextvars do not reach executor threads
        stream = sys.stdout if self._config.output == StreamType.STDOUT else sys.stderr

        await self._loop.run_in_executor(
            None,
            self._write_to_stream,
            line,
            stream,
        )

    def _write_to_stream(self, line: str, stream: TextIO):
        stream.write(line + "\n")
        stream.flush()

    def _write_to_file(
        self,
        log: Log,
        logfile_path: str,
    ):
        logfile = self._files.get(logfile_path)
        if logfile is None or logfile.closed:
            return

        logfile.write(msgspec.json.encode(log) + b"\n")
        logfile.flush()

    async def close(self):
        files = [logfile for logfile in self._files.values() if logfile.closed is False]

        if self._loop is not None and len(files) > 0:
            await asyncio.gather(
                *[self._loop.run_in_executor(None, logfile.close) for logfile in files]
            )

        self._files.clear()
        self._default_logfile_path = None
        self._initialized = False
