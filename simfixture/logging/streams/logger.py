from __future__ import annotations

import asyncio
import pathlib
from typing import Any, Dict, TypeVar

from simfixture.logging.models import Entry

from .logger_context import LoggerContext

T = TypeVar("T", bound=Entry)

DEFAULT_LOGFILE = "simfixture.log.json"


def _split_path(path: str | None) -> tuple[str | None, str | None]:
    if path is None:
        return None, None

    logfile_path = pathlib.Path(path)
    if len(logfile_path.suffix) > 0:
        return logfile_path.name, str(logfile_path.parent.absolute())

    return DEFAULT_LOGFILE, str(logfile_path.absolute())


class Logger:
    def __init__(self) -> None:
        self._contexts: Dict[str, LoggerContext] = {}

    def configure(
        self,
        name: str | None = None,
        template: str | None = None,
        path: str | None = None,
        models: dict[
            str,
            tuple[
                type[T],
                dict[str, Any],
            ],
        ]
        | None = None,
    ):
        if name is None:
            name = "default"

        filename, directory = _split_path(path)

        self._contexts[name] = LoggerContext(
            name=name,
            template=template,
            filename=filename,
            directory=directory,
            nested=True,
            models=models,
        )

    def context(
        self,
        name: str | None = None,
        template: str | None = None,
        path: str | None = None,
        nested: bool = True,
        models: dict[
            str,
            tuple[
                type[T],
                dict[str, Any],
            ],
        ]
        | None = None,
    ) -> LoggerContext:
        if name is None:
            name = "default"

        filename, directory = _split_path(path)

        if self._contexts.get(name) is None:
            self._contexts[name] = LoggerContext(
                name=name,
                template=template,
                filename=filename,
                directory=directory,
                nested=nested,
                models=models,
            )

        return self._contexts[name]

    async def close(self):
        if len(self._contexts) > 0:
            await asyncio.gather(
                *[context.stream.close() for context in self._contexts.values()]
            )
