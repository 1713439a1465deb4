from __future__ import annotations

import asyncio
import pathlib
from typing import (
    Dict,
    TypeVar,
)

from pingscope.logging.models import Entry

from .logger_context import LoggerContext

T = TypeVar("T", bound=Entry)


class Logger:
    def __init__(self) -> None:
        self._contexts: Dict[str, LoggerContext] = {}

    def __getitem__(self, name: str):
        if self._contexts.get(name) is None:
            self._contexts[name] = LoggerContext(name=name)

        return self._contexts[name]

    def context(
        self,
        name: str | None = None,
        template: str | None = None,
        path: str | None = None,
        nested: bool = False,
    ):
        if name is None:
            name = "default"

        filename: str | None = None
        directory: str | None = None

        if path:
            logfile_path = pathlib.Path(path)

            filename = logfile_path.name
            directory = str(logfile_path.parent.absolute())

        if self._contexts.get(name) is None:
            self._contexts[name] = LoggerContext(
                name=name,
                template=template,
                filename=filename,
                directory=directory,
                nested=nested,
            )

        else:
            context = self._contexts[name]
            context.template = template if template else context.template
            context.filename = filename if filename else context.filename
            context.directory = directory if directory else context.directory
            context.nested = nested

        return self._contexts[name]

    async def log(
        self,
        entry: T,
        name: str | None = None,
    ):
        async with self.context(
            name=name,
            nested=True,
        ) as ctx:
            await ctx.log(entry)

    async def close(self):
        if len(self._contexts) > 0:
            await asyncio.gather(
                *[context.stream.close() for context in self._contexts.values()]
            )
