import asyncio
import datetime
import io
import os
import pathlib
import sys
import threading
from collections import defaultdict
from typing import (
    Callable,
    Dict,
    TextIO,
    TypeVar,
)

import msgspec

from pingscope.logging.config import LoggingConfig, StreamType
from pingscope.logging.models import Entry, Log

T = TypeVar("T", bound=Entry)

DEFAULT_TEMPLATE = "{timestamp} - {level} - {thread_id} - {filename}:{function_name}.{line_number} - {message}"
ERROR_TEMPLATE = "{timestamp} - {level} - {thread_id}.{filename}:{function_name}.{line_number} - {error}"


class LoggerStream:
    """
    Writes entries either as templated lines to stdout/stderr or, when a
    log file is configured, as JSON lines to that file. Entries below the
    configured level are dropped before any IO happens.
    """

    def __init__(
        self,
        name: str | None = None,
        template: str | None = None,
        filename: str | None = None,
        directory: str | None = None,
    ) -> None:
        if name is None:
            name = "default"

        self._name = name
        self._default_template = template
        self._default_logfile = filename
        self._default_log_directory = directory

        self._loop: asyncio.AbstractEventLoop | None = None
        self._files: Dict[str, io.BufferedWriter] = {}
        self._file_locks: Dict[str, asyncio.Lock] = defaultdict(asyncio.Lock)
        self._cwd: str | None = None
        self._default_logfile_path: str | None = None

        self._config = LoggingConfig()
        self._initialized: bool = False

    @property
    def name(self):
        return self._name

    @property
    def files(self):
        return list(self._files.keys())

    async def initialize(self):
        if self._initialized:
            return

        if self._loop is None:
            self._loop = asyncio.get_event_loop()

        if self._cwd is None:
            self._cwd = await self._loop.run_in_executor(None, os.getcwd)

        self._initialized = True

    async def open_file(
        self,
        filename: str,
        directory: str | None = None,
        is_default: bool = False,
    ):
        await self.initialize()

        logfile_path = self._to_logfile_path(filename, directory=directory)

        async with self._file_locks[logfile_path]:
            await self._loop.run_in_executor(
                None,
                self._open_file,
                logfile_path,
            )

        if is_default:
            self._default_logfile_path = logfile_path

        return logfile_path

    def _open_file(
        self,
        logfile_path: str,
    ):
        if (logfile := self._files.get(logfile_path)) and logfile.closed is False:
            return

        resolved_path = pathlib.Path(logfile_path).absolute().resolve()
        resolved_path.parent.mkdir(parents=True, exist_ok=True)

        self._files[logfile_path] = open(str(resolved_path), "ab")

    async def close(self):
        if self._loop is None:
            return

        await asyncio.gather(
            *[self._close_file(logfile_path) for logfile_path in self._files]
        )

        self._initialized = False

    async def _close_file(self, logfile_path: str):
        async with self._file_locks[logfile_path]:
            await self._loop.run_in_executor(
                None,
                self._close_file_at_path,
                logfile_path,
            )

    def _close_file_at_path(self, logfile_path: str):
        if (logfile := self._files.get(logfile_path)) and logfile.closed is False:
            logfile.close()

    def _to_logfile_path(
        self,
        filename: str,
        directory: str | None = None,
    ):
        if self._config.directory:
            directory = self._config.directory

        elif directory is None:
            directory = self._cwd

        return os.path.join(directory, filename)

    async def log(
        self,
        entry: T,
        template: str | None = None,
        filter: Callable[[T], bool] | None = None,
    ):
        if self._config.enabled(self._name, entry.level) is False:
            return

        if filter and filter(entry) is False:
            return

        await self.initialize()

        if self._default_logfile or self._default_logfile_path:
            await self._log_to_file(entry)

        else:
            await self._log(
                entry,
                template=template,
            )

    async def _log(
        self,
        entry: Entry,
        template: str | None = None,
    ):
        if template is None:
            template = self._default_template or DEFAULT_TEMPLATE

        log_file, line_number, function_name = self._find_caller()

        line = entry.to_template(
            template,
            context={
                "filename": log_file,
                "function_name": function_name,
                "line_number": line_number,
                "thread_id": threading.get_native_id(),
                "timestamp": datetime.datetime.now(datetime.UTC).isoformat(),
            },
        )

        await self._loop.run_in_executor(
            None,
            self._write_to_stream,
            line + "\n",
        )

    async def _log_to_file(
        self,
        entry: Entry,
    ):
        logfile_path = self._default_logfile_path

        if logfile_path is None:
            logfile_path = await self.open_file(
                self._default_logfile,
                directory=self._default_log_directory,
                is_default=True,
            )

        elif self._files.get(logfile_path) is None or self._files[logfile_path].closed:
            async with self._file_locks[logfile_path]:
                await self._loop.run_in_executor(None, self._open_file, logfile_path)

        log_file, line_number, function_name = self._find_caller()

        log = Log(
            entry=entry,
            filename=log_file,
            function_name=function_name,
            line_number=line_number,
        )

        try:
            async with self._file_locks[logfile_path]:
                await self._loop.run_in_executor(
                    None,
                    self._write_to_file,
                    log,
                    logfile_path,
                )

        except OSError as err:
            await self._loop.run_in_executor(
                None,
                self._write_error,
                entry.to_template(
                    ERROR_TEMPLATE,
                    context={
                        "filename": log_file,
                        "function_name": function_name,
                        "line_number": line_number,
                        "error": str(err),
                        "thread_id": threading.get_native_id(),
                        "timestamp": datetime.datetime.now(datetime.UTC).isoformat(),
                    },
                ),
            )

    def _output_stream(self) -> TextIO:
        if self._config.output == StreamType.STDOUT:
            return sys.stdout

        return sys.stderr

    def _write_to_stream(self, line: str):
        stream = self._output_stream()
        stream.write(line)
        stream.flush()

    def _write_error(self, line: str):
        sys.stderr.write(line + "\n")
        sys.stderr.flush()

    def _write_to_file(
        self,
        log: Log,
        logfile_path: str,
    ):
        if (logfile := self._files.get(logfile_path)) and logfile.closed is False:
            logfile.write(msgspec.json.encode(log) + b"\n")
            logfile.flush()

    def _find_caller(self):
        """
        Find the stack frame of the caller so that we can note the source
        file name, line number and function name.
        """
        frame = sys._getframe(3)
        code = frame.f_code

        return (
            code.co_filename,
            frame.f_lineno,
            code.co_name,
        )
