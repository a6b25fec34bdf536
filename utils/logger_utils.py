"""Logging setup for the greeter.

Every module asks LoggerUtils.get_logger(__name__) for a logger below the ``Greeter`` namespace.
The entry point instantiates LoggerUtils once to attach the handlers: warnings and errors go to
stderr, and everything goes to a rotating file when GENERAL.LOG_FILE is set.
"""

from __future__ import annotations

import logging
import sys
import warnings
from logging import Formatter, NullHandler, StreamHandler
from logging.handlers import RotatingFileHandler
from typing import TYPE_CHECKING, ClassVar, Final, Literal, Self, TextIO

if TYPE_CHECKING:
    from pathlib import Path

__all__: list[str] = ["LoggerUtils"]

type LevelType = Literal["NOTSET", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

_LOG_FILE_SIZE: Final[int] = 1 * 1024 * 1024  # 1MB
_LOG_BACKUP_COUNT: Final[int] = 3

_CONSOLE_FORMAT: Final[Formatter] = Formatter("%(asctime)s %(message)s", datefmt="%H:%M:%S")
_FILE_FORMAT: Final[Formatter] = Formatter(
    "%(asctime)s %(levelname)-8s %(process)5d %(name)-32s\t%(funcName)s\t%(message)s"
)

DEFAULT_LOG_LEVEL: Final[int] = logging.INFO
DEFAULT_NAMESPACE: Final[str] = "Greeter"


class LoggerUtils:
    """Process-wide logging setup.

    The first instantiation attaches the handlers to the namespace logger. Later instantiations
    return the same object and change nothing, so the CLI and the server can both call it.

    Attributes:
        root_logger (logging.Logger): The namespace logger the handlers are attached to.
    """

    _NAMESPACE: ClassVar[str] = DEFAULT_NAMESPACE
    _configured: ClassVar[bool] = False
    _instance: ClassVar[Self | None] = None

    def __new__(cls, *args, **kwargs) -> Self:
        _ = args, kwargs
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self, filename: str | Path = "", *, use_null_console: bool = False) -> None:
        """Attach the console handler and, if ``filename`` is given, the file handler.

        Args:
            filename (str | Path): Absolute path of the log file. Empty disables file logging.
            use_null_console (bool): Discard console output instead of writing to stderr.
        """
        if LoggerUtils._configured:
            return

        self.root_logger: logging.Logger = logging.getLogger(self._NAMESPACE)
        # handlers filter further; the logger itself must let INFO through
        self.root_logger.setLevel(DEFAULT_LOG_LEVEL)
        self.root_logger.addHandler(self._console_handler(quiet=use_null_console or sys.stderr is None))

        log_file: str = str(filename).strip()
        if log_file:
            file_handler: RotatingFileHandler | None = self._file_handler(log_file)
            if file_handler is not None:
                self.root_logger.addHandler(file_handler)

        warnings.showwarning = self.warning_to_log
        LoggerUtils._configured = True

    @staticmethod
    def _console_handler(*, quiet: bool) -> logging.Handler:
        if quiet:
            return NullHandler()
        handler: StreamHandler[TextIO] = StreamHandler(sys.stderr)
        handler.setLevel(logging.WARNING)
        handler.setFormatter(_CONSOLE_FORMAT)
        return handler

    def _file_handler(self, filename: str) -> RotatingFileHandler | None:
        try:
            handler = RotatingFileHandler(
                filename=filename,
                maxBytes=_LOG_FILE_SIZE,
                backupCount=_LOG_BACKUP_COUNT,
                encoding="utf-8",
            )
        except OSError as err:
            self.root_logger.error("Cannot open log file '%s', file logging disabled: %s", filename, err)
            return None
        handler.setLevel(logging.DEBUG)
        handler.setFormatter(_FILE_FORMAT)
        return handler

    def warning_to_log(
        self,
        message: Warning | str,
        category: type[Warning],
        filename: str,
        lineno: int,
        file: TextIO | None = None,
        line: str | None = None,
    ) -> None:
        """Replacement for warnings.showwarning that writes to the log."""
        _ = file, line
        self.root_logger.warning("%s:%d: %s: %s", filename, lineno, category.__name__, message)

    def set_level(self, level: LevelType) -> None:
        """Set the namespace logger level; unknown names fall back to INFO with a warning."""
        value: int | None = logging.getLevelNamesMapping().get(level.upper())
        if value is None:
            self.root_logger.warning("Unknown logging level '%s', using INFO", level)
            value = DEFAULT_LOG_LEVEL
        self.root_logger.setLevel(value)

    @staticmethod
    def get_logger(name: str | None = None) -> logging.Logger:
        """Get a logger below the greeter namespace.

        Args:
            name (str | None): Usually ``__name__``. None returns the namespace logger itself.
        """
        if name:
            return logging.getLogger(f"{LoggerUtils._NAMESPACE}.{name}")
        return logging.getLogger(LoggerUtils._NAMESPACE)
