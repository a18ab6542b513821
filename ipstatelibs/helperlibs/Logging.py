# -*- coding: utf-8 -*-
# vim: ts=4 sw=4 tw=100 et ai si
#
# Copyright (C) 2020-2025 Intel Corporation
# SPDX-License-Identifier: BSD-3-Clause
#
# Author: Artem Bityutskiy <artem.bityutskiy@linux.intel.com>

"""
Project logging: a 'logging.Logger' subclass with colored level prefixes, the NOTICE and ERRINFO
log levels, and the 'error_out()' method for terminating a tool with an error message.

All project loggers are children of the 'MAIN_LOGGER_NAME' logger. Library modules only log, the
tool configures the output streams by calling 'configure()' on its logger.
"""

from __future__ import annotations # Remove when switching to Python 3.10+.

import sys
import logging
import traceback
from typing import NoReturn, Any, IO, cast
import colorama

INFO = logging.INFO
# Same as INFO, but printed with a prefix.
NOTICE = logging.INFO + 1
DEBUG = logging.DEBUG
WARNING = logging.WARNING
ERROR = logging.ERROR
# Same as ERROR, but printed without a prefix.
ERRINFO = logging.ERROR + 1
CRITICAL = logging.CRITICAL

MAIN_LOGGER_NAME = "main"

# Level name used in the prefix of messages of a level.
_LEVEL_NAMES = {NOTICE: "notice", WARNING: "warning", ERROR: "error", CRITICAL: "critical error"}

# Colors of the prefixes.
_LEVEL_COLORS = {
    DEBUG: colorama.Fore.GREEN,
    NOTICE: colorama.Fore.CYAN + colorama.Style.BRIGHT,
    WARNING: colorama.Fore.YELLOW + colorama.Style.BRIGHT,
    ERROR: colorama.Fore.RED + colorama.Style.BRIGHT,
    CRITICAL: colorama.Fore.RED + colorama.Style.BRIGHT,
}

class _Formatter(logging.Formatter):
    """
    Format INFO and ERRINFO messages as is, prefix other messages with the tool name and the level
    name, and prefix debug messages with a time-stamp and source code location.
    """

    def __init__(self, prefix: str, colored: bool):
        """
        Initialize a class instance.

        Args:
            prefix: The tool name to start the prefix with. Can be empty.
            colored: Whether to colorize the prefixes.
        """

        super().__init__(datefmt="%H:%M:%S")

        self._fmts: dict[int, str] = {INFO: "%(message)s", ERRINFO: "%(message)s"}

        def color(lvl: int, text: str) -> str:
            """Wrap 'text' into the color codes of level 'lvl'."""

            if not colored:
                return text
            return f"{_LEVEL_COLORS[lvl]}{text}{colorama.Style.RESET_ALL}"

        for lvl, name in _LEVEL_NAMES.items():
            if prefix:
                pfx = f"{prefix}: {name}"
            else:
                pfx = name.title()
            self._fmts[lvl] = color(lvl, pfx) + ": %(message)s"

        self._fmts[DEBUG] = "[" + color(DEBUG, "%(created)f") + "] [" + \
                            color(DEBUG, "%(asctime)s") + "] [" + \
                            color(DEBUG, "%(module)s,%(lineno)d") + "]: %(message)s"

    def format(self, record: logging.LogRecord) -> str:
        """Format log record 'record' using the format of its level."""

        # pylint: disable=protected-access
        self._style._fmt = self._fmts.get(record.levelno, "%(levelname)s: %(message)s")
        return super().format(record)

class _LevelsFilter(logging.Filter):
    """Let only messages of certain log levels through."""

    def __init__(self, levels: tuple[int, ...]):
        """Initialize a class instance for levels 'levels'."""

        super().__init__()
        self._levels = levels

    def filter(self, record: logging.LogRecord) -> bool:
        """Return 'True' if 'record' has one of the levels."""
        return record.levelno in self._levels

class Logger(logging.Logger):
    """
    The project logger. On top of the standard logger, provides:
      * 'configure()' for setting up the output streams, the level, and colors.
      * The 'notice()' method for the NOTICE level.
      * The 'error_out()' method.
    """

    def __init__(self, name: str):
        """Initialize a class instance."""

        super().__init__(name)
        self.colored = False

    def configure(self,
                  prefix: str = "",
                  level: int = INFO,
                  colored: bool | None = None,
                  info_stream: IO[str] | None = None,
                  error_stream: IO[str] | None = None) -> Logger:
        """
        Configure the output of the logger. Can be called more than once, the previous output
        handlers are replaced.

        Args:
            prefix: The prefix for messages of all levels except INFO, ERRINFO and DEBUG.
            level: The log level.
            colored: Whether to colorize the prefixes. By default, colorize only if both streams are
                     terminals.
            info_stream: The stream for INFO messages, the standard output by default.
            error_stream: The stream for all other messages, the standard error by default.

        Returns:
            The logger object.
        """

        if info_stream is None:
            info_stream = sys.stdout
        if error_stream is None:
            error_stream = sys.stderr

        if colored is None:
            colored = info_stream.isatty() and error_stream.isatty()
        self.colored = colored

        self.setLevel(level)

        formatter = _Formatter(prefix, colored)
        self.handlers = []

        for stream, levels in ((info_stream, (INFO,)),
                               (error_stream, (DEBUG, NOTICE, WARNING, ERROR, ERRINFO, CRITICAL))):
            handler = logging.StreamHandler(stream)
            handler.setFormatter(formatter)
            handler.addFilter(_LevelsFilter(levels))
            self.addHandler(handler)

        return self

    def notice(self, fmt: str, *args: Any):
        """Log a message with the NOTICE level."""
        self.log(NOTICE, fmt, *args)

    def _log_traceback(self):
        """Log the traceback of the exception being handled at the ERRINFO level."""

        if not sys.exc_info()[0]:
            return

        tb = traceback.format_exc().rstrip()
        if self.colored:
            tb = f"{colorama.Style.DIM}{tb}{colorama.Style.RESET_ALL}"

        self.log(ERRINFO, "--- Debug trace starts here ---")
        self.log(ERRINFO, "An error occurred, here is the traceback:\n%s", tb)
        self.log(ERRINFO, "--- Debug trace ends here ---\n")

    def error_out(self, fmt: Any, *args: Any, print_tb: bool = False) -> NoReturn:
        """
        Log an error message and exit the program with exit code 1.

        Args:
            fmt: The error message or its format string.
            *args: The format string arguments.
            print_tb: Log the traceback of the exception being handled. The traceback is always
                      logged when debugging is enabled.

        Raises:
            SystemExit: Always.
        """

        errmsg = fmt % args if args else str(fmt)

        if print_tb or self.getEffectiveLevel() == DEBUG:
            self._log_traceback()

        self.error(errmsg)
        raise SystemExit(1)

logging.setLoggerClass(Logger)

def getLogger(name: str) -> Logger:
    """Return the project logger with name 'name' (same as 'logging.getLogger()')."""
    return cast(Logger, logging.getLogger(name=name))
