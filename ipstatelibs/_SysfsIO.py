# -*- coding: utf-8 -*-
# vim: ts=4 sw=4 tw=100 et ai si
#
# Copyright (C) 2023-2025 Intel Corporation
# SPDX-License-Identifier: BSD-3-Clause
#
# Authors: Artem Bityutskiy <artem.bityutskiy@linux.intel.com>
#          Antti Laakso <antti.laakso@linux.intel.com>
#          Niklas Neronin <niklas.neronin@intel.com>

"""
Provide API for reading and writing sysfs files.
"""

from __future__ import annotations # Remove when switching to Python 3.10+.

import os
import typing
from pathlib import Path
from ipstatelibs.helperlibs import Logging, ClassHelpers
from ipstatelibs.helperlibs.Exceptions import Error, ErrorIO, ErrorBadFormat

if typing.TYPE_CHECKING:
    from typing import IO

_LOG = Logging.getLogger(f"{Logging.MAIN_LOGGER_NAME}.ipstate.{__name__}")

def _get_err_prefix(fobj: IO[str], method: str) -> str:
    """Return the exception message prefix for a failed method of a wrapped file object."""
    return f"Method '{method}()' failed for '{fobj.name}'"

def _snip(val: str) -> str:
    """Shorten a long value for an error message."""

    if len(val) > 24:
        return f"{val[:23]}...snip..."
    return val

class SysfsIO(ClassHelpers.SimpleCloseContext):
    """
    Provide API for reading and writing sysfs files.

    Public methods overview.

    1. Path operations.
        * 'resolve()' - map a sysfs path to the path on the file-system.
        * 'is_dir()' - check if a path exists and it is a directory.
    2. Read / write to a file.
        * 'open()' - open a file.
        * 'read()' - read a string.
        * 'write()' - write a string.

    All paths are absolute sysfs paths, like '/sys/devices/system/cpu'. They are resolved against
    the root directory, which is '/' by default. A different root directory is used for testing: it
    contains a copy of the relevant sysfs sub-tree. Nothing is cached, every read accesses the file.
    """

    def __init__(self, root: Path | str = "/"):
        """
        Initialize a class instance.

        Args:
            root: The directory to resolve sysfs paths against.
        """

        self.root = Path(root)

    def resolve(self, path: Path | str) -> Path:
        """
        Return the file-system path corresponding to sysfs path 'path'.

        Args:
            path: An absolute sysfs path.

        Returns:
            The path relative to the root directory.
        """

        path = Path(path)
        if not path.is_absolute():
            raise Error(f"BUG: Sysfs path '{path}' is not absolute")

        if self.root == Path("/"):
            return path
        return self.root / path.relative_to("/")

    def is_dir(self, path: Path | str) -> bool:
        """Return 'True' if sysfs path 'path' exists and it is a directory."""

        fspath = self.resolve(path)
        try:
            return fspath.is_dir()
        except OSError as err:
            msg = Error(str(err)).indent(2)
            raise ClassHelpers.get_exc_type(err)(f"Failed to check if '{fspath}' exists and it is "
                                                 f"a directory:\n{msg}", cause=err) from err

    def open(self, path: Path | str, mode: str) -> IO[str]:
        """
        Open a sysfs file and return a file object. The methods of the file object raise only
        exceptions derived from 'Error'.

        Args:
            path: The sysfs file path to open.
            mode: The mode to open the file in ("r" or "w").

        Returns:
            The file object.

        Raises:
            ErrorNotFound: If the file does not exist.
            ErrorPermissionDenied: If there are no permissions to open the file.
            ErrorIO: In case of other errors.
        """

        fspath = self.resolve(path)

        try:
            if mode == "w":
                # Sysfs files can not be created, so no 'O_CREAT'.
                fd = os.open(fspath, os.O_WRONLY | os.O_TRUNC)
                fobj = os.fdopen(fd, "w", encoding="utf-8")
            else:
                fobj = open(fspath, mode, encoding="utf-8") # pylint: disable=consider-using-with
        except OSError as err:
            msg = Error(str(err)).indent(2)
            raise ClassHelpers.get_exc_type(err)(f"Failed to open file '{fspath}' with mode "
                                                 f"'{mode}':\n{msg}", cause=err) from err

        return typing.cast("IO[str]", ClassHelpers.WrapExceptions(fobj,
                                                                  get_err_prefix=_get_err_prefix))

    def read(self, path: Path | str, what: str = "") -> str:
        """
        Read the contents of a sysfs file and strip the white-spaces.

        Args:
            path: Path to the sysfs file to read.
            what: Optional short description of what is being read, included in exception messages.

        Returns:
            The contents of the file as a string.

        Raises:
            ErrorNotFound: If the file does not exist.
            ErrorPermissionDenied: If there are no permissions to read the file.
            ErrorIO: In case of other I/O errors.
            ErrorBadFormat: If the file contents is not a valid UTF-8 text.
        """

        if what:
            what = f" {what}"

        try:
            with self.open(path, "r") as fobj:
                val = fobj.read().strip()
        except ErrorIO as err:
            if isinstance(err.cause, UnicodeDecodeError):
                raise ErrorBadFormat(f"Bad contents of{what} sysfs file '{path}': not a text:\n"
                                     f"{Error(str(err.cause)).indent(2)}") from err
            raise type(err)(f"Failed to read{what} from '{path}':\n{err.indent(2)}",
                            cause=err.cause) from err

        _LOG.debug("Read%s from '%s': '%s'", what, path, val)
        return val

    def write(self, path: Path | str, val: str, what: str = ""):
        """
        Write a value to a sysfs file. The value is written with a terminating newline character
        using a single write operation.

        Args:
            path: Path to the sysfs file to write to.
            val: Value to write to the file.
            what: Optional short description of what is being written, included in exception
                  messages.

        Raises:
            ErrorNotFound: If the file does not exist.
            ErrorPermissionDenied: If there are no permissions to write to the file.
            ErrorIO: In case of other I/O errors, including the kernel rejecting the value.
        """

        if what:
            what = f" {what}"

        _LOG.debug("Writing value '%s' to%s sysfs file '%s'", val, what, path)

        try:
            with self.open(path, "w") as fobj:
                fobj.write(f"{val}\n")
        except ErrorIO as err:
            raise type(err)(f"Failed to write value '{_snip(str(val))}' to{what} sysfs file "
                            f"'{path}':\n{err.indent(2)}", cause=err.cause) from err
