# -*- coding: utf-8 -*-
# vim: ts=4 sw=4 tw=100 et ai si
#
# Copyright (C) 2020-2025 Intel Corporation
# SPDX-License-Identifier: BSD-3-Clause
#
# Author: Artem Bityutskiy <artem.bityutskiy@linux.intel.com>

"""
Exception types used in this project.

The 'intel_pstate' access layer distinguishes between four outcomes of a failed operation:
  * ErrorNotAvailable - the driver control directory does not exist.
  * ErrorIO - reading or writing a sysfs file failed (including 'ErrorNotFound' and
              'ErrorPermissionDenied').
  * ErrorBadFormat - a sysfs file was read, but its contents could not be parsed.
  * ErrorBadValue - a value to write is outside of the parameter's domain.
"""

from __future__ import annotations # Remove when switching to Python 3.10+.

import re
from typing import Any

class Error(Exception):
    """
    The base class of all project exceptions. Keyword arguments of the constructor become attributes
    of the exception object.
    """

    def __init__(self, msg: Any, **kwargs: Any):
        """Initialize the exception object with message 'msg'."""

        self.msg = str(msg)
        super().__init__(self.msg)

        for key, val in kwargs.items():
            setattr(self, key, val)

    def indent(self, indent: int | str) -> str:
        """
        Return the error message with every line prefixed and the first letter capitalized. Used for
        nesting an error message into another one.

        Args:
            indent: The prefix, or the count of white-spaces to prefix the lines with.
        """

        pfx = " " * indent if isinstance(indent, int) else indent
        msg = pfx + self.msg.replace("\n", f"\n{pfx}")
        return re.sub(r"^(\s*)(\S)", lambda mobj: mobj.group(1) + mobj.group(2).upper(), msg)

    def __str__(self):
        """Return the error message."""
        return self.msg

class ErrorNotSupported(Error):
    """Feature/option/etc is not supported."""

class ErrorNotAvailable(ErrorNotSupported):
    """The 'intel_pstate' driver is not available on the system."""

class ErrorIO(Error):
    """
    Reading or writing a file failed for a reason other than malformed contents. The original
    exception is available via the 'cause' attribute.
    """

    def __init__(self, msg: Any, cause: BaseException | None = None, **kwargs: Any):
        """Initialize the exception object with message 'msg' and the original exception 'cause'."""

        super().__init__(msg, cause=cause, **kwargs)

class ErrorNotFound(ErrorIO):
    """Something was not found."""

class ErrorPermissionDenied(ErrorIO):
    """Permission denied."""

class ErrorBadFormat(Error):
    """Bad format of something, e.g., file contents."""

class ErrorBadValue(Error):
    """A bad value was passed, e.g., a number out of the allowed range."""
