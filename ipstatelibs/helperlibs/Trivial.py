# -*- coding: utf-8 -*-
# vim: ts=4 sw=4 tw=100 et ai si
#
# Copyright (C) 2020-2025 Intel Corporation
# SPDX-License-Identifier: BSD-3-Clause
#
# Author: Artem Bityutskiy <artem.bityutskiy@linux.intel.com>

"""
Common trivial helpers.
"""

from __future__ import annotations # Remove when switching to Python 3.10+.

import os
import re
from ipstatelibs.helperlibs.Exceptions import Error, ErrorBadFormat

# A decimal integer with an optional sign. Unlike 'int()', no underscores and no non-ASCII digits.
_DECIMAL_REGEX = re.compile(r"[+-]?[0-9]+")

def is_root() -> bool:
    """Return 'True' if the current process runs with superuser privileges."""

    try:
        return os.geteuid() == 0
    except OSError as err:
        raise Error(f"Failed to get the process effective UID:\n{Error(str(err)).indent(2)}") \
              from None

def is_int(value: str | int) -> bool:
    """
    Return 'True' if 'value' is an integer or a string containing a decimal integer. Leading and
    trailing white-spaces are allowed.
    """

    if isinstance(value, int) and not isinstance(value, bool):
        return True
    return isinstance(value, str) and bool(_DECIMAL_REGEX.fullmatch(value.strip()))

def str_to_int(snum: str | int, what: str = "") -> int:
    """
    Convert a decimal integer string to 'int'.

    Args:
        snum: The value to convert.
        what: Description of the value for the error message.

    Returns:
        The integer value.

    Raises:
        ErrorBadFormat: If 'snum' is not a decimal integer.
    """

    if not is_int(snum):
        if not what:
            what = "value"
        raise ErrorBadFormat(f"Bad {what} '{snum}': should be a decimal integer")

    return int(str(snum).strip())
