# -*- coding: utf-8 -*-
# vim: ts=4 sw=4 tw=100 et ai si
#
# Copyright (C) 2020-2025 Intel Corporation
# SPDX-License-Identifier: BSD-3-Clause
#
# Author: Artem Bityutskiy <artem.bityutskiy@linux.intel.com>

"""
Provide YAML file reading and writing capabilities.
"""

from  __future__ import annotations # Remove when switching to Python 3.10+.

from pathlib import Path
from typing import Any, IO
import yaml
from ipstatelibs.helperlibs import Logging, ClassHelpers
from ipstatelibs.helperlibs.Exceptions import Error, ErrorBadFormat

_LOG = Logging.getLogger(f"{Logging.MAIN_LOGGER_NAME}.ipstate.{__name__}")

def _io_error(err: OSError, action: str, name: str) -> Error:
    """Return the project exception for an 'OSError' raised when doing 'action' on YAML file."""

    exc_type = ClassHelpers.get_exc_type(err)
    return exc_type(f"Failed to {action} YAML file '{name}':\n{Error(str(err)).indent(2)}",
                    cause=err)

def dump(data: dict[str, Any], path: Path | str | IO[str]):
    """
    Write dictionary 'data' in the YAML format. The keys order is preserved.

    Args:
        data: The dictionary to write.
        path: Path of the file to write, or a file object.
    """

    if hasattr(path, "write"):
        name = getattr(path, "name", "<stream>")
    else:
        name = str(path)

    try:
        if hasattr(path, "write"):
            yaml.safe_dump(data, path, default_flow_style=False, sort_keys=False)
        else:
            with open(path, "w", encoding="utf-8") as fobj:
                yaml.safe_dump(data, fobj, default_flow_style=False, sort_keys=False)
    except OSError as err:
        raise _io_error(err, "write", name) from err

    _LOG.debug("Wrote YAML file '%s'", name)

def load(path: Path | str | IO[str]) -> dict[str, Any]:
    """
    Load a YAML file containing a mapping.

    Args:
        path: Path of the file to load, or a file object.

    Returns:
        The loaded mapping, or an empty dictionary for an empty file.

    Raises:
        ErrorBadFormat: If the file is not valid YAML or does not contain a mapping.
    """

    if hasattr(path, "read"):
        fobj = path
        name = getattr(path, "name", "<stream>")
    else:
        name = str(path)
        try:
            fobj = open(path, "r", encoding="utf-8") # pylint: disable=consider-using-with
        except OSError as err:
            raise _io_error(err, "open", name) from err

    try:
        loaded = yaml.safe_load(fobj)
    except yaml.YAMLError as err:
        raise ErrorBadFormat(f"Failed to parse YAML file '{name}':\n{Error(str(err)).indent(2)}") \
              from err
    except OSError as err:
        raise _io_error(err, "read", name) from err
    finally:
        if fobj is not path:
            fobj.close()

    if not loaded:
        return {}

    if not isinstance(loaded, dict):
        raise ErrorBadFormat(f"Bad YAML file '{name}': expected a mapping at the top level, got "
                             f"'{type(loaded).__name__}'")

    _LOG.debug("Loaded YAML file '%s'", name)
    return loaded
