#!/usr/bin/env python3
#
# -*- coding: utf-8 -*-
# vim: ts=4 sw=4 tw=100 et ai si
#
# Copyright (C) 2020-2025 Intel Corporation
# SPDX-License-Identifier: BSD-3-Clause
#
# Author: Antti Laakso <antti.laakso@linux.intel.com>
#         Artem Bityutskiy <artem.bityutskiy@linux.intel.com>

"""Common functions for ipstate tests."""

from  __future__ import annotations # Remove when switching to Python 3.10+.

import typing
from pathlib import Path
from ipstatelibs import _SysfsIO
from ipstatelibs.IntelPStateVars import SYSFS_BASE
from ipstatetool import _IPState

if typing.TYPE_CHECKING:
    from typing import Final, Iterable

# Contents of the emulated 'intel_pstate' driver sysfs files.
DRIVER_FILES: Final[dict[str, str]] = {
    "min_perf_pct": "10\n",
    "max_perf_pct": "100\n",
    "no_turbo": "0\n",
    "turbo_pct": "33\n",
    "num_pstates": "39\n",
    "status": "active\n",
}

def get_driver_dir(root: Path) -> Path:
    """
    Return the emulated 'intel_pstate' driver sysfs directory path.

    Args:
        root: The emulated sysfs root directory.

    Returns:
        The path of the driver directory under 'root'.
    """

    return root / SYSFS_BASE.relative_to("/")

def build_driver_dir(root: Path,
                     files: dict[str, str] | None = None,
                     skip: Iterable[str] = ()) -> Path:
    """
    Create an emulated 'intel_pstate' driver sysfs directory.

    Args:
        root: The emulated sysfs root directory.
        files: Driver file names and contents to use instead of the defaults.
        skip: Names of the driver files not to create.

    Returns:
        The path of the created driver directory.
    """

    contents = DRIVER_FILES.copy()
    if files:
        contents.update(files)

    basedir = get_driver_dir(root)
    basedir.mkdir(parents=True, exist_ok=True)

    for fname, data in contents.items():
        if fname in skip:
            continue
        (basedir / fname).write_text(data, encoding="utf-8")

    return basedir

def read_driver_file(root: Path, fname: str) -> str:
    """Return the contents of emulated driver file 'fname'."""
    return (get_driver_dir(root) / fname).read_text(encoding="utf-8")

def write_driver_file(root: Path, fname: str, data: str):
    """Change the contents of emulated driver file 'fname', like the kernel would."""
    (get_driver_dir(root) / fname).write_text(data, encoding="utf-8")

class RecordingSysfsIO(_SysfsIO.SysfsIO):
    """
    A sysfs access class which records all write attempts.

    Attributes:
        writes: List of (file name, value) tuples for every 'write()' call, in order.
    """

    def __init__(self, root: Path | str = "/"):
        """Initialize a class instance."""

        super().__init__(root=root)
        self.writes: list[tuple[str, str]] = []

    def write(self, path: Path | str, val: str, what: str = ""):
        """Record the write attempt and write the value."""

        self.writes.append((Path(path).name, val))
        super().write(path, val, what=what)

def run_ipstate(arguments: str,
                root: Path,
                exp_exc: type[Exception] | None = None):
    """
    Execute the 'ipstate' command and validate its outcome.

    Args:
        arguments: The command-line arguments to execute the 'ipstate' command with, e.g.,
                   'config --min-perf-pct 50'.
        root: The emulated sysfs root directory to run the command against.
        exp_exc: The expected exception. If set, the test fails if the command does not raise the
                 expected exception. By default, any exception is considered a failure.

    Raises:
        AssertionError: If the command execution does not match the expected outcome.
    """

    args = _IPState.parse_arguments(arguments.split())

    try:
        with _SysfsIO.SysfsIO(root=root) as sysfs_io:
            args.func(args, sysfs_io)
    except Exception as err: # pylint: disable=broad-except
        if exp_exc is None:
            assert False, f"command 'ipstate {arguments}' raised the following exception:\n" \
                          f"- {type(err).__name__}({err})"

        if isinstance(err, exp_exc):
            return

        assert False, f"command 'ipstate {arguments}' raised the following exception:\n" \
                      f"- {type(err).__name__}({err})\nbut it was expected to raise the following " \
                      f"exception:\n- {exp_exc.__name__}"

    if exp_exc is not None:
        assert False, f"command 'ipstate {arguments}' did not raise the following exception " \
                      f"type:\n- {exp_exc.__name__}"
