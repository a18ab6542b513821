# -*- coding: utf-8 -*-
# vim: ts=4 sw=4 tw=100 et ai si
#
# Copyright (C) 2020-2025 Intel Corporation
# SPDX-License-Identifier: BSD-3-Clause
#
# Author: Artem Bityutskiy <artem.bityutskiy@linux.intel.com>

"""
Global variables and types for the 'IntelPState' module. This file is separated to allow importing
constants without loading the entire module.
"""

from __future__ import annotations # Remove when switching to Python 3.10+.

from pathlib import Path
from typing import Literal, TypedDict, Union, Final

# Names of all 'intel_pstate' driver parameters supported by this project.
ParamNameType = Literal["min_perf_pct", "max_perf_pct", "no_turbo", "turbo_pct", "num_pstates",
                        "status"]
# Names of the parameters that can be modified.
WritableParamNameType = Literal["min_perf_pct", "max_perf_pct", "no_turbo"]
# Operation mode of the 'intel_pstate' driver, the contents of the 'status' file.
StatusType = Literal["active", "passive", "off"]
# Type of a parameter value.
ParamValueType = Union[int, bool, str]

class ParamTypedDict(TypedDict, total=False):
    """
    The type for describing an 'intel_pstate' driver parameter.

    Attributes:
        name: Human-readable name of the parameter.
        fname: Name of the sysfs file in the driver directory.
        type: Python type of the parameter value ("int", "bool", or "str").
        writable: Whether the parameter can be modified.
        unit: The unit of the parameter value.
        min: The minimum value the parameter can be set to (writable "int" parameters only).
        max: The maximum value the parameter can be set to (writable "int" parameters only).
        vals: The values that the parameter can have ("str" parameters only).
    """

    name: str
    fname: str
    type: Literal["int", "bool", "str"]
    writable: bool
    unit: str
    min: int
    max: int
    vals: tuple[str, ...]

# The 'intel_pstate' driver sysfs directory.
SYSFS_BASE: Final[Path] = Path("/sys/devices/system/cpu/intel_pstate")

# The range of the performance percent parameters.
PERF_PCT_MIN: Final[int] = 0
PERF_PCT_MAX: Final[int] = 100

# The 'intel_pstate' driver operation modes.
STATUSES: Final[tuple[str, ...]] = ("active", "passive", "off")

# The parameters dictionary describes the driver parameters supported by this project. The order
# of the elements defines the output order.
PARAMS: Final[dict[ParamNameType, ParamTypedDict]] = {
    "min_perf_pct": {
        "name": "Min. performance percent",
        "fname": "min_perf_pct",
        "type": "int",
        "writable": True,
        "unit": "%",
        "min": PERF_PCT_MIN,
        "max": PERF_PCT_MAX,
    },
    "max_perf_pct": {
        "name": "Max. performance percent",
        "fname": "max_perf_pct",
        "type": "int",
        "writable": True,
        "unit": "%",
        "min": PERF_PCT_MIN,
        "max": PERF_PCT_MAX,
    },
    "no_turbo": {
        "name": "Turbo disabled",
        "fname": "no_turbo",
        "type": "bool",
        "writable": True,
    },
    "turbo_pct": {
        "name": "Turbo P-states percent",
        "fname": "turbo_pct",
        "type": "int",
        "writable": False,
        "unit": "%",
    },
    "num_pstates": {
        "name": "Number of P-states",
        "fname": "num_pstates",
        "type": "int",
        "writable": False,
    },
    "status": {
        "name": "Driver mode",
        "fname": "status",
        "type": "str",
        "writable": False,
        "vals": STATUSES,
    },
}
