# -*- coding: utf-8 -*-
# vim: ts=4 sw=4 tw=100 et ai si
#
# Copyright (C) 2020-2025 Intel Corporation
# SPDX-License-Identifier: BSD-3-Clause
#
# Author: Artem Bityutskiy <artem.bityutskiy@linux.intel.com>

"""
Provide API for reading and modifying the Linux 'intel_pstate' driver parameters.

The driver exposes its system-wide parameters as sysfs files in the
'/sys/devices/system/cpu/intel_pstate' directory. Every file is a separate parameter, and every
read or write is a separate operation: there are no multi-parameter transactions. Nothing is
cached, so every read returns the current kernel value.

Example:
    with IntelPState.IntelPState() as pstate:
        pstate.set_min_perf_pct(50)
        pstate.set_max_perf_pct(100)
        pstate.set_no_turbo(False)

Writing requires superuser privileges.
"""

from __future__ import annotations # Remove when switching to Python 3.10+.

import typing
from typing import NamedTuple, Generator, Any, cast
from ipstatelibs import _SysfsIO
from ipstatelibs.IntelPStateVars import PARAMS, SYSFS_BASE
from ipstatelibs.helperlibs import Logging, ClassHelpers, Trivial
from ipstatelibs.helperlibs.Exceptions import Error, ErrorNotAvailable, ErrorNotSupported
from ipstatelibs.helperlibs.Exceptions import ErrorBadFormat, ErrorBadValue

if typing.TYPE_CHECKING:
    from pathlib import Path
    from ipstatelibs.IntelPStateVars import ParamNameType, WritableParamNameType, StatusType
    from ipstatelibs.IntelPStateVars import ParamValueType

_LOG = Logging.getLogger(f"{Logging.MAIN_LOGGER_NAME}.ipstate.{__name__}")

class PStateValues(NamedTuple):
    """
    A set of writable 'intel_pstate' parameter values that was retrieved, or is to be set.

    Attributes:
        min_perf_pct: The minimum performance percent.
        max_perf_pct: The maximum performance percent.
        no_turbo: Whether turbo is disabled.
    """

    min_perf_pct: int = 0
    max_perf_pct: int = 100
    no_turbo: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PStateValues:
        """
        Create a 'PStateValues' object from a dictionary, such as one loaded from a YAML file.
        Missing keys get the default values.

        Args:
            data: The dictionary with parameter names as keys.

        Returns:
            The 'PStateValues' object.

        Raises:
            ErrorBadValue: If the dictionary contains an unknown key.
        """

        for key in data:
            if key not in cls._fields:
                fields = ", ".join(cls._fields)
                raise ErrorBadValue(f"Unknown 'intel_pstate' parameter '{key}', use one of: "
                                    f"{fields}")

        return cls(**data)

def _uncapitalize(name: str) -> str:
    """Turn 'Min. performance percent' into 'min. performance percent'."""
    return name[:1].lower() + name[1:]

def is_available(sysfs_io: _SysfsIO.SysfsIO | None = None) -> bool:
    """
    Check if the 'intel_pstate' driver is available on the system.

    Args:
        sysfs_io: The sysfs access object to use. A default one is created if not provided.

    Returns:
        True if the driver sysfs directory exists, False otherwise.
    """

    if not sysfs_io:
        sysfs_io = _SysfsIO.SysfsIO()

    return sysfs_io.is_dir(SYSFS_BASE)

def probe(sysfs_io: _SysfsIO.SysfsIO | None = None) -> IntelPState | None:
    """
    Create and return an 'IntelPState' object, or return 'None' if the 'intel_pstate' driver is not
    available. This is an alternative to catching 'ErrorNotAvailable' for callers that treat the
    lack of the driver as "nothing to tune".

    Args:
        sysfs_io: The sysfs access object to use. A default one is created if not provided.

    Returns:
        The 'IntelPState' object or 'None'.
    """

    try:
        return IntelPState(sysfs_io=sysfs_io)
    except ErrorNotAvailable as err:
        _LOG.debug("%s", err)
        return None

class IntelPState(ClassHelpers.SimpleCloseContext):
    """
    Provide API for reading and modifying the 'intel_pstate' driver parameters.

    Public methods overview.

    1. Generic read / write.
        * 'get()' - read a parameter.
        * 'set()' - write a writable parameter.
        * 'validate_value()' - validate a value of a writable parameter without writing it.
        * 'get_all()' - yield all parameters.
    2. Per-parameter read / write.
        * 'get_min_perf_pct()', 'set_min_perf_pct()'
        * 'get_max_perf_pct()', 'set_max_perf_pct()'
        * 'get_no_turbo()', 'set_no_turbo()'
        * 'get_turbo_pct()'
        * 'get_num_pstates()'
        * 'get_status()'
    3. Multiple writable parameters.
        * 'get_values()' - read all writable parameters.
        * 'set_values()' - write all writable parameters, one by one.

    Read-only parameters ('turbo_pct', 'num_pstates', 'status') have no setter methods.
    """

    def __init__(self, sysfs_io: _SysfsIO.SysfsIO | None = None):
        """
        Initialize a class instance.

        Args:
            sysfs_io: The sysfs access object to use. A default one is created if not provided.

        Raises:
            ErrorNotAvailable: If the 'intel_pstate' driver is not available (the driver is not
                               used, the CPU is not supported, or the kernel was built without it).
        """

        self._close_sysfs_io = sysfs_io is None

        self._sysfs_io: _SysfsIO.SysfsIO
        if not sysfs_io:
            self._sysfs_io = _SysfsIO.SysfsIO()
        else:
            self._sysfs_io = sysfs_io

        if not self._sysfs_io.is_dir(SYSFS_BASE):
            self.close()
            raise ErrorNotAvailable(f"The 'intel_pstate' driver is not available: directory "
                                    f"'{SYSFS_BASE}' does not exist")

        _LOG.debug("Found the 'intel_pstate' driver directory '%s'", SYSFS_BASE)

    def close(self):
        """Uninitialize the class object."""
        ClassHelpers.close(self, close_attrs=("_sysfs_io",))

    @staticmethod
    def _validate_pname(pname: str):
        """Raise 'ErrorNotSupported' if 'pname' is not a supported parameter name."""

        if pname not in PARAMS:
            pnames = ", ".join(PARAMS)
            raise ErrorNotSupported(f"Unknown 'intel_pstate' parameter '{pname}', use one of: "
                                    f"{pnames}")

    @staticmethod
    def get_path(pname: ParamNameType) -> Path:
        """
        Return the sysfs file path of parameter 'pname'.

        Args:
            pname: Name of the parameter.

        Returns:
            The sysfs path of the parameter file.
        """

        IntelPState._validate_pname(pname)
        return SYSFS_BASE / PARAMS[pname]["fname"]

    def _parse(self, pname: ParamNameType, path: Path, raw: str) -> ParamValueType:
        """
        Convert the contents of the parameter file into the parameter value.

        Args:
            pname: Name of the parameter.
            path: The sysfs path of the parameter file (used in error messages).
            raw: The file contents with white-spaces stripped.

        Returns:
            The parameter value.

        Raises:
            ErrorBadFormat: If the contents does not match the parameter type.
        """

        param = PARAMS[pname]
        name = _uncapitalize(param["name"])

        if param["type"] == "int":
            try:
                return Trivial.str_to_int(raw, what=name)
            except ErrorBadFormat as err:
                raise ErrorBadFormat(f"Bad contents of {name} sysfs file '{path}':\n"
                                     f"{err.indent(2)}") from err

        if param["type"] == "bool":
            if raw == "1":
                return True
            if raw == "0":
                return False
            raise ErrorBadFormat(f"Bad contents of {name} sysfs file '{path}': expected '0' or "
                                 f"'1', got '{raw}'")

        if raw not in param["vals"]:
            vals = ", ".join(param["vals"])
            raise ErrorBadFormat(f"Bad contents of {name} sysfs file '{path}': got '{raw}', "
                                 f"expected one of: {vals}")
        return raw

    def get(self, pname: ParamNameType) -> ParamValueType:
        """
        Read and return the value of parameter 'pname'.

        Args:
            pname: Name of the parameter to read.

        Returns:
            The parameter value: an integer for "int" parameters, a boolean for "bool" parameters,
            and a string for the "status" parameter.

        Raises:
            ErrorNotSupported: If 'pname' is not a supported parameter name.
            ErrorIO: If reading the parameter file failed. 'ErrorNotFound' means that the file does
                     not exist (e.g., an older kernel or the driver being in the "off" mode).
            ErrorBadFormat: If the file contents could not be parsed.
        """

        path = self.get_path(pname)
        raw = self._sysfs_io.read(path, what=_uncapitalize(PARAMS[pname]["name"]))
        return self._parse(pname, path, raw)

    def validate_value(self, pname: WritableParamNameType, val: Any) -> int | bool:
        """
        Validate value 'val' of writable parameter 'pname'.

        Args:
            pname: Name of the parameter to validate the value for.
            val: The value to validate.

        Returns:
            The validated value.

        Raises:
            ErrorNotSupported: If 'pname' is not a supported or not a writable parameter.
            ErrorBadValue: If 'val' is of a wrong type or out of range.
        """

        self._validate_pname(pname)

        param = PARAMS[pname]
        name = _uncapitalize(param["name"])

        if not param["writable"]:
            raise ErrorNotSupported(f"{param['name']} is read-only and can not be modified")

        if param["type"] == "bool":
            if val is not True and val is not False:
                raise ErrorBadValue(f"Bad {name} value '{val}': must be a boolean")
            return val

        if isinstance(val, bool) or not isinstance(val, int):
            raise ErrorBadValue(f"Bad {name} value '{val}': must be an integer")

        if val < param["min"] or val > param["max"]:
            raise ErrorBadValue(f"Bad {name} value '{val}': must be within "
                                f"[{param['min']}, {param['max']}]")
        return val

    @staticmethod
    def _format(val: int | bool) -> str:
        """Format a validated parameter value the way the kernel expects it."""

        if isinstance(val, bool):
            return "1" if val else "0"
        return str(val)

    def set(self, pname: WritableParamNameType, val: int | bool):
        """
        Validate and write value 'val' to parameter 'pname'. Validation happens before any I/O.

        Args:
            pname: Name of the writable parameter.
            val: The value to write: an integer within the parameter's range for "int" parameters,
                 or a boolean for "bool" parameters.

        Raises:
            ErrorNotSupported: If 'pname' is not a supported or not a writable parameter.
            ErrorBadValue: If 'val' is of a wrong type or out of range.
            ErrorIO: If writing failed, including the kernel rejecting the value (e.g., the minimum
                     performance percent being greater than the maximum performance percent).
        """

        val = self.validate_value(pname, val)
        path = self.get_path(pname)
        self._sysfs_io.write(path, self._format(val), what=_uncapitalize(PARAMS[pname]["name"]))

    def get_all(self) -> Generator[tuple[ParamNameType, ParamValueType], None, None]:
        """
        Read all parameters, one by one.

        Yields:
            Tuples of (pname, val), where 'pname' is the parameter name and 'val' is its value.

        Raises:
            Refer to 'get()'.
        """

        for pname in PARAMS:
            yield pname, self.get(pname)

    def get_min_perf_pct(self) -> int:
        """Return the minimum performance percent."""
        return cast(int, self.get("min_perf_pct"))

    def set_min_perf_pct(self, val: int):
        """Set the minimum performance percent (0-100)."""
        self.set("min_perf_pct", val)

    def get_max_perf_pct(self) -> int:
        """Return the maximum performance percent."""
        return cast(int, self.get("max_perf_pct"))

    def set_max_perf_pct(self, val: int):
        """Set the maximum performance percent (0-100)."""
        self.set("max_perf_pct", val)

    def get_no_turbo(self) -> bool:
        """Return 'True' if turbo is disabled, and 'False' otherwise."""
        return cast(bool, self.get("no_turbo"))

    def set_no_turbo(self, val: bool):
        """Disable turbo if 'val' is 'True', enable turbo if 'val' is 'False'."""
        self.set("no_turbo", val)

    def get_turbo_pct(self) -> int:
        """Return the percentage of P-states that are turbo P-states."""
        return cast(int, self.get("turbo_pct"))

    def get_num_pstates(self) -> int:
        """Return the number of P-states supported by the CPU."""
        return cast(int, self.get("num_pstates"))

    def get_status(self) -> StatusType:
        """Return the driver operation mode: "active", "passive", or "off"."""
        return cast("StatusType", self.get("status"))

    def get_values(self) -> PStateValues:
        """
        Read all writable parameters.

        Returns:
            A 'PStateValues' object with the current values.

        Raises:
            Refer to 'get()'.
        """

        return PStateValues(min_perf_pct=self.get_min_perf_pct(),
                            max_perf_pct=self.get_max_perf_pct(),
                            no_turbo=self.get_no_turbo())

    def set_values(self, values: PStateValues):
        """
        Write all writable parameters in the following order: minimum performance percent, maximum
        performance percent, turbo. All values are validated before the first write.

        This is not a transaction. The first failed write stops the sequence and the exception is
        propagated, the parameters written before the failure keep the new values.

        Args:
            values: The values to write.

        Raises:
            Refer to 'set()'.
        """

        pvals = values._asdict()
        for pname, val in pvals.items():
            self.validate_value(cast("WritableParamNameType", pname), val)

        _LOG.debug("Setting 'intel_pstate' parameters: %s", pvals)

        for pname, val in pvals.items():
            try:
                self.set(cast("WritableParamNameType", pname), val)
            except Error:
                _LOG.debug("Stopped setting 'intel_pstate' parameters at '%s'", pname)
                raise
