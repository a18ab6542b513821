# -*- coding: utf-8 -*-
# vim: ts=4 sw=4 tw=100 et ai si
#
# Copyright (C) 2020-2025 Intel Corporation
# SPDX-License-Identifier: BSD-3-Clause
#
# Author: Artem Bityutskiy <artem.bityutskiy@linux.intel.com>

"""
Implement the 'ipstate info', 'ipstate config', 'ipstate save', and 'ipstate load' commands.
"""

from __future__ import annotations # Remove when switching to Python 3.10+.

import sys
import typing
import argparse
import contextlib
from typing import NamedTuple, cast
from ipstatelibs import IntelPState, _SysfsIO
from ipstatelibs.IntelPStateVars import PARAMS
from ipstatelibs.helperlibs import Logging, Trivial, YAML
from ipstatelibs.helperlibs.Exceptions import Error, ErrorBadValue, ErrorPermissionDenied
from ipstatelibs.helperlibs.Exceptions import ErrorNotAvailable
from ipstatetool import _IPStatePrinter
from ipstatetool._IPStatePrinter import PrintFormatType

if typing.TYPE_CHECKING:
    from typing import Generator
    from ipstatelibs.IntelPStateVars import ParamNameType, WritableParamNameType

class _CmdlineArgsType(NamedTuple):
    """
    A type for command-line arguments of the 'ipstate' commands.

    Attributes:
        yaml: Whether to output results in YAML format.
        path: The YAML file path for the 'save' and 'load' commands.
        oargs: Dictionary of command line argument names and values matching the order of appearance
               in the command line.
    """

    yaml: bool
    path: str
    oargs: dict[str, str | None]

_LOG = Logging.getLogger(f"{Logging.MAIN_LOGGER_NAME}.ipstate.{__name__}")

# Command-line values accepted for boolean parameters.
_BOOL_VALS = {"on": True, "enable": True, "true": True, "1": True,
              "off": False, "disable": False, "false": False, "0": False}

def _get_cmdline_args(args: argparse.Namespace) -> _CmdlineArgsType:
    """
    Format command-line arguments into a named tuple.

    Args:
        args: Command-line arguments namespace.

    Returns:
        A named tuple containing the parsed command-line arguments.
    """

    return _CmdlineArgsType(yaml=getattr(args, "yaml", False),
                            path=getattr(args, "path", ""),
                            oargs=getattr(args, "oargs", {}))

def parse_value(pname: ParamNameType, val: str) -> int | bool:
    """
    Convert a command-line value of parameter 'pname' into the parameter value type.

    Args:
        pname: Name of the parameter.
        val: The command-line value.

    Returns:
        An integer for "int" parameters and a boolean for "bool" parameters.

    Raises:
        ErrorBadValue: If 'val' can not be converted.
    """

    param = PARAMS[pname]
    name = param["name"][:1].lower() + param["name"][1:]

    if param["type"] == "bool":
        try:
            return _BOOL_VALS[val.lower()]
        except KeyError:
            vals = ", ".join(_BOOL_VALS)
            raise ErrorBadValue(f"Bad {name} value '{val}', use one of: {vals}") from None

    if not Trivial.is_int(val):
        raise ErrorBadValue(f"Bad {name} value '{val}': should be a decimal integer")
    return Trivial.str_to_int(val, what=name)

def _open_pobj(sysfs_io: _SysfsIO.SysfsIO) -> IntelPState.IntelPState:
    """
    Create and return an 'IntelPState' object. Provide a hint in the error message if the driver is
    not available.
    """

    try:
        return IntelPState.IntelPState(sysfs_io=sysfs_io)
    except ErrorNotAvailable as err:
        raise ErrorNotAvailable(f"{err}\nThe 'intel_pstate' driver is not used on this system, "
                                f"nothing to configure") from err

@contextlib.contextmanager
def _root_hint() -> Generator[None, None, None]:
    """Add a hint to 'ErrorPermissionDenied' error messages if not running as root."""

    try:
        yield
    except ErrorPermissionDenied as err:
        if Trivial.is_root():
            raise
        raise ErrorPermissionDenied(f"{err}\nChanging 'intel_pstate' parameters requires superuser "
                                    f"privileges", cause=err.cause) from err

def info_command(args: argparse.Namespace, sysfs_io: _SysfsIO.SysfsIO):
    """
    Implement the 'info' command: print the 'intel_pstate' driver parameters.

    Args:
        args: Parsed command-line arguments.
        sysfs_io: The sysfs access object.
    """

    cmdl = _get_cmdline_args(args)

    fmt: PrintFormatType = "yaml" if cmdl.yaml else "human"

    pobj = IntelPState.probe(sysfs_io=sysfs_io)
    if not pobj:
        _LOG.notice("The 'intel_pstate' driver is not available")
        return

    with contextlib.ExitStack() as stack:
        stack.enter_context(pobj)

        printer = _IPStatePrinter.ParamsPrinter(pobj, fmt=fmt)
        stack.enter_context(printer)

        if cmdl.oargs:
            pnames = cast("list[ParamNameType]", list(cmdl.oargs))
            printer.print_params(pnames, skip_unsupported=False)
        else:
            printer.print_params("all", skip_unsupported=True)

def config_command(args: argparse.Namespace, sysfs_io: _SysfsIO.SysfsIO):
    """
    Implement the 'config' command: set the 'intel_pstate' driver parameters specified with a value
    and print the parameters specified without a value.

    Args:
        args: Parsed command-line arguments.
        sysfs_io: The sysfs access object.
    """

    cmdl = _get_cmdline_args(args)

    if not cmdl.oargs:
        raise Error("Please, provide a configuration option")

    # Parameters to set.
    set_vals: dict[WritableParamNameType, int | bool] = {}
    # Parameters to print.
    print_pnames: list[ParamNameType] = []

    # Convert all values before touching sysfs.
    for optname, optval in cmdl.oargs.items():
        pname = cast("WritableParamNameType", optname)
        if optval is None:
            print_pnames.append(pname)
        else:
            set_vals[pname] = parse_value(pname, optval)

    with contextlib.ExitStack() as stack:
        pobj = _open_pobj(sysfs_io)
        stack.enter_context(pobj)

        printer = _IPStatePrinter.ParamsPrinter(pobj)
        stack.enter_context(printer)

        if print_pnames:
            printer.print_params(print_pnames, skip_unsupported=False)

        for pname, val in set_vals.items():
            pobj.validate_value(pname, val)

        with _root_hint():
            for pname, val in set_vals.items():
                pobj.set(pname, val)

        if set_vals:
            printer.print_params(list(set_vals), skip_unsupported=False, action="set to")

def save_command(args: argparse.Namespace, sysfs_io: _SysfsIO.SysfsIO):
    """
    Implement the 'save' command: save the writable 'intel_pstate' driver parameters to a YAML file.

    Args:
        args: Parsed command-line arguments.
        sysfs_io: The sysfs access object.
    """

    cmdl = _get_cmdline_args(args)

    with _open_pobj(sysfs_io) as pobj:
        values = pobj.get_values()

    if cmdl.path == "-":
        YAML.dump(dict(values._asdict()), sys.stdout)
    else:
        YAML.dump(dict(values._asdict()), cmdl.path)
        _LOG.info("Saved 'intel_pstate' parameters to '%s'", cmdl.path)

def load_command(args: argparse.Namespace, sysfs_io: _SysfsIO.SysfsIO):
    """
    Implement the 'load' command: load the writable 'intel_pstate' driver parameters from a YAML
    file and apply them.

    Args:
        args: Parsed command-line arguments.
        sysfs_io: The sysfs access object.
    """

    cmdl = _get_cmdline_args(args)

    if cmdl.path == "-":
        data = YAML.load(sys.stdin)
    else:
        data = YAML.load(cmdl.path)

    try:
        values = IntelPState.PStateValues.from_dict(data)
    except ErrorBadValue as err:
        raise ErrorBadValue(f"Bad 'intel_pstate' parameters file '{cmdl.path}':\n"
                            f"{err.indent(2)}") from err

    with contextlib.ExitStack() as stack:
        pobj = _open_pobj(sysfs_io)
        stack.enter_context(pobj)

        with _root_hint():
            pobj.set_values(values)

        printer = _IPStatePrinter.ParamsPrinter(pobj)
        stack.enter_context(printer)

        pnames = cast("list[ParamNameType]", list(values._fields))
        printer.print_params(pnames, skip_unsupported=False, action="set to")
