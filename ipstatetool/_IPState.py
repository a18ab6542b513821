# -*- coding: utf-8 -*-
# vim: ts=4 sw=4 tw=100 et ai si
#
# Copyright (C) 2020-2025 Intel Corporation
# SPDX-License-Identifier: BSD-3-Clause
#
# Authors: Artem Bityutskiy <artem.bityutskiy@linux.intel.com>
#          Niklas Neronin <niklas.neronin@intel.com>

"""
ipstate - a tool for reading and configuring the Linux 'intel_pstate' driver parameters.
"""

from __future__ import annotations # Remove when switching to Python 3.10+.

import sys
import typing
import argparse
import argcomplete
from ipstatelibs import _SysfsIO
from ipstatelibs.IntelPStateVars import PARAMS
from ipstatelibs.helperlibs import ArgParse, Logging
from ipstatelibs.helperlibs.Exceptions import Error

if typing.TYPE_CHECKING:
    from typing import Sequence
    from ipstatelibs.IntelPStateVars import ParamTypedDict
    from ipstatelibs.helperlibs.ArgParse import ArgTypedDict, ArgKwargsTypedDict

_VERSION = "1.0.0"
TOOLNAME = "ipstate"

_LOG = Logging.getLogger(f"{Logging.MAIN_LOGGER_NAME}.{TOOLNAME}").configure(prefix=TOOLNAME)

_SYSFS_ROOT_OPTION: ArgTypedDict = {
    "short": None,
    "long":  "--sysfs-root",
    "argcomplete": "DirectoriesCompleter",
    "kwargs": {
        "dest": "sysfs_root",
        "default": "/",
        "metavar": "PATH",
        "help": """This option is for debugging and testing. It specifies the directory to resolve
                   sysfs paths against instead of '/'. The 'intel_pstate' driver files are looked
                   up in 'PATH/sys/devices/system/cpu/intel_pstate'."""
    },
}

def _get_info_subcommand_param_help_text(param: ParamTypedDict) -> str:
    """Format and return the "info" sub-command help text for a parameter described by 'param'."""

    name = param["name"][:1].lower() + param["name"][1:]
    if param["type"] == "bool":
        return f"Get {name} (on or off)."
    return f"Get {name}."

def _add_info_subcommand_options(subpars: argparse.ArgumentParser):
    """Add options for all the 'intel_pstate' parameters to the "info" sub-command."""

    for pname, param in PARAMS.items():
        kwargs: ArgKwargsTypedDict = {}
        kwargs["default"] = argparse.SUPPRESS
        kwargs["nargs"] = 0
        kwargs["help"] = _get_info_subcommand_param_help_text(param)
        kwargs["action"] = ArgParse.OrderedArg

        option = f"--{pname.replace('_', '-')}"
        subpars.add_argument(option, **kwargs)

def _get_config_subcommand_param_help_text(param: ParamTypedDict) -> str:
    """Format and return the "config" sub-command help text for a parameter described by 'param'."""

    name = param["name"][:1].lower() + param["name"][1:]
    if param["type"] == "bool":
        return f"Set {name} (on or off)."
    return f"Set {name} (from {param['min']} to {param['max']})."

def _add_config_subcommand_options(subpars: argparse.ArgumentParser):
    """Add options for the writable 'intel_pstate' parameters to the "config" sub-command."""

    for pname, param in PARAMS.items():
        if not param["writable"]:
            continue

        kwargs: ArgKwargsTypedDict = {}
        kwargs["default"] = argparse.SUPPRESS
        kwargs["nargs"] = "?"
        kwargs["help"] = _get_config_subcommand_param_help_text(param)
        kwargs["action"] = ArgParse.OrderedArg

        if param["type"] == "bool":
            kwargs["metavar"] = "on/off"
        else:
            kwargs["metavar"] = "PCT"

        option = f"--{pname.replace('_', '-')}"
        subpars.add_argument(option, **kwargs)

def build_arguments_parser() -> ArgParse.ArgsParser:
    """Build and return the the command-line arguments parser object."""

    text = f"{TOOLNAME} - read and configure the Linux 'intel_pstate' driver parameters."
    parser = ArgParse.ArgsParser(description=text, prog=TOOLNAME, ver=_VERSION)

    ArgParse.add_options(parser, (_SYSFS_ROOT_OPTION,))

    subparsers = parser.add_subparsers(title="commands", dest="a command")
    subparsers.required = True

    #
    # Create parser for the 'info' command.
    #
    text = "Get 'intel_pstate' driver parameters."
    descr = """Get 'intel_pstate' driver parameters. By default, print all the parameters. If the
               driver is not used on the system, print a notice and exit successfully."""
    subpars = subparsers.add_parser("info", help=text, description=descr)
    subpars.set_defaults(func=_info_command)

    text = """Print information in YAML format."""
    subpars.add_argument("--yaml", action="store_true", help=text)

    _add_info_subcommand_options(subpars)

    #
    # Create parser for the 'config' command.
    #
    text = "Configure 'intel_pstate' driver parameters."
    descr = """Configure 'intel_pstate' driver parameters. All options can be used without a value,
               in which case the currently configured value will be printed."""
    subpars = subparsers.add_parser("config", help=text, description=descr)
    subpars.set_defaults(func=_config_command)

    _add_config_subcommand_options(subpars)

    #
    # Create parser for the 'save' command.
    #
    text = "Save 'intel_pstate' driver parameters to a file."
    descr = """Save the writable 'intel_pstate' driver parameters to a YAML file, which can later be
               restored with the 'load' command."""
    subpars = subparsers.add_parser("save", help=text, description=descr)
    subpars.set_defaults(func=_save_command)

    text = """Path to the YAML file to save the parameters to. Use '-' to print to the standard
              output."""
    arg = subpars.add_argument("path", metavar="PATH", help=text)
    setattr(arg, "completer", argcomplete.completers.FilesCompleter())

    #
    # Create parser for the 'load' command.
    #
    text = "Load 'intel_pstate' driver parameters from a file."
    descr = """Load 'intel_pstate' driver parameters from a YAML file created by the 'save' command
               and apply them. Parameters missing in the file are set to their default values."""
    subpars = subparsers.add_parser("load", help=text, description=descr)
    subpars.set_defaults(func=_load_command)

    text = """Path to the YAML file to load the parameters from. Use '-' to read from the standard
              input."""
    arg = subpars.add_argument("path", metavar="PATH", help=text)
    setattr(arg, "completer", argcomplete.completers.FilesCompleter())

    argcomplete.autocomplete(parser)

    return parser

def parse_arguments(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Args:
        argv: The command-line arguments to parse, 'sys.argv[1:]' by default.

    Returns:
        The parsed arguments namespace.
    """

    parser = build_arguments_parser()
    return parser.parse_args(argv)

def _info_command(args: argparse.Namespace, sysfs_io: _SysfsIO.SysfsIO):
    """Implement the 'info' command."""

    from ipstatetool import _IPStateCommands

    _IPStateCommands.info_command(args, sysfs_io)

def _config_command(args: argparse.Namespace, sysfs_io: _SysfsIO.SysfsIO):
    """Implement the 'config' command."""

    from ipstatetool import _IPStateCommands

    _IPStateCommands.config_command(args, sysfs_io)

def _save_command(args: argparse.Namespace, sysfs_io: _SysfsIO.SysfsIO):
    """Implement the 'save' command."""

    from ipstatetool import _IPStateCommands

    _IPStateCommands.save_command(args, sysfs_io)

def _load_command(args: argparse.Namespace, sysfs_io: _SysfsIO.SysfsIO):
    """Implement the 'load' command."""

    from ipstatetool import _IPStateCommands

    _IPStateCommands.load_command(args, sysfs_io)

def main(argv: Sequence[str] | None = None) -> int:
    """
    Script entry point.

    Args:
        argv: The command-line arguments, 'sys.argv[1:]' by default.

    Returns:
        The program exit code.
    """

    try:
        args = parse_arguments(argv)

        cmdl = ArgParse.get_common_args(args)
        colored = True if cmdl.force_color else None
        _LOG.configure(prefix=TOOLNAME, level=cmdl.loglevel, colored=colored)

        with _SysfsIO.SysfsIO(root=args.sysfs_root) as sysfs_io:
            args.func(args, sysfs_io)
    except KeyboardInterrupt:
        _LOG.info("\nInterrupted, exiting")
        return -1
    except Error as err:
        _LOG.error_out(err)

    return 0

if __name__ == "__main__":
    sys.exit(main())
