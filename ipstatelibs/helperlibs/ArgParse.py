# -*- coding: utf-8 -*-
# vim: ts=4 sw=4 tw=100 et ai si
#
# Copyright (C) 2020-2025 Intel Corporation
# SPDX-License-Identifier: BSD-3-Clause
#
# Author: Artem Bityutskiy <artem.bityutskiy@linux.intel.com>

"""
Command-line parsing helpers: an 'argparse.ArgumentParser' subclass with the options common to all
project tools, table-driven option definitions, and an action remembering the options order.
"""

from __future__ import annotations # Remove when switching to Python 3.10+.

import typing
import argparse
from typing import NamedTuple
import argcomplete
from ipstatelibs.helperlibs import Logging
from ipstatelibs.helperlibs.Exceptions import Error

if typing.TYPE_CHECKING:
    from typing import TypedDict, Iterable, Any, Sequence

    class ArgKwargsTypedDict(TypedDict, total=False):
        """
        Keyword arguments for 'add_argument()' used in option definitions.

        Attributes:
            dest: Name of the namespace attribute to store the option value in.
            default: The option value when the option is not used.
            nargs: How many command-line values the option consumes.
            metavar: The option value name in the help text.
            action: The action class or name.
            help: The option help text.
        """

        dest: str
        default: Any
        nargs: str | int
        metavar: str
        action: str | type[argparse.Action]
        help: str

    class ArgTypedDict(TypedDict, total=False):
        """
        An option definition.

        Attributes:
            short: The short option name, or 'None' if there is no short option.
            long: The long option name.
            argcomplete: Name of the 'argcomplete.completers' class for completing the option value,
                         or 'None'.
            kwargs: The 'add_argument()' keyword arguments.
        """

        short: str | None
        long: str
        argcomplete: str | None
        kwargs: ArgKwargsTypedDict

class CommonArgs(NamedTuple):
    """
    The options every project tool supports.

    Attributes:
        quiet: The '-q' option was used.
        debug: The '-d' option was used.
        force_color: The '--force-color' option was used.
    """

    quiet: bool
    debug: bool
    force_color: bool

    @property
    def loglevel(self) -> int:
        """The log level matching the options."""

        if self.debug:
            return Logging.DEBUG
        if self.quiet:
            return Logging.WARNING
        return Logging.INFO

def get_common_args(args: argparse.Namespace) -> CommonArgs:
    """
    Validate and return the common options from the parsed arguments 'args'.

    Raises:
        Error: If mutually exclusive options were used together.
    """

    cmdl = CommonArgs(quiet=getattr(args, "quiet", False),
                      debug=getattr(args, "debug", False),
                      force_color=getattr(args, "force_color", False))

    if cmdl.quiet and cmdl.debug:
        raise Error("The '-q' and '-d' options cannot be used together")
    return cmdl

def add_options(parser: argparse.ArgumentParser, options: Iterable[ArgTypedDict]):
    """
    Add options to a parser.

    Args:
        parser: The parser to add the options to.
        options: The option definitions.
    """

    for opt in options:
        names = [opt["long"]]
        if opt["short"]:
            names.insert(0, opt["short"])

        arg = parser.add_argument(*names, **opt["kwargs"])

        completer = opt["argcomplete"]
        if completer:
            setattr(arg, "completer", getattr(argcomplete.completers, completer)())

class OrderedArg(argparse.Action):
    """
    An action that, in addition to setting the 'dest' attribute, records the option in the
    'oargs' dictionary attribute of the namespace. The dictionary keeps the order the options were
    given on the command line in.
    """

    def __call__(self,
                 parser: argparse.ArgumentParser,
                 namespace: argparse.Namespace,
                 values: str | Sequence[Any] | None,
                 option_string: str | None = None):
        """Record option value 'values' in 'namespace'."""

        if not hasattr(namespace, "oargs"):
            setattr(namespace, "oargs", {})

        getattr(namespace, "oargs")[self.dest] = values
        setattr(namespace, self.dest, values)

class ArgsParser(argparse.ArgumentParser):
    """
    The project tools command-line parser. Differences from 'argparse.ArgumentParser':
      - The '-h', '-q', '-d' and '--force-color' options are always added.
      - Multi-line descriptions are joined into a single line.
      - Errors raise 'Error' instead of exiting the program.

    Sub-command parsers are instances of this class too.
    """

    def __init__(self, *args: Any, **kwargs: Any):
        """
        Initialize a class instance. Accept the 'argparse.ArgumentParser' arguments plus the 'ver'
        keyword argument, which adds the '--version' option.
        """

        version = kwargs.pop("ver", None)

        if kwargs.get("description"):
            kwargs["description"] = " ".join(kwargs["description"].split())

        kwargs["add_help"] = False
        super().__init__(*args, **kwargs)

        self.add_argument("-h", "--help", action="help", help="Show this help message and exit.")

        text = "Be quiet, print only warnings and errors."
        self.add_argument("-q", "--quiet", action="store_true", help=text)

        text = "Print debugging information."
        self.add_argument("-d", "--debug", action="store_true", help=text)

        text = "Colorize the output even if it does not go to a terminal."
        self.add_argument("--force-color", action="store_true", help=text)

        if version:
            self.add_argument("--version", action="version", version=version,
                              help="Print the version number and exit.")

    def parse_args(self, *args: Any, **kwargs: Any) -> argparse.Namespace: # type: ignore[override]
        """Parse the command-line arguments and validate the common options."""

        namespace = super().parse_args(*args, **kwargs)
        get_common_args(namespace)
        return namespace

    def error(self, message: str): # type: ignore[override]
        """Raise 'Error' with message 'message' and a hint about the '-h' option."""

        raise Error(f"{message}\nUse '{self.prog} -h' for help.")
