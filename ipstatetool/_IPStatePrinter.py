# -*- coding: utf-8 -*-
# vim: ts=4 sw=4 tw=100 et ai si
#
# Copyright (C) 2020-2025 Intel Corporation
# SPDX-License-Identifier: BSD-3-Clause
#
# Authors: Artem Bityutskiy <artem.bityutskiy@linux.intel.com>
#          Antti Laakso <antti.laakso@intel.com>
#          Niklas Neronin <niklas.neronin@intel.com>

"""
Provide API for printing 'intel_pstate' driver parameters.
"""

from __future__ import annotations # Remove when switching to Python 3.10+.

import sys
import typing
from typing import Literal, IO
from ipstatelibs import IntelPState
from ipstatelibs.IntelPStateVars import PARAMS
from ipstatelibs.helperlibs import Logging, ClassHelpers, YAML
from ipstatelibs.helperlibs.Exceptions import Error, ErrorIO, ErrorBadFormat

if typing.TYPE_CHECKING:
    from typing import Iterable
    from ipstatelibs.IntelPStateVars import ParamNameType, ParamValueType

PrintFormatType = Literal["human", "yaml"]

_LOG = Logging.getLogger(f"{Logging.MAIN_LOGGER_NAME}.ipstate.{__name__}")

class ParamsPrinter(ClassHelpers.SimpleCloseContext):
    """Print 'intel_pstate' driver parameters in the "human" or YAML format."""

    def __init__(self,
                 pobj: IntelPState.IntelPState,
                 fmt: PrintFormatType = "human",
                 fobj: IO[str] | None = None):
        """
        Initialize a class instance.

        Args:
            pobj: The 'IntelPState' object to read the parameters with.
            fmt: The output format.
            fobj: The file object to print to. Print using the logger in case of the "human" format
                  and to the standard output in case of the YAML format by default.
        """

        if fmt not in ("human", "yaml"):
            raise Error(f"BUG: Unsupported format '{fmt}'")

        self._pobj = pobj
        self._fmt = fmt
        self._fobj = fobj

    def close(self):
        """Uninitialize the class object."""
        ClassHelpers.close(self, unref_attrs=("_pobj", "_fobj"))

    def _print(self, msg: str):
        """Print message 'msg'."""

        if self._fobj:
            self._fobj.write(msg + "\n")
        else:
            _LOG.info(msg)

    @staticmethod
    def format_value(pname: ParamNameType, val: ParamValueType | None) -> str:
        """
        Format value 'val' of parameter 'pname' into the "human" format.

        Args:
            pname: Name of the parameter.
            val: The parameter value, 'None' means the parameter is not supported.

        Returns:
            The formatted value.
        """

        if val is None:
            return "not supported"

        if isinstance(val, bool):
            return "on" if val else "off"

        return f"{val}{PARAMS[pname].get('unit', '')}"

    def _get_val(self, pname: ParamNameType, skip_unsupported: bool) -> ParamValueType | None:
        """
        Read the value of parameter 'pname'. Return 'None' if the parameter file does not exist and
        'skip_unsupported' is 'True'.
        """

        try:
            return self._pobj.get(pname)
        except ErrorIO as err:
            if not skip_unsupported:
                raise
            _LOG.debug("%s", err)
        except ErrorBadFormat as err:
            if not skip_unsupported:
                raise
            _LOG.warning("%s", err)

        return None

    def print_params(self,
                     pnames: Iterable[ParamNameType] | Literal["all"] = "all",
                     skip_unsupported: bool = True,
                     action: str | None = None) -> int:
        """
        Read and print parameters.

        Args:
            pnames: Names of the parameters to print, all parameters by default.
            skip_unsupported: If 'True', print "not supported" for parameters that could not be read
                              instead of raising an exception. A malformed value is reported with a
                              warning.
            action: An optional action word to print before the value in the "human" format (e.g.,
                    "set to").

        Returns:
            The number of printed parameters.
        """

        if pnames == "all":
            pnames = list(PARAMS)

        info: dict[str, ParamValueType | None] = {}
        for pname in pnames:
            info[pname] = self._get_val(pname, skip_unsupported)

        if self._fmt == "yaml":
            fobj = self._fobj if self._fobj else sys.stdout
            YAML.dump(info, fobj)
            return len(info)

        for pname, val in info.items():
            msg = f"{PARAMS[pname]['name']}: "
            if action is not None and val is not None:
                msg += f"{action} "
            msg += self.format_value(pname, val)
            self._print(msg)

        return len(info)
