#!/usr/bin/env python3
#
# -*- coding: utf-8 -*-
# vim: ts=4 sw=4 tw=100 et ai si
#
# Copyright (C) 2025 Intel Corporation
# SPDX-License-Identifier: BSD-3-Clause
#
# Author: Artem Bityutskiy <artem.bityutskiy@linux.intel.com>

"""Test module for the 'Logging' and 'ArgParse' helper modules."""

from  __future__ import annotations # Remove when switching to Python 3.10+.

import io
import pytest
from ipstatelibs.helperlibs import ArgParse, Logging
from ipstatelibs.helperlibs.Exceptions import Error

def _get_logger(level: int) -> tuple[Logging.Logger, io.StringIO, io.StringIO]:
    """Return a configured test logger along with its info and error streams."""

    info_stream = io.StringIO()
    error_stream = io.StringIO()
    log = Logging.getLogger(f"{Logging.MAIN_LOGGER_NAME}.ipstate.test_helpers")
    log.configure(prefix="tst", level=level, info_stream=info_stream, error_stream=error_stream)
    return log, info_stream, error_stream

def test_logging_streams():
    """Test that messages go to the right streams with the right prefixes."""

    log, info_stream, error_stream = _get_logger(Logging.INFO)
    assert not log.colored

    log.info("plain %d", 1)
    log.notice("heads up")
    log.warning("careful")
    log.debug("hidden")

    assert info_stream.getvalue() == "plain 1\n"
    assert error_stream.getvalue() == "tst: notice: heads up\ntst: warning: careful\n"

def test_logging_levels():
    """Test the 'quiet' and 'debug' log levels."""

    log, info_stream, error_stream = _get_logger(Logging.WARNING)
    log.info("not printed")
    log.warning("printed")
    assert info_stream.getvalue() == ""
    assert error_stream.getvalue() == "tst: warning: printed\n"

    log, _, error_stream = _get_logger(Logging.DEBUG)
    log.debug("debug message")
    assert error_stream.getvalue().rstrip().endswith("]: debug message")

def test_error_out():
    """Test that 'error_out()' prints the message and exits with status 1."""

    log, _, error_stream = _get_logger(Logging.INFO)

    with pytest.raises(SystemExit) as excinfo:
        log.error_out("bad thing '%s'", "x")

    assert excinfo.value.code == 1
    assert error_stream.getvalue() == "tst: error: bad thing 'x'\n"

def test_args_parser():
    """Test the common options and the error handling of 'ArgsParser'."""

    parser = ArgParse.ArgsParser(prog="tst", description="""Multi-line
                                                             description.""")
    assert parser.description == "Multi-line description."

    cmdl = ArgParse.get_common_args(parser.parse_args(["-q"]))
    assert cmdl.quiet and not cmdl.debug
    assert cmdl.loglevel == Logging.WARNING

    cmdl = ArgParse.get_common_args(parser.parse_args([]))
    assert cmdl.loglevel == Logging.INFO

    with pytest.raises(Error):
        parser.parse_args(["-q", "-d"])

    with pytest.raises(Error, match="tst -h"):
        parser.parse_args(["--bogus"])

def test_ordered_arg():
    """Test that 'OrderedArg' keeps the options order."""

    parser = ArgParse.ArgsParser(prog="tst")
    for option in ("--foo", "--bar"):
        parser.add_argument(option, nargs="?", action=ArgParse.OrderedArg)

    args = parser.parse_args(["--bar", "1", "--foo"])
    assert list(args.oargs.items()) == [("bar", "1"), ("foo", None)]
