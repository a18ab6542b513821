#!/usr/bin/env python
#
# Copyright (C) 2022-2025 Intel Corporation
# SPDX-License-Identifier: BSD-3-Clause
#
# -*- coding: utf-8 -*-
# vim: ts=4 sw=4 tw=100 et ai si
#
# Author: Antti Laakso <antti.laakso@linux.intel.com>
#         Artem Bityutskiy <artem.bityutskiy@linux.intel.com>

"""This configuration file provides fixtures for emulating the 'intel_pstate' driver."""

from  __future__ import annotations # Remove when switching to Python 3.10+.

import typing
import pytest
import common

if typing.TYPE_CHECKING:
    from pathlib import Path
    from typing import Generator

@pytest.fixture(name="sysfs_root")
def fixture_sysfs_root(tmp_path: Path) -> Path:
    """
    Create an emulated sysfs tree with the 'intel_pstate' driver directory and return its root.

    Args:
        tmp_path: A temporary directory path (provided by the pytest framework).
    """

    common.build_driver_dir(tmp_path)
    return tmp_path

@pytest.fixture(name="sysfs_io")
def fixture_sysfs_io(sysfs_root: Path) -> Generator[common.RecordingSysfsIO, None, None]:
    """
    Yield a write-recording sysfs access object for the emulated sysfs tree.

    Args:
        sysfs_root: The emulated sysfs root directory.
    """

    with common.RecordingSysfsIO(root=sysfs_root) as sysfs_io:
        yield sysfs_io
