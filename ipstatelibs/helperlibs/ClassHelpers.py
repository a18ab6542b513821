# -*- coding: utf-8 -*-
# vim: ts=4 sw=4 tw=100 et ai si
#
# Copyright (C) 2020-2025 Intel Corporation
# SPDX-License-Identifier: BSD-3-Clause
#
# Author: Artem Bityutskiy <artem.bityutskiy@linux.intel.com>

"""
Miscellaneous common helpers for class objects.
"""

from  __future__ import annotations # Remove when switching to Python 3.10+.

from typing import Any, Callable, Iterable
from ipstatelibs.helperlibs import Logging
from ipstatelibs.helperlibs.Exceptions import Error, ErrorIO, ErrorPermissionDenied, ErrorNotFound

_LOG = Logging.getLogger(f"{Logging.MAIN_LOGGER_NAME}.ipstate.{__name__}")

class SimpleCloseContext:
    """
    Provide a simple context manager implementation for classes. The 'close()' method is called
    when exiting the runtime context.
    """

    def close(self):
        """Uninitialize the class object. Supposed to be implemented by the subclass."""

    def __enter__(self):
        """Enter the run-time context."""
        return self

    def __exit__(self, *_: Any):
        """Exit from the runtime context."""
        self.close()

def get_exc_type(err: BaseException) -> type[ErrorIO]:
    """
    Return the project exception type corresponding to an 'OSError' or other I/O exception.

    Args:
        err: The original exception.

    Returns:
        'ErrorPermissionDenied' for 'PermissionError', 'ErrorNotFound' for 'FileNotFoundError', and
        'ErrorIO' for anything else.
    """

    if isinstance(err, PermissionError):
        return ErrorPermissionDenied
    if isinstance(err, FileNotFoundError):
        return ErrorNotFound
    return ErrorIO

class WrapExceptions:
    """
    Wrap an object (typically a file object), intercept exceptions raised by its methods and
    translate them into the project exceptions.

    Exception Translation:
        - PermissionError -> ErrorPermissionDenied
        - FileNotFoundError -> ErrorNotFound
        - Other exceptions derived from 'Exception' -> ErrorIO
        - Exceptions derived from 'Error' and exceptions not derived from 'Exception' are not
          translated.

    The original exception is available via the 'cause' attribute of the translated exception.
    """

    def __init__(self, obj: Any, get_err_prefix: Callable[[Any, str], str] | None = None):
        """
        Initialize the instance.

        Args:
            obj: The object to intercept and translate exceptions for.
            get_err_prefix: A callable that generates a prefix for exception messages. The arguments
                            are the object and the name of the method where the exception occurred.
        """

        self._obj = obj
        self._get_err_prefix = get_err_prefix

    def _format_exception(self, name: str, err: Exception) -> ErrorIO:
        """
        Format and return a project exception object for an exception raised by method 'name' of
        the wrapped object.
        """

        errmsg = Error(str(err)).indent(2)
        if self._get_err_prefix:
            msg = f"{self._get_err_prefix(self._obj, name)}:\n{errmsg}"
        else:
            msg = f"method '{name}()' failed:\n{errmsg}"

        return get_exc_type(err)(msg, cause=err, errno=getattr(err, "errno", None))

    def _get_wrapper(self, name: str, method: Callable) -> Callable:
        """Return a version of 'method' with exceptions translated."""

        def wrapper(*args: Any, **kwargs: Any) -> Any:
            """Wrap the exceptions."""

            try:
                return method(*args, **kwargs)
            except Error:
                raise
            except Exception as err: # pylint: disable=broad-except
                raise self._format_exception(name, err) from err

        return wrapper

    def __getattr__(self, name: str) -> Any:
        """
        Override attribute access to wrap method calls with exception handling.

        Args:
            name: The name of the attribute to access.

        Returns:
            The attribute value or a wrapped callable method.
        """

        attr = getattr(self._obj, name)

        if name.startswith("_") or not callable(attr):
            return attr

        return self._get_wrapper(name, attr)

    def __enter__(self):
        """Enter the run-time context."""

        self._get_wrapper("__enter__", self._obj.__enter__)()
        return self

    def __exit__(self, *args: Any):
        """Exit from the runtime context."""
        return self._get_wrapper("__exit__", self._obj.__exit__)(*args)

def close(cls_obj: Any,
          close_attrs: Iterable[str] = (),
          unref_attrs: Iterable[str] = ()):
    """
    Release the objects referenced by attributes of 'cls_obj'. Typically called from 'close()'.

    Args:
        cls_obj: The object to release the attributes of.
        close_attrs: Names of attributes referencing objects owned by 'cls_obj'. The objects are
                     closed and the attributes are set to 'None'. An object is not closed if
                     'cls_obj' has the '_close_<name>' attribute set to 'False', where '<name>' is
                     the attribute name without leading underscores.
        unref_attrs: Names of attributes referencing objects not owned by 'cls_obj'. The attributes
                     are set to 'None'.
    """

    for attr in close_attrs:
        obj = getattr(cls_obj, attr, None)
        if obj is None:
            continue

        flag = f"_close_{attr.lstrip('_')}"
        owned = getattr(cls_obj, flag, True)
        if not isinstance(owned, bool):
            _LOG.warning("Bad value of attribute '%s' in '%s': %r", flag, cls_obj, owned)
        elif owned:
            if hasattr(obj, "close"):
                obj.close()
            else:
                _LOG.debug("Object '%s' has no 'close()' method", obj)

        setattr(cls_obj, attr, None)

    for attr in unref_attrs:
        if hasattr(cls_obj, attr):
            setattr(cls_obj, attr, None)
