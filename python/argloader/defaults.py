"""
Built-in converters and the default loader.

The built-in converters accept only the exact Python type they produce:
``bool`` is not accepted as an ``int`` and ``int`` is not accepted as a
``float``.

The default loader is created by the first call to :func:`default_loader`.
Call it once during single-threaded startup, before registering extra
converters with :func:`register`.
"""

from __future__ import annotations

import enum
import logging
from typing import TYPE_CHECKING, Any

from .exceptions import InvalidValueError, RegistrationError
from .loader import ArgLoader

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from .schema import ArgsSchema

logger = logging.getLogger(__name__)

__all__ = [
    "DEFAULT_CONVERTERS",
    "WireType",
    "args_config",
    "default_loader",
    "empty_loader",
    "load_args",
    "load_bool",
    "load_float",
    "load_int",
    "load_str",
    "new_loader",
    "register",
    "safe_args_config",
]


class WireType(str, enum.Enum):
    """Wire types of the built-in scalars, named as in GraphQL."""

    BOOLEAN = "Boolean"
    STRING = "String"
    INT = "Int"
    FLOAT = "Float"


def load_bool(value: Any) -> bool:
    """Accept a ``bool``."""
    if not isinstance(value, bool):
        msg = f"{value!r} is not a bool"
        raise InvalidValueError(msg)
    return value


def load_str(value: Any) -> str:
    """Accept a ``str``."""
    if not isinstance(value, str):
        msg = f"{value!r} is not a string"
        raise InvalidValueError(msg)
    return value


def load_int(value: Any) -> int:
    """Accept an ``int``, excluding ``bool``."""
    if type(value) is not int:
        msg = f"{value!r} is not an int"
        raise InvalidValueError(msg)
    return value


def load_float(value: Any) -> float:
    """Accept a ``float``; integers are not coerced."""
    if type(value) is not float:
        msg = f"{value!r} is not a float"
        raise InvalidValueError(msg)
    return value


DEFAULT_CONVERTERS: tuple[tuple[Callable[[Any], Any], WireType], ...] = (
    (load_bool, WireType.BOOLEAN),
    (load_str, WireType.STRING),
    (load_int, WireType.INT),
    (load_float, WireType.FLOAT),
)


def empty_loader() -> ArgLoader:
    """Create a loader without any converters registered."""
    return ArgLoader()


def new_loader() -> ArgLoader:
    """
    Create a loader with the built-in converters registered.

    Raises
    ------
    RegistrationError
        If a built-in converter has an invalid signature.
    """
    loader = empty_loader()
    for func, wire_type in DEFAULT_CONVERTERS:
        loader.register(func, wire_type)
    return loader


_default_loader: ArgLoader | None = None


def default_loader() -> ArgLoader:
    """
    Get the process-wide loader, creating it on first call.

    A failure to register the built-in converters is a defect in this
    package and exits the process.
    """
    global _default_loader  # noqa: PLW0603
    if _default_loader is None:
        try:
            _default_loader = new_loader()
        except RegistrationError as err:
            msg = f"could not init default loader: {err}"
            logger.critical(msg)
            raise SystemExit(msg) from err
    return _default_loader


def args_config(record: Any) -> ArgsSchema:
    """Derive a record's argument schema with the default loader, failing fast."""
    return default_loader().args_config(record)


def safe_args_config(record: Any) -> ArgsSchema:
    """Derive a record's argument schema with the default loader."""
    return default_loader().safe_args_config(record)


def load_args(args: Mapping[str, Any], record: Any) -> None:
    """Populate a record instance with the default loader."""
    default_loader().load_args(args, record)


def register(func: Callable[[Any], Any], wire_type: Any) -> None:
    """Register a converter on the default loader."""
    default_loader().register(func, wire_type)
