"""
Converter registry for argloader.

This module maps a record field's type to a converter that turns an untyped
raw argument value into a value of that type, and to the wire type declared
for the field in a schema.

A converter is any callable taking one positional argument and annotating
its return type. The return annotation is the registry key. Converters reject
a raw value by raising :class:`~argloader.exceptions.InvalidValueError`.

Example:
    >>> from argloader.registry import ConverterRegistry
    >>>
    >>> def load_bytes(value: object) -> bytes:
    ...     if not isinstance(value, bytes):
    ...         raise InvalidValueError(f"{value!r} is not bytes")
    ...     return value
    >>>
    >>> registry = ConverterRegistry()
    >>> registry.register(load_bytes, "Bytes")
    >>> registry.lookup_wire_type(bytes)
    'Bytes'
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from .exceptions import DuplicateConverterError, InvalidValueError, RegistrationError

logger = logging.getLogger(__name__)

__all__ = [
    "ConversionResult",
    "ConverterRegistry",
    "GuardedConverter",
    "converter_name",
]

_POSITIONAL = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
)


def converter_name(func: Callable[..., Any]) -> str:
    """
    Return a human-readable identifier for a converter.

    Parameters
    ----------
    func
        Converter callable.

    Returns
    -------
    str
        ``module.qualname`` where available, else the callable's repr.
    """
    qualname = getattr(func, "__qualname__", None)
    if qualname is None:
        return repr(func)
    module = getattr(func, "__module__", None)
    return f"{module}.{qualname}" if module else qualname


@dataclass(frozen=True)
class ConversionResult:
    """Outcome of running a guarded converter.

    Attributes
    ----------
    value : Any
        Converted value (``None`` on failure)
    error : str | None
        Failure description, or ``None`` on success
    """

    value: Any = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        """Whether the conversion succeeded."""
        return self.error is None


class GuardedConverter:
    """
    Wraps a converter so that calling it never raises.

    Rejections (:class:`InvalidValueError`) and faults (any other
    :class:`Exception`) are both returned as a failed :class:`ConversionResult`.
    ``BaseException`` subclasses that are not exceptions, such as
    ``SystemExit`` and ``KeyboardInterrupt``, are not caught and propagate.

    Parameters
    ----------
    func
        The registered converter.
    target_type
        The converter's declared return type.
    """

    def __init__(self, func: Callable[[Any], Any], target_type: Any) -> None:
        self.func = func
        self.target_type = target_type
        self.name = converter_name(func)

    def __call__(self, raw: Any) -> ConversionResult:
        try:
            value = self.func(raw)
        except InvalidValueError as err:
            return ConversionResult(error=str(err))
        except Exception as err:
            logger.debug(f"Loader func {self.name} raised on {raw!r}", exc_info=True)
            return ConversionResult(
                error=f"{self.name} raised {type(err).__name__}: {err}"
            )
        return ConversionResult(value=value)

    def __repr__(self) -> str:
        return f"GuardedConverter({self.name} -> {self.target_type!r})"


def _target_type(func: Callable[..., Any]) -> Any:
    """Validate a converter's signature and return its declared output type."""
    if not callable(func):
        msg = f"{func!r} is not a callable"
        raise RegistrationError(msg)

    name = converter_name(func)
    try:
        signature = inspect.signature(func, eval_str=True)
    except (ValueError, TypeError, NameError) as err:
        msg = f"cannot inspect the signature of loader func {name}: {err}"
        raise RegistrationError(msg) from err

    params = list(signature.parameters.values())
    if len(params) == 1 and params[0].kind not in _POSITIONAL:
        msg = (
            f"loader func should accept 1 positional argument. "
            f"{name} accepts 1 {params[0].kind.description} argument"
        )
        raise RegistrationError(msg)
    if len(params) != 1:
        msg = (
            f"loader func should accept 1 positional argument. "
            f"{name} accepts {len(params)} arguments"
        )
        raise RegistrationError(msg)

    target = signature.return_annotation
    if target is inspect.Signature.empty:
        msg = (
            f"loader func should annotate its return type. "
            f"{name} has no return annotation"
        )
        raise RegistrationError(msg)
    if target is None or target is type(None):
        msg = f"loader func should return a value. {name} is annotated to return None"
        raise RegistrationError(msg)
    try:
        hash(target)
    except TypeError as err:
        msg = f"loader func {name} returns unhashable type annotation {target!r}"
        raise RegistrationError(msg) from err
    return target


class ConverterRegistry:
    """
    Registry of converters and wire types keyed by target type.

    At most one converter may be registered per type. The registry has no
    internal locking: complete all registrations before concurrent lookups.

    Example:
        >>> registry = ConverterRegistry()
        >>> registry.register(load_int, WireType.INT)
        >>> registry.lookup(int)
        GuardedConverter(argloader.defaults.load_int -> <class 'int'>)
    """

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._converters: dict[Any, GuardedConverter] = {}
        self._wire_types: dict[Any, Any] = {}

    def register(self, func: Callable[[Any], Any], wire_type: Any) -> None:
        """
        Register a converter and the wire type for its return type.

        Parameters
        ----------
        func
            Callable taking one positional argument, with a return annotation.
        wire_type
            Tag declared for fields of the converter's return type.

        Raises
        ------
        RegistrationError
            If the callable's signature is not a valid converter signature.
        DuplicateConverterError
            If a converter is already registered for the return type.
        """
        target = _target_type(func)
        if target in self._converters:
            raise DuplicateConverterError(target, converter_name(func))

        guarded = GuardedConverter(func, target)
        self._converters[target] = guarded
        self._wire_types[target] = wire_type
        logger.debug(f"Registered loader func {guarded.name} for {target!r}")

    def lookup(self, target_type: Any) -> GuardedConverter | None:
        """
        Get the converter for a type.

        Parameters
        ----------
        target_type
            Field type to look up.

        Returns
        -------
        GuardedConverter | None
            The wrapped converter, or None if none is registered.
        """
        return self._converters.get(target_type)

    def lookup_wire_type(self, target_type: Any) -> Any | None:
        """
        Get the wire type for a type.

        Parameters
        ----------
        target_type
            Field type to look up.

        Returns
        -------
        Any | None
            The registered wire type, or None if none is registered.
        """
        return self._wire_types.get(target_type)

    def is_registered(self, target_type: Any) -> bool:
        """Check if a converter is registered for a type."""
        return target_type in self._converters

    def types(self) -> list[Any]:
        """List registered types in registration order."""
        return list(self._converters)
