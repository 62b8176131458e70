"""
Custom exceptions for argloader.

This module defines the exception hierarchy for argument loading errors:
- ArgLoaderError: Base exception for all argloader errors
- RegistrationError: Converter signature problems, duplicate converters
- NotARecordError: Value is not a (mutable) record
- MetadataError: Unparseable field metadata
- PopulateError: Missing arguments, missing converters, failed conversions
- InvalidValueError: Raised by converters to reject a raw value
"""

from __future__ import annotations

from typing import Any

__all__ = [
    "ArgLoaderError",
    "ConversionError",
    "ConverterNotFoundError",
    "DuplicateConverterError",
    "InvalidValueError",
    "MetadataError",
    "MissingArgumentError",
    "NotARecordError",
    "PopulateError",
    "RegistrationError",
]


class ArgLoaderError(Exception):
    """Base exception for all argloader errors."""

    pass


class RegistrationError(ArgLoaderError):
    """
    Raised when a converter cannot be registered.

    This includes non-callables, wrong parameter counts and missing return
    annotations. These are programming mistakes and should abort startup.
    """

    pass


class DuplicateConverterError(RegistrationError):
    """
    Raised when a converter is already registered for a type.

    Parameters
    ----------
    target_type
        The type that already has a converter.
    name
        Name of the converter that was rejected.
    """

    def __init__(self, target_type: Any, name: str) -> None:
        message = (
            f"a loader func has already been registered for the {target_type!r} "
            f"type. cannot also register {name}"
        )
        super().__init__(message)
        self.target_type = target_type
        self.name = name


class NotARecordError(ArgLoaderError, TypeError):
    """Raised when a value is not a dataclass or attrs record of the expected kind."""

    pass


class MetadataError(ArgLoaderError):
    """Raised when a field carries metadata that cannot be interpreted."""

    pass


class PopulateError(ArgLoaderError):
    """Base exception for failures while populating a record."""

    pass


class MissingArgumentError(PopulateError):
    """
    Raised when a required argument is absent from the raw argument map.

    Parameters
    ----------
    arg_name
        The argument name that was not supplied.
    """

    def __init__(self, arg_name: str) -> None:
        super().__init__(f"{arg_name} is required")
        self.arg_name = arg_name


class ConverterNotFoundError(PopulateError):
    """
    Raised when no converter is registered for a field's type.

    Parameters
    ----------
    field_type
        The field type that has no converter.
    available
        Types that do have converters.
    """

    def __init__(self, field_type: Any, available: list[Any]) -> None:
        if not available:
            message = (
                f"no loader function found for type {field_type!r}. "
                "No loader functions are registered."
            )
        else:
            available_str = ", ".join(repr(t) for t in available)
            message = (
                f"no loader function found for type {field_type!r}. "
                f"Registered types: {available_str}"
            )
        super().__init__(message)
        self.field_type = field_type
        self.available = available


class ConversionError(PopulateError):
    """
    Raised when a converter rejects the raw value for a field.

    Parameters
    ----------
    field_name
        Name of the record field being populated.
    cause
        Description of the underlying failure.
    """

    def __init__(self, field_name: str, cause: str) -> None:
        super().__init__(f"cannot populate {field_name}: {cause}")
        self.field_name = field_name
        self.cause = cause


class InvalidValueError(ArgLoaderError, ValueError):
    """
    Raised by converters when a raw value has the wrong type or content.

    Any other exception escaping a converter is treated as a fault in the
    converter itself.
    """

    pass
