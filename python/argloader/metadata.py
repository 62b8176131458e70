"""
Argument metadata for record fields.

Records are dataclasses or attrs classes. A field takes part in schema
derivation and population when its metadata carries an argument name:

- ``"arg"``: the external argument name (required for participation)
- ``"required"``: boolean flag, or its textual form (default: not required)
- ``"desc"``: human-readable description (default: empty)

Example:
    >>> from dataclasses import dataclass
    >>> from argloader.metadata import argument, record_fields
    >>>
    >>> @dataclass
    >>> class HelloArgs:
    ...     name: str = argument("name", required=True, description="Your name")
    ...     greeting: str = argument("greeting", default="")
    >>>
    >>> [f.metadata.arg for f in record_fields(HelloArgs)]
    ['name', 'greeting']
"""

from __future__ import annotations

import dataclasses
import functools
import typing
from dataclasses import MISSING, dataclass
from typing import TYPE_CHECKING, Any

import attrs

from .exceptions import MetadataError, NotARecordError

if TYPE_CHECKING:
    from collections.abc import Mapping

__all__ = [
    "ARG_KEY",
    "DESC_KEY",
    "REQUIRED_KEY",
    "ArgumentMetadata",
    "RecordField",
    "arg_metadata",
    "argument",
    "is_record",
    "is_record_instance",
    "parse_bool",
    "record_fields",
]

ARG_KEY = "arg"
REQUIRED_KEY = "required"
DESC_KEY = "desc"

_TRUE_LITERALS = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_LITERALS = frozenset({"0", "f", "F", "FALSE", "false", "False"})


def parse_bool(value: bool | str) -> bool:
    """
    Parse a boolean flag or its textual form.

    Parameters
    ----------
    value
        A ``bool`` or one of ``1 t T TRUE true True 0 f F FALSE false False``.

    Returns
    -------
    bool
        The parsed flag.

    Raises
    ------
    ValueError
        If the value is neither a bool nor a recognised literal.

    Examples
    --------
    >>> parse_bool("true")
    True
    >>> parse_bool("F")
    False
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        if value in _TRUE_LITERALS:
            return True
        if value in _FALSE_LITERALS:
            return False
    msg = f"{value!r} is not a valid boolean literal"
    raise ValueError(msg)


@dataclass(frozen=True)
class ArgumentMetadata:
    """Argument metadata attached to a single record field.

    Attributes
    ----------
    arg : str
        External argument name
    required : bool | str
        Required flag, as declared (textual forms are parsed on use)
    description : str
        Human-readable description
    """

    arg: str
    required: bool | str = False
    description: str = ""

    def is_required(self) -> bool:
        """Parse the required flag.

        Raises
        ------
        MetadataError
            If the flag is not a valid boolean literal.
        """
        try:
            return parse_bool(self.required)
        except ValueError as err:
            msg = f"{self.required!r} is not a valid 'required' tag value"
            raise MetadataError(msg) from err

    @classmethod
    def from_field_metadata(
        cls, metadata: Mapping[str, Any]
    ) -> ArgumentMetadata | None:
        """Build from a field's metadata mapping, or None without an argument name."""
        if ARG_KEY not in metadata:
            return None
        arg = metadata[ARG_KEY]
        if not isinstance(arg, str):
            msg = f"argument name must be a string, got {arg!r}"
            raise MetadataError(msg)
        return cls(
            arg=arg,
            required=metadata.get(REQUIRED_KEY, False),
            description=metadata.get(DESC_KEY, "") or "",
        )


def arg_metadata(
    name: str, required: bool | str = False, description: str = ""
) -> dict[str, Any]:
    """Build a field metadata mapping for an argument.

    Usable with both ``dataclasses.field`` and ``attrs.field``.

    Examples
    --------
    >>> import attrs
    >>> @attrs.define
    ... class HelloArgs:
    ...     name: str = attrs.field(default="", metadata=arg_metadata("name"))
    """
    return {ARG_KEY: name, REQUIRED_KEY: required, DESC_KEY: description}


def argument(
    name: str,
    *,
    required: bool | str = False,
    description: str = "",
    default: Any = MISSING,
    default_factory: Any = MISSING,
) -> Any:
    """Create a dataclass field bound to an external argument.

    Parameters
    ----------
    name : str
        External argument name
    required : bool | str
        Whether the argument must be supplied when loading
    description : str
        Human-readable description exported in the schema
    default : Any
        Default value for the field. If not provided, the field must be
        passed to the record's constructor.
    default_factory : Any
        Factory for the default value

    Returns
    -------
    Any
        A dataclass field with argument metadata attached
    """
    metadata = arg_metadata(name, required=required, description=description)
    if default is not MISSING:
        return dataclasses.field(default=default, metadata=metadata)
    if default_factory is not MISSING:
        return dataclasses.field(default_factory=default_factory, metadata=metadata)
    return dataclasses.field(metadata=metadata)


@dataclass(frozen=True)
class RecordField:
    """A record field with its resolved type and optional argument metadata."""

    name: str
    type: Any
    metadata: ArgumentMetadata | None


def _record_type(obj: Any) -> type | None:
    cls = obj if isinstance(obj, type) else type(obj)
    if dataclasses.is_dataclass(cls) or attrs.has(cls):
        return cls
    return None


def is_record(obj: Any) -> bool:
    """Check whether ``obj`` is a record type or a record instance."""
    return _record_type(obj) is not None


def is_record_instance(obj: Any) -> bool:
    """Check whether ``obj`` is an instance of a record type."""
    return not isinstance(obj, type) and is_record(obj)


@functools.cache
def _fields_for_type(cls: type) -> tuple[RecordField, ...]:
    try:
        if attrs.has(cls):
            attrs.resolve_types(cls)
            return tuple(
                RecordField(
                    name=a.name,
                    type=a.type,
                    metadata=ArgumentMetadata.from_field_metadata(a.metadata),
                )
                for a in attrs.fields(cls)
            )
        hints = typing.get_type_hints(cls)
    except NameError as err:
        msg = f"could not resolve field types of {cls.__qualname__}: {err}"
        raise MetadataError(msg) from err

    return tuple(
        RecordField(
            name=f.name,
            type=hints.get(f.name, f.type),
            metadata=ArgumentMetadata.from_field_metadata(f.metadata),
        )
        for f in dataclasses.fields(cls)
    )


def record_fields(record: Any) -> tuple[RecordField, ...]:
    """List the fields of a record type or instance in declaration order.

    Parameters
    ----------
    record
        A dataclass or attrs class, or an instance of one

    Returns
    -------
    tuple[RecordField, ...]
        All fields, including those without argument metadata

    Raises
    ------
    NotARecordError
        If ``record`` is not a dataclass or attrs record
    MetadataError
        If field annotations cannot be resolved or metadata is malformed
    """
    cls = _record_type(record)
    if cls is None:
        msg = f"{record!r} is not a record"
        raise NotARecordError(msg)
    return _fields_for_type(cls)
