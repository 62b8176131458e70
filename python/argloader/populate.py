"""Populate record fields from a raw argument map."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from .exceptions import (
    ConversionError,
    ConverterNotFoundError,
    MissingArgumentError,
    NotARecordError,
)
from .metadata import is_record_instance, record_fields

if TYPE_CHECKING:
    from collections.abc import Mapping

    from .registry import ConverterRegistry

logger = logging.getLogger(__name__)

__all__ = ["populate"]


def populate(
    registry: ConverterRegistry, args: Mapping[str, Any], record: Any
) -> None:
    """
    Convert raw arguments and write them into a record's fields.

    Fields are processed in declaration order and the first failure aborts
    the call. Fields written before the failure keep their new values, so a
    record should be discarded when this raises.

    A key that is present with a ``None`` value counts as supplied and is
    passed to the converter.

    Parameters
    ----------
    registry
        Registry providing converters for field types.
    args
        Mapping from argument name to raw value. Not modified.
    record
        Record instance to populate.

    Raises
    ------
    NotARecordError
        If ``record`` is not a record instance, or is frozen.
    MetadataError
        If a field's required flag cannot be parsed.
    MissingArgumentError
        If a required argument is absent from ``args``.
    ConverterNotFoundError
        If no converter is registered for a field's type.
    ConversionError
        If a converter rejects a value or fails, or the record rejects the
        converted value when it is written (e.g. an attrs validator).
    """
    if not is_record_instance(record):
        msg = f"{record!r} is not a record instance"
        raise NotARecordError(msg)

    for field in record_fields(record):
        meta = field.metadata
        if meta is None:
            continue

        if meta.arg not in args:
            if meta.is_required():
                raise MissingArgumentError(meta.arg)
            logger.debug(f"Optional argument '{meta.arg}' not supplied, skipping")
            continue

        converter = registry.lookup(field.type)
        if converter is None:
            raise ConverterNotFoundError(field.type, registry.types())

        result = converter(args[meta.arg])
        if not result.ok:
            raise ConversionError(field.name, result.error)

        try:
            setattr(record, field.name, result.value)
        except AttributeError as err:
            msg = f"{type(record).__qualname__} is not a mutable record"
            raise NotARecordError(msg) from err
        except Exception as err:
            raise ConversionError(
                field.name, f"{type(err).__name__}: {err}"
            ) from err
