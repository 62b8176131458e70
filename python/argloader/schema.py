"""
Schema derivation from record argument metadata.

The schema maps each argument name to its wire type and description, for
handing to an external schema-definition facility.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from .metadata import record_fields

if TYPE_CHECKING:
    from .registry import ConverterRegistry

logger = logging.getLogger(__name__)

__all__ = ["ArgsSchema", "ArgumentConfig", "derive_schema"]


@dataclass(frozen=True)
class ArgumentConfig:
    """Schema entry for a single argument.

    Attributes
    ----------
    type : Any
        Wire type registered for the field's type, or None if unregistered
    description : str
        Human-readable description
    """

    type: Any
    description: str = ""


ArgsSchema = dict[str, ArgumentConfig]


def derive_schema(registry: ConverterRegistry, record: Any) -> ArgsSchema:
    """Derive the argument schema of a record.

    Parameters
    ----------
    registry
        Registry providing wire types for field types
    record
        A record type or record instance

    Returns
    -------
    ArgsSchema
        Mapping from argument name to its config, in field declaration order.
        Fields without an argument name are skipped.

    Raises
    ------
    NotARecordError
        If ``record`` is neither a record type nor a record instance
    """
    schema: ArgsSchema = {}
    for field in record_fields(record):
        meta = field.metadata
        if meta is None:
            continue
        wire_type = registry.lookup_wire_type(field.type)
        if wire_type is None:
            logger.warning(
                f"No wire type registered for {field.type!r} "
                f"(argument '{meta.arg}' on field '{field.name}')"
            )
        schema[meta.arg] = ArgumentConfig(type=wire_type, description=meta.description)
    return schema
