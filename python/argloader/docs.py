"""
Documentation generation from argument metadata.

This module provides:
- generate_args_docs: Generate markdown documentation
- export_args_json: Export to a JSON-serialisable dict
"""

from __future__ import annotations

import enum
from typing import TYPE_CHECKING, Any

from .defaults import default_loader
from .metadata import record_fields

if TYPE_CHECKING:
    from .loader import ArgLoader

__all__ = ["export_args_json", "generate_args_docs"]


def _record_class(record: Any) -> type:
    return record if isinstance(record, type) else type(record)


def _wire_type_name(wire_type: Any) -> str | None:
    if wire_type is None:
        return None
    if isinstance(wire_type, enum.Enum):
        return str(wire_type.value)
    return getattr(wire_type, "name", None) or str(wire_type)


def _describe_arguments(record: Any, loader: ArgLoader | None) -> list[dict[str, Any]]:
    loader = loader if loader is not None else default_loader()
    schema = loader.safe_args_config(record)

    arguments = []
    for field in record_fields(record):
        meta = field.metadata
        if meta is None:
            continue
        arguments.append(
            {
                "name": meta.arg,
                "field": field.name,
                "type": _wire_type_name(schema[meta.arg].type),
                "required": meta.is_required(),
                "description": meta.description or None,
            }
        )
    return arguments


def generate_args_docs(record: Any, loader: ArgLoader | None = None) -> str:
    """Generate markdown documentation from argument metadata.

    Parameters
    ----------
    record : Any
        A record type or instance with fields defined via argument()
    loader : ArgLoader | None
        Loader providing wire types. Defaults to the default loader.

    Returns
    -------
    str
        Markdown-formatted documentation

    Raises
    ------
    MetadataError
        If an argument's required flag cannot be parsed

    Examples
    --------
    >>> from dataclasses import dataclass
    >>> from argloader.metadata import argument
    >>> @dataclass
    ... class HelloArgs:
    ...     '''Arguments of the hello query.'''
    ...
    ...     name: str = argument("name", required=True, description="Your name")
    >>> md = generate_args_docs(HelloArgs)
    >>> "String" in md
    True
    """
    cls = _record_class(record)
    lines = []

    lines.append(f"# {cls.__name__}")
    lines.append("")

    if cls.__doc__:
        lines.append(cls.__doc__.strip())
        lines.append("")

    arguments = _describe_arguments(record, loader)
    if arguments:
        lines.append("## Arguments")
        lines.append("")

        for arg in arguments:
            lines.append(f"### `{arg['name']}`")
            lines.append("")

            if arg["description"]:
                lines.append(arg["description"])
                lines.append("")

            type_text = arg["type"] if arg["type"] else "unregistered"
            lines.append(f"- **Type**: {type_text}")
            lines.append(f"- **Required**: {'yes' if arg['required'] else 'no'}")
            lines.append(f"- **Field**: `{arg['field']}`")
            lines.append("")

    return "\n".join(lines)


def export_args_json(record: Any, loader: ArgLoader | None = None) -> dict[str, Any]:
    """Export argument metadata to a JSON-serialisable dict.

    Parameters
    ----------
    record : Any
        A record type or instance with fields defined via argument()
    loader : ArgLoader | None
        Loader providing wire types. Defaults to the default loader.

    Returns
    -------
    dict
        Dict with structure:
        {
            "class": str,
            "description": str | None,
            "arguments": [
                {
                    "name": str,
                    "field": str,
                    "type": str | None,
                    "required": bool,
                    "description": str | None,
                }
            ]
        }

    Raises
    ------
    MetadataError
        If an argument's required flag cannot be parsed
    """
    cls = _record_class(record)
    return {
        "class": cls.__name__,
        "description": cls.__doc__.strip() if cls.__doc__ else None,
        "arguments": _describe_arguments(record, loader),
    }
