"""
Argument loader combining a converter registry with schema derivation and
record population.

Example:
    >>> from dataclasses import dataclass
    >>> from argloader import argument, new_loader
    >>>
    >>> @dataclass
    >>> class HelloArgs:
    ...     name: str = argument("name", required=True, default="")
    >>>
    >>> loader = new_loader()
    >>> args = HelloArgs()
    >>> loader.load_args({"name": "Joe"}, args)
    >>> args.name
    'Joe'
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .exceptions import ArgLoaderError
from .populate import populate
from .registry import ConverterRegistry
from .schema import derive_schema

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from .schema import ArgsSchema

__all__ = ["ArgLoader"]


class ArgLoader:
    """
    Reads raw arguments into records and describes records as schemas.

    Parameters
    ----------
    registry
        Converter registry to use. A new empty registry is created if omitted.
    """

    def __init__(self, registry: ConverterRegistry | None = None) -> None:
        self.registry = registry if registry is not None else ConverterRegistry()

    def register(self, func: Callable[[Any], Any], wire_type: Any) -> None:
        """
        Register a converter for its return type.

        See :meth:`ConverterRegistry.register`.
        """
        self.registry.register(func, wire_type)

    def safe_args_config(self, record: Any) -> ArgsSchema:
        """
        Derive the argument schema for a record type or instance.

        Raises
        ------
        NotARecordError
            If ``record`` is not a record.
        """
        return derive_schema(self.registry, record)

    def args_config(self, record: Any) -> ArgsSchema:
        """
        Derive the argument schema, treating any failure as a programming error.

        Raises
        ------
        RuntimeError
            If the schema cannot be derived.
        """
        try:
            return self.safe_args_config(record)
        except ArgLoaderError as err:
            msg = f"could not configure arguments: {err}"
            raise RuntimeError(msg) from err

    def load_args(self, args: Mapping[str, Any], record: Any) -> None:
        """
        Populate a record instance from a raw argument map.

        See :func:`argloader.populate.populate`.
        """
        populate(self.registry, args, record)
