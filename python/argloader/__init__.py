"""
argloader: declarative argument loading for typed records.

This package converts a map of raw, dynamically-typed arguments into the
fields of a dataclass or attrs record, and describes the same record as an
argument schema, supporting:
- Per-field argument metadata (name, required flag, description)
- A converter registry keyed by field type, with signature validation
- Conversion failures reported as errors, never as escaped exceptions
- Markdown/JSON documentation of a record's arguments

Example:
    >>> from dataclasses import dataclass
    >>> from argloader import argument, new_loader
    >>>
    >>> @dataclass
    >>> class HelloArgs:
    ...     name: str = argument("name", required=True, default="")
    ...     greeting: str = argument("greeting", default="")
    >>>
    >>> loader = new_loader()
    >>> loader.args_config(HelloArgs)["name"].type
    <WireType.STRING: 'String'>
"""

from __future__ import annotations

from .defaults import (
    DEFAULT_CONVERTERS,
    WireType,
    args_config,
    default_loader,
    empty_loader,
    load_args,
    load_bool,
    load_float,
    load_int,
    load_str,
    new_loader,
    register,
    safe_args_config,
)
from .docs import export_args_json, generate_args_docs
from .exceptions import (
    ArgLoaderError,
    ConversionError,
    ConverterNotFoundError,
    DuplicateConverterError,
    InvalidValueError,
    MetadataError,
    MissingArgumentError,
    NotARecordError,
    PopulateError,
    RegistrationError,
)
from .loader import ArgLoader
from .metadata import ArgumentMetadata, RecordField, arg_metadata, argument, parse_bool
from .registry import ConversionResult, ConverterRegistry, GuardedConverter
from .schema import ArgsSchema, ArgumentConfig, derive_schema

__all__ = [
    "DEFAULT_CONVERTERS",
    "ArgLoader",
    "ArgLoaderError",
    "ArgsSchema",
    "ArgumentConfig",
    "ArgumentMetadata",
    "ConversionError",
    "ConversionResult",
    "ConverterNotFoundError",
    "ConverterRegistry",
    "DuplicateConverterError",
    "GuardedConverter",
    "InvalidValueError",
    "MetadataError",
    "MissingArgumentError",
    "NotARecordError",
    "PopulateError",
    "RecordField",
    "RegistrationError",
    "WireType",
    "arg_metadata",
    "argument",
    "args_config",
    "default_loader",
    "derive_schema",
    "empty_loader",
    "export_args_json",
    "generate_args_docs",
    "load_args",
    "load_bool",
    "load_float",
    "load_int",
    "load_str",
    "new_loader",
    "parse_bool",
    "register",
    "safe_args_config",
]
