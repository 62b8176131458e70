"""
Unit tests for argloader.populate module.

Tests required/optional handling, per-field conversion and error reporting
when populating records from raw argument maps.
"""

from __future__ import annotations

from dataclasses import dataclass

import attrs
import pytest

from argloader.defaults import new_loader
from argloader.exceptions import (
    ConversionError,
    ConverterNotFoundError,
    MetadataError,
    MissingArgumentError,
    NotARecordError,
)
from argloader.metadata import arg_metadata, argument
from argloader.populate import populate
from argloader.registry import ConverterRegistry


@dataclass
class HelloArgs:
    """Arguments of the hello query."""

    name: str = argument("name", required=True, default="", description="Your name")
    greeting: str = argument("greeting", default="", description="How to say hello")


@dataclass
class MixedArgs:
    count: int = argument("count", required="true", default=0)
    ratio: float = argument("ratio", required="false", default=0.5)
    verbose: bool = argument("verbose", default=False)
    internal: str = "untouched"


@dataclass
class BadRequiredFlag:
    value: int = argument("value", required="maybe", default=0)


@dataclass
class ComplexArgs:
    tags: list = argument("tags", default_factory=list)


@dataclass(frozen=True)
class FrozenArgs:
    name: str = argument("name", default="")


@attrs.define
class AttrsHelloArgs:
    name: str = attrs.field(default="", metadata=arg_metadata("name", required=True))
    greeting: str = attrs.field(default="", metadata=arg_metadata("greeting"))


@attrs.define
class PositiveArgs:
    count: int = attrs.field(
        default=1, validator=attrs.validators.gt(0), metadata=arg_metadata("count")
    )


@pytest.fixture
def registry():
    return new_loader().registry


class TestPopulateHello:
    """Tests for the hello arguments example."""

    def test_all_arguments(self, registry):
        """populate() writes every supplied argument."""
        args = HelloArgs()
        populate(registry, {"name": "Joe", "greeting": "Goodbye"}, args)
        assert args.name == "Joe"
        assert args.greeting == "Goodbye"

    def test_missing_required(self, registry):
        """populate() fails on a missing required argument."""
        args = HelloArgs()
        with pytest.raises(MissingArgumentError, match="name is required") as exc_info:
            populate(registry, {"greeting": "Hi"}, args)

        assert exc_info.value.arg_name == "name"
        assert args == HelloArgs()

    def test_missing_optional(self, registry):
        """populate() leaves an absent optional argument at its default."""
        args = HelloArgs()
        populate(registry, {"name": "Joe"}, args)
        assert args.name == "Joe"
        assert args.greeting == ""

    def test_wrong_type(self, registry):
        """populate() reports a type mismatch against the field name."""
        args = HelloArgs()
        with pytest.raises(
            ConversionError, match="cannot populate name: 42 is not a string"
        ) as exc_info:
            populate(registry, {"name": 42}, args)

        assert exc_info.value.field_name == "name"
        assert exc_info.value.cause == "42 is not a string"

    def test_none_is_forwarded_to_converter(self, registry):
        """A present key holding None counts as supplied."""
        args = HelloArgs()
        with pytest.raises(ConversionError, match="None is not a string"):
            populate(registry, {"name": None}, args)

    def test_args_not_modified(self, registry):
        """populate() does not modify the raw argument map."""
        raw = {"name": "Joe", "extra": 1}
        populate(registry, raw, HelloArgs())
        assert raw == {"name": "Joe", "extra": 1}

    def test_attrs_record(self, registry):
        """populate() supports attrs records."""
        args = AttrsHelloArgs()
        populate(registry, {"name": "Joe", "greeting": "Hey"}, args)
        assert args.name == "Joe"
        assert args.greeting == "Hey"

    def test_attrs_missing_required(self, registry):
        """attrs records honour the required flag."""
        with pytest.raises(MissingArgumentError, match="name is required"):
            populate(registry, {}, AttrsHelloArgs())


class TestPopulateFields:
    """Tests for field selection, flags and ordering."""

    def test_textual_required_flags(self, registry):
        """Textual required flags are parsed."""
        args = MixedArgs()
        populate(registry, {"count": 3}, args)
        assert args.count == 3
        assert args.ratio == 0.5

        with pytest.raises(MissingArgumentError, match="count is required"):
            populate(registry, {"ratio": 1.0}, MixedArgs())

    def test_unannotated_field_ignored(self, registry):
        """Fields without an argument name are never written."""
        args = MixedArgs()
        populate(registry, {"count": 1, "internal": "changed"}, args)
        assert args.internal == "untouched"

    def test_invalid_required_flag(self, registry):
        """An unparseable required flag is an error when the argument is absent."""
        with pytest.raises(MetadataError, match="'maybe' is not a valid 'required'"):
            populate(registry, {}, BadRequiredFlag())

    def test_invalid_required_flag_with_value(self, registry):
        """The required flag is only consulted when the argument is absent."""
        args = BadRequiredFlag()
        populate(registry, {"value": 7}, args)
        assert args.value == 7

    def test_no_converter(self, registry):
        """populate() fails for a field type without a converter."""
        with pytest.raises(
            ConverterNotFoundError, match="no loader function found for type"
        ) as exc_info:
            populate(registry, {"tags": ["a"]}, ComplexArgs())

        assert exc_info.value.field_type is list
        assert str in exc_info.value.available

    def test_missing_key_needs_no_converter(self, registry):
        """An absent optional argument does not require a converter."""
        args = ComplexArgs()
        populate(registry, {}, args)
        assert args.tags == []

    def test_no_rollback_on_failure(self, registry):
        """Fields written before a failure keep their new values."""
        args = MixedArgs()
        with pytest.raises(ConversionError, match="cannot populate ratio"):
            populate(registry, {"count": 5, "ratio": 1}, args)
        assert args.count == 5
        assert args.ratio == 0.5

    def test_first_failure_aborts(self, registry):
        """Processing stops at the first failing field in declaration order."""
        args = MixedArgs()
        with pytest.raises(ConversionError, match="cannot populate count"):
            populate(registry, {"count": "x", "ratio": "y", "verbose": True}, args)
        assert args.verbose is False


def fragile_int(value: object) -> int:
    return int(value) // 0


class TestPopulateFaults:
    """Tests for converters that fail unexpectedly."""

    def test_fault_becomes_conversion_error(self):
        """A converter raising an unexpected exception yields a ConversionError."""
        loader = ConverterRegistry()
        loader.register(fragile_int, "Int")

        args = MixedArgs()
        with pytest.raises(ConversionError) as exc_info:
            populate(loader, {"count": 3}, args)

        assert "fragile_int raised ZeroDivisionError" in str(exc_info.value)
        assert exc_info.value.field_name == "count"
        assert args.count == 0

    def test_record_validator_becomes_conversion_error(self, registry):
        """A value rejected by an attrs validator yields a ConversionError."""
        args = PositiveArgs()
        with pytest.raises(
            ConversionError, match="cannot populate count: ValueError"
        ) as exc_info:
            populate(registry, {"count": -3}, args)

        assert exc_info.value.field_name == "count"
        assert isinstance(exc_info.value.__cause__, ValueError)
        assert args.count == 1


class TestPopulateTargets:
    """Tests for invalid populate targets."""

    def test_record_class_rejected(self, registry):
        """populate() requires a record instance, not the class."""
        with pytest.raises(NotARecordError, match="is not a record instance"):
            populate(registry, {"name": "Joe"}, HelloArgs)

    @pytest.mark.parametrize("target", [{}, "name", 42, None])
    def test_non_record_rejected(self, registry, target):
        """populate() rejects values that are not records."""
        with pytest.raises(NotARecordError):
            populate(registry, {"name": "Joe"}, target)

    def test_frozen_record_rejected(self, registry):
        """populate() cannot write into a frozen record."""
        with pytest.raises(NotARecordError, match="is not a mutable record"):
            populate(registry, {"name": "Joe"}, FrozenArgs())

    def test_frozen_record_without_matching_args(self, registry):
        """A frozen record is only an error when a field must be written."""
        args = FrozenArgs()
        populate(registry, {}, args)
        assert args.name == ""
