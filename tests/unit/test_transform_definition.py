#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for TransformDefinition."""

import dataclasses

import pytest

from rxmd.exceptions import PatternError, ValidationError
from rxmd.transforms.definition import MISSING_FIELDS_MESSAGE, TransformDefinition, coerce_definition


def _render(captures):
    return captures[0]


@pytest.mark.unit
class TestTransformDefinition:
    """Tests for the definition dataclass."""

    def test_defaults(self):
        """Optional fields have empty defaults and global flags."""
        definition = TransformDefinition(name="t", pattern=r"t", render=_render)
        assert definition.flags == "g"
        assert definition.description == ""
        assert definition.usage == ""
        assert definition.tags == ()

    def test_flags_normalized(self):
        """Flags are stored in canonical form."""
        definition = TransformDefinition(name="t", pattern=r"t", render=_render, flags=["multiline", "global"])
        assert definition.flags == "gm"

    def test_empty_flags_default_to_global(self):
        """Empty flags fall back to g."""
        assert TransformDefinition(name="t", pattern=r"t", render=_render, flags="").flags == "g"

    def test_unsupported_flag(self):
        """Unsupported flags are rejected on construction."""
        with pytest.raises(PatternError):
            TransformDefinition(name="t", pattern=r"t", render=_render, flags="y")

    def test_unsupported_flag_names_owner(self):
        """The flag error carries the pattern and the transform name."""
        with pytest.raises(PatternError) as exc_info:
            TransformDefinition(name="sticky", pattern=r"ab+", render=_render, flags="gy")

        error = exc_info.value
        assert error.pattern == "ab+"
        assert error.transform_name == "sticky"
        assert "sticky" in str(error)
        assert "/ab+/" in str(error)
        assert isinstance(error.original_error, PatternError)

    def test_single_tag_string(self):
        """A single tag string becomes a one-element tuple."""
        assert TransformDefinition(name="t", pattern=r"t", render=_render, tags="inline").tags == ("inline",)

    def test_frozen(self):
        """Definitions are immutable."""
        definition = TransformDefinition(name="t", pattern=r"t", render=_render)
        with pytest.raises(dataclasses.FrozenInstanceError):
            definition.name = "other"

    def test_create_updated(self):
        """create_updated returns a modified copy."""
        original = TransformDefinition(name="t", pattern=r"t", render=_render)
        updated = original.create_updated(pattern=r"u", flags="gi")

        assert updated.pattern == "u"
        assert updated.flags == "gi"
        assert original.pattern == "t"

    def test_signature(self):
        """signature shows pattern and flags."""
        definition = TransformDefinition(name="t", pattern=r"^#", render=_render, flags="mg")
        assert definition.signature == "/^#/gm"


@pytest.mark.unit
class TestValidate:
    """Tests for TransformDefinition.validate."""

    @pytest.mark.parametrize(
        "fields",
        [
            {"name": "", "pattern": "p", "render": _render},
            {"name": "n", "pattern": "", "render": _render},
            {"name": "n", "pattern": "p", "render": None},
        ],
    )
    def test_missing(self, fields):
        """Each missing required field fails with the same message."""
        with pytest.raises(ValidationError) as exc_info:
            TransformDefinition(**fields).validate()
        assert exc_info.value.message == MISSING_FIELDS_MESSAGE

    def test_reports_missing_parameter(self):
        """The first missing field is named on the error."""
        with pytest.raises(ValidationError) as exc_info:
            TransformDefinition(name="n", pattern="", render=None).validate()
        assert exc_info.value.parameter_name == "pattern"

    def test_non_string_name(self):
        """Names must be strings."""
        with pytest.raises(ValidationError, match="name must be a string"):
            TransformDefinition(name=42, pattern="p", render=_render).validate()


@pytest.mark.unit
class TestCoerceDefinition:
    """Tests for coerce_definition."""

    def test_definition_passthrough(self):
        """A definition without overrides is returned as is."""
        definition = TransformDefinition(name="t", pattern=r"t", render=_render)
        assert coerce_definition(definition) is definition

    def test_mapping_with_none_values(self):
        """None for optional fields means the default."""
        definition = coerce_definition(
            {"name": "t", "pattern": "t", "render": _render, "flags": None, "description": None, "tags": None}
        )
        assert definition.flags == "g"
        assert definition.description == ""
        assert definition.tags == ()

    def test_keywords_only(self):
        """Keyword fields alone build a definition."""
        assert coerce_definition(None, name="t", pattern="t", render=_render).name == "t"

    def test_unsupported(self):
        """Other types are rejected."""
        with pytest.raises(ValidationError, match="Expected TransformDefinition or mapping"):
            coerce_definition("bold")
