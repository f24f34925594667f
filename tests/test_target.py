"""Tests for binding dialects and type labels."""

import pytest

from glsl_types.errors import ConfigError
from glsl_types.models import PrimitiveType
from glsl_types.target import (
    DEFAULT_TARGET,
    TYPE_LABELS,
    UNKNOWN_LABEL,
    JavaScriptTarget,
    TargetType,
    TypeScriptTarget,
)

EXPECTED_LABELS = {
    "float", "vec2", "vec3", "vec4",
    "int", "ivec2", "ivec3", "ivec4",
    "uint", "uvec2", "uvec3", "uvec4",
    "bool", "bvec2", "bvec3", "bvec4",
    "mat2", "mat3", "mat4",
    "sampler",
    "UNKNOWN",
}  # fmt: skip


class TestTypeLabels:
    """Test cases for the type label table."""

    def test_every_primitive_has_one_label(self):
        """Test that the table covers the closed set exactly."""
        assert set(TYPE_LABELS) == set(PrimitiveType)

    def test_labels_are_distinct(self):
        """Test that no two primitive types share a label."""
        assert len(set(TYPE_LABELS.values())) == len(TYPE_LABELS)

    def test_label_set(self):
        """Test the fixed label strings."""
        assert set(TYPE_LABELS.values()) == EXPECTED_LABELS

    def test_unknown_sentinel(self):
        """Test that UNKNOWN maps to the sentinel label."""
        target = TypeScriptTarget()
        assert target.type_label(PrimitiveType.UNKNOWN) == UNKNOWN_LABEL

    @pytest.mark.parametrize("primitive", list(PrimitiveType))
    def test_dialects_agree(self, primitive):
        """Test that both dialects use the shared table."""
        assert TypeScriptTarget().type_label(primitive) == JavaScriptTarget().type_label(
            primitive
        )


class TestTargetType:
    """Test cases for the TargetType enum."""

    def test_create(self):
        """Test that every TargetType creates its target."""
        assert isinstance(TargetType.TYPESCRIPT.create(), TypeScriptTarget)
        assert isinstance(TargetType.JAVASCRIPT.create(), JavaScriptTarget)
        assert TargetType.TYPESCRIPT.create().file_extension() == ".ts"
        assert TargetType.JAVASCRIPT.create().file_extension() == ".js"

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("ts", TargetType.TYPESCRIPT),
            ("TypeScript", TargetType.TYPESCRIPT),
            (" js ", TargetType.JAVASCRIPT),
            ("javascript", TargetType.JAVASCRIPT),
        ],
    )
    def test_from_name(self, name, expected):
        assert TargetType.from_name(name) == expected

    def test_unknown_name(self):
        """Test that an unsupported dialect is a configuration error."""
        with pytest.raises(ConfigError, match="Unsupported language: rs"):
            TargetType.from_name("rs")

    def test_default(self):
        assert DEFAULT_TARGET == TargetType.TYPESCRIPT


class TestStringLiteral:
    """Test cases for embedding shader sources."""

    @pytest.mark.parametrize(
        "text, literal",
        [
            ("void main() {}", "`void main() {}`"),
            ("a`b", "`a\\`b`"),
            ("${x}", "`\\${x}`"),
            ("$x {y}", "`$x {y}`"),
            ("a\\b", "`a\\\\b`"),
            ("line\r\n", "`line\\r\n`"),
        ],
    )
    def test_escaping(self, text, literal):
        assert TypeScriptTarget().string_literal(text) == literal
