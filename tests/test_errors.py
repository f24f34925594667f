"""Tests for error messages and locations."""

from pathlib import Path

from glsl_types.errors import (
    GlslTypesError,
    InterfaceMismatch,
    PairingError,
    ParseError,
    ShaderIOError,
    UnresolvedImport,
    VaryingMissing,
    VaryingTypeConflict,
)
from glsl_types.models import ShaderStage


def test_location_suffix():
    """Test that the file name and line are appended to the message."""
    assert str(GlslTypesError("Unexpected token", "shaders/a.vert", 3)) == (
        "Unexpected token in a.vert at line 3"
    )
    assert str(GlslTypesError("Unexpected token", "a.vert")) == "Unexpected token in a.vert"
    assert str(GlslTypesError("Unexpected token")) == "Unexpected token"


def test_parse_error_with_path():
    """Test binding a parse error to a file keeps its position."""
    # Act
    error = ParseError("Unexpected token", line=2, column=5).with_path("a.frag")

    # Assert
    assert error.path == Path("a.frag")
    assert (error.line, error.column) == (2, 5)
    assert str(error) == "Unexpected token in a.frag at line 2"


def test_varying_missing_names_both_sides():
    error = VaryingMissing("normal", ShaderStage.FRAGMENT)
    assert str(error) == (
        "Varying normal is defined in the fragment shader but not in the vertex shader"
    )


def test_mismatches_share_a_base():
    assert isinstance(VaryingTypeConflict("uv"), InterfaceMismatch)
    assert VaryingTypeConflict("uv").name == "uv"


def test_pairing_error():
    error = PairingError(ShaderStage.VERTEX, Path("a.vert"))
    assert str(error) == "Missing vertex shader file: a.vert"


def test_io_and_import_errors():
    assert str(ShaderIOError("a.vert", "denied")) == "I/O error: denied in a.vert"
    error = UnresolvedImport("./x.glsl", "a.vert")
    assert error.import_path == Path("./x.glsl")
    assert error.path == Path("a.vert")
