"""
Exceptions and error handling for the GLSL types generator.

This module defines the exceptions raised while extracting, validating and
generating bindings for a pair of shaders. Every error of a regeneration cycle
derives from GlslTypesError so the pipeline can turn it into a failed outcome.
"""

import os
from pathlib import Path

from glsl_types.models import ShaderStage


class GlslTypesError(Exception):
    """Base exception for every error reported by glsl-types.

    The class keeps the source file and line number where the error originated
    (when known) and appends them to the message in a user-friendly way.

    Examples:
        >>> raise GlslTypesError("Unexpected token", path="a.vert", line=3)
        GlslTypesError: Unexpected token in a.vert at line 3
    """

    def __init__(
        self,
        message: str,
        path: str | Path | None = None,
        line: int | None = None,
    ):
        """Initialize the exception with a message and optional location.

        Args:
            message: The error message
            path: Optional shader file the error refers to
            line: Optional 1-based line number inside that file
        """
        self.message = message
        self.path = Path(path) if path is not None else None
        self.line = line

        location_info = ""
        if self.path is not None:
            location_info = f" in {os.path.basename(self.path)}"
            if self.line:
                location_info += f" at line {self.line}"

        super().__init__(f"{message}{location_info}")


class ConfigError(GlslTypesError):
    """Invalid configuration (unknown dialect, missing folders)."""


class WatchError(GlslTypesError):
    """The watch subsystem could not be started."""


class ShaderIOError(GlslTypesError):
    """Reading a shader or writing an artifact failed."""

    def __init__(self, path: str | Path, reason: str):
        self.reason = reason
        super().__init__(f"I/O error: {reason}", path=path)


class PairingError(GlslTypesError):
    """One file of a vertex/fragment pair is missing.

    Attributes:
        missing_stage: Stage of the file that does not exist
        missing_path: Expected path of the missing file
    """

    def __init__(self, missing_stage: ShaderStage, missing_path: Path):
        self.missing_stage = missing_stage
        self.missing_path = missing_path
        super().__init__(
            f"Missing {missing_stage.label} shader file: {missing_path}"
        )


class ParseError(GlslTypesError):
    """The shader source is not valid GLSL."""

    def __init__(
        self,
        message: str,
        path: str | Path | None = None,
        line: int | None = None,
        column: int | None = None,
    ):
        self.column = column
        super().__init__(message, path=path, line=line)

    def with_path(self, path: str | Path) -> "ParseError":
        """Create a new ParseError with the same message bound to a file.

        Args:
            path: Shader file the error was found in

        Returns:
            A new ParseError instance carrying the file path
        """
        return ParseError(self.message, path, self.line, self.column)


class InterfaceMismatch(GlslTypesError):
    """Vertex and fragment shaders disagree about their interface."""

    def __init__(self, name: str, message: str):
        self.name = name
        super().__init__(message)


class UniformTypeConflict(InterfaceMismatch):
    """A uniform is declared with different types in the two shaders."""

    def __init__(self, name: str):
        super().__init__(
            name,
            f"Uniform {name} is defined with different types "
            "in the vertex and fragment shaders",
        )


class VaryingMissing(InterfaceMismatch):
    """A varying is declared in only one of the two shaders.

    Attributes:
        side: Stage that declares the varying
    """

    def __init__(self, name: str, side: ShaderStage):
        self.side = side
        other = side.sibling()
        super().__init__(
            name,
            f"Varying {name} is defined in the {side.label} shader "
            f"but not in the {other.label} shader",
        )


class VaryingTypeConflict(InterfaceMismatch):
    """A varying is declared with different types in the two shaders."""

    def __init__(self, name: str):
        super().__init__(
            name,
            f"Varying {name} is defined with different types "
            "in the vertex and fragment shaders",
        )


class UnresolvedImport(GlslTypesError):
    """An import directive points to a file that does not exist."""

    def __init__(self, path: str | Path, importer: str | Path | None = None):
        self.import_path = Path(path)
        super().__init__(f"Unresolved import: {path}", path=importer)
