"""Binding dialect abstraction for generated artifacts.

A Target encapsulates everything needed to render bindings for one host
language:
- File extension of the generated module
- Label used for each primitive type
- Syntax of string literals and of the exported structural description
"""

from abc import ABC, abstractmethod
from enum import Enum, auto

from glsl_types.errors import ConfigError
from glsl_types.models import PrimitiveType

# =============================================================================
# Type Labels
# =============================================================================

UNKNOWN_LABEL = "UNKNOWN"

TYPE_LABELS: dict[PrimitiveType, str] = {
    PrimitiveType.FLOAT: "float",
    PrimitiveType.VEC2: "vec2",
    PrimitiveType.VEC3: "vec3",
    PrimitiveType.VEC4: "vec4",
    PrimitiveType.INT: "int",
    PrimitiveType.IVEC2: "ivec2",
    PrimitiveType.IVEC3: "ivec3",
    PrimitiveType.IVEC4: "ivec4",
    PrimitiveType.UINT: "uint",
    PrimitiveType.UVEC2: "uvec2",
    PrimitiveType.UVEC3: "uvec3",
    PrimitiveType.UVEC4: "uvec4",
    PrimitiveType.BOOL: "bool",
    PrimitiveType.BVEC2: "bvec2",
    PrimitiveType.BVEC3: "bvec3",
    PrimitiveType.BVEC4: "bvec4",
    PrimitiveType.MAT2: "mat2",
    PrimitiveType.MAT3: "mat3",
    PrimitiveType.MAT4: "mat4",
    PrimitiveType.SAMPLER: "sampler",
    PrimitiveType.UNKNOWN: UNKNOWN_LABEL,
}

# =============================================================================
# Target ABC
# =============================================================================


class Target(ABC):
    """Base class for all binding dialects."""

    @abstractmethod
    def file_extension(self) -> str:
        """Return the extension of generated files, including the dot."""
        ...

    def type_label(self, primitive: PrimitiveType) -> str:
        """Map a primitive type to its label. Default: the shared label table."""
        return TYPE_LABELS[primitive]

    def header_lines(self) -> list[str]:
        """Return the generated-file marker."""
        return [
            "// DO NOT EDIT THIS FILE",
            "// This file is generated by glsl-types",
        ]

    @abstractmethod
    def string_literal(self, text: str) -> str:
        """Return a literal whose value is exactly ``text``."""
        ...

    @abstractmethod
    def constant(self, name: str, value: str) -> str:
        """Return a module-level constant declaration."""
        ...

    @abstractmethod
    def export_open(self, name: str) -> str:
        """Return the line opening the exported structural description."""
        ...

    def export_close(self) -> str:
        return "};"

    def mapping_entry(self, name: str, label: str) -> str:
        return f'{name}: "{label}",'


# =============================================================================
# ECMAScript Targets
# =============================================================================


class ECMAScriptTarget(Target):
    """Shared implementation for JavaScript-family dialects.

    Shader sources are embedded as template literals.
    """

    _extension: str

    def file_extension(self) -> str:
        return self._extension

    def string_literal(self, text: str) -> str:
        escaped = (
            text.replace("\\", "\\\\")
            .replace("`", "\\`")
            .replace("${", "\\${")
            # Template literals normalise CRLF to LF
            .replace("\r", "\\r")
        )
        return f"`{escaped}`"

    def constant(self, name: str, value: str) -> str:
        return f"const {name} = {value};"

    def export_open(self, name: str) -> str:
        return f"export const {name} = {{"


class TypeScriptTarget(ECMAScriptTarget):
    """TypeScript module, the reference dialect."""

    _extension = ".ts"


class JavaScriptTarget(ECMAScriptTarget):
    """Plain ES module with the same structure as the TypeScript output."""

    _extension = ".js"


# =============================================================================
# Target Type Enum and Factory
# =============================================================================


class TargetType(Enum):
    """Supported binding dialects."""

    TYPESCRIPT = auto()
    JAVASCRIPT = auto()

    def create(self) -> Target:
        """Create a Target instance for this type."""
        factories: dict[TargetType, type[Target]] = {
            TargetType.TYPESCRIPT: TypeScriptTarget,
            TargetType.JAVASCRIPT: JavaScriptTarget,
        }
        return factories[self]()

    @classmethod
    def from_name(cls, name: str) -> "TargetType":
        """Map a dialect identifier such as ``ts`` or ``javascript``.

        Raises:
            ConfigError: If the identifier is not a supported dialect
        """
        aliases = {
            "ts": cls.TYPESCRIPT,
            "typescript": cls.TYPESCRIPT,
            "js": cls.JAVASCRIPT,
            "javascript": cls.JAVASCRIPT,
        }
        try:
            return aliases[name.strip().lower()]
        except KeyError:
            supported = ", ".join(sorted(aliases))
            raise ConfigError(
                f"Unsupported language: {name}. Supported languages: {supported}"
            ) from None


# Default target
DEFAULT_TARGET = TargetType.TYPESCRIPT
