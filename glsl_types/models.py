"""
Data models for the GLSL types generator.

This module contains the dataclass definitions used throughout the package to
represent shader sources, the declarations extracted from them and the merged
interface a binding is generated from.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from pathlib import Path


class ShaderStage(Enum):
    """Shader pipeline stage."""

    VERTEX = "vert"
    FRAGMENT = "frag"

    @property
    def extension(self) -> str:
        """File extension (without the dot) of shaders of this stage."""
        return self.value

    @property
    def label(self) -> str:
        return self.name.lower()

    def sibling(self) -> "ShaderStage":
        """Return the other stage of a vertex/fragment pair."""
        if self is ShaderStage.VERTEX:
            return ShaderStage.FRAGMENT
        return ShaderStage.VERTEX

    @classmethod
    def from_path(cls, path: Path) -> "ShaderStage | None":
        """Return the stage matching a file extension, or None."""
        suffix = path.suffix.lstrip(".")
        for stage in cls:
            if stage.extension == suffix:
                return stage
        return None


class DeclarationKind(Enum):
    """How a global shader variable is fed."""

    UNIFORM = auto()
    ATTRIBUTE = auto()
    VARYING = auto()


class PrimitiveType(Enum):
    """Closed set of GLSL types a binding can describe.

    Everything outside the set (arrays, structs, interface blocks, double
    precision and non-square matrix types, ...) is tagged UNKNOWN.
    """

    FLOAT = auto()
    VEC2 = auto()
    VEC3 = auto()
    VEC4 = auto()

    INT = auto()
    IVEC2 = auto()
    IVEC3 = auto()
    IVEC4 = auto()

    UINT = auto()
    UVEC2 = auto()
    UVEC3 = auto()
    UVEC4 = auto()

    BOOL = auto()
    BVEC2 = auto()
    BVEC3 = auto()
    BVEC4 = auto()

    MAT2 = auto()
    MAT3 = auto()
    MAT4 = auto()

    SAMPLER = auto()

    UNKNOWN = auto()


@dataclass
class ShaderSource:
    """Raw text of one shader file, read fresh for every cycle."""

    text: str
    path: Path
    stage: ShaderStage


@dataclass(frozen=True)
class Declaration:
    """A uniform, attribute or varying declared at the top level of a shader.

    Attributes:
        name: Variable name
        primitive_type: Type tag from the closed primitive set
        kind: Whether the variable is a uniform, an attribute or a varying
        type_name: Type as spelled in the source (struct or block name for
            aggregates)
        array_dims: Array sizes as written, outermost first
    """

    name: str
    primitive_type: PrimitiveType
    kind: DeclarationKind
    type_name: str = ""
    array_dims: tuple[str, ...] = ()

    def same_type(self, other: "Declaration") -> bool:
        """Check whether two declarations of one name have the same GLSL type.

        UNKNOWN declarations are told apart by their spelled type and array
        sizes, since the tag alone covers every unsupported form.
        """
        if self.primitive_type != other.primitive_type:
            return False
        if self.primitive_type is not PrimitiveType.UNKNOWN:
            return True
        return (self.type_name, self.array_dims) == (other.type_name, other.array_dims)


@dataclass
class ShaderInterface:
    """Declarations extracted from one shader, in source order.

    Attributes:
        path: File the declarations were extracted from
        stage: Stage of that file
        uniforms: Uniform declarations by name
        attributes: Attribute declarations by name
        varyings: Varying declarations by name
    """

    path: Path | None
    stage: ShaderStage
    uniforms: dict[str, Declaration] = field(default_factory=dict)
    attributes: dict[str, Declaration] = field(default_factory=dict)
    varyings: dict[str, Declaration] = field(default_factory=dict)

    def declarations(self, kind: DeclarationKind) -> dict[str, Declaration]:
        """Return the mapping holding declarations of the given kind."""
        match kind:
            case DeclarationKind.UNIFORM:
                return self.uniforms
            case DeclarationKind.ATTRIBUTE:
                return self.attributes
            case DeclarationKind.VARYING:
                return self.varyings


@dataclass
class MergedInterface:
    """Interface shared by a vertex/fragment pair.

    Attributes:
        uniforms: Vertex uniforms first, then fragment-only uniforms
        attributes: Vertex attributes in declaration order
    """

    uniforms: dict[str, Declaration] = field(default_factory=dict)
    attributes: dict[str, Declaration] = field(default_factory=dict)


# Import identifier -> canonical absolute path, in directive order.
ImportMap = dict[str, Path]


@dataclass(frozen=True)
class GeneratedArtifact:
    """A rendered binding file, not yet written."""

    destination: Path
    text: str
