"""
Interface extraction for a single shader.

This module walks the top-level declarations of a parsed shader and collects
its uniforms, attributes and varyings, tagging each with a type from the
closed primitive set.
"""

import re
from pathlib import Path

from loguru import logger

from glsl_types.errors import ParseError, ShaderIOError
from glsl_types.frontend import (
    Declarator,
    InterfaceBlock,
    StructDefinition,
    SyntaxVisitor,
    TranslationUnit,
    VariableDeclaration,
    parse,
)
from glsl_types.models import (
    Declaration,
    DeclarationKind,
    PrimitiveType,
    ShaderInterface,
    ShaderSource,
    ShaderStage,
)

# GLSL type name -> primitive type
PRIMITIVE_TYPES: dict[str, PrimitiveType] = {
    "float": PrimitiveType.FLOAT,
    "vec2": PrimitiveType.VEC2,
    "vec3": PrimitiveType.VEC3,
    "vec4": PrimitiveType.VEC4,
    "int": PrimitiveType.INT,
    "ivec2": PrimitiveType.IVEC2,
    "ivec3": PrimitiveType.IVEC3,
    "ivec4": PrimitiveType.IVEC4,
    "uint": PrimitiveType.UINT,
    "uvec2": PrimitiveType.UVEC2,
    "uvec3": PrimitiveType.UVEC3,
    "uvec4": PrimitiveType.UVEC4,
    "bool": PrimitiveType.BOOL,
    "bvec2": PrimitiveType.BVEC2,
    "bvec3": PrimitiveType.BVEC3,
    "bvec4": PrimitiveType.BVEC4,
    "mat2": PrimitiveType.MAT2,
    "mat3": PrimitiveType.MAT3,
    "mat4": PrimitiveType.MAT4,
    "mat2x2": PrimitiveType.MAT2,
    "mat3x3": PrimitiveType.MAT3,
    "mat4x4": PrimitiveType.MAT4,
}

# sampler2D, isampler3D, usamplerCube, sampler2DShadow, ...
SAMPLER_PATTERN = re.compile(r"^[iu]?sampler\w+$")


def primitive_type(type_name: str, kind: DeclarationKind, is_array: bool = False) -> PrimitiveType:
    """Map a GLSL type name to the closed primitive set.

    Args:
        type_name: Type as spelled in the source
        kind: Kind of the declaration (samplers are only valid as uniforms)
        is_array: Whether the declaration is an array

    Returns:
        The matching primitive type, or UNKNOWN
    """
    if is_array:
        return PrimitiveType.UNKNOWN
    if type_name in PRIMITIVE_TYPES:
        return PRIMITIVE_TYPES[type_name]
    if kind is DeclarationKind.UNIFORM and SAMPLER_PATTERN.match(type_name):
        return PrimitiveType.SAMPLER
    return PrimitiveType.UNKNOWN


class _InterfaceCollector(SyntaxVisitor[None]):
    """Collects interface declarations of one shader stage."""

    def __init__(self, interface: ShaderInterface):
        self.interface = interface

    @property
    def stage(self) -> ShaderStage:
        return self.interface.stage

    def error(self, message: str, lineno: int) -> ParseError:
        return ParseError(message, self.interface.path, lineno)

    def declaration_kind(
        self, qualifiers: tuple[str, ...], lineno: int
    ) -> DeclarationKind | None:
        """Classify a global by its storage qualifier for the current stage."""
        if "uniform" in qualifiers:
            return DeclarationKind.UNIFORM
        if "attribute" in qualifiers:
            if self.stage is not ShaderStage.VERTEX:
                raise self.error("'attribute' is only allowed in vertex shaders", lineno)
            return DeclarationKind.ATTRIBUTE
        if "varying" in qualifiers:
            return DeclarationKind.VARYING
        if "in" in qualifiers:
            if self.stage is ShaderStage.VERTEX:
                return DeclarationKind.ATTRIBUTE
            return DeclarationKind.VARYING
        if "out" in qualifiers and self.stage is ShaderStage.VERTEX:
            return DeclarationKind.VARYING
        # Fragment outputs, constants and plain globals are not part of the interface
        return None

    def add(
        self,
        kind: DeclarationKind,
        declarator: Declarator,
        type_name: str,
        primitive: PrimitiveType,
        array_dims: tuple[str, ...] = (),
    ) -> None:
        declarations = self.interface.declarations(kind)
        if declarator.name in declarations:
            raise self.error(
                f"Redeclaration of {kind.name.lower()} {declarator.name}",
                declarator.lineno,
            )
        declarations[declarator.name] = Declaration(
            name=declarator.name,
            primitive_type=primitive,
            kind=kind,
            type_name=type_name,
            array_dims=array_dims,
        )
        if primitive is PrimitiveType.UNKNOWN:
            logger.debug(
                f"Unsupported type {type_name!r} for {kind.name.lower()} "
                f"{declarator.name}, tagged UNKNOWN"
            )

    def visit_variable_declaration(self, node: VariableDeclaration) -> None:
        if not node.declarators:
            return
        kind = self.declaration_kind(node.qualifiers, node.lineno)
        if kind is None:
            return
        for declarator in node.declarators:
            # `float[2] x[3]` is an array of 3 float[2]
            array_dims = declarator.array_dims + node.type_array_dims
            primitive = primitive_type(node.type_name, kind, bool(array_dims))
            self.add(kind, declarator, node.type_name, primitive, array_dims)

    def visit_interface_block(self, node: InterfaceBlock) -> None:
        # Redeclared built-in blocks such as gl_PerVertex
        if node.block_name.startswith("gl_"):
            return
        kind = self.declaration_kind(node.qualifiers, node.lineno)
        if kind is None:
            return
        array_dims = node.instance.array_dims if node.instance else ()
        declarator = node.instance
        # Stages match in/out blocks by block name; instance names may differ
        if declarator is None or kind is DeclarationKind.VARYING:
            declarator = Declarator(
                node.lineno, node.col_offset, node.block_name, array_dims
            )
        self.add(kind, declarator, node.block_name, PrimitiveType.UNKNOWN, array_dims)

    def visit_struct_definition(self, node: StructDefinition) -> None:
        if not node.declarators:
            return
        kind = self.declaration_kind(node.qualifiers, node.lineno)
        if kind is None:
            return
        for declarator in node.declarators:
            self.add(
                kind,
                declarator,
                node.name or "struct",
                PrimitiveType.UNKNOWN,
                declarator.array_dims,
            )


def interface_from_unit(
    unit: TranslationUnit, path: Path | None, stage: ShaderStage
) -> ShaderInterface:
    """Collect the interface of an already parsed shader.

    Args:
        unit: Parsed translation unit
        path: File the unit was parsed from
        stage: Stage the declarations are interpreted in

    Returns:
        ShaderInterface with declarations in source order
    """
    interface = ShaderInterface(path=path, stage=stage)
    _InterfaceCollector(interface).walk(unit)
    logger.debug(
        f"Extracted {stage.label} interface from {path}: "
        f"uniforms={list(interface.uniforms)}, "
        f"attributes={list(interface.attributes)}, "
        f"varyings={list(interface.varyings)}"
    )
    return interface


def extract_interface(
    text: str, path: Path | None, stage: ShaderStage
) -> ShaderInterface:
    """Parse shader text and extract its uniforms, attributes and varyings.

    Args:
        text: Shader source text
        path: File the text was read from
        stage: Stage of the shader

    Returns:
        ShaderInterface with declarations in source order

    Raises:
        ParseError: If the source is not valid GLSL
    """
    return interface_from_unit(parse(text, path), path, stage)


def extract_shader(source: ShaderSource) -> ShaderInterface:
    """Extract the interface of a shader source."""
    return extract_interface(source.text, source.path, source.stage)


def read_text(path: Path) -> str:
    """Read a shader file as UTF-8 text.

    Raises:
        ShaderIOError: If the file cannot be read
    """
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ShaderIOError(path, str(e)) from e


def read_shader(path: Path, stage: ShaderStage) -> ShaderSource:
    """Read one shader file of the given stage."""
    return ShaderSource(text=read_text(path), path=path, stage=stage)
