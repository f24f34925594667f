"""
Cross-stage validation of a vertex/fragment shader pair.

The checks run in a fixed order and stop at the first offending declaration,
so a pair either yields a complete merged interface or an error.
"""

from loguru import logger

from glsl_types.errors import UniformTypeConflict, VaryingMissing, VaryingTypeConflict
from glsl_types.models import Declaration, MergedInterface, ShaderInterface, ShaderStage


def check_uniform_types(vertex: ShaderInterface, fragment: ShaderInterface) -> None:
    """Ensure uniforms declared by both stages have the same type.

    Raises:
        UniformTypeConflict: For the first shared uniform whose types differ
    """
    for name, declaration in vertex.uniforms.items():
        other = fragment.uniforms.get(name)
        if other is not None and not declaration.same_type(other):
            raise UniformTypeConflict(name)


def merge_uniforms(
    vertex: ShaderInterface, fragment: ShaderInterface
) -> dict[str, Declaration]:
    """Union the uniforms of both stages, vertex declarations first."""
    merged = dict(vertex.uniforms)
    for name, declaration in fragment.uniforms.items():
        if name not in merged:
            merged[name] = declaration
    return merged


def check_varying_symmetry(vertex: ShaderInterface, fragment: ShaderInterface) -> None:
    """Ensure every varying is declared by both stages.

    Raises:
        VaryingMissing: For the first varying declared by one stage only
    """
    for name in vertex.varyings:
        if name not in fragment.varyings:
            raise VaryingMissing(name, ShaderStage.VERTEX)
    for name in fragment.varyings:
        if name not in vertex.varyings:
            raise VaryingMissing(name, ShaderStage.FRAGMENT)


def check_varying_types(vertex: ShaderInterface, fragment: ShaderInterface) -> None:
    """Ensure shared varyings agree in type.

    Raises:
        VaryingTypeConflict: For the first varying whose types differ
    """
    for name, declaration in vertex.varyings.items():
        other = fragment.varyings.get(name)
        if other is not None and not declaration.same_type(other):
            raise VaryingTypeConflict(name)


def validate_and_merge(
    vertex: ShaderInterface, fragment: ShaderInterface
) -> MergedInterface:
    """Validate a shader pair and merge it into one interface.

    Args:
        vertex: Interface of the vertex shader
        fragment: Interface of the fragment shader

    Returns:
        MergedInterface with vertex-first uniforms and vertex attributes

    Raises:
        UniformTypeConflict: A shared uniform has different types
        VaryingMissing: A varying is declared by one stage only
        VaryingTypeConflict: A shared varying has different types
    """
    check_uniform_types(vertex, fragment)
    uniforms = merge_uniforms(vertex, fragment)
    check_varying_symmetry(vertex, fragment)
    check_varying_types(vertex, fragment)

    merged = MergedInterface(uniforms=uniforms, attributes=dict(vertex.attributes))
    logger.debug(
        f"Merged interface: uniforms={list(merged.uniforms)}, "
        f"attributes={list(merged.attributes)}"
    )
    return merged
