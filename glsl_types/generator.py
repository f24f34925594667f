"""
Binding generation for a validated shader pair.

The generated module embeds both shader sources and exports a structural
description of the merged interface. Its text depends only on the merged
interface, the two sources, the binding name and the dialect.
"""

import os
import re
import tempfile
from pathlib import Path

from loguru import logger

from glsl_types.errors import ShaderIOError
from glsl_types.models import Declaration, GeneratedArtifact, MergedInterface
from glsl_types.target import Target

VERTEX_SOURCE_CONSTANT = "VERTEX_SHADER_SOURCE"
FRAGMENT_SOURCE_CONSTANT = "FRAGMENT_SHADER_SOURCE"

INDENT = "    "

_NON_IDENTIFIER = re.compile(r"[^A-Za-z0-9_$]")


def capitalize_first_letter(text: str) -> str:
    return text[:1].upper() + text[1:]


def binding_name(stem: str) -> str:
    """Turn a capitalized file stem into a valid export identifier."""
    name = _NON_IDENTIFIER.sub("_", stem)
    if not name or name[0].isdigit():
        name = f"_{name}"
    return name


class BindingEmitter:
    """Renders a merged interface for a Target."""

    def __init__(self, target: Target):
        self.target = target

    def _mapping(self, field_name: str, declarations: dict[str, Declaration]) -> list[str]:
        lines = [f"{INDENT}{field_name}: {{"]
        for name, declaration in declarations.items():
            label = self.target.type_label(declaration.primitive_type)
            lines.append(f"{INDENT * 2}{self.target.mapping_entry(name, label)}")
        lines.append(f"{INDENT}}},")
        return lines

    def emit(
        self,
        merged: MergedInterface,
        vertex_source: str,
        fragment_source: str,
        export_name: str,
    ) -> str:
        """Generate the complete module text."""
        lines: list[str] = []

        lines.extend(self.target.header_lines())
        lines.append("")

        vertex_literal = self.target.string_literal(vertex_source)
        fragment_literal = self.target.string_literal(fragment_source)
        lines.append(self.target.constant(VERTEX_SOURCE_CONSTANT, vertex_literal))
        lines.append("")
        lines.append(self.target.constant(FRAGMENT_SOURCE_CONSTANT, fragment_literal))
        lines.append("")

        lines.append(self.target.export_open(export_name))
        lines.extend(self._mapping("uniforms", merged.uniforms))
        lines.extend(self._mapping("attributes", merged.attributes))
        lines.append(f"{INDENT}vertexShaderSource: {VERTEX_SOURCE_CONSTANT},")
        lines.append(f"{INDENT}fragmentShaderSource: {FRAGMENT_SOURCE_CONSTANT},")
        lines.append(self.target.export_close())

        return "\n".join(lines) + "\n"


def generate_artifact(
    merged: MergedInterface,
    vertex_source: str,
    fragment_source: str,
    vertex_path: Path,
    destination: Path,
    target: Target,
) -> GeneratedArtifact:
    """Render the binding module of a shader pair.

    Args:
        merged: Validated interface of the pair
        vertex_source: Raw vertex shader text
        fragment_source: Raw fragment shader text
        vertex_path: Path of the vertex shader, its stem names the binding
        destination: Output directory
        target: Binding dialect

    Returns:
        GeneratedArtifact with the destination file and its text
    """
    stem = capitalize_first_letter(vertex_path.stem)
    text = BindingEmitter(target).emit(
        merged, vertex_source, fragment_source, binding_name(stem)
    )
    return GeneratedArtifact(
        destination=destination / f"{stem}{target.file_extension()}", text=text
    )


def write_artifact(artifact: GeneratedArtifact) -> Path:
    """Write an artifact, replacing any previous version atomically.

    A failed write leaves the previous artifact untouched.

    Raises:
        ShaderIOError: If the file cannot be written
    """
    destination = artifact.destination
    tmp_name = None
    try:
        with tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            newline="",
            dir=destination.parent,
            prefix=f".{destination.name}.",
            suffix=".tmp",
            delete=False,
        ) as f:
            tmp_name = f.name
            f.write(artifact.text)
        os.replace(tmp_name, destination)
    except OSError as e:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise ShaderIOError(destination, str(e)) from e

    logger.debug(f"Wrote {len(artifact.text)} characters to {destination}")
    return destination
