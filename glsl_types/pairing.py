"""Vertex/fragment pairing of shader files."""

from dataclasses import dataclass
from pathlib import Path

from glsl_types.errors import PairingError
from glsl_types.models import ShaderStage


@dataclass(frozen=True)
class ShaderPair:
    """Paths of the two files of one shader program."""

    vertex: Path
    fragment: Path

    def path(self, stage: ShaderStage) -> Path:
        if stage is ShaderStage.VERTEX:
            return self.vertex
        return self.fragment


def sibling_path(path: Path, stage: ShaderStage) -> Path:
    """Swap the stage extension of a shader path."""
    return path.with_suffix(f".{stage.sibling().extension}")


def pair_shader_files(path: Path) -> ShaderPair | None:
    """Find the vertex/fragment pair a changed file belongs to.

    Existence is checked on every call; nothing is cached.

    Args:
        path: Changed file

    Returns:
        The pair, or None if the file is not a ``.vert``/``.frag`` shader

    Raises:
        PairingError: If the file or its sibling does not exist
    """
    stage = ShaderStage.from_path(path)
    if stage is None:
        return None

    sibling = sibling_path(path, stage)
    if not path.is_file():
        raise PairingError(stage, path)
    if not sibling.is_file():
        raise PairingError(stage.sibling(), sibling)

    if stage is ShaderStage.VERTEX:
        return ShaderPair(vertex=path, fragment=sibling)
    return ShaderPair(vertex=sibling, fragment=path)
