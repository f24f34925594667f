"""
One regeneration cycle for a changed shader file.

A cycle pairs the changed file with its sibling, extracts both interfaces,
validates and merges them, and writes the binding. It either writes one
complete artifact or nothing, and always returns a structured outcome instead
of raising.
"""

import time
from dataclasses import dataclass
from pathlib import Path

import arrow
from loguru import logger

from glsl_types.errors import GlslTypesError
from glsl_types.extractor import read_shader
from glsl_types.generator import generate_artifact, write_artifact
from glsl_types.imports import collect_interface, file_imports
from glsl_types.models import GeneratedArtifact, ImportMap, ShaderStage
from glsl_types.pairing import ShaderPair, pair_shader_files
from glsl_types.target import Target
from glsl_types.validator import validate_and_merge


@dataclass(frozen=True)
class CycleSucceeded:
    """A binding was generated and written.

    Attributes:
        trigger: Changed file that started the cycle
        artifact: Written artifact
        elapsed: Seconds spent between pairing and the end of the write
        finished_at: UTC time the cycle ended
        imports: Imports of the changed file, or None if they could not be resolved
        import_error: Why the imports could not be resolved
    """

    trigger: Path
    artifact: GeneratedArtifact
    elapsed: float
    finished_at: arrow.Arrow
    imports: ImportMap | None = None
    import_error: GlslTypesError | None = None


@dataclass(frozen=True)
class CycleFailed:
    """The cycle stopped at its first error; nothing was written."""

    trigger: Path
    error: GlslTypesError
    finished_at: arrow.Arrow
    imports: ImportMap | None = None
    import_error: GlslTypesError | None = None


CycleOutcome = CycleSucceeded | CycleFailed


def build_artifact(pair: ShaderPair, output_dir: Path, target: Target) -> GeneratedArtifact:
    """Read, extract, validate and render a shader pair.

    Raises:
        GlslTypesError: The first error found; no artifact is produced
    """
    vertex = read_shader(pair.vertex, ShaderStage.VERTEX)
    fragment = read_shader(pair.fragment, ShaderStage.FRAGMENT)

    merged = validate_and_merge(collect_interface(vertex), collect_interface(fragment))

    return generate_artifact(
        merged, vertex.text, fragment.text, pair.vertex, output_dir, target
    )


def _dependencies(trigger: Path) -> tuple[ImportMap | None, GlslTypesError | None]:
    if not trigger.is_file():
        return None, None
    try:
        return file_imports(trigger), None
    except GlslTypesError as e:
        return None, e


def run_cycle(trigger: Path, output_dir: Path, target: Target) -> CycleOutcome | None:
    """Regenerate the binding of the shader pair a changed file belongs to.

    Args:
        trigger: Changed file
        output_dir: Directory the binding is written to
        target: Binding dialect

    Returns:
        The cycle outcome, or None if the file is not a vertex/fragment shader
    """
    start = time.perf_counter()
    try:
        pair = pair_shader_files(trigger)
        if pair is None:
            logger.debug(f"Ignoring non-shader file {trigger}")
            return None
        artifact = build_artifact(pair, output_dir, target)
        write_artifact(artifact)
    except GlslTypesError as e:
        imports, import_error = _dependencies(trigger)
        return CycleFailed(
            trigger=trigger,
            error=e,
            finished_at=arrow.utcnow(),
            imports=imports,
            import_error=import_error,
        )

    elapsed = time.perf_counter() - start
    imports, import_error = _dependencies(trigger)
    return CycleSucceeded(
        trigger=trigger,
        artifact=artifact,
        elapsed=elapsed,
        finished_at=arrow.utcnow(),
        imports=imports,
        import_error=import_error,
    )
