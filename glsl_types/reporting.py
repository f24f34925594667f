"""Presentation of cycle outcomes through loguru."""

import os
from pathlib import Path

from loguru import logger

from glsl_types.errors import PairingError
from glsl_types.pipeline import CycleFailed, CycleOutcome, CycleSucceeded


def _display_path(path: Path, root: Path | None) -> str:
    if root is None:
        return str(path)
    try:
        return os.path.relpath(path, root)
    except ValueError:
        # Different drives on Windows
        return str(path)


def _pairing_hint(error: PairingError) -> None:
    logger.info(f"Please create a {error.missing_stage.label} shader file: {error.missing_path}")
    logger.info(
        "When creating a shader, you need to create both the vertex and fragment "
        "shader files. For example, if you create example.vert, you also need "
        "to create example.frag."
    )


def report_outcome(outcome: CycleOutcome, root: Path | None = None) -> None:
    """Log the result of one regeneration cycle.

    Args:
        outcome: Outcome returned by the pipeline
        root: Directory paths are shown relative to
    """
    trigger = _display_path(outcome.trigger, root)

    match outcome:
        case CycleSucceeded():
            logger.info(
                f"Types generated for the shader file: {trigger} "
                f"({outcome.elapsed * 1000:.2f}ms) -> {outcome.artifact.destination}"
            )
        case CycleFailed(error=PairingError() as error):
            logger.error(f"Missing shader files: {trigger}")
            _pairing_hint(error)
        case CycleFailed(error=error):
            logger.error(f"Failed to generate types for {trigger}: {error}")

    if outcome.imports:
        for identifier, path in outcome.imports.items():
            logger.info(f"  import {identifier} -> {path}")
    if outcome.import_error is not None:
        logger.warning(f"Could not resolve imports of {trigger}: {outcome.import_error}")
