"""Command line interface for glsl-types.

This module provides a command-line interface for generating typed bindings
from paired vertex/fragment GLSL shaders, either once or continuously while
watching a folder.
"""

import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar, cast

import typer
from loguru import logger

from glsl_types.config import (
    DEFAULT_DEBOUNCE_MS,
    DEFAULT_INPUT_FOLDER,
    DEFAULT_OUTPUT_FOLDER,
    WatchConfig,
    ensure_directory,
    prepare_directories,
)
from glsl_types.errors import GlslTypesError
from glsl_types.pipeline import CycleFailed, run_cycle
from glsl_types.reporting import report_outcome
from glsl_types.target import TargetType
from glsl_types.watcher import WatchSession

# Define type variables for TypedCallable
F = TypeVar("F", bound=Callable[..., Any])


# TypedCommand decorator helper
def typed_command(app_command: Any) -> Callable[[F], F]:
    """Wrap typer command with proper typing for mypy."""

    def decorator(func: F) -> F:
        return cast(F, app_command(func))

    return decorator


app = typer.Typer(
    name="glsl-types",
    help=(
        "Generate typed bindings for GLSL uniforms and attributes. "
        "Commands: watch, generate."
    ),
    add_completion=False,
)


def configure_logging(verbose: bool) -> None:
    """Send log records to stderr at INFO, or DEBUG when verbose."""
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "INFO")


def _target_type(language: str) -> TargetType:
    try:
        return TargetType.from_name(language)
    except GlslTypesError as e:
        logger.error(str(e))
        raise typer.Exit(1) from e


@typed_command(app.command("watch"))
def watch_shaders(
    input_dir: Path = typer.Option(
        Path(DEFAULT_INPUT_FOLDER),
        "--input",
        "-i",
        envvar="GLSL_TYPES_INPUT",
        help="Input folder with glsl files",
    ),
    output_dir: Path = typer.Option(
        Path(DEFAULT_OUTPUT_FOLDER),
        "--output",
        "-o",
        envvar="GLSL_TYPES_OUTPUT",
        help="Output folder for the generated types",
    ),
    language: str = typer.Option(
        "ts",
        "--language",
        "-l",
        envvar="GLSL_TYPES_LANGUAGE",
        help="Output language (ts, js)",
    ),
    debounce_ms: int = typer.Option(
        DEFAULT_DEBOUNCE_MS,
        "--debounce",
        envvar="GLSL_TYPES_DEBOUNCE_MS",
        help="Quiet period per file before regenerating, in milliseconds",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logs"),
) -> None:
    """Watch a folder and regenerate bindings when shaders change.

    Every example.vert/example.frag pair below the input folder produces
    Example.ts in the output folder.

    Example: glsl-types watch --input shaders --output src/shaders
    """
    configure_logging(verbose)
    config = WatchConfig(
        input_dir=input_dir,
        output_dir=output_dir,
        target_type=_target_type(language),
        debounce_ms=debounce_ms,
    )

    try:
        prepare_directories(config)
        session = WatchSession(config)
        logger.info("GLSL Types Generator")
        session.run()
    except GlslTypesError as e:
        logger.error(str(e))
        raise typer.Exit(1) from e


@typed_command(app.command("generate"))
def generate_types(
    shader_file: Path = typer.Argument(
        ..., help="Vertex or fragment shader of the pair to generate"
    ),
    output_dir: Path = typer.Option(
        Path(DEFAULT_OUTPUT_FOLDER),
        "--output",
        "-o",
        envvar="GLSL_TYPES_OUTPUT",
        help="Output folder for the generated types",
    ),
    language: str = typer.Option(
        "ts",
        "--language",
        "-l",
        envvar="GLSL_TYPES_LANGUAGE",
        help="Output language (ts, js)",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logs"),
) -> None:
    """Generate the bindings of one shader pair and exit.

    Example: glsl-types generate shaders/example.vert --output src/shaders
    """
    configure_logging(verbose)
    target = _target_type(language).create()

    try:
        ensure_directory(output_dir, DEFAULT_OUTPUT_FOLDER)
    except GlslTypesError as e:
        logger.error(str(e))
        raise typer.Exit(1) from e

    outcome = run_cycle(shader_file, output_dir, target)
    if outcome is None:
        logger.error(f"Not a vertex or fragment shader: {shader_file}")
        raise typer.Exit(1)

    report_outcome(outcome)
    if isinstance(outcome, CycleFailed):
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
