"""Configuration of a watch session."""

from dataclasses import dataclass
from pathlib import Path

from loguru import logger

from glsl_types.debounce import DEFAULT_DELAY
from glsl_types.errors import ConfigError
from glsl_types.target import DEFAULT_TARGET, TargetType

DEFAULT_INPUT_FOLDER = "shaders"
DEFAULT_OUTPUT_FOLDER = "output"
DEFAULT_DEBOUNCE_MS = int(DEFAULT_DELAY * 1000)


@dataclass
class WatchConfig:
    """Settings of one watch session.

    Attributes:
        input_dir: Directory tree watched for shader changes
        output_dir: Directory the bindings are written to
        target_type: Binding dialect
        debounce_ms: Quiescence window per file, in milliseconds
    """

    input_dir: Path = Path(DEFAULT_INPUT_FOLDER)
    output_dir: Path = Path(DEFAULT_OUTPUT_FOLDER)
    target_type: TargetType = DEFAULT_TARGET
    debounce_ms: int = DEFAULT_DEBOUNCE_MS

    @property
    def debounce_delay(self) -> float:
        return self.debounce_ms / 1000


def ensure_directory(path: Path, default: str) -> Path:
    """Make sure a configured directory exists.

    The default folder is created when missing; any other missing folder is
    a configuration error.

    Raises:
        ConfigError: If a non-default directory does not exist
    """
    if path.is_dir():
        return path
    if path.exists():
        raise ConfigError(f"Not a directory: {path}")
    if path == Path(default):
        logger.info(f"Creating folder {path}")
        path.mkdir(parents=True, exist_ok=True)
        return path
    raise ConfigError(f"Folder does not exist: {path}")


def prepare_directories(config: WatchConfig) -> None:
    """Bootstrap the input and output directories of a session.

    Raises:
        ConfigError: If a non-default directory does not exist
    """
    ensure_directory(config.input_dir, DEFAULT_INPUT_FOLDER)
    ensure_directory(config.output_dir, DEFAULT_OUTPUT_FOLDER)
    if config.debounce_ms < 0:
        raise ConfigError(f"Debounce window must not be negative: {config.debounce_ms}")
