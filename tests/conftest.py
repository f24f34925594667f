"""Fixtures and configuration for pytest."""

import textwrap
from collections.abc import Callable
from pathlib import Path

import pytest
from loguru import logger


@pytest.fixture
def shader_dir(tmp_path: Path) -> Path:
    """Create an empty input folder."""
    path = tmp_path / "shaders"
    path.mkdir()
    return path


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    """Create an empty output folder."""
    path = tmp_path / "output"
    path.mkdir()
    return path


@pytest.fixture
def write_shader(shader_dir: Path) -> Callable[[str, str], Path]:
    """Return a helper writing dedented shader text below the input folder."""

    def write(name: str, source: str) -> Path:
        path = shader_dir / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(source))
        return path

    return write


@pytest.fixture
def log_messages():
    """Capture loguru messages emitted during a test."""
    messages: list[str] = []
    handler_id = logger.add(
        lambda message: messages.append(message.record["message"]), level="DEBUG"
    )
    yield messages
    logger.remove(handler_id)
