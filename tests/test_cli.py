"""Tests for the glsl-types command-line interface."""

import sys
from unittest.mock import patch

import pytest
from loguru import logger
from typer.testing import CliRunner

from glsl_types.main import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def restore_logger():
    """Undo the handlers installed by the commands."""
    yield
    logger.remove()
    logger.add(sys.stderr)


@pytest.fixture
def quad(write_shader):
    vertex = write_shader("quad.vert", "uniform float time;\nin vec3 position;")
    write_shader("quad.frag", "uniform float time;\nuniform vec3 color;")
    return vertex


def test_help():
    """Test that the CLI help command works."""
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "Generate typed bindings for GLSL" in result.stdout


def test_watch_help():
    result = runner.invoke(app, ["watch", "--help"])
    assert result.exit_code == 0
    assert "--debounce" in result.stdout


def test_generate(quad, output_dir):
    """Test generating the bindings of one pair."""
    # Act
    result = runner.invoke(app, ["generate", str(quad), "--output", str(output_dir)])

    # Assert
    assert result.exit_code == 0
    content = (output_dir / "Quad.ts").read_text()
    assert "export const Quad = {" in content
    assert 'color: "vec3",' in content


def test_generate_javascript(quad, output_dir):
    result = runner.invoke(
        app, ["generate", str(quad), "-o", str(output_dir), "--language", "js"]
    )
    assert result.exit_code == 0
    assert (output_dir / "Quad.js").is_file()


def test_generate_language_from_env(quad, output_dir):
    result = runner.invoke(
        app,
        ["generate", str(quad), "-o", str(output_dir)],
        env={"GLSL_TYPES_LANGUAGE": "javascript"},
    )
    assert result.exit_code == 0
    assert (output_dir / "Quad.js").is_file()


def test_generate_unsupported_language(quad, output_dir):
    """Test that an unknown dialect exits with an error."""
    result = runner.invoke(app, ["generate", str(quad), "-o", str(output_dir), "-l", "rs"])
    assert result.exit_code == 1
    assert list(output_dir.iterdir()) == []


def test_generate_failure(write_shader, output_dir):
    """Test that a failed cycle exits with an error and writes nothing."""
    # Arrange
    vertex = write_shader("quad.vert", "uniform float x;")
    write_shader("quad.frag", "uniform int x;")

    # Act
    result = runner.invoke(app, ["generate", str(vertex), "-o", str(output_dir)])

    # Assert
    assert result.exit_code == 1
    assert list(output_dir.iterdir()) == []


def test_generate_non_shader(write_shader, output_dir):
    result = runner.invoke(
        app, ["generate", str(write_shader("common.glsl", "")), "-o", str(output_dir)]
    )
    assert result.exit_code == 1


def test_generate_missing_output_folder(quad, tmp_path):
    result = runner.invoke(app, ["generate", str(quad), "-o", str(tmp_path / "nope")])
    assert result.exit_code == 1


def test_watch_starts_session(shader_dir, output_dir):
    """Test that watch builds its configuration from the options."""
    # Act
    with patch("glsl_types.main.WatchSession") as session_class:
        result = runner.invoke(
            app,
            ["watch", "-i", str(shader_dir), "-o", str(output_dir), "--debounce", "25"],
        )

    # Assert
    assert result.exit_code == 0
    (config,), _ = session_class.call_args
    assert config.input_dir == shader_dir
    assert config.output_dir == output_dir
    assert config.debounce_ms == 25
    session_class.return_value.run.assert_called_once()


def test_watch_creates_default_folders(tmp_path, monkeypatch):
    """Test that the default input and output folders are created."""
    # Arrange
    monkeypatch.chdir(tmp_path)

    # Act
    with patch("glsl_types.main.WatchSession"):
        result = runner.invoke(app, ["watch"])

    # Assert
    assert result.exit_code == 0
    assert (tmp_path / "shaders").is_dir()
    assert (tmp_path / "output").is_dir()


def test_watch_missing_input(tmp_path, output_dir):
    """Test that a missing custom input folder exits with an error."""
    with patch("glsl_types.main.WatchSession") as session_class:
        result = runner.invoke(app, ["watch", "-i", str(tmp_path / "nope"), "-o", str(output_dir)])
    assert result.exit_code == 1
    session_class.assert_not_called()
