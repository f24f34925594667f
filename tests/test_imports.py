"""Tests for import resolution between shader files."""

import os

import pytest

from glsl_types.errors import UniformTypeConflict, UnresolvedImport, VaryingTypeConflict
from glsl_types.extractor import read_shader
from glsl_types.frontend import parse
from glsl_types.imports import collect_interface, file_imports, resolve_imports
from glsl_types.models import ShaderStage


class TestResolveImports:
    """Test cases for the resolve_imports function."""

    def test_relative_import(self, write_shader, shader_dir):
        """Test that a relative import resolves next to the importing file."""
        # Arrange
        common = write_shader("common.glsl", "uniform float time;\n")
        vertex = write_shader("a.vert", 'import common from "./common.glsl";\n')

        # Act
        imports = resolve_imports(parse(vertex.read_text(), vertex), vertex)

        # Assert
        assert imports == {"common": common.resolve()}
        assert imports["common"].is_absolute()

    def test_parent_directory_is_canonicalized(self, write_shader):
        """Test that '..' segments are resolved."""
        # Arrange
        lib = write_shader("lib/noise.glsl", "")
        vertex = write_shader("effects/a.vert", 'import noise from "../lib/noise.glsl";')

        # Act
        imports = file_imports(vertex)

        # Assert
        assert imports["noise"] == lib.resolve()
        assert ".." not in imports["noise"].parts

    def test_absolute_import(self, write_shader):
        """Test that an absolute path is used as given."""
        # Arrange
        lib = write_shader("lib.glsl", "")
        vertex = write_shader("a.vert", f'import lib from "{lib.resolve().as_posix()}";')

        # Act
        imports = file_imports(vertex)

        # Assert
        assert imports == {"lib": lib.resolve()}

    def test_bare_path_is_relative_to_importer(self, write_shader, tmp_path, monkeypatch):
        """Test that a path without ./ resolves next to the importing file."""
        # Arrange
        common = write_shader("common.glsl", "")
        vertex = write_shader("a.vert", 'import common from "common.glsl";')
        elsewhere = tmp_path / "elsewhere"
        elsewhere.mkdir()
        (elsewhere / "common.glsl").write_text("")
        monkeypatch.chdir(elsewhere)

        # Act
        imports = file_imports(vertex)

        # Assert
        assert imports == {"common": common.resolve()}

    @pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unavailable")
    def test_symlinks_are_followed(self, write_shader, shader_dir):
        """Test that the canonical path of a symlinked import is its target."""
        # Arrange
        real = write_shader("real.glsl", "")
        (shader_dir / "link.glsl").symlink_to(real)
        vertex = write_shader("a.vert", 'import l from "./link.glsl";')

        # Act
        imports = file_imports(vertex)

        # Assert
        assert imports["l"] == real.resolve()

    def test_missing_import(self, write_shader):
        """Test that a nonexistent target raises UnresolvedImport."""
        # Arrange
        vertex = write_shader("a.vert", 'import nope from "./nope.glsl";')

        # Act & Assert
        with pytest.raises(UnresolvedImport) as excinfo:
            file_imports(vertex)
        assert excinfo.value.import_path.name == "nope.glsl"
        assert "a.vert" in str(excinfo.value)

    def test_duplicate_identifier_last_wins(self, write_shader, log_messages):
        """Test that a repeated identifier keeps the last path and warns."""
        # Arrange
        write_shader("one.glsl", "")
        two = write_shader("two.glsl", "")
        vertex = write_shader(
            "a.vert", 'import lib from "./one.glsl";\nimport lib from "./two.glsl";'
        )

        # Act
        imports = file_imports(vertex)

        # Assert
        assert imports == {"lib": two.resolve()}
        assert any("shadows" in message for message in log_messages)

    def test_import_order(self, write_shader):
        """Test that the map follows directive order."""
        # Arrange
        write_shader("b.glsl", "")
        write_shader("a.glsl", "")
        vertex = write_shader(
            "x.vert", 'import b from "./b.glsl";\nimport a from "./a.glsl";'
        )

        # Act & Assert
        assert list(file_imports(vertex)) == ["b", "a"]


class TestCollectInterface:
    """Test cases for merging imported declarations."""

    def test_imported_declarations_are_appended(self, write_shader):
        """Test that imported declarations follow the shader's own."""
        # Arrange
        write_shader("common.glsl", "uniform float time;\nuniform vec2 resolution;\n")
        vertex = write_shader(
            "a.vert",
            'import common from "./common.glsl";\nuniform mat4 mvp;\nin vec3 position;\n',
        )

        # Act
        interface = collect_interface(read_shader(vertex, ShaderStage.VERTEX))

        # Assert
        assert list(interface.uniforms) == ["mvp", "time", "resolution"]
        assert list(interface.attributes) == ["position"]

    def test_transitive_imports(self, write_shader):
        """Test that imports of imports are merged depth-first."""
        # Arrange
        write_shader("base.glsl", "uniform float base;")
        write_shader("mid.glsl", 'import base from "./base.glsl";\nuniform float mid;')
        write_shader("other.glsl", "uniform float other;")
        fragment = write_shader(
            "a.frag",
            'import mid from "./mid.glsl";\nimport other from "./other.glsl";\n',
        )

        # Act
        interface = collect_interface(read_shader(fragment, ShaderStage.FRAGMENT))

        # Assert
        assert list(interface.uniforms) == ["mid", "base", "other"]

    def test_import_cycles_terminate(self, write_shader):
        """Test that mutually importing files are merged once."""
        # Arrange
        write_shader("a.glsl", 'import b from "./b.glsl";\nuniform float a;')
        write_shader("b.glsl", 'import a from "./a.glsl";\nuniform float b;')
        vertex = write_shader("s.vert", 'import a from "./a.glsl";')

        # Act
        interface = collect_interface(read_shader(vertex, ShaderStage.VERTEX))

        # Assert
        assert list(interface.uniforms) == ["a", "b"]

    def test_imports_use_importer_stage(self, write_shader):
        """Test that `in` declarations of an import follow the importer's stage."""
        # Arrange
        write_shader("io.glsl", "in vec3 normal;")
        fragment = write_shader("s.frag", 'import io from "./io.glsl";')

        # Act
        interface = collect_interface(read_shader(fragment, ShaderStage.FRAGMENT))

        # Assert
        assert list(interface.varyings) == ["normal"]

    def test_same_declaration_is_merged_once(self, write_shader):
        """Test that an identical redeclaration in an import is accepted."""
        # Arrange
        write_shader("common.glsl", "uniform float time;")
        vertex = write_shader(
            "s.vert", 'import common from "./common.glsl";\nuniform float time;'
        )

        # Act
        interface = collect_interface(read_shader(vertex, ShaderStage.VERTEX))

        # Assert
        assert list(interface.uniforms) == ["time"]

    def test_conflicting_uniform_import(self, write_shader):
        """Test that an import redeclaring a uniform with another type fails."""
        # Arrange
        write_shader("common.glsl", "uniform vec2 time;")
        vertex = write_shader(
            "s.vert", 'import common from "./common.glsl";\nuniform float time;'
        )

        # Act & Assert
        with pytest.raises(UniformTypeConflict):
            collect_interface(read_shader(vertex, ShaderStage.VERTEX))

    def test_conflicting_varying_import(self, write_shader):
        """Test that an import redeclaring a varying with another type fails."""
        # Arrange
        write_shader("common.glsl", "out vec2 v;")
        vertex = write_shader("s.vert", 'import common from "./common.glsl";\nout vec3 v;')

        # Act & Assert
        with pytest.raises(VaryingTypeConflict):
            collect_interface(read_shader(vertex, ShaderStage.VERTEX))

    def test_conflicting_array_import(self, write_shader):
        """Test that an import redeclaring an array with another size fails."""
        # Arrange
        write_shader("common.glsl", "uniform float weights[4];")
        vertex = write_shader(
            "s.vert", 'import common from "./common.glsl";\nuniform float weights[8];'
        )

        # Act & Assert
        with pytest.raises(UniformTypeConflict):
            collect_interface(read_shader(vertex, ShaderStage.VERTEX))

    def test_conflicting_struct_import(self, write_shader):
        """Test that an import redeclaring a uniform with another struct fails."""
        # Arrange
        write_shader("common.glsl", "struct A { float f; };\nuniform A light;")
        vertex = write_shader(
            "s.vert",
            'import common from "./common.glsl";\nstruct B { float f; };\nuniform B light;',
        )

        # Act & Assert
        with pytest.raises(UniformTypeConflict):
            collect_interface(read_shader(vertex, ShaderStage.VERTEX))

    def test_unresolved_import_propagates(self, write_shader):
        """Test that a missing import target fails the collection."""
        # Arrange
        vertex = write_shader("s.vert", 'import gone from "./gone.glsl";')

        # Act & Assert
        with pytest.raises(UnresolvedImport):
            collect_interface(read_shader(vertex, ShaderStage.VERTEX))
