"""
Import resolution between shader files.

A shader can pull declarations from another file with
``import common from "./common.glsl";``. This module maps those directives to
canonical paths and merges the declarations of imported files into the
importing shader's interface.
"""

from pathlib import Path

from loguru import logger

from glsl_types.errors import (
    UniformTypeConflict,
    UnresolvedImport,
    VaryingTypeConflict,
)
from glsl_types.extractor import interface_from_unit, read_shader, read_text
from glsl_types.frontend import Import, PathStyle, SyntaxVisitor, TranslationUnit, parse
from glsl_types.models import (
    DeclarationKind,
    ImportMap,
    ShaderInterface,
    ShaderSource,
)


def canonical_path(path: Path) -> Path:
    """Resolve a path against the filesystem.

    Raises:
        UnresolvedImport: If the path does not exist
    """
    try:
        return path.resolve(strict=True)
    except (OSError, RuntimeError) as e:
        raise UnresolvedImport(path) from e


class _ImportCollector(SyntaxVisitor[None]):
    """Builds the identifier -> path map of one file."""

    def __init__(self, file_path: Path):
        self.file_path = file_path
        self.base_path = file_path.parent
        self.imports: ImportMap = {}

    def visit_import(self, node: Import) -> None:
        match node.style:
            case PathStyle.ABSOLUTE:
                target = Path(node.path)
            case PathStyle.RELATIVE:
                target = self.base_path / node.path

        try:
            resolved = canonical_path(target)
        except UnresolvedImport as e:
            raise UnresolvedImport(node.path, self.file_path) from e

        previous = self.imports.get(node.identifier)
        if previous is not None and previous != resolved:
            logger.warning(
                f"Import {node.identifier!r} in {self.file_path} shadows "
                f"{previous} with {resolved}"
            )
        self.imports[node.identifier] = resolved


def resolve_imports(unit: TranslationUnit, file_path: Path) -> ImportMap:
    """Map the import directives of a parsed file to canonical paths.

    Args:
        unit: Parsed translation unit
        file_path: File the unit was parsed from

    Returns:
        Ordered mapping from import identifier to canonical absolute path.
        A repeated identifier keeps the last path.

    Raises:
        UnresolvedImport: If an import target does not exist
    """
    collector = _ImportCollector(file_path)
    collector.walk(unit)
    return collector.imports


def file_imports(file_path: Path) -> ImportMap:
    """Read, parse and resolve the imports of one shader file.

    Raises:
        ShaderIOError: If the file cannot be read
        ParseError: If the file is not valid GLSL
        UnresolvedImport: If an import target does not exist
    """
    text = read_text(file_path)
    return resolve_imports(parse(text, file_path), file_path)


def merge_declarations(interface: ShaderInterface, imported: ShaderInterface) -> None:
    """Append the declarations of an imported file to an interface.

    Declarations already present keep their position and must agree in type.

    Raises:
        UniformTypeConflict: A uniform or attribute is imported with another type
        VaryingTypeConflict: A varying is imported with another type
    """
    for kind in DeclarationKind:
        declarations = interface.declarations(kind)
        for name, declaration in imported.declarations(kind).items():
            existing = declarations.get(name)
            if existing is None:
                declarations[name] = declaration
            elif not existing.same_type(declaration):
                if kind is DeclarationKind.VARYING:
                    raise VaryingTypeConflict(name)
                raise UniformTypeConflict(name)


def _merge_imports(
    interface: ShaderInterface,
    unit: TranslationUnit,
    file_path: Path,
    visited: set[Path],
) -> None:
    for identifier, target in resolve_imports(unit, file_path).items():
        if target in visited:
            continue
        visited.add(target)
        logger.debug(f"Merging import {identifier!r} from {target}")

        source = read_shader(target, interface.stage)
        imported_unit = parse(source.text, target)
        merge_declarations(
            interface, interface_from_unit(imported_unit, target, interface.stage)
        )
        _merge_imports(interface, imported_unit, target, visited)


def collect_interface(source: ShaderSource) -> ShaderInterface:
    """Extract a shader's interface including everything it imports.

    Imported files are interpreted in the importing shader's stage and visited
    depth-first in directive order; each file is merged at most once.

    Args:
        source: Shader to extract

    Returns:
        ShaderInterface with the shader's own declarations first

    Raises:
        ParseError: If the shader or an imported file is not valid GLSL
        UnresolvedImport: If an import target does not exist
        UniformTypeConflict: If an import redeclares a uniform with another type
        VaryingTypeConflict: If an import redeclares a varying with another type
    """
    unit = parse(source.text, source.path)
    interface = interface_from_unit(unit, source.path, source.stage)
    _merge_imports(interface, unit, source.path, {source.path.resolve()})
    return interface
