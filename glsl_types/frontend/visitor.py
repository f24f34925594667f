"""GLSL syntax tree visitor"""

from typing import Generic, TypeVar

from glsl_types.frontend.nodes import (
    ExternalDeclaration,
    FunctionDefinition,
    FunctionPrototype,
    Import,
    InterfaceBlock,
    Precision,
    Preprocessor,
    StructDefinition,
    TranslationUnit,
    VariableDeclaration,
)

T = TypeVar("T")


class SyntaxVisitor(Generic[T]):
    """Base visitor with one method per node kind.

    Every method returns None by default, so subclasses only override the
    node kinds they care about.
    """

    def walk(self, unit: TranslationUnit) -> list[T | None]:
        """Visit every top-level declaration of a translation unit in order."""
        return [self.visit(node) for node in unit.declarations]

    def visit(self, node: ExternalDeclaration) -> T | None:
        """Dispatch on the node kind"""
        match node:
            case Preprocessor():
                return self.visit_preprocessor(node)
            case Import():
                return self.visit_import(node)
            case Precision():
                return self.visit_precision(node)
            case VariableDeclaration():
                return self.visit_variable_declaration(node)
            case InterfaceBlock():
                return self.visit_interface_block(node)
            case StructDefinition():
                return self.visit_struct_definition(node)
            case FunctionPrototype():
                return self.visit_function_prototype(node)
            case FunctionDefinition():
                return self.visit_function_definition(node)
            case _:
                raise TypeError(f"Unknown syntax node: {type(node).__name__}")

    def visit_preprocessor(self, node: Preprocessor) -> T | None:
        return None

    def visit_import(self, node: Import) -> T | None:
        return None

    def visit_precision(self, node: Precision) -> T | None:
        return None

    def visit_variable_declaration(self, node: VariableDeclaration) -> T | None:
        return None

    def visit_interface_block(self, node: InterfaceBlock) -> T | None:
        return None

    def visit_struct_definition(self, node: StructDefinition) -> T | None:
        return None

    def visit_function_prototype(self, node: FunctionPrototype) -> T | None:
        return None

    def visit_function_definition(self, node: FunctionDefinition) -> T | None:
        return None
