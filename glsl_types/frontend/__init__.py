"""GLSL front end: tokenizer, top-level parser and syntax tree."""

from glsl_types.frontend.lexer import Token, TokenKind, tokenize
from glsl_types.frontend.nodes import (
    Declarator,
    ExternalDeclaration,
    FunctionDefinition,
    FunctionPrototype,
    Import,
    InterfaceBlock,
    PathStyle,
    Precision,
    Preprocessor,
    StructDefinition,
    TranslationUnit,
    VariableDeclaration,
)
from glsl_types.frontend.parser import parse
from glsl_types.frontend.visitor import SyntaxVisitor

__all__ = [
    "Declarator",
    "ExternalDeclaration",
    "FunctionDefinition",
    "FunctionPrototype",
    "Import",
    "InterfaceBlock",
    "PathStyle",
    "Precision",
    "Preprocessor",
    "StructDefinition",
    "SyntaxVisitor",
    "Token",
    "TokenKind",
    "TranslationUnit",
    "VariableDeclaration",
    "parse",
    "tokenize",
]
