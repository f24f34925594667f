"""GLSL syntax tree node definitions.

The tree only models top-level external declarations. The set of node kinds
is closed: every item of a translation unit is exactly one of the classes
listed in ``ExternalDeclaration``.
"""

from dataclasses import dataclass, field
from enum import Enum, auto


@dataclass
class Node:
    """Base syntax node"""

    lineno: int
    col_offset: int


@dataclass
class Declarator(Node):
    """One declared name, e.g. ``b[4]`` in ``uniform float a, b[4];``

    Array sizes are kept as written, ``""`` for an unsized dimension.
    """

    name: str
    array_dims: tuple[str, ...] = ()

    @property
    def is_array(self) -> bool:
        return bool(self.array_dims)


@dataclass
class Preprocessor(Node):
    """A whole preprocessor line such as ``#version 300 es``"""

    text: str


class PathStyle(Enum):
    """How an import path is anchored."""

    ABSOLUTE = auto()
    RELATIVE = auto()


@dataclass
class Import(Node):
    """``import <identifier> from "<path>";``"""

    identifier: str
    path: str
    style: PathStyle


@dataclass
class Precision(Node):
    """``precision highp float;``"""

    qualifier: str
    type_name: str


@dataclass
class VariableDeclaration(Node):
    """A global variable declaration with one or more declarators.

    A declaration with no declarators is a bare qualifier or type statement,
    e.g. ``invariant gl_Position;``.
    """

    qualifiers: tuple[str, ...]
    type_name: str
    type_array_dims: tuple[str, ...] = ()
    declarators: tuple[Declarator, ...] = ()

    @property
    def type_is_array(self) -> bool:
        return bool(self.type_array_dims)


@dataclass
class InterfaceBlock(Node):
    """``uniform Lights { ... } lights;``"""

    qualifiers: tuple[str, ...]
    block_name: str
    instance: Declarator | None = None


@dataclass
class StructDefinition(Node):
    """``struct Light { ... };``, optionally declaring variables of that type."""

    name: str
    qualifiers: tuple[str, ...] = ()
    declarators: tuple[Declarator, ...] = ()


@dataclass
class FunctionPrototype(Node):
    """A function declaration without a body."""

    return_type: str
    name: str


@dataclass
class FunctionDefinition(Node):
    """A function declaration with its (skipped) body."""

    return_type: str
    name: str


ExternalDeclaration = (
    Preprocessor
    | Import
    | Precision
    | VariableDeclaration
    | InterfaceBlock
    | StructDefinition
    | FunctionPrototype
    | FunctionDefinition
)


@dataclass
class TranslationUnit:
    """All top-level declarations of one shader, in source order."""

    declarations: list[ExternalDeclaration] = field(default_factory=list)
