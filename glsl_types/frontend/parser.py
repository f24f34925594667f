"""
Top-level parser for GLSL translation units.

The parser recognises external declarations only. Function bodies,
initialisers and struct/block member lists are skipped by matching balanced
delimiters, which is all the interface extraction needs.
"""

from pathlib import Path

from loguru import logger

from glsl_types.errors import ParseError
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

# Storage, auxiliary, interpolation, invariance, precision and memory qualifiers
QUALIFIERS = frozenset(
    {
        "const",
        "in",
        "out",
        "inout",
        "attribute",
        "uniform",
        "varying",
        "buffer",
        "shared",
        "centroid",
        "sample",
        "patch",
        "flat",
        "smooth",
        "noperspective",
        "invariant",
        "precise",
        "highp",
        "mediump",
        "lowp",
        "coherent",
        "volatile",
        "restrict",
        "readonly",
        "writeonly",
    }
)

PRECISION_QUALIFIERS = frozenset({"highp", "mediump", "lowp"})

_BRACKETS = {"(": ")", "[": "]", "{": "}"}
_CLOSING = frozenset(_BRACKETS.values())


class _Parser:
    """Recursive descent over the token stream of one source."""

    def __init__(self, tokens: list[Token], path: str | Path | None):
        self.tokens = tokens
        self.path = path
        self.pos = 0

    # --- Token helpers ---

    @property
    def current(self) -> Token:
        return self.tokens[self.pos]

    def peek(self, offset: int = 1) -> Token:
        index = min(self.pos + offset, len(self.tokens) - 1)
        return self.tokens[index]

    def advance(self) -> Token:
        token = self.tokens[self.pos]
        if token.kind is not TokenKind.EOF:
            self.pos += 1
        return token

    def error(self, message: str, token: Token | None = None) -> ParseError:
        token = token or self.current
        return ParseError(message, self.path, token.lineno, token.col_offset)

    def describe(self, token: Token) -> str:
        if token.kind is TokenKind.EOF:
            return "end of file"
        return repr(token.value)

    def expect_punct(self, value: str) -> Token:
        if not self.current.is_punct(value):
            raise self.error(
                f"Expected {value!r}, found {self.describe(self.current)}"
            )
        return self.advance()

    def expect_identifier(self, what: str = "identifier") -> Token:
        if self.current.kind is not TokenKind.IDENTIFIER:
            raise self.error(f"Expected {what}, found {self.describe(self.current)}")
        return self.advance()

    def skip_balanced(self) -> None:
        """Skip a bracketed group starting at the current opening token."""
        opening = self.advance()
        stack = [_BRACKETS[opening.value]]
        while stack:
            token = self.advance()
            if token.kind is TokenKind.EOF:
                raise self.error(f"Unclosed {opening.value!r}", opening)
            if token.kind is not TokenKind.PUNCT:
                continue
            if token.value in _BRACKETS:
                stack.append(_BRACKETS[token.value])
            elif token.value in _CLOSING:
                if token.value != stack[-1]:
                    raise self.error(f"Unbalanced {token.value!r}", token)
                stack.pop()

    def skip_initializer(self) -> None:
        """Skip an initialiser up to the next top-level ',' or ';'."""
        while True:
            token = self.current
            if token.kind is TokenKind.EOF:
                raise self.error("Expected ';' after declaration")
            if token.kind is TokenKind.PUNCT:
                if token.value in (",", ";"):
                    return
                if token.value in _BRACKETS:
                    self.skip_balanced()
                    continue
                if token.value in _CLOSING:
                    raise self.error(f"Unbalanced {token.value!r}", token)
            self.advance()

    # --- Grammar ---

    def parse(self) -> TranslationUnit:
        unit = TranslationUnit()
        while self.current.kind is not TokenKind.EOF:
            if self.current.is_punct(";"):
                self.advance()
                continue
            unit.declarations.append(self.external_declaration())
        return unit

    def external_declaration(self) -> ExternalDeclaration:
        token = self.current
        if token.kind is TokenKind.PREPROCESSOR:
            self.advance()
            return Preprocessor(token.lineno, token.col_offset, token.value)
        if token.is_identifier("import"):
            return self.import_directive()
        if token.is_identifier("precision"):
            return self.precision_statement()
        if token.kind is not TokenKind.IDENTIFIER:
            raise self.error(f"Unexpected token {self.describe(token)}")
        return self.declaration()

    def import_directive(self) -> Import:
        start = self.advance()
        identifier = self.expect_identifier("import identifier").value
        if not self.current.is_identifier("from"):
            raise self.error(
                f"Expected 'from' in import, found {self.describe(self.current)}"
            )
        self.advance()
        if self.current.kind is not TokenKind.STRING:
            raise self.error("Expected a quoted path in import")
        path = self.advance().value[1:-1]
        if not path:
            raise self.error("Empty import path", start)
        self.expect_punct(";")

        style = PathStyle.ABSOLUTE if Path(path).is_absolute() else PathStyle.RELATIVE
        return Import(start.lineno, start.col_offset, identifier, path, style)

    def precision_statement(self) -> Precision:
        start = self.advance()
        qualifier = self.expect_identifier("precision qualifier")
        if qualifier.value not in PRECISION_QUALIFIERS:
            raise self.error(f"Invalid precision qualifier {qualifier.value!r}", qualifier)
        type_name = self.expect_identifier("type").value
        self.expect_punct(";")
        return Precision(start.lineno, start.col_offset, qualifier.value, type_name)

    def qualifiers(self) -> tuple[str, ...]:
        found: list[str] = []
        while True:
            token = self.current
            if token.is_identifier("layout"):
                self.advance()
                if not self.current.is_punct("("):
                    raise self.error("Expected '(' after layout")
                self.skip_balanced()
                found.append("layout")
            elif token.kind is TokenKind.IDENTIFIER and token.value in QUALIFIERS:
                self.advance()
                found.append(token.value)
            else:
                return tuple(found)

    def declaration(self) -> ExternalDeclaration:
        start = self.current
        qualifiers = self.qualifiers()

        # Qualifier-only statement, e.g. `layout(early_fragment_tests) in;`
        if self.current.is_punct(";"):
            self.advance()
            return VariableDeclaration(
                start.lineno, start.col_offset, qualifiers, type_name=""
            )

        if self.current.is_identifier("struct"):
            return self.struct_definition(start, qualifiers)

        type_token = self.expect_identifier("type")
        if self.current.is_punct("{"):
            return self.interface_block(start, qualifiers, type_token.value)

        type_array_dims = self.array_dims()

        if self.current.is_punct(";"):
            self.advance()
            return VariableDeclaration(
                start.lineno,
                start.col_offset,
                qualifiers,
                type_name=type_token.value,
                type_array_dims=type_array_dims,
            )

        name = self.expect_identifier("declaration name")
        if self.current.is_punct("("):
            return self.function(start, type_token.value, name.value)

        declarators = self.declarators(name)
        return VariableDeclaration(
            start.lineno,
            start.col_offset,
            qualifiers,
            type_name=type_token.value,
            type_array_dims=type_array_dims,
            declarators=declarators,
        )

    def array_dims(self) -> tuple[str, ...]:
        """Consume trailing `[...]` suffixes and return their size expressions."""
        dims: list[str] = []
        while self.current.is_punct("["):
            start = self.pos
            self.skip_balanced()
            dims.append("".join(t.value for t in self.tokens[start + 1 : self.pos - 1]))
        return tuple(dims)

    def declarator(self, name: Token) -> Declarator:
        return Declarator(name.lineno, name.col_offset, name.value, self.array_dims())

    def declarators(self, first: Token) -> tuple[Declarator, ...]:
        found = [self.declarator(first)]
        while True:
            if self.current.is_punct("="):
                self.advance()
                self.skip_initializer()
            if self.current.is_punct(","):
                self.advance()
                found.append(self.declarator(self.expect_identifier("declaration name")))
                continue
            self.expect_punct(";")
            return tuple(found)

    def function(
        self, start: Token, return_type: str, name: str
    ) -> FunctionPrototype | FunctionDefinition:
        self.skip_balanced()
        if self.current.is_punct("{"):
            self.skip_balanced()
            return FunctionDefinition(start.lineno, start.col_offset, return_type, name)
        self.expect_punct(";")
        return FunctionPrototype(start.lineno, start.col_offset, return_type, name)

    def interface_block(
        self, start: Token, qualifiers: tuple[str, ...], block_name: str
    ) -> InterfaceBlock:
        self.skip_balanced()
        instance = None
        if self.current.kind is TokenKind.IDENTIFIER:
            instance = self.declarator(self.advance())
        self.expect_punct(";")
        return InterfaceBlock(
            start.lineno, start.col_offset, qualifiers, block_name, instance
        )

    def struct_definition(
        self, start: Token, qualifiers: tuple[str, ...]
    ) -> StructDefinition:
        self.advance()
        name = ""
        if self.current.kind is TokenKind.IDENTIFIER:
            name = self.advance().value
        if not self.current.is_punct("{"):
            raise self.error("Expected '{' in struct definition")
        self.skip_balanced()

        declarators: tuple[Declarator, ...] = ()
        if self.current.kind is TokenKind.IDENTIFIER:
            declarators = self.declarators(self.advance())
        else:
            self.expect_punct(";")
        return StructDefinition(
            start.lineno, start.col_offset, name, qualifiers, declarators
        )


def parse(text: str, path: str | Path | None = None) -> TranslationUnit:
    """Parse GLSL source text into a translation unit.

    Args:
        text: Shader source text
        path: Optional file the text was read from, used in error messages

    Returns:
        TranslationUnit holding the top-level declarations in source order

    Raises:
        ParseError: If the text is not a syntactically valid translation unit
    """
    unit = _Parser(tokenize(text, path), path).parse()
    logger.debug(f"Parsed {len(unit.declarations)} declarations from {path or '<text>'}")
    return unit
