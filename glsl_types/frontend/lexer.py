"""
Tokenizer for GLSL source text.

Only what is needed to walk top-level declarations is distinguished:
identifiers, numbers, string literals (used by import directives),
punctuation and whole preprocessor lines. Comments and whitespace are dropped.
"""

import re
from dataclasses import dataclass
from enum import Enum, auto
from pathlib import Path

from glsl_types.errors import ParseError


class TokenKind(Enum):
    """Kind of a lexical token."""

    IDENTIFIER = auto()
    NUMBER = auto()
    STRING = auto()
    PUNCT = auto()
    PREPROCESSOR = auto()
    EOF = auto()


@dataclass(frozen=True)
class Token:
    """A lexical token with its 1-based source position."""

    kind: TokenKind
    value: str
    lineno: int
    col_offset: int

    def is_punct(self, value: str) -> bool:
        return self.kind is TokenKind.PUNCT and self.value == value

    def is_identifier(self, value: str | None = None) -> bool:
        if self.kind is not TokenKind.IDENTIFIER:
            return False
        return value is None or self.value == value


_TOKEN_SPEC = [
    ("NEWLINE", r"\n"),
    ("WHITESPACE", r"[ \t\r\f\v]+"),
    ("LINE_COMMENT", r"//[^\n]*"),
    ("BLOCK_COMMENT", r"/\*.*?\*/"),
    ("UNTERMINATED_COMMENT", r"/\*"),
    # Backslash-newline continues a directive on the next line
    ("PREPROCESSOR", r"\#(?:\\\n|[^\n])*"),
    ("STRING", r'"[^"\n]*"'),
    ("UNTERMINATED_STRING", r'"'),
    ("NUMBER", r"0[xX][0-9a-fA-F]+[uU]?|(?:\d+\.\d*|\.\d+|\d+)(?:[eE][+-]?\d+)?(?:lf|LF|[fFuU])?"),
    ("IDENTIFIER", r"[A-Za-z_]\w*"),
    (
        "PUNCT",
        r"<<=|>>=|\+\+|--|<<|>>|<=|>=|==|!=|&&|\|\||\^\^|\+=|-=|\*=|/=|%=|&=|\^=|\|="
        r"|[{}()\[\];,.:?=+\-*/%<>!~&|^]",
    ),
    ("MISMATCH", r"."),
]

_TOKEN_RE = re.compile(
    "|".join(f"(?P<{name}>{pattern})" for name, pattern in _TOKEN_SPEC),
    re.DOTALL,
)

_SKIPPED = {"NEWLINE", "WHITESPACE", "LINE_COMMENT", "BLOCK_COMMENT"}


def tokenize(text: str, path: str | Path | None = None) -> list[Token]:
    """Split GLSL source text into tokens.

    Args:
        text: Shader source text
        path: Optional file the text was read from, used in error messages

    Returns:
        List of tokens terminated by a single EOF token

    Raises:
        ParseError: On an unterminated comment or string, or a stray character
    """
    tokens: list[Token] = []
    lineno = 1
    line_start = 0

    for match in _TOKEN_RE.finditer(text):
        kind = match.lastgroup
        value = match.group()
        column = match.start() - line_start + 1

        if kind == "UNTERMINATED_COMMENT":
            raise ParseError("Unterminated block comment", path, lineno, column)
        if kind == "UNTERMINATED_STRING":
            raise ParseError("Unterminated string literal", path, lineno, column)
        if kind == "MISMATCH":
            raise ParseError(f"Unexpected character {value!r}", path, lineno, column)

        if kind not in _SKIPPED:
            tokens.append(Token(TokenKind[kind], value, lineno, column))

        newlines = value.count("\n")
        if newlines:
            lineno += newlines
            line_start = match.start() + value.rindex("\n") + 1

    tokens.append(Token(TokenKind.EOF, "", lineno, len(text) - line_start + 1))
    return tokens
