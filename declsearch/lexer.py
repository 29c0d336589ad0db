"""C-family lexer used to normalise free-form queries.

Only identifiers and single-character punctuation survive tokenisation;
literals, comments, multi-character operators and whitespace are dropped.
Malformed input is treated as residue and skipped, so tokenising never
fails: a stray quote loses at most one following character, while an
unterminated string or block comment swallows the rest of its line or
input.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, List

logger = logging.getLogger(__name__)


class TokenKind(Enum):
    IDENTIFIER = "identifier"
    PUNCT = "punct"
    OPERATOR = "operator"
    INT = "int"
    FLOAT = "float"
    STRING = "string"
    CHAR = "char"
    COMMENT = "comment"
    WHITESPACE = "whitespace"
    RESIDUE = "residue"


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    text: str
    offset: int


# Kinds that contribute to the normalized query.
KEPT_KINDS = frozenset({TokenKind.IDENTIFIER, TokenKind.PUNCT})

# Order matters: the first alternative that matches at a position wins.
_RULES = [
    (TokenKind.WHITESPACE, r"\s+"),
    (TokenKind.COMMENT, r"//[^\n]*|/\*.*?\*/"),
    (TokenKind.RESIDUE, r"/\*.*\Z"),
    (TokenKind.STRING, r'"(?:\\.|[^"\\\n])*"'),
    (TokenKind.CHAR, r"'(?:\\.|[^'\\\n])'"),
    # A stray quote drops at most the character after it. An unterminated
    # string runs to the end of its line.
    (TokenKind.RESIDUE, r"'(?:\\.|[^'\\\n])?"),
    (TokenKind.RESIDUE, r"\"[^\n]*"),
    (TokenKind.FLOAT, r"(?:\d+\.\d*|\.\d+)(?:[eE][+-]?\d+)?[fFlL]?|\d+[eE][+-]?\d+[fFlL]?"),
    (TokenKind.INT, r"0[xX][0-9a-fA-F]+[uUlL]*|\d+[uUlL]*"),
    (TokenKind.IDENTIFIER, r"[A-Za-z_$\u0080-\U0010ffff][A-Za-z0-9_$\u0080-\U0010ffff]*"),
    (TokenKind.OPERATOR, r"<<=|>>=|<<|>>|->|\+\+|--|&&|\|\||[=!<>+\-*/%&|^]="),
    (TokenKind.PUNCT, r"."),
]

_MASTER = re.compile(
    "|".join(f"(?P<g{i}>{pattern})" for i, (_, pattern) in enumerate(_RULES)),
    re.DOTALL,
)


def lex(source: str) -> Iterator[Token]:
    """Yield every lexical token in *source*, including discarded kinds."""
    pos = 0
    while pos < len(source):
        match = _MASTER.match(source, pos)
        # The trailing "." rule matches any single character.
        assert match is not None
        kind = _RULES[int(match.lastgroup[1:])][0]
        if kind is TokenKind.RESIDUE:
            logger.debug("Dropping unterminated input at offset %d: %r", pos, match.group())
        yield Token(kind=kind, text=match.group(), offset=pos)
        pos = match.end()


def tokenize(raw_query: str) -> List[str]:
    """Split *raw_query* into identifier and punctuation tokens."""
    return [tok.text for tok in lex(raw_query) if tok.kind in KEPT_KINDS]


def normalize(tokens: Iterable[str]) -> str:
    """Join tokens with one trailing space each, e.g. ``"foo ( int ) "``."""
    return "".join(f"{tok} " for tok in tokens)


def normalize_query(raw_query: str) -> str:
    return normalize(tokenize(raw_query))
