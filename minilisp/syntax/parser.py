"""Recursive-descent parser for minilisp: Tokens to an S-expression tree.

Formally,

```
<expr> ::= <atom>                ; integer, float or symbol, classified from a single NUMBER/SYMBOL token
         | "(" <expr>* ")"       ; list: both code and literal data (homoiconic)
```

One token of lookahead is enough. The parser consumes tokens from a TokenCursor in place, so a host can call parse
repeatedly on the same cursor to read several top-level expressions.
"""

from dataclasses import dataclass
from enum import Enum

from minilisp.lang.error import UnexpectedCloseParen, UnexpectedEOF
from minilisp.syntax.lexical import TokenKind, parse_float, parse_integer


class AtomKind(Enum):
    INTEGER = "INTEGER"
    FLOAT = "FLOAT"
    SYMBOL = "SYMBOL"


PAYLOAD_TYPES = {AtomKind.INTEGER: int, AtomKind.FLOAT: float, AtomKind.SYMBOL: str}


@dataclass(frozen=True)
class Atom:
    """Terminal syntax node. value always has the Python type named by kind."""
    kind: AtomKind
    value: object

    def __post_init__(self):
        # bool is an int subclass, but never a valid payload
        if type(self.value) is not PAYLOAD_TYPES[self.kind]:
            raise ValueError(f"{self.kind.name} atom cannot hold {self.value!r}")

    @classmethod
    def from_token(cls, token):
        """Classifies token.value as integer, else float, else symbol."""
        number = parse_integer(token.value)
        if number is not None:
            return cls(AtomKind.INTEGER, number)

        number = parse_float(token.value)
        if number is not None:
            return cls(AtomKind.FLOAT, number)

        return cls(AtomKind.SYMBOL, token.value)

    @property
    def is_symbol(self):
        return self.kind is AtomKind.SYMBOL

    def __str__(self):
        if self.kind is AtomKind.FLOAT:
            return repr(self.value)
        return str(self.value)


@dataclass(frozen=True)
class ListExpr:
    """Ordered sequence of child expressions (Atoms or ListExprs)."""
    children: tuple = ()

    def __post_init__(self):
        object.__setattr__(self, "children", tuple(self.children))
        for child in self.children:
            if not isinstance(child, (Atom, ListExpr)):
                raise ValueError(f"list child must be an expression, not {child!r}")

    def __len__(self):
        return len(self.children)

    def __iter__(self):
        return iter(self.children)

    def __getitem__(self, idx):
        return self.children[idx]

    def __str__(self):
        return "(" + " ".join(str(child) for child in self.children) + ")"


class TokenCursor:
    """Mutable read position over a token sequence."""

    def __init__(self, tokens):
        self.tokens = list(tokens)
        self.pos = 0

    @property
    def exhausted(self):
        return self.pos >= len(self.tokens)

    @property
    def remaining(self):
        """Tokens not consumed yet."""
        return self.tokens[self.pos:]

    @property
    def end_offset(self):
        """Source position just past the last token, used to point at an unexpected EOF."""
        if not self.tokens:
            return 0
        last = self.tokens[-1]
        return last.offset + len(last.value)

    def peek(self):
        """Returns the next token without consuming it, or None at end of input."""
        if self.exhausted:
            return None
        return self.tokens[self.pos]

    def next(self):
        """Consumes and returns the next token. Raises UnexpectedEOF at end of input."""
        if self.exhausted:
            raise UnexpectedEOF("unexpected EOF while reading", offset=self.end_offset)
        token = self.tokens[self.pos]
        self.pos += 1
        return token


def parse(tokens):
    """Parses exactly one expression from tokens. If tokens is a TokenCursor it is advanced past the expression;
    any other sequence is wrapped in a fresh cursor and trailing tokens are ignored.
    """
    cursor = tokens if isinstance(tokens, TokenCursor) else TokenCursor(tokens)
    token = cursor.next()

    if token.kind is TokenKind.RPAREN:
        raise UnexpectedCloseParen("unexpected '{}'", token.value, offset=token.offset)

    if token.kind is not TokenKind.LPAREN:
        return Atom.from_token(token)

    children = []
    while True:
        lookahead = cursor.peek()
        if lookahead is None:
            raise UnexpectedEOF("unexpected EOF while reading list", offset=cursor.end_offset)
        if lookahead.kind is TokenKind.RPAREN:
            cursor.next()
            return ListExpr(children)
        children.append(parse(cursor))


def parse_all(tokens):
    """Parses top-level expressions until tokens are exhausted."""
    cursor = tokens if isinstance(tokens, TokenCursor) else TokenCursor(tokens)
    expressions = []
    while not cursor.exhausted:
        expressions.append(parse(cursor))
    return expressions
