"""Lexical analysis for minilisp: source text to a flat list of classified Tokens.

The token grammar is deliberately tiny:

```
<token>  ::= "(" | ")"
           | <number>                  ; signed integer or signed floating-point literal
           | <symbol>                  ; any other run of non-whitespace, non-paren characters
```

There are no strings, comments or escapes. Any punctuation that is not a parenthesis is swallowed into a symbol
verbatim, so `'a` and `#t` are both plain symbols. Tokenizing never fails: structural problems such as unbalanced
parentheses are left to the parser.
"""

from dataclasses import dataclass
from enum import Enum
import math
import re


INT64_MIN = -2 ** 63
INT64_MAX = 2 ** 63 - 1

INTEGER_LITERAL = re.compile(r"[+-]?[0-9]+")
FLOAT_LITERAL = re.compile(r"[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?|[+-]?(inf|infinity|nan)", re.IGNORECASE)
HEX_FLOAT_LITERAL = re.compile(r"[+-]?0x([0-9a-f]+\.?[0-9a-f]*|\.[0-9a-f]+)p[+-]?[0-9]+", re.IGNORECASE)


class TokenKind(Enum):
    LPAREN = "LPAREN"
    RPAREN = "RPAREN"
    SYMBOL = "SYMBOL"
    NUMBER = "NUMBER"


@dataclass(frozen=True)
class Token:
    """Classified lexical unit. offset is the position of the token in the source text, used for error messages."""
    kind: TokenKind
    value: str
    offset: int = 0

    def __repr__(self):
        return f"Token({self.kind.value}, '{self.value}')"


def parse_integer(field):
    """Returns field as an int if it is a signed integer literal that fits in 64 bits, else None."""
    if INTEGER_LITERAL.fullmatch(field):
        number = int(field)
        if INT64_MIN <= number <= INT64_MAX:
            return number
    return None


def parse_float(field):
    """Returns field as a float if it is a signed floating-point literal, else None. Integer literals too large for
    parse_integer still count as floats. Hexadecimal literals need a binary exponent (0x1p4, -0x1.8p-1). A finite
    literal out of float range (1e400) is not a number; only inf and infinity spell an infinity.
    """
    if FLOAT_LITERAL.fullmatch(field):
        number = float(field)
    elif HEX_FLOAT_LITERAL.fullmatch(field):
        try:
            number = float.fromhex(field)
        except OverflowError:
            return None
    else:
        return None

    if math.isinf(number) and not field.lstrip("+-").isalpha():
        return None
    return number


def is_number(field):
    return parse_integer(field) is not None or parse_float(field) is not None


def tokenize(source):
    """Converts source into a list of Tokens. Parentheses always stand alone; everything else is split on whitespace."""
    tokens = []
    for match in re.finditer(r"\(|\)|[^\s()]+", source):
        field = match.group()

        if field == "(":
            kind = TokenKind.LPAREN
        elif field == ")":
            kind = TokenKind.RPAREN
        elif is_number(field):
            kind = TokenKind.NUMBER
        else:
            kind = TokenKind.SYMBOL

        tokens.append(Token(kind, field, match.start()))
    return tokens
