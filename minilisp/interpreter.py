"""Minimal Lisp interpreter core.

Basic program flow:
    1. Lexer: splits source text into LPAREN/RPAREN/NUMBER/SYMBOL tokens (minilisp/syntax/lexical.py)
    2. Parser: recursive descent from a token cursor into Atoms and ListExprs (minilisp/syntax/parser.py)
    3. Evaluator: walks the tree against a chain of Environments, dispatching special forms and applying procedures
       (minilisp/lang/evaluator.py)

A host normally creates a Session, which owns one root Environment, and feeds it source text. The lower-level entry
points are exported here for hosts that want to drive each stage themselves.
"""

from minilisp.lang.environment import Environment
from minilisp.lang.error import ErrorHandler, EvalError, LispError, LispSyntaxError
from minilisp.lang.evaluator import Budget, apply, evaluate, new_root_environment
from minilisp.lang.session import Session
from minilisp.syntax.lexical import Token, TokenKind, tokenize
from minilisp.syntax.parser import Atom, AtomKind, ListExpr, TokenCursor, parse, parse_all

__all__ = [
    "Atom",
    "AtomKind",
    "Budget",
    "Environment",
    "ErrorHandler",
    "EvalError",
    "LispError",
    "LispSyntaxError",
    "ListExpr",
    "Session",
    "Token",
    "TokenCursor",
    "TokenKind",
    "apply",
    "evaluate",
    "new_root_environment",
    "parse",
    "parse_all",
    "tokenize",
]
