"""Error handling for minilisp. Only LispErrors should be encountered during evaluation: if another type of error is
raised and makes it all the way to ErrorHandler, it is assumed to be an internal issue.

Taxonomy:

```
LispError
├── LispSyntaxError         ; parse-time, never recovered, no partial result
│   ├── UnexpectedEOF
│   └── UnexpectedCloseParen
└── EvalError               ; evaluation-time, aborts the enclosing top-level expression
    ├── UnboundSymbol
    ├── TypeMismatch
    ├── ArityMismatch
    ├── NotCallable
    ├── EmptyApplication
    ├── MalformedForm
    ├── DivisionByZero
    ├── NumericOverflow
    └── BudgetExhausted
```
"""

import sys

from termcolor import colored


class LispError(Exception):
    """Templates an error message so that it can be used to throw a minilisp error. The {} slots in msg are filled with
    exprs, rendered in bold.
    """

    def __init__(self, msg, exprs=None, offset=None, diagnosis=True, internal=False):
        """Parses args for LispError."""
        if exprs is None:
            exprs = ""
        if isinstance(exprs, str):
            exprs = [exprs]

        self.msg = msg.format(*(colored(expr, attrs=["bold"]) for expr in exprs))  # color expr snippets
        self.expr = exprs[0]  # exprs[0] should be the offending expr that caused the error
        self.offset = offset  # position of expr in the source line, if known

        self.diagnosis = diagnosis
        self.internal = internal

        super().__init__(self.msg)


class LispSyntaxError(LispError):
    """Raised by the parser. The offending token is never consumed into a partial tree."""


class UnexpectedEOF(LispSyntaxError):
    pass


class UnexpectedCloseParen(LispSyntaxError):
    pass


class EvalError(LispError):
    """Raised by the evaluator and by primitives."""


class UnboundSymbol(EvalError):
    pass


class TypeMismatch(EvalError):
    pass


class ArityMismatch(EvalError):
    pass


class NotCallable(EvalError):
    pass


class EmptyApplication(EvalError):
    pass


class MalformedForm(EvalError):
    """A special form used with the wrong shape, e.g. (if x) or (define 1 2)."""


class DivisionByZero(EvalError):
    pass


class NumericOverflow(EvalError):
    """A huge Integer mixed with a Float no longer fits in a float."""


class BudgetExhausted(EvalError):
    pass


class ErrorHandler:
    """Context manager that reports minilisp errors and, unless fatal, suppresses them so the host can carry on with
    the next input.
    """
    ERROR = "red"

    def __init__(self, fatal=True):
        self.fatal = fatal
        self.traceback = {}

    def register_line(self, name, line, line_num):
        """Registers source line under name. Should be called before Session add/run."""
        self.traceback[name] = (line, line_num)

    def remove_line(self, name):
        """Removes line from traceback given name. Should be called after successful Session add/run."""
        self.traceback.pop(name, None)

    @staticmethod
    def diagnose(error, line):
        """Returns line with the offending part of error.expr highlighted and underlined, or None if error.expr cannot
        be located in line.
        """
        start = error.offset if error.offset is not None else line.find(error.expr)
        if start < 0 or start > len(line):
            return None

        end = start + max(len(error.expr), 1)

        diagnosis = "  " + line[:start]
        diagnosis += colored(line[start:end], ErrorHandler.ERROR, attrs=["bold"])
        diagnosis += line[end:] + "\n"

        diagnosis += "  " + " " * start
        diagnosis += colored("^" + "~" * (end - start - 1), ErrorHandler.ERROR, attrs=["bold"])

        return diagnosis

    def throw(self, error):
        """Prints error using error and self.traceback, a dict of name: (line, line_num) representing where the error
        originated. Exits if self.fatal.
        """
        error_msg = ""
        lines = []
        for name, (line, line_num) in self.traceback.items():
            if line:
                error_msg += f"  File '{name}', line {line_num}:\n"
                error_msg += f"    {line}\n"
                lines.append(line)

        if error.internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])

        error_msg += colored("error: ", ErrorHandler.ERROR, attrs=["bold"]) + error.msg
        print(error_msg)

        if not error.internal and (error.expr or error.offset is not None) and error.diagnosis and lines:
            diagnosis = ErrorHandler.diagnose(error, lines[-1])
            if diagnosis:
                print(diagnosis)

        if self.fatal:
            sys.exit(1)
        self.traceback = {}  # if error occurred, reset traceback (no need if error is fatal)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw(LispError("keyboard interrupt"))
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is RecursionError:
            self.throw(LispError("maximum recursion depth exceeded"))
        elif exc_type is not None and issubclass(exc_type, LispError):
            self.throw(exc_val)
        elif exc_type is not None:
            self.throw(LispError("unknown error: '{}'", f"{exc_type.__name__}: {exc_val}", internal=True))
            do_exit = True

        return not do_exit
