"""Session control for minilisp: an embeddable interpreter instance that reads top-level expressions from source text
and evaluates them in order against its own root Environment.
"""

from minilisp.lang.error import ErrorHandler
from minilisp.lang.evaluator import Budget, evaluate, new_root_environment
from minilisp.syntax.lexical import tokenize
from minilisp.syntax.parser import TokenCursor, parse


class Session:
    """Governs a minilisp session, with control over the global scope. Sessions never share bindings."""
    NAME = "<in>"  # name used for source lines in error messages

    def __init__(self, error_handler=None, step_limit=None, name=NAME):
        self.error_handler = error_handler if error_handler is not None else ErrorHandler(fatal=False)
        self.step_limit = step_limit  # per top-level expression, None for unbounded
        self.name = name

        self.env = new_root_environment()
        self.to_exec = []   # list of (source line, line num, expression) waiting for run
        self.results = []   # values of expressions that have been run, oldest first
        self.line_num = 0

    def add(self, source):
        """Parses every top-level expression in source and queues them for run. If source has a syntax error, nothing
        from it is queued.
        """
        self.line_num += 1
        self.error_handler.register_line(self.name, source, self.line_num)  # in case error is raised

        cursor = TokenCursor(tokenize(source))
        parsed = []
        while not cursor.exhausted:
            parsed.append((source, self.line_num, parse(cursor)))
        self.to_exec.extend(parsed)

        self.error_handler.remove_line(self.name)  # error was not raised

    def run(self):
        """Evaluates queued expressions in order. A failing expression is dropped along with everything queued after
        it, and the error is raised.
        """
        try:
            while self.to_exec:
                source, line_num, expr = self.to_exec.pop(0)
                self.error_handler.register_line(self.name, source, line_num)

                budget = Budget(self.step_limit) if self.step_limit is not None else None
                self.results.append(evaluate(expr, self.env, budget))

                self.error_handler.remove_line(self.name)
        finally:
            self.to_exec = []

    def eval(self, source):
        """Adds and runs source, returning the value of its last expression (None if source had none)."""
        count = len(self.results)
        self.add(source)
        self.run()
        return self.results[-1] if len(self.results) > count else None

    def pop(self):
        """Removes and returns the oldest result."""
        return self.results.pop(0)
