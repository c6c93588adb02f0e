"""Lexically chained variable scopes."""

from minilisp.lang.error import UnboundSymbol


class Environment:
    """Mapping from symbol name to Value, chained to an optional parent. A child may shadow its parent's bindings but
    never changes them: define only ever writes to the current scope.
    """

    def __init__(self, bindings=None, parent=None):
        self.bindings = dict(bindings) if bindings else {}
        self.parent = parent

    def lookup(self, name):
        """Returns the value bound to name in the innermost scope that binds it. Raises UnboundSymbol if no scope
        in the chain does.
        """
        env = self
        while env is not None:
            if name in env.bindings:
                return env.bindings[name]
            env = env.parent
        raise UnboundSymbol("unbound symbol '{}'", name)

    def define(self, name, value):
        """Inserts or overwrites name in this scope only."""
        self.bindings[name] = value

    def child(self, bindings=None):
        """Returns a new scope whose parent is self."""
        return Environment(bindings, parent=self)

    def __contains__(self, name):
        env = self
        while env is not None:
            if name in env.bindings:
                return True
            env = env.parent
        return False

    def __repr__(self):
        return f"Environment({list(self.bindings)}, root={self.parent is None})"
