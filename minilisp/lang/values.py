"""Runtime values produced by evaluation. The set of kinds is closed:

```
<value> ::= Integer | Float | Symbol | List | Procedure | Primitive | Unit
```

Every value has a textual form through str(), which is what a host shows to the user.
"""

from dataclasses import dataclass, field

from minilisp.syntax.parser import AtomKind, ListExpr


class Value:
    """Superclass of every minilisp value."""
    is_number = False

    @property
    def truthy(self):
        """Integer 0, Float 0.0 and the empty List are false; every other value is true."""
        return True


@dataclass(frozen=True)
class Integer(Value):
    value: int
    is_number = True

    @property
    def truthy(self):
        return self.value != 0

    def __str__(self):
        return str(self.value)


@dataclass(frozen=True)
class Float(Value):
    value: float
    is_number = True

    @property
    def truthy(self):
        return self.value != 0.0

    def __str__(self):
        return repr(self.value)


@dataclass(frozen=True)
class Symbol(Value):
    name: str

    def __str__(self):
        return self.name


@dataclass(frozen=True)
class List(Value):
    items: tuple = ()

    def __post_init__(self):
        object.__setattr__(self, "items", tuple(self.items))

    @property
    def truthy(self):
        return bool(self.items)

    def __str__(self):
        return "(" + " ".join(str(item) for item in self.items) + ")"


@dataclass(frozen=True, eq=False)
class Procedure(Value):
    """User-defined procedure: parameter names, a body expression and the Environment it closes over."""
    params: tuple
    body: object
    env: object = field(repr=False)

    def __str__(self):
        return f"#<procedure ({' '.join(self.params)})>"


@dataclass(frozen=True, eq=False)
class Primitive(Value):
    """Native procedure. function takes the evaluated argument Values and returns a Value."""
    name: str
    function: object = field(repr=False)

    def __call__(self, *args):
        return self.function(*args)

    def __str__(self):
        return f"#<primitive {self.name}>"


class Unit(Value):
    """Result of forms evaluated only for their effect. UNIT is the only instance."""
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self):
        return "UNIT"

    def __str__(self):
        return "#<unit>"


UNIT = Unit()


def from_expr(expr):
    """Converts an expression to the Value it denotes as literal data, without evaluating anything."""
    if isinstance(expr, ListExpr):
        return List(from_expr(child) for child in expr)
    if expr.kind is AtomKind.INTEGER:
        return Integer(expr.value)
    if expr.kind is AtomKind.FLOAT:
        return Float(expr.value)
    return Symbol(expr.value)
