"""Tree-walking evaluator for minilisp.

Evaluation is a plain recursive function over the expression tree. The only state is the Environment passed down
the recursion, so there is no interpreter object and nothing global to reset between evaluations.

Special forms receive their operands unevaluated:

```
(define <symbol> <expr>)         ; binds in the current scope, returns UNIT
(if <test> <conseq> <alt>)       ; evaluates exactly one branch
(begin <expr>*)                  ; value of the last expr, UNIT if there is none
(lambda (<symbol>*) <body>)      ; closure over the current scope
(quote <datum>)                  ; datum as a value, unevaluated
```

Anything else is an application: the head and then the arguments are evaluated left to right, and the head must be
a Procedure or Primitive.
"""

from minilisp.lang.environment import Environment
from minilisp.lang.error import ArityMismatch, BudgetExhausted, EmptyApplication, EvalError, MalformedForm, NotCallable
from minilisp.lang.primitives import PRIMITIVES
from minilisp.lang.values import UNIT, Float, Integer, Primitive, Procedure, from_expr
from minilisp.syntax.parser import AtomKind, ListExpr


class Budget:
    """Bounds the number of evaluation steps one top-level evaluation may take. limit=None means unbounded."""

    def __init__(self, limit=None):
        self.limit = limit
        self.steps = 0

    def spend(self, expr):
        self.steps += 1
        if self.limit is not None and self.steps > self.limit:
            raise BudgetExhausted("'{}' exceeds the evaluation budget of {} steps", (str(expr), str(self.limit)))


def new_root_environment():
    """Returns a fresh global scope holding the built-in primitives. Roots never share bindings."""
    return Environment(PRIMITIVES)


def evaluate(expr, env, budget=None):
    """Evaluates expr in env and returns its Value. Any EvalError propagates unchanged."""
    if budget is not None:
        budget.spend(expr)

    if not isinstance(expr, ListExpr):
        if expr.kind is AtomKind.SYMBOL:
            return env.lookup(expr.value)
        elif expr.kind is AtomKind.INTEGER:
            return Integer(expr.value)
        return Float(expr.value)

    if len(expr) == 0:
        raise EmptyApplication("cannot apply empty list '{}'", str(expr))

    head, *operands = expr
    if is_symbol(head) and head.value in SPECIAL_FORMS:
        return SPECIAL_FORMS[head.value](expr, operands, env, budget)

    proc = evaluate(head, env, budget)
    args = [evaluate(operand, env, budget) for operand in operands]
    return apply(proc, args, budget, expr)


def apply(proc, args, budget=None, expr=None):
    """Applies a Procedure or Primitive to already evaluated args. expr is the calling expression, for messages."""
    if isinstance(proc, Primitive):
        try:
            return proc(*args)
        except EvalError as error:
            # error.expr becomes the failing call
            if expr is not None and error.offset is None:
                error.expr = str(expr)
            raise

    if isinstance(proc, Procedure):
        if len(args) != len(proc.params):
            msg = "'{}' expects " + f"{len(proc.params)} argument(s), got {len(args)}"
            raise ArityMismatch(msg, str(expr) if expr is not None else str(proc))
        local = proc.env.child(zip(proc.params, args))
        return evaluate(proc.body, local, budget)

    raise NotCallable("'{}' is not callable", str(proc))


def is_symbol(expr):
    return not isinstance(expr, ListExpr) and expr.is_symbol


def eval_define(expr, operands, env, budget):
    if len(operands) != 2 or not is_symbol(operands[0]):
        raise MalformedForm("'{}' expects (define <symbol> <expr>)", str(expr))
    name, value = operands
    env.define(name.value, evaluate(value, env, budget))
    return UNIT


def eval_if(expr, operands, env, budget):
    if len(operands) != 3:
        raise MalformedForm("'{}' expects (if <test> <conseq> <alt>)", str(expr))
    test, conseq, alt = operands
    branch = conseq if evaluate(test, env, budget).truthy else alt
    return evaluate(branch, env, budget)


def eval_begin(expr, operands, env, budget):
    result = UNIT
    for operand in operands:
        result = evaluate(operand, env, budget)
    return result


def eval_lambda(expr, operands, env, budget):
    if len(operands) != 2 or not isinstance(operands[0], ListExpr):
        raise MalformedForm("'{}' expects (lambda (<symbol>...) <body>)", str(expr))
    params, body = operands

    if not all(is_symbol(param) for param in params):
        raise MalformedForm("'{}' has a parameter that is not a symbol", str(expr))

    names = tuple(param.value for param in params)
    if len(set(names)) != len(names):
        raise MalformedForm("'{}' has duplicate parameters", str(expr))

    return Procedure(names, body, env)


def eval_quote(expr, operands, env, budget):
    if len(operands) != 1:
        raise MalformedForm("'{}' expects (quote <datum>)", str(expr))
    return from_expr(operands[0])


SPECIAL_FORMS = {
    "define": eval_define,
    "if": eval_if,
    "begin": eval_begin,
    "lambda": eval_lambda,
    "quote": eval_quote,
}
