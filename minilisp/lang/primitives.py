"""Built-in procedures bound into every root Environment. Each primitive takes evaluated argument Values and returns a
Value; operand kinds are checked here rather than in the evaluator.
"""

import operator

from minilisp.lang.error import ArityMismatch, DivisionByZero, NumericOverflow, TypeMismatch
from minilisp.lang.values import Float, Integer, List, Primitive

PRIMITIVES = {}


def primitive(name, min_args=0, max_args=None):
    """Registers the decorated function as primitive name, checking the argument count before each call. Integers are
    unbounded, so mixing a huge one with floats can overflow; that surfaces as NumericOverflow.
    """

    def register(function):
        def checked(*args):
            if len(args) < min_args or (max_args is not None and len(args) > max_args):
                if max_args is None:
                    expected = f"at least {min_args}"
                elif max_args == min_args:
                    expected = str(min_args)
                else:
                    expected = f"{min_args} to {max_args}"
                raise ArityMismatch("'{}' expects " + expected + f" argument(s), got {len(args)}", name)
            try:
                return function(*args)
            except OverflowError as error:
                raise NumericOverflow("'{}' overflowed: {}", (name, str(error)))

        PRIMITIVES[name] = Primitive(name, checked)
        return function

    return register


def numbers(name, args):
    """Returns the Python numbers inside args. Raises TypeMismatch if any arg is not an Integer or Float."""
    for arg in args:
        if not arg.is_number:
            raise TypeMismatch("'{}' expects numbers, got '{}'", (name, str(arg)))
    return [arg.value for arg in args]


def number(result, args):
    """Wraps result as a Float if any arg was a Float, else as an Integer."""
    if any(isinstance(arg, Float) for arg in args):
        return Float(float(result))
    return Integer(result)


@primitive("+")
def add(*args):
    return number(sum(numbers("+", args)), args)


@primitive("*")
def mul(*args):
    result = 1
    for value in numbers("*", args):
        result *= value
    return number(result, args)


@primitive("-", min_args=1)
def sub(*args):
    head, *tail = numbers("-", args)
    if not tail:
        return number(-head, args)
    for value in tail:
        head -= value
    return number(head, args)


def divide(dividend, divisor, exact):
    """Divides two Python numbers. Stays integral while exact and the division leaves no remainder."""
    if divisor == 0:
        raise DivisionByZero("division of '{}' by zero", str(dividend))
    if exact and isinstance(dividend, int) and isinstance(divisor, int) and dividend % divisor == 0:
        return dividend // divisor, True
    return dividend / divisor, False


@primitive("/", min_args=1)
def div(*args):
    values = numbers("/", args)
    if len(values) == 1:
        values.insert(0, 1)

    exact = not any(isinstance(arg, Float) for arg in args)
    result, *tail = values
    for value in tail:
        result, exact = divide(result, value, exact)

    return Integer(result) if exact else Float(float(result))


def comparison(name, compare):
    """Registers a chained comparison primitive: true when compare holds for every adjacent pair."""

    @primitive(name, min_args=2)
    def compare_chain(*args):
        values = numbers(name, args)
        return Integer(int(all(compare(a, b) for a, b in zip(values, values[1:]))))

    return compare_chain


comparison("<", operator.lt)
comparison(">", operator.gt)
comparison("<=", operator.le)
comparison(">=", operator.ge)
comparison("=", operator.eq)


def as_list(name, arg):
    if not isinstance(arg, List):
        raise TypeMismatch("'{}' expects a list, got '{}'", (name, str(arg)))
    return arg.items


@primitive("list")
def make_list(*args):
    return List(args)


@primitive("car", min_args=1, max_args=1)
def car(arg):
    items = as_list("car", arg)
    if not items:
        raise TypeMismatch("'{}' of empty list", "car")
    return items[0]


@primitive("cdr", min_args=1, max_args=1)
def cdr(arg):
    items = as_list("cdr", arg)
    if not items:
        raise TypeMismatch("'{}' of empty list", "cdr")
    return List(items[1:])


@primitive("null?", min_args=1, max_args=1)
def is_null(arg):
    return Integer(int(not as_list("null?", arg)))
