"""Runtime values and the operator table.

A runtime value is a Python ``float`` (number), ``str`` (string) or
``bool`` (boolean). Every number is a double: literals and arithmetic
results are normalised through ``float``. Booleans count as the numbers 1
and 0 in arithmetic and ordering, but equality never crosses kinds, so
``1 == 1.0`` holds while ``1 == "1"`` and ``(1 < 2) == 1`` do not.
"""
from decimal import Decimal
import math
import re

from errors import OperandError


# what unary +/- accept from a string: plain decimal, optional exponent
NUMERIC_TEXT = re.compile(r"[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?")


def kind_of(value) -> str:
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    raise TypeError(f"not a runtime value: {value!r}")


def is_truthy(value) -> bool:
    if isinstance(value, float) and math.isnan(value):
        return False
    return bool(value)


def format_number(value: float) -> str:
    """Shortest round-trip digits, laid out fixed between 1e-7 and 1e21."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"

    sign, digits, exponent = Decimal(repr(value)).as_tuple()
    while len(digits) > 1 and digits[-1] == 0:
        digits = digits[:-1]
        exponent += 1
    text = "".join(str(d) for d in digits)
    k = len(text)
    n = k + exponent  # position of the decimal point

    if k <= n <= 21:
        body = text + "0" * (n - k)
    elif 0 < n <= 21:
        body = text[:n] + "." + text[n:]
    elif -6 < n <= 0:
        body = "0." + "0" * -n + text
    else:
        e = n - 1
        mantissa = text if k == 1 else text[0] + "." + text[1:]
        body = f"{mantissa}e{'+' if e >= 0 else '-'}{abs(e)}"
    return "-" + body if sign else body


def display(value) -> str:
    """Text written by ``print`` for a value."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return format_number(float(value))
    return str(value)


def _numeric(value) -> bool:
    # bool is a subclass of int, so booleans pass as numbers here
    return isinstance(value, (int, float))


def to_number(value, op: str) -> float:
    if _numeric(value):
        return float(value)
    text = value.strip()
    if not text:
        return 0.0
    if NUMERIC_TEXT.fullmatch(text) is None:
        raise OperandError(op, kind_of(value))
    return float(text)


def divide(left, right):
    if right != 0:
        return left / right
    # IEEE double semantics
    if left == 0 or math.isnan(left):
        return math.nan
    return math.copysign(math.inf, left) * math.copysign(1.0, right)


def add(left, right):
    if isinstance(left, str) or isinstance(right, str):
        return display(left) + display(right)
    return float(left + right)


ARITHMETIC = {
    "MINUS": lambda a, b: a - b,
    "MULTIPLY": lambda a, b: a * b,
    "DIVIDE": divide,
}

ORDERING = {
    "LESS": lambda a, b: a < b,
    "GREATER": lambda a, b: a > b,
    "LESS_EQUALS": lambda a, b: a <= b,
    "GREATER_EQUALS": lambda a, b: a >= b,
}

OP_TEXT = {
    "PLUS": "+",
    "MINUS": "-",
    "MULTIPLY": "*",
    "DIVIDE": "/",
    "EQUALS": "==",
    "NOT_EQUALS": "!=",
    "LESS": "<",
    "GREATER": ">",
    "LESS_EQUALS": "<=",
    "GREATER_EQUALS": ">=",
}


def equals(left, right) -> bool:
    if kind_of(left) != kind_of(right):
        return False
    return left == right


def binary(op: str, left, right):
    """Apply a binary operator (given by token kind) to two runtime values."""
    if op == "PLUS":
        return add(left, right)
    if op == "EQUALS":
        return equals(left, right)
    if op == "NOT_EQUALS":
        return not equals(left, right)

    if op in ARITHMETIC:
        if not (_numeric(left) and _numeric(right)):
            raise OperandError(OP_TEXT[op], kind_of(left), kind_of(right))
        return float(ARITHMETIC[op](left, right))

    if op in ORDERING:
        both_strings = isinstance(left, str) and isinstance(right, str)
        if not both_strings and not (_numeric(left) and _numeric(right)):
            raise OperandError(OP_TEXT[op], kind_of(left), kind_of(right))
        return ORDERING[op](left, right)

    raise ValueError(f"Unknown binary operator: {op}")


def unary(op: str, value):
    if op == "PLUS":
        return to_number(value, "+")
    if op == "MINUS":
        return -to_number(value, "-")
    raise ValueError(f"Unknown unary operator: {op}")
