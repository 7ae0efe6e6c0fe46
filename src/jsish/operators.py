"""Operator semantics — compute a value from an operator and operand values.

Every accepted (operator, variant, variant) combination is listed explicitly;
anything else falls through to a type error naming the observed variants.
Short-circuiting `&&` and `||` need unevaluated operands and live in the
evaluator (see `runtime.Evaluator.apply_binary`).
"""

from __future__ import annotations

from .errors import JsishOverflowError, JsishTypeError, JsishZeroDivisionError
from .values import FALSE, TRUE, VBool, VNumber, VString, Value, in_int64


# ============================================================
# Integer arithmetic
# ============================================================


def _int_divmod_trunc(a: int, b: int) -> tuple[int, int]:
    if b == 0:
        raise ZeroDivisionError
    q = abs(a) // abs(b)
    if (a < 0) != (b < 0):
        q = -q
    r = a - q * b
    return (q, r)


def _checked(op: str, result: int) -> VNumber:
    if not in_int64(result):
        raise JsishOverflowError(f"integer overflow in operator '{op}'")
    return VNumber(result)


def floor_divide(num: int, denom: int) -> int:
    """Divide, rounding toward negative infinity when the quotient is inexact
    and an operand is negative; truncating otherwise.

    floor_divide(7, 2) == 3, floor_divide(-7, 2) == -4,
    floor_divide(7, -2) == -4, floor_divide(-7, -2) == 3.
    """
    try:
        q, r = _int_divmod_trunc(num, denom)
    except ZeroDivisionError:
        raise JsishZeroDivisionError("cannot divide by zero") from None
    if (num < 0 or denom < 0) and r != 0:
        # Python's // is the exact floor over unbounded ints.
        return num // denom
    return q


def remainder(num: int, denom: int) -> int:
    """Remainder of truncating division; the sign follows the dividend."""
    try:
        _, r = _int_divmod_trunc(num, denom)
    except ZeroDivisionError:
        raise JsishZeroDivisionError(
            "cannot compute remainder with a divisor of zero"
        ) from None
    return r


# ============================================================
# Unary
# ============================================================


def _unary_error(symbol: str, expected: str, actual: Value) -> JsishTypeError:
    return JsishTypeError(
        f"unary operator '{symbol}' requires {expected}, found {actual.type_name()}"
    )


def apply_unary(op: str, operand: Value) -> Value:
    if op == "!":
        if isinstance(operand, VBool):
            return VBool(not operand.value)
        raise _unary_error("!", "boolean", operand)
    if op == "-":
        if isinstance(operand, VNumber):
            return _checked("-", -operand.value)
        raise _unary_error("-", "number", operand)
    if op == "typeof":
        return VString(operand.type_name())
    raise ValueError(f"unknown unary operator '{op}'")


# ============================================================
# Binary
# ============================================================


def values_equal(a: Value, b: Value) -> bool:
    """Structural equality; values of different variants are never equal."""
    return type(a) is type(b) and a == b


def _cmp(op: str, a: int, b: int) -> bool:
    if op == "<":
        return a < b
    if op == "<=":
        return a <= b
    if op == ">":
        return a > b
    if op == ">=":
        return a >= b
    raise AssertionError(op)


def apply_binary_values(op: str, left: Value, right: Value) -> Value:
    """Apply a strict (non-short-circuit) binary operator to two values."""
    both_num = isinstance(left, VNumber) and isinstance(right, VNumber)

    if op == "+":
        if both_num:
            return _checked("+", left.value + right.value)
        if isinstance(left, VString) and isinstance(right, VString):
            return VString(left.value + right.value)
        raise JsishTypeError(
            "operator '+' requires number * number or string * string, "
            f"found {left.type_name()} * {right.type_name()}"
        )
    if op == "-" and both_num:
        return _checked("-", left.value - right.value)
    if op == "*" and both_num:
        return _checked("*", left.value * right.value)
    if op == "/" and both_num:
        return _checked("/", floor_divide(left.value, right.value))
    if op == "%" and both_num:
        return VNumber(remainder(left.value, right.value))
    if op == "==":
        return TRUE if values_equal(left, right) else FALSE
    if op == "!=":
        return FALSE if values_equal(left, right) else TRUE
    if op in ("<", ">", "<=", ">=") and both_num:
        return VBool(_cmp(op, left.value, right.value))
    if op == ",":
        return right
    raise JsishTypeError(
        f"operator '{op}' requires number * number, "
        f"found {left.type_name()} * {right.type_name()}"
    )
