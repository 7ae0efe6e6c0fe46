"""Diagnostics raised while evaluating a Jsish program."""

from __future__ import annotations


class JsishError(Exception):
    """Base error for Jsish evaluation."""

    def __init__(self, msg: str):
        super().__init__(msg)
        self.msg = msg


class JsishTypeError(JsishError):
    """Operand or guard of the wrong variant."""


class JsishArithmeticError(JsishError):
    """Arithmetic fault on well-typed operands."""


class JsishZeroDivisionError(JsishArithmeticError):
    """Division or remainder by zero."""


class JsishOverflowError(JsishArithmeticError):
    """Integer result outside the signed 64-bit range."""


class JsishIOError(JsishError):
    """Writing program output failed."""

    def __init__(self, error: OSError):
        super().__init__(str(error))
        self.error = error
