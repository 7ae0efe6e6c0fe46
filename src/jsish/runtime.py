"""Jsish runtime — evaluate expressions and drive a program.

Evaluation is a depth-first, left-to-right walk over an already-built tree.
The first `JsishError` raised anywhere stops the program; output written
before it stays written.
"""

from __future__ import annotations

import io
import sys
from dataclasses import dataclass
from typing import TextIO

from .ast import (
    Assign,
    BinaryOp,
    BlockStmt,
    BoolLit,
    Expr,
    ExprStmt,
    IfStmt,
    NumLit,
    PrintStmt,
    Program,
    SourceElement,
    Stmt,
    StringLit,
    Ternary,
    UnaryOp,
    UndefinedLit,
    Var,
    VarDecl,
    WhileStmt,
)
from .errors import JsishError, JsishIOError, JsishTypeError
from .operators import apply_binary_values, apply_unary
from .values import FALSE, TRUE, UNDEFINED, VBool, VNumber, VString, Value


# ============================================================
# Expressions
# ============================================================


class Evaluator:
    """Reduces expression trees to values. Holds no state."""

    def evaluate(self, expr: Expr) -> Value:
        if isinstance(expr, NumLit):
            return VNumber(expr.value)
        if isinstance(expr, StringLit):
            return VString(expr.value)
        if isinstance(expr, BoolLit):
            return TRUE if expr.value else FALSE
        if isinstance(expr, UndefinedLit):
            return UNDEFINED
        if isinstance(expr, UnaryOp):
            return apply_unary(expr.op, self.evaluate(expr.operand))
        if isinstance(expr, BinaryOp):
            return self.apply_binary(expr.op, expr.left, expr.right)
        if isinstance(expr, Ternary):
            return self.evaluate_conditional(
                expr.cond, expr.then_expr, expr.else_expr
            )
        # No environment: names and assignments carry no meaning yet.
        if isinstance(expr, (Var, Assign)):
            return UNDEFINED
        raise TypeError(f"unhandled expression type {type(expr).__name__}")

    def apply_binary(self, op: str, left: Expr, right: Expr) -> Value:
        if op == "&&":
            return self._short_circuit(False, op, left, right)
        if op == "||":
            return self._short_circuit(True, op, left, right)
        left_val = self.evaluate(left)
        right_val = self.evaluate(right)
        return apply_binary_values(op, left_val, right_val)

    def _short_circuit(
        self, stop_at: bool, symbol: str, left: Expr, right: Expr
    ) -> Value:
        left_val = self.evaluate(left)
        if not isinstance(left_val, VBool):
            raise JsishTypeError(
                f"operator '{symbol}' requires boolean, found {left_val.type_name()}"
            )
        if left_val.value == stop_at:
            return VBool(stop_at)
        right_val = self.evaluate(right)
        if not isinstance(right_val, VBool):
            raise JsishTypeError(
                f"operator '{symbol}' requires boolean * boolean, "
                f"found {left_val.type_name()} * {right_val.type_name()}"
            )
        return right_val

    def evaluate_conditional(
        self, guard: Expr, then_expr: Expr, else_expr: Expr
    ) -> Value:
        guard_val = self.evaluate(guard)
        if not isinstance(guard_val, VBool):
            raise JsishTypeError(
                "boolean guard required for 'cond' expression, "
                f"found {guard_val.type_name()}"
            )
        return self.evaluate(then_expr if guard_val.value else else_expr)


# ============================================================
# Statements / program
# ============================================================


class Interpreter:
    """Executes statements in order, writing printed values to `out`."""

    def __init__(self, out: TextIO, evaluator: Evaluator | None = None):
        self.out = out
        self.evaluator = evaluator if evaluator is not None else Evaluator()

    def exec_program(self, program: Program) -> None:
        for element in program.elements:
            self.exec_source_element(element)

    def exec_source_element(self, element: SourceElement) -> None:
        if isinstance(element, VarDecl):
            return
        self.exec_stmt(element)

    def exec_stmt(self, st: Stmt) -> None:
        if isinstance(st, PrintStmt):
            text = self.evaluator.evaluate(st.expr).to_string()
            self._write(text)
            return
        if isinstance(st, ExprStmt):
            _ = self.evaluator.evaluate(st.expr)
            return
        # Compound statements are part of the tree shape only.
        if isinstance(st, (BlockStmt, IfStmt, WhileStmt)):
            return
        raise TypeError(f"unhandled statement type {type(st).__name__}")

    def _write(self, text: str) -> None:
        try:
            self.out.write(text)
        except OSError as e:
            raise JsishIOError(e) from e


# ============================================================
# Entry points
# ============================================================


@dataclass
class RunResult:
    exit_code: int
    stdout: str
    error: JsishError | None = None


def evaluate(expr: Expr) -> Value:
    """Evaluate a single expression."""
    return Evaluator().evaluate(expr)


def interpret(program: Program, out: TextIO | None = None) -> None:
    """Run `program`, streaming printed output to `out` (stdout by default).

    Raises the first JsishError encountered.
    """
    Interpreter(out if out is not None else sys.stdout).exec_program(program)


def run(program: Program) -> RunResult:
    """Run `program` with output captured; errors are reported, not raised."""
    buf = io.StringIO()
    try:
        Interpreter(buf).exec_program(program)
    except JsishError as e:
        return RunResult(exit_code=1, stdout=buf.getvalue(), error=e)
    return RunResult(exit_code=0, stdout=buf.getvalue())
