"""Jsish AST — node definitions handed to the evaluator by an external parser."""

from __future__ import annotations

from dataclasses import dataclass


# ============================================================
# OPERATORS
# ============================================================

UNARY_OPS: tuple[str, ...] = ("!", "-", "typeof")

BINARY_OPS: tuple[str, ...] = (
    "+",
    "-",
    "*",
    "/",
    "%",
    "==",
    "!=",
    "<",
    ">",
    "<=",
    ">=",
    "&&",
    "||",
    ",",
)


# ============================================================
# EXPRESSIONS
# ============================================================


@dataclass(frozen=True)
class Expr:
    """Base for all expressions."""


@dataclass(frozen=True)
class Var(Expr):
    """Identifier reference."""

    name: str


@dataclass(frozen=True)
class NumLit(Expr):
    """Integer literal (signed 64-bit)."""

    value: int


@dataclass(frozen=True)
class StringLit(Expr):
    """String literal with escapes resolved."""

    value: str


@dataclass(frozen=True)
class BoolLit(Expr):
    """true or false."""

    value: bool


@dataclass(frozen=True)
class UndefinedLit(Expr):
    """undefined."""


@dataclass(frozen=True)
class UnaryOp(Expr):
    """op operand — op is one of UNARY_OPS."""

    op: str
    operand: Expr


@dataclass(frozen=True)
class BinaryOp(Expr):
    """left op right — op is one of BINARY_OPS."""

    op: str
    left: Expr
    right: Expr


@dataclass(frozen=True)
class Ternary(Expr):
    """cond ? then_expr : else_expr."""

    cond: Expr
    then_expr: Expr
    else_expr: Expr


@dataclass(frozen=True)
class Assign(Expr):
    """target = value."""

    target: Expr
    value: Expr


# ============================================================
# STATEMENTS
# ============================================================


@dataclass(frozen=True)
class Stmt:
    """Base for all statements."""


@dataclass(frozen=True)
class ExprStmt(Stmt):
    """expr;"""

    expr: Expr


@dataclass(frozen=True)
class PrintStmt(Stmt):
    """print expr;"""

    expr: Expr


@dataclass(frozen=True)
class BlockStmt(Stmt):
    """{ stmts }"""

    body: list[Stmt]


@dataclass(frozen=True)
class IfStmt(Stmt):
    """if (cond) then_body else else_body"""

    cond: Expr
    then_body: Stmt
    else_body: Stmt


@dataclass(frozen=True)
class WhileStmt(Stmt):
    """while (cond) body"""

    cond: Expr
    body: Stmt


# ============================================================
# DECLARATIONS / PROGRAM
# ============================================================


@dataclass(frozen=True)
class Declaration:
    """name or name = init inside a var list."""

    name: str
    init: Expr | None = None


@dataclass(frozen=True)
class VarDecl:
    """var decl, decl, ..."""

    decls: list[Declaration]


SourceElement = Stmt | VarDecl


@dataclass(frozen=True)
class Program:
    """Top-level program — ordered list of source elements."""

    elements: list[SourceElement]
