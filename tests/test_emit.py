"""Tests for the reconstruction format."""

from jsish import emit
from jsish.ast import (
    Assign,
    BinaryOp,
    BlockStmt,
    BoolLit,
    Declaration,
    ExprStmt,
    IfStmt,
    NumLit,
    PrintStmt,
    Program,
    StringLit,
    Ternary,
    UnaryOp,
    UndefinedLit,
    Var,
    VarDecl,
    WhileStmt,
)
from jsish.emit import render_expr, render_stmt


def test_atoms():
    assert render_expr(Var("count")) == "count"
    assert render_expr(NumLit(-12)) == "-12"
    assert render_expr(BoolLit(True)) == "true"
    assert render_expr(BoolLit(False)) == "false"
    assert render_expr(UndefinedLit()) == "undefined"


def test_string_quoting():
    assert render_expr(StringLit("plain")) == '"plain"'
    assert render_expr(StringLit('a"b\\c\n')) == '"a\\"b\\\\c\\n"'
    assert render_expr(StringLit("\x01")) == '"\\u{1}"'


def test_operators_are_parenthesized():
    expr = BinaryOp(
        "*",
        BinaryOp("+", NumLit(1), NumLit(2)),
        UnaryOp("-", NumLit(3)),
    )
    assert render_expr(expr) == "((1 + 2) * (-3))"
    assert render_expr(BinaryOp(",", Var("a"), Var("b"))) == "(a , b)"


def test_typeof_has_trailing_space():
    assert render_expr(UnaryOp("typeof", Var("x"))) == "(typeof x)"
    assert render_expr(UnaryOp("!", BoolLit(True))) == "(!true)"


def test_conditional_and_assignment():
    expr = Ternary(Var("g"), NumLit(1), NumLit(2))
    assert render_expr(expr) == "(g ? 1 : 2)"
    assert render_expr(Assign(Var("x"), NumLit(5))) == "(x = 5)"


def test_statements():
    assert render_stmt(ExprStmt(Var("x"))) == "x;"
    assert render_stmt(PrintStmt(NumLit(1))) == "print 1;"
    block = BlockStmt([PrintStmt(NumLit(1)), ExprStmt(Var("y"))])
    assert render_stmt(block) == "{\nprint 1;\ny;\n}"
    assert render_stmt(BlockStmt([])) == "{\n}"


def test_if_and_while():
    st = IfStmt(Var("g"), PrintStmt(NumLit(1)), PrintStmt(NumLit(2)))
    assert render_stmt(st) == "if (g)\nprint 1;\nelse\nprint 2;"
    loop = WhileStmt(BoolLit(False), BlockStmt([]))
    assert render_stmt(loop) == "while (false)\n{\n}"


def test_program():
    program = Program(
        [
            VarDecl([Declaration("a"), Declaration("b", NumLit(2))]),
            PrintStmt(BinaryOp("+", Var("a"), Var("b"))),
        ]
    )
    assert emit(program) == "var a, b = 2, \n\nprint (a + b);\n"
