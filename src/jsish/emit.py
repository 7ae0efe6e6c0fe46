"""Jsish emitter — renders the AST back into fully parenthesized source text.

Used for diagnostics and `jsish --emit`; the output is not consumed by the
evaluator. Every binary, unary, conditional and assignment expression is
wrapped in parentheses, so no precedence table is needed.
"""

from __future__ import annotations

from .ast import (
    Assign,
    BinaryOp,
    BlockStmt,
    BoolLit,
    Declaration,
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


_ESCAPES: dict[str, str] = {
    '"': '\\"',
    "\\": "\\\\",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\0": "\\0",
}


def to_source(program: Program) -> str:
    """Render a `Program`; each source element is followed by a newline."""
    parts: list[str] = []
    for element in program.elements:
        parts.append(render_source_element(element) + "\n")
    return "".join(parts)


def render_source_element(element: SourceElement) -> str:
    if isinstance(element, VarDecl):
        decls = "".join(render_declaration(d) + ", " for d in element.decls)
        return "var " + decls + "\n"
    return render_stmt(element)


def render_declaration(decl: Declaration) -> str:
    if decl.init is None:
        return decl.name
    return f"{decl.name} = {render_expr(decl.init)}"


def render_stmt(stmt: Stmt) -> str:
    if isinstance(stmt, ExprStmt):
        return render_expr(stmt.expr) + ";"
    if isinstance(stmt, PrintStmt):
        return "print " + render_expr(stmt.expr) + ";"
    if isinstance(stmt, BlockStmt):
        body = "".join(render_stmt(s) + "\n" for s in stmt.body)
        return "{\n" + body + "}"
    if isinstance(stmt, IfStmt):
        return (
            f"if ({render_expr(stmt.cond)})\n"
            f"{render_stmt(stmt.then_body)}\n"
            f"else\n"
            f"{render_stmt(stmt.else_body)}"
        )
    if isinstance(stmt, WhileStmt):
        return f"while ({render_expr(stmt.cond)})\n{render_stmt(stmt.body)}"
    raise TypeError("unhandled stmt type")


def render_expr(expr: Expr) -> str:
    if isinstance(expr, Var):
        return expr.name
    if isinstance(expr, NumLit):
        return str(expr.value)
    if isinstance(expr, StringLit):
        return _quote(expr.value)
    if isinstance(expr, BoolLit):
        return "true" if expr.value else "false"
    if isinstance(expr, UndefinedLit):
        return "undefined"
    if isinstance(expr, BinaryOp):
        return f"({render_expr(expr.left)} {expr.op} {render_expr(expr.right)})"
    if isinstance(expr, UnaryOp):
        symbol = "typeof " if expr.op == "typeof" else expr.op
        return f"({symbol}{render_expr(expr.operand)})"
    if isinstance(expr, Ternary):
        return (
            f"({render_expr(expr.cond)} ? {render_expr(expr.then_expr)}"
            f" : {render_expr(expr.else_expr)})"
        )
    if isinstance(expr, Assign):
        return f"({render_expr(expr.target)} = {render_expr(expr.value)})"
    raise TypeError("unhandled expr type")


def _quote(s: str) -> str:
    out: list[str] = ['"']
    for ch in s:
        if ch in _ESCAPES:
            out.append(_ESCAPES[ch])
        elif not ch.isprintable():
            out.append("\\u{" + format(ord(ch), "x") + "}")
        else:
            out.append(ch)
    out.append('"')
    return "".join(out)
