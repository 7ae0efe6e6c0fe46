"""JSON interchange for Jsish trees.

Each node is a dict whose "_type" key names the node class, plus one key per
field. This is how an external parser hands a `Program` to the evaluator.
"""

from __future__ import annotations

import json
from dataclasses import fields

from .ast import (
    BINARY_OPS,
    UNARY_OPS,
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
    Stmt,
    StringLit,
    Ternary,
    UnaryOp,
    UndefinedLit,
    Var,
    VarDecl,
    WhileStmt,
)
from .values import in_int64


class SerializeError(Exception):
    """Malformed JSON program."""


# Field kinds:
#   str, int, bool       JSON scalars
#   unary_op, binary_op  operator symbols
#   expr, expr?, stmt    single child node (expr? may be null)
#   stmts, decls, elems  lists of child nodes
_NODES: dict[str, tuple[type, dict[str, str]]] = {
    "Var": (Var, {"name": "str"}),
    "NumLit": (NumLit, {"value": "int"}),
    "StringLit": (StringLit, {"value": "str"}),
    "BoolLit": (BoolLit, {"value": "bool"}),
    "UndefinedLit": (UndefinedLit, {}),
    "UnaryOp": (UnaryOp, {"op": "unary_op", "operand": "expr"}),
    "BinaryOp": (BinaryOp, {"op": "binary_op", "left": "expr", "right": "expr"}),
    "Ternary": (
        Ternary,
        {"cond": "expr", "then_expr": "expr", "else_expr": "expr"},
    ),
    "Assign": (Assign, {"target": "expr", "value": "expr"}),
    "ExprStmt": (ExprStmt, {"expr": "expr"}),
    "PrintStmt": (PrintStmt, {"expr": "expr"}),
    "BlockStmt": (BlockStmt, {"body": "stmts"}),
    "IfStmt": (IfStmt, {"cond": "expr", "then_body": "stmt", "else_body": "stmt"}),
    "WhileStmt": (WhileStmt, {"cond": "expr", "body": "stmt"}),
    "Declaration": (Declaration, {"name": "str", "init": "expr?"}),
    "VarDecl": (VarDecl, {"decls": "decls"}),
    "Program": (Program, {"elements": "elems"}),
}


# ============================================================
# Serialize
# ============================================================


def serialize(obj: object) -> object:
    """Recursively serialize a node to a JSON-compatible structure."""
    if obj is None or isinstance(obj, (bool, int, str)):
        return obj
    if isinstance(obj, list):
        return [serialize(x) for x in obj]
    name = type(obj).__name__
    if name not in _NODES or _NODES[name][0] is not type(obj):
        raise TypeError(f"cannot serialize {name}")
    out: dict[str, object] = {"_type": name}
    for f in fields(obj):
        out[f.name] = serialize(getattr(obj, f.name))
    return out


def dump_program(program: Program) -> str:
    return json.dumps(serialize(program), indent=2, ensure_ascii=False) + "\n"


# ============================================================
# Deserialize
# ============================================================


def deserialize(data: object) -> object:
    """Rebuild a node from the output of `serialize`, validating as it goes."""
    return _node(data, "$")


def load_program(text: str) -> Program:
    try:
        data = json.loads(text)
    except ValueError as e:
        raise SerializeError(f"invalid JSON: {e}") from None
    except RecursionError:
        raise SerializeError("nesting too deep") from None
    try:
        node = _node(data, "$")
    except RecursionError:
        raise SerializeError("nesting too deep") from None
    if not isinstance(node, Program):
        raise SerializeError(f"$: expected Program, got {type(node).__name__}")
    return node


def _node(data: object, path: str) -> object:
    if not isinstance(data, dict):
        raise SerializeError(f"{path}: expected object, got {_json_kind(data)}")
    tag = data.get("_type")
    if not isinstance(tag, str) or tag not in _NODES:
        raise SerializeError(f"{path}: unknown node type {tag!r}")
    cls, spec = _NODES[tag]
    extra = set(data) - set(spec) - {"_type"}
    if extra:
        raise SerializeError(f"{path}: unexpected field(s) {sorted(extra)} on {tag}")
    kwargs: dict[str, object] = {}
    for field_name, kind in spec.items():
        sub = f"{path}.{field_name}"
        if field_name not in data:
            if kind == "expr?":
                kwargs[field_name] = None
                continue
            raise SerializeError(f"{sub}: missing field on {tag}")
        kwargs[field_name] = _field(data[field_name], kind, sub)
    return cls(**kwargs)


def _field(value: object, kind: str, path: str) -> object:
    if kind == "str":
        if not isinstance(value, str):
            raise SerializeError(f"{path}: expected string, got {_json_kind(value)}")
        return value
    if kind == "bool":
        if not isinstance(value, bool):
            raise SerializeError(f"{path}: expected boolean, got {_json_kind(value)}")
        return value
    if kind == "int":
        if not isinstance(value, int) or isinstance(value, bool):
            raise SerializeError(f"{path}: expected integer, got {_json_kind(value)}")
        if not in_int64(value):
            raise SerializeError(f"{path}: integer {value} out of 64-bit range")
        return value
    if kind == "unary_op":
        if value not in UNARY_OPS:
            raise SerializeError(f"{path}: unknown unary operator {value!r}")
        return value
    if kind == "binary_op":
        if value not in BINARY_OPS:
            raise SerializeError(f"{path}: unknown binary operator {value!r}")
        return value
    if kind == "expr?" and value is None:
        return None
    if kind in ("expr", "expr?"):
        return _typed(value, Expr, "expression", path)
    if kind == "stmt":
        return _typed(value, Stmt, "statement", path)
    if kind in ("stmts", "decls", "elems"):
        if not isinstance(value, list):
            raise SerializeError(f"{path}: expected array, got {_json_kind(value)}")
        items: list[object] = []
        for i, item in enumerate(value):
            sub = f"{path}[{i}]"
            if kind == "stmts":
                items.append(_typed(item, Stmt, "statement", sub))
            elif kind == "decls":
                items.append(_typed(item, Declaration, "declaration", sub))
            else:
                items.append(_typed(item, (Stmt, VarDecl), "source element", sub))
        return items
    raise AssertionError(kind)


def _typed(
    value: object, expected: type | tuple[type, ...], what: str, path: str
) -> object:
    node = _node(value, path)
    if not isinstance(node, expected):
        raise SerializeError(f"{path}: expected {what}, got {type(node).__name__}")
    return node


def _json_kind(value: object) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    return "object"
