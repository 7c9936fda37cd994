"""Safe arithmetic evaluation."""

from __future__ import annotations

import ast
import operator as op

from langchain_core.tools import tool

_ALLOWED_OPS = {
    ast.Add: op.add,
    ast.Sub: op.sub,
    ast.Mult: op.mul,
    ast.Div: op.truediv,
    ast.Pow: op.pow,
    ast.USub: op.neg,
}

MAX_EXPONENT = 1000


def _eval(node: ast.AST):
    if isinstance(node, ast.Constant) and isinstance(node.value, (int, float)):
        return node.value
    if isinstance(node, ast.UnaryOp) and type(node.op) in _ALLOWED_OPS:
        return _ALLOWED_OPS[type(node.op)](_eval(node.operand))
    if isinstance(node, ast.BinOp) and type(node.op) in _ALLOWED_OPS:
        left, right = _eval(node.left), _eval(node.right)
        if isinstance(node.op, ast.Pow) and abs(right) > MAX_EXPONENT:
            raise ValueError(f"exponent too large (limit {MAX_EXPONENT})")
        return _ALLOWED_OPS[type(node.op)](left, right)
    raise ValueError("disallowed expression")


@tool
def calc(expression: str) -> str:
    """Evaluate a safe arithmetic expression such as "(2 + 3) * 4"."""

    node = ast.parse(expression, mode="eval").body
    return str(_eval(node))


__all__ = ["calc"]
