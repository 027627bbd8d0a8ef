from __future__ import annotations

import ast
import operator as op
import re

from detprime.tables import BOUND_64
from detprime.utility import UserInputError

# ---- simple number parsing helpers ----
_THIN_SPACES = ("\u2009", "\u202F", "\u00A0")  # thin, narrow no-break, no-break
_SEP_CLASS = r"[ ,_\u00A0\u2009\u202F]"      # spaces/commas/underscores & NBSP variants
_GROUPED_RE = re.compile(rf"^\d{{1,3}}(?:{_SEP_CLASS}\d{{3}})+$")

# ---- allowed operators (safe subset) ----
_ALLOWED_BINOPS = {
    ast.Add:      op.add,
    ast.Sub:      op.sub,
    ast.Mult:     op.mul,
    ast.FloorDiv: op.floordiv,
    ast.Mod:      op.mod,
    ast.LShift:   op.lshift,
    ast.RShift:   op.rshift,
}
_ALLOWED_UNARYOPS = {
    ast.UAdd: op.pos,
    ast.USub: op.neg,
}

_MAX_NODES = 64       # sanity guard
_MAX_BITS = 4096      # intermediate results; the final value must still fit 64 bits


class _IntExprError(Exception):
    pass


def _parse_int_literal(text: str) -> int | None:
    """Accepts: 42  1_000_000  0xFF  0b1010  1,000,000  1 000 000
       Rejects: 3.14  1,23  0xG1"""
    s = text.strip()
    if not s:
        return None

    for ch in _THIN_SPACES:
        s = s.replace(ch, " ")

    if s.lower().startswith(("0x", "0b", "0o")):
        try:
            return int(s.replace("_", ""), 0)
        except ValueError:
            return None

    if re.fullmatch(r"[+-]?\d[\d_]*", s):
        return int(s.replace("_", ""))

    if _GROUPED_RE.match(s):
        return int(re.sub(_SEP_CLASS, "", s))

    return None


def _check_bits(v: int) -> int:
    if v.bit_length() > _MAX_BITS:
        raise _IntExprError("intermediate result too large")
    return v


def _eval_int_expr(expr: str) -> int:
    """
    Evaluate a *safe* integer expression.

    Allowed: integers (incl. underscores and 0x/0b/0o prefixes), parentheses,
             + - * // % ** << >>, unary +/-. '^' is read as power.
    Disallowed: names, calls, attributes, floats, negative exponents.
    """
    expr = expr.replace("^", "**")
    try:
        tree = ast.parse(expr.strip(), mode="eval")
    except SyntaxError as e:
        raise _IntExprError("invalid integer expression") from e

    if sum(1 for _ in ast.walk(tree)) > _MAX_NODES:
        raise _IntExprError("expression too large")

    def _eval(node) -> int:
        if isinstance(node, ast.Expression):
            return _eval(node.body)

        if isinstance(node, ast.Constant):
            if isinstance(node.value, bool) or not isinstance(node.value, int):
                raise _IntExprError("non-integer values are not allowed")
            return _check_bits(node.value)

        if isinstance(node, ast.UnaryOp) and type(node.op) in _ALLOWED_UNARYOPS:
            return _ALLOWED_UNARYOPS[type(node.op)](_eval(node.operand))

        if isinstance(node, ast.BinOp):
            op_type = type(node.op)
            left = _eval(node.left)
            right = _eval(node.right)

            if op_type is ast.Pow:
                if right < 0:
                    raise UserInputError("negative exponents are not allowed in integer expressions")
                if abs(left) > 1 and left.bit_length() * right > _MAX_BITS:
                    raise _IntExprError("power too large")
                return pow(left, right)

            if op_type in (ast.FloorDiv, ast.Mod) and right == 0:
                raise UserInputError("division by zero in integer expression")

            if op_type in (ast.LShift, ast.RShift) and not 0 <= right <= _MAX_BITS:
                raise _IntExprError("shift count out of range")

            if op_type in _ALLOWED_BINOPS:
                return _check_bits(_ALLOWED_BINOPS[op_type](left, right))

        raise _IntExprError(f"unsupported syntax: {type(node).__name__}")

    return _eval(tree)


# ---- public entry point ----
def parse_uint64(text: str) -> int:
    """
    Parse a CLI number: a literal or an integer expression such as 2^64-59.
    The value must lie in [0, 2^64); anything else raises UserInputError.
    """
    n = _parse_int_literal(text)
    if n is None:
        try:
            n = _eval_int_expr(text)
        except _IntExprError as e:
            raise UserInputError(f"Invalid input: '{text}' is not an integer ({e}).") from None
    if not 0 <= n < BOUND_64:
        raise UserInputError(f"Invalid input: {text} = {n} is outside [0, 2^64).")
    return n
