# src/ssmul/expreval.py
"""Safe integer-expression parsing for command-line operands."""

from __future__ import annotations

import ast
import operator as op
import re

from ssmul.runtime import CFG
from ssmul.utility import UserInputError, dec_digits

# ---- simple number parsing helpers ----
_SEP_CLASS = r"[ ,_\u00A0\u2009\u202F]"      # spaces/commas/underscores & NBSP variants
_GROUPED_RE = re.compile(rf"^[+-]?\d{{1,3}}(?:{_SEP_CLASS}\d{{3}})+$")

# ---- allowed operators (safe subset) ----
_ALLOWED_BINOPS = {
    ast.Add:      op.add,
    ast.Sub:      op.sub,
    ast.Mult:     op.mul,
    ast.FloorDiv: op.floordiv,
    ast.Mod:      op.mod,
    ast.LShift:   op.lshift,
    ast.RShift:   op.rshift,
    ast.BitAnd:   op.and_,
    ast.BitXor:   op.xor,
    ast.BitOr:    op.or_,
}
_ALLOWED_UNARYOPS = {
    ast.UAdd: op.pos,
    ast.USub: op.neg,
    ast.Invert: op.invert,
}

_MAX_NODES = 256  # sanity guard
_DEFAULT_MAX_DIGITS = 1_000_000


def _max_digits() -> int:
    return int(CFG("BEHAVIOUR.MAX_DIGITS", _DEFAULT_MAX_DIGITS))


def _too_many_digits() -> UserInputError:
    return UserInputError(
        f"number has more than {_max_digits()} decimal digits. "
        "Increase BEHAVIOUR.MAX_DIGITS in the profile or pass a smaller value."
    )


def _would_exceed_digit_limit(bits: int) -> bool:
    # Lower bound: digits(2**(bits-1)) = floor((bits-1) * log10(2)) + 1
    return bits > 1 and 1 + ((bits - 1) * 30103) // 100000 > _max_digits()


def _eval_int_expr(expr: str) -> int:
    """
    Evaluate a *safe* integer expression.

    Allowed: integers (incl. underscores, 0x/0o/0b), parentheses,
             + - * // % **, << >>, & ^ |, unary + - ~.
    Disallowed: names, calls, attributes, subscripts, floats.
    Negative exponents are rejected (to avoid floats).
    BEHAVIOUR.MAX_DIGITS is enforced on powers, shifts and the result.
    """
    try:
        tree = ast.parse(expr, mode="eval")
    except SyntaxError as e:
        raise UserInputError(f"Invalid input: '{expr}' is not an integer expression") from e

    if sum(1 for _ in ast.walk(tree)) > _MAX_NODES:
        raise UserInputError("Invalid input: expression too large")

    def _eval(node) -> int:
        if isinstance(node, ast.Constant):
            if isinstance(node.value, bool) or not isinstance(node.value, int):
                raise UserInputError("Invalid input: only integers are allowed")
            return node.value

        if isinstance(node, ast.UnaryOp) and type(node.op) in _ALLOWED_UNARYOPS:
            return _ALLOWED_UNARYOPS[type(node.op)](_eval(node.operand))

        if isinstance(node, ast.BinOp):
            op_type = type(node.op)
            left = _eval(node.left)
            right = _eval(node.right)

            if op_type is ast.Pow:
                if right < 0:
                    raise UserInputError("Invalid input: negative exponents are not allowed")
                if left not in (-1, 0, 1) and _would_exceed_digit_limit(right * (abs(left).bit_length() - 1) + 1):
                    raise _too_many_digits()
                return left ** right

            if op_type is ast.LShift and right > 0 and _would_exceed_digit_limit(left.bit_length() + right):
                raise _too_many_digits()

            if op_type in (ast.FloorDiv, ast.Mod) and right == 0:
                raise UserInputError("Invalid input: division by zero")

            if op_type in _ALLOWED_BINOPS:
                return _ALLOWED_BINOPS[op_type](left, right)

        raise UserInputError(f"Invalid input: unsupported syntax ({type(node).__name__})")

    value = _eval(tree.body)
    if dec_digits(value) > _max_digits():
        raise _too_many_digits()
    return value


def parse_operand(text: str) -> int:
    """Integer literal ("1 000 000", "-7", "0xff") or safe expression ("2**64 - 1")."""
    s = (text or "").strip()
    if not s:
        raise UserInputError("Invalid input: empty operand")
    if _GROUPED_RE.match(s):
        s = re.sub(_SEP_CLASS, "", s)
    return _eval_int_expr(s)
