"""Evaluation of binary field and integer operations."""

from __future__ import annotations

from brillig.opcodes import BinaryFieldOp, BinaryIntOp
from brillig.value import Value

_MAX_SHIFT_BIT_SIZE = 128
_U128_LIMIT = 1 << 128


def evaluate_binary_field_op(op: BinaryFieldOp, a: Value, b: Value) -> Value:
    """Apply a field operation to two field elements."""
    if op is BinaryFieldOp.ADD:
        return a + b
    if op is BinaryFieldOp.SUB:
        return a - b
    if op is BinaryFieldOp.MUL:
        return a * b
    if op is BinaryFieldOp.DIV:
        return a / b
    if op is BinaryFieldOp.EQUALS:
        return Value(int(a == b))
    raise ValueError(f"unknown field operation {op!r}")


def _to_signed(a: int, bit_size: int) -> int:
    if bit_size < 1:
        raise ValueError("signed operations need a bit size of at least 1")
    half = 1 << (bit_size - 1)
    return a if a < half else a - 2 * half


def _to_unsigned(a: int, bit_size: int) -> int:
    if a >= 0:
        return a
    modulus = 1 << bit_size
    if -a > modulus:
        raise OverflowError("signed result does not fit in the bit size")
    return modulus + a


def _truncating_div(a: int, b: int) -> int:
    quotient = abs(a) // abs(b)
    return -quotient if (a < 0) != (b < 0) else quotient


def _shift_amount(b: int, bit_size: int) -> int:
    if bit_size > _MAX_SHIFT_BIT_SIZE:
        raise ValueError("unsupported bit size for right shift")
    if b >= _U128_LIMIT:
        raise OverflowError("shift amount does not fit into u128")
    return b


def evaluate_binary_bigint_op(op: BinaryIntOp, a: int, b: int, bit_size: int) -> int:
    """Apply an integer operation on unsigned integers of the given bit size."""
    if a < 0 or b < 0:
        raise ValueError("operands must be non-negative")
    modulus = 1 << bit_size
    if op is BinaryIntOp.ADD:
        return (a + b) % modulus
    if op is BinaryIntOp.SUB:
        if modulus + a < b:
            raise OverflowError("subtraction underflow")
        return (modulus + a - b) % modulus
    if op is BinaryIntOp.MUL:
        return (a * b) % modulus
    if op is BinaryIntOp.UNSIGNED_DIV:
        return (a % modulus) // (b % modulus)
    if op is BinaryIntOp.SIGNED_DIV:
        quotient = _truncating_div(_to_signed(a, bit_size), _to_signed(b, bit_size))
        return _to_unsigned(quotient, bit_size)
    if op is BinaryIntOp.EQUALS:
        return int(a % modulus == b % modulus)
    if op is BinaryIntOp.LESS_THAN:
        return int(a % modulus < b % modulus)
    if op is BinaryIntOp.LESS_THAN_EQUALS:
        return int(a % modulus <= b % modulus)
    if op is BinaryIntOp.AND:
        return (a & b) % modulus
    if op is BinaryIntOp.OR:
        return (a | b) % modulus
    if op is BinaryIntOp.XOR:
        return (a ^ b) % modulus
    if op is BinaryIntOp.SHL:
        return (a << _shift_amount(b, bit_size)) % modulus
    if op is BinaryIntOp.SHR:
        return (a >> _shift_amount(b, bit_size)) % modulus
    raise ValueError(f"unknown integer operation {op!r}")