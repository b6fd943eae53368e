import pytest

from brillig.arithmetic import evaluate_binary_bigint_op, evaluate_binary_field_op
from brillig.opcodes import BinaryFieldOp, BinaryIntOp
from brillig.value import FIELD_MODULUS, Value


def to_negative(a, bit_size):
    assert a > 0
    return 2**bit_size - a


def check(op, bit_size, cases):
    for a, b, expected in cases:
        assert evaluate_binary_bigint_op(op, a, b, bit_size) == expected, (a, b)


def test_add():
    bit_size = 4
    check(
        BinaryIntOp.ADD,
        bit_size,
        [
            (5, 10, 15),
            (10, 10, 4),
            (5, to_negative(3, bit_size), 2),
            (to_negative(3, bit_size), 1, to_negative(2, bit_size)),
            (5, to_negative(6, bit_size), to_negative(1, bit_size)),
        ],
    )


def test_sub():
    bit_size = 4
    check(
        BinaryIntOp.SUB,
        bit_size,
        [
            (5, 3, 2),
            (5, 10, to_negative(5, bit_size)),
            (5, to_negative(3, bit_size), 8),
            (to_negative(3, bit_size), 2, to_negative(5, bit_size)),
            (14, to_negative(3, bit_size), 1),
        ],
    )


def test_mul():
    bit_size = 4
    check(
        BinaryIntOp.MUL,
        bit_size,
        [
            (5, 3, 15),
            (5, 10, 2),
            (to_negative(1, bit_size), to_negative(5, bit_size), 5),
            (to_negative(1, bit_size), 5, to_negative(5, bit_size)),
            (to_negative(2, bit_size), 7, to_negative(14, bit_size)),
        ],
    )
    a = 2**127 - 1
    assert evaluate_binary_bigint_op(BinaryIntOp.MUL, a, 3, 127) == a - 2


def test_unsigned_div():
    check(BinaryIntOp.UNSIGNED_DIV, 4, [(5, 3, 1), (5, 10, 0)])


def test_unsigned_div_by_zero():
    with pytest.raises(ZeroDivisionError):
        evaluate_binary_bigint_op(BinaryIntOp.UNSIGNED_DIV, 5, 16, 4)


def test_signed_div():
    bit_size = 32
    check(
        BinaryIntOp.SIGNED_DIV,
        bit_size,
        [
            (5, to_negative(10, bit_size), 0),
            (5, to_negative(1, bit_size), to_negative(5, bit_size)),
            (to_negative(5, bit_size), to_negative(1, bit_size), 5),
        ],
    )


def test_signed_div_truncates_towards_zero():
    assert evaluate_binary_bigint_op(BinaryIntOp.SIGNED_DIV, 256 - 7, 2, 8) == 256 - 3


def test_comparisons():
    assert evaluate_binary_bigint_op(BinaryIntOp.EQUALS, 2, 2, 32) == 1
    assert evaluate_binary_bigint_op(BinaryIntOp.EQUALS, 2, 5, 32) == 0
    assert evaluate_binary_bigint_op(BinaryIntOp.EQUALS, 1, 17, 4) == 1
    assert evaluate_binary_bigint_op(BinaryIntOp.LESS_THAN, 5, 6, 32) == 1
    assert evaluate_binary_bigint_op(BinaryIntOp.LESS_THAN, 6, 6, 32) == 0
    assert evaluate_binary_bigint_op(BinaryIntOp.LESS_THAN_EQUALS, 6, 6, 32) == 1
    assert evaluate_binary_bigint_op(BinaryIntOp.LESS_THAN_EQUALS, 7, 6, 32) == 0


def test_bitwise():
    assert evaluate_binary_bigint_op(BinaryIntOp.AND, 0b1100, 0b1010, 4) == 0b1000
    assert evaluate_binary_bigint_op(BinaryIntOp.OR, 0b1100, 0b1010, 4) == 0b1110
    assert evaluate_binary_bigint_op(BinaryIntOp.XOR, 0b1100, 0b1010, 4) == 0b0110


def test_shifts():
    assert evaluate_binary_bigint_op(BinaryIntOp.SHL, 0b0011, 2, 4) == 0b1100
    assert evaluate_binary_bigint_op(BinaryIntOp.SHL, 0b0011, 3, 4) == 0b1000
    assert evaluate_binary_bigint_op(BinaryIntOp.SHR, 0b1100, 2, 4) == 0b0011


def test_shift_rejects_large_bit_size():
    with pytest.raises(ValueError):
        evaluate_binary_bigint_op(BinaryIntOp.SHR, 1, 1, 129)


def test_field_ops():
    assert evaluate_binary_field_op(BinaryFieldOp.ADD, Value(2), Value(3)) == Value(5)
    assert evaluate_binary_field_op(BinaryFieldOp.SUB, Value(0), Value(1)) == Value(
        FIELD_MODULUS - 1
    )
    assert evaluate_binary_field_op(BinaryFieldOp.MUL, Value(4), Value(5)) == Value(20)
    assert evaluate_binary_field_op(BinaryFieldOp.DIV, Value(20), Value(5)) == Value(4)


def test_field_div_round_trip():
    quotient = evaluate_binary_field_op(BinaryFieldOp.DIV, Value(7), Value(3))
    assert evaluate_binary_field_op(BinaryFieldOp.MUL, quotient, Value(3)) == Value(7)


def test_field_div_by_zero_is_zero():
    assert evaluate_binary_field_op(BinaryFieldOp.DIV, Value(7), Value(0)) == Value(0)


def test_field_equals():
    assert evaluate_binary_field_op(BinaryFieldOp.EQUALS, Value(1), Value(1)) == Value(1)
    assert evaluate_binary_field_op(BinaryFieldOp.EQUALS, Value(1), Value(2)) == Value(0)