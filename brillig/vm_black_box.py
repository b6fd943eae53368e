"""Evaluation of black box opcodes against the VM's registers and memory."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from brillig.blackbox import (
    BlackBoxFailed,
    BlackBoxFunc,
    BlackBoxFunctionSolver,
    blake2s,
    ecdsa_secp256k1_verify,
    ecdsa_secp256r1_verify,
    hash_to_field_128_security,
    keccak256,
    sha256,
)
from brillig.memory import Memory
from brillig.opcodes import (
    BlackBoxOp,
    Blake2sOp,
    EcdsaSecp256k1Op,
    EcdsaSecp256r1Op,
    FixedBaseScalarMulOp,
    HashToField128SecurityOp,
    HeapArray,
    HeapVector,
    Keccak256Op,
    PedersenOp,
    SchnorrVerifyOp,
    Sha256Op,
)
from brillig.registers import Registers
from brillig.value import Value

_U32_LIMIT = 1 << 32


def _read_heap_vector(memory: Memory, registers: Registers, vector: HeapVector) -> list[Value]:
    return memory.read_slice(
        registers.get(vector.pointer).to_usize(), registers.get(vector.size).to_usize()
    )


def _read_heap_array(memory: Memory, registers: Registers, array: HeapArray) -> list[Value]:
    return memory.read_slice(registers.get(array.pointer).to_usize(), array.size)


def _to_bytes(values: Iterable[Value]) -> bytes:
    """The last byte of every value."""
    return bytes(value.to_be_bytes()[-1] for value in values)


def _to_values(data: bytes) -> list[Value]:
    return [Value(byte) for byte in data]


def _write_to_heap_array(
    memory: Memory, registers: Registers, array: HeapArray, values: Sequence[Value]
) -> None:
    memory.write_slice(registers.get(array.pointer).to_usize(), values)


def _fixed_bytes(func: BlackBoxFunc, data: bytes, length: int, what: str) -> bytes:
    if len(data) != length:
        raise BlackBoxFailed(func, f"Invalid {what} length")
    return data


def evaluate_black_box(
    op: BlackBoxOp,
    solver: BlackBoxFunctionSolver,
    registers: Registers,
    memory: Memory,
) -> None:
    """Run a black box operation, updating registers and memory in place.

    Raises BlackBoxResolutionError when the operation cannot be solved.
    """
    match op:
        case Sha256Op() | Blake2sOp() | Keccak256Op():
            digest = {Sha256Op: sha256, Blake2sOp: blake2s, Keccak256Op: keccak256}[type(op)]
            message = _to_bytes(_read_heap_vector(memory, registers, op.message))
            _write_to_heap_array(memory, registers, op.output, _to_values(digest(message)))
        case HashToField128SecurityOp():
            message = _to_bytes(_read_heap_vector(memory, registers, op.message))
            registers.set(op.output, hash_to_field_128_security(message))
        case EcdsaSecp256k1Op() | EcdsaSecp256r1Op():
            if isinstance(op, EcdsaSecp256k1Op):
                func, verify = BlackBoxFunc.ECDSA_SECP256K1, ecdsa_secp256k1_verify
            else:
                func, verify = BlackBoxFunc.ECDSA_SECP256R1, ecdsa_secp256r1_verify
            public_key_x = _fixed_bytes(
                func,
                _to_bytes(_read_heap_array(memory, registers, op.public_key_x)),
                32,
                "public key x",
            )
            public_key_y = _fixed_bytes(
                func,
                _to_bytes(_read_heap_array(memory, registers, op.public_key_y)),
                32,
                "public key y",
            )
            signature = _fixed_bytes(
                func,
                _to_bytes(_read_heap_array(memory, registers, op.signature)),
                64,
                "signature",
            )
            hashed_msg = _to_bytes(_read_heap_vector(memory, registers, op.hashed_msg))
            verified = verify(hashed_msg, public_key_x, public_key_y, signature)
            registers.set(op.result, Value(int(verified)))
        case SchnorrVerifyOp():
            public_key_x = registers.get(op.public_key_x)
            public_key_y = registers.get(op.public_key_y)
            message = _to_bytes(_read_heap_vector(memory, registers, op.message))
            signature = _to_bytes(_read_heap_vector(memory, registers, op.signature))
            verified = solver.schnorr_verify(public_key_x, public_key_y, signature, message)
            registers.set(op.result, Value(int(bool(verified))))
        case FixedBaseScalarMulOp():
            low = registers.get(op.low)
            high = registers.get(op.high)
            x, y = solver.fixed_base_scalar_mul(low, high)
            _write_to_heap_array(memory, registers, op.result, [x, y])
        case PedersenOp():
            inputs = _read_heap_vector(memory, registers, op.inputs)
            domain_separator = registers.get(op.domain_separator).to_u128()
            if domain_separator >= _U32_LIMIT:
                raise BlackBoxFailed(BlackBoxFunc.PEDERSEN, "Invalid signature length")
            x, y = solver.pedersen(inputs, domain_separator)
            _write_to_heap_array(memory, registers, op.output, [x, y])
        case _:
            raise TypeError(f"unknown black box operation {op!r}")