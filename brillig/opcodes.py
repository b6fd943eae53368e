"""Bytecode instructions of the VM and the operands they refer to."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Union

from brillig.value import Value

Label = int


@dataclass(frozen=True, order=True)
class RegisterIndex:
    """An index into the VM's register space."""

    index: int

    def __post_init__(self) -> None:
        if self.index < 0:
            raise ValueError("register index must be non-negative")

    def __index__(self) -> int:
        return self.index

    def __int__(self) -> int:
        return self.index


@dataclass(frozen=True)
class HeapArray:
    """A fixed-size array in memory, starting at the address held in a register."""

    pointer: RegisterIndex
    size: int

    def __post_init__(self) -> None:
        if self.size < 0:
            raise ValueError("array size must be non-negative")


@dataclass(frozen=True)
class HeapVector:
    """A vector in memory whose start address and length are held in registers."""

    pointer: RegisterIndex
    size: RegisterIndex


RegisterOrMemory = Union[RegisterIndex, HeapArray, HeapVector]


class BinaryFieldOp(Enum):
    """Binary operations on field elements."""

    ADD = "add"
    SUB = "sub"
    MUL = "mul"
    DIV = "div"
    EQUALS = "equals"


class BinaryIntOp(Enum):
    """Binary operations on fixed-width integers."""

    ADD = "add"
    SUB = "sub"
    MUL = "mul"
    SIGNED_DIV = "signed_div"
    UNSIGNED_DIV = "unsigned_div"
    EQUALS = "equals"
    LESS_THAN = "less_than"
    LESS_THAN_EQUALS = "less_than_equals"
    AND = "and"
    OR = "or"
    XOR = "xor"
    SHL = "shl"
    SHR = "shr"


# Black box operations, natively implemented by the VM.


@dataclass(frozen=True)
class Sha256Op:
    """SHA-256 hash of a byte vector."""

    message: HeapVector
    output: HeapArray


@dataclass(frozen=True)
class Blake2sOp:
    """Blake2s hash of a byte vector."""

    message: HeapVector
    output: HeapArray


@dataclass(frozen=True)
class Keccak256Op:
    """Keccak-256 hash of a byte vector."""

    message: HeapVector
    output: HeapArray


@dataclass(frozen=True)
class HashToField128SecurityOp:
    """Blake2s hash of a byte vector reduced into a single field element."""

    message: HeapVector
    output: RegisterIndex


@dataclass(frozen=True)
class EcdsaSecp256k1Op:
    """Verification of an ECDSA signature over secp256k1."""

    hashed_msg: HeapVector
    public_key_x: HeapArray
    public_key_y: HeapArray
    signature: HeapArray
    result: RegisterIndex


@dataclass(frozen=True)
class EcdsaSecp256r1Op:
    """Verification of an ECDSA signature over secp256r1."""

    hashed_msg: HeapVector
    public_key_x: HeapArray
    public_key_y: HeapArray
    signature: HeapArray
    result: RegisterIndex


@dataclass(frozen=True)
class SchnorrVerifyOp:
    """Verification of a Schnorr signature."""

    public_key_x: RegisterIndex
    public_key_y: RegisterIndex
    message: HeapVector
    signature: HeapVector
    result: RegisterIndex


@dataclass(frozen=True)
class PedersenOp:
    """Pedersen commitment to a vector of field elements."""

    inputs: HeapVector
    domain_separator: RegisterIndex
    output: HeapArray


@dataclass(frozen=True)
class FixedBaseScalarMulOp:
    """Scalar multiplication of the embedded curve's generator."""

    low: RegisterIndex
    high: RegisterIndex
    result: HeapArray


BlackBoxOp = Union[
    Sha256Op,
    Blake2sOp,
    Keccak256Op,
    HashToField128SecurityOp,
    EcdsaSecp256k1Op,
    EcdsaSecp256r1Op,
    SchnorrVerifyOp,
    PedersenOp,
    FixedBaseScalarMulOp,
]


# Opcodes.


@dataclass(frozen=True)
class BinaryFieldOpcode:
    """Apply a field operation to two registers and store the result."""

    name: ClassVar[str] = "binary_field_op"
    destination: RegisterIndex
    op: BinaryFieldOp
    lhs: RegisterIndex
    rhs: RegisterIndex


@dataclass(frozen=True)
class BinaryIntOpcode:
    """Apply an integer operation of a given bit size to two registers."""

    name: ClassVar[str] = "binary_int_op"
    destination: RegisterIndex
    op: BinaryIntOp
    bit_size: int
    lhs: RegisterIndex
    rhs: RegisterIndex


@dataclass(frozen=True)
class JumpIfNot:
    """Jump to a location if the condition register is zero."""

    name: ClassVar[str] = "jmp_if_not"
    condition: RegisterIndex
    location: Label


@dataclass(frozen=True)
class JumpIf:
    """Jump to a location if the condition register is non-zero."""

    name: ClassVar[str] = "jmp_if"
    condition: RegisterIndex
    location: Label


@dataclass(frozen=True)
class Jump:
    """Jump unconditionally to a location."""

    name: ClassVar[str] = "jmp"
    location: Label


@dataclass(frozen=True)
class Call:
    """Push the return location and jump to a static location."""

    name: ClassVar[str] = "call"
    location: Label


@dataclass(frozen=True)
class Const:
    """Store a constant value in a register."""

    name: ClassVar[str] = "const"
    destination: RegisterIndex
    value: Value


@dataclass(frozen=True)
class Return:
    """Return to the instruction after the most recent call."""

    name: ClassVar[str] = "return"


@dataclass(frozen=True)
class ForeignCall:
    """Ask the caller to compute a function of the given inputs."""

    name: ClassVar[str] = "foreign_call"
    function: str
    destinations: tuple[RegisterOrMemory, ...]
    inputs: tuple[RegisterOrMemory, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "destinations", tuple(self.destinations))
        object.__setattr__(self, "inputs", tuple(self.inputs))


@dataclass(frozen=True)
class Mov:
    """Copy one register into another."""

    name: ClassVar[str] = "mov"
    destination: RegisterIndex
    source: RegisterIndex


@dataclass(frozen=True)
class Load:
    """Read memory at the address in a register into another register."""

    name: ClassVar[str] = "load"
    destination: RegisterIndex
    source_pointer: RegisterIndex


@dataclass(frozen=True)
class Store:
    """Write a register to memory at the address held in another register."""

    name: ClassVar[str] = "store"
    destination_pointer: RegisterIndex
    source: RegisterIndex


@dataclass(frozen=True)
class BlackBox:
    """Run a natively implemented black box operation."""

    name: ClassVar[str] = "black_box"
    op: BlackBoxOp


@dataclass(frozen=True)
class Trap:
    """Fail execution."""

    name: ClassVar[str] = "trap"


@dataclass(frozen=True)
class Stop:
    """Stop execution successfully."""

    name: ClassVar[str] = "stop"


Opcode = Union[
    BinaryFieldOpcode,
    BinaryIntOpcode,
    JumpIfNot,
    JumpIf,
    Jump,
    Call,
    Const,
    Return,
    ForeignCall,
    Mov,
    Load,
    Store,
    BlackBox,
    Trap,
    Stop,
]