"""Values held in registers and memory of the VM, and their types."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

FIELD_MODULUS = (
    21888242871839275222246405745257275088548364400416034343698204186575808495617
)
"""Order of the prime field that every VM value lives in."""

FIELD_BYTES = 32
_U128_MASK = (1 << 128) - 1
_U64_LIMIT = 1 << 64


class TypKind(IntEnum):
    """The kinds of values the VM knows about."""

    FIELD = 0
    UNSIGNED = 1
    SIGNED = 2


@dataclass(frozen=True, order=True)
class Typ:
    """A value type: a field element, or an integer of a given bit size."""

    kind: TypKind
    bit_size: int | None = None

    def __post_init__(self) -> None:
        if self.kind is TypKind.FIELD:
            if self.bit_size is not None:
                raise ValueError("field type takes no bit size")
        elif self.bit_size is None or self.bit_size < 0:
            raise ValueError(f"{self.kind.name.lower()} type needs a non-negative bit size")


@dataclass(frozen=True, order=True)
class Value:
    """A field element, always held reduced modulo the field order."""

    inner: int = 0

    def __post_init__(self) -> None:
        if not isinstance(self.inner, int):
            raise TypeError(f"cannot make a Value from {type(self.inner).__name__}")
        object.__setattr__(self, "inner", int(self.inner) % FIELD_MODULUS)

    def is_zero(self) -> bool:
        """Whether the value is the field's zero."""
        return self.inner == 0

    def to_u128(self) -> int:
        """The low 128 bits of the value."""
        return self.inner & _U128_MASK

    def to_usize(self) -> int:
        """The value as an index; raises OverflowError if it exceeds 64 bits."""
        if self.inner >= _U64_LIMIT:
            raise OverflowError("register does not fit into u64")
        return self.inner

    def to_be_bytes(self) -> bytes:
        """The value as 32 big-endian bytes."""
        return self.inner.to_bytes(FIELD_BYTES, "big")

    @classmethod
    def from_be_bytes_reduce(cls, data: bytes) -> Value:
        """Read big-endian bytes as an integer and reduce it into the field."""
        return cls(int.from_bytes(bytes(data), "big"))

    def __int__(self) -> int:
        return self.inner

    def __add__(self, other: object) -> Value:
        if not isinstance(other, Value):
            return NotImplemented
        return Value(self.inner + other.inner)

    def __sub__(self, other: object) -> Value:
        if not isinstance(other, Value):
            return NotImplemented
        return Value(self.inner - other.inner)

    def __mul__(self, other: object) -> Value:
        if not isinstance(other, Value):
            return NotImplemented
        return Value(self.inner * other.inner)

    def __truediv__(self, other: object) -> Value:
        """Field division; dividing by zero yields zero."""
        if not isinstance(other, Value):
            return NotImplemented
        if other.inner == 0:
            return Value(0)
        return Value(self.inner * pow(other.inner, -1, FIELD_MODULUS))

    def __neg__(self) -> Value:
        return Value(-self.inner)