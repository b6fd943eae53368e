"""Register file of the VM."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from brillig.opcodes import RegisterIndex
from brillig.value import Value

MAX_REGISTERS = 2**16
"""Upper bound on register indices, a reasonable count for a SNARK prover."""


@dataclass
class Registers:
    """Field element registers; unset registers read as zero."""

    inner: list[Value] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.inner = list(self.inner)

    @classmethod
    def load(cls, values: Iterable[Value]) -> Registers:
        """Registers initialised with the given values."""
        return cls(list(values))

    def get(self, register_index: RegisterIndex) -> Value:
        """The value of a register, zero if never set."""
        index = int(register_index)
        if index >= MAX_REGISTERS:
            raise IndexError("Reading register past maximum!")
        if index < len(self.inner):
            return self.inner[index]
        return Value(0)

    def set(self, register_index: RegisterIndex, value: Value) -> None:
        """Set a register, growing the register file with zeros as needed."""
        index = int(register_index)
        if index >= MAX_REGISTERS:
            raise IndexError("Writing register past maximum!")
        if index >= len(self.inner):
            self.inner.extend(Value(0) for _ in range(index + 1 - len(self.inner)))
        self.inner[index] = value