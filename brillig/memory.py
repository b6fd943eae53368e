"""Growable memory of the VM."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from brillig.value import Value


@dataclass
class Memory:
    """A list of values that grows with zeros when written past its end."""

    inner: list[Value] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.inner = list(self.inner)

    def __len__(self) -> int:
        return len(self.inner)

    def _check_range(self, ptr: int, length: int) -> None:
        if ptr < 0 or length < 0 or ptr + length > len(self.inner):
            raise IndexError(
                f"memory range {ptr}..{ptr + length} out of bounds for size {len(self.inner)}"
            )

    def read(self, ptr: int) -> Value:
        """The value at address ``ptr``."""
        self._check_range(ptr, 1)
        return self.inner[ptr]

    def read_slice(self, ptr: int, length: int) -> list[Value]:
        """The ``length`` values starting at address ``ptr``."""
        self._check_range(ptr, length)
        return self.inner[ptr : ptr + length]

    def write(self, ptr: int, value: Value) -> None:
        """Set the value at address ``ptr``."""
        self.write_slice(ptr, (value,))

    def write_slice(self, ptr: int, values: Iterable[Value]) -> None:
        """Write values starting at address ``ptr``, growing memory as needed."""
        if ptr < 0:
            raise IndexError("memory address must be non-negative")
        values = list(values)
        end = ptr + len(values)
        if end > len(self.inner):
            self.inner.extend(Value(0) for _ in range(end - len(self.inner)))
        self.inner[ptr:end] = values

    def values(self) -> list[Value]:
        """A copy of all values held in memory."""
        return list(self.inner)