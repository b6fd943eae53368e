"""Results supplied by the caller for foreign calls."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Union

from brillig.value import Value


@dataclass(frozen=True)
class Single:
    """A single value output of a foreign call."""

    value: Value


@dataclass(frozen=True)
class Array:
    """An array of values output by a foreign call."""

    values: tuple[Value, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", tuple(self.values))


ForeignCallOutput = Union[Single, Array]


@dataclass(frozen=True)
class ForeignCallResult:
    """All resolved outputs of one foreign call."""

    values: tuple[ForeignCallOutput, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", tuple(self.values))

    @classmethod
    def from_value(cls, value: Value) -> ForeignCallResult:
        """A result holding a single value."""
        return cls((Single(value),))

    @classmethod
    def from_values(cls, values: Iterable[Value]) -> ForeignCallResult:
        """A result holding one array of values."""
        return cls((Array(tuple(values)),))

    @classmethod
    def from_outputs(cls, outputs: Iterable[ForeignCallOutput]) -> ForeignCallResult:
        """A result holding the given outputs."""
        return cls(tuple(outputs))