"""Execution status of the VM and the data flow of foreign calls."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Union

from brillig.foreign_call import Array, ForeignCallOutput, Single
from brillig.memory import Memory
from brillig.opcodes import HeapArray, HeapVector, RegisterIndex, RegisterOrMemory
from brillig.registers import Registers
from brillig.value import Value


@dataclass(frozen=True)
class Finished:
    """Execution has completed."""


@dataclass(frozen=True)
class InProgress:
    """Execution can continue with the next opcode."""


@dataclass(frozen=True)
class Failure:
    """Execution failed.

    ``call_stack`` holds the locations of the active calls followed by the
    location of the opcode that failed.
    """

    message: str
    call_stack: tuple[int, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "call_stack", tuple(self.call_stack))


@dataclass(frozen=True)
class ForeignCallWait:
    """Execution paused at a foreign call whose result is not yet known.

    The caller computes the result of ``function`` applied to ``inputs``,
    supplies it to the VM and resumes execution. Each input is a tuple of
    values, since an input may be a single register or a region of memory.
    """

    function: str
    inputs: tuple[tuple[Value, ...], ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "inputs", tuple(tuple(values) for values in self.inputs))


VMStatus = Union[Finished, InProgress, Failure, ForeignCallWait]


class ForeignCallMismatch(ValueError):
    """A foreign call result does not fit the destinations in the bytecode."""


def _resolve_input(input_: RegisterOrMemory, registers: Registers, memory: Memory) -> list[Value]:
    match input_:
        case RegisterIndex():
            return [registers.get(input_)]
        case HeapArray(pointer=pointer, size=size):
            return memory.read_slice(registers.get(pointer).to_usize(), size)
        case HeapVector(pointer=pointer, size=size_register):
            return memory.read_slice(
                registers.get(pointer).to_usize(), registers.get(size_register).to_usize()
            )
        case _:
            raise TypeError(f"unknown foreign call input {input_!r}")


def resolve_foreign_call_inputs(
    inputs: Iterable[RegisterOrMemory], registers: Registers, memory: Memory
) -> list[list[Value]]:
    """The values each foreign call input refers to, read from registers or memory."""
    return [_resolve_input(input_, registers, memory) for input_ in inputs]


def write_foreign_call_outputs(
    destinations: Sequence[RegisterOrMemory],
    outputs: Sequence[ForeignCallOutput],
    registers: Registers,
    memory: Memory,
) -> None:
    """Write the outputs of a foreign call into their destinations.

    Outputs are written pairwise with destinations. Writing stops at the
    first array whose length differs from its destination's size. Raises
    ForeignCallMismatch if the result does not fit the destinations; the
    writes made before the mismatch was found are kept.
    """
    invalid_result = False
    for destination, output in zip(destinations, outputs):
        match destination:
            case RegisterIndex():
                if not isinstance(output, Single):
                    raise ForeignCallMismatch(
                        "Function result size does not match brillig bytecode (expected 1 result)"
                    )
                registers.set(destination, output.value)
            case HeapArray(pointer=pointer, size=size):
                if not isinstance(output, Array):
                    raise ForeignCallMismatch(
                        "Function result size does not match brillig bytecode size"
                    )
                if len(output.values) != size:
                    invalid_result = True
                    break
                memory.write_slice(registers.get(pointer).to_usize(), output.values)
            case HeapVector(pointer=pointer, size=size_register):
                if not isinstance(output, Array):
                    raise ForeignCallMismatch(
                        "Function result size does not match brillig bytecode size"
                    )
                registers.set(size_register, Value(len(output.values)))
                memory.write_slice(registers.get(pointer).to_usize(), output.values)
            case _:
                raise TypeError(f"unknown foreign call destination {destination!r}")

    if invalid_result:
        raise ForeignCallMismatch("Function result size does not match brillig bytecode")
    if len(destinations) != len(outputs):
        raise ForeignCallMismatch(
            f"{len(outputs)} output values were provided as a foreign call result "
            f"for {len(destinations)} destination slots"
        )