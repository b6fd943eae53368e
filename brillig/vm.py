"""The VM: executes bytecode over registers and memory."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from brillig.arithmetic import evaluate_binary_bigint_op, evaluate_binary_field_op
from brillig.blackbox import BlackBoxFunctionSolver, BlackBoxResolutionError
from brillig.execution import (
    Failure,
    Finished,
    ForeignCallMismatch,
    ForeignCallWait,
    InProgress,
    VMStatus,
    resolve_foreign_call_inputs,
    write_foreign_call_outputs,
)
from brillig.foreign_call import ForeignCallResult
from brillig.memory import Memory
from brillig.opcodes import (
    BinaryFieldOpcode,
    BinaryIntOpcode,
    BlackBox,
    Call,
    Const,
    ForeignCall,
    Jump,
    JumpIf,
    JumpIfNot,
    Load,
    Mov,
    Opcode,
    Return,
    Stop,
    Store,
    Trap,
)
from brillig.registers import Registers
from brillig.value import Value
from brillig.vm_black_box import evaluate_black_box


class DummyBlackBoxSolver(BlackBoxFunctionSolver):
    """A solver returning fixed answers, useful where no backend is available."""

    def schnorr_verify(
        self,
        public_key_x: Value,
        public_key_y: Value,
        signature: bytes,
        message: bytes,
    ) -> bool:
        """Accept every signature."""
        return True

    def pedersen(self, inputs: Sequence[Value], domain_separator: int) -> tuple[Value, Value]:
        """Return the point (2, 3)."""
        return Value(2), Value(3)

    def fixed_base_scalar_mul(self, low: Value, high: Value) -> tuple[Value, Value]:
        """Return the point (4, 5)."""
        return Value(4), Value(5)


class VM:
    """State of one bytecode execution.

    When a foreign call is reached whose result is not yet in
    ``foreign_call_results``, execution pauses with a ForeignCallWait status.
    The caller appends the result and resumes by processing opcodes again.
    """

    def __init__(
        self,
        inputs: Registers,
        memory: Iterable[Value],
        bytecode: Sequence[Opcode],
        foreign_call_results: Iterable[ForeignCallResult],
        black_box_solver: BlackBoxFunctionSolver,
    ) -> None:
        self.registers = inputs
        self.memory = Memory(list(memory))
        self.bytecode: list[Opcode] = list(bytecode)
        self.foreign_call_results: list[ForeignCallResult] = list(foreign_call_results)
        self.black_box_solver = black_box_solver
        self.program_counter = 0
        self.foreign_call_counter = 0
        self.call_stack: list[int] = []
        self.status: VMStatus = InProgress()

    def _fail(self, message: str) -> VMStatus:
        self.status = Failure(message, (*self.call_stack, self.program_counter))
        return self.status

    def _set_program_counter(self, value: int) -> VMStatus:
        self.program_counter = value
        if self.program_counter >= len(self.bytecode):
            self.status = Finished()
        return self.status

    def _increment_program_counter(self) -> VMStatus:
        return self._set_program_counter(self.program_counter + 1)

    def process_opcodes(self) -> VMStatus:
        """Process opcodes until execution finishes, fails or waits on a foreign call."""
        while isinstance(self.process_opcode(), InProgress):
            pass
        return self.status

    def process_opcode(self) -> VMStatus:
        """Process the opcode at the program counter and return the new status."""
        if not 0 <= self.program_counter < len(self.bytecode):
            raise IndexError(
                f"program counter {self.program_counter} is outside the bytecode"
            )
        opcode = self.bytecode[self.program_counter]
        registers = self.registers
        match opcode:
            case BinaryFieldOpcode(destination=destination, op=op, lhs=lhs, rhs=rhs):
                result = evaluate_binary_field_op(op, registers.get(lhs), registers.get(rhs))
                registers.set(destination, result)
                return self._increment_program_counter()
            case BinaryIntOpcode(
                destination=destination, op=op, bit_size=bit_size, lhs=lhs, rhs=rhs
            ):
                result = evaluate_binary_bigint_op(
                    op, int(registers.get(lhs)), int(registers.get(rhs)), bit_size
                )
                registers.set(destination, Value(result))
                return self._increment_program_counter()
            case Jump(location=location):
                return self._set_program_counter(location)
            case JumpIf(condition=condition, location=location):
                if not registers.get(condition).is_zero():
                    return self._set_program_counter(location)
                return self._increment_program_counter()
            case JumpIfNot(condition=condition, location=location):
                if registers.get(condition).is_zero():
                    return self._set_program_counter(location)
                return self._increment_program_counter()
            case Return():
                if not self.call_stack:
                    return self._fail("return opcode hit, but callstack already empty")
                return self._set_program_counter(self.call_stack.pop() + 1)
            case ForeignCall():
                return self._process_foreign_call(opcode)
            case Mov(destination=destination, source=source):
                registers.set(destination, registers.get(source))
                return self._increment_program_counter()
            case Trap():
                return self._fail("explicit trap hit in brillig")
            case Stop():
                self.status = Finished()
                return self.status
            case Load(destination=destination, source_pointer=source_pointer):
                value = self.memory.read(registers.get(source_pointer).to_usize())
                registers.set(destination, value)
                return self._increment_program_counter()
            case Store(destination_pointer=destination_pointer, source=source):
                self.memory.write(
                    registers.get(destination_pointer).to_usize(), registers.get(source)
                )
                return self._increment_program_counter()
            case Call(location=location):
                self.call_stack.append(self.program_counter)
                return self._set_program_counter(location)
            case Const(destination=destination, value=value):
                registers.set(destination, value)
                return self._increment_program_counter()
            case BlackBox(op=op):
                try:
                    evaluate_black_box(op, self.black_box_solver, registers, self.memory)
                except BlackBoxResolutionError as error:
                    return self._fail(str(error))
                return self._increment_program_counter()
            case _:
                raise TypeError(f"unknown opcode {opcode!r}")

    def _process_foreign_call(self, opcode: ForeignCall) -> VMStatus:
        if self.foreign_call_counter >= len(self.foreign_call_results):
            inputs = resolve_foreign_call_inputs(opcode.inputs, self.registers, self.memory)
            self.status = ForeignCallWait(opcode.function, inputs)
            return self.status

        result = self.foreign_call_results[self.foreign_call_counter]
        try:
            write_foreign_call_outputs(
                opcode.destinations, result.values, self.registers, self.memory
            )
        except ForeignCallMismatch as error:
            return self._fail(str(error))

        self.foreign_call_counter += 1
        self.status = InProgress()
        return self._increment_program_counter()