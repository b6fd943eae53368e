# brillig

A small register-based virtual machine that executes Brillig bytecode.
Programs compute over field elements and fixed-width integers, can hand work
back to the host through foreign calls, and have built-in black box functions
for hashing and ECDSA signature verification.

## Installation

```
pip install .
```

## Modules

- `brillig.value` – `Value`, an element of the BN254 scalar field (always held
  reduced; division by zero gives zero), and `Typ` / `TypKind` describing field,
  unsigned and signed types.
- `brillig.opcodes` – the instruction set: `Const`, `Mov`, `Load`, `Store`,
  `BinaryFieldOpcode`, `BinaryIntOpcode`, `Jump`, `JumpIf`, `JumpIfNot`,
  `Call`, `Return`, `ForeignCall`, `BlackBox`, `Trap` and `Stop`; the operand
  types `RegisterIndex`, `HeapArray` and `HeapVector`; the operation enums
  `BinaryFieldOp` and `BinaryIntOp`; and the black box operations
  `Sha256Op`, `Blake2sOp`, `Keccak256Op`, `HashToField128SecurityOp`,
  `EcdsaSecp256k1Op`, `EcdsaSecp256r1Op`, `SchnorrVerifyOp`, `PedersenOp` and
  `FixedBaseScalarMulOp`. Every opcode class has a `name` such as `"jmp_if"`.
- `brillig.foreign_call` – `ForeignCallResult` and its outputs `Single` and
  `Array`, with the constructors `from_value`, `from_values` and `from_outputs`.
- `brillig.blackbox` – `sha256`, `blake2s`, `keccak256`,
  `hash_to_field_128_security`, `ecdsa_secp256k1_verify`,
  `ecdsa_secp256r1_verify`, the `BlackBoxFunctionSolver` base class for
  backend-specific functions, and the errors `BlackBoxResolutionError`,
  `BlackBoxUnsupported` and `BlackBoxFailed`.
- `brillig.arithmetic` – `evaluate_binary_field_op` and
  `evaluate_binary_bigint_op` (wrapping integer arithmetic at a given bit size).
- `brillig.memory` – `Memory`, which grows with zeros when written past its end.
- `brillig.registers` – `Registers`; unset registers read as zero, and indices
  of 2**16 and above raise `IndexError`.
- `brillig.vm_black_box` – `evaluate_black_box`, which runs a black box
  operation against registers and memory.
- `brillig.execution` – the status classes `Finished`, `InProgress`,
  `Failure` and `ForeignCallWait`, plus `resolve_foreign_call_inputs`,
  `write_foreign_call_outputs` and the `ForeignCallMismatch` error.
- `brillig.vm` – the `VM` and a `DummyBlackBoxSolver`.

## Running a program

```python
from brillig.execution import Finished
from brillig.opcodes import BinaryIntOp, BinaryIntOpcode, RegisterIndex
from brillig.registers import Registers
from brillig.value import Value
from brillig.vm import VM, DummyBlackBoxSolver

registers = Registers.load([Value(1), Value(2), Value(0)])
program = [
    BinaryIntOpcode(
        destination=RegisterIndex(2),
        op=BinaryIntOp.ADD,
        bit_size=32,
        lhs=RegisterIndex(0),
        rhs=RegisterIndex(1),
    ),
]

vm = VM(registers, [], program, [], DummyBlackBoxSolver())
status = vm.process_opcodes()
assert isinstance(status, Finished)
assert vm.registers.get(RegisterIndex(2)) == Value(3)
```

`process_opcode()` runs a single instruction and returns the new status;
`process_opcodes()` runs until the VM finishes, fails or waits on a foreign
call. Execution finishes at `Stop` or when the program counter moves past the
last opcode.

## Foreign calls

When the VM reaches a `ForeignCall` whose result is not yet known, it stops
with a `ForeignCallWait` status carrying the function name and the values of
its inputs. Compute the answer, append a `ForeignCallResult` (for example
`ForeignCallResult.from_value(Value(10))`) to `vm.foreign_call_results`, and
call `process_opcodes()` again to resume from that opcode.

## Errors

A `Trap`, a `Return` with an empty call stack, a black box function raising
`BlackBoxResolutionError`, or a foreign call result that does not fit its
destinations stops the VM with a `Failure` status holding a message and the
call stack of opcode indexes, ending with the failing opcode's index.

Other faults are raised as Python exceptions: reading memory out of bounds or
running with the program counter outside the bytecode raises `IndexError`, and
malformed ECDSA inputs (a key not on the curve, an out-of-range signature)
raise `ValueError`.

## What the package does not do

- There is no command-line tool and no reader or writer for a bytecode file
  format; programs are built from the opcode classes in Python.
- Schnorr verification, Pedersen commitments and fixed-base scalar
  multiplication are not computed here. `BlackBoxFunctionSolver` raises
  `BlackBoxUnsupported` for them; supply a subclass that implements them.
  `DummyBlackBoxSolver` only returns fixed answers (every signature valid,
  the points (2, 3) and (4, 5)).

## Tests

```
pip install ".[test]"
pytest
```