"""A register-based virtual machine for Brillig bytecode, with black box hashes and ECDSA checks."""

__version__ = "0.1.0"