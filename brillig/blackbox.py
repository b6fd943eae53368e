"""Black box functions: reference hashes, ECDSA checks and the solver interface."""

from __future__ import annotations

import hashlib
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum

from Crypto.Hash import keccak

from brillig.value import Value

_DIGEST_BYTES = 32
_SCALAR_BYTES = 32


class BlackBoxFunc(Enum):
    """Black box functions known to the VM."""

    SHA256 = "sha256"
    BLAKE2S = "blake2s"
    KECCAK256 = "keccak256"
    HASH_TO_FIELD_128_SECURITY = "hash_to_field_128_security"
    ECDSA_SECP256K1 = "ecdsa_secp256k1"
    ECDSA_SECP256R1 = "ecdsa_secp256r1"
    SCHNORR_VERIFY = "schnorr_verify"
    PEDERSEN = "pedersen"
    FIXED_BASE_SCALAR_MUL = "fixed_base_scalar_mul"

    def __str__(self) -> str:
        return self.value


class BlackBoxResolutionError(Exception):
    """A black box function could not be resolved."""


class BlackBoxUnsupported(BlackBoxResolutionError):
    """The solver does not support the given black box function."""

    def __init__(self, func: BlackBoxFunc) -> None:
        super().__init__(f"unsupported blackbox function: {func}")
        self.func = func


class BlackBoxFailed(BlackBoxResolutionError):
    """Solving the given black box function failed."""

    def __init__(self, func: BlackBoxFunc, reason: str) -> None:
        super().__init__(f"failed to solve blackbox function: {func}, reason: {reason}")
        self.func = func
        self.reason = reason


class BlackBoxFunctionSolver:
    """Computes the black box functions that have no reference implementation.

    A backend overrides the methods it supports; the others raise
    BlackBoxUnsupported.
    """

    def schnorr_verify(
        self,
        public_key_x: Value,
        public_key_y: Value,
        signature: bytes,
        message: bytes,
    ) -> bool:
        """Verify a Schnorr signature over the given message."""
        raise BlackBoxUnsupported(BlackBoxFunc.SCHNORR_VERIFY)

    def pedersen(self, inputs: Sequence[Value], domain_separator: int) -> tuple[Value, Value]:
        """Compute a Pedersen commitment to the inputs."""
        raise BlackBoxUnsupported(BlackBoxFunc.PEDERSEN)

    def fixed_base_scalar_mul(self, low: Value, high: Value) -> tuple[Value, Value]:
        """Multiply the embedded curve's generator by the scalar (low, high)."""
        raise BlackBoxUnsupported(BlackBoxFunc.FIXED_BASE_SCALAR_MUL)


def _digest_256(func: BlackBoxFunc, digest: Callable[[bytes], bytes], data: bytes) -> bytes:
    output = digest(bytes(data))
    if len(output) != _DIGEST_BYTES:
        raise BlackBoxFailed(func, "digest should be 256 bits")
    return output


def _keccak256_digest(data: bytes) -> bytes:
    return keccak.new(digest_bits=256, data=data).digest()


def sha256(inputs: bytes) -> bytes:
    """SHA-256 digest of the inputs."""
    return _digest_256(BlackBoxFunc.SHA256, lambda d: hashlib.sha256(d).digest(), inputs)


def blake2s(inputs: bytes) -> bytes:
    """Blake2s-256 digest of the inputs."""
    return _digest_256(BlackBoxFunc.BLAKE2S, lambda d: hashlib.blake2s(d).digest(), inputs)


def keccak256(inputs: bytes) -> bytes:
    """Keccak-256 digest of the inputs."""
    return _digest_256(BlackBoxFunc.KECCAK256, _keccak256_digest, inputs)


def hash_to_field_128_security(inputs: bytes) -> Value:
    """Blake2s digest of the inputs, reduced into a field element."""
    digest = _digest_256(
        BlackBoxFunc.HASH_TO_FIELD_128_SECURITY,
        lambda d: hashlib.blake2s(d).digest(),
        inputs,
    )
    return Value.from_be_bytes_reduce(digest)


# Elliptic curve arithmetic for ECDSA verification.

_Point = tuple[int, int] | None


@dataclass(frozen=True)
class _Curve:
    p: int
    a: int
    b: int
    n: int
    gx: int
    gy: int

    @property
    def generator(self) -> tuple[int, int]:
        return (self.gx, self.gy)

    def add(self, first: _Point, second: _Point) -> _Point:
        if first is None:
            return second
        if second is None:
            return first
        x1, y1 = first
        x2, y2 = second
        p = self.p
        if x1 == x2:
            if (y1 + y2) % p == 0:
                return None
            slope = (3 * x1 * x1 + self.a) * pow(2 * y1, -1, p) % p
        else:
            slope = (y2 - y1) * pow(x2 - x1, -1, p) % p
        x3 = (slope * slope - x1 - x2) % p
        y3 = (slope * (x1 - x3) - y1) % p
        return (x3, y3)

    def multiply(self, point: _Point, scalar: int) -> _Point:
        result: _Point = None
        addend = point
        while scalar:
            if scalar & 1:
                result = self.add(result, addend)
            addend = self.add(addend, addend)
            scalar >>= 1
        return result

    def decompress(self, x: int, odd: bool) -> tuple[int, int]:
        p = self.p
        if x >= p:
            raise ValueError("public key x coordinate is not a field element")
        rhs = (pow(x, 3, p) + self.a * x + self.b) % p
        y = pow(rhs, (p + 1) // 4, p)
        if y * y % p != rhs:
            raise ValueError("public key is not on the curve")
        if (y & 1) != odd:
            if y == 0:
                raise ValueError("public key is not on the curve")
            y = p - y
        return (x, y)


_SECP256K1 = _Curve(
    p=0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEFFFFFC2F,
    a=0,
    b=7,
    n=0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141,
    gx=0x79BE667EF9DCBBAC55A06295CE870B07029BFCDB2DCE28D959F2815B16F81798,
    gy=0x483ADA7726A3C4655DA4FBFC0E1108A8FD17B448A68554199C47D08FFB10D4B8,
)

_SECP256R1 = _Curve(
    p=0xFFFFFFFF00000001000000000000000000000000FFFFFFFFFFFFFFFFFFFFFFFF,
    a=0xFFFFFFFF00000001000000000000000000000000FFFFFFFFFFFFFFFFFFFFFFFC,
    b=0x5AC635D8AA3A93E7B3EBBD55769886BC651D06B0CC53B0F63BCE3C3E27D2604B,
    n=0xFFFFFFFF00000000FFFFFFFFFFFFFFFFBCE6FAADA7179E84F3B9CAC2FC632551,
    gx=0x6B17D1F2E12C4247F8BCE6E563A440F277037D812DEB33A0F4A13945D898C296,
    gy=0x4FE342E2FE1A7F9B8EE7EB4A7C0F9E162BCE33576B315ECECBB6406837BF51F5,
)


def _fixed(name: str, data: bytes, length: int) -> bytes:
    data = bytes(data)
    if len(data) != length:
        raise ValueError(f"{name} must be {length} bytes, got {len(data)}")
    return data


def _verify_ecdsa(
    curve: _Curve,
    hashed_msg: bytes,
    public_key_x: bytes,
    public_key_y: bytes,
    signature: bytes,
) -> bool:
    hashed_msg = _fixed("hashed message", hashed_msg, _SCALAR_BYTES)
    public_key_x = _fixed("public key x", public_key_x, _SCALAR_BYTES)
    public_key_y = _fixed("public key y", public_key_y, _SCALAR_BYTES)
    signature = _fixed("signature", signature, 2 * _SCALAR_BYTES)

    n = curve.n
    r = int.from_bytes(signature[:_SCALAR_BYTES], "big")
    s = int.from_bytes(signature[_SCALAR_BYTES:], "big")
    if not (0 < r < n and 0 < s < n):
        raise ValueError("invalid signature")

    # The key is taken in compressed form: only the parity of y is used.
    public_key = curve.decompress(
        int.from_bytes(public_key_x, "big"), bool(public_key_y[-1] & 1)
    )

    z = int.from_bytes(hashed_msg, "big")
    if z >= n:
        raise ValueError("hashed message is not a valid scalar")

    # Only "low S" normalised signatures are accepted.
    if s > n >> 1:
        return False

    s_inv = pow(s, -1, n)
    u1 = z * s_inv % n
    u2 = r * s_inv % n
    point = curve.add(curve.multiply(curve.generator, u1), curve.multiply(public_key, u2))
    if point is None:
        raise ValueError("signature check produced the point at infinity")
    x = point[0]
    if x >= n:
        raise ValueError("x coordinate is not a valid scalar")
    return x == r


def ecdsa_secp256k1_verify(
    hashed_msg: bytes, public_key_x: bytes, public_key_y: bytes, signature: bytes
) -> bool:
    """Verify an ECDSA signature over secp256k1."""
    return _verify_ecdsa(_SECP256K1, hashed_msg, public_key_x, public_key_y, signature)


def ecdsa_secp256r1_verify(
    hashed_msg: bytes, public_key_x: bytes, public_key_y: bytes, signature: bytes
) -> bool:
    """Verify an ECDSA signature over secp256r1."""
    return _verify_ecdsa(_SECP256R1, hashed_msg, public_key_x, public_key_y, signature)