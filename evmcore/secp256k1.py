"""The ECRECOVER precompile: signer address from a secp256k1 signature."""

from __future__ import annotations

from .bits import B256
from .precompile_base import (
    Precompile,
    PrecompileAddress,
    PrecompileError,
    PrecompileErrorKind,
    PrecompileKind,
    PrecompileResult,
    u64_to_b160,
)
from .utilities import keccak256

ECRECOVER_BASE = 3_000

_P = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEFFFFFC2F
_N = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141
_G = (
    0x79BE667EF9DCBBAC55A06295CE870B07029BFCDB2DCE28D959F2815B16F81798,
    0x483ADA7726A3C4655DA4FBFC0E1108A8FD17B448A68554199C47D08FFB10D4B8,
)

_Point = tuple[int, int] | None


def _add(first: _Point, second: _Point) -> _Point:
    if first is None:
        return second
    if second is None:
        return first
    x1, y1 = first
    x2, y2 = second
    if x1 == x2:
        if (y1 + y2) % _P == 0:
            return None
        slope = 3 * x1 * x1 * pow(2 * y1, -1, _P) % _P
    else:
        slope = (y2 - y1) * pow(x2 - x1, -1, _P) % _P
    x3 = (slope * slope - x1 - x2) % _P
    return x3, (slope * (x1 - x3) - y1) % _P


def _multiply(point: _Point, scalar: int) -> _Point:
    result: _Point = None
    addend = point
    while scalar:
        if scalar & 1:
            result = _add(result, addend)
        addend = _add(addend, addend)
        scalar >>= 1
    return result


def ecrecover(sig: bytes, msg: bytes) -> B256:
    """Recover the signer of the 32-byte ``msg``.

    ``sig`` is r, s (32 bytes each) and a recovery id byte. The result is the
    keccak-256 of the public key with its first 12 bytes zeroed. Raises
    ValueError if the signature is not valid.
    """
    sig = bytes(sig)
    msg = bytes(msg)
    if len(sig) != 65 or len(msg) != 32:
        raise ValueError("signature must be 65 bytes and message 32 bytes")
    recid = sig[64]
    if recid > 3:
        raise ValueError("invalid recovery id")
    r = int.from_bytes(sig[:32], "big")
    s = int.from_bytes(sig[32:64], "big")
    if not (0 < r < _N and 0 < s < _N):
        raise ValueError("signature scalar out of range")

    x = r + _N if recid & 2 else r
    if x >= _P:
        raise ValueError("invalid signature point")
    alpha = (pow(x, 3, _P) + 7) % _P
    beta = pow(alpha, (_P + 1) // 4, _P)
    if beta * beta % _P != alpha:
        raise ValueError("invalid signature point")
    y = beta if beta & 1 == recid & 1 else _P - beta

    z = int.from_bytes(msg, "big") % _N
    r_inv = pow(r, -1, _N)
    public = _add(_multiply(_G, -z * r_inv % _N), _multiply((x, y), s * r_inv % _N))
    if public is None:
        raise ValueError("recovered point at infinity")

    encoded = public[0].to_bytes(32, "big") + public[1].to_bytes(32, "big")
    return B256(bytes(12) + keccak256(encoded)[12:])


def ec_recover_run(data: bytes, gas_limit: int) -> PrecompileResult:
    """ECRECOVER; returns empty output for malformed or invalid signatures."""
    if ECRECOVER_BASE > gas_limit:
        raise PrecompileError(PrecompileErrorKind.OUT_OF_GAS)
    padded = bytes(data)[:128].ljust(128, b"\x00")
    if padded[32:63] != bytes(31) or padded[63] not in (27, 28):
        return ECRECOVER_BASE, b""
    sig = padded[64:128] + bytes([padded[63] - 27])
    try:
        out = bytes(ecrecover(sig, padded[:32]))
    except ValueError:
        out = b""
    return ECRECOVER_BASE, out


ECRECOVER = PrecompileAddress(
    u64_to_b160(1), Precompile(PrecompileKind.STANDARD, ec_recover_run)
)