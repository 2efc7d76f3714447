"""SHA-256 and RIPEMD-160 precompiles."""

from __future__ import annotations

import hashlib

from Crypto.Hash import RIPEMD160 as _RIPEMD160

from .precompile_base import (
    Precompile,
    PrecompileAddress,
    PrecompileError,
    PrecompileErrorKind,
    PrecompileKind,
    PrecompileResult,
    calc_linear_cost_u32,
    u64_to_b160,
)

SHA256_BASE = 60
SHA256_PER_WORD = 12
RIPEMD160_BASE = 600
RIPEMD160_PER_WORD = 120


def sha256_run(data: bytes, gas_limit: int) -> PrecompileResult:
    """SHA-256 digest of ``data``."""
    data = bytes(data)
    cost = calc_linear_cost_u32(len(data), SHA256_BASE, SHA256_PER_WORD)
    if cost > gas_limit:
        raise PrecompileError(PrecompileErrorKind.OUT_OF_GAS)
    return cost, hashlib.sha256(data).digest()


def ripemd160_run(data: bytes, gas_limit: int) -> PrecompileResult:
    """RIPEMD-160 digest of ``data``, left-padded with zeros to 32 bytes."""
    data = bytes(data)
    cost = calc_linear_cost_u32(len(data), RIPEMD160_BASE, RIPEMD160_PER_WORD)
    if cost > gas_limit:
        raise PrecompileError(PrecompileErrorKind.OUT_OF_GAS)
    digest = _RIPEMD160.new(data).digest()
    return cost, digest.rjust(32, b"\x00")


SHA256 = PrecompileAddress(u64_to_b160(2), Precompile(PrecompileKind.STANDARD, sha256_run))
RIPEMD160 = PrecompileAddress(
    u64_to_b160(3), Precompile(PrecompileKind.STANDARD, ripemd160_run)
)