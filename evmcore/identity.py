"""The identity precompile, which returns its input."""

from __future__ import annotations

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

IDENTITY_BASE = 15
"""The base cost of the operation."""
IDENTITY_PER_WORD = 3
"""The cost per 32-byte word."""


def identity_run(data: bytes, gas_limit: int) -> PrecompileResult:
    """Return a copy of ``data``."""
    data = bytes(data)
    gas_used = calc_linear_cost_u32(len(data), IDENTITY_BASE, IDENTITY_PER_WORD)
    if gas_used > gas_limit:
        raise PrecompileError(PrecompileErrorKind.OUT_OF_GAS)
    return gas_used, data


IDENTITY = PrecompileAddress(u64_to_b160(4), Precompile(PrecompileKind.STANDARD, identity_run))