"""Shared types for precompiled contracts: errors, callables and addresses."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Callable, NamedTuple

from .bits import B160

PrecompileResult = tuple[int, bytes]
PrecompileFn = Callable[[bytes, int], PrecompileResult]


class PrecompileErrorKind(enum.Enum):
    """Reasons a precompile can fail."""

    OUT_OF_GAS = "out of gas"
    BLAKE2_WRONG_LENGTH = "blake2 wrong length"
    BLAKE2_WRONG_FINAL_INDICATOR_FLAG = "blake2 wrong final indicator flag"
    MODEXP_EXP_OVERFLOW = "modexp exponent overflow"
    MODEXP_BASE_OVERFLOW = "modexp base overflow"
    MODEXP_MOD_OVERFLOW = "modexp modulus overflow"
    BN128_FIELD_POINT_NOT_A_MEMBER = "bn128 field point not a member"
    BN128_AFFINE_G_FAILED_TO_CREATE = "bn128 affine point failed to create"
    BN128_PAIR_LENGTH = "bn128 pair length"


class PrecompileError(Exception):
    """Raised by a precompile; ``kind`` tells why."""

    def __init__(self, kind: PrecompileErrorKind) -> None:
        super().__init__(kind.value)
        self.kind = kind


class PrecompileKind(enum.Enum):
    STANDARD = "Standard"
    CUSTOM = "Custom"


@dataclass(frozen=True)
class Precompile:
    """A precompile function tagged as standard or custom."""

    kind: PrecompileKind
    function: PrecompileFn

    def __call__(self, data: bytes, gas_limit: int) -> PrecompileResult:
        """Run with ``data``; returns ``(gas_used, output)`` or raises PrecompileError."""
        return self.function(bytes(data), gas_limit)

    def __repr__(self) -> str:
        return self.kind.value


class PrecompileAddress(NamedTuple):
    address: B160
    precompile: Precompile


@dataclass
class PrecompileOutput:
    cost: int
    output: bytes
    logs: list[Any] = field(default_factory=list)

    @classmethod
    def without_logs(cls, cost: int, output: bytes) -> "PrecompileOutput":
        return cls(cost, bytes(output), [])


def calc_linear_cost_u32(length: int, base: int, word: int) -> int:
    """Gas of ``base`` plus ``word`` per started 32-byte word."""
    return (length + 31) // 32 * word + base


def u64_to_b160(value: int) -> B160:
    """Address whose last eight bytes hold ``value`` big-endian."""
    if not 0 <= value < 1 << 64:
        raise ValueError("value must fit in 64 bits")
    return B160.from_int(value)