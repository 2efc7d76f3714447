"""Sets of precompiled contracts active at each hard fork."""

from __future__ import annotations

import enum
import functools
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from . import blake2, bn128, hashes, identity, secp256k1
from .bits import B160
from .precompile_base import Precompile, PrecompileAddress
from .specification import SpecId


class PrecompileSpecId(enum.IntEnum):
    """Hard forks at which the set of precompiles changed."""

    HOMESTEAD = 0
    BYZANTIUM = 1
    ISTANBUL = 2
    BERLIN = 3
    LATEST = 4

    @classmethod
    def from_spec_id(cls, spec_id: SpecId) -> "PrecompileSpecId":
        """The precompile set in force under ``spec_id``."""
        if spec_id is SpecId.LATEST:
            return cls.LATEST
        if spec_id >= SpecId.BERLIN:
            return cls.BERLIN
        if spec_id >= SpecId.ISTANBUL:
            return cls.ISTANBUL
        if spec_id >= SpecId.BYZANTIUM:
            return cls.BYZANTIUM
        return cls.HOMESTEAD

    def enabled(self, spec_id: int) -> bool:
        return spec_id >= int(self)


@dataclass
class Precompiles:
    """Precompiles keyed by address.

    The fork constructors return shared instances; do not modify them.
    """

    fun: dict[B160, Precompile] = field(default_factory=dict)

    @classmethod
    def _extended(
        cls, base: "Precompiles", entries: Iterable[PrecompileAddress]
    ) -> "Precompiles":
        fun = dict(base.fun)
        fun.update((entry.address, entry.precompile) for entry in entries)
        return cls(fun)

    @classmethod
    @functools.cache
    def homestead(cls) -> "Precompiles":
        return cls._extended(
            cls(),
            [secp256k1.ECRECOVER, hashes.SHA256, hashes.RIPEMD160, identity.IDENTITY],
        )

    @classmethod
    @functools.cache
    def byzantium(cls) -> "Precompiles":
        # EIP-196 and EIP-197: alt_bn128 addition, multiplication and pairing.
        return cls._extended(
            cls.homestead(),
            [bn128.ADD_BYZANTIUM, bn128.MUL_BYZANTIUM, bn128.PAIR_BYZANTIUM],
        )

    @classmethod
    @functools.cache
    def istanbul(cls) -> "Precompiles":
        # EIP-152 BLAKE2 F; EIP-1108 cheaper alt_bn128 operations.
        return cls._extended(
            cls.byzantium(),
            [blake2.FUN, bn128.ADD_ISTANBUL, bn128.MUL_ISTANBUL, bn128.PAIR_ISTANBUL],
        )

    @classmethod
    @functools.cache
    def berlin(cls) -> "Precompiles":
        return cls._extended(cls.istanbul(), [])

    @classmethod
    def latest(cls) -> "Precompiles":
        return cls.berlin()

    @classmethod
    def new(cls, spec: PrecompileSpecId) -> "Precompiles":
        """The precompile set for ``spec``."""
        builders = {
            PrecompileSpecId.HOMESTEAD: cls.homestead,
            PrecompileSpecId.BYZANTIUM: cls.byzantium,
            PrecompileSpecId.ISTANBUL: cls.istanbul,
            PrecompileSpecId.BERLIN: cls.berlin,
            PrecompileSpecId.LATEST: cls.latest,
        }
        return builders[PrecompileSpecId(spec)]()

    def addresses(self) -> Iterator[B160]:
        return iter(self.fun)

    def __contains__(self, address: object) -> bool:
        return address in self.fun

    def get(self, address: B160) -> Precompile | None:
        return self.fun.get(address)

    def __len__(self) -> int:
        return len(self.fun)