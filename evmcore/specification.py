"""Hard-fork specification identifiers."""

from __future__ import annotations

import enum

_NAMES = {
    "Frontier": "FRONTIER",
    "Homestead": "HOMESTEAD",
    "Tangerine": "TANGERINE",
    "Spurious": "SPURIOUS_DRAGON",
    "Byzantium": "BYZANTIUM",
    "Constantinople": "CONSTANTINOPLE",
    "Petersburg": "PETERSBURG",
    "Istanbul": "ISTANBUL",
    "MuirGlacier": "MUIR_GLACIER",
    "Berlin": "BERLIN",
    "London": "LONDON",
    "Merge": "MERGE",
    "Shanghai": "SHANGHAI",
    "Cancun": "CANCUN",
}


class SpecId(enum.IntEnum):
    """Hard forks in activation order."""

    FRONTIER = 0
    FRONTIER_THAWING = 1
    HOMESTEAD = 2
    DAO_FORK = 3
    TANGERINE = 4
    SPURIOUS_DRAGON = 5
    BYZANTIUM = 6
    CONSTANTINOPLE = 7
    PETERSBURG = 8
    ISTANBUL = 9
    MUIR_GLACIER = 10
    BERLIN = 11
    LONDON = 12
    ARROW_GLACIER = 13
    GRAY_GLACIER = 14
    MERGE = 15
    SHANGHAI = 16
    CANCUN = 17
    LATEST = 18

    @classmethod
    def try_from_u8(cls, value: int) -> "SpecId | None":
        """The spec with this number, or None if there is none."""
        try:
            return cls(value)
        except ValueError:
            return None

    @classmethod
    def from_name(cls, name: str) -> "SpecId":
        """Map a fork name such as ``"Berlin"``; unknown names give LATEST."""
        return cls[_NAMES.get(name, "LATEST")]

    def enabled(self, other: "SpecId") -> bool:
        """True if ``other`` is active under this spec."""
        return int(self) >= int(other)