"""Account state: balances, nonces, code and storage slots."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

from .bits import B160, B256
from .bytecode import Bytecode
from .utilities import KECCAK_EMPTY


class AccountStatus(enum.IntFlag):
    """Flags describing what happened to an account."""

    LOADED = 0
    CREATED = 0b0001
    SELF_DESTRUCTED = 0b0010
    TOUCHED = 0b0100
    LOADED_AS_NOT_EXISTING = 0b1000


@dataclass
class StorageSlot:
    """A storage value as it was loaded and as it is now."""

    original_value: int = 0
    present_value: int = 0

    @classmethod
    def new(cls, original: int) -> "StorageSlot":
        """An unchanged slot holding ``original``."""
        return cls(original, original)

    @classmethod
    def new_changed(cls, original_value: int, present_value: int) -> "StorageSlot":
        return cls(original_value, present_value)

    def is_changed(self) -> bool:
        """True if the present value differs from the original."""
        return self.original_value != self.present_value


@dataclass(eq=False)
class AccountInfo:
    """Balance, nonce and code of an account.

    Equality ignores ``code``; the code hash stands for it.
    """

    balance: int = 0
    nonce: int = 0
    code_hash: B256 = KECCAK_EMPTY
    code: Bytecode | None = field(default_factory=Bytecode)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AccountInfo):
            return NotImplemented
        return (
            self.balance == other.balance
            and self.nonce == other.nonce
            and self.code_hash == other.code_hash
        )

    __hash__ = None  # type: ignore[assignment]

    def is_empty(self) -> bool:
        """Zero balance, zero nonce and no code."""
        code_empty = self.code_hash == KECCAK_EMPTY or self.code_hash == B256.zero()
        return self.balance == 0 and self.nonce == 0 and code_empty

    def exists(self) -> bool:
        return not self.is_empty()

    def take_bytecode(self) -> Bytecode | None:
        """Remove the code from the account and return it."""
        code, self.code = self.code, None
        return code

    @classmethod
    def from_balance(cls, balance: int) -> "AccountInfo":
        return cls(balance=balance)


State = dict[B160, "Account"]
Storage = dict[int, StorageSlot]
TransientStorage = dict[tuple[B160, int], int]


@dataclass
class Account:
    """An account with its cached storage and status flags."""

    info: AccountInfo = field(default_factory=AccountInfo)
    storage: dict[int, StorageSlot] = field(default_factory=dict)
    status: AccountStatus = AccountStatus.LOADED

    def mark_selfdestruct(self) -> None:
        self.status |= AccountStatus.SELF_DESTRUCTED

    def unmark_selfdestruct(self) -> None:
        self.status &= ~AccountStatus.SELF_DESTRUCTED

    def is_selfdestructed(self) -> bool:
        return AccountStatus.SELF_DESTRUCTED in self.status

    def mark_touch(self) -> None:
        self.status |= AccountStatus.TOUCHED

    def unmark_touch(self) -> None:
        self.status &= ~AccountStatus.TOUCHED

    def is_touched(self) -> bool:
        return AccountStatus.TOUCHED in self.status

    def mark_created(self) -> None:
        self.status |= AccountStatus.CREATED

    def unmark_created(self) -> None:
        self.status &= ~AccountStatus.CREATED

    def is_created(self) -> bool:
        return AccountStatus.CREATED in self.status

    def is_loaded_as_not_existing(self) -> bool:
        return AccountStatus.LOADED_AS_NOT_EXISTING in self.status

    def is_empty(self) -> bool:
        return self.info.is_empty()

    @classmethod
    def new_not_existing(cls) -> "Account":
        """A default account flagged as loaded but not existing."""
        return cls(status=AccountStatus.LOADED_AS_NOT_EXISTING)

    @classmethod
    def from_info(cls, info: AccountInfo) -> "Account":
        return cls(info=info)