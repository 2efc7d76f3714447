"""Interfaces for the state the EVM reads and writes, and a split implementation."""

from __future__ import annotations

import abc
import enum
from dataclasses import dataclass
from typing import Callable, TypeVar

from .bits import B160, B256
from .bytecode import Bytecode
from .state import Account, AccountInfo

_T = TypeVar("_T")


class Database(abc.ABC):
    """Source of accounts, code, storage and block hashes."""

    @abc.abstractmethod
    def basic(self, address: B160) -> AccountInfo | None:
        """Basic account information, or None if the account does not exist."""

    @abc.abstractmethod
    def code_by_hash(self, code_hash: B256) -> Bytecode:
        """Account code by its hash."""

    @abc.abstractmethod
    def storage(self, address: B160, index: int) -> int:
        """Storage value of ``address`` at ``index``."""

    @abc.abstractmethod
    def block_hash(self, number: int) -> B256:
        """Hash of the block with this number."""


class DatabaseCommit(abc.ABC):
    """A database that accepts changed accounts."""

    @abc.abstractmethod
    def commit(self, changes: dict[B160, Account]) -> None:
        """Apply the changed accounts."""


class StateProvider(abc.ABC):
    """The account-state part of a database."""

    @abc.abstractmethod
    def basic(self, address: B160) -> AccountInfo | None:
        """Basic account information, or None if the account does not exist."""

    @abc.abstractmethod
    def code_by_hash(self, code_hash: B256) -> Bytecode:
        """Account code by its hash."""

    @abc.abstractmethod
    def storage(self, address: B160, index: int) -> int:
        """Storage value of ``address`` at ``index``."""


class BlockHashProvider(abc.ABC):
    """The block-hash part of a database."""

    @abc.abstractmethod
    def block_hash(self, number: int) -> B256:
        """Hash of the block with this number."""


class ComponentErrorSource(enum.Enum):
    STATE = "State"
    BLOCK_HASH = "BlockHash"


class DatabaseComponentError(Exception):
    """An error raised by one component of DatabaseComponents."""

    def __init__(self, source: ComponentErrorSource, error: BaseException) -> None:
        super().__init__(f"{source.value} error: {error}")
        self.source = source
        self.error = error


def _guarded(source: ComponentErrorSource, call: Callable[[], _T]) -> _T:
    try:
        return call()
    except DatabaseComponentError:
        raise
    except Exception as exc:
        raise DatabaseComponentError(source, exc) from exc


@dataclass
class DatabaseComponents(Database):
    """A database assembled from a state provider and a block-hash provider."""

    state: StateProvider
    block_hashes: BlockHashProvider

    def basic(self, address: B160) -> AccountInfo | None:
        return _guarded(ComponentErrorSource.STATE, lambda: self.state.basic(address))

    def code_by_hash(self, code_hash: B256) -> Bytecode:
        return _guarded(ComponentErrorSource.STATE, lambda: self.state.code_by_hash(code_hash))

    def storage(self, address: B160, index: int) -> int:
        return _guarded(ComponentErrorSource.STATE, lambda: self.state.storage(address, index))

    def block_hash(self, number: int) -> B256:
        return _guarded(
            ComponentErrorSource.BLOCK_HASH, lambda: self.block_hashes.block_hash(number)
        )