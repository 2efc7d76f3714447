"""Execution environment: chain configuration, block and transaction data."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

from .bits import B160, B256
from .result import InvalidTransaction, InvalidTransactionKind, PrevrandaoNotSet
from .specification import SpecId
from .state import Account
from .utilities import KECCAK_EMPTY, MAX_INITCODE_SIZE, U256_MAX

U64_MAX = (1 << 64) - 1


@dataclass(frozen=True)
class CreateScheme:
    """CREATE when ``salt`` is None, CREATE2 with the given salt otherwise."""

    salt: int | None = None

    def is_create2(self) -> bool:
        return self.salt is not None


@dataclass(frozen=True)
class TransactTo:
    """Target of a transaction: a call to ``address`` or a contract creation."""

    address: B160 | None = None
    scheme: CreateScheme | None = None

    def __post_init__(self) -> None:
        if (self.address is None) == (self.scheme is None):
            raise ValueError("give exactly one of address and scheme")

    @classmethod
    def call(cls, address: B160) -> "TransactTo":
        return cls(address=address)

    @classmethod
    def create(cls) -> "TransactTo":
        """A legacy CREATE transaction."""
        return cls(scheme=CreateScheme())

    def is_create(self) -> bool:
        return self.scheme is not None


class AnalysisKind(enum.Enum):
    """How bytecode created with CREATE/CREATE2 is prepared."""

    RAW = "Raw"
    CHECK = "Check"
    ANALYSE = "Analyse"


@dataclass
class CfgEnv:
    """Chain configuration and switches that relax validation."""

    chain_id: int = 1
    spec_id: SpecId = SpecId.LATEST
    perf_analyse_created_bytecodes: AnalysisKind = AnalysisKind.ANALYSE
    limit_contract_code_size: int | None = None
    memory_limit: int = 2**32 - 1
    disable_balance_check: bool = False
    disable_block_gas_limit: bool = False
    disable_eip3607: bool = False
    disable_gas_refund: bool = False
    disable_base_fee: bool = False

    def is_eip3607_disabled(self) -> bool:
        return self.disable_eip3607

    def is_balance_check_disabled(self) -> bool:
        return self.disable_balance_check

    def is_gas_refund_disabled(self) -> bool:
        return self.disable_gas_refund

    def is_base_fee_check_disabled(self) -> bool:
        return self.disable_base_fee

    def is_block_gas_limit_disabled(self) -> bool:
        return self.disable_block_gas_limit


@dataclass
class BlockEnv:
    """Data of the block the transaction runs in."""

    number: int = 0
    coinbase: B160 = field(default_factory=B160.zero)
    timestamp: int = 1
    difficulty: int = 0
    prevrandao: B256 | None = field(default_factory=B256.zero)
    basefee: int = 0
    gas_limit: int = U256_MAX


@dataclass
class TxEnv:
    """Data of the transaction being executed."""

    caller: B160 = field(default_factory=B160.zero)
    gas_limit: int = U64_MAX
    gas_price: int = 0
    gas_priority_fee: int | None = None
    transact_to: TransactTo = field(default_factory=lambda: TransactTo.call(B160.zero()))
    value: int = 0
    data: bytes = b""
    chain_id: int | None = None
    nonce: int | None = None
    access_list: list[tuple[B160, list[int]]] = field(default_factory=list)


@dataclass
class Env:
    """Configuration, block and transaction together."""

    cfg: CfgEnv = field(default_factory=CfgEnv)
    block: BlockEnv = field(default_factory=BlockEnv)
    tx: TxEnv = field(default_factory=TxEnv)

    def effective_gas_price(self) -> int:
        """Gas price, capped by basefee plus priority fee when one is set."""
        if self.tx.gas_priority_fee is None:
            return self.tx.gas_price
        return min(self.tx.gas_price, self.block.basefee + self.tx.gas_priority_fee)

    def validate_block_env(self, spec_id: SpecId) -> None:
        """Raise PrevrandaoNotSet if the merge is active and prevrandao is missing."""
        if spec_id.enabled(SpecId.MERGE) and self.block.prevrandao is None:
            raise PrevrandaoNotSet()

    def validate_tx(self, spec_id: SpecId) -> None:
        """Check the transaction against the block and configuration."""
        tx = self.tx
        if spec_id.enabled(SpecId.LONDON):
            if tx.gas_priority_fee is not None and tx.gas_priority_fee > tx.gas_price:
                raise InvalidTransaction(
                    InvalidTransactionKind.GAS_MAX_FEE_GREATER_THAN_PRIORITY_FEE
                )
            if (
                not self.cfg.is_base_fee_check_disabled()
                and self.effective_gas_price() < self.block.basefee
            ):
                raise InvalidTransaction(InvalidTransactionKind.GAS_PRICE_LESS_THAN_BASEFEE)

        if not self.cfg.is_block_gas_limit_disabled() and tx.gas_limit > self.block.gas_limit:
            raise InvalidTransaction(InvalidTransactionKind.CALLER_GAS_LIMIT_MORE_THAN_BLOCK)

        if spec_id.enabled(SpecId.SHANGHAI) and tx.transact_to.is_create():
            limit = self.cfg.limit_contract_code_size
            max_initcode_size = MAX_INITCODE_SIZE if limit is None else 2 * limit
            if len(tx.data) > max_initcode_size:
                raise InvalidTransaction(InvalidTransactionKind.CREATE_INITCODE_SIZE_LIMIT)

        if tx.chain_id is not None and tx.chain_id != self.cfg.chain_id:
            raise InvalidTransaction(InvalidTransactionKind.INVALID_CHAIN_ID)

        if not spec_id.enabled(SpecId.BERLIN) and tx.access_list:
            raise InvalidTransaction(InvalidTransactionKind.ACCESS_LIST_NOT_SUPPORTED)

    def validate_tx_against_state(self, account: Account) -> None:
        """Check the caller's code, nonce and balance."""
        info = account.info
        if not self.cfg.is_eip3607_disabled() and info.code_hash != KECCAK_EMPTY:
            raise InvalidTransaction(InvalidTransactionKind.REJECT_CALLER_WITH_CODE)

        if self.tx.nonce is not None:
            if self.tx.nonce > info.nonce:
                raise InvalidTransaction(
                    InvalidTransactionKind.NONCE_TOO_HIGH, tx=self.tx.nonce, state=info.nonce
                )
            if self.tx.nonce < info.nonce:
                raise InvalidTransaction(
                    InvalidTransactionKind.NONCE_TOO_LOW, tx=self.tx.nonce, state=info.nonce
                )

        gas_cost = self.tx.gas_limit * self.tx.gas_price
        if gas_cost > U256_MAX:
            raise InvalidTransaction(InvalidTransactionKind.OVERFLOW_PAYMENT_IN_TRANSACTION)
        balance_check = gas_cost + self.tx.value
        if balance_check > U256_MAX:
            raise InvalidTransaction(InvalidTransactionKind.OVERFLOW_PAYMENT_IN_TRANSACTION)

        if not self.cfg.is_balance_check_disabled() and balance_check > info.balance:
            raise InvalidTransaction(
                InvalidTransactionKind.LACK_OF_FUND_FOR_MAX_FEE,
                fee=self.tx.gas_limit,
                balance=info.balance,
            )