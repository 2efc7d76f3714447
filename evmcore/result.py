"""Outcomes of executing a transaction and the errors that stop one."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any

from .bits import B160, B256
from .state import Account


@dataclass(frozen=True)
class Log:
    """An event emitted by a contract."""

    address: B160
    topics: tuple[B256, ...] = ()
    data: bytes = b""

    def __post_init__(self) -> None:
        object.__setattr__(self, "topics", tuple(self.topics))
        object.__setattr__(self, "data", bytes(self.data))


class Eval(enum.Enum):
    """Ways a successful execution ends."""

    STOP = "Stop"
    RETURN = "Return"
    SELF_DESTRUCT = "SelfDestruct"


class OutOfGasError(enum.Enum):
    """Which kind of gas exhaustion occurred."""

    BASIC_OUT_OF_GAS = "BasicOutOfGas"
    MEMORY_LIMIT = "MemoryLimit"
    MEMORY = "Memory"
    PRECOMPILE = "Precompile"
    INVALID_OPERAND = "InvalidOperand"


class HaltReason(enum.Enum):
    """Exceptional halts that consume all gas."""

    OUT_OF_GAS = "OutOfGas"
    OPCODE_NOT_FOUND = "OpcodeNotFound"
    INVALID_FE_OPCODE = "InvalidFEOpcode"
    INVALID_JUMP = "InvalidJump"
    NOT_ACTIVATED = "NotActivated"
    STACK_UNDERFLOW = "StackUnderflow"
    STACK_OVERFLOW = "StackOverflow"
    OUT_OF_OFFSET = "OutOfOffset"
    CREATE_COLLISION = "CreateCollision"
    PRECOMPILE_ERROR = "PrecompileError"
    NONCE_OVERFLOW = "NonceOverflow"
    CREATE_CONTRACT_SIZE_LIMIT = "CreateContractSizeLimit"
    CREATE_CONTRACT_STARTING_WITH_EF = "CreateContractStartingWithEF"
    CREATE_INITCODE_SIZE_LIMIT = "CreateInitcodeSizeLimit"
    OVERFLOW_PAYMENT = "OverflowPayment"
    STATE_CHANGE_DURING_STATIC_CALL = "StateChangeDuringStaticCall"
    CALL_NOT_ALLOWED_INSIDE_STATIC = "CallNotAllowedInsideStatic"
    OUT_OF_FUND = "OutOfFund"
    CALL_TOO_DEEP = "CallTooDeep"


@dataclass(frozen=True)
class Halt:
    """A halt reason; out-of-gas halts also say which kind."""

    reason: HaltReason
    out_of_gas: OutOfGasError | None = None

    def __post_init__(self) -> None:
        if (self.reason is HaltReason.OUT_OF_GAS) != (self.out_of_gas is not None):
            raise ValueError("out_of_gas is given exactly when the reason is OUT_OF_GAS")


@dataclass(frozen=True)
class CallOutput:
    data: bytes = b""


@dataclass(frozen=True)
class CreateOutput:
    data: bytes = b""
    address: B160 | None = None


Output = CallOutput | CreateOutput


class ExecutionResult:
    """Common interface of Success, Revert and Halted."""

    gas: int

    def is_success(self) -> bool:
        return isinstance(self, Success)

    def logs(self) -> list[Log]:
        """Logs of a successful execution; empty otherwise."""
        return []

    def output(self) -> bytes | None:
        """Returned data, or None if execution halted."""
        return None

    def gas_used(self) -> int:
        return self.gas


@dataclass(frozen=True)
class Success(ExecutionResult):
    reason: Eval
    gas: int
    gas_refunded: int
    log_entries: tuple[Log, ...]
    returned: Output

    def __post_init__(self) -> None:
        object.__setattr__(self, "log_entries", tuple(self.log_entries))

    def logs(self) -> list[Log]:
        return list(self.log_entries)

    def output(self) -> bytes | None:
        return self.returned.data


@dataclass(frozen=True)
class Revert(ExecutionResult):
    """Reverted by REVERT without spending all gas."""

    gas: int
    data: bytes

    def output(self) -> bytes | None:
        return self.data


@dataclass(frozen=True)
class Halted(ExecutionResult):
    """Halted exceptionally; all gas is spent."""

    reason: Halt
    gas: int


@dataclass
class ResultAndState:
    result: ExecutionResult
    state: dict[B160, Account] = field(default_factory=dict)


class InvalidTransactionKind(enum.Enum):
    GAS_MAX_FEE_GREATER_THAN_PRIORITY_FEE = "GasMaxFeeGreaterThanPriorityFee"
    GAS_PRICE_LESS_THAN_BASEFEE = "GasPriceLessThanBasefee"
    CALLER_GAS_LIMIT_MORE_THAN_BLOCK = "CallerGasLimitMoreThanBlock"
    CALL_GAS_COST_MORE_THAN_GAS_LIMIT = "CallGasCostMoreThanGasLimit"
    REJECT_CALLER_WITH_CODE = "RejectCallerWithCode"
    LACK_OF_FUND_FOR_MAX_FEE = "LackOfFundForMaxFee"
    OVERFLOW_PAYMENT_IN_TRANSACTION = "OverflowPaymentInTransaction"
    NONCE_OVERFLOW_IN_TRANSACTION = "NonceOverflowInTransaction"
    NONCE_TOO_HIGH = "NonceTooHigh"
    NONCE_TOO_LOW = "NonceTooLow"
    CREATE_INITCODE_SIZE_LIMIT = "CreateInitcodeSizeLimit"
    INVALID_CHAIN_ID = "InvalidChainId"
    ACCESS_LIST_NOT_SUPPORTED = "AccessListNotSupported"


class InvalidTransaction(Exception):
    """A transaction failed validation; ``kind`` says why.

    ``fee``/``balance`` accompany LACK_OF_FUND_FOR_MAX_FEE, ``tx``/``state``
    accompany the nonce errors.
    """

    def __init__(
        self,
        kind: InvalidTransactionKind,
        *,
        fee: int | None = None,
        balance: int | None = None,
        tx: int | None = None,
        state: int | None = None,
    ) -> None:
        self.kind = kind
        self.fee = fee
        self.balance = balance
        self.tx = tx
        self.state = state
        super().__init__(self.describe())

    def _details(self) -> dict[str, Any]:
        values = {"fee": self.fee, "balance": self.balance, "tx": self.tx, "state": self.state}
        return {key: value for key, value in values.items() if value is not None}

    def describe(self) -> str:
        details = self._details()
        if not details:
            return self.kind.value
        inner = ", ".join(f"{key}: {value}" for key, value in details.items())
        return f"{self.kind.value} {{ {inner} }}"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, InvalidTransaction):
            return NotImplemented
        return self.kind is other.kind and self._details() == other._details()

    def __hash__(self) -> int:
        return hash((self.kind, tuple(self._details().items())))


class EVMError(Exception):
    """Base of errors that stop a transaction before or outside execution."""


class TransactionError(EVMError):
    """The transaction itself is invalid."""

    def __init__(self, error: InvalidTransaction) -> None:
        super().__init__(f"Transaction error: {error.describe()}")
        self.error = error


class PrevrandaoNotSet(EVMError):
    """The block environment lacks prevrandao after the merge."""

    def __init__(self) -> None:
        super().__init__("Prevrandao not set")


class DatabaseError(EVMError):
    """The backing database reported an error."""

    def __init__(self, error: object) -> None:
        super().__init__(f"Database error: {error}")
        self.error = error