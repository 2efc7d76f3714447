import pytest

from evmcore.bits import B160, B256
from evmcore.env import (
    AnalysisKind,
    BlockEnv,
    CfgEnv,
    CreateScheme,
    Env,
    TransactTo,
    TxEnv,
)
from evmcore.result import InvalidTransaction, InvalidTransactionKind, PrevrandaoNotSet
from evmcore.specification import SpecId
from evmcore.state import Account, AccountInfo
from evmcore.utilities import KECCAK_EMPTY, MAX_INITCODE_SIZE, U256_MAX


def _env(**tx_fields) -> Env:
    return Env(tx=TxEnv(**tx_fields))


def test_cfg_defaults():
    cfg = CfgEnv()
    assert cfg.chain_id == 1
    assert cfg.spec_id is SpecId.LATEST
    assert cfg.perf_analyse_created_bytecodes is AnalysisKind.ANALYSE
    assert cfg.limit_contract_code_size is None
    assert cfg.memory_limit == 2**32 - 1
    assert not cfg.is_eip3607_disabled()
    assert not cfg.is_balance_check_disabled()
    assert not cfg.is_gas_refund_disabled()
    assert not cfg.is_base_fee_check_disabled()
    assert not cfg.is_block_gas_limit_disabled()


def test_cfg_switches():
    cfg = CfgEnv(disable_eip3607=True, disable_gas_refund=True, disable_block_gas_limit=True)
    assert cfg.is_eip3607_disabled()
    assert cfg.is_gas_refund_disabled()
    assert cfg.is_block_gas_limit_disabled()
    assert not cfg.is_balance_check_disabled()


def test_block_defaults():
    block = BlockEnv()
    assert block.gas_limit == U256_MAX
    assert block.number == 0
    assert block.timestamp == 1
    assert block.prevrandao == B256.zero()
    assert block.coinbase == B160.zero()


def test_tx_defaults():
    tx = TxEnv()
    assert tx.gas_limit == 2**64 - 1
    assert not tx.transact_to.is_create()
    assert tx.transact_to.address == B160.zero()
    assert tx.access_list == []


def test_transact_to_and_create_scheme():
    create = TransactTo.create()
    assert create.is_create()
    assert not create.scheme.is_create2()
    assert CreateScheme(salt=7).is_create2()
    call = TransactTo.call(B160.from_int(5))
    assert not call.is_create()
    assert call.address == B160.from_int(5)
    with pytest.raises(ValueError):
        TransactTo()


def test_effective_gas_price_without_priority_fee():
    env = _env(gas_price=30)
    env.block.basefee = 100
    assert env.effective_gas_price() == 30


def test_effective_gas_price_is_capped():
    env = _env(gas_price=100, gas_priority_fee=5)
    env.block.basefee = 10
    assert env.effective_gas_price() == env.block.basefee + env.tx.gas_priority_fee
    env.tx.gas_price = 12
    assert env.effective_gas_price() == env.tx.gas_price


def test_validate_block_env():
    env = Env()
    env.block.prevrandao = None
    with pytest.raises(PrevrandaoNotSet):
        env.validate_block_env(SpecId.MERGE)
    assert env.validate_block_env(SpecId.LONDON) is None


def test_priority_fee_above_gas_price():
    env = _env(gas_price=5, gas_priority_fee=6)
    with pytest.raises(InvalidTransaction) as info:
        env.validate_tx(SpecId.LONDON)
    assert info.value.kind is InvalidTransactionKind.GAS_MAX_FEE_GREATER_THAN_PRIORITY_FEE
    assert env.validate_tx(SpecId.BERLIN) is None


def test_gas_price_below_basefee():
    env = _env(gas_price=5)
    env.block.basefee = 6
    with pytest.raises(InvalidTransaction) as info:
        env.validate_tx(SpecId.LONDON)
    assert info.value.kind is InvalidTransactionKind.GAS_PRICE_LESS_THAN_BASEFEE
    env.cfg.disable_base_fee = True
    assert env.validate_tx(SpecId.LONDON) is None


def test_gas_limit_above_block():
    env = _env(gas_limit=1000)
    env.block.gas_limit = 999
    with pytest.raises(InvalidTransaction) as info:
        env.validate_tx(SpecId.LATEST)
    assert info.value.kind is InvalidTransactionKind.CALLER_GAS_LIMIT_MORE_THAN_BLOCK
    env.cfg.disable_block_gas_limit = True
    assert env.validate_tx(SpecId.LATEST) is None


def test_initcode_size_limit():
    env = _env(transact_to=TransactTo.create(), data=bytes(MAX_INITCODE_SIZE + 1))
    with pytest.raises(InvalidTransaction) as info:
        env.validate_tx(SpecId.SHANGHAI)
    assert info.value.kind is InvalidTransactionKind.CREATE_INITCODE_SIZE_LIMIT
    assert env.validate_tx(SpecId.MERGE) is None


def test_initcode_limit_follows_code_size_limit():
    env = _env(transact_to=TransactTo.create(), data=bytes(21))
    env.cfg.limit_contract_code_size = 10
    with pytest.raises(InvalidTransaction) as info:
        env.validate_tx(SpecId.SHANGHAI)
    assert info.value.kind is InvalidTransactionKind.CREATE_INITCODE_SIZE_LIMIT
    env.tx.data = bytes(20)
    assert env.validate_tx(SpecId.SHANGHAI) is None


def test_chain_id_mismatch():
    env = _env(chain_id=5)
    with pytest.raises(InvalidTransaction) as info:
        env.validate_tx(SpecId.LATEST)
    assert info.value.kind is InvalidTransactionKind.INVALID_CHAIN_ID
    env.tx.chain_id = 1
    assert env.validate_tx(SpecId.LATEST) is None


def test_access_list_before_berlin():
    env = _env(access_list=[(B160.from_int(1), [0])])
    with pytest.raises(InvalidTransaction) as info:
        env.validate_tx(SpecId.ISTANBUL)
    assert info.value.kind is InvalidTransactionKind.ACCESS_LIST_NOT_SUPPORTED
    assert env.validate_tx(SpecId.BERLIN) is None


def test_reject_caller_with_code():
    env = _env(gas_limit=0)
    account = Account(info=AccountInfo(code_hash=B256.from_int(1)))
    with pytest.raises(InvalidTransaction) as info:
        env.validate_tx_against_state(account)
    assert info.value.kind is InvalidTransactionKind.REJECT_CALLER_WITH_CODE
    env.cfg.disable_eip3607 = True
    assert env.validate_tx_against_state(account) is None


def test_nonce_checks():
    account = Account(info=AccountInfo(nonce=4, code_hash=KECCAK_EMPTY))
    env = _env(gas_limit=0, nonce=5)
    with pytest.raises(InvalidTransaction) as high:
        env.validate_tx_against_state(account)
    assert high.value == InvalidTransaction(InvalidTransactionKind.NONCE_TOO_HIGH, tx=5, state=4)
    env.tx.nonce = 3
    with pytest.raises(InvalidTransaction) as low:
        env.validate_tx_against_state(account)
    assert low.value.kind is InvalidTransactionKind.NONCE_TOO_LOW
    assert (low.value.tx, low.value.state) == (3, 4)


def test_payment_overflow():
    env = _env(gas_limit=2, gas_price=U256_MAX)
    with pytest.raises(InvalidTransaction) as info:
        env.validate_tx_against_state(Account())
    assert info.value.kind is InvalidTransactionKind.OVERFLOW_PAYMENT_IN_TRANSACTION
    env = _env(gas_limit=1, gas_price=U256_MAX, value=1)
    with pytest.raises(InvalidTransaction) as info:
        env.validate_tx_against_state(Account())
    assert info.value.kind is InvalidTransactionKind.OVERFLOW_PAYMENT_IN_TRANSACTION


def test_lack_of_funds():
    env = _env(gas_limit=100, gas_price=2, value=50)
    poor = Account(info=AccountInfo(balance=249))
    with pytest.raises(InvalidTransaction) as info:
        env.validate_tx_against_state(poor)
    assert info.value.kind is InvalidTransactionKind.LACK_OF_FUND_FOR_MAX_FEE
    assert info.value.fee == 100
    assert info.value.balance == 249
    rich = Account(info=AccountInfo(balance=250))
    assert env.validate_tx_against_state(rich) is None
    env.cfg.disable_balance_check = True
    assert env.validate_tx_against_state(poor) is None