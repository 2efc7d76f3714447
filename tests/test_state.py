from evmcore.bits import B256
from evmcore.bytecode import Bytecode
from evmcore.state import Account, AccountInfo, AccountStatus, StorageSlot
from evmcore.utilities import KECCAK_EMPTY


def test_account_state():
    account = Account()

    assert not account.is_touched()
    assert not account.is_selfdestructed()

    account.mark_touch()
    assert account.is_touched()
    assert not account.is_selfdestructed()

    account.mark_selfdestruct()
    assert account.is_touched()
    assert account.is_selfdestructed()

    account.unmark_selfdestruct()
    assert account.is_touched()
    assert not account.is_selfdestructed()


def test_created_flag():
    account = Account()
    assert not account.is_created()
    account.mark_created()
    assert account.is_created()
    account.unmark_created()
    assert not account.is_created()


def test_unmark_touch():
    account = Account()
    account.mark_touch()
    account.mark_created()
    account.unmark_touch()
    assert not account.is_touched()
    assert account.is_created()


def test_unmark_missing_flag_keeps_others():
    account = Account()
    account.mark_touch()
    account.unmark_selfdestruct()
    assert account.status == AccountStatus.TOUCHED


def test_new_not_existing():
    account = Account.new_not_existing()
    assert account.is_loaded_as_not_existing()
    assert account.is_empty()
    assert account.storage == {}


def test_from_info():
    info = AccountInfo.from_balance(10)
    account = Account.from_info(info)
    assert account.info == info
    assert account.status == AccountStatus.LOADED
    assert not account.is_empty()


def test_storage_slot():
    slot = StorageSlot.new(5)
    assert slot.original_value == 5
    assert slot.present_value == 5
    assert not slot.is_changed()
    changed = StorageSlot.new_changed(5, 6)
    assert changed.is_changed()


def test_default_account_info_is_empty():
    info = AccountInfo()
    assert info.is_empty()
    assert not info.exists()
    assert info.code_hash == KECCAK_EMPTY
    assert info.code == Bytecode()


def test_zero_code_hash_counts_as_empty():
    info = AccountInfo(code_hash=B256.zero())
    assert info.is_empty()


def test_nonzero_nonce_exists():
    info = AccountInfo(nonce=1)
    assert info.exists()


def test_code_hash_makes_account_exist():
    info = AccountInfo(code_hash=B256.from_int(1))
    assert info.exists()


def test_equality_ignores_code():
    first = AccountInfo(balance=1, nonce=2)
    second = AccountInfo(balance=1, nonce=2, code=None)
    assert first == second
    assert first != AccountInfo(balance=1, nonce=3)


def test_take_bytecode():
    code = Bytecode.new_raw(b"\x60\x00")
    info = AccountInfo(code=code)
    assert info.take_bytecode() == code
    assert info.code is None
    assert info.take_bytecode() is None


def test_from_balance():
    info = AccountInfo.from_balance(42)
    assert info.balance == 42
    assert info.nonce == 0
    assert info.code_hash == KECCAK_EMPTY