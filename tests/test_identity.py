import pytest

from evmcore.identity import IDENTITY, identity_run
from evmcore.precompile_base import PrecompileError, PrecompileErrorKind, u64_to_b160


def test_empty_input_costs_base():
    assert identity_run(b"", 100) == (15, b"")


def test_returns_input():
    data = bytes(range(70))
    assert identity_run(data, 1000)[1] == data


def test_cost_per_word():
    one_word = identity_run(b"z" * 32, 1000)[0]
    assert identity_run(b"z", 1000)[0] == one_word
    assert identity_run(b"z" * 33, 1000)[0] - one_word == 3


def test_exact_limit_succeeds():
    cost, _ = identity_run(b"data", 1000)
    assert identity_run(b"data", cost) == (cost, b"data")


def test_out_of_gas():
    with pytest.raises(PrecompileError) as excinfo:
        identity_run(b"", 14)
    assert excinfo.value.kind is PrecompileErrorKind.OUT_OF_GAS


def test_accepts_bytearray():
    assert identity_run(bytearray(b"abc"), 100)[1] == b"abc"


def test_registered_address():
    assert IDENTITY.address == u64_to_b160(4)
    assert IDENTITY.precompile(b"xyz", 100)[1] == b"xyz"