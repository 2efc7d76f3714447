import pytest

from evmcore.hashes import RIPEMD160, SHA256, ripemd160_run, sha256_run
from evmcore.precompile_base import PrecompileError, PrecompileErrorKind, u64_to_b160

BIG_LIMIT = 10**9


def test_sha256_empty_digest():
    cost, output = sha256_run(b"", BIG_LIMIT)
    assert cost == 60
    assert output == bytes.fromhex(
        "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"
    )


def test_sha256_cost_per_word():
    one_word = sha256_run(b"a" * 32, BIG_LIMIT)[0]
    assert sha256_run(b"a", BIG_LIMIT)[0] == one_word
    assert sha256_run(b"a" * 33, BIG_LIMIT)[0] - one_word == 12


def test_sha256_exact_limit_and_out_of_gas():
    cost, _ = sha256_run(b"abc", BIG_LIMIT)
    assert sha256_run(b"abc", cost)[0] == cost
    with pytest.raises(PrecompileError) as excinfo:
        sha256_run(b"abc", cost - 1)
    assert excinfo.value.kind is PrecompileErrorKind.OUT_OF_GAS


def test_sha256_output_length_and_determinism():
    first = sha256_run(b"hello", BIG_LIMIT)[1]
    assert len(first) == 32
    assert first == sha256_run(b"hello", BIG_LIMIT)[1]
    assert first != sha256_run(b"hellp", BIG_LIMIT)[1]


def test_ripemd160_empty_digest():
    cost, output = ripemd160_run(b"", BIG_LIMIT)
    assert cost == 600
    assert output == bytes(12) + bytes.fromhex("9c1185a5c5e9fc54612808977ee8f548b2258d31")


def test_ripemd160_cost_per_word():
    one_word = ripemd160_run(b"x" * 32, BIG_LIMIT)[0]
    assert ripemd160_run(b"x" * 33, BIG_LIMIT)[0] - one_word == 120


def test_ripemd160_padding():
    output = ripemd160_run(b"some data", BIG_LIMIT)[1]
    assert len(output) == 32
    assert output[:12] == bytes(12)


def test_ripemd160_out_of_gas():
    with pytest.raises(PrecompileError) as excinfo:
        ripemd160_run(b"", 599)
    assert excinfo.value.kind is PrecompileErrorKind.OUT_OF_GAS


def test_registered_addresses():
    assert SHA256.address == u64_to_b160(2)
    assert RIPEMD160.address == u64_to_b160(3)
    assert SHA256.precompile(b"", 60) == sha256_run(b"", 60)