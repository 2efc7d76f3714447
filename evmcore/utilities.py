"""Hashing helpers, contract address derivation and shared constants."""

from __future__ import annotations

import binascii

from Crypto.Hash import keccak

from .bits import B160, B256

Address = B160
Hash = B256

U256_MAX = (1 << 256) - 1

STACK_LIMIT = 1024
"""Interpreter stack limit."""
CALL_STACK_LIMIT = 1024
"""Call depth limit."""
MAX_CODE_SIZE = 0x6000
"""EIP-170 contract code size limit."""
MAX_INITCODE_SIZE = 2 * MAX_CODE_SIZE
"""EIP-3860 initcode size limit."""
PRECOMPILE3 = B160.from_int(3)

KECCAK_EMPTY = B256.from_hex(
    "c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470"
)


def keccak256(data: bytes) -> B256:
    """Keccak-256 digest of ``data``."""
    return B256(keccak.new(digest_bits=256, data=bytes(data)).digest())


def _rlp_string(payload: bytes) -> bytes:
    if len(payload) == 1 and payload[0] < 0x80:
        return payload
    if len(payload) < 56:
        return bytes([0x80 + len(payload)]) + payload
    size = len(payload).to_bytes((len(payload).bit_length() + 7) // 8, "big")
    return bytes([0xB7 + len(size)]) + size + payload


def _rlp_list(items: list[bytes]) -> bytes:
    payload = b"".join(items)
    if len(payload) < 56:
        return bytes([0xC0 + len(payload)]) + payload
    size = len(payload).to_bytes((len(payload).bit_length() + 7) // 8, "big")
    return bytes([0xF7 + len(size)]) + size + payload


def create_address(caller: B160, nonce: int) -> B160:
    """Address of a contract made with CREATE by ``caller`` at ``nonce``."""
    if not 0 <= nonce < 1 << 64:
        raise ValueError("nonce must fit in 64 bits")
    nonce_bytes = nonce.to_bytes((nonce.bit_length() + 7) // 8, "big")
    encoded = _rlp_list([_rlp_string(bytes(caller)), _rlp_string(nonce_bytes)])
    return B160(keccak256(encoded)[12:])


def create2_address(caller: B160, code_hash: B256, salt: int) -> B160:
    """Address of a contract made with CREATE2."""
    preimage = b"\xff" + bytes(caller) + salt.to_bytes(32, "big") + bytes(code_hash)
    return B160(keccak256(preimage)[12:])


def serialize_hex_bytes(data: bytes) -> str:
    """Encode bytes as a 0x-prefixed hex string."""
    return "0x" + bytes(data).hex()


def deserialize_hex_bytes(text: str) -> bytes:
    """Decode a hex string, with or without the 0x prefix."""
    digits = text[2:] if text.startswith("0x") else text
    try:
        return binascii.unhexlify(digits)
    except binascii.Error as exc:
        raise ValueError(str(exc)) from exc