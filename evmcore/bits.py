"""Fixed-size byte strings used for hashes (256 bits) and addresses (160 bits)."""

from __future__ import annotations

from typing import ClassVar

_HEX_CHARS = "0123456789abcdef"
_WHITESPACE = " \r\n\t"


class FromHexError(ValueError):
    """A non-hex character was found while decoding a hex string."""

    def __init__(self, character: str, index: int) -> None:
        super().__init__(f"invalid hex character: {character}, at {index}")
        self.character = character
        self.index = index


def to_hex_raw(data: bytes, skip_leading_zero: bool) -> str:
    """Encode bytes as a 0x-prefixed lower-case hex string.

    With ``skip_leading_zero`` the first nibble is dropped when it is zero.
    """
    data = bytes(data)
    if not data:
        return "0x"
    head = data[0]
    parts = ["0x"]
    if head >> 4 or not skip_leading_zero:
        parts.append(_HEX_CHARS[head >> 4])
    parts.append(_HEX_CHARS[head & 0xF])
    parts.append(data[1:].hex())
    return "".join(parts)


def _nibble(char: str) -> int | None:
    if "0" <= char <= "9":
        return ord(char) - ord("0")
    if "a" <= char <= "f":
        return ord(char) - ord("a") + 10
    if "A" <= char <= "F":
        return ord(char) - ord("A") + 10
    return None


def decode_hex(text: str, size: int) -> bytes:
    """Decode a hex string (with or without ``0x``) of exactly ``2 * size`` digits.

    Whitespace characters count towards the length but are skipped while
    decoding; bytes that are not filled stay zero.
    """
    stripped = text.startswith("0x")
    digits = text[2:] if stripped else text
    if len(digits) != 2 * size:
        raise ValueError(
            f"invalid length {len(digits)}, expected a (both 0x-prefixed or not) "
            f"hex string with length of {2 * size}"
        )
    offset = 2 if stripped else 0
    out = bytearray(size)
    pos = 0
    pending: int | None = None
    for index, char in enumerate(digits):
        if char in _WHITESPACE:
            continue
        value = _nibble(char)
        if value is None:
            raise FromHexError(char, index + offset)
        if pending is None:
            pending = value
        else:
            out[pos] = (pending << 4) | value
            pos += 1
            pending = None
    return bytes(out)


class FixedHash(bytes):
    """Immutable byte string of a fixed length given by ``SIZE``."""

    SIZE: ClassVar[int] = 0

    def __new__(cls, data: bytes | bytearray | memoryview | None = None) -> "FixedHash":
        if data is None:
            return super().__new__(cls, bytes(cls.SIZE))
        if isinstance(data, int):
            raise TypeError(f"{cls.__name__} expects bytes, not int; use from_int")
        raw = bytes(data)
        if len(raw) != cls.SIZE:
            raise ValueError(f"{cls.__name__} needs {cls.SIZE} bytes, got {len(raw)}")
        return super().__new__(cls, raw)

    @classmethod
    def zero(cls) -> "FixedHash":
        """The all-zero value."""
        return cls()

    @classmethod
    def from_hex(cls, text: str) -> "FixedHash":
        """Parse a hex string of exactly ``2 * SIZE`` digits."""
        return cls(decode_hex(text, cls.SIZE))

    def to_hex(self) -> str:
        """The 0x-prefixed hex form, leading zeros kept."""
        return to_hex_raw(self, False)

    @classmethod
    def from_int(cls, value: int) -> "FixedHash":
        """Big-endian encoding of a non-negative integer."""
        if value < 0:
            raise ValueError("value must not be negative")
        try:
            return cls(value.to_bytes(cls.SIZE, "big"))
        except OverflowError as exc:
            raise OverflowError(f"{value} does not fit in {cls.SIZE} bytes") from exc

    def to_int(self) -> int:
        """Interpret the bytes as a big-endian integer."""
        return int.from_bytes(self, "big")

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.to_hex()})"

    def __str__(self) -> str:
        return self.to_hex()


class B256(FixedHash):
    """256-bit value, such as a hash."""

    SIZE = 32


class B160(FixedHash):
    """160-bit value, such as an address."""

    SIZE = 20