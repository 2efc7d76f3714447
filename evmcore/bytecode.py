"""Contract bytecode in its raw, checked and analysed forms."""

from __future__ import annotations

from dataclasses import dataclass, field

from .bits import B256
from .utilities import KECCAK_EMPTY, keccak256

_CHECKED_PADDING = 33


@dataclass(frozen=True)
class JumpMap:
    """Bitmap of valid jump destinations, least significant bit first."""

    raw: bytes = b""
    length: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "raw", bytes(self.raw))
        if not 0 <= self.length <= 8 * len(self.raw):
            raise ValueError(f"bit length {self.length} does not fit in {len(self.raw)} bytes")

    def as_bytes(self) -> bytes:
        """The raw bytes of the bitmap."""
        return self.raw

    @classmethod
    def from_bytes(cls, data: bytes) -> "JumpMap":
        """Build a map covering every bit of ``data``."""
        data = bytes(data)
        return cls(data, 8 * len(data))

    def is_valid(self, pc: int) -> bool:
        """True if ``pc`` is a valid jump destination."""
        if not 0 <= pc < self.length:
            return False
        return bool(self.raw[pc >> 3] >> (pc & 7) & 1)

    def __repr__(self) -> str:
        bits = "".join(f"{byte:08b}" for byte in self.raw)
        return f"JumpMap(map={bits!r})"


@dataclass(frozen=True)
class RawState:
    """Bytecode exactly as given."""


@dataclass(frozen=True)
class CheckedState:
    """Bytecode padded with zeros; ``length`` is the original length."""

    length: int


@dataclass(frozen=True)
class AnalysedState:
    """Checked bytecode with its jump destinations worked out."""

    length: int
    jump_map: JumpMap


BytecodeState = RawState | CheckedState | AnalysedState


def _stop_state() -> AnalysedState:
    return AnalysedState(0, JumpMap(b"\x00", 1))


@dataclass(frozen=True)
class Bytecode:
    """Code bytes together with their analysis state.

    The default value is a single STOP opcode with an empty original length.
    """

    bytecode: bytes = b"\x00"
    state: BytecodeState = field(default_factory=_stop_state)

    def __post_init__(self) -> None:
        object.__setattr__(self, "bytecode", bytes(self.bytecode))

    @classmethod
    def new_raw(cls, data: bytes) -> "Bytecode":
        """Bytecode that has not been checked or analysed."""
        return cls(bytes(data), RawState())

    @classmethod
    def new_checked(cls, data: bytes, length: int) -> "Bytecode":
        """Bytecode already padded so that it ends in STOP."""
        return cls(bytes(data), CheckedState(length))

    def hash_slow(self) -> B256:
        """Keccak-256 of the original code; KECCAK_EMPTY for empty code."""
        if self.is_empty():
            return KECCAK_EMPTY
        return keccak256(self.original_bytes())

    def original_bytes(self) -> bytes:
        """The code without any padding added by checking."""
        if isinstance(self.state, RawState):
            return self.bytecode
        return self.bytecode[: self.state.length]

    def is_empty(self) -> bool:
        return len(self) == 0

    def __len__(self) -> int:
        if isinstance(self.state, RawState):
            return len(self.bytecode)
        return self.state.length

    def to_checked(self) -> "Bytecode":
        """Pad raw code with 33 zero bytes; other states are returned as they are."""
        if not isinstance(self.state, RawState):
            return self
        length = len(self.bytecode)
        return Bytecode(self.bytecode + bytes(_CHECKED_PADDING), CheckedState(length))

    def __repr__(self) -> str:
        return f"Bytecode(bytecode={self.bytecode.hex()!r}, state={self.state!r})"