"""Addition, scalar multiplication and pairing check on the alt_bn128 curve."""

from __future__ import annotations

from dataclasses import dataclass

from .precompile_base import (
    Precompile,
    PrecompileAddress,
    PrecompileError,
    PrecompileErrorKind,
    PrecompileKind,
    PrecompileResult,
    u64_to_b160,
)

FIELD_MODULUS = 0x30644E72E131A029B85045B68181585D97816A916871CA8D3C208C16D87CFD47
CURVE_ORDER = 0x30644E72E131A029B85045B68181585D2833E84879B9709143E1F593F0000001

ADD_INPUT_LEN = 128
MUL_INPUT_LEN = 128
PAIR_ELEMENT_LEN = 192

ISTANBUL_ADD_GAS = 150
BYZANTIUM_ADD_GAS = 500
ISTANBUL_MUL_GAS = 6_000
BYZANTIUM_MUL_GAS = 40_000
ISTANBUL_PAIR_PER_POINT = 34_000
ISTANBUL_PAIR_BASE = 45_000
BYZANTIUM_PAIR_PER_POINT = 80_000
BYZANTIUM_PAIR_BASE = 100_000

_ATE_LOOP_COUNT = 29793968203157093288
_LOG_ATE_LOOP_COUNT = 63
_FINAL_EXPONENT = (FIELD_MODULUS**12 - 1) // CURVE_ORDER

_P = FIELD_MODULUS


@dataclass(frozen=True, slots=True)
class _Fq:
    value: int

    def __add__(self, other: "_Fq") -> "_Fq":
        return _Fq((self.value + other.value) % _P)

    def __sub__(self, other: "_Fq") -> "_Fq":
        return _Fq((self.value - other.value) % _P)

    def __neg__(self) -> "_Fq":
        return _Fq(-self.value % _P)

    def __mul__(self, other: "_Fq | int") -> "_Fq":
        if isinstance(other, int):
            return _Fq(self.value * other % _P)
        return _Fq(self.value * other.value % _P)

    def __truediv__(self, other: "_Fq") -> "_Fq":
        return _Fq(self.value * pow(other.value, -1, _P) % _P)

    def is_zero(self) -> bool:
        return self.value == 0


@dataclass(frozen=True, slots=True)
class _Fq2:
    """Element re + im * i of the quadratic extension, with i^2 = -1."""

    re: int
    im: int

    def __add__(self, other: "_Fq2") -> "_Fq2":
        return _Fq2((self.re + other.re) % _P, (self.im + other.im) % _P)

    def __sub__(self, other: "_Fq2") -> "_Fq2":
        return _Fq2((self.re - other.re) % _P, (self.im - other.im) % _P)

    def __neg__(self) -> "_Fq2":
        return _Fq2(-self.re % _P, -self.im % _P)

    def __mul__(self, other: "_Fq2 | int") -> "_Fq2":
        if isinstance(other, int):
            return _Fq2(self.re * other % _P, self.im * other % _P)
        return _Fq2(
            (self.re * other.re - self.im * other.im) % _P,
            (self.re * other.im + self.im * other.re) % _P,
        )

    def inverse(self) -> "_Fq2":
        norm_inv = pow(self.re * self.re + self.im * self.im, -1, _P)
        return _Fq2(self.re * norm_inv % _P, -self.im * norm_inv % _P)

    def __truediv__(self, other: "_Fq2") -> "_Fq2":
        return self * other.inverse()

    def conjugate(self) -> "_Fq2":
        return _Fq2(self.re, -self.im % _P)

    def power(self, exponent: int) -> "_Fq2":
        result = _Fq2(1, 0)
        for bit in bin(exponent)[2:]:
            result = result * result
            if bit == "1":
                result = result * self
        return result

    def is_zero(self) -> bool:
        return self.re == 0 and self.im == 0


_B1 = _Fq(3)
_XI = _Fq2(9, 1)
_B2 = _Fq2(3, 0) / _XI
_GAMMA_X = _XI.power((_P - 1) // 3)
_GAMMA_Y = _XI.power((_P - 1) // 2)

_FQ12_ONE = (1,) + (0,) * 11


def _double(point):
    if point is None:
        return None
    x, y = point
    if y.is_zero():
        return None
    slope = (x * x * 3) / (y * 2)
    new_x = slope * slope - x * 2
    return new_x, slope * (x - new_x) - y


def _add(first, second):
    if first is None:
        return second
    if second is None:
        return first
    x1, y1 = first
    x2, y2 = second
    if x1 == x2:
        return _double(first) if y1 == y2 else None
    slope = (y2 - y1) / (x2 - x1)
    new_x = slope * slope - x1 - x2
    return new_x, slope * (x1 - new_x) - y1


def _multiply(point, scalar: int):
    result = None
    addend = point
    while scalar:
        if scalar & 1:
            result = _add(result, addend)
        addend = _double(addend)
        scalar >>= 1
    return result


def _read_fq(data: bytes, pos: int) -> int:
    value = int.from_bytes(data[pos : pos + 32], "big")
    if value >= _P:
        raise PrecompileError(PrecompileErrorKind.BN128_FIELD_POINT_NOT_A_MEMBER)
    return value


def _g1_point(x: int, y: int):
    if x == 0 and y == 0:
        return None
    px, py = _Fq(x), _Fq(y)
    if py * py != px * px * px + _B1:
        raise PrecompileError(PrecompileErrorKind.BN128_AFFINE_G_FAILED_TO_CREATE)
    return px, py


def _g2_point(x: _Fq2, y: _Fq2):
    if x.is_zero() and y.is_zero():
        return None
    if y * y != x * x * x + _B2:
        raise PrecompileError(PrecompileErrorKind.BN128_AFFINE_G_FAILED_TO_CREATE)
    point = (x, y)
    if _multiply(point, CURVE_ORDER) is not None:
        raise PrecompileError(PrecompileErrorKind.BN128_AFFINE_G_FAILED_TO_CREATE)
    return point


def _encode_g1(point) -> bytes:
    if point is None:
        return bytes(64)
    x, y = point
    return x.value.to_bytes(32, "big") + y.value.to_bytes(32, "big")


def read_point(data: bytes, pos: int):
    """Read a G1 point at ``pos``; (0, 0) stands for the point at infinity (None)."""
    chunk = bytes(data[pos : pos + 64]).ljust(64, b"\x00")
    return _g1_point(_read_fq(chunk, 0), _read_fq(chunk, 32))


def _fit(data: bytes, length: int) -> bytes:
    return bytes(data)[:length].ljust(length, b"\x00")


def run_add(data: bytes) -> bytes:
    """Sum of two G1 points as 64 bytes; zeros stand for infinity."""
    data = _fit(data, ADD_INPUT_LEN)
    return _encode_g1(_add(read_point(data, 0), read_point(data, 64)))


def run_mul(data: bytes) -> bytes:
    """A G1 point multiplied by a 256-bit scalar, as 64 bytes."""
    data = _fit(data, MUL_INPUT_LEN)
    point = read_point(data, 0)
    scalar = int.from_bytes(data[64:96], "big") % CURVE_ORDER
    return _encode_g1(_multiply(point, scalar))


def _fq12_mul(a: tuple[int, ...], b: tuple[int, ...]) -> tuple[int, ...]:
    product = [0] * 23
    for i, left in enumerate(a):
        if left:
            for j, right in enumerate(b):
                product[i + j] += left * right
    # w^12 = 18 w^6 - 82
    for degree in range(22, 11, -1):
        top = product[degree]
        if top:
            product[degree - 6] += 18 * top
            product[degree - 12] -= 82 * top
    return tuple(c % _P for c in product[:12])


def _fq12_pow(base: tuple[int, ...], exponent: int) -> tuple[int, ...]:
    result = _FQ12_ONE
    for bit in bin(exponent)[2:]:
        result = _fq12_mul(result, result)
        if bit == "1":
            result = _fq12_mul(result, base)
    return result


def _line(first, second, xp: int, yp: int) -> tuple[int, ...]:
    """Line through two twisted G2 points, evaluated at the G1 point (xp, yp)."""
    x1, y1 = first
    x2, y2 = second
    coeffs = [0] * 12
    if x1 != x2 or y1 == y2:
        slope = (y2 - y1) / (x2 - x1) if x1 != x2 else (x1 * x1 * 3) / (y1 * 2)
        offset = y1 - slope * x1
        coeffs[0] = -yp % _P
        coeffs[1] = (slope.re - 9 * slope.im) * xp % _P
        coeffs[7] = slope.im * xp % _P
        coeffs[3] = (offset.re - 9 * offset.im) % _P
        coeffs[9] = offset.im
    else:
        coeffs[0] = xp % _P
        coeffs[2] = -(x1.re - 9 * x1.im) % _P
        coeffs[8] = -x1.im % _P
    return tuple(coeffs)


def _frobenius(point):
    x, y = point
    return x.conjugate() * _GAMMA_X, y.conjugate() * _GAMMA_Y


def _miller_loop(q, p) -> tuple[int, ...]:
    xp, yp = p[0].value, p[1].value
    r = q
    f = _FQ12_ONE
    for i in range(_LOG_ATE_LOOP_COUNT, -1, -1):
        f = _fq12_mul(_fq12_mul(f, f), _line(r, r, xp, yp))
        r = _double(r)
        if _ATE_LOOP_COUNT >> i & 1:
            f = _fq12_mul(f, _line(r, q, xp, yp))
            r = _add(r, q)
    q1 = _frobenius(q)
    q2x, q2y = _frobenius(q1)
    neg_q2 = (q2x, -q2y)
    f = _fq12_mul(f, _line(r, q1, xp, yp))
    r = _add(r, q1)
    return _fq12_mul(f, _line(r, neg_q2, xp, yp))


def _read_pair(chunk: bytes):
    ax = _read_fq(chunk, 0)
    ay = _read_fq(chunk, 32)
    b_x_im = _read_fq(chunk, 64)
    b_x_re = _read_fq(chunk, 96)
    b_y_im = _read_fq(chunk, 128)
    b_y_re = _read_fq(chunk, 160)
    a = _g1_point(ax, ay)
    b = _g2_point(_Fq2(b_x_re, b_x_im), _Fq2(b_y_re, b_y_im))
    return a, b


def run_pair(
    data: bytes, pair_per_point_cost: int, pair_base_cost: int, gas_limit: int
) -> PrecompileResult:
    """Check that the product of pairings of the given (G1, G2) pairs is one."""
    data = bytes(data)
    gas_used = pair_per_point_cost * len(data) // PAIR_ELEMENT_LEN + pair_base_cost
    if gas_used > gas_limit:
        raise PrecompileError(PrecompileErrorKind.OUT_OF_GAS)
    if len(data) % PAIR_ELEMENT_LEN:
        raise PrecompileError(PrecompileErrorKind.BN128_PAIR_LENGTH)

    pairs = [
        _read_pair(data[offset : offset + PAIR_ELEMENT_LEN])
        for offset in range(0, len(data), PAIR_ELEMENT_LEN)
    ]
    f = _FQ12_ONE
    for a, b in pairs:
        if a is not None and b is not None:
            f = _fq12_mul(f, _miller_loop(b, a))
    success = f == _FQ12_ONE or _fq12_pow(f, _FINAL_EXPONENT) == _FQ12_ONE
    return gas_used, int(success).to_bytes(32, "big")


def _fixed_cost(cost: int, operation, data: bytes, gas_limit: int) -> PrecompileResult:
    if cost > gas_limit:
        raise PrecompileError(PrecompileErrorKind.OUT_OF_GAS)
    return cost, operation(data)


def add_istanbul(data: bytes, gas_limit: int) -> PrecompileResult:
    return _fixed_cost(ISTANBUL_ADD_GAS, run_add, data, gas_limit)


def add_byzantium(data: bytes, gas_limit: int) -> PrecompileResult:
    return _fixed_cost(BYZANTIUM_ADD_GAS, run_add, data, gas_limit)


def mul_istanbul(data: bytes, gas_limit: int) -> PrecompileResult:
    return _fixed_cost(ISTANBUL_MUL_GAS, run_mul, data, gas_limit)


def mul_byzantium(data: bytes, gas_limit: int) -> PrecompileResult:
    return _fixed_cost(BYZANTIUM_MUL_GAS, run_mul, data, gas_limit)


def pair_istanbul(data: bytes, gas_limit: int) -> PrecompileResult:
    return run_pair(data, ISTANBUL_PAIR_PER_POINT, ISTANBUL_PAIR_BASE, gas_limit)


def pair_byzantium(data: bytes, gas_limit: int) -> PrecompileResult:
    return run_pair(data, BYZANTIUM_PAIR_PER_POINT, BYZANTIUM_PAIR_BASE, gas_limit)


def _standard(address: int, function) -> PrecompileAddress:
    return PrecompileAddress(u64_to_b160(address), Precompile(PrecompileKind.STANDARD, function))


ADD_ISTANBUL = _standard(6, add_istanbul)
ADD_BYZANTIUM = _standard(6, add_byzantium)
MUL_ISTANBUL = _standard(7, mul_istanbul)
MUL_BYZANTIUM = _standard(7, mul_byzantium)
PAIR_ISTANBUL = _standard(8, pair_istanbul)
PAIR_BYZANTIUM = _standard(8, pair_byzantium)