"""
BN254 (alt_bn128) curve primitives

Thin byte-level layer over py_ecc.optimized_bn128 exposing the operations the
verifier relies on, in the EVM precompile layout:

    G1: x || y                              (2 x 32-byte big-endian words)
    G2: x_c1 || x_c0 || y_c1 || y_c0        (4 x 32-byte big-endian words)

The all-zero encoding is the point at infinity. Compressed points are
produced and consumed in the library-native order (little-endian words, c0
before c1, flags in the top bits of the last byte); converting to the
big-endian wire order is the codec's job.
"""

from typing import Optional, Tuple

from py_ecc.optimized_bn128 import (
    FQ,
    FQ2,
    FQ12,
    Z1,
    Z2,
    add,
    b,
    b2,
    curve_order,
    field_modulus,
    final_exponentiate,
    is_inf,
    is_on_curve,
    multiply,
    normalize,
    pairing as _pairing,
)

G1Point = Tuple[FQ, FQ, FQ]
G2Point = Tuple[FQ2, FQ2, FQ2]

_Y_LARGER_FLAG = 0x80
_INFINITY_FLAG = 0x40
_FLAG_MASK = _Y_LARGER_FLAG | _INFINITY_FLAG
_HALF_Q = (field_modulus - 1) // 2

PAIRING_SUCCESS = (1).to_bytes(32, "big")
PAIRING_FAILURE = bytes(32)


class Bn254Error(ValueError):
    """Raised when a primitive rejects its input"""
    pass


def convert_endianness(data: bytes, chunk: int) -> bytes:
    """Reverse the byte order of every ``chunk``-sized word of ``data``"""
    if len(data) % chunk:
        raise Bn254Error(f"Length {len(data)} is not a multiple of {chunk}")
    return b"".join(data[i:i + chunk][::-1] for i in range(0, len(data), chunk))


def _coordinate(word: bytes) -> int:
    value = int.from_bytes(word, "big")
    if value >= field_modulus:
        raise Bn254Error("Coordinate is not a canonical field element")
    return value


def _in_subgroup(point: G2Point) -> bool:
    return is_inf(multiply(point, curve_order))


def g1_from_bytes(data: bytes) -> G1Point:
    if len(data) != 64:
        raise Bn254Error(f"G1 point must be 64 bytes, got {len(data)}")
    if data == bytes(64):
        return Z1
    point = (FQ(_coordinate(data[:32])), FQ(_coordinate(data[32:])), FQ.one())
    if not is_on_curve(point, b):
        raise Bn254Error("G1 point is not on curve")
    return point


def g1_to_bytes(point: G1Point) -> bytes:
    if is_inf(point):
        return bytes(64)
    x, y = normalize(point)
    return x.n.to_bytes(32, "big") + y.n.to_bytes(32, "big")


def g2_from_bytes(data: bytes) -> G2Point:
    if len(data) != 128:
        raise Bn254Error(f"G2 point must be 128 bytes, got {len(data)}")
    if data == bytes(128):
        return Z2
    x_c1, x_c0, y_c1, y_c0 = (_coordinate(data[i:i + 32]) for i in range(0, 128, 32))
    point = (FQ2([x_c0, x_c1]), FQ2([y_c0, y_c1]), FQ2.one())
    if not is_on_curve(point, b2):
        raise Bn254Error("G2 point is not on curve")
    if not _in_subgroup(point):
        raise Bn254Error("G2 point is not in the prime order subgroup")
    return point


def g2_to_bytes(point: G2Point) -> bytes:
    if is_inf(point):
        return bytes(128)
    x, y = normalize(point)
    x_c0, x_c1 = (int(c) for c in x.coeffs)
    y_c0, y_c1 = (int(c) for c in y.coeffs)
    return b"".join(v.to_bytes(32, "big") for v in (x_c1, x_c0, y_c1, y_c0))


def g1_add(data: bytes) -> bytes:
    """P || Q (128 bytes) -> P + Q (64 bytes)"""
    if len(data) != 128:
        raise Bn254Error(f"Addition input must be 128 bytes, got {len(data)}")
    return g1_to_bytes(add(g1_from_bytes(data[:64]), g1_from_bytes(data[64:])))


def g1_mul(data: bytes) -> bytes:
    """P || s (96 bytes) -> s * P (64 bytes)"""
    if len(data) != 96:
        raise Bn254Error(f"Multiplication input must be 96 bytes, got {len(data)}")
    point = g1_from_bytes(data[:64])
    scalar = int.from_bytes(data[64:], "big") % curve_order
    return g1_to_bytes(multiply(point, scalar))


def pairing(data: bytes) -> bytes:
    """
    Multi-pairing check over (G1 || G2) pairs of 192 bytes each.

    Returns 1 as a 32-byte big-endian integer if the product of pairings is
    the identity of the target group, 0 otherwise.
    """
    if len(data) % 192:
        raise Bn254Error(f"Pairing input length {len(data)} is not a multiple of 192")

    acc = FQ12.one()
    for offset in range(0, len(data), 192):
        p = g1_from_bytes(data[offset:offset + 64])
        q = g2_from_bytes(data[offset + 64:offset + 192])
        if is_inf(p) or is_inf(q):
            continue
        acc = acc * _pairing(q, p, final_exponentiate=False)

    if final_exponentiate(acc) == FQ12.one():
        return PAIRING_SUCCESS
    return PAIRING_FAILURE


def _fq_is_larger(y: int) -> bool:
    return y > _HALF_Q


def _fq2_is_larger(c0: int, c1: int) -> bool:
    # Lexicographic on (c1, c0), matching the library's Fp2 ordering
    if c1:
        return c1 > _HALF_Q
    return c0 > _HALF_Q


def _fq2_sqrt(a: FQ2) -> Optional[FQ2]:
    # q = 3 mod 4 (Adj, Rodriguez-Henriquez, Algorithm 9)
    q = field_modulus
    minus_one = -FQ2.one()
    a1 = a ** ((q - 3) // 4)
    alpha = a1 * a1 * a
    c0, c1 = (int(c) for c in alpha.coeffs)
    alpha_q = FQ2([c0, (q - c1) % q])
    if alpha_q * alpha == minus_one:
        return None
    x0 = a1 * a
    if alpha == minus_one:
        x = FQ2([0, 1]) * x0
    else:
        x = ((FQ2.one() + alpha) ** ((q - 1) // 2)) * x0
    if x * x != a:
        return None
    return x


def _split_flags(data: bytes) -> Tuple[int, bytes]:
    flags = data[-1] & _FLAG_MASK
    body = data[:-1] + bytes([data[-1] & ~_FLAG_MASK & 0xFF])
    return flags, body


def g1_compress_native(point: G1Point) -> bytes:
    if is_inf(point):
        return bytes(31) + bytes([_INFINITY_FLAG])
    x, y = normalize(point)
    out = bytearray(x.n.to_bytes(32, "little"))
    if _fq_is_larger(y.n):
        out[31] |= _Y_LARGER_FLAG
    return bytes(out)


def g1_decompress_native(data: bytes) -> G1Point:
    if len(data) != 32:
        raise Bn254Error(f"Compressed G1 point must be 32 bytes, got {len(data)}")
    flags, body = _split_flags(data)
    x = int.from_bytes(body, "little")
    if flags & _INFINITY_FLAG:
        if flags & _Y_LARGER_FLAG or x:
            raise Bn254Error("Malformed point at infinity")
        return Z1
    if x >= field_modulus:
        raise Bn254Error("Coordinate is not a canonical field element")

    rhs = (pow(x, 3, field_modulus) + 3) % field_modulus
    y = pow(rhs, (field_modulus + 1) // 4, field_modulus)
    if y * y % field_modulus != rhs:
        raise Bn254Error("x does not correspond to a G1 point")
    if _fq_is_larger(y) != bool(flags & _Y_LARGER_FLAG):
        y = field_modulus - y
    return (FQ(x), FQ(y), FQ.one())


def g2_compress_native(point: G2Point) -> bytes:
    if is_inf(point):
        return bytes(63) + bytes([_INFINITY_FLAG])
    x, y = normalize(point)
    x_c0, x_c1 = (int(c) for c in x.coeffs)
    y_c0, y_c1 = (int(c) for c in y.coeffs)
    out = bytearray(x_c0.to_bytes(32, "little") + x_c1.to_bytes(32, "little"))
    if _fq2_is_larger(y_c0, y_c1):
        out[63] |= _Y_LARGER_FLAG
    return bytes(out)


def g2_decompress_native(data: bytes) -> G2Point:
    if len(data) != 64:
        raise Bn254Error(f"Compressed G2 point must be 64 bytes, got {len(data)}")
    flags, body = _split_flags(data)
    x_c0 = int.from_bytes(body[:32], "little")
    x_c1 = int.from_bytes(body[32:], "little")
    if flags & _INFINITY_FLAG:
        if flags & _Y_LARGER_FLAG or x_c0 or x_c1:
            raise Bn254Error("Malformed point at infinity")
        return Z2
    if x_c0 >= field_modulus or x_c1 >= field_modulus:
        raise Bn254Error("Coordinate is not a canonical field element")

    x = FQ2([x_c0, x_c1])
    y = _fq2_sqrt(x ** 3 + b2)
    if y is None:
        raise Bn254Error("x does not correspond to a G2 point")
    y_c0, y_c1 = (int(c) for c in y.coeffs)
    if _fq2_is_larger(y_c0, y_c1) != bool(flags & _Y_LARGER_FLAG):
        y = -y
    point = (x, y, FQ2.one())
    if not _in_subgroup(point):
        raise Bn254Error("G2 point is not in the prime order subgroup")
    return point
