"""
Fixed-width 256-bit big-endian arithmetic against the BN254 base field
"""

# Base field modulus 'q' for BN254
BASE_FIELD_MODULUS_Q = bytes.fromhex(
    "30644E72E131A029B85045B68181585D97816A916871CA8D3C208C16D87CFD47"
)
Q = int.from_bytes(BASE_FIELD_MODULUS_Q, "big")

_WORD = 32
_WRAP = 1 << (8 * _WORD)


def _word(value: bytes) -> int:
    if len(value) != _WORD:
        raise ValueError(f"Expected {_WORD}-byte word, got {len(value)}")
    return int.from_bytes(value, "big")


def compare(a: bytes, b: bytes) -> int:
    """Return -1, 0 or 1 as a is less than, equal to or greater than b"""
    x, y = _word(a), _word(b)
    return (x > y) - (x < y)


def subtract(a: bytes, b: bytes) -> bytes:
    """a - b, wrapping modulo 2**256 when b > a (borrow out is dropped)"""
    return ((_word(a) - _word(b)) % _WRAP).to_bytes(_WORD, "big")


def reduce_mod_q(x: bytes) -> bytes:
    return (_word(x) % Q).to_bytes(_WORD, "big")


def is_valid_scalar(x: bytes) -> bool:
    return compare(x, BASE_FIELD_MODULUS_Q) < 0


def to_field_element(data: bytes) -> bytes:
    """Right-align up to 32 bytes into a 32-byte big-endian element"""
    if len(data) > _WORD:
        raise ValueError(f"Cannot fit {len(data)} bytes into a field element")
    return bytes(_WORD - len(data)) + bytes(data)
