"""
Deterministic seed generation for simulated enrichment.

h = h * 31 + code over UTF-16 code units, wrapped to a signed 32-bit
integer at every step. Simulated records are keyed off this value, so the
overflow behaviour must stay exact.
"""

_INT32_MASK = 0xFFFFFFFF
_INT32_SIGN = 0x80000000


def seed_hash(text: str) -> int:
    """
    Return the non-negative seed for a string.

    Matches the classic 32-bit ``h * 31 + c`` string hash, including
    two's-complement overflow, and returns ``abs(h)``.
    """
    h = 0
    for code in _utf16_code_units(text):
        h = _to_int32(h * 31 + code)
    return abs(h)


def _to_int32(value: int) -> int:
    value &= _INT32_MASK
    return value - (1 << 32) if value & _INT32_SIGN else value


def _utf16_code_units(text: str) -> list[int]:
    """Split text into UTF-16 code units. Astral characters yield a surrogate pair; lone surrogates pass through."""
    data = text.encode("utf-16-le", "surrogatepass")
    return [int.from_bytes(data[i:i + 2], "little") for i in range(0, len(data), 2)]
