"""
Numeric helpers shared by the analyzers.

Scores must match the values the chat frontend has always displayed, so a few
helpers reproduce JavaScript number semantics (half-up rounding, ``toFixed``,
truncated remainder and 32-bit string hashing) instead of Python's.
"""
import math
from decimal import Decimal, ROUND_HALF_UP


def clamp(value: float, low: float, high: float) -> float:
    """Clamp ``value`` into ``[low, high]``."""
    return max(low, min(high, value))


def js_round(value: float) -> int:
    """Round half up toward positive infinity, like ``Math.round``."""
    return int(math.floor(value + 0.5))


def js_to_fixed(value: float, digits: int = 1) -> float:
    """Equivalent of ``parseFloat(value.toFixed(digits))``."""
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def to_int32(value: int) -> int:
    """Wrap an integer into the signed 32-bit range."""
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value & 0x80000000 else value


def string_hash32(text: str) -> int:
    """
    Rolling ``hash * 31 + charCode`` over UTF-16 code units, kept in int32.

    Args:
        text: Text to hash

    Returns:
        int: Signed 32-bit hash, 0 for an empty string
    """
    data = text.encode("utf-16-le", "surrogatepass")
    h = 0
    for i in range(0, len(data), 2):
        code_unit = data[i] | (data[i + 1] << 8)
        h = to_int32((h << 5) - h + code_unit)
    return h


def js_remainder(dividend: int, divisor: int) -> int:
    """Remainder with the sign of the dividend (JavaScript ``%``)."""
    return int(math.fmod(dividend, divisor))
