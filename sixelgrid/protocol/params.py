from __future__ import annotations

# Numeric parameters saturate here; every limit the decoder enforces is below it.
PARAM_LIMIT = 1 << 24


def is_digit(byte: int) -> bool:
    return 0x30 <= byte <= 0x39


def accumulate(value: int, byte: int) -> int:
    """Append a decimal digit byte to ``value``, saturating at ``PARAM_LIMIT``."""
    return min(value * 10 + (byte - 0x30), PARAM_LIMIT)
