"""Numeric helpers shared by the scoring code."""

import math


def round_half_up(x: float) -> int:
    """Round halves away from zero for positives (``2.5 -> 3``), unlike ``round``."""
    return math.floor(x + 0.5)


def format_fixed(x: float, digits: int = 0) -> str:
    """Fixed-point text with halves rounded up (``0.625 -> "0.63"``)."""
    scale = 10**digits
    return f"{round_half_up(x * scale) / scale:.{digits}f}"
