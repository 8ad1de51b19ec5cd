from __future__ import annotations

__all__ = [
    "truncate",
    "clamp",
]


def truncate(x: int | float) -> int:
    # toward zero, like awk's sprintf("%i", x)
    return int(x)


def clamp(x: int | float, lo: int | float, hi: int | float) -> int | float:
    return max(lo, min(x, hi))
