from __future__ import annotations

import math

from typing import Iterator

from gcorrect.exceptions import InputError
from .types import Count, PerBaseRecord

__all__ = [
    "parse_count",
    "parse_per_base_table",
]


def parse_count(v: str) -> Count:
    # bedGraph-derived counts are usually integers, but may be written as reals
    try:
        return int(v)
    except ValueError:
        f = float(v)
        if not math.isfinite(f):
            raise ValueError(f"non-finite count: {v}")
        return f


def parse_per_base_table(table_file: str) -> Iterator[PerBaseRecord]:
    """
    Read pre-computed per-base records for one strand: tab-separated chrom, start, end, X, A0 and reference base (from
    the forward strand of the reference), one base per line. Blank lines and lines starting with # are skipped.
    :param table_file: Path to the table.
    :return: Iterator of per-base records, in file order.
    """

    with open(table_file, "r") as tf:
        for line_no, line in enumerate((s.strip() for s in tf), 1):
            if not line or line.startswith("#"):
                continue

            ls = line.split("\t")
            if len(ls) < 6:
                raise InputError(f"Per-base table format error: expected 6 columns on line {line_no}, got {len(ls)}")

            try:
                start, end = int(ls[1]), int(ls[2])
                x, a0 = parse_count(ls[3]), parse_count(ls[4])
            except ValueError as e:
                raise InputError(f"Per-base table format error: invalid number on line {line_no}: {e}")

            if end != start + 1:
                raise InputError(f"Per-base table format error: line {line_no} does not cover exactly one base")

            if x < 0 or not (0 <= a0 <= x):
                raise InputError(f"Per-base table format error: need 0 <= A0 <= X on line {line_no}")

            yield PerBaseRecord(ls[0], start, end, x, a0, ls[5].upper())
