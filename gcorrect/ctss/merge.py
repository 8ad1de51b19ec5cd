from __future__ import annotations

import itertools

from typing import Iterable

import gcorrect.constants as c
from .correction import correct_strand
from .strand import ensure_ascending, normalize_minus_strand
from .types import CorrectedRecord, PerBaseRecord

__all__ = [
    "merged_sort_key",
    "merge_strands",
    "correct_strands",
]


def merged_sort_key(r: CorrectedRecord) -> tuple[str, int, str]:
    # the strand label makes ties between strands at the same base deterministic ("+" < "-")
    return r.chrom, r.start, r.strand


def merge_strands(plus: Iterable[CorrectedRecord], minus: Iterable[CorrectedRecord]) -> list[CorrectedRecord]:
    """
    Combine the corrected records of both strands into a single list sorted by contig, then start coordinate.
    """
    return sorted(itertools.chain(plus, minus), key=merged_sort_key)


def correct_strands(
    plus_records: Iterable[PerBaseRecord],
    minus_records: Iterable[PerBaseRecord],
    p: float,
) -> list[CorrectedRecord]:
    """
    Correct both strands of in-memory per-base records independently and merge the results.
    :param plus_records: Plus-strand records in ascending coordinate order; anything else raises InputError.
    :param minus_records: Minus-strand records with forward-reference bases, in any order.
    :param p: Chance of a true start site read acquiring an additional G.
    :return: Corrected records of both strands, sorted by (contig, start, strand).
    """
    return merge_strands(
        correct_strand(ensure_ascending(plus_records), p, c.STRAND_PLUS),
        correct_strand(normalize_minus_strand(minus_records), p, c.STRAND_MINUS),
    )
