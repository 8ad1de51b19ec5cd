from __future__ import annotations

from typing import Iterable, Iterator

import gcorrect.constants as c
from gcorrect.utils import clamp, truncate
from .params import validate_g_addition_ratio
from .strand import is_adjacent
from .types import CorrectedRecord, CorrectionState, CorrectionStateLabel, PerBaseRecord, Strand

__all__ = [
    "classify",
    "correct_record",
    "correct_strand",
]


def classify(prev: CorrectionState | None, record: PerBaseRecord, reverse: bool = False) -> CorrectionStateLabel:
    """
    Classify a base by its position relative to a run of G in the reference (read in the 5' -> 3' direction of its
    strand.) A base without an adjacent predecessor is always in state O, whatever its reference base.
    :param prev: State carried from the previous record, or None if there is none.
    :param record: The record to classify.
    :param reverse: Whether the strand is read in descending coordinate order.
    :return: One of O (other), S (first G of a run), G (G inside a run), E (first base after a run.)
    """

    if not is_adjacent(prev, record, reverse):
        return c.STATE_OTHER

    prev_g = prev.nuc == c.ADDITIONAL_BASE
    curr_g = record.nuc == c.ADDITIONAL_BASE

    if curr_g:
        return c.STATE_GENERAL if prev_g else c.STATE_START
    return c.STATE_END if prev_g else c.STATE_OTHER


def correct_record(
    prev: CorrectionState | None,
    record: PerBaseRecord,
    p: float,
    strand: Strand = c.STRAND_PLUS,
) -> tuple[CorrectedRecord, CorrectionState]:
    """
    Correct the counts of a single base given the state carried from the previous base on the same strand.
    :param prev: State carried from the previous record, or None at the start of a scan.
    :param record: The per-base record to correct.
    :param p: Chance of a true start site read acquiring an additional G.
    :param strand: Strand of the record; minus-strand records must already be normalized.
    :return: Tuple of (corrected record, state to carry to the next record.)
    """

    x = record.x
    state = classify(prev, record, reverse=strand == c.STRAND_MINUS)

    if state == c.STATE_START:
        a = record.a0
        u = (a / p) * (1 - p)
        n = min(x, a / p)
        f = clamp(x - a - u, 0, x)
    elif state == c.STATE_GENERAL:
        a = prev.f  # reads spilled over from the previous G, not this base's own A0
        u = (a / p) * (1 - p)
        n = min(a + x, a / p)
        f = clamp(x - u, 0, x)
    elif state == c.STATE_END:
        a = prev.f
        n = a + x
        u = x
        f = 0
    else:
        a = record.a0
        n = x
        u = n - a
        f = 0

    # the spillover is carried to the next base truncated to an integer
    f = truncate(f)

    return (
        CorrectedRecord(record.chrom, record.start, record.end, x, record.a0, record.nuc, state, a, n, u, f, strand),
        CorrectionState(record.chrom, record.start, record.end, record.nuc, f),
    )


def _scan(records: Iterable[PerBaseRecord], p: float, strand: Strand) -> Iterator[CorrectedRecord]:
    prev: CorrectionState | None = None
    for record in records:
        res, prev = correct_record(prev, record, p, strand)
        yield res


def correct_strand(
    records: Iterable[PerBaseRecord], p: float, strand: Strand = c.STRAND_PLUS
) -> Iterator[CorrectedRecord]:
    """
    Single forward pass over one strand's per-base records. Only the previous record's state is kept, so records may
    be streamed in from a generator.
    :param records: Records in the 5' -> 3' reading order of the strand (see normalize_minus_strand.)
    :param p: Chance of a true start site read acquiring an additional G; must be in (0, 1].
    :param strand: Strand label to attach to the corrected records.
    :return: A lazy iterator of corrected records, one per input record.
    """
    validate_g_addition_ratio(p)  # before the first record is consumed
    return _scan(records, p, strand)
