from __future__ import annotations

from typing import Iterable, Iterator

from gcorrect.exceptions import InputError
from gcorrect.iupac import complement_base
from .types import CorrectionState, PerBaseRecord

__all__ = [
    "ensure_ascending",
    "minus_strand_sort_key",
    "normalize_minus_strand",
    "is_adjacent",
]


def ensure_ascending(records: Iterable[PerBaseRecord]) -> Iterator[PerBaseRecord]:
    """
    Pass plus-strand records through, failing on the first one which breaks ascending order: a start coordinate not
    strictly greater than the previous one on the same contig, or a contig which comes back after another one.
    """

    seen_contigs: set[str] = set()
    prev: PerBaseRecord | None = None

    for r in records:
        if prev is not None and r.chrom == prev.chrom:
            if r.start <= prev.start:
                raise InputError(
                    f"Per-base records out of order: {r.chrom}:{r.start} follows {prev.chrom}:{prev.start} (+)")
        elif r.chrom in seen_contigs:
            raise InputError(f"Per-base records out of order: contig {r.chrom} appears more than once (+)")

        seen_contigs.add(r.chrom)
        prev = r
        yield r


def minus_strand_sort_key(r: PerBaseRecord) -> tuple[str, int]:
    # contigs ascending, coordinates descending
    return r.chrom, -r.start


def normalize_minus_strand(records: Iterable[PerBaseRecord]) -> list[PerBaseRecord]:
    """
    Present minus-strand records the way the correction scan expects plus-strand records: in the 5' -> 3' reading
    order of the minus strand (descending coordinates within each contig), with reference bases complemented.
    Coordinates are left untouched.
    :param records: Per-base records for the minus strand, with bases from the forward reference.
    :return: A new list of normalized records.
    """

    normalized = sorted(
        (r._replace(nuc=complement_base(r.nuc)) for r in records),
        key=minus_strand_sort_key,
    )

    for r1, r2 in zip(normalized, normalized[1:]):
        if r1.chrom == r2.chrom and r1.start == r2.start:
            raise InputError(f"Duplicate per-base record for {r1.chrom}:{r1.start}-{r1.end} (-)")

    return normalized


def is_adjacent(prev: CorrectionState | None, record: PerBaseRecord, reverse: bool = False) -> bool:
    """
    Whether a record directly follows the previous one in the reading direction of its strand.
    :param prev: State carried from the previous record, or None at the start of a scan.
    :param record: The current record.
    :param reverse: Whether records are read in descending coordinate order (normalized minus strand).
    :return: Whether the two records are on the same contig and touch without a gap.
    """
    if prev is None or prev.chrom != record.chrom:
        return False
    if reverse:
        return prev.start == record.end
    return prev.end == record.start
