from __future__ import annotations

from typing import Iterable, Iterator

__all__ = [
    "BaseCounts",
    "pad_runs",
]


# (0-based position, X, A0)
BaseCounts = tuple[int, int, int]


def _padded_bases(counts: Iterable[BaseCounts]) -> Iterator[BaseCounts]:
    prev_end: int | None = None

    for pos, x, a0 in counts:
        if pos != prev_end:  # start of a new run
            # Zero base after the previous run, unless the next run begins right after it (bridged below.)
            if prev_end is not None and pos != prev_end + 1:
                yield prev_end, 0, 0
            # Zero base before this run
            if pos > 0:
                yield pos - 1, 0, 0

        yield pos, x, a0
        prev_end = pos + 1

    if prev_end is not None:
        yield prev_end, 0, 0


def pad_runs(counts: Iterable[BaseCounts], chrom_len: int) -> Iterator[list[BaseCounts]]:
    """
    Surround each run of consecutive non-zero bases with zero-count bases, so that the correction scan always sees the
    base before a run (where the true start sites of the run's first bases may lie) and the base after it. Runs which
    are separated by exactly one base are bridged by a single zero-count base.
    :param counts: Non-zero (position, X, A0) tuples of one contig and strand, sorted by ascending position.
    :param chrom_len: Length of the contig; bases at or past this position are dropped.
    :return: Blocks of contiguous bases, each a list of (position, X, A0) tuples in ascending order.
    """

    block: list[BaseCounts] = []

    for base in _padded_bases(counts):
        if base[0] >= chrom_len:
            continue
        if block and block[-1][0] + 1 != base[0]:
            yield block
            block = []
        block.append(base)

    if block:
        yield block
