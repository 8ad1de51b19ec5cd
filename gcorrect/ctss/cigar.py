from typing import Sequence

__all__ = [
    "CIGAR_OP_SOFT_CLIPPED",
    "leading_soft_clip",
    "trailing_soft_clip",
]


CIGAR_OP_SOFT_CLIPPED = 4  # S


def leading_soft_clip(cigar: Sequence[tuple[int, int]]) -> int:
    """
    :param cigar: CIGAR as (operation, length) tuples, e.g. from AlignedSegment.cigartuples.
    :return: Number of soft-clipped bases at the start of the stored read sequence, 0 if the CIGAR does not start with
             a soft clip.
    """
    if cigar and cigar[0][0] == CIGAR_OP_SOFT_CLIPPED:
        return cigar[0][1]
    return 0


def trailing_soft_clip(cigar: Sequence[tuple[int, int]]) -> int:
    if cigar and cigar[-1][0] == CIGAR_OP_SOFT_CLIPPED:
        return cigar[-1][1]
    return 0
