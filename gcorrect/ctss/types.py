from __future__ import annotations

from typing import Literal, NamedTuple, Union

__all__ = [
    "Count",
    "Strand",
    "CorrectionStateLabel",
    "PerBaseRecord",
    "CorrectionState",
    "CorrectedRecord",
]


Count = Union[int, float]
Strand = Literal["+", "-"]
CorrectionStateLabel = Literal["O", "S", "G", "E"]


class PerBaseRecord(NamedTuple):
    chrom: str
    start: int  # 0-based, inclusive
    end: int  # 0-based, exclusive; always start + 1
    x: Count  # reads with their 5' end at this base
    a0: Count  # subset of x with an additional base mismatching the reference
    nuc: str  # reference base, upper case, in the reading direction of the strand


class CorrectionState(NamedTuple):
    """
    Everything carried from one record to the next during a strand scan.
    """

    chrom: str
    start: int
    end: int
    nuc: str
    f: int  # spillover towards the next base, already truncated


class CorrectedRecord(NamedTuple):
    chrom: str
    start: int
    end: int
    x: Count
    a0: Count
    nuc: str
    state: CorrectionStateLabel
    a: Count  # additional-G reads attributed to this base
    n: Count  # corrected count (full precision)
    u: Count  # reads without an additional G
    f: int  # spillover to the next base
    strand: Strand

    @property
    def score(self) -> int:
        return int(self.n)

    @property
    def annotation(self) -> str:
        return (
            f"X:{self.x:.2f},A0:{self.a0:.2f},Nuc:{self.nuc},State:{self.state},"
            f"A:{self.a:.2f},N:{self.n:.2f},U:{self.u:.2f},F:{self.f:.2f}"
        )

    def bed_fields(self) -> tuple[str, str, str, str, str, str]:
        return self.chrom, str(self.start), str(self.end), self.annotation, str(self.score), self.strand
