from __future__ import annotations

import sys
from typing import TYPE_CHECKING, Iterable, TextIO

if TYPE_CHECKING:
    from ..types import CorrectedRecord

__all__ = ["output_bed"]


def output_bed(results: Iterable[CorrectedRecord], fh: TextIO | None = None) -> int:
    """
    Write corrected records as BED6: name is the annotation of internal values, score is the corrected count.
    :return: Number of lines written.
    """
    fh = fh or sys.stdout
    n: int = 0
    for res in results:
        fh.write("\t".join(res.bed_fields()) + "\n")
        n += 1
    return n
