from __future__ import annotations

from .correct_sample import correct_sample
from .correction import classify, correct_record, correct_strand
from .merge import correct_strands, merge_strands
from .params import CorrectionParams
from .strand import normalize_minus_strand

__all__ = [
    "classify",
    "correct_record",
    "correct_strand",
    "correct_sample",
    "correct_strands",
    "merge_strands",
    "normalize_minus_strand",
    "CorrectionParams",
]
