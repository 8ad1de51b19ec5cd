import logging
import pathlib

import gcorrect.constants as c
from gcorrect.exceptions import ParamError
from gcorrect.logger import log_levels

__all__ = [
    "validate_g_addition_ratio",
    "CorrectionParams",
]


def validate_g_addition_ratio(p: float) -> float:
    """
    Check that a G addition ratio (P) is usable as a probability by the correction scan.
    :param p: Chance of a true start site read acquiring an additional G.
    :return: The validated ratio.
    """
    # NaN fails both comparisons
    if not (0 < p <= 1):
        raise ParamError(f"G addition ratio must be in (0, 1]; got {p}")
    return p


class CorrectionParams:
    def __init__(
        self,

        logger: logging.Logger,

        read_file: str,
        chrom_sizes_file: str,
        reference_file: str,
        min_mapq: int = c.DEFAULT_MIN_MAPQ,
        g_addition_ratio: float = c.DEFAULT_G_ADDITION_RATIO,
        # ---
        log_level: int = logging.WARNING,
        processes: int = 1,
    ):
        self.read_file: str = read_file
        self.chrom_sizes_file: str = chrom_sizes_file
        self.reference_file: str = reference_file
        self.min_mapq: int = min_mapq
        self.g_addition_ratio: float = validate_g_addition_ratio(g_addition_ratio)
        # ---
        self.log_level: int = log_level
        self.processes: int = processes

        for desc, path in (
            ("alignment file", read_file),
            ("chromosome size table", chrom_sizes_file),
            ("reference genome", reference_file),
        ):
            if not pathlib.Path(path).exists():
                raise ParamError(f"Could not find {desc} at '{path}'")

        if processes not in (1, 2):
            # one worker per strand at most
            raise ParamError(f"Number of processes must be 1 or 2; got {processes}")

        if min_mapq < 0:
            raise ParamError(f"Minimum mapping quality must be non-negative; got {min_mapq}")

        logger.debug(f"Using G addition ratio P={self.g_addition_ratio}, minimum MAPQ {self.min_mapq}")

    @classmethod
    def from_args(cls, logger: logging.Logger, p_args):
        return cls(
            logger,
            p_args.read_file,
            p_args.chrom_sizes,
            p_args.ref,
            min_mapq=p_args.min_mapq,
            g_addition_ratio=p_args.g_addition_ratio,
            # ---
            log_level=log_levels[p_args.log_level],
            processes=p_args.processes,
        )

    def to_dict(self):
        return {
            "read_file": self.read_file,
            "chrom_sizes_file": self.chrom_sizes_file,
            "reference_file": self.reference_file,
            "min_mapq": self.min_mapq,
            "g_addition_ratio": self.g_addition_ratio,
            "log_level": self.log_level,
            "processes": self.processes,
        }
