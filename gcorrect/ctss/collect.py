from __future__ import annotations

import logging
import numpy as np
import pysam

from typing import Iterator

import gcorrect.constants as c
from gcorrect.exceptions import InputError
from gcorrect.iupac import complement_base
from .cigar import leading_soft_clip, trailing_soft_clip
from .padding import BaseCounts, pad_runs
from .types import PerBaseRecord, Strand

__all__ = [
    "skip_segment",
    "five_prime_position",
    "has_additional_g",
    "tally_five_prime_ends",
    "collect_strand_counts",
    "iter_strand_records",
]


def skip_segment(segment: pysam.AlignedSegment, min_mapq: int) -> bool:
    # Equivalent to samtools view -F 0x100 -q <min_mapq>, plus dropping unmapped reads like bamToBed does.
    return (
        segment.is_unmapped
        or segment.is_secondary
        or segment.mapping_quality < min_mapq
        or segment.reference_end is None  # no aligned bases
    )


def five_prime_position(segment: pysam.AlignedSegment) -> int:
    """
    0-based reference position of the 5' end of the aligned part of a read; soft-clipped bases are not counted.
    """
    return segment.reference_end - 1 if segment.is_reverse else segment.reference_start


def has_additional_g(segment: pysam.AlignedSegment) -> bool:
    """
    Whether a read carries an additional G at its 5' end, i.e. the base immediately 5' of the aligned part of the read
    is soft-clipped and is a G. Reverse-strand reads are stored reverse-complemented, so for these we look for a C just
    after the aligned part instead.
    :param segment: The aligned read.
    :return: Whether the read has an additional, mismatching G.
    """

    qs: str | None = segment.query_sequence
    cigar = segment.cigartuples

    if not qs or not cigar:
        return False

    if segment.is_reverse:
        n_clip = trailing_soft_clip(cigar)
        return n_clip > 0 and qs[len(qs) - n_clip].upper() == complement_base(c.ADDITIONAL_BASE)

    n_clip = leading_soft_clip(cigar)
    return n_clip > 0 and qs[n_clip - 1].upper() == c.ADDITIONAL_BASE


def tally_five_prime_ends(positions: list[int], a0_positions: list[int]) -> list[BaseCounts]:
    """
    Turn lists of read 5' positions into per-base counts.
    :param positions: 5' positions of all counted reads of a contig/strand.
    :param a0_positions: 5' positions of the subset of reads with an additional G.
    :return: Sorted (position, X, A0) tuples for every position with X > 0.
    """

    pos_x, counts_x = np.unique(np.array(positions, dtype=np.int64), return_counts=True)
    counts_a0 = np.zeros_like(counts_x)

    if a0_positions:
        pos_a0, a0 = np.unique(np.array(a0_positions, dtype=np.int64), return_counts=True)
        # every read counted in A0 is also counted in X, so each A0 position is present in pos_x
        counts_a0[np.searchsorted(pos_x, pos_a0)] = a0

    return list(zip(pos_x.tolist(), counts_x.tolist(), counts_a0.tolist()))


def collect_strand_counts(
    read_file: str,
    strand: Strand,
    min_mapq: int,
    reference_file: str | None = None,
) -> Iterator[tuple[str, list[BaseCounts]]]:
    """
    Count read 5' ends (X) and read 5' ends with an additional G (A0) on one strand, one contig at a time.
    The alignment file must be sorted by coordinate, but does not need to be indexed.
    :param read_file: SAM/BAM/CRAM file to read alignments from.
    :param strand: Strand to count reads for.
    :param min_mapq: Minimum mapping quality for a read to be counted.
    :param reference_file: Reference genome; only needed to decode CRAM files.
    :return: Iterator of (contig, per-base counts for the contig.)
    """

    want_reverse = strand == c.STRAND_MINUS

    seen_contigs: set[str] = set()
    contig: str | None = None
    positions: list[int] = []
    a0_positions: list[int] = []

    with pysam.AlignmentFile(read_file, reference_filename=reference_file) as af:
        for segment in af.fetch(until_eof=True):
            if skip_segment(segment, min_mapq) or segment.is_reverse != want_reverse:
                continue

            segment_contig: str = segment.reference_name

            if segment_contig != contig:
                if segment_contig in seen_contigs:
                    raise InputError(
                        f"Encountered reads from contig {segment_contig} after reads from other contigs; alignment "
                        f"file '{read_file}' must be sorted by coordinate")

                if positions:
                    yield contig, tally_five_prime_ends(positions, a0_positions)

                seen_contigs.add(segment_contig)
                contig = segment_contig
                positions = []
                a0_positions = []

            pos = five_prime_position(segment)
            positions.append(pos)
            if has_additional_g(segment):
                a0_positions.append(pos)

    if positions:
        yield contig, tally_five_prime_ends(positions, a0_positions)


def iter_strand_records(
    read_file: str,
    reference_file: str,
    chrom_sizes: dict[str, int],
    strand: Strand,
    min_mapq: int,
    logger: logging.Logger,
) -> Iterator[PerBaseRecord]:
    """
    Build per-base records for one strand in ascending coordinate order: counts from the alignment file, zero-count
    padding around runs of counted bases, and reference bases (from the forward strand of the reference.)
    Contigs which are missing from the chromosome size table are skipped.
    """

    with pysam.FastaFile(reference_file) as ref:
        ref_contigs = set(ref.references)

        for contig, counts in collect_strand_counts(read_file, strand, min_mapq, reference_file):
            chrom_len = chrom_sizes.get(contig)
            if chrom_len is None:
                logger.warning(f"Skipping contig {contig} ({strand}): not in chromosome size table")
                continue

            if contig not in ref_contigs:
                raise InputError(f"Contig {contig} not found in reference genome '{reference_file}'")

            logger.debug(f"Collected {len(counts)} read 5' end positions on {contig} ({strand})")

            for block in pad_runs(counts, chrom_len):
                block_start = block[0][0]
                block_end = block[-1][0] + 1
                seq: str = ref.fetch(contig, block_start, block_end).upper()

                if len(seq) != len(block):
                    raise InputError(
                        f"Could not fetch reference sequence for {contig}:{block_start}-{block_end}; does the "
                        f"chromosome size table match the reference genome?")

                for (pos, x, a0), nuc in zip(block, seq):
                    yield PerBaseRecord(contig, pos, pos + 1, x, a0, nuc)
