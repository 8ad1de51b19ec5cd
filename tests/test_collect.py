import logging
import pytest

from gcorrect.ctss.chrom_sizes import load_chrom_sizes
from gcorrect.ctss.collect import (
    collect_strand_counts,
    five_prime_position,
    has_additional_g,
    iter_strand_records,
    skip_segment,
    tally_five_prime_ends,
)
from gcorrect.ctss.types import PerBaseRecord
from gcorrect.exceptions import InputError

from .conftest import CHR1_SEQ, FLAG_REVERSE, FLAG_SECONDARY, make_segment


@pytest.mark.parametrize("cigar,seq,flag,result", [
    ("1S9M", "GACGTACGTA", 0, True),
    ("1S9M", "gACGTACGTA", 0, True),
    ("1S9M", "AACGTACGTA", 0, False),
    ("2S8M", "AGCGTACGTA", 0, True),  # clipped base next to the alignment
    ("2S8M", "GACGTACGTA", 0, False),
    ("10M", "GACGTACGTA", 0, False),
    ("9M1S", "ACGTACGTAG", 0, False),  # 3' clip of a forward read
    ("9M1S", "ACGTACGTAC", FLAG_REVERSE, True),
    ("8M2S", "ACGTACGTCA", FLAG_REVERSE, True),
    ("8M2S", "ACGTACGTAC", FLAG_REVERSE, False),
    ("1S9M", "GACGTACGTA", FLAG_REVERSE, False),
])
def test_has_additional_g(cigar: str, seq: str, flag: int, result: bool):
    assert has_additional_g(make_segment(0, 100, cigar, seq, flag=flag)) == result


def test_five_prime_position():
    assert five_prime_position(make_segment(0, 100, "1S9M", "GACGTACGTA")) == 100
    assert five_prime_position(make_segment(0, 100, "9M1S", "ACGTACGTAC", flag=FLAG_REVERSE)) == 108
    assert five_prime_position(make_segment(0, 100, "3M2D4M", "ACGTACG", flag=FLAG_REVERSE)) == 108


def test_skip_segment():
    assert not skip_segment(make_segment(0, 100, "10M", "ACGTACGTAC", mapq=20), 20)
    assert skip_segment(make_segment(0, 100, "10M", "ACGTACGTAC", mapq=19), 20)
    assert skip_segment(make_segment(0, 100, "10M", "ACGTACGTAC", flag=FLAG_SECONDARY), 20)
    assert skip_segment(make_segment(0, 100, "10M", "ACGTACGTAC", flag=4), 0)


def test_tally_five_prime_ends():
    assert tally_five_prime_ends([5, 3, 5, 5, 9], [5, 9, 5]) == [(3, 1, 0), (5, 3, 2), (9, 1, 1)]
    assert tally_five_prime_ends([7, 7], []) == [(7, 2, 0)]


def test_collect_strand_counts(cage_files):
    plus = list(collect_strand_counts(cage_files["read_file"], "+", 20))
    assert plus == [
        ("chr1", [(12, 2, 0), (13, 4, 2), (14, 3, 0), (16, 1, 0)]),
        ("chr2", [(5, 1, 0)]),
    ]

    minus = list(collect_strand_counts(cage_files["read_file"], "-", 20))
    assert minus == [("chr1", [(29, 1, 0)])]

    # with no MAPQ threshold, the low-quality read is counted (but the secondary alignment still is not)
    plus_all = dict(collect_strand_counts(cage_files["read_file"], "+", 0))
    assert plus_all["chr1"][0] == (12, 3, 0)


def test_iter_strand_records(cage_files):
    chrom_sizes = load_chrom_sizes(cage_files["chrom_sizes_file"])
    logger = logging.getLogger("gcorrect-test")

    plus = list(iter_strand_records(
        cage_files["read_file"], cage_files["reference_file"], chrom_sizes, "+", 20, logger))

    assert plus == [
        PerBaseRecord("chr1", 11, 12, 0, 0, "T"),
        PerBaseRecord("chr1", 12, 13, 2, 0, "A"),
        PerBaseRecord("chr1", 13, 14, 4, 2, "G"),
        PerBaseRecord("chr1", 14, 15, 3, 0, "G"),
        PerBaseRecord("chr1", 15, 16, 0, 0, "G"),
        PerBaseRecord("chr1", 16, 17, 1, 0, "C"),
        PerBaseRecord("chr1", 17, 18, 0, 0, "A"),
    ]

    minus = list(iter_strand_records(
        cage_files["read_file"], cage_files["reference_file"], chrom_sizes, "-", 20, logger))

    # bases from the forward strand of the reference
    assert [(r.start, r.x, r.nuc) for r in minus] == [(28, 0, CHR1_SEQ[28]), (29, 1, "C"), (30, 0, "A")]


def test_iter_strand_records_missing_reference_contig(cage_files):
    chrom_sizes = {"chr1": len(CHR1_SEQ), "chr2": 20}
    with pytest.raises(InputError):
        list(iter_strand_records(
            cage_files["read_file"],
            cage_files["reference_file"],
            chrom_sizes,
            "+",
            20,
            logging.getLogger("gcorrect-test"),
        ))
