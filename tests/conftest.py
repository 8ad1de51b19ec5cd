import pysam
import pytest

# 0-based:         0         1         2         3
#                  0123456789012345678901234567890123456789
CHR1_SEQ: str = "ACGTACGTACTTAGGGCATTACGTACGTACACGTACGTAC"
CHR2_SEQ: str = "GGGGGGGGGGGGGGGGGGGG"

FLAG_REVERSE = 16
FLAG_SECONDARY = 256


def make_segment(
    tid: int,
    start: int,
    cigar: str,
    seq: str,
    flag: int = 0,
    mapq: int = 60,
    name: str = "read",
) -> pysam.AlignedSegment:
    segment = pysam.AlignedSegment()
    segment.query_name = name
    segment.query_sequence = seq
    segment.flag = flag
    segment.reference_id = tid
    segment.reference_start = start
    segment.mapping_quality = mapq
    segment.cigarstring = cigar
    return segment


def _plus_reads() -> list[pysam.AlignedSegment]:
    reads = []

    # 5' ends at 12: 2 reads, plus one low-MAPQ read and one secondary alignment which should not be counted
    reads.extend(make_segment(0, 12, "10M", CHR1_SEQ[12:22]) for _ in range(2))
    reads.append(make_segment(0, 12, "10M", CHR1_SEQ[12:22], mapq=5))
    reads.append(make_segment(0, 12, "10M", CHR1_SEQ[12:22], flag=FLAG_SECONDARY))

    # 5' ends at 13: 4 reads, 2 of which have a soft-clipped additional G
    reads.extend(make_segment(0, 13, "10M", CHR1_SEQ[13:23]) for _ in range(2))
    reads.extend(make_segment(0, 13, "1S10M", "G" + CHR1_SEQ[13:23]) for _ in range(2))

    # 5' ends at 14: 3 reads; at 16: 1 read
    reads.extend(make_segment(0, 14, "10M", CHR1_SEQ[14:24]) for _ in range(3))
    reads.append(make_segment(0, 16, "10M", CHR1_SEQ[16:26]))

    return reads


@pytest.fixture
def cage_files(tmp_path):
    ref_path = tmp_path / "ref.fa"
    with open(ref_path, "w") as fh:
        fh.write(f">chr1\n{CHR1_SEQ}\n")
    pysam.faidx(str(ref_path))

    chrom_sizes_path = tmp_path / "genome.chrom.sizes"
    with open(chrom_sizes_path, "w") as fh:
        fh.write(f"chr1\t{len(CHR1_SEQ)}\n")

    reads = _plus_reads()
    # reverse read ending at 30 -> 5' end at 29
    reads.append(make_segment(0, 21, "9M", CHR1_SEQ[21:30], flag=FLAG_REVERSE))
    # contig which is absent from the chromosome size table and the reference
    reads.append(make_segment(1, 5, "5M", CHR2_SEQ[5:10]))

    header = {
        "HD": {"VN": "1.6", "SO": "coordinate"},
        "SQ": [{"SN": "chr1", "LN": len(CHR1_SEQ)}, {"SN": "chr2", "LN": len(CHR2_SEQ)}],
    }

    bam_path = tmp_path / "reads.bam"
    with pysam.AlignmentFile(str(bam_path), "wb", header=header) as bf:
        for i, r in enumerate(reads):
            r.query_name = f"read{i}"
            bf.write(r)

    return {
        "read_file": str(bam_path),
        "reference_file": str(ref_path),
        "chrom_sizes_file": str(chrom_sizes_path),
    }
