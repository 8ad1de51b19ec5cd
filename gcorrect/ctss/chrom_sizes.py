from pathlib import Path

from gcorrect.exceptions import InputError

__all__ = [
    "load_chrom_sizes",
]


def _line_filter_fn(s: str) -> bool:
    """
    Filter function to skip blank lines and comments
    :param s: line of a file
    :return: whether the line is not blank and is not a comment
    """
    return bool(s) and not s.startswith("#")


def load_chrom_sizes(chrom_sizes_path: str | Path) -> dict[str, int]:
    # Same format as used by BEDtools: <contig name>\t<length>[\t...]

    res: dict[str, int] = {}

    with open(chrom_sizes_path, "r") as cf:
        for line_no, line in enumerate(map(str.strip, cf), 1):
            if not _line_filter_fn(line):
                continue

            ls = line.split("\t")
            if len(ls) < 2:
                raise InputError(f"Chromosome size table: expected 2 columns on line {line_no}, got '{line}'")

            contig, length = ls[:2]

            try:
                res[contig] = int(length)
            except ValueError:
                raise InputError(f"Chromosome size table: invalid length for '{contig}' on line {line_no}: {length}")

            if res[contig] < 0:
                raise InputError(f"Chromosome size table: negative length for '{contig}' on line {line_no}")

    return res
