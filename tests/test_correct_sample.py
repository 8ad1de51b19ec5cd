import logging
import pytest

from gcorrect.ctss.correct_sample import correct_sample, summarize_strand
from gcorrect.ctss.params import CorrectionParams
from gcorrect.ctss.types import CorrectedRecord
from gcorrect.json import json


def _read_bed(path) -> list[list[str]]:
    with open(path, "r") as fh:
        return [line.rstrip("\n").split("\t") for line in fh]


@pytest.mark.parametrize("processes", [1, 2])
def test_correct_sample(cage_files, tmp_path, processes: int):
    params = CorrectionParams(
        logging.getLogger("gcorrect-test"), **cage_files, g_addition_ratio=0.5, processes=processes)

    out_path = tmp_path / "ctss.bed"
    json_path = tmp_path / "report.json"
    correct_sample(params, output_path=str(out_path), json_path=str(json_path))

    lines = _read_bed(out_path)
    assert all(len(ln) == 6 for ln in lines)

    summary = [(ln[1], ln[4], ln[5], ln[3].split(",")[3]) for ln in lines]
    assert summary == [
        ("11", "0", "+", "State:O"),
        ("12", "2", "+", "State:O"),
        ("13", "4", "+", "State:S"),
        ("14", "0", "+", "State:G"),
        ("15", "3", "+", "State:G"),
        ("16", "1", "+", "State:E"),
        ("17", "0", "+", "State:O"),
        # the minus-strand read at 29 is moved one base upstream (in minus-strand terms) by the correction
        ("28", "1", "-", "State:E"),
        ("29", "0", "-", "State:S"),
        ("30", "0", "-", "State:O"),
    ]
    assert lines[2][3] == "X:4.00,A0:2.00,Nuc:G,State:S,A:2.00,N:4.00,U:2.00,F:0.00"
    assert lines[8][3] == "X:1.00,A0:0.00,Nuc:G,State:S,A:0.00,N:0.00,U:0.00,F:1.00"

    with open(json_path, "rb") as fh:
        report = json.loads(fh.read())

    assert report["parameters"]["g_addition_ratio"] == 0.5
    assert report["strands"]["+"] == {
        "bases": 7, "states": {"O": 3, "S": 1, "G": 2, "E": 1}, "reads": 10, "corrected_reads": 10}
    assert report["strands"]["-"] == {
        "bases": 3, "states": {"O": 1, "S": 1, "G": 0, "E": 1}, "reads": 1, "corrected_reads": 1}


def test_summarize_strand():
    s = summarize_strand([
        CorrectedRecord("chr1", 5, 6, 3, 0, "A", "O", 0, 3, 3, 0, "+"),
        CorrectedRecord("chr1", 6, 7, 4, 1, "G", "S", 1, 2.5, 1, 1, "+"),
    ])
    assert s == {"bases": 2, "states": {"O": 1, "S": 1, "G": 0, "E": 0}, "reads": 7, "corrected_reads": 5}
