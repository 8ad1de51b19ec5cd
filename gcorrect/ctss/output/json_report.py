import sys
from datetime import timedelta

from gcorrect import __version__
from gcorrect.json import Serializable, dumps, dumps_indented

from ..params import CorrectionParams

__all__ = [
    "output_json_report",
]


def _write_bytes(b: bytes, json_path: str):
    if json_path == "stdout":
        sys.stdout.buffer.write(b)
        sys.stdout.flush()
    else:
        with open(json_path, "wb") as jf:
            # noinspection PyTypeChecker
            jf.write(b)


def output_json_report(
    params: CorrectionParams,
    summary: dict[str, Serializable],
    time_taken: timedelta,
    json_path: str,
    indent_json: bool,
):
    report = {
        "program": {
            "name": "gcorrect",
            "version": __version__,
        },
        "parameters": params.to_dict(),
        "strands": summary,
        "runtime": time_taken.total_seconds(),
    }
    _write_bytes((dumps_indented if indent_json else dumps)(report) + b"\n", json_path)
