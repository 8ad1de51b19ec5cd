from .bed import output_bed
from .json_report import output_json_report

__all__ = [
    "output_bed",
    "output_json_report",
]
