__all__ = [
    "DEFAULT_G_ADDITION_RATIO",
    "DEFAULT_MIN_MAPQ",
    "STRAND_PLUS",
    "STRAND_MINUS",
    "STRANDS",
    "STATE_OTHER",
    "STATE_START",
    "STATE_GENERAL",
    "STATE_END",
    "STATES",
    "ADDITIONAL_BASE",
]

# Chance of a true CAGE tag acquiring an additional G; Nature Genet. 38:626-35, supplementary note 3e.
DEFAULT_G_ADDITION_RATIO: float = 0.8935878

DEFAULT_MIN_MAPQ: int = 20

STRAND_PLUS = "+"
STRAND_MINUS = "-"
STRANDS: tuple[str, str] = (STRAND_PLUS, STRAND_MINUS)

# Correction states, e.g. for the reference HHHGGGHH (H: any non-G base):
STATE_OTHER = "O"  # 1st-3rd and 8th base
STATE_START = "S"  # 4th base
STATE_GENERAL = "G"  # 5th and 6th base
STATE_END = "E"  # 7th base
STATES: tuple[str, ...] = (STATE_OTHER, STATE_START, STATE_GENERAL, STATE_END)

ADDITIONAL_BASE = "G"
