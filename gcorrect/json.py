from pathlib import Path

import numpy as np
import orjson as json


__all__ = [
    "Serializable",
    "json",
    "dumps",
    "dumps_indented",
]


Serializable = dict | list | tuple | str | int | float

_OPTIONS: int = json.OPT_NON_STR_KEYS | json.OPT_SERIALIZE_NUMPY


def _dumps_default(x):
    if isinstance(x, Path):
        return str(x)
    # orjson only serializes C-contiguous arrays by itself
    if isinstance(x, np.ndarray):
        return x.tolist()
    raise TypeError


def dumps(v: Serializable) -> bytes:
    return json.dumps(v, option=_OPTIONS, default=_dumps_default)


def dumps_indented(v: Serializable) -> bytes:
    return json.dumps(v, option=_OPTIONS | json.OPT_INDENT_2, default=_dumps_default)
