__all__ = [
    "ParamError",
    "InputError",
]


class ParamError(ValueError):
    """Invalid configuration, detected before any processing starts."""
    pass


class InputError(ValueError):
    """Malformed or inconsistent data received from an input file or an upstream stage."""
    pass
