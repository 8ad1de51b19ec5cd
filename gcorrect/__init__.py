from pathlib import Path

__all__ = [
    "__version__",
]

__version__: str = (Path(__file__).parent / "VERSION").read_text().strip()
