"""rdt: natural-language Reddit search from the terminal."""

__version__ = "0.1.0"
