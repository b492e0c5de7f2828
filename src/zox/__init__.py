"""Jump to frecently visited directories."""

__version__ = "0.1.0"
