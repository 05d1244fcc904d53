"""A minimal shell, small Unix-style tools, and binary-format and constant helpers."""

__version__ = "0.1.0"