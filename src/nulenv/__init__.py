"""
nulenv - Pretty-printer for NUL-separated NAME=VALUE dumps

Reads files such as /proc/<pid>/environ and prints one coloured
NAME=VALUE line per record, optionally filtered and sorted by name.
"""

__version__ = "0.1.0"

from .core import records, patterns, formatter, pipeline

__all__ = [
    "records",
    "patterns",
    "formatter",
    "pipeline",
]
