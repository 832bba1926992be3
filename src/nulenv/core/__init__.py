"""
nulenv core modules.

Includes:
- records: NUL splitting and NAME=VALUE decoding
- patterns: Glob and regex name filters
- formatter: Styled line output
- pipeline: The print_env driver
- source: Reading files, stdin and /proc/<pid>/environ
- config: Runtime settings
- errors: Exception hierarchy
"""

from . import errors
from . import config
from . import records
from . import patterns
from . import formatter
from . import pipeline
from . import source

__all__ = [
    "errors",
    "config",
    "records",
    "patterns",
    "formatter",
    "pipeline",
    "source",
]
