"""
Exception hierarchy for nulenv.

Only pattern compilation and I/O can fail. Splitting, decoding and
matching always produce a result.
"""


class NulenvError(Exception):
    """Base class for all nulenv errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self):
        return self.message


class PatternCompilationError(NulenvError):
    """A glob or regex pattern could not be compiled."""

    def __init__(self, pattern: str, reason: str, kind: str = "regex"):
        super().__init__(f"invalid {kind} '{pattern}': {reason}")
        self.pattern = pattern
        self.reason = reason
        self.kind = kind


class InputError(NulenvError):
    """The input buffer could not be acquired."""


class OutputWriteError(NulenvError):
    """The output sink rejected a write (other than a broken pipe)."""
