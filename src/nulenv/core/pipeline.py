"""
Drives the split -> decode -> sort -> filter -> format pipeline.
"""

import logging

from .formatter import StyledWriter, format_field
from .patterns import PatternSet
from .records import iter_fields, sort_fields


logger = logging.getLogger(__name__)


def print_env(
    buffer: bytes,
    writer: StyledWriter,
    patterns: PatternSet,
    sort: bool = False,
) -> int:
    """
    Pretty-print every matching record of a NUL-separated dump.

    Without sorting the buffer is streamed one record at a time. Sorting
    has to see every field first, so the fields are collected into a list
    of spans (the bytes themselves are not copied).

    Args:
        buffer: Raw dump contents
        writer: Output sink
        patterns: Compiled name filter
        sort: Order fields by name (stable)

    Returns:
        Number of lines written

    Raises:
        OutputWriteError: If the sink rejects a write
        BrokenPipeError: If the reader went away
    """
    fields = iter_fields(buffer)
    if sort:
        fields = sort_fields(fields)

    written = 0
    for field in fields:
        if not patterns.is_match(field.name):
            continue
        format_field(writer, field)
        written += 1

    writer.flush()
    logger.debug("wrote %d record(s)", written)
    return written
