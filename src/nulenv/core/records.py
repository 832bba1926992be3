"""
Zero-copy parsing of NUL-separated NAME=VALUE dumps.

Records and fields are index pairs into the immutable input buffer.
Names and values are handed out as memoryview slices of that buffer, so
no bytes are copied on the way from input to output.
"""

from dataclasses import dataclass
from typing import Iterable, Iterator, List, NamedTuple, Optional


NUL = b"\0"
EQUALS = b"="


class Span(NamedTuple):
    """Half-open byte range [start, end) of a buffer."""
    start: int
    end: int

    @property
    def length(self) -> int:
        return self.end - self.start


@dataclass(frozen=True)
class Field:
    """A decoded record: name and value spans over a view of the shared buffer."""
    view: memoryview
    name_span: Span
    value_span: Span

    @property
    def buffer(self) -> bytes:
        return self.view.obj

    @property
    def name(self) -> memoryview:
        return self.view[self.name_span.start:self.name_span.end]

    @property
    def value(self) -> memoryview:
        return self.view[self.value_span.start:self.value_span.end]

    def __repr__(self):
        return f"Field({bytes(self.name)!r}={bytes(self.value)!r})"


def split_records(buffer: bytes) -> Iterator[Span]:
    """
    Lazily split a buffer on NUL bytes.

    Leading and doubled NULs produce empty spans. A final NUL terminates
    the last record rather than opening an empty one, so b"a=1\\0" yields
    a single span.

    Args:
        buffer: Raw input bytes

    Yields:
        Span for each record, in buffer order
    """
    start = 0
    size = len(buffer)

    while start < size:
        end = buffer.find(NUL, start)
        if end == -1:
            yield Span(start, size)
            return
        yield Span(start, end)
        start = end + 1


def decode_record(buffer: bytes, record: Span, view: Optional[memoryview] = None) -> Field:
    """
    Split a record at its first '='.

    A record without '=' is all name with an empty value.

    Args:
        buffer: Buffer the record was split from
        record: Span of a non-empty record
        view: Existing memoryview of buffer to share between fields

    Returns:
        Field pointing into the same buffer
    """
    if view is None:
        view = memoryview(buffer)

    pos = buffer.find(EQUALS, record.start, record.end)
    if pos == -1:
        return Field(view, record, Span(record.end, record.end))

    return Field(view, Span(record.start, pos), Span(pos + 1, record.end))


def iter_fields(buffer: bytes) -> Iterator[Field]:
    """Yield a Field for every non-empty record in the buffer."""
    view = memoryview(buffer)
    for record in split_records(buffer):
        if record.start == record.end:
            continue
        yield decode_record(buffer, record, view)


def sort_fields(fields: Iterable[Field]) -> List[Field]:
    """
    Stable sort by byte-lexicographic name; duplicates keep input order.

    The sort key is the only place a name is copied out of the buffer.
    """
    return sorted(fields, key=lambda field: bytes(field.name))
