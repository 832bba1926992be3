"""
Styled line output for decoded fields.

Lines are written to a binary stream so names and values reach the
terminal byte-for-byte, including bytes that are not valid UTF-8.
Colour escapes come from rich styles and are only emitted when a colour
system has been detected for the stream.
"""

import logging
from typing import BinaryIO, Optional, TextIO, Union

from rich.color import ColorSystem
from rich.console import COLOR_SYSTEMS, Console
from rich.style import Style

from .config import ColorMode
from .errors import OutputWriteError
from .records import Field


logger = logging.getLogger(__name__)

KEY_STYLE = Style(color="green")
EQUALS_STYLE = Style(color="blue")
VALUE_STYLE = Style()

ENCODING = "utf-8"
ERRORS = "surrogateescape"


def detect_color_system(mode: ColorMode, stream: Optional[TextIO] = None) -> Optional[ColorSystem]:
    """
    Decide which colour system to render with for an output stream.

    Args:
        mode: auto, always or never
        stream: Text stream the bytes end up on (stdout by default)

    Returns:
        A rich ColorSystem, or None for plain output
    """
    if mode is ColorMode.NEVER:
        return None

    force = mode is ColorMode.ALWAYS
    console = Console(file=stream, force_terminal=True if force else None)

    if console.no_color and not force:
        return None

    name = console.color_system
    if name is None:
        return ColorSystem.STANDARD if force else None

    return COLOR_SYSTEMS[name]


def render(data: Union[bytes, memoryview], style: Style, color_system: ColorSystem) -> bytes:
    """Wrap raw bytes in the style's escape sequences without altering them."""
    text = str(data, ENCODING, ERRORS)
    return style.render(text, color_system=color_system).encode(ENCODING, ERRORS)


class StyledWriter:
    """
    Binary output sink that understands styles.

    Broken pipes propagate unchanged so the caller can stop quietly;
    any other OSError is reported as OutputWriteError.
    """

    def __init__(self, stream: BinaryIO, color_system: Optional[ColorSystem] = None):
        self.stream = stream
        self.color_system = color_system

    @property
    def styled(self) -> bool:
        return self.color_system is not None

    def write(self, data: Union[bytes, memoryview], style: Optional[Style] = None) -> None:
        if style is not None and self.styled and data:
            data = render(data, style, self.color_system)
        try:
            self.stream.write(data)
        except BrokenPipeError:
            raise
        except OSError as exc:
            raise OutputWriteError(f"failed to write output: {exc}") from exc

    def flush(self) -> None:
        try:
            self.stream.flush()
        except BrokenPipeError:
            raise
        except OSError as exc:
            raise OutputWriteError(f"failed to flush output: {exc}") from exc


def format_field(writer: StyledWriter, field: Field) -> None:
    """
    Write one field as NAME=VALUE followed by a newline.

    An empty value writes nothing between '=' and the newline.
    """
    writer.write(field.name, KEY_STYLE)
    writer.write(b"=", EQUALS_STYLE)
    value = field.value
    if value:
        writer.write(value, VALUE_STYLE)
    writer.write(b"\n")
