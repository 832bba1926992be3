"""
Input acquisition: a file, standard input, or a process environment.
"""

import logging
import re
from pathlib import Path
from typing import BinaryIO, Optional

from .config import PROC_ENVIRON_TEMPLATE
from .errors import InputError


logger = logging.getLogger(__name__)

STDIN_MARKER = "-"

# Unsigned 32-bit decimal, optionally with a leading plus sign
PID_RE = re.compile(r"\+?[0-9]+")
MAX_PID = 0xFFFFFFFF


def resolve_path(file: Optional[str], pid: bool = False) -> Optional[Path]:
    """
    Work out where to read from.

    Args:
        file: FILE argument as given, or None
        pid: FILE is a process id

    Returns:
        Path to read, or None for standard input

    Raises:
        InputError: If pid is set and FILE is not a process id
    """
    if pid:
        if file is None or not PID_RE.fullmatch(file):
            raise InputError("failed to parse PID argument as integer")
        number = int(file)
        if number > MAX_PID:
            raise InputError("failed to parse PID argument as integer")
        return Path(PROC_ENVIRON_TEMPLATE.format(pid=number))

    if file is None or file == STDIN_MARKER:
        return None

    return Path(file)


def read_input(path: Optional[Path], stdin: BinaryIO) -> bytes:
    """
    Read the whole input buffer in one go.

    Args:
        path: File to read, or None for stdin
        stdin: Binary standard input stream

    Returns:
        The raw bytes

    Raises:
        InputError: If the source cannot be read
    """
    if path is None:
        try:
            data = stdin.read()
        except OSError as exc:
            raise InputError(f"failed to read stdin: {exc}") from exc
        logger.debug("read %d bytes from stdin", len(data))
        return data

    try:
        data = path.read_bytes()
    except OSError as exc:
        reason = exc.strerror or str(exc)
        raise InputError(f"failed to read {path}: {reason}") from exc

    logger.debug("read %d bytes from %s", len(data), path)
    return data
