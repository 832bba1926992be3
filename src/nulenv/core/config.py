"""
Runtime settings gathered from the command line and environment.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List


ENV_PREFIX = "NULENV"
PROC_ENVIRON_TEMPLATE = "/proc/{pid}/environ"


class ColorMode(Enum):
    """When to colour output."""
    AUTO = "auto"
    ALWAYS = "always"
    NEVER = "never"


@dataclass
class Settings:
    """Everything the pipeline needs besides the input buffer."""
    patterns: List[str] = field(default_factory=list)
    use_glob: bool = False
    case_sensitive: bool = False
    sort: bool = False
    color: ColorMode = ColorMode.AUTO
    verbose: bool = False
