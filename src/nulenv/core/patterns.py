r"""
Name filtering with glob and regex pattern sets.

A PatternSet is compiled once from the user's patterns and is read-only
afterwards:
- no patterns: every name matches
- glob mode: shell-style wildcards, anchored to the whole name
- regex mode: Unicode regexes, matched anywhere in the name

Example:
    >>> patterns = PatternSet.build(["LC_*", "{HOME,PATH}"], glob=True)
    >>> patterns.is_match(b"lc_all")
    True
    >>> PatternSet.build([r"^X"]).is_match(b"XDG_RUNTIME_DIR")
    True
"""

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Tuple, Union

from .errors import PatternCompilationError


logger = logging.getLogger(__name__)

# Names are arbitrary bytes. Patterns see them through surrogateescape:
# valid UTF-8 sequences are one character each and every undecodable
# byte is still one character for "?" or ".".
TEXT_ENCODING = "utf-8"
TEXT_ERRORS = "surrogateescape"


class PatternKind(Enum):
    """Matcher variants."""
    MATCH_ALL = "match_all"
    GLOB = "glob"
    REGEX = "regex"


class GlobSyntaxError(ValueError):
    """Raised by translate_glob for a malformed glob."""


def _class_char(char: str) -> str:
    return re.escape(char)


def _translate_class(pattern: str, i: int) -> Tuple[str, int]:
    """Translate a [...] class starting just after '['. Returns (regex, next index)."""
    n = len(pattern)
    negated = False
    if i < n and pattern[i] in "!^":
        negated = True
        i += 1

    items = []
    first = True
    while True:
        if i >= n:
            raise GlobSyntaxError("unclosed character class; missing ']'")
        char = pattern[i]
        i += 1

        # ']' right after the opening bracket is a literal member
        if char == "]" and not first:
            break
        first = False

        if i + 1 < n and pattern[i] == "-" and pattern[i + 1] != "]":
            end = pattern[i + 1]
            i += 2
            if end < char:
                raise GlobSyntaxError(f"invalid range; '{char}' > '{end}'")
            items.append(f"{_class_char(char)}-{_class_char(end)}")
        else:
            items.append(_class_char(char))

    prefix = "^" if negated else ""
    return f"[{prefix}{''.join(items)}]", i


def translate_glob(pattern: str) -> str:
    """
    Translate a glob into an (unanchored) regular expression.

    Supported syntax: '*', '?', '[abc]', '[a-z]', '[!x]' or '[^x]',
    '{a,b}' alternation and '\\' escapes. '*' also matches '/'.

    Args:
        pattern: Glob pattern

    Returns:
        Regex source string

    Raises:
        GlobSyntaxError: If the glob is malformed
    """
    parts = []
    in_group = False
    i = 0
    n = len(pattern)

    while i < n:
        char = pattern[i]
        i += 1

        if char == "\\":
            if i >= n:
                raise GlobSyntaxError("dangling '\\'")
            parts.append(re.escape(pattern[i]))
            i += 1
        elif char == "*":
            while i < n and pattern[i] == "*":
                i += 1
            parts.append(".*")
        elif char == "?":
            parts.append(".")
        elif char == "[":
            class_regex, i = _translate_class(pattern, i)
            parts.append(class_regex)
        elif char == "{":
            if in_group:
                raise GlobSyntaxError("nested alternate groups are not allowed")
            in_group = True
            parts.append("(?:")
        elif char == "}":
            if not in_group:
                raise GlobSyntaxError("unopened alternate group; missing '{'")
            in_group = False
            parts.append(")")
        elif char == "," and in_group:
            parts.append("|")
        else:
            parts.append(re.escape(char))

    if in_group:
        raise GlobSyntaxError("unclosed alternate group; missing '}'")

    return "".join(parts)


def _compile_globs(patterns: Tuple[str, ...], flags: int) -> re.Pattern:
    translated = []
    for pattern in patterns:
        try:
            translated.append(translate_glob(pattern))
        except GlobSyntaxError as exc:
            raise PatternCompilationError(pattern, str(exc), kind="glob") from exc

    combined = "|".join(f"(?:{source})" for source in translated)
    return re.compile(combined, flags | re.DOTALL)


def _compile_regexes(patterns: Tuple[str, ...], flags: int) -> Tuple[re.Pattern, ...]:
    compiled = []
    for pattern in patterns:
        try:
            compiled.append(re.compile(pattern, flags))
        except re.error as exc:
            raise PatternCompilationError(pattern, exc.msg, kind="regex") from exc
    return tuple(compiled)


@dataclass(frozen=True)
class PatternSet:
    """Compiled, immutable name filter."""
    kind: PatternKind
    patterns: Tuple[str, ...] = ()
    compiled: Tuple[re.Pattern, ...] = ()
    case_sensitive: bool = False

    @classmethod
    def build(
        cls,
        patterns: Iterable[str] = (),
        glob: bool = False,
        case_sensitive: bool = False,
    ) -> "PatternSet":
        """
        Compile user patterns into a PatternSet.

        Args:
            patterns: Pattern strings; empty means match everything
            glob: Treat patterns as globs instead of regexes
            case_sensitive: Match case exactly

        Returns:
            PatternSet ready for is_match()

        Raises:
            PatternCompilationError: Naming the first invalid pattern
        """
        patterns = tuple(patterns)
        if not patterns:
            logger.debug("no patterns given, matching every name")
            return cls(PatternKind.MATCH_ALL)

        flags = 0 if case_sensitive else re.IGNORECASE

        if glob:
            compiled = (_compile_globs(patterns, flags),)
            kind = PatternKind.GLOB
        else:
            compiled = _compile_regexes(patterns, flags)
            kind = PatternKind.REGEX

        logger.debug(
            "compiled %d %s pattern(s) (case %s)",
            len(patterns),
            kind.value,
            "sensitive" if case_sensitive else "insensitive",
        )
        return cls(kind, patterns, compiled, case_sensitive)

    def is_match(self, name: Union[bytes, memoryview]) -> bool:
        """True if the name matches at least one pattern."""
        if self.kind is PatternKind.MATCH_ALL:
            return True

        text = str(name, TEXT_ENCODING, TEXT_ERRORS)
        if self.kind is PatternKind.GLOB:
            return self.compiled[0].fullmatch(text) is not None

        return any(regex.search(text) is not None for regex in self.compiled)
