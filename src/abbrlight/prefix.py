"""Prefix stripping for regular abbreviations.

A regular abbreviation may be typed after known leading text, e.g.
``sudo gco``. The stripper consumes such prefixes from the front of the
buffer until what remains is a registered regular abbreviation.

Scalar (literal) prefixes are always tried before glob prefixes, each
list in order, and the scan restarts from the first rule after every
consumed prefix. Consumption is greedy and never backtracks.
"""

import logging
import re
from dataclasses import dataclass, field

from abbrlight.constants import PRECOMMAND
from abbrlight.spans import HighlightSpan, StyleLookup, make_span

logger = logging.getLogger(__name__)

LITERAL = "literal"
GLOB = "glob"

# POSIX bracket classes, ASCII ranges as in the C locale
_POSIX_CLASSES = {
    "alnum": "a-zA-Z0-9",
    "alpha": "a-zA-Z",
    "blank": " \\t",
    "cntrl": "\\x00-\\x1f\\x7f",
    "digit": "0-9",
    "graph": "\\x21-\\x7e",
    "lower": "a-z",
    "print": "\\x20-\\x7e",
    "punct": re.escape("!\"#$%&'()*+,-./:;<=>?@[\\]^_`{|}~"),
    "space": " \\t\\n\\r\\f\\v",
    "upper": "A-Z",
    "xdigit": "0-9A-Fa-f",
}


def _translate_bracket(pattern: str, i: int) -> tuple[str, int] | None:
    """Translate the bracket expression whose body starts at ``pattern[i]``.

    Returns the regex character set and the index after the closing
    bracket, or None if the bracket is never closed.
    """
    n = len(pattern)
    negate = i < n and pattern[i] in "!^"
    if negate:
        i += 1
    items: list[str] = []
    first = True
    while i < n:
        c = pattern[i]
        if c == "]" and not first:
            return ("[^%s]" if negate else "[%s]") % "".join(items), i + 1
        first = False
        if c == "[" and pattern.startswith(":", i + 1):
            end = pattern.find(":]", i + 2)
            if end != -1 and pattern[i + 2:end] in _POSIX_CLASSES:
                items.append(_POSIX_CLASSES[pattern[i + 2:end]])
                i = end + 2
                continue
        if c == "-" and items and i + 1 < n and pattern[i + 1] != "]":
            # Range operator between two members
            items.append("-")
            i += 1
            continue
        if c == "\\" and i + 1 < n:
            i += 1
            c = pattern[i]
        items.append(re.escape(c))
        i += 1
    return None


def glob_to_regex(pattern: str) -> str:
    """Translate a shell glob into a regex matching its shortest non-empty prefix.

    Supports ``*``, ``?``, bracket expressions with ``!``/``^`` negation
    and POSIX classes such as ``[[:space:]]``, and backslash escapes.
    Stars are lazy and the end is not anchored, so a single ``match``
    at position 0 finds the shortest match. The trailing lookbehind
    rejects an empty match.
    """
    parts: list[str] = []
    i, n = 0, len(pattern)
    while i < n:
        c = pattern[i]
        i += 1
        if c == "*":
            while i < n and pattern[i] == "*":
                i += 1
            parts.append(".*?")
        elif c == "?":
            parts.append(".")
        elif c == "[":
            bracket = _translate_bracket(pattern, i)
            if bracket is None:
                parts.append(re.escape(c))
            else:
                regex, i = bracket
                parts.append(regex)
        elif c == "\\" and i < n:
            parts.append(re.escape(pattern[i]))
            i += 1
        else:
            parts.append(re.escape(c))
    return "(?:%s)(?<=.)" % "".join(parts)


@dataclass(frozen=True)
class PrefixRule:
    """One prefix rule: a literal string or a shell glob pattern."""

    kind: str      # LITERAL | GLOB
    text: str
    _pattern: re.Pattern | None = field(default=None, init=False, repr=False, compare=False)

    def __post_init__(self):
        if self.kind not in (LITERAL, GLOB):
            raise ValueError(f"Unknown prefix rule kind: {self.kind!r}")
        if self.kind == GLOB:
            try:
                pattern = re.compile(glob_to_regex(self.text), re.DOTALL)
            except re.error as e:
                # e.g. a reversed range like [z-a]; match the text literally
                logger.debug("Invalid glob prefix %r (%s), matching it literally", self.text, e)
                pattern = re.compile("(?:%s)(?<=.)" % re.escape(self.text), re.DOTALL)
            object.__setattr__(self, "_pattern", pattern)


@dataclass
class StripResult:
    """Outcome of a successful prefix strip."""

    span: HighlightSpan | None   # None when nothing was stripped
    consumed: int                # Offset where the abbreviation starts


def build_prefix_rules(scalar_prefixes: list[str], glob_prefixes: list[str]) -> list[PrefixRule]:
    """Build the ordered rule list: every scalar rule, then every glob rule."""
    rules = [PrefixRule(LITERAL, p) for p in scalar_prefixes]
    rules.extend(PrefixRule(GLOB, p) for p in glob_prefixes)
    return rules


def match_prefix(rule: PrefixRule, text: str) -> str | None:
    """Return the part of ``text`` that ``rule`` matches at its start.

    Literal rules match themselves. Glob rules match the shortest
    non-empty leading substring the pattern accepts, the way a shell
    removes the shortest matching prefix.

    Returns:
        The matched prefix, or None if the rule does not match.
    """
    if rule.kind == LITERAL:
        if rule.text and text.startswith(rule.text):
            return rule.text
        return None

    match = rule._pattern.match(text)
    return match.group() if match else None


def strip_prefixes(
    buffer: str,
    table,
    rules: list[PrefixRule],
    resolve_style: StyleLookup,
) -> StripResult | None:
    """Strip known prefixes until the rest of ``buffer`` is a regular abbreviation.

    Args:
        buffer: The line being edited.
        table: Anything with ``is_regular_abbreviation(text)``.
        rules: Ordered prefix rules (see build_prefix_rules).
        resolve_style: Maps a role tag to a style.

    Returns:
        StripResult with an optional precommand span covering all stripped
        prefixes, or None if the buffer is not a regular abbreviation with
        or without prefixes.
    """
    if not buffer.split():
        return None

    cursor = 0
    matched = ""
    while not table.is_regular_abbreviation(buffer[cursor:]):
        rest = buffer[cursor:]
        snippet = None
        for rule in rules:
            snippet = match_prefix(rule, rest)
            if snippet:
                break
        if not snippet:
            return None
        logger.debug("Stripped prefix %r (%s rule %r)", snippet, rule.kind, rule.text)
        matched += snippet
        cursor += len(snippet)

    if not matched:
        return StripResult(span=None, consumed=0)
    return StripResult(span=make_span(matched, PRECOMMAND, 0, resolve_style), consumed=len(matched))
