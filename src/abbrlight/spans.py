"""Highlight spans and offset helpers shared by the regular and global paths."""

from dataclasses import dataclass
from typing import Callable

# Maps a role tag to a renderable style string
StyleLookup = Callable[[str], str]


@dataclass(frozen=True)
class HighlightSpan:
    """A half-open, 0-based region of the buffer paired with a style."""

    start: int
    end: int
    style: str

    def to_region(self) -> str:
        """Render as a line-editor region entry: ``"start end style"``."""
        return f"{self.start} {self.end} {self.style}"


def make_span(
    snippet: str, tag: str, offset: int, resolve_style: StyleLookup,
) -> HighlightSpan:
    """Build a span covering ``snippet`` placed at ``offset``."""
    return HighlightSpan(offset, offset + len(snippet), resolve_style(tag))


def locate_tokens(text: str, tokens: list[str], offset: int = 0) -> list[tuple[int, int]]:
    """Find the character range of each token inside ``text``.

    Each search starts where the previous token ended, so repeated tokens
    resolve to successive, non-overlapping occurrences.

    Args:
        text: The text the tokens were split from.
        tokens: Tokens in order of appearance.
        offset: Added to every returned position.

    Returns:
        List of (start, end) pairs, one per token.

    Raises:
        ValueError: If a token does not occur after the previous one.
    """
    ranges = []
    cursor = 0
    for token in tokens:
        start = text.index(token, cursor)
        cursor = start + len(token)
        ranges.append((offset + start, offset + cursor))
    return ranges
