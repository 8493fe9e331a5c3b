"""Global abbreviation matching.

A global abbreviation can end the line anywhere, e.g. the ``L`` in
``git log --oneline L``. The matcher tries ever shorter trailing word
windows of the buffer, dropping one leading word at a time.

Words are split on single spaces, so runs of spaces produce empty words
and the window keeps the original spacing when rejoined. This is coarser
than the whitespace handling of the abbreviation storage itself, which
trims surrounding whitespace; leading or trailing spaces inside a
window are therefore significant here.
"""

import logging

from abbrlight.constants import GLOBAL_ALIAS
from abbrlight.spans import HighlightSpan, StyleLookup

logger = logging.getLogger(__name__)


def match_global(buffer: str, table, resolve_style: StyleLookup) -> HighlightSpan | None:
    """Find a global abbreviation at the end of ``buffer``.

    Args:
        buffer: The line being edited.
        table: Anything with ``is_global_abbreviation(text)``.
        resolve_style: Maps a role tag to a style.

    Returns:
        A global-alias span ending at ``len(buffer)``, or None.
    """
    if not buffer.split():
        return None

    words = buffer.split(" ")
    candidate = buffer
    index = 0
    while not table.is_global_abbreviation(candidate):
        index += 1
        if index >= len(words):
            return None
        candidate = " ".join(words[index:])

    logger.debug("Global abbreviation %r after dropping %d word(s)", candidate, index)
    return HighlightSpan(len(buffer) - len(candidate), len(buffer), resolve_style(GLOBAL_ALIAS))
