"""Highlight orchestration.

For each buffer change the orchestrator first tries the regular
abbreviation pipeline (prefix stripper, then classifier). If the buffer
is a regular abbreviation its spans are the only highlighting. Otherwise
the generic highlighter runs and a global abbreviation at the end of
the buffer, if any, is highlighted on top.

The last processed buffer is remembered so an unchanged buffer is not
recomputed.
"""

import logging
from typing import Callable

from abbrlight.classifier import classify
from abbrlight.config import (
    get_glob_prefixes,
    get_highlight_maxlength,
    get_scalar_prefixes,
)
from abbrlight.global_matcher import match_global
from abbrlight.prefix import PrefixRule, build_prefix_rules, strip_prefixes
from abbrlight.spans import HighlightSpan, StyleLookup

logger = logging.getLogger(__name__)

Highlighter = Callable[[str], list[HighlightSpan]]


def parse_regular_abbr(
    buffer: str,
    table,
    functions,
    commands,
    rules: list[PrefixRule],
    resolve_style: StyleLookup,
    subcmd_max_length=None,
    argument_max_length=None,
) -> list[HighlightSpan] | None:
    """Highlight ``buffer`` as a regular abbreviation.

    Returns:
        Ordered spans (the optional prefix span first), or None if the
        buffer is not a regular abbreviation.
    """
    stripped = strip_prefixes(buffer, table, rules, resolve_style)
    if stripped is None:
        return None

    spans = [stripped.span] if stripped.span is not None else []
    spans.extend(classify(
        buffer,
        stripped.consumed,
        functions,
        commands,
        resolve_style,
        subcmd_max_length=subcmd_max_length,
        argument_max_length=argument_max_length,
    ))
    return spans


class AbbrHighlighter:
    """Per-line-editor highlighting state.

    Args:
        table: Abbreviation table (regular and global membership tests).
        functions: Function registry.
        commands: Command registry.
        resolve_style: Maps a role tag to a style.
        scalar_prefixes: Literal prefixes; read from config if None.
        glob_prefixes: Glob prefixes; read from config if None.
        fallback: Generic highlighter for non-abbreviation buffers.
        max_length: Buffers longer than this get no highlighting;
            read from config if None.
    """

    def __init__(
        self,
        table,
        functions,
        commands,
        resolve_style: StyleLookup,
        scalar_prefixes: list[str] | None = None,
        glob_prefixes: list[str] | None = None,
        fallback: Highlighter | None = None,
        max_length: int | None = None,
    ):
        self.table = table
        self.functions = functions
        self.commands = commands
        self.resolve_style = resolve_style
        self.rules = build_prefix_rules(
            get_scalar_prefixes() if scalar_prefixes is None else scalar_prefixes,
            get_glob_prefixes() if glob_prefixes is None else glob_prefixes,
        )
        self.fallback = fallback
        self.max_length = get_highlight_maxlength() if max_length is None else max_length
        self.last_buffer: str | None = None
        self._last_spans: list[HighlightSpan] = []

    def reset(self) -> None:
        """Forget the last processed buffer."""
        self.last_buffer = None
        self._last_spans = []

    def highlight(self, buffer: str) -> list[HighlightSpan]:
        """Compute the highlight spans for ``buffer``."""
        if self.max_length and len(buffer) > self.max_length:
            return []

        if buffer == self.last_buffer:
            logger.debug("Buffer unchanged, reusing %d span(s)", len(self._last_spans))
            return list(self._last_spans)

        spans = parse_regular_abbr(
            buffer,
            self.table,
            self.functions,
            self.commands,
            self.rules,
            self.resolve_style,
        )
        if spans is None:
            spans = list(self.fallback(buffer)) if self.fallback is not None else []
            global_span = match_global(buffer, self.table, self.resolve_style)
            if global_span is not None:
                spans.append(global_span)

        self.last_buffer = buffer
        self._last_spans = spans
        return list(spans)
