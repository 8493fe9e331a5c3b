"""Generic command-line highlighter.

Used for buffers that are not regular abbreviations. Parses the line
with bashlex and highlights the command word of every simple command
(including each stage of a pipeline or list) as a function, a command,
or an unknown token. Everything else is left unhighlighted.
"""

import logging

import bashlex

from abbrlight.constants import COMMAND, FUNCTION, UNKNOWN_TOKEN
from abbrlight.spans import HighlightSpan, StyleLookup

logger = logging.getLogger(__name__)


class BashlexHighlighter:
    """Callable highlighter: ``highlighter(buffer) -> list[HighlightSpan]``."""

    def __init__(self, functions, commands, resolve_style: StyleLookup):
        self.functions = functions
        self.commands = commands
        self.resolve_style = resolve_style

    def __call__(self, buffer: str) -> list[HighlightSpan]:
        if not buffer.strip():
            return []
        try:
            parts = bashlex.parse(buffer)
        except Exception:
            logger.debug("bashlex parse failed for buffer: %s", buffer)
            return []

        spans: list[HighlightSpan] = []
        self._walk(parts, spans)
        spans.sort(key=lambda s: s.start)
        return spans

    def _tag_for(self, word: str) -> str:
        if self.functions.is_known_function(word):
            return FUNCTION
        if self.commands.is_known_command(word):
            return COMMAND
        return UNKNOWN_TOKEN

    def _walk(self, nodes, spans: list[HighlightSpan]) -> None:
        """Collect command-word spans from AST nodes."""
        for node in nodes:
            if node.kind == "command":
                # First word-kind part, skipping inline assignments and redirects
                first_word = next(
                    (p for p in node.parts if p.kind == "word"), None
                )
                if first_word is not None:
                    start, end = first_word.pos
                    spans.append(HighlightSpan(
                        start, end, self.resolve_style(self._tag_for(first_word.word)),
                    ))
                # Command substitutions inside arguments hold commands too
                for part in node.parts:
                    if getattr(part, "parts", None):
                        self._walk(part.parts, spans)

            elif node.kind == "compound":
                self._walk(node.list, spans)

            elif hasattr(node, "parts") and node.parts:
                # pipeline, list, if/while/for/function bodies, substitutions
                self._walk(node.parts, spans)

            elif getattr(node, "command", None) is not None:
                # commandsubstitution / processsubstitution nodes
                self._walk([node.command], spans)
