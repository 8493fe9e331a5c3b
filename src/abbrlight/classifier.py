"""Command-grammar classifier for regular abbreviations.

Breaks an abbreviation's literal text into roles by reading it as a tiny
command line::

    [sudo] (function|command) [subcommand [argument]] [-opt|--opt]

A one-word abbreviation is highlighted as an alias. Whenever the words do
not fit the grammar exactly, the whole text is highlighted as a single
alias span instead. Nothing is committed until the walk succeeds.
"""

import logging

from abbrlight.config import (
    get_argument_max_length,
    get_subcmd_max_length,
    normalize_limit,
)
from abbrlight.constants import (
    ALIAS,
    COMMAND,
    DEFAULT_ARGUMENT_MAX_LENGTH,
    DEFAULT_SUBCMD_MAX_LENGTH,
    DOUBLE_HYPHEN_OPTION,
    DOUBLE_HYPHEN_OPTION_RE,
    FUNCTION,
    LETTERS_RE,
    PRECOMMAND,
    PRECOMMAND_WORD,
    SINGLE_HYPHEN_OPTION,
    SINGLE_HYPHEN_OPTION_RE,
    SUBCOMMAND,
)
from abbrlight.spans import HighlightSpan, StyleLookup, locate_tokens, make_span

logger = logging.getLogger(__name__)


def _is_short_word(word: str | None, max_length: int) -> bool:
    return word is not None and len(word) <= max_length and bool(LETTERS_RE.match(word))


def tokenize(text: str) -> list[str]:
    """Split on whitespace runs."""
    return text.split()


def walk_grammar(
    words: list[str],
    functions,
    commands,
    subcmd_max_length: int,
    argument_max_length: int,
) -> list[str] | None:
    """Assign a role tag to every word.

    Args:
        words: Tokens of the abbreviation.
        functions: Anything with ``is_known_function(name)``.
        commands: Anything with ``is_known_command(name)``.
        subcmd_max_length: Validated subcommand letter limit.
        argument_max_length: Validated argument letter limit.

    Returns:
        One tag per word, or None if the words don't fit the grammar.
    """
    tags: list[str] = []
    index = 0

    def current() -> str | None:
        return words[index] if index < len(words) else None

    if current() == PRECOMMAND_WORD:
        tags.append(PRECOMMAND)
        index += 1

    word = current()
    if word is None:
        logger.debug("No command word after precommand in %r", words)
        return None
    if index == len(words) - 1:
        tags.append(ALIAS)
    elif functions.is_known_function(word):
        tags.append(FUNCTION)
    elif commands.is_known_command(word):
        tags.append(COMMAND)
    else:
        logger.debug("Unknown command word %r", word)
        return None
    index += 1

    word = current()
    if _is_short_word(word, subcmd_max_length):
        tags.append(SUBCOMMAND)
        index += 1
        word = current()
        if _is_short_word(word, argument_max_length):
            tags.append(ALIAS)
            index += 1

    word = current()
    if word is not None:
        if SINGLE_HYPHEN_OPTION_RE.match(word):
            tags.append(SINGLE_HYPHEN_OPTION)
            index += 1
        elif DOUBLE_HYPHEN_OPTION_RE.match(word):
            tags.append(DOUBLE_HYPHEN_OPTION)
            index += 1

    if index < len(words):
        logger.debug("Unclassified trailing words %r", words[index:])
        return None
    return tags


def classify(
    buffer: str,
    offset: int,
    functions,
    commands,
    resolve_style: StyleLookup,
    subcmd_max_length=None,
    argument_max_length=None,
) -> list[HighlightSpan]:
    """Highlight ``buffer[offset:]``, the literal text of a regular abbreviation.

    Limits left as None are read from configuration. Explicit limits go
    through the same validation, so 0, negatives or non-numeric values
    fall back to the default.

    Returns:
        One span per word when the grammar matches, otherwise a single
        alias span covering ``[offset, len(buffer))``. Never empty.
    """
    if subcmd_max_length is None:
        subcmd_max_length = get_subcmd_max_length()
    else:
        subcmd_max_length = normalize_limit(subcmd_max_length, DEFAULT_SUBCMD_MAX_LENGTH)
    if argument_max_length is None:
        argument_max_length = get_argument_max_length()
    else:
        argument_max_length = normalize_limit(argument_max_length, DEFAULT_ARGUMENT_MAX_LENGTH)

    text = buffer[offset:]
    fallback = [make_span(text, ALIAS, offset, resolve_style)]

    words = tokenize(text)
    tags = walk_grammar(words, functions, commands, subcmd_max_length, argument_max_length)
    if tags is None:
        return fallback

    return [
        HighlightSpan(start, end, resolve_style(tag))
        for (start, end), tag in zip(locate_tokens(text, words, offset), tags)
    ]
