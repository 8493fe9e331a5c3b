"""Abbreviation tables and name registries.

The highlighting engine only ever asks membership questions:
is this text a regular (or global) abbreviation, is this name a user
function, is this name an invokable command. The classes here answer
them from in-memory state, so tests can build them directly.

User abbreviation file format (one per line)::

    abbr "gco"="git checkout"
    abbr -g "L"="| less"

Lines that do not parse are skipped.
"""

import logging
import shlex
import shutil

logger = logging.getLogger(__name__)

_GLOBAL_FLAGS = ("-g", "--global")
_REGULAR_FLAGS = ("-r", "--regular")


class AbbreviationTable:
    """Regular and global abbreviations, each split into session and user sources.

    Either source makes a text an abbreviation.
    """

    def __init__(self):
        self.regular_session: dict[str, str] = {}
        self.regular_user: dict[str, str] = {}
        self.global_session: dict[str, str] = {}
        self.global_user: dict[str, str] = {}

    def add(self, abbr: str, expansion: str = "", global_: bool = False, session: bool = False) -> None:
        """Register an abbreviation."""
        if global_:
            target = self.global_session if session else self.global_user
        else:
            target = self.regular_session if session else self.regular_user
        target[abbr] = expansion

    def is_regular_abbreviation(self, text: str) -> bool:
        return text in self.regular_session or text in self.regular_user

    def is_global_abbreviation(self, text: str) -> bool:
        return text in self.global_session or text in self.global_user

    def __len__(self) -> int:
        return (
            len(self.regular_session)
            + len(self.regular_user)
            + len(self.global_session)
            + len(self.global_user)
        )


def _parse_abbr_line(line: str) -> tuple[str, str, bool] | None:
    """Parse one ``abbr`` line into (abbreviation, expansion, is_global).

    Returns None if the line is not an abbreviation definition.
    """
    try:
        words = shlex.split(line, comments=True)
    except ValueError:
        return None
    if len(words) < 2 or words[0] != "abbr":
        return None

    is_global = False
    definition = None
    for word in words[1:]:
        if word in _GLOBAL_FLAGS:
            is_global = True
        elif word in _REGULAR_FLAGS:
            is_global = False
        elif word.startswith("-") and "=" not in word and definition is None:
            # Other flags (e.g. --session) do not change the table
            continue
        elif definition is None:
            definition = word
        else:
            return None

    if definition is None or "=" not in definition:
        return None
    abbr, _, expansion = definition.partition("=")
    if not abbr:
        return None
    return abbr, expansion, is_global


def load_user_abbreviations(path: str, table: AbbreviationTable | None = None) -> AbbreviationTable:
    """Load user abbreviations from ``path`` into ``table``.

    Args:
        path: Path to the user abbreviation file.
        table: Table to fill. A new one is created if omitted.

    Returns:
        The filled table. If the file can't be read, the table is
        returned unchanged.
    """
    if table is None:
        table = AbbreviationTable()

    try:
        with open(path) as f:
            for line_num, line in enumerate(f, 1):
                line = line.strip()
                if not line or line.startswith("#"):
                    continue
                parsed = _parse_abbr_line(line)
                if parsed is None:
                    logger.debug("Skipping malformed line %d in %s", line_num, path)
                    continue
                abbr, expansion, is_global = parsed
                table.add(abbr, expansion, global_=is_global)
    except OSError as e:
        logger.warning("Failed to read abbreviation file %s: %s", path, e)
    else:
        logger.debug("Abbreviation table holds %d entries after loading %s", len(table), path)

    return table


class FunctionRegistry:
    """Names of user-defined shell functions."""

    def __init__(self, names=()):
        self._names: set[str] = set(names)

    def is_known_function(self, name: str) -> bool:
        return name in self._names

    def __contains__(self, name: str) -> bool:
        return self.is_known_function(name)


class CommandRegistry:
    """Invokable commands: explicitly registered names, then the search path.

    Lookups on the search path are cached per instance, like a shell's
    command hash table.
    """

    def __init__(self, names=(), search_path: bool = True, path: str | None = None):
        self._names: set[str] = set(names)
        self._search_path = search_path
        self._path = path
        self._hash: dict[str, bool] = {}

    def is_known_command(self, name: str) -> bool:
        if name in self._names:
            return True
        if not self._search_path or not name or "/" in name:
            return False
        if name not in self._hash:
            self._hash[name] = shutil.which(name, path=self._path) is not None
        return self._hash[name]

    def __contains__(self, name: str) -> bool:
        return self.is_known_command(name)
