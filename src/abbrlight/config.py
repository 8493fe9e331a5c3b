"""Configuration module.

Loads highlighting settings from environment variables, falling back to
an optional config file.

Environment Variables
---------------------
ABBRLIGHT_SUBCMD_MAX_LENGTH : int
    Longest all-letter word still highlighted as a subcommand.
    Default: 7

ABBRLIGHT_ARGUMENT_MAX_LENGTH : int
    Longest all-letter word still highlighted as a subcommand argument.
    Default: 7

ABBRLIGHT_THEME : str
    Theme name prepended to role tags when resolving styles.
    Default: "" (default theme)

ABBRLIGHT_HIGHLIGHT_MAXLENGTH : int
    Buffers longer than this are not highlighted at all.
    Default: unset (no limit)

ABBR_REGULAR_ABBREVIATION_SCALAR_PREFIXES : str
    Comma-separated literal prefixes allowed before a regular abbreviation.
    Whitespace inside each entry is kept, so "sudo ,doas " is two prefixes.
    Default: "sudo "

ABBR_REGULAR_ABBREVIATION_GLOB_PREFIXES : str
    Comma-separated glob prefixes, tried after all scalar prefixes.
    Default: none

ABBR_USER_ABBREVIATIONS_FILE : str
    Path of the user abbreviation file.
    Default: $XDG_CONFIG_HOME/zsh-abbr/user-abbreviations

ABBRLIGHT_CONFIG_FILE : str
    Path of a KEY=VALUE config file consulted for any key not set in the
    environment.
    Default: $XDG_CONFIG_HOME/abbrlight/config

Invalid numeric values never raise: they fall back to the default.
"""

import logging
import os

from abbrlight.constants import (
    DEFAULT_ARGUMENT_MAX_LENGTH,
    DEFAULT_GLOB_PREFIXES,
    DEFAULT_SCALAR_PREFIXES,
    DEFAULT_SUBCMD_MAX_LENGTH,
    DEFAULT_THEME,
    ENV_ARGUMENT_MAX_LENGTH,
    ENV_CONFIG_FILE,
    ENV_GLOB_PREFIXES,
    ENV_HIGHLIGHT_MAXLENGTH,
    ENV_SCALAR_PREFIXES,
    ENV_SUBCMD_MAX_LENGTH,
    ENV_THEME,
    ENV_USER_ABBREVIATIONS_FILE,
    POSITIVE_INT_RE,
)

logger = logging.getLogger(__name__)

# Module-level cache for config file contents, keyed by path
_config_file_cache: dict[str, dict[str, str]] = {}


def _config_home() -> str:
    return os.environ.get("XDG_CONFIG_HOME") or os.path.expanduser("~/.config")


def get_config_file_path() -> str:
    """Get the path of the abbrlight config file."""
    path = os.environ.get(ENV_CONFIG_FILE, "")
    if path.strip():
        return path
    return os.path.join(_config_home(), "abbrlight", "config")


def _load_config_file(path: str | None = None) -> dict[str, str]:
    """Load configuration from the config file.

    Parses a simple KEY=VALUE format file with # comments.
    Values can optionally be quoted (single or double quotes are stripped),
    which is the only way to keep leading or trailing whitespace.

    Args:
        path: Path to config file. Defaults to get_config_file_path().

    Returns:
        Dictionary of key-value pairs from the config file.
        Empty dict if file doesn't exist or can't be read.
    """
    if path is None:
        path = get_config_file_path()

    if path in _config_file_cache:
        return _config_file_cache[path]

    config: dict[str, str] = {}

    if not os.path.exists(path):
        _config_file_cache[path] = config
        return config

    try:
        with open(path) as f:
            for line_num, line in enumerate(f, 1):
                line = line.strip()
                # Skip empty lines and comments
                if not line or line.startswith("#"):
                    continue
                if "=" not in line:
                    logger.debug("Skipping malformed line %d in %s", line_num, path)
                    continue
                key, _, value = line.partition("=")
                key = key.strip()
                value = value.strip()
                # Strip surrounding quotes
                if len(value) >= 2 and value[0] == value[-1] and value[0] in ('"', "'"):
                    value = value[1:-1]
                config[key] = value
    except OSError as e:
        logger.warning("Failed to read config file %s: %s", path, e)

    _config_file_cache[path] = config
    return config


def _reset_config_cache() -> None:
    """Reset the config file cache. For testing only."""
    _config_file_cache.clear()


def _get_config(key: str) -> str | None:
    """Get a raw configuration value.

    The environment wins over the config file. An environment variable
    that is set but empty still counts as set.

    Returns:
        The raw value string, or None if the key is set nowhere.
    """
    value = os.environ.get(key)
    if value is not None:
        return value
    return _load_config_file().get(key)


def normalize_limit(raw, default: int) -> int:
    """Turn a raw limit value into a positive integer.

    Anything that is not a positive integer (0, negatives, non-numeric
    text, None) silently becomes ``default``.

    Args:
        raw: The configured value, as an int or a string.
        default: Value used when ``raw`` is invalid.

    Returns:
        A positive integer.
    """
    if isinstance(raw, bool):
        raw = None
    if isinstance(raw, int):
        if raw > 0:
            return raw
    elif isinstance(raw, str) and POSITIVE_INT_RE.match(raw.strip()):
        return int(raw.strip())
    if raw is not None and raw != "":
        logger.debug("Invalid limit %r, falling back to %d", raw, default)
    return default


def get_subcmd_max_length() -> int:
    """Get the longest word length highlighted as a subcommand.

    Reads from ABBRLIGHT_SUBCMD_MAX_LENGTH.
    Default: 7.
    """
    return normalize_limit(_get_config(ENV_SUBCMD_MAX_LENGTH), DEFAULT_SUBCMD_MAX_LENGTH)


def get_argument_max_length() -> int:
    """Get the longest word length highlighted as a subcommand argument.

    Reads from ABBRLIGHT_ARGUMENT_MAX_LENGTH.
    Default: 7.
    """
    return normalize_limit(
        _get_config(ENV_ARGUMENT_MAX_LENGTH), DEFAULT_ARGUMENT_MAX_LENGTH
    )


def get_highlight_maxlength() -> int | None:
    """Get the buffer length above which highlighting is skipped.

    Reads from ABBRLIGHT_HIGHLIGHT_MAXLENGTH.
    Default: None (no limit). Invalid values also mean no limit.
    """
    raw = _get_config(ENV_HIGHLIGHT_MAXLENGTH)
    if raw and raw.strip():
        if POSITIVE_INT_RE.match(raw.strip()):
            return int(raw.strip())
        logger.debug(
            "Invalid %s '%s', highlighting buffers of any length",
            ENV_HIGHLIGHT_MAXLENGTH,
            raw,
        )
    return None


def get_theme_name() -> str:
    """Get the theme name used to resolve styles.

    Reads from ABBRLIGHT_THEME.
    Default: "" (default theme).
    """
    raw = _get_config(ENV_THEME)
    if raw is None:
        return DEFAULT_THEME
    return raw.strip()


def _parse_prefix_list(raw: str) -> list[str]:
    """Split a comma-separated prefix list, keeping inner whitespace."""
    return [item for item in raw.split(",") if item]


def get_scalar_prefixes() -> list[str]:
    """Get the literal prefixes allowed before a regular abbreviation.

    Reads from ABBR_REGULAR_ABBREVIATION_SCALAR_PREFIXES.
    Default: ["sudo "]. An empty value disables scalar prefixes.
    """
    raw = _get_config(ENV_SCALAR_PREFIXES)
    if raw is None:
        return list(DEFAULT_SCALAR_PREFIXES)
    return _parse_prefix_list(raw)


def get_glob_prefixes() -> list[str]:
    """Get the glob prefixes allowed before a regular abbreviation.

    Reads from ABBR_REGULAR_ABBREVIATION_GLOB_PREFIXES.
    Default: none.
    """
    raw = _get_config(ENV_GLOB_PREFIXES)
    if raw is None:
        return list(DEFAULT_GLOB_PREFIXES)
    return _parse_prefix_list(raw)


def get_user_abbreviations_file() -> str:
    """Get the path of the user abbreviation file.

    Reads from ABBR_USER_ABBREVIATIONS_FILE.
    Default: $XDG_CONFIG_HOME/zsh-abbr/user-abbreviations.
    """
    raw = _get_config(ENV_USER_ABBREVIATIONS_FILE)
    if raw and raw.strip():
        return os.path.expanduser(raw.strip())
    return os.path.join(_config_home(), "zsh-abbr", "user-abbreviations")
