"""Constants and configuration defaults for abbrlight.

Centralizes module-level constants, defaults, and static patterns
used across the abbrlight codebase. Individual modules import from here
rather than defining constants inline.
"""

import re


# =============================================================================
# Role tags
# =============================================================================

PRECOMMAND = "precommand"
FUNCTION = "function"
COMMAND = "command"
SUBCOMMAND = "subcommand"
ALIAS = "alias"
SINGLE_HYPHEN_OPTION = "single-hyphen-option"
DOUBLE_HYPHEN_OPTION = "double-hyphen-option"
GLOBAL_ALIAS = "global-alias"

# Generic tags outside the abbreviation grammar
UNKNOWN_TOKEN = "unknown-token"
DEFAULT = "default"


# =============================================================================
# Grammar
# =============================================================================

# The only word recognized as a precommand inside an abbreviation (case-sensitive)
PRECOMMAND_WORD = "sudo"

DEFAULT_SUBCMD_MAX_LENGTH = 7
DEFAULT_ARGUMENT_MAX_LENGTH = 7

# Subcommand and argument words; their length limit is checked separately
LETTERS_RE = re.compile(r"^[A-Za-z]+$")

SINGLE_HYPHEN_OPTION_RE = re.compile(r"^-[A-Za-z]+$")
DOUBLE_HYPHEN_OPTION_RE = re.compile(r"^--[A-Za-z]+$")

# Accepts "1", "42"; rejects "0", "07", "-3", "x"
POSITIVE_INT_RE = re.compile(r"^[1-9][0-9]*$")


# =============================================================================
# Styles
# =============================================================================

DEFAULT_STYLES: dict[str, str] = {
    PRECOMMAND: "fg=green,underline",
    FUNCTION: "fg=green",
    COMMAND: "fg=green",
    SUBCOMMAND: "fg=yellow",
    ALIAS: "fg=green",
    SINGLE_HYPHEN_OPTION: "fg=cyan",
    DOUBLE_HYPHEN_OPTION: "fg=cyan",
    GLOBAL_ALIAS: "bg=blue",
    UNKNOWN_TOKEN: "fg=red,bold",
    DEFAULT: "none",
}


# =============================================================================
# Configuration keys
# =============================================================================

ENV_SUBCMD_MAX_LENGTH = "ABBRLIGHT_SUBCMD_MAX_LENGTH"
ENV_ARGUMENT_MAX_LENGTH = "ABBRLIGHT_ARGUMENT_MAX_LENGTH"
ENV_THEME = "ABBRLIGHT_THEME"
ENV_HIGHLIGHT_MAXLENGTH = "ABBRLIGHT_HIGHLIGHT_MAXLENGTH"
ENV_CONFIG_FILE = "ABBRLIGHT_CONFIG_FILE"
ENV_SCALAR_PREFIXES = "ABBR_REGULAR_ABBREVIATION_SCALAR_PREFIXES"
ENV_GLOB_PREFIXES = "ABBR_REGULAR_ABBREVIATION_GLOB_PREFIXES"
ENV_USER_ABBREVIATIONS_FILE = "ABBR_USER_ABBREVIATIONS_FILE"

DEFAULT_SCALAR_PREFIXES = ["sudo "]
DEFAULT_GLOB_PREFIXES: list[str] = []
DEFAULT_THEME = ""
