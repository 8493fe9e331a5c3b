"""Tests for config module.

Tests environment and config-file settings and their fallback to defaults.
"""

import logging
import os

import pytest

from abbrlight import config
from abbrlight.config import (
    _load_config_file,
    get_argument_max_length,
    get_glob_prefixes,
    get_highlight_maxlength,
    get_scalar_prefixes,
    get_subcmd_max_length,
    get_theme_name,
    get_user_abbreviations_file,
    normalize_limit,
)


class TestNormalizeLimit:
    """Tests for the silent limit reset policy."""

    @pytest.mark.parametrize("raw,expected", [
        (1, 1), (7, 7), (12, 12), ("3", 3), (" 9 ", 9),
    ])
    def test_valid_values_kept(self, raw, expected):
        assert normalize_limit(raw, 7) == expected

    @pytest.mark.parametrize("raw", [0, -3, "0", "-3", "abc", "", None, "1.5", "07", True])
    def test_invalid_values_use_default(self, raw):
        assert normalize_limit(raw, 7) == 7

    def test_invalid_value_logs_debug(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="abbrlight.config"):
            normalize_limit("seven", 7)
        assert "Invalid limit" in caplog.text
        assert "seven" in caplog.text

    def test_unset_value_does_not_log(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="abbrlight.config"):
            normalize_limit(None, 7)
        assert "Invalid limit" not in caplog.text


class TestLimits:

    def test_defaults(self, mocker):
        mocker.patch.dict(os.environ, {}, clear=True)
        assert get_subcmd_max_length() == 7
        assert get_argument_max_length() == 7

    def test_from_env(self, mocker):
        mocker.patch.dict(
            os.environ,
            {"ABBRLIGHT_SUBCMD_MAX_LENGTH": "4", "ABBRLIGHT_ARGUMENT_MAX_LENGTH": "9"},
            clear=True,
        )
        assert get_subcmd_max_length() == 4
        assert get_argument_max_length() == 9

    @pytest.mark.parametrize("bad", ["0", "-3", "many"])
    def test_invalid_env_self_heals(self, mocker, bad):
        mocker.patch.dict(
            os.environ,
            {"ABBRLIGHT_SUBCMD_MAX_LENGTH": bad, "ABBRLIGHT_ARGUMENT_MAX_LENGTH": bad},
            clear=True,
        )
        assert get_subcmd_max_length() == 7
        assert get_argument_max_length() == 7


class TestHighlightMaxlength:

    def test_default_unlimited(self, mocker):
        mocker.patch.dict(os.environ, {}, clear=True)
        assert get_highlight_maxlength() is None

    def test_from_env(self, mocker):
        mocker.patch.dict(os.environ, {"ABBRLIGHT_HIGHLIGHT_MAXLENGTH": "200"}, clear=True)
        assert get_highlight_maxlength() == 200

    def test_invalid_is_unlimited(self, mocker):
        mocker.patch.dict(os.environ, {"ABBRLIGHT_HIGHLIGHT_MAXLENGTH": "lots"}, clear=True)
        assert get_highlight_maxlength() is None


class TestPrefixes:

    def test_default_scalar_prefix(self, mocker):
        mocker.patch.dict(os.environ, {}, clear=True)
        assert get_scalar_prefixes() == ["sudo "]
        assert get_glob_prefixes() == []

    def test_whitespace_inside_entries_kept(self, mocker):
        mocker.patch.dict(
            os.environ,
            {"ABBR_REGULAR_ABBREVIATION_SCALAR_PREFIXES": "sudo ,doas "},
            clear=True,
        )
        assert get_scalar_prefixes() == ["sudo ", "doas "]

    def test_empty_disables(self, mocker):
        mocker.patch.dict(
            os.environ, {"ABBR_REGULAR_ABBREVIATION_SCALAR_PREFIXES": ""}, clear=True,
        )
        assert get_scalar_prefixes() == []

    def test_glob_prefixes(self, mocker):
        mocker.patch.dict(
            os.environ, {"ABBR_REGULAR_ABBREVIATION_GLOB_PREFIXES": "* ,?? "}, clear=True,
        )
        assert get_glob_prefixes() == ["* ", "?? "]


class TestThemeAndPaths:

    def test_theme_default(self, mocker):
        mocker.patch.dict(os.environ, {}, clear=True)
        assert get_theme_name() == ""

    def test_theme_from_env(self, mocker):
        mocker.patch.dict(os.environ, {"ABBRLIGHT_THEME": " dark "}, clear=True)
        assert get_theme_name() == "dark"

    def test_user_file_default_uses_xdg(self, mocker):
        mocker.patch.dict(os.environ, {"XDG_CONFIG_HOME": "/cfg"}, clear=True)
        assert get_user_abbreviations_file() == "/cfg/zsh-abbr/user-abbreviations"

    def test_user_file_from_env(self, mocker):
        mocker.patch.dict(
            os.environ, {"ABBR_USER_ABBREVIATIONS_FILE": "/tmp/abbrs"}, clear=True,
        )
        assert get_user_abbreviations_file() == "/tmp/abbrs"


class TestConfigFile:
    """Tests for the KEY=VALUE config file."""

    def test_parses_values(self, tmp_path):
        path = tmp_path / "config"
        path.write_text(
            "# comment\n"
            "\n"
            "ABBRLIGHT_SUBCMD_MAX_LENGTH=5\n"
            "ABBR_REGULAR_ABBREVIATION_SCALAR_PREFIXES=\"sudo ,nohup \"\n"
            "not a setting\n"
            "ABBRLIGHT_THEME='dark'\n"
        )
        assert _load_config_file(str(path)) == {
            "ABBRLIGHT_SUBCMD_MAX_LENGTH": "5",
            "ABBR_REGULAR_ABBREVIATION_SCALAR_PREFIXES": "sudo ,nohup ",
            "ABBRLIGHT_THEME": "dark",
        }

    def test_missing_file_is_empty(self, tmp_path):
        assert _load_config_file(str(tmp_path / "missing")) == {}

    def test_file_used_when_env_unset(self, mocker, tmp_path):
        path = tmp_path / "config"
        path.write_text("ABBRLIGHT_SUBCMD_MAX_LENGTH=5\nABBRLIGHT_THEME=dark\n")
        mocker.patch("abbrlight.config.get_config_file_path", return_value=str(path))
        mocker.patch.dict(os.environ, {}, clear=True)
        assert get_subcmd_max_length() == 5
        assert get_theme_name() == "dark"

    def test_env_overrides_file(self, mocker, tmp_path):
        path = tmp_path / "config"
        path.write_text("ABBRLIGHT_SUBCMD_MAX_LENGTH=5\n")
        mocker.patch("abbrlight.config.get_config_file_path", return_value=str(path))
        mocker.patch.dict(os.environ, {"ABBRLIGHT_SUBCMD_MAX_LENGTH": "3"}, clear=True)
        assert get_subcmd_max_length() == 3

    def test_invalid_file_value_self_heals(self, mocker, tmp_path):
        path = tmp_path / "config"
        path.write_text("ABBRLIGHT_ARGUMENT_MAX_LENGTH=-1\n")
        mocker.patch("abbrlight.config.get_config_file_path", return_value=str(path))
        mocker.patch.dict(os.environ, {}, clear=True)
        assert get_argument_max_length() == 7

    def test_cached_until_reset(self, tmp_path):
        path = tmp_path / "config"
        path.write_text("ABBRLIGHT_THEME=one\n")
        assert _load_config_file(str(path))["ABBRLIGHT_THEME"] == "one"
        path.write_text("ABBRLIGHT_THEME=two\n")
        assert _load_config_file(str(path))["ABBRLIGHT_THEME"] == "one"
        config._reset_config_cache()
        assert _load_config_file(str(path))["ABBRLIGHT_THEME"] == "two"
