"""Tests for configuration helpers.

RULES:
- Environment changes go through monkeypatch so they never leak
"""

import pytest

from docs_directives import config


class TestParseCsv:

    def test_trims_and_drops_empty(self):
        assert config.parse_csv(" json, csharp ,,plain ") == ["json", "csharp", "plain"]

    @pytest.mark.parametrize("value", [None, ""])
    def test_empty(self, value):
        assert config.parse_csv(value) == []


class TestEnvNumbers:

    def test_int_default(self, monkeypatch):
        monkeypatch.delenv("DOCS_TEST_INT", raising=False)
        assert config._env_int("DOCS_TEST_INT", 8) == 8

    def test_int_override(self, monkeypatch):
        monkeypatch.setenv("DOCS_TEST_INT", "3")
        assert config._env_int("DOCS_TEST_INT", 8) == 3

    def test_invalid_int_names_variable(self, monkeypatch):
        monkeypatch.setenv("DOCS_TEST_INT", "many")
        with pytest.raises(ValueError, match="DOCS_TEST_INT must be an integer"):
            config._env_int("DOCS_TEST_INT", 8)

    def test_invalid_float(self, monkeypatch):
        monkeypatch.setenv("DOCS_TEST_FLOAT", "soon")
        with pytest.raises(ValueError, match="DOCS_TEST_FLOAT must be a number"):
            config._env_float("DOCS_TEST_FLOAT", 1.0)


class TestDefaults:

    def test_vocabulary(self):
        assert config.CALLOUT_TAGS == ("BLOCK", "NOTE", "INFO", "WARNING", "TIP")
        assert set(config.CALLOUT_LABELS) == set(config.CALLOUT_TAGS) - {"BLOCK"}
        assert config.FILES_LIST_TAG == "FILES-LIST"

    def test_unknown_log_level(self):
        with pytest.raises(ValueError, match="Unknown log level 'LOUD'"):
            config.configure_logging("loud")
