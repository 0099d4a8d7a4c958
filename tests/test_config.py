"""Tests for environment-driven configuration."""
import os

import pytest

from grab_rig.config import _load_dotenv, cfg


def test_defaults():
    assert cfg.log_level == "INFO"
    assert cfg.json_indent == 2
    assert cfg.backup_on_save is False
    assert cfg.output_format == "text"


@pytest.mark.parametrize("raw,expected", [("4", 4), ("0", 0), ("-3", 0), ("wide", 2)])
def test_json_indent_parsing(monkeypatch, raw, expected):
    monkeypatch.setenv("GRAB_RIG_JSON_INDENT", raw)
    assert cfg.json_indent == expected


@pytest.mark.parametrize("raw,expected", [("1", True), ("YES", True), ("off", False), ("", False)])
def test_backup_flag(monkeypatch, raw, expected):
    monkeypatch.setenv("GRAB_RIG_BACKUP_ON_SAVE", raw)
    assert cfg.backup_on_save is expected


def test_unknown_output_format_falls_back_to_text(monkeypatch):
    monkeypatch.setenv("GRAB_RIG_FORMAT", "yaml")
    assert cfg.output_format == "text"
    monkeypatch.setenv("GRAB_RIG_FORMAT", "JSON")
    assert cfg.output_format == "json"


def test_log_level_is_upper_cased(monkeypatch):
    monkeypatch.setenv("GRAB_RIG_LOG_LEVEL", "debug")
    assert cfg.log_level == "DEBUG"


def test_dotenv_does_not_override_real_env(tmp_path, monkeypatch):
    (tmp_path / ".env").write_text(
        "# comment\nGRAB_RIG_JSON_INDENT=6\nGRAB_RIG_FORMAT='json'\nnot a pair\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("GRAB_RIG_JSON_INDENT", "3")
    # Register GRAB_RIG_FORMAT with monkeypatch so teardown removes what the loader sets.
    monkeypatch.setenv("GRAB_RIG_FORMAT", "text")
    monkeypatch.delenv("GRAB_RIG_FORMAT")

    _load_dotenv(tmp_path)

    assert os.environ["GRAB_RIG_JSON_INDENT"] == "3"
    assert os.environ["GRAB_RIG_FORMAT"] == "json"
