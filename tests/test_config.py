import logging
from pathlib import Path

import pytest

from tictacgrid import config


@pytest.mark.parametrize(
    "value,expected",
    [("1", True), ("yes", True), (" On ", True), ("0", False), ("off", False), ("maybe", None)],
)
def test_env_flag(monkeypatch, value, expected):
    monkeypatch.setenv("TTG_FLAG", value)
    default = object()
    result = config.env_flag("TTG_FLAG", default=default)
    assert result is (default if expected is None else expected)


def test_env_flag_unset(monkeypatch):
    monkeypatch.delenv("TTG_FLAG", raising=False)
    assert config.env_flag("TTG_FLAG", default=True) is True


@pytest.mark.parametrize("value,expected", [("4", 4), (" 5 ", 5), ("7", 3), ("big", 3)])
def test_env_size(monkeypatch, value, expected):
    monkeypatch.setenv("TTG_SIZE", value)
    assert config.env_size("TTG_SIZE") == expected


def test_session_file_default(monkeypatch):
    monkeypatch.delenv("TICTACGRID_SESSION_FILE", raising=False)
    assert config.session_file().name == "tictacgrid-session.json"


def test_session_file_override(monkeypatch, tmp_path):
    monkeypatch.setenv("TICTACGRID_SESSION_FILE", str(tmp_path / "s.json"))
    assert config.session_file() == Path(tmp_path / "s.json")


@pytest.mark.parametrize("value,expected", [("debug", logging.DEBUG), ("WARNING", logging.WARNING), ("nope", logging.INFO)])
def test_log_level(monkeypatch, value, expected):
    monkeypatch.setenv("TICTACGRID_LOG_LEVEL", value)
    assert config.log_level() == expected
