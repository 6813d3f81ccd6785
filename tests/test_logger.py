#!/usr/bin/env python3
"""
Tests for centralized logging system.

Tests log level configuration, file writing, level filtering,
verbose echo and exception handling.
"""

import os

import pytest

from claudehooks import logger
from claudehooks.constants import (
    LOG_LEVEL_DEBUG,
    LOG_LEVEL_ERROR,
    LOG_LEVEL_INFO,
    LOG_LEVEL_OFF,
    LOG_LEVEL_WARNING,
)
from claudehooks.logger import (
    _get_log_level,
    log_debug,
    log_error,
    log_info,
    log_warning,
    set_verbose,
)


def write_config(config_path: str, log_level: int):
    with open(config_path, "w") as f:
        f.write(f"log_level: {log_level}\n")


def read_log_lines(log_path: str) -> list:
    if not os.path.exists(log_path):
        return []
    with open(log_path) as f:
        return [line.rstrip("\n") for line in f]


class TestLogLevel:
    def test_default_is_warning(self):
        assert _get_log_level() == LOG_LEVEL_WARNING

    def test_reads_config(self, isolated_hook_home):
        write_config(isolated_hook_home["config_path"], LOG_LEVEL_DEBUG)

        assert _get_log_level() == LOG_LEVEL_DEBUG

    def test_invalid_config_falls_back(self, isolated_hook_home):
        with open(isolated_hook_home["config_path"], "w") as f:
            f.write("log_level: [oops\n")

        assert _get_log_level() == LOG_LEVEL_WARNING


class TestLogWriting:
    def test_line_format(self, isolated_hook_home):
        log_error("plan_review", "Reviewer crashed", ValueError("bad output"))

        lines = read_log_lines(isolated_hook_home["log_path"])
        assert len(lines) == 1
        assert "[ERROR] [plan_review] Reviewer crashed | Exception: ValueError: bad output" in lines[0]
        assert lines[0].startswith("[")

    @pytest.mark.parametrize(
        "level,expected",
        [
            (LOG_LEVEL_OFF, []),
            (LOG_LEVEL_ERROR, ["ERROR"]),
            (LOG_LEVEL_WARNING, ["ERROR", "WARNING"]),
            (LOG_LEVEL_INFO, ["ERROR", "WARNING", "INFO"]),
            (LOG_LEVEL_DEBUG, ["ERROR", "WARNING", "INFO", "DEBUG"]),
        ],
    )
    def test_level_filtering(self, isolated_hook_home, level, expected):
        write_config(isolated_hook_home["config_path"], level)

        log_error("test", "e")
        log_warning("test", "w")
        log_info("test", "i")
        log_debug("test", "d")

        lines = read_log_lines(isolated_hook_home["log_path"])
        assert [line.split("] [")[1] for line in lines] == expected

    def test_unwritable_log_path_never_raises(self, tmp_path, monkeypatch):
        blocker = tmp_path / "file"
        blocker.write_text("x")
        monkeypatch.setattr(logger, "DEFAULT_LOG_PATH", str(blocker / "sub" / "log"))

        log_error("test", "still fine")


class TestVerbose:
    def test_verbose_echoes_below_threshold(self, capsys):
        set_verbose(True)
        log_debug("command_guard", "checking branch")

        assert "[command_guard] checking branch" in capsys.readouterr().err

    def test_quiet_by_default(self, capsys):
        log_debug("command_guard", "checking branch")

        assert capsys.readouterr().err == ""
