#!/usr/bin/env python3
"""Shared fixtures: keep logs and config out of the user's home directory."""

import os

import pytest


@pytest.fixture(autouse=True)
def isolated_hook_home(tmp_path, monkeypatch):
    """Point the log file and config path at a temporary directory."""
    home = tmp_path / "claude-hooks-home"
    home.mkdir()
    config_path = home / "config.yaml"
    log_path = home / "claude-hooks.log"

    monkeypatch.setenv("CLAUDE_HOOKS_CONFIG", str(config_path))
    monkeypatch.delenv("CLAUDE_CODE_CWD", raising=False)
    monkeypatch.setattr("claudehooks.logger.DEFAULT_LOG_PATH", str(log_path))
    monkeypatch.setattr("claudehooks.logger._verbose", False)

    yield {"config_path": str(config_path), "log_path": str(log_path)}


@pytest.fixture
def project_dir(tmp_path, monkeypatch):
    """Temporary working directory outside any git repository."""
    path = tmp_path / "project"
    path.mkdir()
    monkeypatch.chdir(path)
    return str(path)


@pytest.fixture
def fake_bin(tmp_path, monkeypatch):
    """
    Empty bin directory placed first on a minimal PATH.

    Returns a function that writes an executable shell script into it.
    """
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    monkeypatch.setenv("PATH", os.pathsep.join([str(bin_dir), "/usr/bin", "/bin"]))

    def make(name: str, body: str) -> str:
        path = bin_dir / name
        path.write_text("#!/bin/sh\n" + body + "\n")
        path.chmod(0o755)
        return str(path)

    return make
