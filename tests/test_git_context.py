#!/usr/bin/env python3
"""
Tests for git branch detection and target directory resolution.
"""

import subprocess
from unittest.mock import MagicMock, patch

from claudehooks.git_context import (
    find_git_root,
    get_current_branch,
    get_target_working_directory,
    is_protected_branch,
)


def completed(stdout="", returncode=0, stderr=""):
    return MagicMock(stdout=stdout, returncode=returncode, stderr=stderr)


class TestGetCurrentBranch:
    @patch("claudehooks.git_context.subprocess.run")
    def test_show_current(self, mock_run):
        mock_run.return_value = completed("main\n")

        assert get_current_branch("/repo") == "main"
        args = mock_run.call_args[0][0]
        assert args == ["git", "-C", "/repo", "branch", "--show-current"]

    @patch("claudehooks.git_context.subprocess.run")
    def test_falls_back_to_rev_parse(self, mock_run):
        mock_run.side_effect = [
            completed(returncode=129, stderr="unknown option"),
            completed("develop\n"),
        ]

        assert get_current_branch("/repo") == "develop"
        assert mock_run.call_args[0][0][-3:] == ["rev-parse", "--abbrev-ref", "HEAD"]

    @patch("claudehooks.git_context.subprocess.run")
    def test_detached_head_is_empty(self, mock_run):
        mock_run.side_effect = [completed(returncode=1), completed("HEAD\n")]

        assert get_current_branch("/repo") == ""

    @patch("claudehooks.git_context.subprocess.run")
    def test_not_a_repository(self, mock_run):
        mock_run.return_value = completed(returncode=128, stderr="not a git repository")

        assert get_current_branch("/tmp") == ""

    @patch("claudehooks.git_context.subprocess.run")
    def test_timeout_is_empty(self, mock_run):
        mock_run.side_effect = subprocess.TimeoutExpired(cmd="git", timeout=5)

        assert get_current_branch("/repo") == ""

    @patch("claudehooks.git_context.subprocess.run")
    def test_git_missing_is_empty(self, mock_run):
        mock_run.side_effect = FileNotFoundError("git")

        assert get_current_branch() == ""

    @patch("claudehooks.git_context.subprocess.run")
    def test_without_directory_omits_dash_c(self, mock_run):
        mock_run.return_value = completed("main\n")

        get_current_branch()

        assert mock_run.call_args[0][0] == ["git", "branch", "--show-current"]


class TestIsProtectedBranch:
    def test_exact_match(self):
        assert is_protected_branch("main", ["master", "main"]) is True

    def test_case_sensitive(self):
        assert is_protected_branch("Main", ["master", "main"]) is False

    def test_empty_branch(self):
        assert is_protected_branch("", ["master", "main", ""]) is False


class TestFindGitRoot:
    def test_walks_up_to_git_dir(self, tmp_path):
        (tmp_path / ".git").mkdir()
        nested = tmp_path / "pkg" / "sub"
        nested.mkdir(parents=True)

        assert find_git_root(str(nested / "file.go")) == str(tmp_path)

    def test_no_repository(self, tmp_path):
        assert find_git_root(str(tmp_path / "file.go")) == ""


class TestGetTargetWorkingDirectory:
    def test_env_var_wins(self, monkeypatch):
        monkeypatch.setenv("CLAUDE_CODE_CWD", "/from/env")

        assert get_target_working_directory({"cwd": "/from/payload"}) == "/from/env"

    def test_payload_cwd(self):
        assert get_target_working_directory({"cwd": "/from/payload", "tool_input": {}}) == "/from/payload"

    def test_git_root_of_edited_file(self, tmp_path):
        repo = tmp_path / "repo"
        (repo / ".git").mkdir(parents=True)
        hook_input = {"tool_input": {"file_path": str(repo / "main.go")}}

        assert get_target_working_directory(hook_input) == str(repo)

    def test_process_cwd_fallback(self, project_dir):
        assert get_target_working_directory({"tool_input": {}}) == project_dir

    def test_hooks_checkout_is_ambiguous(self, tmp_path, monkeypatch):
        checkout = tmp_path / "claude-hooks"
        checkout.mkdir()
        monkeypatch.chdir(checkout)

        assert get_target_working_directory({"tool_input": {}}) == ""
