#!/usr/bin/env python3
"""
Git context for branch protection.

Resolves which project a hook call targets and which branch that project
has checked out. Every lookup degrades to "" instead of raising, which the
command guard treats as "cannot determine, allow".
"""

import os
import subprocess
from pathlib import Path
from typing import List, Optional

from .constants import CLAUDE_CWD_ENV_VAR, GIT_TIMEOUT_SECONDS
from .hook_input import collect_files
from .logger import log_debug

# Name of this repository; running from its checkout without context is ambiguous
HOOKS_REPO_MARKER = "claude-hooks"


def _run_git(args: List[str], working_dir: str) -> Optional[str]:
    """
    Execute a git command and return stripped stdout, or None on failure.

    Args:
        args: git arguments (without the leading "git")
        working_dir: Directory passed to ``git -C``; "" uses the process cwd
    """
    command = ["git"]
    if working_dir:
        command += ["-C", working_dir]
    command += args

    try:
        result = subprocess.run(
            command,
            capture_output=True,
            text=True,
            timeout=GIT_TIMEOUT_SECONDS,
        )
    except (subprocess.TimeoutExpired, subprocess.SubprocessError, OSError) as e:
        log_debug("git_context", f"{' '.join(command)} failed: {e}")
        return None

    if result.returncode != 0:
        log_debug(
            "git_context",
            f"{' '.join(command)} exited {result.returncode}: {result.stderr.strip()}",
        )
        return None

    return result.stdout.strip()


def get_current_branch(working_dir: str = "") -> str:
    """
    Return the checked-out branch name.

    Tries ``git branch --show-current`` and falls back to
    ``git rev-parse --abbrev-ref HEAD`` for older git versions.

    Returns:
        Branch name, or "" when not in a repository or in detached HEAD
    """
    if working_dir:
        log_debug("git_context", f"Detecting git branch in directory: {working_dir}")
    else:
        log_debug("git_context", "Detecting current git branch...")

    branch = _run_git(["branch", "--show-current"], working_dir)
    if branch is None:
        log_debug("git_context", "First method failed, trying fallback...")
        branch = _run_git(["rev-parse", "--abbrev-ref", "HEAD"], working_dir)
        if branch is None:
            log_debug("git_context", "Fallback method also failed, not in git repo")
            return ""

    if branch == "HEAD":
        log_debug("git_context", "Detected detached HEAD state")
        return ""

    log_debug("git_context", f"Current branch: {branch!r}")
    return branch


def is_protected_branch(branch: str, protected_branches: List[str]) -> bool:
    """Exact, case-sensitive membership check."""
    return bool(branch) and branch in protected_branches


def find_git_root(file_path: str) -> str:
    """
    Walk up from a file's directory looking for a .git entry.

    Returns:
        Repository root, or "" when none is found
    """
    directory = Path(file_path).parent
    if not directory.is_absolute():
        directory = Path.cwd() / directory

    for candidate in [directory, *directory.parents]:
        if (candidate / ".git").exists():
            log_debug("git_context", f"Found git root at: {candidate}")
            return str(candidate)

    log_debug("git_context", f"No git root found for file: {file_path}")
    return ""


def get_target_working_directory(hook_input: dict) -> str:
    """
    Determine the project directory a hook call applies to.

    Resolution order:
    1. CLAUDE_CODE_CWD environment variable
    2. "cwd" field of the hook payload
    3. git root of any edited file in the payload
    4. process cwd, unless running from the claude-hooks checkout itself

    Returns:
        Directory path, or "" when it cannot be determined confidently
    """
    claude_dir = os.environ.get(CLAUDE_CWD_ENV_VAR, "")
    if claude_dir:
        log_debug("git_context", f"Using working directory from {CLAUDE_CWD_ENV_VAR}: {claude_dir}")
        return claude_dir

    payload_cwd = hook_input.get("cwd") or ""
    if isinstance(payload_cwd, str) and payload_cwd:
        log_debug("git_context", f"Using working directory from hook input: {payload_cwd}")
        return payload_cwd

    for file_path in collect_files(hook_input.get("tool_input") or {}):
        root = find_git_root(file_path)
        if root:
            log_debug("git_context", f"Inferred working directory from file path: {root}")
            return root

    try:
        cwd = os.getcwd()
    except OSError:
        log_debug("git_context", "Could not determine target working directory")
        return ""

    if HOOKS_REPO_MARKER in cwd:
        log_debug(
            "git_context",
            "Skipping branch protection - running from claude-hooks directory "
            "without file context",
        )
        return ""

    log_debug("git_context", f"Using current working directory as fallback: {cwd}")
    return cwd
