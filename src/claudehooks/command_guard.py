#!/usr/bin/env python3
"""
Pre-execution gate for Bash commands.

Every sub-command of a compound command line is classified on its own,
since a dangerous command can hide behind a benign one joined by
``&&``, ``;`` or ``|``. Two rules deny:

1. The executable is on the denylist (database CLIs by default)
2. ``git commit`` while the target project is on a protected branch
"""

import os
from typing import Any, Callable, Dict, Optional

from .command_parser import split_compound_command
from .git_context import (
    get_current_branch,
    get_target_working_directory,
    is_protected_branch,
)
from .logger import log_debug, log_info
from .models import GuardDecision
from .prompt_loader import PromptLoader

RULE_DENIED_EXECUTABLE = "denied_executable"
RULE_PROTECTED_BRANCH = "protected_branch"

ALLOW = GuardDecision(allowed=True)

_prompt_loader = PromptLoader()


def extract_executable(sub_command: str) -> str:
    """
    Executable name of a sub-command: first token, final path segment, lower-cased.

    >>> extract_executable("/usr/bin/MySQL -u root")
    'mysql'
    """
    tokens = sub_command.split()
    if not tokens:
        return ""
    return os.path.basename(tokens[0]).lower()


def _is_git_commit(sub_command: str) -> bool:
    tokens = sub_command.split()
    return (
        len(tokens) >= 2
        and extract_executable(sub_command) == "git"
        and tokens[1] == "commit"
    )


def _deny_executable(executable: str, command: str, sub_command: str) -> GuardDecision:
    reason = _prompt_loader.load_prompt(
        "denied_executable.md",
        "pre_bash",
        {"executable": executable, "command": command, "sub_command": sub_command},
    )
    return GuardDecision(
        allowed=False,
        reason=reason,
        sub_command=sub_command,
        rule=RULE_DENIED_EXECUTABLE,
    )


def _deny_protected_branch(branch: str, command: str, sub_command: str) -> GuardDecision:
    reason = _prompt_loader.load_prompt(
        "protected_branch.md",
        "pre_bash",
        {"branch": branch, "command": command, "sub_command": sub_command},
    )
    return GuardDecision(
        allowed=False,
        reason=reason,
        sub_command=sub_command,
        rule=RULE_PROTECTED_BRANCH,
    )


def classify_command(
    command: str,
    hook_input: Dict[str, Any],
    config: Dict[str, Any],
    branch_lookup: Optional[Callable[[str], str]] = None,
) -> GuardDecision:
    """
    Decide whether a Bash command line may run.

    Args:
        command: Full command line from tool_input.command
        hook_input: Parsed hook payload (used to locate the target repository)
        config: Loaded configuration (denied_executables, protected_branches)
        branch_lookup: Returns the branch checked out in a directory
            (default: get_current_branch)

    Returns:
        The first DENY decision found, or ALLOW when every sub-command passes
    """
    branch_lookup = branch_lookup or get_current_branch
    denied = {name.lower() for name in config.get("denied_executables", [])}
    protected = list(config.get("protected_branches", []))

    for sub_command in split_compound_command(command):
        executable = extract_executable(sub_command)
        if not executable:
            continue

        if executable in denied:
            log_info("command_guard", f"Denied executable {executable!r} in: {sub_command}")
            return _deny_executable(executable, command, sub_command)

        if not _is_git_commit(sub_command):
            continue

        log_debug("command_guard", "Detected git commit command, checking branch protection...")
        target_dir = get_target_working_directory(hook_input)
        if not target_dir:
            log_debug(
                "command_guard",
                "Skipping branch protection check - cannot determine target project directory",
            )
            continue

        branch = branch_lookup(target_dir)
        if is_protected_branch(branch, protected):
            log_info("command_guard", f"Branch {branch!r} is protected - blocking commit")
            return _deny_protected_branch(branch, command, sub_command)

        if branch:
            log_debug("command_guard", f"Branch {branch!r} is not protected - allowing commit")
        else:
            log_debug("command_guard", "Not in a git repo or detached HEAD - allowing commit")

    log_debug("command_guard", f"Command {command!r} is allowed")
    return ALLOW
