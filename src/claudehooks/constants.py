#!/usr/bin/env python3
"""
Shared constants for Claude Hooks.

Centralizes default configuration values to eliminate duplication
and ensure consistency across modules.
"""

from pathlib import Path
from typing import Dict, Any

# Log levels
LOG_LEVEL_OFF = 0
LOG_LEVEL_ERROR = 1
LOG_LEVEL_WARNING = 2
LOG_LEVEL_INFO = 3
LOG_LEVEL_DEBUG = 4

# Default file paths
DEFAULT_HOME_DIR = Path.home() / ".claude-hooks"
DEFAULT_CONFIG_PATH = str(DEFAULT_HOME_DIR / "config.yaml")
DEFAULT_LOG_PATH = str(DEFAULT_HOME_DIR / "claude-hooks.log")
DEFAULT_SETTINGS_PATH = str(Path.home() / ".claude" / "settings.json")

# Environment overrides
CONFIG_PATH_ENV_VAR = "CLAUDE_HOOKS_CONFIG"
CLAUDE_CWD_ENV_VAR = "CLAUDE_CODE_CWD"

# Hook types accepted on the command line
HOOK_TYPE_POST_EDIT = "post-edit"
HOOK_TYPE_PRE_EDIT = "pre-edit"
HOOK_TYPE_PRE_BASH = "pre-bash"
HOOK_TYPE_PLAN_REVIEW = "plan-review"
HOOK_TYPE_SESSION_START = "session-start"

HOOK_TYPES = [
    HOOK_TYPE_POST_EDIT,
    HOOK_TYPE_PRE_EDIT,
    HOOK_TYPE_PRE_BASH,
    HOOK_TYPE_PLAN_REVIEW,
    HOOK_TYPE_SESSION_START,
]

# Reviewer names (fixed report order)
REVIEWER_CLAUDE = "claude"
REVIEWER_CODEX = "codex"
REVIEWER_GEMINI = "gemini"

# Default configuration values
DEFAULT_CONFIG: Dict[str, Any] = {
    "log_level": LOG_LEVEL_WARNING,
    "denied_executables": ["mysql", "mysqldump", "mariadb"],
    "protected_branches": ["master", "main"],
    "warn_only_steps": [],
    "reviewers": {
        REVIEWER_CLAUDE: {
            "model": "claude-opus-4-5-20251101",
            "timeout_seconds": 120,
        },
        REVIEWER_CODEX: {
            "model": "o3",
            "timeout_seconds": 120,
        },
        REVIEWER_GEMINI: {
            "model": "gemini-2.5-pro",
            "timeout_seconds": 60,
        },
    },
}

# Plan extraction
MIN_PLAN_LENGTH = 50

# Output limits for tool failures reported back to Claude
MAX_TOOL_OUTPUT_CHARS = 1500
MAX_LINT_ISSUES = 10
MAX_DISPLAYED_ISSUES = 5

# git inspection must never stall the hook
GIT_TIMEOUT_SECONDS = 5
