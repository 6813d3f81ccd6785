#!/usr/bin/env python3
"""
SessionStart hook: surface project agent instructions.

When the project has an agents.md file at its root, its content is printed
to stdout, which Claude Code adds to the session context.
"""

import os
import sys
from pathlib import Path
from typing import Optional

from .constants import CLAUDE_CWD_ENV_VAR
from .hook_input import parse_hook_input
from .logger import log_debug

AGENTS_FILE = "agents.md"


def resolve_project_dir(hook_input: Optional[dict]) -> str:
    """
    Project directory for a session.

    Uses CLAUDE_CODE_CWD, then three levels above the transcript path
    (~/.claude/projects/<project>/<session>.jsonl), then the process cwd.
    """
    claude_dir = os.environ.get(CLAUDE_CWD_ENV_VAR, "")
    if claude_dir:
        return claude_dir

    transcript_path = (hook_input or {}).get("transcript_path") or ""
    if isinstance(transcript_path, str) and transcript_path:
        return os.path.dirname(os.path.dirname(os.path.dirname(transcript_path)))

    return os.getcwd()


def read_agents_file(project_dir: str) -> Optional[str]:
    """Content of <project_dir>/agents.md, or None when absent or unreadable."""
    path = Path(project_dir) / AGENTS_FILE
    if not path.is_file():
        return None
    try:
        return path.read_text(encoding="utf-8")
    except OSError as e:
        log_debug("session_start", f"Could not read {path}: {e}")
        return None


def run_session_start(raw_input: str) -> None:
    hook_input = parse_hook_input(raw_input)
    project_dir = resolve_project_dir(hook_input)
    log_debug("session_start", f"Looking for {AGENTS_FILE} in {project_dir}")

    content = read_agents_file(project_dir)
    if content:
        print(content, file=sys.stdout, flush=True)
