#!/usr/bin/env python3
"""
Parsing of the JSON payload Claude Code sends on stdin.

Payload fields used by the hooks:
- tool_name: tool being called ("Bash", "Write", "ExitPlanMode", ...)
- tool_input: {"file_path", "file_paths", "command", "content"}
- transcript_path: JSONL conversation transcript
- cwd: working directory of the Claude Code session
"""

import json
from typing import List, Optional

from .logger import log_debug

# Paths that are never checked: vendored code and generated Go sources
_EXCLUDED_FRAGMENTS = ("/vendor/",)
_EXCLUDED_SUFFIXES = (".pb.go", ".gen.go")


def parse_hook_input(raw_input: str) -> Optional[dict]:
    """
    Parse the raw stdin payload.

    Returns:
        Payload dict, or None when input is empty, malformed or not an object
    """
    if not raw_input or not raw_input.strip():
        return None

    try:
        data = json.loads(raw_input)
    except json.JSONDecodeError as e:
        log_debug("hook_input", f"No input provided or failed to parse JSON: {e}")
        return None

    if not isinstance(data, dict):
        log_debug("hook_input", "Hook input is not a JSON object")
        return None

    if not isinstance(data.get("tool_input"), dict):
        data["tool_input"] = {}

    return data


def collect_files(tool_input: dict) -> List[str]:
    """
    Gather edited file paths from tool input.

    Combines "file_path" and "file_paths", removes duplicates while keeping
    first-seen order, and drops vendored and generated files.
    """
    candidates = []

    single = tool_input.get("file_path")
    if isinstance(single, str) and single:
        candidates.append(single)

    many = tool_input.get("file_paths")
    if isinstance(many, list):
        candidates.extend(f for f in many if isinstance(f, str) and f)

    seen = set()
    files = []
    for path in candidates:
        if path in seen:
            continue
        seen.add(path)

        if any(fragment in path for fragment in _EXCLUDED_FRAGMENTS):
            continue
        if path.endswith(_EXCLUDED_SUFFIXES):
            continue

        files.append(path)

    return files
