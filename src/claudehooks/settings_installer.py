#!/usr/bin/env python3
"""
Register claude-hooks in Claude Code's settings.json.

Safe to run repeatedly: entries that are already registered are left alone
and every other key in the settings file is preserved.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Tuple

from .constants import DEFAULT_SETTINGS_PATH
from .logger import log_error, log_info

HOOK_COMMAND = "claude-hooks"

# (event, matcher, hook type)
HOOK_REGISTRATIONS: List[Tuple[str, str, str]] = [
    ("PostToolUse", "Write|Edit|MultiEdit", "post-edit"),
    ("PreToolUse", "Bash", "pre-bash"),
    ("PreToolUse", "ExitPlanMode", "plan-review"),
    ("SessionStart", "*", "session-start"),
]


def load_settings(settings_path: str) -> Dict[str, Any]:
    """Read settings.json; a missing or empty file yields an empty dict."""
    path = Path(settings_path)
    if not path.exists():
        return {}

    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}

    settings = json.loads(text)
    if not isinstance(settings, dict):
        raise ValueError(f"{settings_path} does not contain a JSON object")
    return settings


def _ensure_command(entries: List[Dict[str, Any]], matcher: str, command: str) -> bool:
    """Add command under matcher. Returns True when settings changed."""
    for entry in entries:
        if entry.get("matcher") != matcher:
            continue
        hooks = entry.setdefault("hooks", [])
        if any(hook.get("command") == command for hook in hooks):
            return False
        hooks.append({"type": "command", "command": command})
        return True

    entries.append(
        {"matcher": matcher, "hooks": [{"type": "command", "command": command}]}
    )
    return True


def register_hooks(settings: Dict[str, Any]) -> List[str]:
    """
    Add every claude-hooks registration to a settings dict in place.

    Returns:
        Descriptions of the registrations that were added
    """
    hooks_section = settings.setdefault("hooks", {})
    added = []
    for event, matcher, hook_type in HOOK_REGISTRATIONS:
        command = f"{HOOK_COMMAND} {hook_type}"
        entries = hooks_section.setdefault(event, [])
        if _ensure_command(entries, matcher, command):
            added.append(f"{event} [{matcher}] -> {command}")
    return added


def install(settings_path: str = DEFAULT_SETTINGS_PATH) -> List[str]:
    """Register hooks in the settings file, creating it when needed."""
    settings = load_settings(settings_path)
    added = register_hooks(settings)

    path = Path(settings_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(settings, indent=2) + "\n", encoding="utf-8")

    log_info("settings_installer", f"Registered {len(added)} hook(s) in {settings_path}")
    return added


def main():
    """Entry point for claude-hooks-setup."""
    parser = argparse.ArgumentParser(
        prog="claude-hooks-setup",
        description="Register claude-hooks in Claude Code settings",
    )
    parser.add_argument(
        "--settings",
        default=DEFAULT_SETTINGS_PATH,
        help=f"settings.json to update (default: {DEFAULT_SETTINGS_PATH})",
    )
    args = parser.parse_args()

    try:
        added = install(args.settings)
    except (OSError, ValueError) as e:
        log_error("settings_installer", f"Failed to update {args.settings}", e)
        print(f"Error: could not update {args.settings}: {e}", file=sys.stderr)
        sys.exit(1)

    if added:
        print(f"Updated {args.settings}:")
        for line in added:
            print(f"  + {line}")
    else:
        print(f"All hooks already registered in {args.settings}")


if __name__ == "__main__":
    main()
