#!/usr/bin/env python3
"""
Hook entry point for Claude Code integration.

Usage: claude-hooks <type> [-v] [files...]

Hook types:
- post-edit:     run language pipelines on edited files (default)
- pre-edit:      run pre-edit checks on files about to be edited
- pre-bash:      gate Bash commands (denied executables, protected branches)
- plan-review:   AI Council review of the plan when leaving plan mode
- session-start: print the project's agents.md into the session

The payload arrives as JSON on stdin. Every handler degrades to "allow"
on unexpected errors; only explicit denials and check failures block.
"""

import argparse
import json
import sys
from typing import Any, Dict, List, Optional

from .command_guard import classify_command
from .config import load_config
from .constants import (
    HOOK_TYPE_PLAN_REVIEW,
    HOOK_TYPE_POST_EDIT,
    HOOK_TYPE_PRE_BASH,
    HOOK_TYPE_PRE_EDIT,
    HOOK_TYPE_SESSION_START,
    HOOK_TYPES,
)
from .errors import PlanNotFoundError, QualityCheckError, TranscriptReadError
from .file_types import group_files_by_language
from .hook_input import collect_files, parse_hook_input
from .language_hooks import get_hook
from .logger import log_debug, log_error, log_info, log_warning, set_verbose
from .plan_review import review_plan
from .prompt_loader import PromptLoader
from .session_start import run_session_start

BASH_TOOL_NAMES = ("Bash", "bash")
EXIT_PLAN_MODE_TOOL = "ExitPlanMode"

_prompt_loader = PromptLoader()


def read_stdin() -> str:
    """Read the stdin payload; an interactive terminal has none."""
    if sys.stdin is None or sys.stdin.isatty():
        return ""
    return sys.stdin.read()


def emit_json(payload: Dict[str, Any]):
    print(json.dumps(payload), file=sys.stdout, flush=True)


def deny_tool_use(reason: str) -> Dict[str, Any]:
    """PreToolUse response that denies the tool call."""
    return {
        "hookSpecificOutput": {
            "hookEventName": "PreToolUse",
            "permissionDecision": "deny",
            "permissionDecisionReason": reason,
        }
    }


def run_pre_bash(hook_input: Optional[dict], config: Dict[str, Any]) -> int:
    """
    Gate a Bash command.

    Denials are reported through the JSON decision, so the exit code is 0
    either way.
    """
    if not hook_input:
        return 0

    tool_name = hook_input.get("tool_name", "")
    if tool_name not in BASH_TOOL_NAMES:
        log_debug("hook", f"Not a Bash tool call ({tool_name!r}), allowing")
        return 0

    command = hook_input["tool_input"].get("command") or ""
    if not isinstance(command, str) or not command.strip():
        return 0

    decision = classify_command(command, hook_input, config)
    if decision.allowed:
        return 0

    emit_json(deny_tool_use(decision.reason))
    print(f"❌ BLOCKED: {decision.sub_command}", file=sys.stderr)
    print(decision.reason, file=sys.stderr)
    return 0


def run_plan_review(hook_input: Optional[dict], config: Dict[str, Any]) -> int:
    """
    Review the plan when Claude calls ExitPlanMode.

    The review is returned as a deny decision so Claude reads the feedback
    and calls ExitPlanMode again once the plan is final.
    """
    if not hook_input:
        return 0

    tool_name = hook_input.get("tool_name", "")
    if tool_name != EXIT_PLAN_MODE_TOOL:
        log_debug("hook", f"Plan review skipped for tool {tool_name!r}")
        return 0

    plan_content = hook_input["tool_input"].get("plan") or ""
    transcript_path = hook_input.get("transcript_path") or ""

    print("🧠 AI Council reviewing plan...", file=sys.stderr)
    try:
        result = review_plan(
            config,
            transcript_path=transcript_path,
            plan_content=plan_content if isinstance(plan_content, str) else "",
        )
    except (PlanNotFoundError, TranscriptReadError) as e:
        log_warning("hook", "Plan review skipped", e)
        print(f"⚠️  Plan review skipped: {e}", file=sys.stderr)
        return 0

    rule = "=" * 60
    print(f"\n{rule}\n{result.summary}\n{rule}\n", file=sys.stderr)

    instruction = _prompt_loader.load_prompt("revise_instruction.md", "plan_review")
    emit_json(deny_tool_use(result.summary + "\n\n" + instruction))
    return 0


def _resolve_files(hook_input: Optional[dict], cli_files: List[str]) -> List[str]:
    if hook_input:
        files = collect_files(hook_input["tool_input"])
        if files:
            return files
    return collect_files({"file_paths": cli_files})


def run_post_edit(
    hook_input: Optional[dict],
    cli_files: List[str],
    config: Dict[str, Any],
    verbose: bool = False,
) -> int:
    """
    Run language pipelines on edited files.

    Failures are returned to Claude as a block decision on stdout; pipeline
    progress goes to stderr so stdout only carries that JSON.
    """
    files = _resolve_files(hook_input, cli_files)
    if not files:
        log_debug("hook", "No files to check")
        return 0

    errors = []
    for language, language_files in group_files_by_language(files).items():
        hook = get_hook(language, config, verbose)
        if hook is None:
            print(
                f"ℹ️  No checks configured for {language.value} files, skipping",
                file=sys.stderr,
            )
            continue

        log_info("hook", f"Running {hook.name} checks on {len(language_files)} file(s)")
        try:
            hook.post_edit_json(language_files)
        except QualityCheckError as e:
            log_info("hook", f"{hook.name} checks failed")
            errors.append(str(e))

    if errors:
        emit_json({"decision": "block", "reason": "\n\n".join(errors)})
        return 0

    print("✅ All checks passed!", file=sys.stderr)
    return 0


def run_pre_edit(
    hook_input: Optional[dict],
    cli_files: List[str],
    config: Dict[str, Any],
    verbose: bool = False,
) -> int:
    """Run pre-edit checks. A failure exits 2 so Claude sees stderr."""
    files = _resolve_files(hook_input, cli_files)
    for language, language_files in group_files_by_language(files).items():
        hook = get_hook(language, config, verbose)
        if hook is None:
            continue
        try:
            hook.pre_edit(language_files)
        except QualityCheckError as e:
            print(str(e), file=sys.stderr)
            return 2
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="claude-hooks",
        description="Quality gates and plan review hooks for Claude Code",
    )
    parser.add_argument(
        "type",
        nargs="?",
        default=HOOK_TYPE_POST_EDIT,
        help=f"hook type: {', '.join(HOOK_TYPES)} (default: {HOOK_TYPE_POST_EDIT})",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="echo log messages to stderr"
    )
    parser.add_argument("files", nargs="*", help="files to check when stdin has no payload")
    return parser


def main(argv: Optional[List[str]] = None):
    """Entry point for hook script."""
    args = build_parser().parse_intermixed_args(argv)
    set_verbose(args.verbose)

    if args.type not in HOOK_TYPES:
        print(
            f"[CLAUDE-HOOKS ERROR] Unknown hook type: {args.type} "
            f"(expected one of: {', '.join(HOOK_TYPES)})",
            file=sys.stderr,
        )
        sys.exit(2)

    config = load_config()

    try:
        raw_input = read_stdin()
        if args.type == HOOK_TYPE_SESSION_START:
            run_session_start(raw_input)
            exit_code = 0
        else:
            hook_input = parse_hook_input(raw_input)
            if args.type == HOOK_TYPE_PRE_BASH:
                exit_code = run_pre_bash(hook_input, config)
            elif args.type == HOOK_TYPE_PLAN_REVIEW:
                exit_code = run_plan_review(hook_input, config)
            elif args.type == HOOK_TYPE_PRE_EDIT:
                exit_code = run_pre_edit(hook_input, args.files, config, args.verbose)
            else:
                exit_code = run_post_edit(hook_input, args.files, config, args.verbose)
    except Exception as e:
        # Graceful degradation - log error and allow
        log_error("hook", f"{args.type} hook failed", e)
        print(f"[CLAUDE-HOOKS ERROR] {args.type}: {e}", file=sys.stderr)
        exit_code = 0

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
