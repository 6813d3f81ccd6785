#!/usr/bin/env python3
"""
AI Council plan review.

Sends the selected plan to three AI command-line reviewers (Claude, Codex,
Gemini) at the same time and merges their answers into one report.

Each reviewer runs as its own asyncio task with its own deadline. A missing
CLI, a non-zero exit or a timeout only marks that reviewer's outcome as
failed; the other reviewers keep running and the report always has three
sections in fixed order.
"""

import asyncio
import time
from typing import Any, Dict, List, Optional

from .constants import REVIEWER_CLAUDE, REVIEWER_CODEX, REVIEWER_GEMINI
from .errors import PlanNotFoundError, TranscriptReadError
from .logger import log_debug, log_info, log_warning
from .models import PlanReviewResult, ReviewerSpec, ReviewOutcome
from .plan_extractor import extract_plan_from_transcript
from .prompt_loader import PromptLoader

_prompt_loader = PromptLoader()

SUCCESS_ICON = "✅"
FAILURE_ICON = "⚠️"

REVIEWER_COUNT = 3

# Static part of each reviewer's invocation; model and timeout come from config
_REVIEWER_DEFINITIONS = [
    {
        "name": REVIEWER_CLAUDE,
        "display_name": "Claude",
        "executable": "claude",
        "args": ["--print", "--dangerously-skip-permissions"],
        "install_hint": "npm install -g @anthropic-ai/claude-code",
    },
    {
        "name": REVIEWER_CODEX,
        "display_name": "Codex",
        "executable": "codex",
        "args": ["exec", "--dangerously-bypass-approvals-and-sandbox"],
        "install_hint": "npm install -g @openai/codex",
    },
    {
        "name": REVIEWER_GEMINI,
        "display_name": "Gemini",
        "executable": "gemini",
        "args": ["--yolo", "--output-format", "text"],
        "install_hint": "npm install -g @google/gemini-cli",
    },
]


def get_reviewers(config: Dict[str, Any]) -> List[ReviewerSpec]:
    """
    Build the three reviewer specs in report order.

    Args:
        config: Loaded configuration with a "reviewers" section

    Returns:
        Reviewer specs for Claude, Codex and Gemini
    """
    settings = config.get("reviewers", {})
    reviewers = []
    for definition in _REVIEWER_DEFINITIONS:
        reviewer_settings = settings.get(definition["name"], {})
        model = reviewer_settings.get("model", "")
        label = definition["display_name"]
        if model:
            label = f"{label} ({model})"
        reviewers.append(
            ReviewerSpec(
                name=definition["name"],
                label=label,
                executable=definition["executable"],
                model=model,
                timeout_seconds=reviewer_settings.get("timeout_seconds", 120),
                args=list(definition["args"]),
                install_hint=definition["install_hint"],
            )
        )
    return reviewers


def build_review_prompt(plan: str) -> str:
    """Wrap the plan in the review instruction template."""
    return _prompt_loader.load_prompt(
        "review_prompt.md", "plan_review", {"plan": plan}
    )


def format_duration(seconds: float) -> str:
    """
    Format elapsed seconds rounded to whole seconds, e.g. "0s", "42s", "1m5s".
    """
    total = int(round(seconds))
    minutes, secs = divmod(total, 60)
    if minutes:
        return f"{minutes}m{secs}s"
    return f"{secs}s"


def _short_name(reviewer: ReviewerSpec) -> str:
    return reviewer.executable.capitalize()


async def run_reviewer(reviewer: ReviewerSpec, prompt: str) -> ReviewOutcome:
    """
    Run one reviewer CLI with its own deadline.

    Never raises: every failure is returned as an outcome with error set.
    """
    name = _short_name(reviewer)
    start = time.monotonic()
    log_debug("plan_review", f"Starting {reviewer.label} review...")

    def outcome(feedback: str, error: Optional[str] = None) -> ReviewOutcome:
        result = ReviewOutcome(
            reviewer_name=reviewer.label,
            feedback=feedback,
            error=error,
            duration=format_duration(time.monotonic() - start),
        )
        if error:
            log_warning("plan_review", f"{name} review error: {error}")
        else:
            log_info("plan_review", f"{name} review complete ({result.duration})")
        return result

    try:
        process = await asyncio.create_subprocess_exec(
            *reviewer.build_command(prompt),
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except FileNotFoundError:
        return outcome(
            f"{FAILURE_ICON} {name} CLI not available - install with: {reviewer.install_hint}",
            f"{name} CLI not installed ({reviewer.install_hint})",
        )
    except (OSError, ValueError) as e:
        # ValueError covers arguments the OS rejects, such as embedded NUL bytes
        return outcome(
            f"{FAILURE_ICON} {name} review failed - see error",
            f"{name} review failed: {e}",
        )

    try:
        stdout, stderr = await asyncio.wait_for(
            process.communicate(), timeout=reviewer.timeout_seconds
        )
    except asyncio.TimeoutError:
        process.kill()
        await process.wait()
        limit = format_duration(reviewer.timeout_seconds)
        return outcome(
            f"{FAILURE_ICON} {name} review timed out",
            f"{name} review timed out ({limit})",
        )
    except Exception as e:
        if process.returncode is None:
            process.kill()
            await process.wait()
        return outcome(
            f"{FAILURE_ICON} {name} review failed - see error",
            f"{name} review failed: {e}",
        )

    if process.returncode != 0:
        diagnostics = stderr.decode("utf-8", errors="replace").strip()
        return outcome(
            f"{FAILURE_ICON} {name} review failed - see error",
            f"{name} review failed: exit status {process.returncode} - {diagnostics}",
        )

    return outcome(stdout.decode("utf-8", errors="replace").strip())


async def _run_all_reviewers(
    prompt: str, reviewers: List[ReviewerSpec]
) -> List[ReviewOutcome]:
    # gather keeps argument order, so each reviewer owns its slot
    outcomes = await asyncio.gather(
        *(run_reviewer(reviewer, prompt) for reviewer in reviewers)
    )
    return list(outcomes)


def run_reviewers(prompt: str, reviewers: List[ReviewerSpec]) -> List[ReviewOutcome]:
    """
    Run all reviewers concurrently and wait for every one of them.

    Returns:
        One outcome per reviewer, in the order of ``reviewers``
    """
    return asyncio.run(_run_all_reviewers(prompt, reviewers))


def build_review_summary(reviews: List[ReviewOutcome]) -> str:
    """Render the outcomes as a markdown report in reviewer order."""
    lines = [
        "## 🧠 AI Council Plan Review",
        "",
        "Your plan has been reviewed by three AI models. "
        "Consider their feedback before finalizing.",
        "",
    ]

    success_count = sum(1 for review in reviews if review.succeeded)
    lines += [f"**Reviews completed:** {success_count}/{REVIEWER_COUNT}", "", "---", ""]

    for index, review in enumerate(reviews):
        icon = SUCCESS_ICON if review.succeeded else FAILURE_ICON
        lines += [f"### {icon} {review.reviewer_name} ({review.duration})", ""]

        if review.error:
            lines += [f"*Error: {review.error}*", ""]

        lines += [review.feedback, ""]

        if index < len(reviews) - 1:
            lines += ["---", ""]

    return "\n".join(lines)


def review_plan(
    config: Dict[str, Any],
    transcript_path: str = "",
    plan_content: str = "",
) -> PlanReviewResult:
    """
    Review a plan with the AI Council.

    Args:
        config: Loaded configuration (reviewer models and timeouts)
        transcript_path: Transcript to select the plan from
        plan_content: Plan text used when the transcript yields no plan

    Returns:
        Three reviewer outcomes and the combined markdown summary

    Raises:
        TranscriptReadError: If the transcript cannot be read and no plan_content is given
        PlanNotFoundError: If no plan can be found
    """
    plan = ""
    if transcript_path:
        try:
            plan = extract_plan_from_transcript(transcript_path)
        except (PlanNotFoundError, TranscriptReadError) as e:
            if not plan_content:
                raise
            log_debug("plan_review", f"Using plan from tool input: {e}")

    if not plan:
        plan = plan_content

    if not plan:
        raise PlanNotFoundError("no plan content found to review")

    preview = plan if len(plan) <= 500 else plan[:500] + "..."
    log_debug("plan_review", f"Plan to review ({len(plan)} chars):\n{preview}")

    reviews = run_reviewers(build_review_prompt(plan), get_reviewers(config))
    return PlanReviewResult(reviews=reviews, summary=build_review_summary(reviews))
