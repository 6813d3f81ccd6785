#!/usr/bin/env python3
"""
Plan extraction from JSONL transcripts.

When Claude leaves plan mode, the plan itself is somewhere in the preceding
assistant turns. Each assistant turn is scored with a heuristic; the most
plan-like one wins, and on a tie the later turn wins because a restated
plan supersedes an earlier draft.

The heuristic has known false positives and negatives. Short conversational
fillers such as "Now let me write up the implementation plan." used to be
picked over the real plan, hence the minimum length rule.
"""

import json
import re
from typing import Any, Iterable, Iterator, Optional

from .constants import MIN_PLAN_LENGTH
from .errors import PlanNotFoundError, TranscriptReadError
from .logger import log_debug
from .models import ConversationTurn, PlanCandidate

HEADING_WEIGHT = 100
NUMBERED_LIST_WEIGHT = 20
CHECKLIST_WEIGHT = 20
PLAN_KEYWORD_WEIGHT = 10
STEP_KEYWORD_WEIGHT = 5

_PLAN_HEADING = re.compile(
    r"^[ \t]{0,3}#{1,6}[ \t]+.*(Plan|Implementation|Proposed Approach)",
    re.MULTILINE,
)


def score_plan(content: str) -> int:
    """
    Score how plan-like one assistant turn is.

    Args:
        content: Concatenated text of the turn

    Returns:
        Non-negative score; 0 means "not a plan"
    """
    if not content or len(content) < MIN_PLAN_LENGTH:
        return 0

    score = 0
    lower = content.lower()

    if _PLAN_HEADING.search(content):
        score += HEADING_WEIGHT

    if "1. " in content and "2. " in content:
        score += NUMBERED_LIST_WEIGHT
    if "- [ ]" in content or "- [x]" in content:
        score += CHECKLIST_WEIGHT

    if "plan" in lower:
        score += PLAN_KEYWORD_WEIGHT
    if "step" in lower:
        score += STEP_KEYWORD_WEIGHT

    return score


def extract_content_text(content: Any) -> str:
    """
    Flatten message content into text.

    Strings are returned as-is; lists of blocks contribute the "text" of
    every block that has one, joined with newlines.
    """
    if isinstance(content, str):
        return content

    if isinstance(content, list):
        parts = []
        for block in content:
            if isinstance(block, dict) and isinstance(block.get("text"), str):
                parts.append(block["text"])
        return "\n".join(parts)

    return ""


def select_plan(turns: Iterable[ConversationTurn]) -> Optional[PlanCandidate]:
    """
    Pick the most plan-like assistant turn.

    Returns:
        Best candidate (latest among equal scores), or None if nothing scores above 0
    """
    best: Optional[PlanCandidate] = None

    for turn in turns:
        if turn.role != "assistant":
            continue

        text = extract_content_text(turn.content)
        score = score_plan(text)
        if score <= 0:
            continue

        if best is None or score >= best.score:
            best = PlanCandidate(text=text, score=score)

    return best


def read_transcript_turns(transcript_path: str) -> Iterator[ConversationTurn]:
    """
    Yield conversation turns from a JSONL transcript.

    Blank lines, malformed JSON and entries without a message role are skipped.

    Raises:
        TranscriptReadError: If the file cannot be opened
    """
    try:
        f = open(transcript_path, "r", encoding="utf-8")
    except OSError as e:
        raise TranscriptReadError(f"failed to read transcript: {e}") from e

    with f:
        for line_number, line in enumerate(f, 1):
            if not line.strip():
                continue

            try:
                entry = json.loads(line)
            except json.JSONDecodeError:
                log_debug("plan_extractor", f"Skipping malformed line {line_number}")
                continue

            if not isinstance(entry, dict):
                continue
            message = entry.get("message")
            if not isinstance(message, dict):
                continue

            role = message.get("role")
            if role not in ("user", "assistant"):
                continue

            yield ConversationTurn(role=role, content=message.get("content", ""))


def extract_plan_from_transcript(transcript_path: str) -> str:
    """
    Extract the plan text from a transcript.

    Raises:
        TranscriptReadError: If the transcript cannot be read
        PlanNotFoundError: If no assistant turn looks like a plan
    """
    log_debug("plan_extractor", f"Reading transcript from: {transcript_path}")

    candidate = select_plan(read_transcript_turns(transcript_path))
    if candidate is None:
        raise PlanNotFoundError("no plan content found in transcript")

    log_debug(
        "plan_extractor",
        f"Selected plan with score {candidate.score} ({len(candidate.text)} chars)",
    )
    return candidate.text

