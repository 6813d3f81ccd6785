#!/usr/bin/env python3
"""Dataclasses shared by the command guard and the plan review pipeline."""

from dataclasses import dataclass, field
from typing import Any, List, Optional


@dataclass(frozen=True)
class ConversationTurn:
    role: str  # "user" or "assistant"
    content: Any  # plain string or list of content blocks


@dataclass(frozen=True)
class PlanCandidate:
    text: str
    score: int


@dataclass(frozen=True)
class GuardDecision:
    """Outcome of classifying one shell command line."""

    allowed: bool
    reason: str = ""
    sub_command: str = ""
    rule: str = ""  # "denied_executable", "protected_branch" or ""


@dataclass(frozen=True)
class ReviewerSpec:
    """How to invoke one external AI review CLI."""

    name: str  # config key, e.g. "claude"
    label: str  # display name in the report
    executable: str
    model: str
    timeout_seconds: float
    args: List[str] = field(default_factory=list)
    install_hint: str = ""

    def build_command(self, prompt: str) -> List[str]:
        return [self.executable, *self.args, "--model", self.model, prompt]


@dataclass(frozen=True)
class ReviewOutcome:
    """
    Result of one reviewer invocation.

    When error is set, feedback holds a user-facing placeholder rather
    than real review text.
    """

    reviewer_name: str
    feedback: str
    error: Optional[str] = None
    duration: str = "0s"

    @property
    def succeeded(self) -> bool:
        return not self.error


@dataclass(frozen=True)
class PlanReviewResult:
    reviews: List[ReviewOutcome]
    summary: str
