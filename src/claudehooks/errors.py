#!/usr/bin/env python3
"""Exceptions raised by Claude Hooks modules."""


class ClaudeHooksError(Exception):
    """Base class for all Claude Hooks errors."""


class TranscriptReadError(ClaudeHooksError):
    """Transcript file could not be opened or read."""


class PlanNotFoundError(ClaudeHooksError):
    """No assistant turn in the transcript looks like a plan."""


class QualityCheckError(ClaudeHooksError):
    """
    A language pipeline found blocking issues.

    The message carries the aggregated tool output that is reported
    back to Claude.
    """
