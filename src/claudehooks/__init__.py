#!/usr/bin/env python3
"""
Claude Hooks - quality, safety and plan-review hooks for Claude Code.

Runs per-language quality pipelines after edits, gates shell commands
before execution and fans plans out to an AI review council.
"""

__version__ = "1.0.0"
