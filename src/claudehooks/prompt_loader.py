#!/usr/bin/env python3
"""
Prompt loader for externalized prompt and message templates.

Templates live in per-hook subfolders of the prompts directory and use
{{variable}} placeholders.
"""

import re
from pathlib import Path
from typing import Dict, Optional


class PromptLoader:
    """Loads templates from prompts/<subfolder>/<name> with variable replacement."""

    def __init__(self, prompts_base_dir: Optional[str] = None):
        """
        Initialize PromptLoader.

        Args:
            prompts_base_dir: Base directory for prompts (default: src/claudehooks/prompts)
        """
        if prompts_base_dir:
            self.prompts_dir = Path(prompts_base_dir)
        else:
            self.prompts_dir = Path(__file__).parent / "prompts"

    def load_prompt(
        self,
        name: str,
        subfolder: str,
        variables: Optional[Dict[str, str]] = None,
    ) -> str:
        """
        Load a template file and replace its placeholders.

        Args:
            name: Template filename (e.g., "review_prompt.md")
            subfolder: Hook-type subfolder (e.g., "plan_review")
            variables: Values for {{var}} placeholders

        Returns:
            Template content with variables replaced

        Raises:
            FileNotFoundError: If the template does not exist
            ValueError: If placeholders remain after replacement
        """
        path = self.prompts_dir / subfolder / name
        if not path.exists():
            raise FileNotFoundError(
                f"Prompt '{name}' not found at {path}. "
                "This indicates a broken installation; reinstall claude-hooks."
            )

        return self._load_and_replace(path, variables)

    def _load_and_replace(self, path: Path, variables: Optional[Dict[str, str]]) -> str:
        template = path.read_text(encoding="utf-8")
        variables = variables or {}

        unreplaced = [
            key for key in re.findall(r"\{\{(\w+)\}\}", template) if key not in variables
        ]
        if unreplaced:
            raise ValueError(f"Unreplaced placeholders in {path.name}: {unreplaced}")

        # Single pass so values containing "{{...}}" (plans, commands) stay literal
        content = re.sub(
            r"\{\{(\w+)\}\}", lambda match: variables[match.group(1)], template
        )

        return content.rstrip("\n")
