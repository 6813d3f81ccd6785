#!/usr/bin/env python3
"""
Unit tests for externalized prompt template loading.
"""

import pytest

from claudehooks.prompt_loader import PromptLoader


@pytest.fixture
def prompts_dir(tmp_path):
    folder = tmp_path / "prompts" / "pre_bash"
    folder.mkdir(parents=True)
    (folder / "greeting.md").write_text("Hello {{name}}, you ran {{command}}\n\n")
    return str(tmp_path / "prompts")


class TestPromptLoader:
    def test_replaces_variables_and_trims_trailing_newlines(self, prompts_dir):
        loader = PromptLoader(prompts_dir)

        text = loader.load_prompt("greeting.md", "pre_bash", {"name": "Ada", "command": "ls"})

        assert text == "Hello Ada, you ran ls"

    def test_values_are_not_expanded_again(self, prompts_dir):
        loader = PromptLoader(prompts_dir)

        text = loader.load_prompt(
            "greeting.md", "pre_bash", {"name": "{{command}}", "command": "ls"}
        )

        assert text == "Hello {{command}}, you ran ls"

    def test_missing_variable_raises(self, prompts_dir):
        loader = PromptLoader(prompts_dir)

        with pytest.raises(ValueError, match="command"):
            loader.load_prompt("greeting.md", "pre_bash", {"name": "Ada"})

    def test_missing_template_raises(self, prompts_dir):
        loader = PromptLoader(prompts_dir)

        with pytest.raises(FileNotFoundError):
            loader.load_prompt("absent.md", "pre_bash")

    def test_packaged_templates_load(self):
        loader = PromptLoader()

        text = loader.load_prompt(
            "protected_branch.md",
            "pre_bash",
            {"branch": "main", "command": "git commit -m x", "sub_command": "git commit -m x"},
        )

        assert "Direct commits to the 'main' branch are not allowed" in text
        assert "git checkout -b feature/your-feature-name" in text
        assert "call ExitPlanMode again" in loader.load_prompt(
            "revise_instruction.md", "plan_review"
        )
