#!/usr/bin/env python3
"""
TypeScript / JavaScript quality pipeline.

Runs eslint --fix on the edited files, then a project-wide tsc --noEmit.
Each step is skipped when its tool is not installed.
"""

from typing import List

from ..logger import log_debug
from .base import (
    LanguageHook,
    is_command_available,
    print_header,
    run_tool,
    truncate_output,
    warn,
)


class TypeScriptHook(LanguageHook):
    name = "typescript"

    def post_edit(self, files: List[str]) -> None:
        if not files:
            return None

        errors: List[str] = []

        lint_error = self.run_eslint(files)
        if lint_error:
            self.collect_failure("lint", lint_error, errors)

        typecheck_error = self.run_tsc()
        if typecheck_error:
            self.collect_failure("typecheck", typecheck_error, errors)

        self.finish(errors, "typescript checks failed")

    def run_eslint(self, files: List[str]) -> str:
        if not is_command_available("eslint"):
            log_debug("typescript_hook", "eslint not found, skipping")
            return ""

        print_header("Running eslint --fix")
        code, output = run_tool(["eslint", "--fix", *files])
        if code == 0:
            print("  ✓ eslint passed")
            return ""

        if self.verbose:
            warn(f"eslint output:\n{output}")
        return "eslint failed:\n" + truncate_output(output.strip())

    def run_tsc(self) -> str:
        if not is_command_available("tsc"):
            log_debug("typescript_hook", "tsc not found, skipping")
            return ""

        print_header("Running tsc --noEmit")
        code, output = run_tool(["tsc", "--noEmit"])
        if code == 0:
            print("  ✓ Type check passed")
            return ""

        if self.verbose:
            warn(f"tsc output:\n{output}")
        return "tsc type check failed:\n" + truncate_output(output.strip())
