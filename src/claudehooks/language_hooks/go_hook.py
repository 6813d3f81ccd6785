#!/usr/bin/env python3
"""
Go quality pipeline.

Steps:
1. goimports   - import formatting (warnings only)
2. gofumpt     - stricter formatting (warnings only, when installed)
3. linters     - golangci-lint blocking + warning sets, or go vet fallback
4. tests       - go test for packages whose files have tests
5. go mod tidy - dependency cleanup (warnings only)
"""

import os
from typing import List

from ..constants import MAX_DISPLAYED_ISSUES, MAX_LINT_ISSUES
from ..logger import log_debug
from .base import (
    LanguageHook,
    group_dirs_by_module,
    is_command_available,
    print_header,
    run_tool,
    warn,
)

BLOCKING_LINTERS = ["gocritic", "govet", "ineffassign", "errcheck"]
WARNING_LINTERS = ["staticcheck", "unused"]

_UNPREFIXED_ERROR_MARKERS = ("undefined:", "error:", "warning:", "note:")


def filter_lint_output(output: str, edited_basenames: List[str]) -> List[str]:
    """
    Keep lint lines that concern the edited files.

    Lines of the form ``file.go:line:col: message`` are kept only when
    ``file.go`` was edited; lines without a file prefix are kept when they
    carry an error marker.
    """
    issues = []
    for raw_line in output.splitlines():
        line = raw_line.strip()
        if not line:
            continue

        if ".go:" in line:
            filename = os.path.basename(line.split(":", 1)[0])
            if filename in edited_basenames:
                issues.append(line)
        elif any(marker in line for marker in _UNPREFIXED_ERROR_MARKERS):
            issues.append(line)
    return issues


class GoHook(LanguageHook):
    name = "go"

    def post_edit(self, files: List[str]) -> None:
        if not files:
            return None

        print("==========================================")
        print(f"Running Go hooks on {len(files)} file(s)")
        print("==========================================")

        errors: List[str] = []

        self.run_goimports(files)
        if is_command_available("gofumpt"):
            self.run_gofumpt(files)

        lint_error = self.run_linters(files)
        if lint_error:
            self.collect_failure("lint", lint_error, errors)

        test_error = self.run_tests(files)
        if test_error:
            self.collect_failure("test", test_error, errors)

        if os.path.exists("go.mod"):
            self.run_go_mod_tidy()

        self.finish(errors, "go checks failed")

    def _run_diff_formatter(self, tool: str, files: List[str], label: str) -> None:
        has_diffs = False
        for path in files:
            code, output = run_tool([tool, "-d", path])
            if code != 0:
                warn(f"{tool} check failed on {path}: {output.strip()}")
                continue
            if output.strip():
                has_diffs = True
                if self.verbose:
                    warn(f"{label} suggestions for {path}:\n{output}")

        if has_diffs:
            warn(f"Some files have {label.lower()} suggestions (run {tool} -w to apply)")
        else:
            print(f"  ✓ {label} looks good")

    def run_goimports(self, files: List[str]) -> None:
        if not is_command_available("goimports"):
            log_debug("go_hook", "goimports not found, skipping")
            return
        print_header("Step 1/5: Running goimports (warnings only)")
        self._run_diff_formatter("goimports", files, "Import formatting")

    def run_gofumpt(self, files: List[str]) -> None:
        print_header("Step 2/5: Running gofumpt (warnings only)")
        self._run_diff_formatter("gofumpt", files, "Formatting")

    def run_linters(self, files: List[str]) -> str:
        """Returns the blocking lint report, or "" when clean."""
        print_header("Step 3/5: Running linters")
        modules = group_dirs_by_module(files)

        if not is_command_available("golangci-lint"):
            log_debug("go_hook", "golangci-lint not found, using go vet")
            return self._run_go_vet(modules)

        edited = [os.path.basename(path) for path in files]
        report: List[str] = []

        for module_root, packages in modules.items():
            log_debug("go_hook", f"Linting in module: {module_root}")

            blocking_args = ["golangci-lint", "run", "--timeout=5m"]
            blocking_args += [f"--enable={linter}" for linter in BLOCKING_LINTERS]
            code, output = run_tool(blocking_args + packages, cwd=module_root)

            if code != 0:
                issues = filter_lint_output(output, edited)
                if issues:
                    report.append(f"Linting issues in edited files from {module_root}:")
                    report.extend(issues[:MAX_LINT_ISSUES])
                    if len(issues) > MAX_LINT_ISSUES:
                        report.append(f"... and {len(issues) - MAX_LINT_ISSUES} more issues")
                    warn(f"Linting issues found in edited files from {module_root}")
                    for issue in issues[:MAX_DISPLAYED_ISSUES]:
                        warn(f"  {issue}")
                else:
                    print(f"  ✓ No linting issues found in edited files from {module_root}")
                if self.verbose:
                    warn(f"Full output:\n{output}")

            warning_args = ["golangci-lint", "run", "--timeout=5m"]
            warning_args += [f"--enable={linter}" for linter in WARNING_LINTERS]
            code, output = run_tool(warning_args + packages, cwd=module_root)
            if code != 0 and output.strip():
                suggestions = [line for line in output.splitlines() if line.strip()]
                if not self.verbose:
                    suggestions = suggestions[:MAX_DISPLAYED_ISSUES]
                shown = "\n".join(suggestions)
                warn(f"Code quality suggestions from {module_root}:\n{shown}")

        if report:
            return "linting failed:\n\n" + "\n".join(report)

        print("  ✓ No linting issues")
        return ""

    def _run_go_vet(self, modules) -> str:
        failures = []
        for module_root, packages in modules.items():
            for package in packages:
                code, output = run_tool(["go", "vet", package], cwd=module_root)
                if code != 0:
                    failures.append(f"go vet failed for {package} in {module_root}:\n{output.strip()}")
                    warn(failures[-1])

        if failures:
            return "go vet failed:\n\n" + "\n\n".join(failures)

        print("  ✓ go vet passed")
        return ""

    def run_tests(self, files: List[str]) -> str:
        """Returns the test failure report, or "" when tests pass or none exist."""
        print_header("Step 4/5: Running tests")

        testable = []
        for path in files:
            if path.endswith("_test.go"):
                testable.append(path)
            elif path.endswith(".go") and os.path.exists(path[: -len(".go")] + "_test.go"):
                testable.append(path)

        if not testable:
            print("  No test files found")
            return ""

        failures = []
        for module_root, packages in group_dirs_by_module(testable).items():
            log_debug("go_hook", f"Testing in module: {module_root}")
            for package in packages:
                code, output = run_tool(["go", "test", "-timeout=30s", package], cwd=module_root)
                if code != 0:
                    message = f"Tests failed in {package} (module: {module_root}):"
                    if output.strip():
                        message += "\n" + output.strip()
                    failures.append(message)
                    warn(message)
                elif self.verbose and output:
                    print(output, end="")

        if failures:
            return "tests failed:\n\n" + "\n\n".join(failures)

        print("  ✓ All tests passed")
        return ""

    def run_go_mod_tidy(self) -> None:
        print_header("Step 5/5: Running go mod tidy")
        code, output = run_tool(["go", "mod", "tidy"])
        if code != 0:
            warn(f"go mod tidy failed:\n{output}")
            return
        if self.verbose and output:
            print(output, end="")
        print("  ✓ Dependencies tidied")
