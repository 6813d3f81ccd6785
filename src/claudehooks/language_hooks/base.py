#!/usr/bin/env python3
"""
Shared plumbing for language pipelines.

Pipelines print their progress on stdout; when the hook answers Claude with
JSON, stdout is redirected to stderr for the duration of the run so the
JSON response stays the only thing on stdout.
"""

import contextlib
import os
import shutil
import subprocess
import sys
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Tuple

from ..constants import MAX_TOOL_OUTPUT_CHARS
from ..errors import QualityCheckError


class LanguageHook:
    """
    Quality pipeline for one language.

    Subclasses implement post_edit; pre_edit is a no-op unless overridden.
    Both raise QualityCheckError with the failure text when checks fail.
    """

    name = "base"

    def __init__(self, warn_only_steps: Optional[List[str]] = None, verbose: bool = False):
        self.warn_only_steps = set(warn_only_steps or [])
        self.verbose = verbose

    def pre_edit(self, files: List[str]) -> None:
        return None

    def post_edit(self, files: List[str]) -> None:
        raise NotImplementedError

    def post_edit_json(self, files: List[str]) -> None:
        """Run post_edit with stdout routed to stderr."""
        if not files:
            return None
        with redirect_stdout_to_stderr():
            return self.post_edit(files)

    def is_blocking(self, step: str) -> bool:
        """Whether a failing step blocks, honouring config warn_only_steps."""
        return step not in self.warn_only_steps

    def collect_failure(self, step: str, message: str, errors: List[str]) -> None:
        """Record a failed step as blocking error or downgraded warning."""
        if self.is_blocking(step):
            errors.append(message)
        else:
            warn(f"{step} (warn-only): {message}")

    def finish(self, errors: List[str], title: str) -> None:
        if errors:
            raise QualityCheckError(f"{title}:\n\n" + "\n\n".join(errors))


@contextlib.contextmanager
def redirect_stdout_to_stderr() -> Iterator[None]:
    with contextlib.redirect_stdout(sys.stderr):
        yield


def warn(message: str) -> None:
    print(f"⚠️  {message}", file=sys.stderr)


def is_command_available(name: str) -> bool:
    """Check if a command is available on PATH."""
    return shutil.which(name) is not None


def run_tool(args: List[str], cwd: Optional[str] = None) -> Tuple[int, str]:
    """
    Run an external tool and capture combined stdout/stderr.

    Returns:
        (returncode, output); a tool that cannot be started returns 127
    """
    try:
        result = subprocess.run(
            args,
            cwd=cwd,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
        )
    except OSError as e:
        return 127, str(e)
    return result.returncode, result.stdout or ""


def truncate_output(output: str, limit: int = MAX_TOOL_OUTPUT_CHARS) -> str:
    """Limit tool output so Claude is not overwhelmed."""
    if len(output) <= limit:
        return output
    return output[:limit] + "\n... (output truncated, use verbose mode to see all issues)"


def find_module_root(directory: str, marker: str = "go.mod") -> str:
    """
    Walk up from a directory to the nearest one containing marker.

    Returns:
        The module root, or the absolute starting directory when none is found
    """
    start = Path(os.path.abspath(directory))
    for candidate in [start, *start.parents]:
        if (candidate / marker).exists():
            return str(candidate)
    return str(start)


def group_dirs_by_module(files: List[str], marker: str = "go.mod") -> Dict[str, List[str]]:
    """
    Map module root -> package directories (relative, "." for the root).

    Directories are de-duplicated and keep first-seen order.
    """
    modules: Dict[str, List[str]] = {}
    for path in files:
        directory = os.path.dirname(os.path.abspath(path))
        root = find_module_root(directory, marker)
        relative = os.path.relpath(directory, root)
        package = "." if relative == "." else "./" + relative
        packages = modules.setdefault(root, [])
        if package not in packages:
            packages.append(package)
    return modules


def print_header(title: str) -> None:
    print(f"\n===== {title} =====")
