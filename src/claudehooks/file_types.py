#!/usr/bin/env python3
"""
File classification by extension.

Maps edited files to the language pipeline that checks them. Extension
matching is case-insensitive; files with unknown extensions are skipped.
"""

from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional


class Language(Enum):
    GO = "go"
    TYPESCRIPT = "typescript"
    JAVASCRIPT = "javascript"
    PYTHON = "python"


EXTENSION_LANGUAGES: Dict[str, Language] = {
    ".go": Language.GO,
    ".ts": Language.TYPESCRIPT,
    ".tsx": Language.TYPESCRIPT,
    ".js": Language.JAVASCRIPT,
    ".jsx": Language.JAVASCRIPT,
    ".py": Language.PYTHON,
}


def detect_language(filepath: str) -> Optional[Language]:
    """Language of a file, or None for unsupported extensions."""
    return EXTENSION_LANGUAGES.get(Path(filepath).suffix.lower())


def group_files_by_language(files: List[str]) -> Dict[Language, List[str]]:
    """
    Group files by language, keeping first-seen language and file order.

    Args:
        files: Edited file paths

    Returns:
        Mapping of language to its files; unsupported files are omitted
    """
    groups: Dict[Language, List[str]] = {}
    for path in files:
        language = detect_language(path)
        if language is None:
            continue
        groups.setdefault(language, []).append(path)
    return groups
