#!/usr/bin/env python3
"""
Tests for extension-based language detection.
"""

import pytest

from claudehooks.file_types import Language, detect_language, group_files_by_language


class TestDetectLanguage:
    @pytest.mark.parametrize(
        "path,language",
        [
            ("main.go", Language.GO),
            ("App.TSX", Language.TYPESCRIPT),
            ("index.ts", Language.TYPESCRIPT),
            ("script.js", Language.JAVASCRIPT),
            ("view.jsx", Language.JAVASCRIPT),
            ("tool.py", Language.PYTHON),
        ],
    )
    def test_known(self, path, language):
        assert detect_language(path) is language

    @pytest.mark.parametrize("path", ["README.md", "Makefile", "archive.tar.gz"])
    def test_unknown(self, path):
        assert detect_language(path) is None


def test_group_preserves_first_seen_order():
    groups = group_files_by_language(["b.ts", "a.go", "notes.txt", "c.go", "d.js"])

    assert list(groups) == [Language.TYPESCRIPT, Language.GO, Language.JAVASCRIPT]
    assert groups[Language.GO] == ["a.go", "c.go"]
