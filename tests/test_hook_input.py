#!/usr/bin/env python3
"""
Tests for hook payload parsing and edited-file collection.
"""

import json

import pytest

from claudehooks.hook_input import collect_files, parse_hook_input


class TestParseHookInput:
    @pytest.mark.parametrize("raw", ["", "   \n", "{broken", "[1, 2]", '"text"'])
    def test_nothing_to_do(self, raw):
        assert parse_hook_input(raw) is None

    def test_object(self):
        payload = {"tool_name": "Bash", "tool_input": {"command": "ls"}}

        assert parse_hook_input(json.dumps(payload)) == payload

    def test_tool_input_is_always_a_dict(self):
        assert parse_hook_input('{"tool_name": "Bash"}')["tool_input"] == {}
        assert parse_hook_input('{"tool_input": "oops"}')["tool_input"] == {}


class TestCollectFiles:
    def test_single_and_multiple(self):
        files = collect_files({"file_path": "a.go", "file_paths": ["b.go", "a.go", "c.ts"]})

        assert files == ["a.go", "b.go", "c.ts"]

    def test_excludes_vendor_and_generated(self):
        files = collect_files(
            {
                "file_paths": [
                    "/src/vendor/lib/x.go",
                    "/src/api/service.pb.go",
                    "/src/api/mock.gen.go",
                    "/src/api/service.go",
                ]
            }
        )

        assert files == ["/src/api/service.go"]

    def test_ignores_non_strings(self):
        assert collect_files({"file_path": None, "file_paths": [1, "", "ok.ts"]}) == ["ok.ts"]

    def test_empty(self):
        assert collect_files({}) == []
