#!/usr/bin/env python3
"""
Tests for YAML configuration loading.
"""

from claudehooks.config import get_config_path, load_config
from claudehooks.constants import DEFAULT_CONFIG


def write_config(path, text):
    with open(path, "w") as f:
        f.write(text)


class TestLoadConfig:
    def test_missing_file_returns_defaults(self, tmp_path):
        assert load_config(str(tmp_path / "nope.yaml")) == DEFAULT_CONFIG

    def test_defaults_are_copies(self, tmp_path):
        config = load_config(str(tmp_path / "nope.yaml"))
        config["denied_executables"].append("psql")
        config["reviewers"]["claude"]["model"] = "changed"

        assert "psql" not in DEFAULT_CONFIG["denied_executables"]
        assert DEFAULT_CONFIG["reviewers"]["claude"]["model"] != "changed"

    def test_empty_file_returns_defaults(self, isolated_hook_home):
        write_config(isolated_hook_home["config_path"], "")

        assert load_config() == DEFAULT_CONFIG

    def test_env_var_selects_path(self, isolated_hook_home):
        assert get_config_path() == isolated_hook_home["config_path"]

    def test_overrides(self, isolated_hook_home):
        write_config(
            isolated_hook_home["config_path"],
            "log_level: 4\n"
            "denied_executables: [psql, mongo]\n"
            "protected_branches: [release]\n"
            "warn_only_steps: [test]\n"
            "reviewers:\n"
            "  gemini:\n"
            "    model: gemini-3-pro\n"
            "    timeout_seconds: 30\n",
        )

        config = load_config()

        assert config["log_level"] == 4
        assert config["denied_executables"] == ["psql", "mongo"]
        assert config["protected_branches"] == ["release"]
        assert config["warn_only_steps"] == ["test"]
        assert config["reviewers"]["gemini"] == {"model": "gemini-3-pro", "timeout_seconds": 30}
        assert config["reviewers"]["claude"] == DEFAULT_CONFIG["reviewers"]["claude"]

    def test_invalid_yaml_returns_defaults_and_logs(self, isolated_hook_home):
        write_config(isolated_hook_home["config_path"], "log_level: [unclosed\n")

        assert load_config() == DEFAULT_CONFIG
        with open(isolated_hook_home["log_path"]) as f:
            assert "Failed to parse YAML config" in f.read()

    def test_non_utf8_file_returns_defaults_and_logs(self, isolated_hook_home):
        with open(isolated_hook_home["config_path"], "wb") as f:
            f.write(b"log_level: 4\nprotected_branches: [r\xe9lease]\n\xff\xfe\n")

        assert load_config() == DEFAULT_CONFIG
        with open(isolated_hook_home["log_path"]) as f:
            assert "not valid UTF-8" in f.read()

    def test_wrong_types_fall_back(self, isolated_hook_home):
        write_config(
            isolated_hook_home["config_path"],
            "denied_executables: mysql\n"
            "protected_branches: [1, 2]\n"
            "reviewers:\n"
            "  claude:\n"
            "    timeout_seconds: -5\n"
            "  unknown:\n"
            "    model: x\n",
        )

        config = load_config()

        assert config["denied_executables"] == DEFAULT_CONFIG["denied_executables"]
        assert config["protected_branches"] == DEFAULT_CONFIG["protected_branches"]
        assert config["reviewers"] == DEFAULT_CONFIG["reviewers"]

    def test_non_mapping_document(self, isolated_hook_home):
        write_config(isolated_hook_home["config_path"], "- just\n- a list\n")

        assert load_config() == DEFAULT_CONFIG
