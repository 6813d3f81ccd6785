#!/usr/bin/env python3
"""
Configuration loading for Claude Hooks.

Reads the optional YAML config file and overlays it on DEFAULT_CONFIG:
- Missing or empty file returns the defaults
- Invalid YAML logs a warning and returns the defaults
- Keys with the wrong type fall back to their default value
"""

import copy
import os
from typing import Any, Dict, Optional

import yaml

from .constants import CONFIG_PATH_ENV_VAR, DEFAULT_CONFIG, DEFAULT_CONFIG_PATH
from .logger import log_warning

_LIST_KEYS = ("denied_executables", "protected_branches", "warn_only_steps")


def get_config_path() -> str:
    """Config path, honouring the CLAUDE_HOOKS_CONFIG override."""
    return os.environ.get(CONFIG_PATH_ENV_VAR, DEFAULT_CONFIG_PATH)


def _merge_reviewers(defaults: Dict[str, Any], overrides: Any) -> Dict[str, Any]:
    """Overlay per-reviewer model/timeout settings onto the defaults."""
    merged = copy.deepcopy(defaults)
    if not isinstance(overrides, dict):
        return merged

    for name, settings in overrides.items():
        if name not in merged or not isinstance(settings, dict):
            continue
        if isinstance(settings.get("model"), str) and settings["model"]:
            merged[name]["model"] = settings["model"]
        timeout = settings.get("timeout_seconds")
        if isinstance(timeout, (int, float)) and timeout > 0:
            merged[name]["timeout_seconds"] = timeout

    return merged


def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load hook configuration from YAML.

    Args:
        config_path: Path to YAML config (default: ~/.claude-hooks/config.yaml)

    Returns:
        Complete configuration dict; every DEFAULT_CONFIG key is present
    """
    config = copy.deepcopy(DEFAULT_CONFIG)
    config_path = config_path or get_config_path()

    try:
        if not os.path.exists(config_path):
            return config

        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)

    except yaml.YAMLError as e:
        log_warning("config", "Failed to parse YAML config, using defaults", e)
        return config
    except UnicodeDecodeError as e:
        log_warning("config", "Config file is not valid UTF-8, using defaults", e)
        return config
    except OSError as e:
        log_warning("config", "Failed to read config file, using defaults", e)
        return config

    if not isinstance(data, dict):
        return config

    if isinstance(data.get("log_level"), int):
        config["log_level"] = data["log_level"]

    for key in _LIST_KEYS:
        value = data.get(key)
        if isinstance(value, list) and all(isinstance(v, str) for v in value):
            config[key] = value
        elif value is not None:
            log_warning("config", f"Ignoring '{key}': expected a list of strings")

    config["reviewers"] = _merge_reviewers(
        DEFAULT_CONFIG["reviewers"], data.get("reviewers")
    )

    return config
