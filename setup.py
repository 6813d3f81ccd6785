#!/usr/bin/env python3
"""Setup script for Claude Hooks."""

from setuptools import setup, find_packages


setup(
    name="claude-hooks",
    version="1.0.0",
    description="Quality, safety and plan-review hooks for Claude Code",
    author="Brian Leishman",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    python_requires=">=3.9",
    install_requires=[
        "pyyaml>=6.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "claude-hooks=claudehooks.hook:main",
            "claude-hooks-setup=claudehooks.settings_installer:main",
        ],
    },
    package_data={
        "claudehooks": ["prompts/*/*.md"],
    },
    include_package_data=True,
)
