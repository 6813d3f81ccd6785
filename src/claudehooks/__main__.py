#!/usr/bin/env python3
"""CLI entry point for python -m claudehooks."""

from .hook import main


if __name__ == "__main__":
    main()
