#!/usr/bin/env python3
"""
CLI entry point for contenttypes.cli module.

This allows running: python -m contenttypes.cli
"""

from .main import cli

if __name__ == "__main__":
    cli()
