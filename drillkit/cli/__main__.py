"""
Entry point for running the drill CLI as a module.

Usage:
    python -m drillkit.cli domains
    python -m drillkit.cli start kana
    python -m drillkit.cli --help
"""
from .drill_cli import main

if __name__ == "__main__":
    main()
