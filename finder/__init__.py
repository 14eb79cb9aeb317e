"""
Finder Module

Command-line front end for fuzzy path search.

This module provides:
- YAML-based configuration loading with command-line overrides
- Typer CLI for running searches
- Logging setup
- Text, JSON and CSV result rendering
"""

__version__ = "0.1.0"
