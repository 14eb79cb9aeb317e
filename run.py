#!/usr/bin/env python3
"""
shodh quick-start script (cross-platform)

Runs the CLI straight from a checkout, without installing the package.

Usage:
  python run.py kilo                     # search the current directory
  python run.py kilo src --files-only    # only files below src/
  python run.py resume ~/Documents -n 20 # top 20 matches
  python run.py --help                   # show help
"""

from finder.cli import main


if __name__ == "__main__":
    main()
