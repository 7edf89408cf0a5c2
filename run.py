#!/usr/bin/env python3
"""ghedit - Entry Point.

Usage:
    python run.py -r github.com/owner/repo -b main -f path/to/file -e 'regex' -v 'value' -t TOKEN
    python run.py -r github.com/owner/repo -b main -f path/to/file -e 'regex' -v 'value' --dry-run
    python run.py --help

A .env file in the current directory is loaded by ghedit.cli.main.
"""

import sys
from pathlib import Path

# Add src to path for development imports
SCRIPT_DIR = Path(__file__).resolve().parent
SRC_DIR = SCRIPT_DIR / "src"
sys.path.insert(0, str(SRC_DIR))

from ghedit.cli import main

if __name__ == "__main__":
    main()
