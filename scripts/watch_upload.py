#!/usr/bin/env python3
"""
ModulePush Watch Script.

Runs the watcher from a source checkout without installing the package.
Requires Python 3.11+.

Usage:
    python scripts/watch_upload.py -d ./src -e me@example.com -p secret
"""

import sys
from pathlib import Path

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))

from cli.app import main


if __name__ == "__main__":
    sys.exit(main())
