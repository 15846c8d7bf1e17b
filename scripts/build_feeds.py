#!/usr/bin/env python3
"""
Feed Build Script

Builds one YML feed per source and prints one line per written file.

Usage:
    python3 scripts/build_feeds.py
    python3 scripts/build_feeds.py --source-id shop-a --output-dir /srv/files
    python3 scripts/build_feeds.py --print-license
"""

import os
import sys

# Add project root to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from ymlfeed.cli import build_main


if __name__ == "__main__":
    sys.exit(build_main())
