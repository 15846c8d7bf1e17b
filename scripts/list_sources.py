#!/usr/bin/env python3
"""
Source Listing Script

Prints every discoverable source as "<id>\t<display name>".

Usage:
    python3 scripts/list_sources.py
    python3 scripts/list_sources.py --sources-dir data/sources
"""

import os
import sys

# Add project root to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from ymlfeed.cli import list_main


if __name__ == "__main__":
    sys.exit(list_main())
