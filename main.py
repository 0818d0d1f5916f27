#!/usr/bin/env python3
"""
scoutcam (wrapper)

Wrapper script so the tools can be run from a checkout without -m.
Uses scripts.run.main internally.
"""

import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent))

from scripts.run import main

if __name__ == "__main__":
    sys.exit(main())
