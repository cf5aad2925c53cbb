#!/usr/bin/env python3
"""
Script to score the sample tweets against the polarity lexicon.
"""
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from floresta.__main__ import main

if __name__ == "__main__":
    sys.exit(main())
