#!/usr/bin/env python3
"""crt-cpu command line entry point.

Usage:
    python main.py --program programs/larger_example.txt
    python main.py --program programs/larger_example.txt --mode crt
"""

import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent / "src"))

from crt_cpu.cli import main


if __name__ == "__main__":
    sys.exit(main())
