#!/usr/bin/env python
"""
Finger Paint - Main Entry Point
===============================
Run the finger painting sketch.
"""

import sys
from pathlib import Path

# Load environment variables from .env file
from dotenv import load_dotenv
load_dotenv(Path(__file__).parent / ".env")

from fingerpaint.ui import main

if __name__ == "__main__":
    sys.exit(main())
