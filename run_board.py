#!/usr/bin/env python3
"""Launch the split-flap board TUI with sane defaults."""
from __future__ import annotations

import os

from flapboard.main import main


if __name__ == "__main__":
    os.environ.setdefault("FLAPBOARD_TICKER", "XYZ")
    main()
