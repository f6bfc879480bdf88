"""Module entrypoint for the split-flap board.

Run:
  python -m flapboard --ticker XYZ
"""

from __future__ import annotations

from .main import main


if __name__ == "__main__":
    main()
