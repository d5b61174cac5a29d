#!/usr/bin/env python3
"""Exercise Timer entry point.

Run with:
    python main.py
    python -m exercisetimer
"""

from exercisetimer.__main__ import main


if __name__ == "__main__":
    main()
