#!/usr/bin/env python3
"""Limber entry point.

Run with:
    python main.py
    python -m limber
"""

from limber.__main__ import main


if __name__ == "__main__":
    main()
