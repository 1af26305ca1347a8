#!/usr/bin/env python3
"""
Minefield - Main entry point.

Usage:
    python main.py play [--difficulty {beginner,intermediate,expert}] [--seed N]
    python main.py demo [--difficulty {beginner,intermediate,expert}]
                        [--games N] [--seed N] [--delay S]
"""
import sys

from src.minefield.cli import main


if __name__ == "__main__":
    sys.exit(main())
