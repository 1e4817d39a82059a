#!/usr/bin/env python3
"""
INTERCEPT LINE Launcher
========================
Run this script to start the game.
"""

from intercept_line.main import main

if __name__ == "__main__":
    main()
