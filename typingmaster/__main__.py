#!/usr/bin/env python3
"""
Typing Master - Main executable entry point
Allows the module to be executed with: python -m typingmaster
"""

from .main_app import main

if __name__ == "__main__":
    main()
