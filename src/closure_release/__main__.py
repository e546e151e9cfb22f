#!/usr/bin/env python3
"""
closure-release - Release version automation
Main entry point for the application.
"""

from .cli import main

if __name__ == '__main__':
    main()
