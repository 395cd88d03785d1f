#!/usr/bin/env python3
"""
URL Checker
Checks a list of URLs, captures screenshots and writes an HTML report
"""

from checkurl.cli import main

if __name__ == "__main__":
    main()
