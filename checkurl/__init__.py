"""
checkurl - batch URL reachability checker with rendered screenshots
"""

__version__ = "1.0.0"
