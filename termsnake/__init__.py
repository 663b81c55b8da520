"""
termsnake - Snake in the terminal.

Steer with w/a/s/d or the arrow keys, q quits.
"""

__version__ = "0.1.0"
