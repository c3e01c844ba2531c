"""
Quiz engine.

Partitions subject question banks into fixed tests, runs serial or randomized
attempts with a mistakes retry, and keeps the best result of every test.
"""

from .config.loader import load_settings

__all__ = ["load_settings"]
