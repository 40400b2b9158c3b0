"""
Package version.

Kept in one place so ``cloudlog.__version__`` and packaging stay in sync.
"""

__version__ = "0.1.0"
