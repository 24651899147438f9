"""
Top-level package for the Tamil Names API.

All functionality lives in submodules under ``app``.
"""

__all__ = []
