"""
Search tools for findfiles.

This module contains the traversal engine, its filter chain and wildcard
matcher, the filesystem providers, and the advanced find tool built on them.
"""

from .fs_walker import FSWalker, SearchError, SearchTimedOut, find_files

__all__ = ['FSWalker', 'SearchError', 'SearchTimedOut', 'find_files']
