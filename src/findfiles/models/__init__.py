"""
Data models for findfiles.

This module contains all the core data structures used throughout the system.
"""

from .search_config import SearchConfig
from .search_results import MatchRecord, SearchResults, format_file_size

__all__ = ['SearchConfig', 'MatchRecord', 'SearchResults', 'format_file_size']
