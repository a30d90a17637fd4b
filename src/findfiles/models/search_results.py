"""
Search results data models for findfiles.

This module defines the records produced by a search: one MatchRecord per
qualifying file, and the SearchResults set that carries them in discovery
order along with execution statistics.
"""

from typing import Dict, List, Any
from datetime import datetime, timezone
from pydantic import BaseModel, Field

from .search_config import SearchConfig


SIZE_UNITS = ['B', 'KB', 'MB', 'GB', 'TB']


def format_file_size(size_bytes: int) -> str:
    """
    Format a byte count using binary units.

    Divides by 1024 until the value is below 1024 or the largest unit is
    reached, and renders it with two decimals.

    Args:
        size_bytes: Size in bytes

    Returns:
        Human-readable size, e.g. ``"1.50 KB"``
    """
    size = float(size_bytes)
    unit_index = 0
    while size >= 1024 and unit_index < len(SIZE_UNITS) - 1:
        size /= 1024
        unit_index += 1
    return f"{size:.2f} {SIZE_UNITS[unit_index]}"


def format_instant(value: datetime) -> str:
    """Format an instant as ISO-8601 in UTC with millisecond precision."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    utc = value.astimezone(timezone.utc)
    return utc.isoformat(timespec='milliseconds').replace('+00:00', 'Z')


class MatchRecord(BaseModel):
    """
    A single file that satisfied every active filter.

    Attributes:
        path: Path of the file, joined from its start directory
        size: File size in bytes
        created: Creation instant
        modified: Last modification instant
        mime_type: Content-type label assigned by the classifier
    """

    path: str = Field(..., min_length=1, description="Path to the matched file")
    size: int = Field(..., ge=0, description="File size in bytes")
    created: datetime = Field(..., description="Creation timestamp")
    modified: datetime = Field(..., description="Last modification timestamp")
    mime_type: str = Field(..., description="Content type of the file")

    def get_size_human_readable(self) -> str:
        """Get file size in human-readable format."""
        return format_file_size(self.size)

    def to_dict(self) -> Dict[str, Any]:
        """Convert the record to its caller-facing representation."""
        return {
            'path': self.path,
            'size': self.size,
            'size_human': self.get_size_human_readable(),
            'created': format_instant(self.created),
            'modified': format_instant(self.modified),
            'mime_type': self.mime_type,
        }

    def __str__(self) -> str:
        return f"{self.path} ({self.get_size_human_readable()}, {self.mime_type})"


class SearchResults(BaseModel):
    """
    Complete results from a search operation.

    Attributes:
        config: The search configuration that produced these results
        matches: Matched files in discovery (breadth-first) order
        total_scanned: Number of files run through the filter chain
        directories_traversed: Number of directories successfully listed
        execution_time: Time taken by the search in seconds
        truncated: True when the search timed out and returned partial results
        timestamp: When the search finished
    """

    config: SearchConfig = Field(..., description="The search configuration")
    matches: List[MatchRecord] = Field(default_factory=list, description="Matched files")
    total_scanned: int = Field(0, ge=0, description="Total number of files examined")
    directories_traversed: int = Field(0, ge=0, description="Number of directories listed")
    execution_time: float = Field(0.0, ge=0.0, description="Time taken to execute the search")
    truncated: bool = Field(False, description="Whether the search stopped on timeout")
    timestamp: datetime = Field(default_factory=datetime.now, description="When the search was executed")

    def get_match_count(self) -> int:
        """Get the total number of matches."""
        return len(self.matches)

    def is_empty(self) -> bool:
        """Check if the search found nothing."""
        return not self.matches

    def to_dict(self) -> Dict[str, Any]:
        """Convert search results to dictionary representation."""
        return {
            'config': self.config.to_dict(),
            'matches': [match.to_dict() for match in self.matches],
            'match_count': self.get_match_count(),
            'total_scanned': self.total_scanned,
            'directories_traversed': self.directories_traversed,
            'execution_time': self.execution_time,
            'truncated': self.truncated,
            'timestamp': self.timestamp.isoformat(),
        }

    def __str__(self) -> str:
        """String representation of search results."""
        parts = [f"Found {self.get_match_count()} matches"]
        parts.append(f"Scanned {self.total_scanned} files")
        parts.append(f"Took {self.execution_time:.2f}s")

        if self.truncated:
            parts.append("Truncated by timeout")

        return " | ".join(parts)
