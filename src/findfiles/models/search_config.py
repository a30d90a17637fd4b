"""
Search configuration data model for findfiles.

This module defines the immutable set of parameters that drives one search:
start directories, filter criteria and the two termination limits.
"""

from typing import Dict, List, Optional, Any
from datetime import datetime, timezone
from pathlib import Path
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


DEFAULT_MAX_RESULTS = 1000
DEFAULT_TIMEOUT_MS = 30000


class SearchConfig(BaseModel):
    """
    Represents one search with all filters and limits.

    Attributes:
        start_paths: Directories to start from, in order (duplicates kept)
        name_pattern: Wildcard pattern over the bare file name
        extension: File extension without the leading dot
        min_size: Inclusive lower size bound in bytes
        max_size: Inclusive upper size bound in bytes
        created_after: Exclusive lower bound on creation time
        created_before: Exclusive upper bound on creation time
        modified_after: Exclusive lower bound on modification time
        modified_before: Exclusive upper bound on modification time
        recursive: Whether to descend into subdirectories
        case_sensitive: Whether the name pattern is compared case-sensitively
        content_substring: Text that textual files must contain
        type_prefix: Prefix the file's MIME type must start with
        max_results: Maximum number of matches to return
        timeout_ms: Wall-clock budget for the whole search
        partial_results_on_timeout: Return accumulated matches instead of raising
    """

    model_config = ConfigDict(frozen=True)

    start_paths: List[str] = Field(..., min_length=1, description="Directories to start the search from")
    name_pattern: Optional[str] = Field(None, description="Wildcard pattern for file names")
    extension: Optional[str] = Field(None, description="File extension without leading dot")
    min_size: Optional[int] = Field(None, ge=0, description="Minimum file size in bytes")
    max_size: Optional[int] = Field(None, ge=0, description="Maximum file size in bytes")
    created_after: Optional[datetime] = Field(None, description="Files created strictly after this instant")
    created_before: Optional[datetime] = Field(None, description="Files created strictly before this instant")
    modified_after: Optional[datetime] = Field(None, description="Files modified strictly after this instant")
    modified_before: Optional[datetime] = Field(None, description="Files modified strictly before this instant")
    recursive: bool = Field(True, description="Whether to search subdirectories")
    case_sensitive: bool = Field(False, description="Case-sensitive file name matching")
    content_substring: Optional[str] = Field(None, description="Text to search for in text files")
    type_prefix: Optional[str] = Field(None, description="MIME type prefix, e.g. 'image'")
    max_results: int = Field(DEFAULT_MAX_RESULTS, gt=0, description="Maximum number of results")
    timeout_ms: int = Field(DEFAULT_TIMEOUT_MS, gt=0, description="Search timeout in milliseconds")
    partial_results_on_timeout: bool = Field(False, description="Return partial results when the search times out")

    @field_validator('start_paths')
    @classmethod
    def validate_start_paths(cls, v: List[str]) -> List[str]:
        """Expand user directories, keeping order, duplicates and surrounding spaces."""
        normalized = []
        for path in v:
            if not path or not path.strip():
                raise ValueError("Start paths cannot be empty")
            normalized.append(str(Path(path).expanduser()))
        return normalized

    @field_validator('extension')
    @classmethod
    def validate_extension(cls, v: Optional[str]) -> Optional[str]:
        """Strip a leading dot so the stored value is the bare suffix."""
        if v is None:
            return v
        v = v.strip()
        if v.startswith('.'):
            v = v[1:]
        return v or None

    @field_validator('name_pattern', 'content_substring', 'type_prefix')
    @classmethod
    def validate_optional_text(cls, v: Optional[str]) -> Optional[str]:
        """Treat empty strings as "not set"."""
        if v == "":
            return None
        return v

    @field_validator('created_after', 'created_before', 'modified_after', 'modified_before')
    @classmethod
    def validate_instant(cls, v: Optional[datetime]) -> Optional[datetime]:
        """Make naive datetimes UTC so they compare with file timestamps."""
        if v is not None and v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v

    @model_validator(mode='after')
    def validate_ranges(self):
        """Reject size bounds that cannot both hold."""
        if self.min_size is not None and self.max_size is not None:
            if self.min_size > self.max_size:
                raise ValueError("min_size must be <= max_size")
        return self

    def has_filters(self) -> bool:
        """Check if any file filter is active."""
        return any(value is not None for value in (
            self.name_pattern,
            self.extension,
            self.min_size,
            self.max_size,
            self.created_after,
            self.created_before,
            self.modified_after,
            self.modified_before,
            self.content_substring,
            self.type_prefix,
        ))

    def to_dict(self) -> Dict[str, Any]:
        """Convert the search configuration to a dictionary."""
        return self.model_dump(mode='json')

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SearchConfig':
        """Create a SearchConfig instance from a dictionary."""
        return cls.model_validate(data)

    def __str__(self) -> str:
        """String representation of the search configuration."""
        parts = [f"Roots: {len(self.start_paths)} directories"]

        if self.name_pattern:
            parts.append(f"Pattern: '{self.name_pattern}'")

        if self.has_filters():
            parts.append("Filters applied")

        parts.append(f"Recursive: {self.recursive}")
        parts.append(f"Max results: {self.max_results}")
        parts.append(f"Timeout: {self.timeout_ms}ms")

        return " | ".join(parts)
