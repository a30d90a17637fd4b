"""
The advanced file-finding tool.

This module is the boundary between callers (for example a tool server) and
the search engine. It accepts the tool's raw arguments, converts calendar
dates into instants, fills unset options from the application configuration,
runs the search and renders the outcome as text.
"""

import logging
from datetime import date, datetime, timezone
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from .fs_walker import FSWalker, SearchTimedOut
from ..models.config import FinderConfig
from ..models.search_config import SearchConfig
from ..models.search_results import SearchResults, format_file_size, format_instant


logger = logging.getLogger(__name__)

NO_DIRECTORIES_MESSAGE = "Please specify at least one directory to search."
NO_RESULTS_MESSAGE = "No files found matching the search criteria."


class FileType(Enum):
    """Top-level MIME type families accepted by the type filter."""
    TEXT = "text"
    IMAGE = "image"
    AUDIO = "audio"
    VIDEO = "video"
    APPLICATION = "application"


class FindFilesRequest(BaseModel):
    """
    Arguments accepted by the advanced find tool.

    Dates are calendar days (``YYYY-MM-DD``) and are converted to UTC
    midnight before reaching the engine. Options left unset fall back to the
    application configuration.
    """

    directories: List[str] = Field(default_factory=list, description="The directory paths to start the search from")
    filename: Optional[str] = Field(None, description="The name or wildcard pattern of the file (e.g. *.txt, file*, *test*)")
    extension: Optional[str] = Field(None, description="The file extension to search for (e.g. pdf, txt, jpg)")
    min_size: Optional[int] = Field(None, ge=0, description="Minimum file size in bytes")
    max_size: Optional[int] = Field(None, ge=0, description="Maximum file size in bytes")
    created_after: Optional[date] = Field(None, description="Files created after this date (YYYY-MM-DD)")
    created_before: Optional[date] = Field(None, description="Files created before this date (YYYY-MM-DD)")
    modified_after: Optional[date] = Field(None, description="Files modified after this date (YYYY-MM-DD)")
    modified_before: Optional[date] = Field(None, description="Files modified before this date (YYYY-MM-DD)")
    recursive: Optional[bool] = Field(None, description="Whether to search subdirectories recursively")
    case_sensitive: Optional[bool] = Field(None, description="Whether filename matching is case-sensitive")
    content_search: Optional[str] = Field(None, description="Text to search for in file contents (text files only)")
    file_type: Optional[FileType] = Field(None, description="Filter by file type (text, image, audio, video, application)")
    max_results: Optional[int] = Field(None, gt=0, description="Maximum number of results to return")
    timeout_ms: Optional[int] = Field(None, gt=0, description="Maximum search time in milliseconds")

    @field_validator('directories', mode='before')
    @classmethod
    def validate_directories(cls, v):
        """Accept a single directory and drop blank entries."""
        if v is None:
            return []
        if isinstance(v, str):
            v = [v]
        return [d for d in v if isinstance(d, str) and d.strip()]


def to_instant(value: Optional[date]) -> Optional[datetime]:
    """Convert a calendar date to UTC midnight."""
    if value is None:
        return None
    return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)


def build_search_config(request: FindFilesRequest, finder_config: Optional[FinderConfig] = None) -> SearchConfig:
    """
    Build the engine's search configuration from a tool request.

    Args:
        request: Validated tool arguments
        finder_config: Application configuration supplying defaults

    Returns:
        SearchConfig for the engine

    Raises:
        ValueError: If neither the request nor the configuration names a directory
    """
    finder_config = finder_config or FinderConfig()
    directories = request.directories or finder_config.roots
    if not directories:
        raise ValueError(NO_DIRECTORIES_MESSAGE)

    defaults = finder_config.search
    return SearchConfig(
        start_paths=directories,
        name_pattern=request.filename,
        extension=request.extension,
        min_size=request.min_size,
        max_size=request.max_size,
        created_after=to_instant(request.created_after),
        created_before=to_instant(request.created_before),
        modified_after=to_instant(request.modified_after),
        modified_before=to_instant(request.modified_before),
        recursive=defaults.recursive if request.recursive is None else request.recursive,
        case_sensitive=defaults.case_sensitive if request.case_sensitive is None else request.case_sensitive,
        content_substring=request.content_search,
        type_prefix=request.file_type.value if request.file_type else None,
        max_results=request.max_results or finder_config.limits.max_results,
        timeout_ms=request.timeout_ms or finder_config.limits.timeout_ms,
        partial_results_on_timeout=defaults.partial_results_on_timeout,
    )


def render_results(results: SearchResults) -> str:
    """
    Render search results as the tool's text output.

    Args:
        results: Completed search results

    Returns:
        Text listing one block per matched file
    """
    if results.is_empty():
        text = NO_RESULTS_MESSAGE
    else:
        blocks = []
        for match in results.matches:
            blocks.append(
                f"Path: {match.path}\n"
                f"Size: {format_file_size(match.size)}\n"
                f"Created: {format_instant(match.created)}\n"
                f"Modified: {format_instant(match.modified)}\n"
                f"Type: {match.mime_type}\n"
            )
        text = f"{results.get_match_count()} files found:\n\n" + "\n".join(blocks)

    if results.truncated:
        text += "\n(Search timed out; results are incomplete.)"

    return text


def advanced_find_files(
    request: FindFilesRequest,
    finder_config: Optional[FinderConfig] = None,
    walker: Optional[FSWalker] = None,
) -> str:
    """
    Run the advanced find tool and return its text output.

    Args:
        request: Tool arguments
        finder_config: Application configuration supplying defaults
        walker: Engine to run the search with

    Returns:
        Rendered results, or a message describing why the search failed
    """
    finder_config = finder_config or FinderConfig()
    if not (request.directories or finder_config.roots):
        return NO_DIRECTORIES_MESSAGE

    try:
        search_config = build_search_config(request, finder_config)
    except ValueError as e:
        logger.info(f"Rejected find request: {e}")
        return f"Invalid search request: {e}"

    walker = walker or FSWalker()
    try:
        results = walker.search(search_config)
    except SearchTimedOut as e:
        return f"An error occurred during file search: {e}"

    return render_results(results)
