"""
Filesystem access for the search engine.

This module provides the metadata provider (directory listing, stat and
content reads) and the content classifier (MIME type guessing) that the
traversal engine depends on. Both are small interfaces so tests and callers
can substitute their own implementations.
"""

import os
import stat
import mimetypes
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List


DEFAULT_MIME_TYPE = 'application/octet-stream'


@dataclass(frozen=True)
class DirEntry:
    """
    A single entry returned by a directory listing.

    Attributes:
        name: Bare entry name (no directory component)
        is_dir: Whether the entry is a directory
        is_file: Whether the entry is a regular file
    """
    name: str
    is_dir: bool
    is_file: bool


@dataclass(frozen=True)
class FileStat:
    """
    Stat metadata for a single path.

    Attributes:
        size: Size in bytes
        created: Creation instant (birth time where available, else ctime)
        modified: Last modification instant
        is_dir: Whether the path is a directory
        is_file: Whether the path is a regular file
    """
    size: int
    created: datetime
    modified: datetime
    is_dir: bool
    is_file: bool


class MetadataProvider:
    """
    Interface for listing directories and reading file metadata.

    Every method may raise OSError for a single path; the engine treats such
    failures as "skip this unit" and never retries.
    """

    def list_dir(self, path: str) -> List[DirEntry]:
        raise NotImplementedError

    def stat(self, path: str) -> FileStat:
        raise NotImplementedError

    def read_text(self, path: str) -> str:
        raise NotImplementedError


class LocalFileSystem(MetadataProvider):
    """Metadata provider backed by the local filesystem."""

    def list_dir(self, path: str) -> List[DirEntry]:
        """
        List the entries of a directory.

        Args:
            path: Directory to list

        Returns:
            Entries in the order the operating system reports them

        Raises:
            OSError: If the directory cannot be listed
        """
        entries = []
        with os.scandir(path) as it:
            for entry in it:
                try:
                    is_dir = entry.is_dir()
                    is_file = entry.is_file()
                except OSError:
                    is_dir = is_file = False
                entries.append(DirEntry(name=entry.name, is_dir=is_dir, is_file=is_file))
        return entries

    def stat(self, path: str) -> FileStat:
        """
        Read stat metadata, following symbolic links.

        Raises:
            OSError: If the path cannot be stat'ed
        """
        stat_result = os.stat(path)

        # Birth time is only reported on some platforms
        if hasattr(stat_result, 'st_birthtime'):
            created_ts = stat_result.st_birthtime
        else:
            created_ts = stat_result.st_ctime

        return FileStat(
            size=stat_result.st_size,
            created=datetime.fromtimestamp(created_ts, tz=timezone.utc),
            modified=datetime.fromtimestamp(stat_result.st_mtime, tz=timezone.utc),
            is_dir=stat.S_ISDIR(stat_result.st_mode),
            is_file=stat.S_ISREG(stat_result.st_mode),
        )

    def read_text(self, path: str) -> str:
        """
        Read a whole file as UTF-8 text.

        Raises:
            OSError: If the file cannot be read
            UnicodeDecodeError: If the content is not valid UTF-8
        """
        with open(path, 'r', encoding='utf-8') as f:
            return f.read()


class ContentClassifier:
    """Interface for labelling files with a content type."""

    def classify(self, path: str) -> str:
        raise NotImplementedError


class MimeTypeClassifier(ContentClassifier):
    """
    Classifies files by MIME type guessed from their name.

    Never fails: unknown types are labelled ``application/octet-stream``.
    """

    def __init__(self, default: str = DEFAULT_MIME_TYPE):
        self.default = default

    def classify(self, path: str) -> str:
        mime_type, _ = mimetypes.guess_type(path)
        return mime_type or self.default


def is_textual(mime_type: str) -> bool:
    """Check whether a classifier label denotes text content."""
    return mime_type.startswith('text/')
