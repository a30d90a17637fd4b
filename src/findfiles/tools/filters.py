"""
File filter chain for the search engine.

Each filter is an independent predicate over a FileCandidate. The chain runs
them in a fixed order and stops at the first one that rejects; content search
always runs last because it is the only filter that reads file data.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from .providers import FileStat, MetadataProvider, is_textual
from .wildcard import NameMatcher
from ..models.search_config import SearchConfig


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FileCandidate:
    """
    A discovered file waiting to be filtered.

    Attributes:
        path: Full path of the file
        name: Bare file name
        stat: Stat metadata of the file
        mime_type: Classifier label for the file
    """
    path: str
    name: str
    stat: FileStat
    mime_type: str


class FileFilter:
    """Base class for a single filter predicate."""

    name = 'filter'

    def evaluate(self, candidate: FileCandidate) -> bool:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class NamePatternFilter(FileFilter):
    """Accepts files whose name matches a wildcard pattern (or contains it)."""

    name = 'name_pattern'

    def __init__(self, pattern: str, case_sensitive: bool = False):
        self.matcher = NameMatcher(pattern, case_sensitive=case_sensitive)

    def evaluate(self, candidate: FileCandidate) -> bool:
        return self.matcher.matches(candidate.name)


class ExtensionFilter(FileFilter):
    """Accepts files whose name ends with ``.`` + extension."""

    name = 'extension'

    def __init__(self, extension: str):
        self.suffix = '.' + extension

    def evaluate(self, candidate: FileCandidate) -> bool:
        return candidate.name.endswith(self.suffix)


class SizeFilter(FileFilter):
    """Accepts files whose size lies within inclusive bounds."""

    name = 'size'

    def __init__(self, min_size: Optional[int] = None, max_size: Optional[int] = None):
        self.min_size = min_size
        self.max_size = max_size

    def evaluate(self, candidate: FileCandidate) -> bool:
        size = candidate.stat.size
        if self.min_size is not None and size < self.min_size:
            return False
        if self.max_size is not None and size > self.max_size:
            return False
        return True


class TimeRangeFilter(FileFilter):
    """
    Accepts files whose timestamp lies strictly inside (after, before).

    A timestamp equal to either bound is rejected.
    """

    def __init__(self, attribute: str, after: Optional[datetime] = None, before: Optional[datetime] = None):
        self.attribute = attribute
        self.name = attribute
        self.after = after
        self.before = before

    def evaluate(self, candidate: FileCandidate) -> bool:
        timestamp = getattr(candidate.stat, self.attribute)
        if self.after is not None and not timestamp > self.after:
            return False
        if self.before is not None and not timestamp < self.before:
            return False
        return True

    def __repr__(self) -> str:
        return f"TimeRangeFilter({self.attribute!r})"


class TypePrefixFilter(FileFilter):
    """Accepts files whose MIME type starts with a prefix."""

    name = 'type_prefix'

    def __init__(self, prefix: str):
        self.prefix = prefix

    def evaluate(self, candidate: FileCandidate) -> bool:
        return candidate.mime_type.startswith(self.prefix)


class ContentFilter(FileFilter):
    """
    Accepts text files whose content contains a substring.

    Files not classified as ``text/`` are rejected without being read. A read
    failure also rejects the file. Comparison is exact and case-sensitive.
    Non-text files are excluded here rather than passed through, so a content
    search never returns binaries. Text that is not valid UTF-8 counts as a
    read failure.
    """

    name = 'content'

    def __init__(self, substring: str, provider: MetadataProvider):
        self.substring = substring
        self.provider = provider

    def evaluate(self, candidate: FileCandidate) -> bool:
        if not is_textual(candidate.mime_type):
            return False

        try:
            content = self.provider.read_text(candidate.path)
        except (OSError, ValueError) as e:
            logger.debug(f"Cannot read {candidate.path} for content search: {e}")
            return False

        return self.substring in content


class FilterChain:
    """
    Ordered list of filters applied with short-circuit evaluation.

    An empty chain accepts every file.
    """

    def __init__(self, filters: Optional[List[FileFilter]] = None):
        self.filters = list(filters or [])

    def evaluate(self, candidate: FileCandidate) -> bool:
        for file_filter in self.filters:
            if not file_filter.evaluate(candidate):
                return False
        return True

    def __len__(self) -> int:
        return len(self.filters)

    def __repr__(self) -> str:
        return f"FilterChain({self.filters!r})"


def build_filter_chain(config: SearchConfig, provider: MetadataProvider) -> FilterChain:
    """
    Build the chain of active filters for a search configuration.

    Args:
        config: Search configuration naming the filters
        provider: Provider used by the content filter to read files

    Returns:
        FilterChain holding only the filters the configuration enables
    """
    filters: List[FileFilter] = []

    if config.name_pattern:
        filters.append(NamePatternFilter(config.name_pattern, case_sensitive=config.case_sensitive))

    if config.extension:
        filters.append(ExtensionFilter(config.extension))

    if config.min_size is not None or config.max_size is not None:
        filters.append(SizeFilter(config.min_size, config.max_size))

    if config.created_after is not None or config.created_before is not None:
        filters.append(TimeRangeFilter('created', config.created_after, config.created_before))

    if config.modified_after is not None or config.modified_before is not None:
        filters.append(TimeRangeFilter('modified', config.modified_after, config.modified_before))

    if config.type_prefix:
        filters.append(TypePrefixFilter(config.type_prefix))

    # Content search reads the file, so it goes last
    if config.content_substring:
        filters.append(ContentFilter(config.content_substring, provider))

    return FilterChain(filters)
