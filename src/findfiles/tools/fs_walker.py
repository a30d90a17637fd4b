"""
Filesystem walker for findfiles.

This module provides the traversal engine: a breadth-first walk over one or
more start directories that runs every discovered file through the filter
chain and stops on queue exhaustion, the result cap or the timeout.
"""

import os
import time
import logging
from collections import deque
from datetime import datetime
from typing import Callable, Deque, Dict, List, Optional

from .filters import FileCandidate, FilterChain, build_filter_chain
from .providers import ContentClassifier, LocalFileSystem, MetadataProvider, MimeTypeClassifier
from ..models.search_config import SearchConfig
from ..models.search_results import MatchRecord, SearchResults


logger = logging.getLogger(__name__)


class SearchError(Exception):
    """Base class for errors raised by a search."""
    pass


class SearchTimedOut(SearchError):
    """
    Raised when a search exceeds its wall-clock budget.

    Attributes:
        elapsed_ms: Milliseconds elapsed when the timeout was detected
        timeout_ms: The configured budget
    """

    def __init__(self, elapsed_ms: float, timeout_ms: int):
        self.elapsed_ms = elapsed_ms
        self.timeout_ms = timeout_ms
        super().__init__(f"Search timed out after {elapsed_ms:.0f}ms (limit {timeout_ms}ms)")


class FSWalker:
    """
    Breadth-first filesystem walker that matches files against filters.

    Directories are processed one at a time from a FIFO queue, so all start
    paths are examined before any of their subdirectories. Directories or
    entries that cannot be read are skipped. The timeout is checked once per
    directory, so a search can overrun its budget by the time needed to finish
    the directory in progress.
    """

    def __init__(
        self,
        provider: Optional[MetadataProvider] = None,
        classifier: Optional[ContentClassifier] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize the filesystem walker.

        Args:
            provider: Source of directory listings, stat data and file content
            classifier: Assigns content-type labels to files
            clock: Monotonic clock returning seconds
        """
        self.provider = provider or LocalFileSystem()
        self.classifier = classifier or MimeTypeClassifier()
        self.clock = clock
        self._stats = self._empty_stats()

    @staticmethod
    def _empty_stats() -> Dict[str, int]:
        return {
            'directories_traversed': 0,
            'directories_skipped': 0,
            'entries_skipped': 0,
            'files_scanned': 0,
            'files_matched': 0,
        }

    def search(self, config: SearchConfig) -> SearchResults:
        """
        Run a search and return the matching files in discovery order.

        Args:
            config: Start paths, filters and limits for this search

        Returns:
            SearchResults with at most ``config.max_results`` matches

        Raises:
            SearchTimedOut: If the timeout elapsed, unless the configuration
                asks for partial results
        """
        self.reset_stats()
        chain = build_filter_chain(config, self.provider)
        queue: Deque[str] = deque(config.start_paths)
        matches: List[MatchRecord] = []
        start_time = self.clock()
        truncated = False

        logger.info(f"Starting search: {config}")

        while queue and len(matches) < config.max_results:
            elapsed_ms = (self.clock() - start_time) * 1000
            if elapsed_ms > config.timeout_ms:
                if not config.partial_results_on_timeout:
                    logger.warning(f"Search timed out after {elapsed_ms:.0f}ms")
                    raise SearchTimedOut(elapsed_ms, config.timeout_ms)
                logger.warning(f"Search timed out after {elapsed_ms:.0f}ms, returning {len(matches)} partial results")
                truncated = True
                break

            current_dir = queue.popleft()
            self._process_directory(current_dir, config, chain, queue, matches)

        execution_time = self.clock() - start_time
        logger.info(
            f"Search finished: {len(matches)} matches, "
            f"{self._stats['files_scanned']} files scanned in {execution_time:.2f}s"
        )

        return SearchResults(
            config=config,
            matches=matches,
            total_scanned=self._stats['files_scanned'],
            directories_traversed=self._stats['directories_traversed'],
            execution_time=execution_time,
            truncated=truncated,
            timestamp=datetime.now(),
        )

    def _process_directory(
        self,
        current_dir: str,
        config: SearchConfig,
        chain: FilterChain,
        queue: Deque[str],
        matches: List[MatchRecord],
    ) -> None:
        """
        List one directory, enqueue its subdirectories and collect matches.

        Args:
            current_dir: Directory popped from the queue
            config: Active search configuration
            chain: Filters to apply to each file
            queue: Pending directories; subdirectories are appended at the tail
            matches: Accumulated matches; appended in place
        """
        try:
            entries = self.provider.list_dir(current_dir)
        except (OSError, ValueError) as e:
            logger.debug(f"Skipping unreadable directory {current_dir}: {e}")
            self._stats['directories_skipped'] += 1
            return

        self._stats['directories_traversed'] += 1

        for entry in entries:
            entry_path = os.path.join(current_dir, entry.name)

            try:
                file_stat = self.provider.stat(entry_path)
            except (OSError, ValueError) as e:
                logger.debug(f"Skipping inaccessible entry {entry_path}: {e}")
                self._stats['entries_skipped'] += 1
                continue

            if file_stat.is_dir:
                if config.recursive:
                    queue.append(entry_path)
                continue

            if not file_stat.is_file:
                continue

            self._stats['files_scanned'] += 1
            candidate = FileCandidate(
                path=entry_path,
                name=entry.name,
                stat=file_stat,
                mime_type=self.classifier.classify(entry_path),
            )

            if not chain.evaluate(candidate):
                continue

            matches.append(MatchRecord(
                path=entry_path,
                size=file_stat.size,
                created=file_stat.created,
                modified=file_stat.modified,
                mime_type=candidate.mime_type,
            ))
            self._stats['files_matched'] += 1

            if len(matches) >= config.max_results:
                logger.info(f"Reached maximum result limit: {config.max_results}")
                return

    def get_stats(self) -> Dict[str, int]:
        """
        Get statistics about the last search.

        Returns:
            Dictionary containing operation statistics
        """
        return self._stats.copy()

    def reset_stats(self) -> None:
        """Reset the statistics counters."""
        self._stats = self._empty_stats()


def find_files(
    config: SearchConfig,
    provider: Optional[MetadataProvider] = None,
    classifier: Optional[ContentClassifier] = None,
) -> SearchResults:
    """
    Convenience function to run a single search.

    Args:
        config: Search configuration
        provider: Optional metadata provider (defaults to the local filesystem)
        classifier: Optional content classifier (defaults to MIME guessing)

    Returns:
        SearchResults in discovery order

    Raises:
        SearchTimedOut: If the search exceeds its timeout
    """
    walker = FSWalker(provider=provider, classifier=classifier)
    return walker.search(config)
