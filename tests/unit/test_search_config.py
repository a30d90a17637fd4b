"""
Unit tests for the SearchConfig data model.

Tests validation, normalization, and utility methods of the SearchConfig class.
"""

import pytest
from datetime import datetime, timezone
from pathlib import Path
from pydantic import ValidationError

from findfiles.models.search_config import SearchConfig, DEFAULT_MAX_RESULTS, DEFAULT_TIMEOUT_MS


class TestSearchConfig:
    """Test cases for SearchConfig model."""

    def test_defaults(self):
        """Test default values for optional settings."""
        config = SearchConfig(start_paths=["/tmp"])

        assert config.start_paths == ["/tmp"]
        assert config.name_pattern is None
        assert config.recursive is True
        assert config.case_sensitive is False
        assert config.max_results == DEFAULT_MAX_RESULTS == 1000
        assert config.timeout_ms == DEFAULT_TIMEOUT_MS == 30000
        assert config.partial_results_on_timeout is False
        assert config.has_filters() is False

    def test_start_paths_required(self):
        """Test that at least one start path is required."""
        with pytest.raises(ValidationError):
            SearchConfig(start_paths=[])

        with pytest.raises(ValidationError):
            SearchConfig()

    def test_blank_start_path_rejected(self):
        """Test that blank start paths are rejected."""
        with pytest.raises(ValidationError):
            SearchConfig(start_paths=["/tmp", "   "])

    def test_start_paths_keep_order_and_duplicates(self):
        """Test that start paths are not reordered or deduplicated."""
        config = SearchConfig(start_paths=["/b", "/a", "/b"])
        assert config.start_paths == ["/b", "/a", "/b"]

    def test_surrounding_spaces_kept(self):
        """Test that spaces around a start path are part of the name."""
        config = SearchConfig(start_paths=["/tmp/dir ", " /tmp/x"])
        assert config.start_paths == ["/tmp/dir ", " /tmp/x"]

    def test_user_expansion(self):
        """Test that ~ is expanded in start paths."""
        config = SearchConfig(start_paths=["~"])
        assert config.start_paths == [str(Path.home())]

    def test_extension_leading_dot_stripped(self):
        """Test extension normalization."""
        assert SearchConfig(start_paths=["/tmp"], extension=".pdf").extension == "pdf"
        assert SearchConfig(start_paths=["/tmp"], extension="pdf").extension == "pdf"
        assert SearchConfig(start_paths=["/tmp"], extension="").extension is None

    def test_empty_strings_mean_unset(self):
        """Test that empty text filters are treated as not set."""
        config = SearchConfig(start_paths=["/tmp"], name_pattern="", content_substring="", type_prefix="")

        assert config.name_pattern is None
        assert config.content_substring is None
        assert config.type_prefix is None

    def test_naive_datetimes_become_utc(self):
        """Test that naive bounds are interpreted as UTC."""
        config = SearchConfig(start_paths=["/tmp"], modified_after=datetime(2024, 1, 1))
        assert config.modified_after == datetime(2024, 1, 1, tzinfo=timezone.utc)

    def test_limits_must_be_positive(self):
        """Test result cap and timeout validation."""
        with pytest.raises(ValidationError):
            SearchConfig(start_paths=["/tmp"], max_results=0)

        with pytest.raises(ValidationError):
            SearchConfig(start_paths=["/tmp"], timeout_ms=0)

    def test_size_bounds_validation(self):
        """Test size bound validation."""
        with pytest.raises(ValidationError):
            SearchConfig(start_paths=["/tmp"], min_size=-1)

        with pytest.raises(ValidationError):
            SearchConfig(start_paths=["/tmp"], min_size=100, max_size=10)

        config = SearchConfig(start_paths=["/tmp"], min_size=10, max_size=10)
        assert config.min_size == config.max_size == 10

    def test_immutable(self):
        """Test that a configuration cannot be changed after creation."""
        config = SearchConfig(start_paths=["/tmp"])
        with pytest.raises(ValidationError):
            config.max_results = 5

    def test_has_filters(self):
        """Test filter detection."""
        assert SearchConfig(start_paths=["/tmp"], min_size=0).has_filters()
        assert SearchConfig(start_paths=["/tmp"], type_prefix="image").has_filters()

    def test_dict_round_trip(self):
        """Test conversion to and from dictionaries."""
        config = SearchConfig(start_paths=["/tmp"], name_pattern="*.txt", max_results=5)
        data = config.to_dict()

        assert data['start_paths'] == ["/tmp"]
        assert data['name_pattern'] == "*.txt"
        assert SearchConfig.from_dict(data) == config

    def test_str(self):
        """Test string representation."""
        text = str(SearchConfig(start_paths=["/tmp"], name_pattern="*.txt"))

        assert "Roots: 1 directories" in text
        assert "Pattern: '*.txt'" in text
        assert "Max results: 1000" in text
