"""
Configuration data models for findfiles.

This module defines the application configuration: default search
directories, search limits and default search behaviour. Values here are
defaults; a search request may override any of them.
"""

from typing import Dict, List, Any
from pathlib import Path
from pydantic import BaseModel, Field, field_validator

from .search_config import DEFAULT_MAX_RESULTS, DEFAULT_TIMEOUT_MS


class LimitsConfig(BaseModel):
    """
    Configuration for search limits.

    Attributes:
        max_results: Maximum number of results a search returns
        timeout_ms: Wall-clock budget for one search in milliseconds
    """

    max_results: int = Field(DEFAULT_MAX_RESULTS, gt=0, description="Maximum number of search results to return")
    timeout_ms: int = Field(DEFAULT_TIMEOUT_MS, gt=0, description="Timeout for one search in milliseconds")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return self.model_dump()


class SearchDefaults(BaseModel):
    """
    Default search behaviour.

    Attributes:
        recursive: Whether searches descend into subdirectories
        case_sensitive: Whether file name patterns are case-sensitive
        partial_results_on_timeout: Return accumulated matches on timeout
    """

    recursive: bool = Field(True, description="Search subdirectories recursively")
    case_sensitive: bool = Field(False, description="Case-sensitive file name matching")
    partial_results_on_timeout: bool = Field(False, description="Return partial results on timeout")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return self.model_dump()


class FinderConfig(BaseModel):
    """
    Main configuration for findfiles.

    Attributes:
        roots: Default directories searched when a request names none
        limits: Search limits
        search: Default search behaviour
    """

    roots: List[str] = Field(default_factory=list, description="Default directories to search")
    limits: LimitsConfig = Field(default_factory=LimitsConfig, description="Search limits")
    search: SearchDefaults = Field(default_factory=SearchDefaults, description="Default search behaviour")

    @field_validator('roots')
    @classmethod
    def validate_roots(cls, v: List[str]) -> List[str]:
        """Expand user directories and drop blank entries."""
        normalized = []
        for root in v:
            if not isinstance(root, str):
                raise ValueError(f"Root directory must be a string, got {type(root).__name__}")
            if not root.strip():
                continue
            normalized.append(str(Path(root).expanduser()))
        return normalized

    def is_root_accessible(self, root: str) -> bool:
        """Check if a root directory exists and is a directory."""
        root_path = Path(root)
        return root_path.exists() and root_path.is_dir()

    def get_inaccessible_roots(self) -> List[str]:
        """Get the roots that are missing or not directories."""
        return [root for root in self.roots if not self.is_root_accessible(root)]

    def validate_configuration(self) -> List[str]:
        """
        Check the configuration for problems that do not prevent loading.

        Returns:
            List of warning messages
        """
        warnings = []

        for root in self.get_inaccessible_roots():
            warnings.append(f"Root directory does not exist or is not a directory: {root}")

        if not self.roots:
            warnings.append("No default root directories configured; every search must name its directories")

        if self.limits.timeout_ms < 100:
            warnings.append(f"Very short timeout ({self.limits.timeout_ms}ms) may stop searches before they find anything")

        return warnings

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary representation."""
        return {
            'roots': list(self.roots),
            'limits': self.limits.to_dict(),
            'search': self.search.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'FinderConfig':
        """Create configuration from dictionary."""
        return cls.model_validate(data)

    def __str__(self) -> str:
        """String representation of the configuration."""
        return (
            f"FinderConfig(roots={len(self.roots)}, "
            f"max_results={self.limits.max_results}, "
            f"timeout_ms={self.limits.timeout_ms})"
        )


KNOWN_SECTIONS = {'roots', 'limits', 'search'}


def validate_config_dict(config_data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Validate a configuration dictionary using Pydantic.

    Args:
        config_data: Dictionary containing configuration data

    Returns:
        Validated and normalized configuration dictionary

    Raises:
        ValueError: If configuration is invalid
    """
    unknown = set(config_data) - KNOWN_SECTIONS
    if unknown:
        raise ValueError(f"Unknown configuration sections: {', '.join(sorted(unknown))}")

    roots = config_data.get('roots', [])
    if isinstance(roots, str):
        roots = [roots]
    if not isinstance(roots, list):
        raise ValueError("'roots' must be a list of directories")

    for section in ('limits', 'search'):
        value = config_data.get(section, {})
        if value is not None and not isinstance(value, dict):
            raise ValueError(f"'{section}' must be a mapping")

    try:
        config = FinderConfig(
            roots=roots,
            limits=config_data.get('limits') or {},
            search=config_data.get('search') or {},
        )
    except Exception as e:
        raise ValueError(f"Configuration validation failed: {e}") from e

    return config.to_dict()
