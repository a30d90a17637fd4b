"""
Unit tests for configuration parser.

Tests the YAML configuration parsing, validation, and error handling
functionality of the ConfigParser class.
"""

import pytest
import tempfile
import os
import yaml
from pathlib import Path
from unittest.mock import patch

from findfiles.config.parser import (
    ConfigParser,
    ConfigParseResult,
    ConfigurationError,
    load_config,
    validate_config_file,
    create_config_template
)
from findfiles.models.config import FinderConfig


def write_yaml(data=None, text=None):
    """Write YAML to a temporary file and return its path."""
    with tempfile.NamedTemporaryFile(mode='w', suffix='.yaml', delete=False) as f:
        if text is not None:
            f.write(text)
        else:
            yaml.dump(data, f)
        return f.name


class TestConfigParser:
    """Test cases for ConfigParser class."""

    def test_init_default(self):
        """Test default initialization."""
        parser = ConfigParser()
        assert parser.strict_mode is False
        assert parser.DEFAULT_CONFIG_NAMES == [
            '.findfiles.yaml',
            '.findfiles.yml',
            'findfiles.yaml',
            'findfiles.yml',
        ]

    def test_init_strict_mode(self):
        """Test initialization with strict mode."""
        parser = ConfigParser(strict_mode=True)
        assert parser.strict_mode is True

    def test_load_config_with_valid_file(self):
        """Test loading configuration from valid YAML file."""
        temp_path = write_yaml({
            'roots': [tempfile.gettempdir()],
            'limits': {'max_results': 25},
        })

        try:
            result = ConfigParser().load_config(temp_path)

            assert isinstance(result, ConfigParseResult)
            assert isinstance(result.config, FinderConfig)
            assert result.config_path == Path(temp_path)
            assert result.is_default is False
            assert result.config.limits.max_results == 25
            assert result.config.limits.timeout_ms == 30000
            assert result.warnings == []
        finally:
            os.unlink(temp_path)

    def test_load_config_file_not_found(self):
        """Test loading configuration from non-existent file."""
        with pytest.raises(ConfigurationError, match="Configuration file not found"):
            ConfigParser().load_config("/nonexistent/config.yaml")

    def test_load_config_invalid_yaml(self):
        """Test loading configuration with invalid YAML syntax."""
        temp_path = write_yaml(text="roots: [unclosed\n")

        try:
            with pytest.raises(ConfigurationError, match="Invalid YAML syntax"):
                ConfigParser().load_config(temp_path)
        finally:
            os.unlink(temp_path)

    def test_load_config_not_a_mapping(self):
        """Test loading a YAML file whose top level is not an object."""
        temp_path = write_yaml(text="- a\n- b\n")

        try:
            with pytest.raises(ConfigurationError, match="must contain a YAML object"):
                ConfigParser().load_config(temp_path)
        finally:
            os.unlink(temp_path)

    def test_load_config_empty_file(self):
        """Test that an empty file yields the default configuration."""
        temp_path = write_yaml(text="")

        try:
            result = ConfigParser().load_config(temp_path)
            assert result.config.roots == []
            assert result.config.limits.max_results == 1000
        finally:
            os.unlink(temp_path)

    def test_load_config_invalid_values(self):
        """Test that invalid values raise ConfigurationError."""
        temp_path = write_yaml({'limits': {'timeout_ms': 0}})

        try:
            with pytest.raises(ConfigurationError, match="Configuration validation failed"):
                ConfigParser().load_config(temp_path)
        finally:
            os.unlink(temp_path)

    def test_strict_mode_rejects_warnings(self):
        """Test that warnings become errors in strict mode."""
        temp_path = write_yaml({'roots': ['/nonexistent/findfiles-root']})

        try:
            result = ConfigParser().load_config(temp_path)
            assert len(result.warnings) == 1

            with pytest.raises(ConfigurationError, match="strict mode"):
                ConfigParser(strict_mode=True).load_config(temp_path)
        finally:
            os.unlink(temp_path)

    def test_load_defaults_when_no_file_found(self):
        """Test the fallback to defaults when discovery finds nothing."""
        parser = ConfigParser()

        with patch.object(parser, '_find_and_load_config', return_value=(None, None)):
            result = parser.load_config()

        assert result.is_default is True
        assert result.config_path is None
        assert any("using default settings" in w for w in result.warnings)

    def test_discovery_in_current_directory(self):
        """Test that a config file in the working directory is found."""
        with tempfile.TemporaryDirectory() as temp_dir:
            config_file = Path(temp_dir) / 'findfiles.yaml'
            config_file.write_text(yaml.dump({'roots': [temp_dir], 'search': {'recursive': False}}))

            with patch('findfiles.config.parser.Path.cwd', return_value=Path(temp_dir)):
                result = ConfigParser().load_config()

        assert result.is_default is False
        assert result.config_path == config_file
        assert result.config.search.recursive is False

    def test_save_and_reload(self):
        """Test saving configuration to YAML and loading it back."""
        with tempfile.TemporaryDirectory() as temp_dir:
            config = FinderConfig(roots=[temp_dir], limits={'max_results': 3})
            output_path = Path(temp_dir) / 'nested' / 'findfiles.yaml'

            parser = ConfigParser()
            parser.save_config(config, output_path)

            content = output_path.read_text()
            assert content.startswith("# findfiles configuration")

            result = parser.load_config(output_path)
            assert result.config == config

    def test_validate_config_file(self):
        """Test validation of configuration files."""
        valid_path = write_yaml({'roots': ['/tmp']})
        invalid_path = write_yaml({'unknown': True})

        try:
            assert ConfigParser().validate_config_file(valid_path) == []

            errors = ConfigParser().validate_config_file(invalid_path)
            assert len(errors) == 1
            assert "Unknown configuration sections" in errors[0]

            errors = ConfigParser().validate_config_file("/nonexistent/config.yaml")
            assert errors == ["Configuration file not found: /nonexistent/config.yaml"]
        finally:
            os.unlink(valid_path)
            os.unlink(invalid_path)

    def test_config_template(self):
        """Test the template is valid YAML with every section."""
        template = ConfigParser().get_config_template()
        data = yaml.safe_load(template)

        assert set(data) == {'roots', 'limits', 'search'}
        assert data['limits']['timeout_ms'] == 30000
        assert "# Default search behaviour" in template


class TestConvenienceFunctions:
    """Test cases for module-level convenience functions."""

    def test_load_config(self):
        """Test load_config convenience function."""
        temp_path = write_yaml({'limits': {'max_results': 9}})

        try:
            result = load_config(temp_path)
            assert result.config.limits.max_results == 9
        finally:
            os.unlink(temp_path)

    def test_validate_config_file(self):
        """Test validate_config_file convenience function."""
        temp_path = write_yaml({'limits': {'max_results': -5}})

        try:
            errors = validate_config_file(temp_path)
            assert len(errors) == 1
        finally:
            os.unlink(temp_path)

    def test_create_config_template(self):
        """Test create_config_template convenience function."""
        with tempfile.TemporaryDirectory() as temp_dir:
            output_path = Path(temp_dir) / 'template.yaml'
            create_config_template(output_path)

            assert output_path.exists()
            errors = validate_config_file(output_path)
            assert errors == []
