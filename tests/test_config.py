"""
Tests for configuration loading.
"""

import pytest
import yaml

from tonesight.config import (
    load_config, get_default_config, save_config, get_config_value, update_config_value,
    DEFAULT_CONFIG_PATH
)


class TestConfig:
    """Test configuration helpers."""

    def test_packaged_config_matches_defaults(self):
        """The packaged YAML matches the built-in defaults."""
        assert DEFAULT_CONFIG_PATH.exists()
        assert load_config() == get_default_config()

    def test_missing_file_uses_defaults(self, tmp_path):
        """A missing file falls back to defaults."""
        assert load_config(tmp_path / "missing.yaml") == get_default_config()

    def test_invalid_yaml_uses_defaults(self, tmp_path):
        """Malformed YAML falls back to defaults."""
        path = tmp_path / "broken.yaml"
        path.write_text("tone: [unclosed")

        assert load_config(path) == get_default_config()

    def test_partial_config_is_merged(self, tmp_path):
        """Missing keys are filled in from the defaults."""
        path = tmp_path / "partial.yaml"
        path.write_text(yaml.dump({'tone': {'shadow_amount': 0.7, 'constants': {'damping': 0.4}}}))

        config = load_config(path)

        assert config['tone']['shadow_amount'] == 0.7
        assert config['tone']['highlight_amount'] == 0.3
        assert config['tone']['constants']['damping'] == 0.4
        assert config['tone']['constants']['contrast_margin'] == 0.5
        assert config['output']['suffix'] == '_sh'

    def test_environment_variables_expanded(self, tmp_path, monkeypatch):
        """${VAR} references expand and unknown ones are kept."""
        monkeypatch.setenv('TONESIGHT_TEST_LEVEL', 'DEBUG')
        path = tmp_path / "env.yaml"
        path.write_text("logging:\n  level: ${TONESIGHT_TEST_LEVEL}\noutput:\n  suffix: ${UNSET_TONESIGHT_VAR}\n")

        config = load_config(path)

        assert config['logging']['level'] == 'DEBUG'
        assert config['output']['suffix'] == '${UNSET_TONESIGHT_VAR}'

    def test_save_and_reload(self, tmp_path):
        """Saved configuration loads back unchanged."""
        config = get_default_config()
        config['tone']['blur_radius'] = 8.0
        path = tmp_path / "saved.yaml"

        assert save_config(config, path)
        assert load_config(path)['tone']['blur_radius'] == 8.0

    def test_save_to_missing_directory_fails(self, tmp_path):
        """Saving into a missing directory reports failure."""
        assert not save_config({}, tmp_path / "no" / "such" / "dir.yaml")

    def test_get_config_value(self):
        """Dot paths resolve nested values or the default."""
        config = get_default_config()

        assert get_config_value(config, 'tone.constants.damping') == 0.3
        assert get_config_value(config, 'tone.missing', 'fallback') == 'fallback'
        assert get_config_value(config, 'tone.shadow_amount.deeper', 1) == 1

    def test_update_config_value(self):
        """Updating a dot path creates intermediate sections."""
        config = {}

        update_config_value(config, 'mosaic.columns', 3)

        assert config == {'mosaic': {'columns': 3}}
