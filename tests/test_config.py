"""
Unit tests for fluxel_plugin/config.py.
"""
import json
import os
import tempfile

import pytest
from pydantic import ValidationError

from fluxel_plugin.config import (
    CONFIG_FILE,
    ElementizerConfig,
    load_config,
    parse_config,
    write_default_config,
)
from fluxel_plugin.errors import FluxelCompileError, FluxelConfigError


class TestElementizerConfig:
    """Tests for the configuration model."""

    def test_defaults(self):
        config = ElementizerConfig()
        assert config.tag_prefix == 'fluxel-'
        assert config.class_suffix == 'Element'
        assert config.registry == 'customElements'
        assert config.base_class == 'HTMLElement'
        assert config.shadow_mode == 'open'
        assert config.retain_declaration is False

    def test_prefix_needs_hyphen(self):
        with pytest.raises(ValidationError):
            ElementizerConfig(tag_prefix='fluxel')

    def test_prefix_must_be_lowercase(self):
        with pytest.raises(ValidationError):
            ElementizerConfig(tag_prefix='Fluxel-')

    def test_prefix_must_start_with_letter(self):
        with pytest.raises(ValidationError):
            ElementizerConfig(tag_prefix='-x-')

    def test_empty_suffix(self):
        with pytest.raises(ValidationError):
            ElementizerConfig(class_suffix='')

    def test_shadow_mode(self):
        assert ElementizerConfig(shadow_mode='closed').shadow_mode == 'closed'
        with pytest.raises(ValidationError):
            ElementizerConfig(shadow_mode='half-open')

    def test_unknown_key(self):
        with pytest.raises(ValidationError):
            ElementizerConfig(prefix='x-')

    def test_frozen(self):
        config = ElementizerConfig()
        with pytest.raises(ValidationError):
            config.tag_prefix = 'other-'


class TestParseConfig:
    """Tests for parse_config()."""

    def test_partial_document(self):
        config = parse_config('{"tag_prefix": "acme-", "base_class": null}')
        assert config.tag_prefix == 'acme-'
        assert config.base_class is None
        assert config.class_suffix == 'Element'

    def test_invalid_value(self):
        with pytest.raises(FluxelConfigError) as exc_info:
            parse_config('{"class_suffix": ""}', origin='fluxel.json')
        assert 'fluxel.json' in exc_info.value.message
        assert 'class_suffix' in exc_info.value.message
        assert 'invalid configuration fluxel.json\n' in str(exc_info.value)

    def test_invalid_json(self):
        with pytest.raises(FluxelConfigError):
            parse_config('{"tag_prefix": ')

    def test_config_error_is_a_compile_error(self):
        with pytest.raises(FluxelCompileError):
            parse_config('[]')


class TestLoadConfig:
    """Tests for load_config() and write_default_config()."""

    def test_explicit_path(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = os.path.join(tmpdir, 'custom.json')
            with open(path, 'w') as f:
                json.dump({'tag_prefix': 'ui-'}, f)
            assert load_config(path).tag_prefix == 'ui-'

    def test_missing_explicit_path(self):
        with pytest.raises(FluxelConfigError):
            load_config('/nonexistent/fluxel.json')

    def test_working_directory_lookup(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv('HOME', str(tmp_path / 'home'))
        (tmp_path / CONFIG_FILE).write_text('{"class_suffix": "Tag"}')
        assert load_config().class_suffix == 'Tag'

    def test_home_directory_lookup(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        home = tmp_path / 'home'
        (home / '.fluxel').mkdir(parents=True)
        (home / '.fluxel' / CONFIG_FILE).write_text('{"registry": "registry"}')
        monkeypatch.setenv('HOME', str(home))
        assert load_config().registry == 'registry'

    def test_defaults_without_file(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv('HOME', str(tmp_path / 'home'))
        assert load_config() == ElementizerConfig()

    def test_write_default_config_round_trip(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = os.path.join(tmpdir, CONFIG_FILE)
            write_default_config(path)
            with open(path) as f:
                assert json.load(f)['tag_prefix'] == 'fluxel-'
            assert load_config(path) == ElementizerConfig()
