"""Tests for settings loading: defaults, YAML files, env overrides."""

import pytest
from pydantic import ValidationError

from memtree import config as config_module
from memtree.config import Settings, get_settings


def test_defaults(isolated_settings):
    settings = Settings()
    assert settings.log_level == "INFO"
    assert settings.thread_safe is True
    assert settings.seed_file is None
    assert settings.tree_max_depth == 3
    assert settings.output_format == "text"


def test_yaml_config_loaded(isolated_settings):
    (isolated_settings / "memtree.yaml").write_text(
        "log_level: debug\ntree_max_depth: 5\noutput_format: json\n"
    )
    settings = Settings()
    assert settings.log_level == "DEBUG"
    assert settings.tree_max_depth == 5
    assert settings.output_format == "json"


def test_env_overrides_yaml(isolated_settings, monkeypatch):
    (isolated_settings / "memtree.yaml").write_text("tree_max_depth: 5\n")
    monkeypatch.setenv("MEMTREE_TREE_MAX_DEPTH", "7")
    assert Settings().tree_max_depth == 7


def test_explicit_config_file(isolated_settings, tmp_path):
    path = tmp_path / "custom.yml"
    path.write_text("thread_safe: false\nseed_file: ~/seed.yaml\n")

    settings = get_settings(config_file=path)

    assert settings.thread_safe is False
    assert settings.seed_file is not None
    assert "~" not in str(settings.seed_file)
    assert settings.seed_file.name == "seed.yaml"
    assert get_settings() is settings


def test_explicit_config_file_missing(isolated_settings):
    with pytest.raises(FileNotFoundError):
        get_settings(config_file="does-not-exist.yaml")


def test_invalid_values_rejected(isolated_settings, monkeypatch):
    monkeypatch.setenv("MEMTREE_OUTPUT_FORMAT", "xml")
    with pytest.raises(ValidationError):
        Settings()


def test_reload_settings(isolated_settings, monkeypatch):
    first = get_settings()
    monkeypatch.setenv("MEMTREE_LOG_LEVEL", "warning")
    reloaded = config_module.reload_settings()
    assert reloaded is not first
    assert reloaded.log_level == "WARNING"
