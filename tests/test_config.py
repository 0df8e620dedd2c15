"""Tests for configuration and typed settings."""

import pytest
import yaml

from erdiagram.core.diagram.settings import (
    LayoutSettings,
    NodeSettings,
    RoutingSettings,
    ViewportSettings,
)
from erdiagram.utils.config import Config, get_config, load_config, set_config


def test_defaults():
    config = Config()

    assert config.get("diagram.node.header_height") == 36
    assert config.get("diagram.routing.intersection_penalty") == 7000
    assert config.get("diagram.viewport.min_comfortable_zoom") == 0.72
    assert config.get("diagram.missing.key", "fallback") == "fallback"


def test_set_and_section_are_detached():
    config = Config()
    config.set("diagram.routing.stub", 30)
    config.set("new.nested.value", 1)

    section = config.section("diagram.routing")
    section["stub"] = 99

    assert config.get("diagram.routing.stub") == 30
    assert config.get("new.nested.value") == 1
    assert config.section("does.not.exist") == {}


def test_from_yaml_merges_with_defaults(tmp_path):
    path = tmp_path / "config.yml"
    path.write_text(yaml.safe_dump({"diagram": {"layout": {"rank_sep": 250}}}))

    config = Config.from_yaml(path)

    assert config.get("diagram.layout.rank_sep") == 250
    assert config.get("diagram.layout.node_sep") == 96


def test_from_yaml_errors(tmp_path):
    with pytest.raises(FileNotFoundError):
        Config.from_yaml(tmp_path / "missing.yml")

    path = tmp_path / "list.yml"
    path.write_text("- a\n- b\n")
    with pytest.raises(ValueError, match="mapping"):
        Config.from_yaml(path)


def test_save_round_trip(tmp_path):
    config = Config()
    config.set("diagram.viewport.fit_padding", 0.3)
    path = tmp_path / "out" / "config.yml"
    config.save(path)

    assert Config.from_yaml(path).get("diagram.viewport.fit_padding") == 0.3


def test_load_config_sets_global(tmp_path):
    path = tmp_path / "config.yml"
    path.write_text(yaml.safe_dump({"api": {"port": 9001}}))

    loaded = load_config(path)

    assert get_config() is loaded
    assert get_config().get("api.port") == 9001


def test_env_var_config(tmp_path, monkeypatch):
    path = tmp_path / "env.yml"
    path.write_text(yaml.safe_dump({"diagram": {"routing": {"corner_radius": 4}}}))
    monkeypatch.setenv("ERDIAGRAM_CONFIG", str(path))
    set_config(None)

    assert get_config().get("diagram.routing.corner_radius") == 4


def test_settings_from_config():
    config = Config()
    config.set("diagram.routing.bend_penalty", 30)
    config.set("diagram.routing.unknown_knob", 1)
    config.set("diagram.layout.isolated_columns", "4")

    routing = RoutingSettings.from_config(config)
    layout = LayoutSettings.from_config(config)

    assert routing.bend_penalty == 30.0
    assert isinstance(routing.cache_size, int)
    assert layout.isolated_columns == 4
    assert NodeSettings.from_config(config) == NodeSettings()
    assert ViewportSettings.from_config(config).fit_padding == 0.26


def test_settings_from_dict_keeps_floats():
    settings = ViewportSettings.from_dict({"min_comfortable_zoom": 1, "focus_threshold": 12.0})

    assert settings.min_comfortable_zoom == 1.0
    assert isinstance(settings.min_comfortable_zoom, float)
    assert settings.focus_threshold == 12
    assert isinstance(settings.focus_threshold, int)
