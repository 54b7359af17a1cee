from types import MappingProxyType

import pytest

from twproxy.utils import Config, config


def test_config_is_singleton():
    assert Config() is config


def test_dot_notation_lookup():
    assert config.get("rss.max_items") == 12
    assert config.get("rss.missing.key", "fallback") == "fallback"
    assert config.get("server.port.nested", 1) == 1


def test_lookup_tables_are_read_only():
    feeds = config.feeds
    assert isinstance(feeds, MappingProxyType)
    assert set(feeds) == {"cnyes", "udn", "chinatimes", "moneydj"}
    with pytest.raises(TypeError):
        feeds["extra"] = "https://example.com"

    names = [name for name, _ in config.yahoo_endpoints]
    assert names == ["query1-v7", "query2-v7", "query1-v6"]


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("PORT", "9001")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    assert config.server_port == 9001
    assert config.log_level == "DEBUG"
