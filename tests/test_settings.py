from pathlib import Path

import pytest
from pydantic import ValidationError

from coastal_news.settings import AppConfig, FeedConfig, Settings, SourceConfig


def _write_app_yaml(root: Path, text: str) -> None:
    (root / "config").mkdir(parents=True, exist_ok=True)
    (root / "config" / "app.yaml").write_text(text, encoding="utf-8")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv("COASTAL_NEWS_ROOT", raising=False)
    monkeypatch.delenv("COASTAL_NEWS_CONFIG_DIR", raising=False)


def test_load_defaults(tmp_path: Path):
    _write_app_yaml(tmp_path, "log_level: debug\n")
    settings = Settings.load(root=tmp_path)
    assert settings.app.log_level == "DEBUG"
    assert settings.app.feed.item_count == 18
    assert settings.app.feed.cache_ttl.total_seconds() == 30 * 60
    assert settings.app.source.kind == "stub"
    assert settings.paths.cache_file == tmp_path / "data" / "cache.json"


def test_missing_app_yaml_is_explicit(tmp_path: Path):
    with pytest.raises(RuntimeError, match="Missing required config"):
        Settings.load(root=tmp_path)


def test_invalid_values_raise_runtime_error(tmp_path: Path):
    _write_app_yaml(tmp_path, "feed:\n  breaking_probability: 1.5\n")
    with pytest.raises(RuntimeError, match="Invalid app.yaml"):
        Settings.load(root=tmp_path)


def test_env_expansion_and_dotenv(tmp_path: Path, monkeypatch):
    monkeypatch.setenv("NEWS_EVENTS", "unset")
    monkeypatch.delenv("NEWS_EVENTS")
    (tmp_path / ".env").write_text("NEWS_EVENTS=feed.yaml\n", encoding="utf-8")
    _write_app_yaml(
        tmp_path,
        "source:\n  kind: file\n  events_file: ${NEWS_EVENTS}\n",
    )
    settings = Settings.load(root=tmp_path)
    # relative paths resolve against the config directory
    assert settings.app.source.events_file == tmp_path / "config" / "feed.yaml"


def test_config_dir_override(tmp_path: Path, monkeypatch):
    other = tmp_path / "elsewhere"
    other.mkdir()
    (other / "app.yaml").write_text("feed:\n  item_count: 7\n", encoding="utf-8")
    monkeypatch.setenv("COASTAL_NEWS_CONFIG_DIR", str(other))
    settings = Settings.load(root=tmp_path)
    assert settings.paths.config_dir == other
    assert settings.app.feed.item_count == 7


def test_log_level_validation():
    with pytest.raises(ValidationError):
        AppConfig(log_level="chatty")


def test_file_source_requires_path():
    with pytest.raises(ValidationError):
        SourceConfig(kind="file")


def test_feed_config_bounds():
    with pytest.raises(ValidationError):
        FeedConfig(item_count=0)
    assert FeedConfig(recency_window_hours=12).recency_window.total_seconds() == 12 * 3600
