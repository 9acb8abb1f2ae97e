# src/coastal_news/settings.py
"""
Central configuration loader for coastal-news.

- Feed tuning (item count, cache TTL, breaking probability, jitter, window)
- News source selection (stub delay or a local events file)
- Log-level normalization + validation
- Config directory override via COASTAL_NEWS_CONFIG_DIR
- Helpful, explicit errors for common misconfigurations
"""

from __future__ import annotations

import os
import re
from datetime import timedelta
from pathlib import Path
from typing import Any, Dict, Literal, Optional, Union

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

# ---------- tiny .env loader (opt-in, no external dependency) ----------


def _load_dotenv(dotenv_path: Path) -> None:
    """Load KEY=VALUE pairs from a .env file into os.environ if not already set."""
    if not dotenv_path.exists():
        return
    for line in dotenv_path.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, val = line.split("=", 1)
        key = key.strip()
        val = val.strip().strip("'").strip('"')
        os.environ.setdefault(key, val)


# ---------- helpers ----------

_ENV_VAR_PATTERN = re.compile(r"\$\{([A-Z0-9_]+)\}")


def _env_expand(value: Any) -> Any:
    """Expand ${VAR} using environment variables within YAML scalar strings."""
    if isinstance(value, str):

        def repl(match: re.Match[str]) -> str:
            return os.environ.get(match.group(1), match.group(0))

        return _ENV_VAR_PATTERN.sub(repl, value)
    if isinstance(value, dict):
        return {k: _env_expand(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_env_expand(v) for v in value]
    return value


def _read_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise RuntimeError(f"{path} must contain a YAML mapping at the top level")
    return _env_expand(data)


# ---------- Pydantic models ----------


class FeedConfig(BaseModel):
    item_count: int = Field(default=18, gt=0, description="items per synthesized feed")
    cache_ttl_minutes: float = Field(default=30, gt=0)
    breaking_probability: float = Field(default=0.10, ge=0.0, le=1.0)
    jitter_degrees: float = Field(default=1.0, ge=0.0)
    recency_window_hours: float = Field(default=24, gt=0)
    cache_key: str = "coastal_news_city_news"

    @property
    def cache_ttl(self) -> timedelta:
        return timedelta(minutes=self.cache_ttl_minutes)

    @property
    def recency_window(self) -> timedelta:
        return timedelta(hours=self.recency_window_hours)


class SourceConfig(BaseModel):
    kind: Literal["stub", "file"] = "stub"
    delay_seconds: float = Field(default=1.0, ge=0.0)
    events_file: Optional[Path] = None

    @field_validator("events_file", mode="before")
    @classmethod
    def _expanduser(cls, v: Union[str, Path, None]) -> Optional[Path]:
        if v is None or v == "":
            return None
        return Path(v).expanduser()

    @model_validator(mode="after")
    def _file_needs_path(self) -> "SourceConfig":
        if self.kind == "file" and self.events_file is None:
            raise ValueError("source.kind 'file' requires source.events_file")
        return self


class AppConfig(BaseModel):
    log_level: str = Field(default="INFO", description="Python logging level")
    feed: FeedConfig = Field(default_factory=FeedConfig)
    source: SourceConfig = Field(default_factory=SourceConfig)

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, v: str) -> str:
        lv = v.upper().strip()
        allowed = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}
        if lv not in allowed:
            raise ValueError(f"log_level must be one of {sorted(allowed)}")
        return lv


class Paths(BaseModel):
    root: Path
    config_dir: Path
    data_dir: Path
    cache_file: Path

    @field_validator("root", "config_dir", "data_dir", "cache_file", mode="before")
    @classmethod
    def _expanduser(cls, v: Union[str, Path]) -> Path:
        return Path(v).expanduser()


class Settings(BaseModel):
    """Single source of truth for runtime configuration."""

    paths: Paths
    app: AppConfig = Field(default_factory=AppConfig)

    # ----------------- loader -----------------

    @classmethod
    def load(
        cls,
        root: Optional[Path] = None,
        dotenv: Optional[Path] = None,
    ) -> "Settings":
        """
        Load settings from environment + YAML.

        Precedence:
          1) Environment variables (including those loaded from `.env`)
          2) config/app.yaml
          3) Defaults in the models
        """
        env_root = os.environ.get("COASTAL_NEWS_ROOT", "")
        if env_root:
            inferred_root = Path(env_root).expanduser()
        else:
            # src/coastal_news/settings.py -> project root is parents[2]
            inferred_root = Path(__file__).resolve().parents[2]
        base_root = root or inferred_root

        cfg_override = os.environ.get("COASTAL_NEWS_CONFIG_DIR")
        config_dir = (
            Path(cfg_override).expanduser() if cfg_override else (base_root / "config")
        )

        # Optionally load .env from repo root (not config dir)
        _load_dotenv(dotenv or base_root / ".env")

        data_dir = base_root / "data"
        paths = Paths(
            root=base_root,
            config_dir=config_dir,
            data_dir=data_dir,
            cache_file=data_dir / "cache.json",
        )

        app_path = config_dir / "app.yaml"
        if not app_path.exists():
            raise RuntimeError(
                f"Missing required config: {app_path}. "
                "Generate it from the repository template under config/app.yaml."
            )
        app_yaml = _read_yaml(app_path)

        try:
            app_cfg = AppConfig(**app_yaml)
        except ValidationError as e:
            raise RuntimeError(f"Invalid app.yaml configuration: {e}") from e

        # relative events files are resolved against the config directory
        events_file = app_cfg.source.events_file
        if events_file is not None and not events_file.is_absolute():
            app_cfg.source.events_file = config_dir / events_file

        return cls(paths=paths, app=app_cfg)
