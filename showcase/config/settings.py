"""Configuration models and helpers for Showcase settings."""

from __future__ import annotations

import os
from copy import deepcopy
from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import BaseModel, Field, field_validator

CURRENT_SETTINGS_SCHEMA_VERSION = 2

# -------------------- Settings Schema --------------------


class RevealCfg(BaseModel):
    """Scroll reveal behaviour for cards and section headers."""

    threshold: float = Field(default=0.12, gt=0.0, le=1.0)
    settle_delay_ms: int = Field(default=50, ge=0)
    static_ids: List[str] = Field(
        default_factory=lambda: [
            "home:intro",
            "home:summary",
            "projects:head",
            "certs:head",
            "contact:head",
            "contact:reach",
            "contact:profiles",
            "contact:footer",
        ]
    )


class SectionsCfg(BaseModel):
    """Navigation landmarks and the thresholds used to rank them."""

    landmarks: List[str] = Field(
        default_factory=lambda: ["home", "projects", "certs", "contact"], min_length=1
    )
    thresholds: List[float] = Field(default_factory=lambda: [0.15, 0.25, 0.35, 0.5])
    catalog_landmark: str = "projects"

    @field_validator("thresholds")
    @classmethod
    def _sorted_unit_interval(cls, values: List[float]) -> List[float]:
        cleaned = sorted({min(1.0, max(0.0, float(v))) for v in values})
        return cleaned or [0.0]


class CatalogCfg(BaseModel):
    """Where the catalog is read from; ``None`` selects the bundled catalog."""

    path: Optional[str] = None


class ContactCfg(BaseModel):
    email: str = "ifrad.hossain04@gmail.com"
    github: str = "https://github.com/ifradhos55"
    linkedin: str = "https://www.linkedin.com/in/ihos25/"


class Settings(BaseModel):
    schema_version: int = CURRENT_SETTINGS_SCHEMA_VERSION
    reveal: RevealCfg = Field(default_factory=RevealCfg)
    sections: SectionsCfg = Field(default_factory=SectionsCfg)
    catalog: CatalogCfg = Field(default_factory=CatalogCfg)
    contact: ContactCfg = Field(default_factory=ContactCfg)


# -------------------- I/O Helpers --------------------

CONFIG_FILENAME = "config.yaml"


def get_config_home() -> Path:
    """Return the directory where settings should be stored."""

    if os.name == "nt" and "SHOWCASE_HOME" not in os.environ:
        base = Path(os.environ.get("LOCALAPPDATA", str(Path.home() / "AppData" / "Local")))
        return base / "Showcase"
    return Path(os.environ.get("SHOWCASE_HOME", str(Path.home() / ".showcase")))


def config_path() -> Path:
    """Return the full path to the configuration file, creating directories as needed."""

    home = get_config_home()
    home.mkdir(parents=True, exist_ok=True)
    return home / CONFIG_FILENAME


def default_settings() -> Settings:
    """Instantiate a Settings object populated with defaults."""

    return Settings()


def save_settings(settings: Settings, path: Optional[Path] = None) -> Path:
    """Persist the given settings to disk as YAML."""

    target_path = Path(path) if path else config_path()
    target_path.parent.mkdir(parents=True, exist_ok=True)
    data = settings.model_dump()
    with target_path.open("w", encoding="utf-8") as handle:
        yaml.safe_dump(data, handle, sort_keys=False, allow_unicode=True)
    return target_path


def _coerce_schema_version(raw: object) -> int:
    try:
        value = int(raw)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return 1
    return max(1, value)


def _upgrade_settings_payload(
    data: dict[str, object], *, schema_version: int
) -> tuple[dict[str, object], bool]:
    """Apply in-place upgrades required for older settings payloads."""

    upgraded = deepcopy(data)
    version = max(1, schema_version)
    changed = False

    if version < 2:
        version = 2
        changed = True

    if upgraded.get("schema_version") != version:
        upgraded["schema_version"] = version
        changed = True

    return upgraded, changed


def load_settings(path: Optional[Path] = None) -> Settings:
    """Load settings from disk, creating defaults if missing."""

    source_path = Path(path) if path else config_path()
    if not source_path.exists():
        settings = default_settings()
        save_settings(settings, source_path)
        return settings
    with source_path.open("r", encoding="utf-8") as handle:
        raw = yaml.safe_load(handle) or {}
    if not isinstance(raw, dict):
        raw = {}
    schema_version = _coerce_schema_version(raw.get("schema_version"))
    data, upgraded = _upgrade_settings_payload(raw, schema_version=schema_version)
    settings = Settings(**data)
    if upgraded:
        save_settings(settings, source_path)
    return settings


def ensure_default_config() -> Path:
    """Ensure a configuration file exists on disk and return its path."""

    target = config_path()
    if not target.exists():
        save_settings(default_settings(), target)
    return target
