"""Configuration loading utilities for the VIP vanity bot."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

logger = logging.getLogger(__name__)


DEFAULT_SETTINGS_PATH = Path(__file__).parent / "data" / "settings.yaml"


@dataclass(frozen=True)
class Settings:
    """Typed view over the settings YAML file."""

    store_api_base: str
    store_account_id: str
    store_namespace_id: str
    store_timeout_seconds: float
    lookup_url_template: str
    presence_watching: str

    @property
    def namespace_url(self) -> str:
        base = self.store_api_base.rstrip("/")
        return (
            f"{base}/accounts/{self.store_account_id}"
            f"/storage/kv/namespaces/{self.store_namespace_id}"
        )

    @property
    def metadata_url(self) -> str:
        return f"{self.namespace_url}/metadata/"

    @property
    def values_url(self) -> str:
        return f"{self.namespace_url}/values/"

    def lookup_url(self, public_id: str) -> str:
        return self.lookup_url_template.format(public_id=public_id)

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "Settings":
        store = dict(data["store"])
        presence = data.get("presence", {})
        return Settings(
            store_api_base=str(store["api_base"]),
            store_account_id=str(store["account_id"]),
            store_namespace_id=str(store["namespace_id"]),
            store_timeout_seconds=float(store.get("timeout_seconds", 10.0)),
            lookup_url_template=str(data["lookup_url_template"]),
            presence_watching=str(presence.get("watching", "VIPs")),
        )


class SettingsLoader:
    """Loads and caches settings from YAML configuration files."""

    def __init__(self, path: Path | None = None) -> None:
        self._path = path or DEFAULT_SETTINGS_PATH
        self._cache: Settings | None = None

    @property
    def path(self) -> Path:
        return self._path

    def load(self, force: bool = False) -> Settings:
        if self._cache is not None and not force:
            return self._cache
        with self._path.open("r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
        self._cache = Settings.from_dict(data)
        return self._cache


def get_settings() -> Settings:
    """Convenience accessor for default settings."""

    return SettingsLoader().load()


def _require_env(key: str) -> str:
    value = os.environ.get(key)
    if not value:
        raise RuntimeError(f"{key} environment variable must be set")
    return value


@dataclass(frozen=True)
class BotConfig:
    """Process-wide configuration, built once at startup."""

    discord_token: str
    store_token: str
    settings: Settings
    application_id: Optional[int] = None
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "BotConfig":
        """Load configuration from environment variables."""
        app_id_raw = os.environ.get("DISCORD_APP_ID")
        application_id: Optional[int] = None
        if app_id_raw:
            try:
                application_id = int(app_id_raw)
            except ValueError:
                logger.warning("Invalid DISCORD_APP_ID: %s", app_id_raw)

        settings_path = os.environ.get("VIP_VANITY_SETTINGS")
        loader = SettingsLoader(Path(settings_path) if settings_path else None)

        return cls(
            discord_token=_require_env("VIP_VANITY_TOKEN"),
            store_token=_require_env("CF_API_TOKEN"),
            settings=loader.load(),
            application_id=application_id,
            log_level=os.environ.get("VIP_VANITY_LOG_LEVEL", "INFO").upper(),
        )


__all__ = ["BotConfig", "Settings", "SettingsLoader", "get_settings"]
