"""Settings and configuration for tipjar."""

import os
import json
import logging
from pathlib import Path
from dataclasses import dataclass, field, fields
from typing import Optional

logger = logging.getLogger(__name__)

# Environment variable -> settings field
ENV_OVERRIDES = {
    "TIPJAR_DB_PATH": "db_path",
    "TIPJAR_CATALOG": "catalog_path",
    "TIPJAR_SHOW_PROBABILITY": "show_probability",
    "TIPJAR_DEBUG_TIP": "debug_tip_id",
    "TIPJAR_LOG_LEVEL": "log_level",
}

PATH_FIELDS = ("config_dir", "db_path", "catalog_path", "log_dir")


def _default_config_dir() -> Path:
    env_dir = os.environ.get("TIPJAR_CONFIG_DIR")
    return Path(env_dir) if env_dir else Path.home() / ".tipjar"


@dataclass
class Settings:
    """tipjar settings."""

    # Paths (db/catalog/logs default to files inside config_dir)
    config_dir: Path = field(default_factory=_default_config_dir)
    db_path: Optional[Path] = None
    catalog_path: Optional[Path] = None
    log_dir: Optional[Path] = None

    # Storage
    storage_key: str = "randomTips"
    save_delay: float = 0.0  # seconds

    # Display
    show_probability: float = 0.2
    debug_tip_id: Optional[str] = None

    log_level: str = "INFO"

    def __post_init__(self):
        """Apply config.json and environment overrides, then fill derived paths."""
        if isinstance(self.config_dir, str):
            self.config_dir = Path(self.config_dir)

        self._apply_config_file()
        self._apply_env()

        for name in PATH_FIELDS:
            value = getattr(self, name)
            if isinstance(value, str):
                setattr(self, name, Path(value).expanduser())

        if self.db_path is None:
            self.db_path = self.config_dir / "settings.db"
        if self.catalog_path is None:
            self.catalog_path = self.config_dir / "tips.json"
        if self.log_dir is None:
            self.log_dir = self.config_dir / "logs"

    def _apply_config_file(self):
        """Load config.json from the config dir and override matching fields."""
        config_path = self.config_dir / "config.json"
        if not config_path.exists():
            return

        try:
            with open(config_path, "r") as f:
                data = json.load(f)
        except Exception as e:
            logger.warning(f"Ignoring unreadable config file {config_path}: {e}")
            return

        if not isinstance(data, dict):
            logger.warning(f"Ignoring config file {config_path}: expected a JSON object")
            return

        known = {f.name for f in fields(self)} - {"config_dir"}
        for key, value in data.items():
            if key in known:
                setattr(self, key, value)
            else:
                logger.warning(f"Unknown setting '{key}' in {config_path}")

    def _apply_env(self):
        for env_var, name in ENV_OVERRIDES.items():
            value = os.environ.get(env_var)
            if not value:
                continue
            if name == "show_probability":
                try:
                    value = float(value)
                except ValueError:
                    logger.warning(f"Ignoring {env_var}={value!r}: not a number")
                    continue
            setattr(self, name, value)


# Singleton settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the settings singleton."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings():
    """Drop the cached settings so the next get_settings() re-reads them."""
    global _settings
    _settings = None
