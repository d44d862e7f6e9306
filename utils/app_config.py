"""Durable client preferences. Zero imports from the rest of the app.

Holds state that must survive restarts and is read once at startup:
session token + username, UI locale, appearance mode.
Config lives in <config_dir>/config.json.
"""
import json
import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "config.json"


class AppConfig:
    def __init__(self, config_dir: Path | str):
        self.config_dir = Path(config_dir)
        self.config_file = self.config_dir / CONFIG_FILENAME

    def load(self) -> dict:
        """Returns {} on missing or corrupt file; never raises."""
        try:
            with open(self.config_file, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable config file", extra={"path": str(self.config_file), "error": str(e)})
            return {}
        return data if isinstance(data, dict) else {}

    def save(self, config: dict) -> None:
        """Creates the config dir if needed; atomic write via .tmp + os.replace()."""
        self.config_dir.mkdir(parents=True, exist_ok=True)
        tmp = self.config_file.with_suffix(".tmp")
        try:
            with open(tmp, "w", encoding="utf-8") as f:
                json.dump(config, f, indent=2, ensure_ascii=False)
            os.replace(tmp, self.config_file)
        except OSError:
            tmp.unlink(missing_ok=True)
            raise

    def get(self, key: str, default=None):
        return self.load().get(key, default)

    def update(self, **values) -> None:
        """Merge values into the stored config; a None value removes the key."""
        config = self.load()
        for key, value in values.items():
            if value is None:
                config.pop(key, None)
            else:
                config[key] = value
        self.save(config)
