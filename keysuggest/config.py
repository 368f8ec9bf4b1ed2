"""Configuration management — JSON-based, stored in ~/.config/keysuggest/."""
import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

CONFIG_DIR = Path.home() / ".config" / "keysuggest"
CONFIG_FILE = CONFIG_DIR / "config.json"
LEARNED_FILE = CONFIG_DIR / "learned_words.json"

DEFAULT_CONFIG = {
    "locale": "en",
    "dictionary_dir": "",  # searched before the bundled dictionaries
    "learned_store_file": str(LEARNED_FILE),
    "max_candidates": 3,
    "max_suggestions": 3,
    "learning_enabled": True,
    "base_boost": 128,
    "refresh_url": "",  # e.g. http://localhost:8080/v1/vocabulary/refresh
    "refresh_timeout_ms": 200,
    "auto_correct_enabled": True,
    "auto_correct_aggressiveness": "moderate",  # conservative / moderate / aggressive
    "debug_logging": False,
}


class Config:
    def __init__(self, path=None):
        self.path = Path(path).expanduser() if path else CONFIG_FILE
        self._data = dict(DEFAULT_CONFIG)
        self.load()

    def load(self):
        if self.path.exists():
            try:
                with open(self.path, "r", encoding="utf-8") as f:
                    stored = json.load(f)
                self._data.update(stored)
            except (json.JSONDecodeError, IOError) as e:
                logger.warning("Ignoring unreadable config %s: %s", self.path, e)

    def save(self):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(self._data, f, indent=2, ensure_ascii=False)

    def get(self, key, default=None):
        return self._data.get(key, default)

    def set(self, key, value):
        self._data[key] = value
        self.save()

    @property
    def locale(self):
        return self._data["locale"]

    @property
    def dictionary_dir(self):
        return self._data.get("dictionary_dir", "")

    @property
    def learned_store_file(self):
        return self._data["learned_store_file"]

    @property
    def max_candidates(self):
        return int(self._data["max_candidates"])

    @property
    def max_suggestions(self):
        return int(self._data["max_suggestions"])

    @property
    def learning_enabled(self):
        return bool(self._data["learning_enabled"])

    @learning_enabled.setter
    def learning_enabled(self, val):
        self._data["learning_enabled"] = bool(val)
        self.save()

    @property
    def base_boost(self):
        return int(self._data["base_boost"])

    @property
    def refresh_url(self):
        return self._data.get("refresh_url", "")

    @property
    def refresh_timeout_ms(self):
        return self._data.get("refresh_timeout_ms", 200)

    @property
    def auto_correct_enabled(self):
        return bool(self._data["auto_correct_enabled"])

    @property
    def auto_correct_aggressiveness(self):
        return self._data["auto_correct_aggressiveness"]

    @property
    def debug_logging(self):
        return self._data["debug_logging"]
