"""Configuration management — JSON-based, stored in ~/.config/textmask/."""
import json
import logging
from pathlib import Path

from textmask.completion import PlaceholderPolicy
from textmask.delimiters import DEFAULT_DELIMITERS
from textmask.style import StyleConfig

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = {
    "mask": "##/##/####",
    "delimiters": DEFAULT_DELIMITERS,
    "mask_color": "#000000",
    "mask_alpha": 0.3,
    "placeholder_policy": "position",  # "position" or "value"
    "notify_unchanged": True,  # fire completion notification on every set
    "debug_logging": False,
}

CONFIG_DIR = Path.home() / ".config" / "textmask"
CONFIG_FILE = CONFIG_DIR / "config.json"


class Config:
    def __init__(self, path: Path = None):
        self._path = Path(path) if path else CONFIG_FILE
        self._data = dict(DEFAULT_CONFIG)
        self.load()

    @property
    def path(self) -> Path:
        return self._path

    def load(self):
        if self._path.exists():
            try:
                with open(self._path, "r") as f:
                    stored = json.load(f)
                self._data.update(stored)
            except (json.JSONDecodeError, IOError) as e:
                logger.warning("Ignoring unreadable config %s: %s", self._path, e)

    def save(self):
        self._path.parent.mkdir(parents=True, exist_ok=True)
        with open(self._path, "w") as f:
            json.dump(self._data, f, indent=2, ensure_ascii=False)

    def get(self, key, default=None):
        return self._data.get(key, default)

    def set(self, key, value):
        self._data[key] = value
        self.save()

    @property
    def mask(self):
        return self._data["mask"]

    @mask.setter
    def mask(self, val):
        self._data["mask"] = val or ""
        self.save()

    @property
    def delimiters(self):
        return self._data["delimiters"]

    @delimiters.setter
    def delimiters(self, val):
        self._data["delimiters"] = val or ""
        self.save()

    @property
    def placeholder_policy(self) -> PlaceholderPolicy:
        return PlaceholderPolicy.parse(self._data["placeholder_policy"])

    @placeholder_policy.setter
    def placeholder_policy(self, val):
        self._data["placeholder_policy"] = PlaceholderPolicy.parse(val).value
        self.save()

    @property
    def notify_unchanged(self):
        return bool(self._data.get("notify_unchanged", True))

    @property
    def debug_logging(self):
        return self._data["debug_logging"]

    def style(self) -> StyleConfig:
        return StyleConfig(
            mask_color=self._data["mask_color"],
            mask_alpha=float(self._data["mask_alpha"]),
        )
