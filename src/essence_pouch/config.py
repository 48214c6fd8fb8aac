from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from jsonschema import Draft202012Validator
from platformdirs import user_config_dir

from .errors import ConfigError
from .pouches import COLOSSAL, PouchKind

log = logging.getLogger(__name__)

APP_NAME = "EssencePouchTracking"
ENV_CONFIG_DIR = "ESSENCE_POUCH_CONFIG_DIR"
CONFIG_FILENAME = "tracker.json"

CONFIG_SCHEMA: Dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "properties": {
        "show_only_colossal": {"type": "boolean"},
        "show_stored_essence": {"type": "boolean"},
        "show_decay": {"type": "boolean"},
        "show_debug_overlay": {"type": "boolean"},
    },
}


@dataclass
class TrackerConfig:
    """Display toggles consumed by the host overlay."""

    show_only_colossal: bool = True
    show_stored_essence: bool = True
    show_decay: bool = True
    show_debug_overlay: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "TrackerConfig":
        """Build a config from a dict, ignoring keys that are not toggles."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: bool(v) for k, v in d.items() if k in known})

    def shows_kind(self, kind: PouchKind) -> bool:
        return not self.show_only_colossal or kind == COLOSSAL


def validate_config_dict(data: Any) -> None:
    """
    Validate raw config data against ``CONFIG_SCHEMA``.

    Raises:
        jsonschema.ValidationError if the data is invalid.
    """
    validator = Draft202012Validator(CONFIG_SCHEMA)
    errors = sorted(validator.iter_errors(data), key=lambda e: list(e.path))
    if errors:
        for err in errors:
            log.error("Tracker config validation error at %s: %s", list(err.path), err.message)
        raise errors[0]


class ConfigManager:
    """Load, save and observe the tracker configuration.

    - Persists to ``tracker.json`` under the user config directory
    - ``ESSENCE_POUCH_CONFIG_DIR`` overrides the directory when no explicit one is given
    - Falls back to defaults when the file is unreadable or invalid
    """

    def __init__(self, app_name: str = APP_NAME, config_dir: Optional[Path] = None) -> None:
        self.app_name = app_name
        if config_dir is None and os.getenv(ENV_CONFIG_DIR):
            config_dir = Path(os.environ[ENV_CONFIG_DIR])
        self.config_dir = Path(config_dir) if config_dir else Path(user_config_dir(appname=app_name))
        self.config_dir.mkdir(parents=True, exist_ok=True)
        self.config_file = self.config_dir / CONFIG_FILENAME
        self._config = TrackerConfig()
        self._observers: List[Callable[[TrackerConfig], None]] = []

        if self.config_file.exists():
            self.load()
        else:
            self.save()

    @property
    def config(self) -> TrackerConfig:
        return self._config

    def subscribe(self, callback: Callable[[TrackerConfig], None]) -> None:
        self._observers.append(callback)

    def _notify(self) -> None:
        for cb in list(self._observers):
            try:
                cb(self._config)
            except Exception:  # pragma: no cover - observers are external
                log.exception("Config observer failed")

    def load(self) -> None:
        try:
            content = json.loads(self.config_file.read_text(encoding="utf-8"))
            validate_config_dict(content)
            self._config = TrackerConfig.from_dict(content)
            log.info("Tracker config loaded from %s", self.config_file)
        except Exception:
            log.exception("Failed to load tracker config; using defaults")
            self._config = TrackerConfig()

    def save(self) -> None:
        try:
            self.config_file.write_text(json.dumps(self._config.to_dict(), indent=2), encoding="utf-8")
            log.info("Tracker config saved to %s", self.config_file)
        except OSError:
            log.exception("Failed to save tracker config")

    def update(self, **toggles: bool) -> None:
        known = {f.name for f in fields(TrackerConfig)}
        for name in toggles:
            if name not in known:
                raise ConfigError(f"Unknown tracker toggle: {name}")
        for name, value in toggles.items():
            setattr(self._config, name, bool(value))
        self.save()
        self._notify()
