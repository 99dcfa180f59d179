"""
JSON-backed configuration: list-valued tab completions and message overrides.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

from platformdirs import user_config_dir

logger = logging.getLogger(__name__)

config_dir = Path(user_config_dir("starcommands"))
config_file = config_dir / "config.json"


class ConfigStorage:
    """
    Read-only view of a JSON config file.

    Nested objects are addressed with dot-separated paths, so
    ``get_string_list("punish.reasons")`` reads ``{"punish": {"reasons": [...]}}``.
    A missing or unreadable file behaves like an empty config.
    """

    def __init__(self, path: Path | str = config_file):
        self.path: Path | None = Path(path)
        self._data: dict[str, Any] = {}
        self.reload()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ConfigStorage:
        storage = cls.__new__(cls)
        storage.path = None
        storage._data = data
        return storage

    @property
    def loaded(self) -> bool:
        return bool(self._data)

    def reload(self) -> None:
        """Load the config from disk. In-memory configs are left as they are."""
        if self.path is None:
            return

        self._data = {}
        if not self.path.exists():
            logger.debug("no config at %s", self.path)
            return

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("could not read config %s: %s", self.path, e)
            return

        if not isinstance(data, dict):
            logger.warning("config %s is not a JSON object, ignoring it", self.path)
            return
        self._data = data

    def get(self, path: str, default: Any = None) -> Any:
        current: Any = self._data
        for part in path.split("."):
            if not isinstance(current, dict) or part not in current:
                return default
            current = current[part]
        return current

    def get_string_list(self, path: str) -> list[str]:
        """The list at ``path`` as strings; empty if absent or not a list."""
        value = self.get(path)
        if not isinstance(value, list):
            return []
        return [str(item) for item in value]


@dataclass(frozen=True)
class Messages:
    """User-facing strings. Any of them can be overridden under ``messages``."""

    player_only: str = "Sorry, but you have to be a player to use this command."
    console_only: str = "Sorry, but you have to be the console to use this command."
    cooldown: str = "Please wait {seconds}s before you use this command again."
    not_a_number: str = "Invalid parameters. It needs to be a number."
    not_a_boolean: str = "Invalid parameters. It needs to be true or false."
    unknown_player: str = "Invalid parameters. This player doesn't exist."
    unknown_world: str = "Invalid parameters. This world doesn't exist."
    unknown_material: str = "Invalid parameters. This type of material doesn't exist."
    unknown_sound: str = "Invalid parameters. This sound doesn't exist."
    unknown_entity: str = "Invalid parameters. This entity type doesn't exist."
    not_in_list: str = "Sorry, but that's an invalid parameter."

    @classmethod
    def from_config(cls, config: ConfigStorage | None) -> Messages:
        if config is None:
            return cls()

        overrides = {}
        for field in fields(cls):
            value = config.get(f"messages.{field.name}")
            if isinstance(value, str):
                overrides[field.name] = value

        if "cooldown" in overrides:
            try:
                overrides["cooldown"].format(seconds=0)
            except (KeyError, IndexError, ValueError, AttributeError, TypeError) as e:
                logger.warning(
                    "ignoring messages.cooldown %r: only {seconds} may be used (%s)",
                    overrides.pop("cooldown"),
                    e,
                )
        return cls(**overrides)
