from __future__ import annotations

import logging
import math
import threading
import time
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from .command import CooldownSpec
    from .host import CommandSender

logger = logging.getLogger(__name__)

CONSOLE_KEY = "CONSOLE"


class CooldownTracker:
    """
    Per-sender cooldown expiry times.

    Players are keyed by uuid; every non-player sender shares the console
    key. Entries are never persisted and are dropped when found expired.
    The lock makes the tracker safe to share between host threads.
    """

    def __init__(self, clock: Callable[[], float] = time.time):
        self._clock = clock
        self._lock = threading.Lock()
        self._expiry: dict[str, float] = {}

    @staticmethod
    def key(sender: CommandSender) -> str:
        if sender.is_player:
            return str(getattr(sender, "uuid"))
        return CONSOLE_KEY

    def is_in_cooldown(self, sender: CommandSender) -> bool:
        key = self.key(sender)
        with self._lock:
            expiry = self._expiry.get(key)
            if expiry is None:
                return False
            if expiry > self._clock():
                return True
            del self._expiry[key]
            return False

    def remaining_seconds(self, sender: CommandSender) -> int:
        """Whole seconds left, rounded up. Only meaningful while in cooldown."""
        with self._lock:
            expiry = self._expiry.get(self.key(sender))
        if expiry is None:
            return 0
        return max(0, math.ceil(expiry - self._clock()))

    def record(self, sender: CommandSender, spec: CooldownSpec | None) -> None:
        if spec is None:
            return

        key = self.key(sender)
        if key == CONSOLE_KEY and not spec.console_too:
            return
        if (
            key != CONSOLE_KEY
            and spec.bypass_permission
            and sender.has_permission(spec.bypass_permission)
        ):
            logger.debug("%s bypasses the cooldown", sender.name)
            return

        with self._lock:
            self._expiry[key] = self._clock() + spec.seconds

    def clear(self) -> None:
        with self._lock:
            self._expiry.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._expiry)
