"""In-memory mirror of persisted tip stats."""

import logging
from collections.abc import Mapping
from typing import Any, Dict

from tipjar.services.storage import SettingsStorage
from tipjar.tips.models import TipStats

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "randomTips"


class StatsStore:
    """Per-tip stats and the global trigger counter, stored as one record.

    The record looks like ``{"tips": {<tip id>: stats}, "triggeredOpen": n}``.
    """

    def __init__(self, storage: SettingsStorage, key: str = DEFAULT_STORAGE_KEY):
        self.storage = storage
        self.key = key
        self.tips: Dict[str, TipStats] = {}
        self.triggered_open = 0
        self.loaded = False

    def get(self, tip_id: str) -> TipStats:
        """Stats for a tip. Unknown tips get zeroed stats, which are not stored."""
        stats = self.tips.get(tip_id)
        return stats if stats is not None else TipStats()

    def ensure(self, tip_id: str) -> TipStats:
        """Stats for a tip, creating the entry on first use."""
        stats = self.tips.get(tip_id)
        if stats is None:
            stats = self.tips[tip_id] = TipStats()
        return stats

    async def load(self):
        """Read the record from storage. Failures leave everything zeroed."""
        self.tips = {}
        self.triggered_open = 0
        self.loaded = True

        try:
            data = await self.storage.get(self.key)
        except Exception as e:
            logger.warning(f"Could not load tip stats from '{self.key}': {e}")
            return

        if data is None:
            return
        if not isinstance(data, Mapping):
            logger.warning(f"Ignoring malformed tip stats record '{self.key}'")
            return

        tips = data.get("tips")
        if isinstance(tips, Mapping):
            self.tips = {str(tip_id): TipStats.from_dict(raw) for tip_id, raw in tips.items()}

        triggered = data.get("triggeredOpen", 0)
        if isinstance(triggered, int) and not isinstance(triggered, bool) and triggered > 0:
            self.triggered_open = triggered

        logger.debug(f"Loaded stats for {len(self.tips)} tips, triggeredOpen={self.triggered_open}")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "tips": {tip_id: stats.to_dict() for tip_id, stats in self.tips.items()},
            "triggeredOpen": self.triggered_open,
        }

    async def save(self):
        """Write a snapshot of the current counters."""
        # Snapshot before awaiting, so later mutations go to the next write.
        payload = self.to_dict()
        await self.storage.set(self.key, payload)
