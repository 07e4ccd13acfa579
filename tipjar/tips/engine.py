"""Tip engine: decides when to show a tip and which one."""

from __future__ import annotations

import logging
import random as _random
from typing import Any, Callable, Iterable, Mapping, Optional, Union

from tipjar.services.storage import SettingsStorage
from tipjar.tips.catalog import TipCatalog
from tipjar.tips.eligibility import RandomSource
from tipjar.tips.errors import NotInitializedError
from tipjar.tips.models import TipDescriptor, TipSession
from tipjar.tips.recorder import DebouncedSaver, InteractionRecorder
from tipjar.tips.selector import select_tip
from tipjar.tips.stats import DEFAULT_STORAGE_KEY, StatsStore

logger = logging.getLogger(__name__)

# Chance that a trigger actually tries to show a tip.
DEFAULT_SHOW_PROBABILITY = 0.2


class TipRenderer:
    """Display surface for tips. The default implementation shows nothing."""

    def show(
        self,
        tip: TipDescriptor,
        on_dismiss: Optional[Callable[[], Any]],
        on_action: Optional[Callable[[], Any]],
    ):
        pass

    def show_empty(self):
        pass

    def hide(self):
        pass


class TipEngine:
    """Manages tip display with probabilistic showing and persisted limits."""

    def __init__(
        self,
        storage: SettingsStorage,
        renderer: Optional[TipRenderer] = None,
        *,
        storage_key: str = DEFAULT_STORAGE_KEY,
        show_probability: float = DEFAULT_SHOW_PROBABILITY,
        save_delay: float = 0.0,
        debug_tip_id: Optional[str] = None,
        random: RandomSource = _random.random,
        session: Optional[TipSession] = None,
    ):
        self.renderer = renderer or TipRenderer()
        self.show_probability = show_probability
        self.debug_tip_id = debug_tip_id
        self.random = random
        self.session = session or TipSession()
        self.store = StatsStore(storage, storage_key)
        self.saver = DebouncedSaver(self.store.save, delay=save_delay)
        self.recorder = InteractionRecorder(self.store, self.saver)
        self.catalog: Optional[TipCatalog] = None

    @classmethod
    def from_settings(cls, settings, storage: SettingsStorage, renderer: Optional[TipRenderer] = None, **kwargs):
        return cls(
            storage,
            renderer,
            storage_key=settings.storage_key,
            show_probability=settings.show_probability,
            save_delay=settings.save_delay,
            debug_tip_id=settings.debug_tip_id,
            **kwargs,
        )

    async def initialize(self, tips: Union[TipCatalog, Iterable[Union[TipDescriptor, Mapping[str, Any]]]]):
        """Set the catalog and load persisted stats.

        Stats are only loaded by the first call; later calls swap the catalog.
        """
        self.catalog = tips if isinstance(tips, TipCatalog) else TipCatalog(tips)
        if not self.store.loaded:
            await self.store.load()
        logger.debug(f"Tip engine initialized with {len(self.catalog)} tips")

    def _require_catalog(self) -> TipCatalog:
        if self.catalog is None:
            raise NotInitializedError("TipEngine.initialize() must be awaited before showing tips")
        return self.catalog

    def set_context(self, name: Optional[str]):
        """Set the context used by the next show attempt."""
        self.session.context = name

    @property
    def current_tip(self) -> Optional[TipDescriptor]:
        if self.catalog is None or self.session.shown_tip_id is None:
            return None
        return self.catalog.get(self.session.shown_tip_id)

    def maybe_show_tip(self) -> Optional[TipDescriptor]:
        """Count a trigger and, with ``show_probability`` chance, show a tip."""
        self._require_catalog()
        self.recorder.record_trigger_open()

        if not self.random() < self.show_probability:
            logger.debug(f"Trigger #{self.store.triggered_open} throttled")
            return None

        return self.show_tip()

    def show_tip(self) -> Optional[TipDescriptor]:
        """Show an eligible tip right away. Returns None when nothing qualifies."""
        catalog = self._require_catalog()
        context = self.session.context

        tip = None
        if self.debug_tip_id:
            tip = catalog.get(self.debug_tip_id)
        if tip is None:
            tip = select_tip(catalog, self.store, context, self.random)

        if tip is None:
            self.session.shown_tip_id = None
            logger.debug(f"No eligible tip (context={context})")
            self.renderer.show_empty()
            return None

        self.recorder.record_shown(tip.id, context)
        self.session.shown_tip_id = tip.id
        logger.info(f"Showing tip {tip.id} (context={context})")

        self.renderer.show(
            tip,
            self.dismiss if tip.allow_dismiss else None,
            self.act if tip.action_button else None,
        )
        return tip

    def dismiss(self) -> bool:
        """Dismiss the tip on screen. Returns False if none was shown."""
        tip_id = self.session.shown_tip_id
        if tip_id is None:
            return False

        self.recorder.record_dismissed(tip_id)
        self.session.shown_tip_id = None
        logger.info(f"Tip {tip_id} dismissed")
        self.renderer.hide()
        return True

    def act(self) -> Any:
        """Run the action of the tip on screen. Exceptions reach the caller."""
        tip = self.current_tip
        if tip is None or tip.action_button is None:
            return None
        logger.info(f"Running action of tip {tip.id}")
        return tip.action_button.action()

    async def flush(self) -> bool:
        return await self.saver.flush()

    async def close(self) -> bool:
        """Write any pending counters. Call before the process exits."""
        return await self.saver.close()
