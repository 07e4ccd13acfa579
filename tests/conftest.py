"""Shared fixtures for tipjar tests."""

import pytest

from tipjar.services.storage import MemoryStorage
from tipjar.tips import TipDescriptor, TipEngine

STORAGE_KEY = "randomTips"

ALWAYS_SHOWS = {
    "id": "alwaysShowsTip",
    "text": "A tip to always show.",
    "requiredShowCount": None,
    "requiredTriggers": 0,
    "requireDismiss": False,
    "maximumDismiss": None,
}

NEVER_SHOWS = {
    "id": "neverShowsTip",
    "text": "A tip that may not show.",
    "requiredShowCount": 0,
    "requiredTriggers": 0,
}


def make_tip(base=None, **overrides) -> TipDescriptor:
    """Build a descriptor from ALWAYS_SHOWS (or ``base``) with camelCase overrides."""
    data = dict(base or ALWAYS_SHOWS)
    for key, value in overrides.items():
        if value is ...:
            data.pop(key, None)
        else:
            data[key] = value
    return TipDescriptor.from_dict(data)


class SequenceRandom:
    """Random source returning queued values, then ``default`` forever."""

    def __init__(self, values=(), default=0.0):
        self.values = list(values)
        self.default = default
        self.calls = 0

    def __call__(self) -> float:
        self.calls += 1
        if self.values:
            return self.values.pop(0)
        return self.default


class FlakyStorage(MemoryStorage):
    """Memory storage whose next ``fail_sets`` writes raise."""

    def __init__(self, initial=None, fail_sets=0, fail_get=False):
        super().__init__(initial)
        self.fail_sets = fail_sets
        self.fail_get = fail_get

    async def get(self, key):
        if self.fail_get:
            raise OSError("storage unavailable")
        return await super().get(key)

    async def set(self, key, value):
        if self.fail_sets > 0:
            self.fail_sets -= 1
            raise OSError("disk full")
        await super().set(key, value)


class RecordingRenderer:
    """Renderer that remembers what the engine asked it to do."""

    def __init__(self):
        self.tip = None
        self.on_dismiss = None
        self.on_action = None
        self.empty_count = 0
        self.hidden_count = 0

    def show(self, tip, on_dismiss, on_action):
        self.tip = tip
        self.on_dismiss = on_dismiss
        self.on_action = on_action

    def show_empty(self):
        self.tip = None
        self.empty_count += 1

    def hide(self):
        self.tip = None
        self.hidden_count += 1


def stored(tips=None, triggered_open=None):
    """Storage contents holding a tip stats record."""
    record = {"tips": tips or {}}
    if triggered_open is not None:
        record["triggeredOpen"] = triggered_open
    return {STORAGE_KEY: record}


@pytest.fixture
def storage():
    return MemoryStorage(stored())


@pytest.fixture
def renderer():
    return RecordingRenderer()


@pytest.fixture
def make_engine(renderer):
    """Factory for engines over memory storage with deterministic randomness."""

    async def _make(tips, initial=None, random=None, storage=None, **kwargs):
        storage = storage if storage is not None else MemoryStorage(initial if initial is not None else stored())
        engine = TipEngine(storage, renderer, random=random or SequenceRandom(), **kwargs)
        await engine.initialize(tips)
        return engine

    return _make
