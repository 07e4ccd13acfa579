"""Data model for tips, their persisted stats and the per-engine session."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Dict, Mapping, Optional, Union

from tipjar.tips.errors import CatalogError

DEFAULT_REQUIRED_TRIGGERS = 10


def _is_count(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


def _limit(value: Any, key: str, tip_id: str, optional: bool = True) -> Optional[int]:
    """Validate a catalog count: a non-negative int, or None where allowed."""
    if value is None and optional:
        return None
    if not _is_count(value):
        allowed = "a non-negative integer or null" if optional else "a non-negative integer"
        raise CatalogError(f"Tip {tip_id!r}: {key} must be {allowed}, got {value!r}")
    return value


def _probability(value: Any, key: str, tip_id: str) -> Union[bool, float]:
    if isinstance(value, bool):
        return value
    if not isinstance(value, (int, float)) or not 0 <= value <= 1:
        raise CatalogError(f"Tip {tip_id!r}: {key} must be a boolean or a number in [0, 1], got {value!r}")
    return value


def _flag(value: Any, key: str, tip_id: str) -> Union[bool, int, float]:
    if isinstance(value, bool) or (isinstance(value, (int, float)) and value >= 0):
        return value
    raise CatalogError(f"Tip {tip_id!r}: {key} must be a boolean, got {value!r}")


def _frozen_mapping(value: Any, key: str, tip_id: str) -> Optional[Mapping[str, int]]:
    if value is None:
        return None
    if not isinstance(value, Mapping):
        raise CatalogError(f"Tip {tip_id!r}: {key} must be a mapping of context to count")
    for context, count in value.items():
        if not isinstance(context, str) or not _is_count(count):
            raise CatalogError(
                f"Tip {tip_id!r}: {key}[{context!r}] must be a non-negative integer, got {count!r}"
            )
    return MappingProxyType(dict(value))


def _count(value: Any) -> int:
    """Coerce a persisted counter, treating anything invalid as zero."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    return max(int(value), 0)


@dataclass(frozen=True)
class ActionButton:
    """Optional button rendered with a tip."""
    text: str
    action: Callable[[], Any]


@dataclass(frozen=True)
class TipDescriptor:
    """A tip and the rules deciding when it may be shown."""
    id: str
    text: str
    required_show_count: Optional[int] = None
    required_triggers: int = DEFAULT_REQUIRED_TRIGGERS
    require_dismiss: Union[bool, int, float] = False
    maximum_dismiss: Optional[int] = None
    allow_dismiss: bool = True
    show_in_context: Optional[Mapping[str, int]] = None
    maximum_in_context: Optional[Mapping[str, int]] = None
    randomize_display: Union[bool, float] = False
    action_button: Optional[ActionButton] = None

    @classmethod
    def from_dict(
        cls,
        data: Mapping[str, Any],
        resolve_action: Optional[Callable[[Any], Callable[[], Any]]] = None,
    ) -> "TipDescriptor":
        """Build a descriptor from a mapping using the camelCase catalog keys.

        ``resolve_action`` turns a non-callable ``actionButton.action`` (for
        instance a URL read from a JSON catalog) into a callable.
        """
        if not isinstance(data, Mapping):
            raise CatalogError(f"Tip entry must be a mapping, got {type(data).__name__}")
        tip_id = data.get("id")
        text = data.get("text")
        if not isinstance(tip_id, str) or not tip_id:
            raise CatalogError(f"Tip without a valid id: {dict(data)!r}")
        if not isinstance(text, str):
            raise CatalogError(f"Tip {tip_id!r} has no text")

        action_button = None
        button = data.get("actionButton")
        if button is not None:
            if not isinstance(button, Mapping):
                raise CatalogError(f"Tip {tip_id!r}: actionButton must be a mapping")
            action = button.get("action")
            if not callable(action):
                if resolve_action is None:
                    raise CatalogError(f"Tip {tip_id!r}: action button needs a callable action")
                action = resolve_action(action)
            action_button = ActionButton(text=button.get("text", ""), action=action)

        # "maximumInContest" is the key older catalogs were written with.
        maximum_in_context = data.get("maximumInContext", data.get("maximumInContest"))

        return cls(
            id=tip_id,
            text=text,
            required_show_count=_limit(data.get("requiredShowCount"), "requiredShowCount", tip_id),
            required_triggers=_limit(
                data.get("requiredTriggers", DEFAULT_REQUIRED_TRIGGERS), "requiredTriggers", tip_id, optional=False
            ),
            require_dismiss=_flag(data.get("requireDismiss", False), "requireDismiss", tip_id),
            maximum_dismiss=_limit(data.get("maximumDismiss"), "maximumDismiss", tip_id),
            allow_dismiss=_flag(data.get("allowDismiss", True), "allowDismiss", tip_id),
            show_in_context=_frozen_mapping(data.get("showInContext"), "showInContext", tip_id),
            maximum_in_context=_frozen_mapping(maximum_in_context, "maximumInContext", tip_id),
            randomize_display=_probability(data.get("randomizeDisplay", False), "randomizeDisplay", tip_id),
            action_button=action_button,
        )


@dataclass
class TipStats:
    """Persisted counters for a single tip."""
    shown_count: int = 0
    dismissed_count: int = 0
    shown_context: Dict[str, int] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> "TipStats":
        """Parse stored stats. Anything missing or malformed counts as zero."""
        if not isinstance(data, Mapping):
            return cls()
        contexts = data.get("shownContext")
        shown_context = {}
        if isinstance(contexts, Mapping):
            shown_context = {
                str(name): _count(count) for name, count in contexts.items()
            }
        return cls(
            shown_count=_count(data.get("shownCount")),
            dismissed_count=_count(data.get("dismissedCount")),
            shown_context=shown_context,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "shownCount": self.shown_count,
            "dismissedCount": self.dismissed_count,
            "shownContext": dict(self.shown_context),
        }


@dataclass
class TipSession:
    """Session state of one engine. Never persisted."""
    context: Optional[str] = None
    shown_tip_id: Optional[str] = None
