"""Exceptions raised by the tip engine."""


class TipError(Exception):
    """Base class for tip engine errors."""


class CatalogError(TipError):
    """The tip catalog is malformed (e.g. duplicate tip ids)."""


class NotInitializedError(TipError):
    """The engine was used before initialize() finished."""
