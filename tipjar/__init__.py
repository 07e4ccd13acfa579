"""tipjar - contextual tips with persisted show/dismiss limits."""

__version__ = "0.1.0"
