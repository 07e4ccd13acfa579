"""Services used by the tip engine."""
