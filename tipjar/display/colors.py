"""Color scheme and styles for tipjar."""

from rich.theme import Theme

# Color palette
COLORS = {
    "primary": "#3B82F6",      # Blue
    "success": "#10B981",      # Green
    "warning": "#F59E0B",      # Amber
    "error": "#EF4444",        # Red
    "muted": "#6B7280",        # Gray
    "tip": "#FACC15",          # Yellow-400 (tip marker)
    "accent": "#A78BFA",       # Violet-400 (action buttons)
}

# Rich theme for console
TIPJAR_THEME = Theme({
    "info": COLORS["primary"],
    "success": COLORS["success"],
    "warning": COLORS["warning"],
    "error": COLORS["error"],
    "muted": COLORS["muted"],
})
