"""
Colour palette and rich theme for the terminal UI
"""
from rich.style import Style
from rich.theme import Theme

# ============================================================
# Palette
# ============================================================

PRIMARY = "#c9c6cb"
SECONDARY = "#06B6D4"
SUCCESS = "#10B981"
WARNING = "#F59E0B"
ERROR = "#EF4444"
FOREGROUND = "#E5E7EB"
BACKGROUND = "#1F2937"
MUTED = "#6B7280"
HIGHLIGHT = "#FFFFFF"
DIM = "#4B5563"

# ============================================================
# Theme
# ============================================================

THEME = Theme({
    "title": Style(color=PRIMARY, bold=True),
    "subtitle": Style(color=MUTED, italic=True),
    "text": Style(color=FOREGROUND),
    "muted": Style(color=MUTED),
    "dim": Style(color=DIM),
    "accent": Style(color=SECONDARY),
    "selected": Style(color=HIGHLIGHT, bgcolor=BACKGROUND, bold=True),
    "cursor": Style(color=SECONDARY, bold=True),
    "directory": Style(color=SECONDARY, bold=True),
    "file": Style(color=FOREGROUND),
    "success": Style(color=SUCCESS),
    "warning": Style(color=WARNING),
    "error": Style(color=ERROR, bold=True),
    "help.key": Style(color=SECONDARY),
    "help.desc": Style(color=MUTED),
    "field.label": Style(color=MUTED),
    "field.focused": Style(color=SECONDARY, bold=True),
    "button": Style(color=FOREGROUND, bgcolor=DIM),
    "button.focused": Style(color=HIGHLIGHT, bgcolor=SECONDARY, bold=True),
    "border": Style(color=DIM),
    "border.focused": Style(color=SECONDARY),
    "border.danger": Style(color=ERROR),
})
