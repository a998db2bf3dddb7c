"""Render Destiny-style contribution badges from GitHub stats."""

from emblembadge.errors import BadgeError, FontLoadError, ImageLoadError, OutputError
from emblembadge.formatting import format_number
from emblembadge.renderer import BadgeRenderer
from emblembadge.stats import StatRecord
from emblembadge.theme import Layout, Theme

__version__ = "0.3.0"

__all__ = [
    "BadgeError",
    "BadgeRenderer",
    "FontLoadError",
    "ImageLoadError",
    "Layout",
    "OutputError",
    "StatRecord",
    "Theme",
    "format_number",
]
