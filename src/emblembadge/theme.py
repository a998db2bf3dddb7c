"""Colour palette and geometry for the badge."""

from dataclasses import dataclass, fields, replace
from typing import Any

Color = tuple[int, int, int, int]


def hex_to_rgb(hex_color: str) -> tuple[int, int, int]:
    """Convert hex color to RGB tuple."""
    hex_color = hex_color.lstrip("#")
    return tuple(int(hex_color[i : i + 2], 16) for i in (0, 2, 4))


def hex_to_rgba(hex_color: str, alpha: int = 255) -> Color:
    """Convert hex color to RGBA tuple. An 8-digit hex value carries its own alpha."""
    digits = hex_color.lstrip("#")
    if len(digits) == 8:
        alpha = int(digits[6:8], 16)
    r, g, b = hex_to_rgb(digits[:6])
    return (r, g, b, alpha)


def with_alpha(color: Color, opacity: float) -> Color:
    """Scale a colour's alpha channel by opacity (0.0 - 1.0)."""
    r, g, b, a = color
    return (r, g, b, int(a * opacity))


@dataclass(frozen=True)
class Theme:
    """Named colours used by every drawing step.

    Defaults follow the Destiny 2 exotic palette: warm gold on a dark,
    translucent UI backdrop.
    """

    score: Color = (245, 217, 106, 255)  # #F5D96A exotic gold
    accent: Color = (206, 174, 51, 255)  # #CEAE33 accent gold
    white: Color = (255, 255, 255, 255)
    dim_white: Color = (180, 180, 190, 255)
    black: Color = (0, 0, 0, 255)
    shadow: Color = (0, 0, 0, 204)
    stat_bar: Color = (0, 0, 0, 170)
    stat_bar_edge: Color = (255, 255, 255, 30)
    divider: Color = (255, 255, 255, 70)
    border: Color = (45, 45, 50, 255)
    overlay: Color = (0, 0, 0, 35)
    right_gradient: Color = (0, 0, 0, 150)
    vignette: Color = (0, 0, 0, 60)
    accent_glow: Color = (206, 174, 51, 80)
    glow_opacity: float = 0.16

    @classmethod
    def from_dict(cls, overrides: dict[str, Any] | None) -> "Theme":
        """Build a theme from config values, e.g. ``{"score": "#ffcc00"}``.

        Unknown keys raise ValueError so typos in config.yaml surface early.
        """
        if not overrides:
            return cls()

        known = {f.name for f in fields(cls)}
        values: dict[str, Any] = {}
        for key, value in overrides.items():
            if key not in known:
                raise ValueError(f"unknown theme colour: {key}")
            if key == "glow_opacity":
                values[key] = float(value)
            elif isinstance(value, str):
                values[key] = hex_to_rgba(value)
            else:
                values[key] = tuple(value) if len(value) == 4 else (*value, 255)
        return cls(**values)


@dataclass(frozen=True)
class Layout:
    """Fixed badge geometry. All offsets are in output pixels."""

    width: int = 800
    height: int = 162  # 474:96 emblem banner aspect ratio

    margin_x: int = 20
    margin_top: int = 12
    stat_bar_height: int = 44
    accent_height: int = 3
    border_width: int = 1
    divider_width: int = 1
    gradient_start: float = 0.4

    diamond_half_width: int = 10
    diamond_half_height: int = 10
    diamond_gap: int = 6
    diamond_lift: int = 16

    username_x: int = 130
    username_baseline: int = 22
    score_baseline: int = 52

    stat_value_offset: int = 18
    stat_label_offset: int = 36
    inline_label_gap: int = 6
    stat_arrangement: str = "stacked"

    vignette: bool = True
    accent_glow: bool = True

    def __post_init__(self):
        if self.stat_arrangement not in ("stacked", "inline"):
            raise ValueError(f"unknown stat_arrangement: {self.stat_arrangement}")

    @property
    def size(self) -> tuple[int, int]:
        return (self.width, self.height)

    @property
    def aspect(self) -> float:
        return self.width / self.height

    @property
    def stat_bar_y(self) -> int:
        return self.height - self.stat_bar_height

    @property
    def cell_width(self) -> int:
        return self.width // 5

    def with_overrides(self, overrides: dict[str, Any] | None) -> "Layout":
        """Return a copy with config overrides applied. Canvas size is not overridable."""
        if not overrides:
            return self
        locked = {"width", "height"} & set(overrides)
        if locked:
            raise ValueError(f"badge size is fixed; cannot override {', '.join(sorted(locked))}")
        known = {f.name for f in fields(self)}
        unknown = set(overrides) - known
        if unknown:
            raise ValueError(f"unknown layout setting: {', '.join(sorted(unknown))}")

        checked = {}
        for key, value in overrides.items():
            expected = type(getattr(self, key))
            # an int is accepted for a float setting, e.g. gradient_start: 1
            if expected is float and type(value) is int:
                value = float(value)
            if type(value) is not expected:
                raise ValueError(f"layout setting {key} must be {expected.__name__}, got {value!r}")
            checked[key] = value
        return replace(self, **checked)
