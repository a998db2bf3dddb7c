"""Layered text rendering: glow, shadow, stroke and fill passes."""

import logging
from dataclasses import dataclass
from io import BytesIO
from pathlib import Path

from PIL import Image, ImageDraw, ImageFont

from emblembadge.canvas import Canvas
from emblembadge.errors import FontLoadError
from emblembadge.theme import Color, Theme, with_alpha

logger = logging.getLogger(__name__)

Font = ImageFont.FreeTypeFont | ImageFont.ImageFont

GLOW = "glow"
SHADOW = "shadow"
STROKE = "stroke"
FILL = "fill"


@dataclass(frozen=True)
class TextPass:
    """One copy of the text drawn at a pixel offset in a role's colour."""

    dx: int
    dy: int
    role: str


def _ring(radius: int) -> tuple[tuple[int, int], ...]:
    """Offsets on the square ring at Chebyshev distance radius."""
    return tuple(
        (dx, dy)
        for dx in range(-radius, radius + 1)
        for dy in range(-radius, radius + 1)
        if max(abs(dx), abs(dy)) == radius
    )


def _passes(role: str, offsets) -> tuple[TextPass, ...]:
    return tuple(TextPass(dx, dy, role) for dx, dy in offsets)


def compose_effect(*parts: tuple[TextPass, ...]) -> tuple[TextPass, ...]:
    """Concatenate pass tables into a new effect; earlier passes sit underneath."""
    effect: tuple[TextPass, ...] = ()
    for part in parts:
        effect += part
    return effect


PLAIN = _passes(FILL, [(0, 0)])

# 2px stroke ring, two stacked shadows down-right
OUTLINE = compose_effect(
    _passes(SHADOW, [(2, 2), (3, 3)]),
    _passes(STROKE, _ring(2)),
    PLAIN,
)

# 1px stroke ring, single shadow: reads as part of the UI rather than floating
SUBTLE = compose_effect(
    _passes(SHADOW, [(1, 1)]),
    _passes(STROKE, _ring(1)),
    PLAIN,
)

GLOW_OFFSETS = [
    (-3, 0), (3, 0), (0, -3), (0, 3),
    (-2, -2), (2, -2), (-2, 2), (2, 2),
    (-3, -1), (3, 1), (0, 2),
]

GLOW_OUTLINE = compose_effect(_passes(GLOW, GLOW_OFFSETS), OUTLINE)


@dataclass(frozen=True)
class FontSizes:
    """Point sizes of the four faces (72 DPI, so points == pixels)."""

    score: int = 48
    name: int = 20
    stat_value: int = 16
    stat_label: int = 10


@dataclass(frozen=True)
class FontSources:
    """Raw typeface bytes for the bold and medium weights.

    Read-only and safe to share between renders. A weight left as None
    falls back to Pillow's built-in scalable font.
    """

    bold: bytes | None = None
    medium: bytes | None = None

    ASSETS_DIR = Path(__file__).parent / "assets" / "fonts"

    BOLD_PATHS = [
        ASSETS_DIR / "Inter-Bold.ttf",
        # macOS
        "/Library/Fonts/Inter-Bold.ttf",
        "/System/Library/Fonts/Supplemental/Arial Bold.ttf",
        # Linux
        "/usr/share/fonts/truetype/inter/Inter-Bold.ttf",
        "/usr/share/fonts/opentype/inter/Inter-Bold.otf",
        "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf",
        # Windows
        "C:/Windows/Fonts/segoeuib.ttf",
    ]
    MEDIUM_PATHS = [
        ASSETS_DIR / "Inter-Medium.ttf",
        "/Library/Fonts/Inter-Medium.ttf",
        "/System/Library/Fonts/Supplemental/Arial.ttf",
        "/usr/share/fonts/truetype/inter/Inter-Medium.ttf",
        "/usr/share/fonts/opentype/inter/Inter-Medium.otf",
        "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
        "C:/Windows/Fonts/segoeui.ttf",
    ]

    @classmethod
    def from_files(cls, bold: str | Path, medium: str | Path) -> "FontSources":
        try:
            return cls(bold=Path(bold).read_bytes(), medium=Path(medium).read_bytes())
        except OSError as e:
            raise FontLoadError(str(e)) from e

    @classmethod
    def discover(cls) -> "FontSources":
        """Use the bundled Inter faces, else the first matching system font."""
        return cls(bold=cls._first_readable(cls.BOLD_PATHS), medium=cls._first_readable(cls.MEDIUM_PATHS))

    @staticmethod
    def _first_readable(candidates) -> bytes | None:
        for font_path in candidates:
            path = Path(font_path)
            if path.exists():
                try:
                    data = path.read_bytes()
                except OSError:
                    continue
                logger.debug("Using font %s", path)
                return data
        return None


def _load_face(data: bytes | None, size: int) -> Font:
    if data is None:
        return ImageFont.load_default(size)
    return ImageFont.truetype(BytesIO(data), size)


class FontSet:
    """The four faces used on a badge. Use as a context manager so the
    handles are dropped even when drawing fails."""

    def __init__(self, score: Font, name: Font, stat_value: Font, stat_label: Font):
        self.score = score
        self.name = name
        self.stat_value = stat_value
        self.stat_label = stat_label

    @classmethod
    def load(cls, sources: FontSources, sizes: FontSizes = FontSizes()) -> "FontSet":
        """Parse the typeface bytes at each size.

        Raises:
            FontLoadError: if either typeface cannot be parsed
        """
        try:
            return cls(
                score=_load_face(sources.bold, sizes.score),
                name=_load_face(sources.medium, sizes.name),
                stat_value=_load_face(sources.bold, sizes.stat_value),
                stat_label=_load_face(sources.medium, sizes.stat_label),
            )
        except (OSError, ValueError) as e:
            raise FontLoadError(str(e)) from e

    def close(self) -> None:
        self.score = self.name = self.stat_value = self.stat_label = None

    @property
    def closed(self) -> bool:
        return self.score is None

    def __enter__(self) -> "FontSet":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


class TextRenderer:
    """Draws text as an ordered stack of passes at a baseline-left anchor."""

    def __init__(self, theme: Theme, antialias: bool = True):
        self.theme = theme
        self.antialias = antialias

    def measure(self, font: Font, text: str, tracking: int = 0) -> int:
        """Width of text as the sum of glyph advances (plus tracking between glyphs)."""
        if font is None:
            raise ValueError("font handle is not loaded")
        if not text:
            return 0
        if tracking:
            advance = sum(font.getlength(ch) for ch in text)
            return int(round(advance)) + tracking * (len(text) - 1)
        return int(round(font.getlength(text)))

    def draw(
        self,
        canvas: Canvas,
        text: str,
        x: int,
        y: int,
        font: Font,
        color: Color,
        effect: tuple[TextPass, ...] = OUTLINE,
        glow_color: Color | None = None,
        tracking: int = 0,
    ) -> None:
        """
        Draw text with every pass of effect, in order.

        Args:
            x, y: left edge and baseline of the text
            color: fill colour
            effect: pass table, e.g. OUTLINE, SUBTLE or GLOW_OUTLINE
            glow_color: colour of glow passes (defaults to the fill colour)
            tracking: extra pixels between characters; draws glyph by glyph
        """
        if font is None:
            raise ValueError("font handle is not loaded")
        if not text:
            return

        glyphs = self._layout_glyphs(font, text, tracking)
        colors = {
            GLOW: with_alpha(glow_color or color, self.theme.glow_opacity),
            SHADOW: self.theme.shadow,
            STROKE: self.theme.black,
            FILL: color,
        }
        tiles: dict[str, list[Image.Image]] = {}

        # Pass-major: every glyph gets its shadow before any glyph gets its stroke
        for text_pass in effect:
            if text_pass.role not in tiles:
                tiles[text_pass.role] = [_tint(mask, colors[text_pass.role]) for mask, _, _ in glyphs]
            for tile, (_, gx, gy) in zip(tiles[text_pass.role], glyphs):
                canvas.paste(tile, (x + gx + text_pass.dx, y + gy + text_pass.dy))

    def draw_outlined(self, canvas: Canvas, text: str, x: int, y: int, font: Font, color: Color) -> None:
        self.draw(canvas, text, x, y, font, color, OUTLINE)

    def draw_subtle(self, canvas: Canvas, text: str, x: int, y: int, font: Font, color: Color) -> None:
        self.draw(canvas, text, x, y, font, color, SUBTLE)

    def draw_glow(
        self,
        canvas: Canvas,
        text: str,
        x: int,
        y: int,
        font: Font,
        color: Color,
        glow_color: Color | None = None,
    ) -> None:
        self.draw(canvas, text, x, y, font, color, GLOW_OUTLINE, glow_color=glow_color)

    def draw_tracked(
        self,
        canvas: Canvas,
        text: str,
        x: int,
        y: int,
        font: Font,
        color: Color,
        tracking: int,
        effect: tuple[TextPass, ...] = OUTLINE,
    ) -> None:
        self.draw(canvas, text, x, y, font, color, effect, tracking=tracking)

    def _layout_glyphs(self, font: Font, text: str, tracking: int) -> list[tuple[Image.Image, int, int]]:
        """Masks with their offsets from the anchor. One mask for the whole
        string unless tracking asks for per-character placement."""
        if not tracking:
            rendered = self._mask(font, text)
            return [rendered] if rendered else []

        glyphs = []
        pen = 0.0
        for ch in text:
            rendered = self._mask(font, ch)
            if rendered:
                mask, gx, gy = rendered
                glyphs.append((mask, int(round(pen)) + gx, gy))
            pen += font.getlength(ch) + tracking
        return glyphs

    def _mask(self, font: Font, text: str) -> tuple[Image.Image, int, int] | None:
        left, top, right, bottom = font.getbbox(text, anchor="ls")
        if right <= left or bottom <= top:
            return None

        mask = Image.new("L", (right - left, bottom - top), 0)
        draw = ImageDraw.Draw(mask)
        if not self.antialias:
            draw.fontmode = "1"
        draw.text((-left, -top), text, font=font, fill=255, anchor="ls")
        return mask, left, top


def _tint(mask: Image.Image, color: Color) -> Image.Image:
    """Solid colour tile whose alpha is the glyph coverage scaled by the colour's alpha."""
    r, g, b, a = color
    alpha = mask if a == 255 else mask.point(lambda v: v * a // 255)
    tile = Image.new("RGBA", mask.size, (r, g, b, 0))
    tile.putalpha(alpha)
    return tile
