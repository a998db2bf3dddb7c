"""Diamond marker drawn beside the power level."""

from PIL import Image, ImageDraw

from emblembadge.canvas import Canvas
from emblembadge.theme import Color, Theme


def diamond_spans(half_width: int, half_height: int) -> list[tuple[int, int]]:
    """Row offsets and horizontal half-spans of a diamond.

    Full half-width on the centre row, shrinking linearly to zero at the tips.
    """
    if half_height <= 0:
        return [(0, half_width)]

    spans = []
    for dy in range(-half_height, half_height + 1):
        progress = 1.0 - abs(dy) / half_height
        spans.append((dy, int(half_width * progress)))
    return spans


def draw_diamond(
    canvas: Canvas, cx: int, cy: int, half_width: int, half_height: int, color: Color
) -> None:
    """Fill a diamond centred at (cx, cy), composited over the canvas."""
    spans = diamond_spans(half_width, half_height)
    top = spans[0][0]
    layer = Image.new("RGBA", (half_width * 2 + 1, len(spans)), (0, 0, 0, 0))
    draw = ImageDraw.Draw(layer)
    for dy, span in spans:
        row = dy - top
        draw.rectangle([(half_width - span, row), (half_width + span, row)], fill=color)
    canvas.paste(layer, (cx - half_width, cy + top))


def draw_layered_diamond(
    canvas: Canvas, cx: int, cy: int, half_width: int, half_height: int, theme: Theme
) -> None:
    """Shadow, black outline, then gold fill, matching the layered text look."""
    draw_diamond(canvas, cx + 2, cy + 2, half_width + 1, half_height + 1, theme.shadow)
    draw_diamond(canvas, cx, cy, half_width + 2, half_height + 2, theme.black)
    draw_diamond(canvas, cx, cy, half_width, half_height, theme.score)
