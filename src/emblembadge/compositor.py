"""Dark UI backdrop drawn over the framed artwork."""

from PIL import Image, ImageDraw

from emblembadge.canvas import Canvas
from emblembadge.theme import Color, Layout, Theme


def _ramp(position: int, start: int, end: int, max_alpha: int) -> int:
    """Alpha at position on a linear 0 -> max_alpha ramp over [start, end)."""
    return int((position - start) / (end - start) * max_alpha)


def horizontal_gradient(
    canvas: Canvas, start_x: int, y: int, end_x: int, height: int, end_color: Color
) -> None:
    """Left-to-right gradient from transparent to end_color, one column at a time."""
    width = end_x - start_x
    if width <= 0 or height <= 0:
        return

    r, g, b, a = end_color
    layer = Image.new("RGBA", (width, height), (0, 0, 0, 0))
    draw = ImageDraw.Draw(layer)
    for x in range(start_x, end_x):
        alpha = _ramp(x, start_x, end_x, a)
        draw.rectangle([(x - start_x, 0), (x - start_x, height - 1)], fill=(r, g, b, alpha))
    canvas.paste(layer, (start_x, y))


def vertical_gradient(
    canvas: Canvas, x: int, start_y: int, width: int, end_y: int, end_color: Color
) -> None:
    """Top-to-bottom gradient from transparent to end_color, one row at a time."""
    height = end_y - start_y
    if width <= 0 or height <= 0:
        return

    r, g, b, a = end_color
    layer = Image.new("RGBA", (width, height), (0, 0, 0, 0))
    draw = ImageDraw.Draw(layer)
    for y in range(start_y, end_y):
        alpha = _ramp(y, start_y, end_y, a)
        draw.rectangle([(0, y - start_y), (width - 1, y - start_y)], fill=(r, g, b, alpha))
    canvas.paste(layer, (x, start_y))


def draw_border(canvas: Canvas, border_width: int, color: Color) -> None:
    """Draw a frame around the canvas edge."""
    width, height = canvas.size
    canvas.fill_rect(0, 0, width, border_width, color)
    canvas.fill_rect(0, height - border_width, width, border_width, color)
    canvas.fill_rect(0, 0, border_width, height, color)
    canvas.fill_rect(width - border_width, 0, border_width, height, color)


def compose_backdrop(canvas: Canvas, theme: Theme, layout: Layout) -> None:
    """Composite the overlay, gradients, stat bar, accent line and border, in that order."""
    width, height = canvas.size

    # Overall darkening for the dark UI feel
    canvas.fill_rect(0, 0, width, height, theme.overlay)

    # Right side darkens towards the edge where the score sits
    horizontal_gradient(
        canvas, int(width * layout.gradient_start), 0, width, height, theme.right_gradient
    )

    stat_bar_y = layout.stat_bar_y
    if layout.vignette:
        vertical_gradient(canvas, 0, height // 2, width, stat_bar_y, theme.vignette)

    canvas.fill_rect(0, stat_bar_y, width, layout.stat_bar_height, theme.stat_bar)
    canvas.fill_rect(0, stat_bar_y, width, 1, theme.stat_bar_edge)

    canvas.fill_rect(0, 0, width, layout.accent_height, theme.accent)
    if layout.accent_glow:
        canvas.fill_rect(0, layout.accent_height, width, 1, theme.accent_glow)

    draw_border(canvas, layout.border_width, theme.border)
