from emblembadge.canvas import Canvas
from emblembadge.compositor import (
    compose_backdrop,
    draw_border,
    horizontal_gradient,
    vertical_gradient,
)
from emblembadge.theme import Layout, Theme


def test_horizontal_gradient_ramps_left_to_right():
    canvas = Canvas(10, 2)
    horizontal_gradient(canvas, 0, 0, 10, 2, (0, 0, 0, 200))

    alphas = [canvas.pixel(x, 0)[3] for x in range(10)]
    assert alphas[0] == 0
    assert alphas[5] == 100
    assert alphas == sorted(alphas)
    assert alphas[-1] == 180
    assert canvas.pixel(5, 1) == canvas.pixel(5, 0)


def test_vertical_gradient_ramps_top_to_bottom():
    canvas = Canvas(2, 10)
    vertical_gradient(canvas, 0, 0, 2, 10, (0, 0, 0, 60))

    alphas = [canvas.pixel(0, y)[3] for y in range(10)]
    assert alphas[0] == 0
    assert alphas[5] == 30
    assert alphas == sorted(alphas)


def test_gradient_with_empty_range_draws_nothing():
    canvas = Canvas(10, 10)
    horizontal_gradient(canvas, 5, 0, 5, 10, (0, 0, 0, 255))
    vertical_gradient(canvas, 0, 8, 10, 2, (0, 0, 0, 255))
    assert canvas.image.getbbox() is None


def test_border_frames_the_edges():
    canvas = Canvas(20, 10)
    draw_border(canvas, 1, (45, 45, 50, 255))

    for point in [(0, 0), (19, 0), (0, 9), (19, 9), (10, 0), (10, 9), (0, 5), (19, 5)]:
        assert canvas.pixel(*point) == (45, 45, 50, 255)
    assert canvas.pixel(10, 5) == (0, 0, 0, 0)


def test_backdrop_layers():
    theme = Theme()
    layout = Layout()
    canvas = Canvas(800, 162, (255, 255, 255, 255))
    compose_backdrop(canvas, theme, layout)

    assert canvas.pixel(0, 0) == theme.border
    assert canvas.pixel(400, 1) == theme.accent

    # Left side above the vignette only gets the uniform overlay
    r, g, b, a = canvas.pixel(100, 40)
    assert a == 255
    assert 218 <= r <= 222

    # Right side is darker than the left at the same height
    assert canvas.pixel(790, 40)[0] < r

    # Stat bar is darker still
    assert canvas.pixel(400, layout.stat_bar_y + 10)[0] < canvas.pixel(400, 40)[0]


def test_backdrop_optional_layers_can_be_disabled():
    theme = Theme()
    plain = Canvas(800, 162, (255, 255, 255, 255))
    compose_backdrop(plain, theme, Layout(vignette=False, accent_glow=False))
    full = Canvas(800, 162, (255, 255, 255, 255))
    compose_backdrop(full, theme, Layout())

    assert plain.pixel(100, 3) != full.pixel(100, 3)
    assert plain.pixel(100, 110)[0] > full.pixel(100, 110)[0]
