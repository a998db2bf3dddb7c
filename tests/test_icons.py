from emblembadge.canvas import Canvas
from emblembadge.icons import diamond_spans, draw_diamond, draw_layered_diamond
from emblembadge.theme import Theme

GOLD = (245, 217, 106, 255)


def test_spans_shrink_to_tips():
    spans = dict(diamond_spans(10, 10))
    assert len(spans) == 21
    assert spans[0] == 10
    assert spans[-10] == spans[10] == 0
    assert spans[5] == spans[-5] == 5


def test_spans_with_unequal_halves():
    assert diamond_spans(4, 2) == [(-2, 0), (-1, 2), (0, 4), (1, 2), (2, 0)]


def test_flat_diamond_is_a_single_row():
    assert diamond_spans(6, 0) == [(0, 6)]


def test_draw_diamond_fills_rows():
    canvas = Canvas(40, 40)
    draw_diamond(canvas, 20, 20, 10, 10, GOLD)

    assert canvas.pixel(20, 20) == GOLD
    assert canvas.pixel(30, 20) == GOLD
    assert canvas.pixel(31, 20) == (0, 0, 0, 0)
    assert canvas.pixel(25, 25) == GOLD
    assert canvas.pixel(26, 25) == (0, 0, 0, 0)
    assert canvas.pixel(20, 10) == GOLD
    assert canvas.pixel(21, 10) == (0, 0, 0, 0)
    assert canvas.pixel(0, 0) == (0, 0, 0, 0)


def test_layered_diamond_has_black_outline_and_gold_core():
    theme = Theme()
    canvas = Canvas(40, 40)
    draw_layered_diamond(canvas, 20, 20, 10, 10, theme)

    assert canvas.pixel(20, 20) == theme.score
    assert canvas.pixel(31, 20) == theme.black
    # shadow peeks out below-right of the outline
    assert canvas.pixel(22, 33)[3] > 0
    assert canvas.pixel(20, 33) == (0, 0, 0, 0)
