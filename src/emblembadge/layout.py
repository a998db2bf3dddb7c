"""Positions of the username, power level and stat grid."""

from dataclasses import dataclass

from emblembadge.canvas import Canvas
from emblembadge.formatting import format_number
from emblembadge.icons import draw_layered_diamond
from emblembadge.stats import STAT_LABELS, StatRecord
from emblembadge.theme import Layout, Theme
from emblembadge.typography import FontSet, TextRenderer


def stat_cells(width: int, count: int = 5) -> list[tuple[int, int]]:
    """Split width into count equal cells as (x, width); the last absorbs the remainder."""
    cell_width = width // count
    cells = [(i * cell_width, cell_width) for i in range(count - 1)]
    last_x = (count - 1) * cell_width
    cells.append((last_x, width - last_x))
    return cells


@dataclass(frozen=True)
class ScoreGeometry:
    """Where the power level block lands for a given text width."""

    text_x: int
    baseline: int
    diamond_cx: int
    diamond_cy: int


class LayoutEngine:
    """Computes on-canvas positions and draws the text and icon layers."""

    def __init__(self, theme: Theme, layout: Layout, text: TextRenderer):
        self.theme = theme
        self.layout = layout
        self.text = text

    def score_geometry(self, score_width: int) -> ScoreGeometry:
        """Right-align diamond + gap + number against the right margin."""
        lay = self.layout
        block_width = lay.diamond_half_width * 2 + lay.diamond_gap + score_width
        block_x = lay.width - lay.margin_x - block_width
        baseline = lay.accent_height + lay.margin_top + lay.score_baseline

        return ScoreGeometry(
            text_x=block_x + lay.diamond_half_width * 2 + lay.diamond_gap,
            baseline=baseline,
            diamond_cx=block_x + lay.diamond_half_width,
            # Lift the diamond to sit on the number's cap height, not its baseline
            diamond_cy=baseline - lay.diamond_lift,
        )

    def draw(self, canvas: Canvas, stats: StatRecord, fonts: FontSet) -> None:
        self._draw_username(canvas, stats.display_name, fonts)
        self._draw_power_level(canvas, stats.aggregate_score, fonts)
        self._draw_stat_grid(canvas, stats, fonts)

    def _draw_username(self, canvas: Canvas, display_name: str, fonts: FontSet) -> None:
        if not display_name:
            return
        lay = self.layout
        y = lay.accent_height + lay.margin_top + lay.username_baseline
        self.text.draw_subtle(canvas, display_name.upper(), lay.username_x, y, fonts.name, self.theme.white)

    def _draw_power_level(self, canvas: Canvas, score: int, fonts: FontSet) -> None:
        lay = self.layout
        power_text = str(score)
        geo = self.score_geometry(self.text.measure(fonts.score, power_text))

        draw_layered_diamond(
            canvas,
            geo.diamond_cx,
            geo.diamond_cy,
            lay.diamond_half_width,
            lay.diamond_half_height,
            self.theme,
        )
        self.text.draw_glow(canvas, power_text, geo.text_x, geo.baseline, fonts.score, self.theme.score)

    def _draw_stat_grid(self, canvas: Canvas, stats: StatRecord, fonts: FontSet) -> None:
        lay = self.layout
        bar_y = lay.stat_bar_y

        for i, ((cell_x, cell_w), label, value) in enumerate(
            zip(stat_cells(lay.width), STAT_LABELS, stats.values())
        ):
            if i > 0:
                canvas.fill_rect(cell_x, bar_y, lay.divider_width, lay.stat_bar_height, self.theme.divider)

            center_x = cell_x + cell_w // 2
            value_text = format_number(value)
            if lay.stat_arrangement == "inline":
                self._draw_inline_cell(canvas, center_x, label, value_text, fonts)
            else:
                self._draw_stacked_cell(canvas, center_x, label, value_text, fonts)

    def _draw_stacked_cell(
        self, canvas: Canvas, center_x: int, label: str, value_text: str, fonts: FontSet
    ) -> None:
        """Value on the upper line, label below, each centred on its own."""
        lay = self.layout
        value_width = self.text.measure(fonts.stat_value, value_text)
        label_width = self.text.measure(fonts.stat_label, label)

        self.text.draw_outlined(
            canvas,
            value_text,
            center_x - value_width // 2,
            lay.stat_bar_y + lay.stat_value_offset,
            fonts.stat_value,
            self.theme.white,
        )
        self.text.draw_outlined(
            canvas,
            label,
            center_x - label_width // 2,
            lay.stat_bar_y + lay.stat_label_offset,
            fonts.stat_label,
            self.theme.dim_white,
        )

    def _draw_inline_cell(
        self, canvas: Canvas, center_x: int, label: str, value_text: str, fonts: FontSet
    ) -> None:
        """Label then value on one baseline, centred together."""
        lay = self.layout
        label_width = self.text.measure(fonts.stat_label, label)
        value_width = self.text.measure(fonts.stat_value, value_text)
        start_x = center_x - (label_width + lay.inline_label_gap + value_width) // 2
        baseline = lay.stat_bar_y + lay.stat_bar_height // 2 + 6

        self.text.draw_outlined(canvas, label, start_x, baseline, fonts.stat_label, self.theme.dim_white)
        self.text.draw_outlined(
            canvas,
            value_text,
            start_x + label_width + lay.inline_label_gap,
            baseline,
            fonts.stat_value,
            self.theme.white,
        )
