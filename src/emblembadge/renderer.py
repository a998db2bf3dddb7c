"""Image renderer for the contribution badge."""

import contextlib
import logging
import os
from pathlib import Path

from PIL import Image

from emblembadge.canvas import Canvas
from emblembadge.compositor import compose_backdrop
from emblembadge.errors import OutputError
from emblembadge.framing import frame_source, load_source
from emblembadge.layout import LayoutEngine
from emblembadge.stats import StatRecord
from emblembadge.theme import Layout, Theme
from emblembadge.typography import FontSet, FontSizes, FontSources, TextRenderer

logger = logging.getLogger(__name__)


class BadgeRenderer:
    """Renders the emblem badge as a PNG image.

    A renderer holds only immutable configuration, so one instance can be
    shared; every call builds its own canvas and font set.
    """

    def __init__(
        self,
        theme: Theme | None = None,
        layout: Layout | None = None,
        font_sources: FontSources | None = None,
        font_sizes: FontSizes | None = None,
        antialias: bool = True,
    ):
        self.theme = theme or Theme()
        self.layout = layout or Layout()
        self.font_sources = font_sources if font_sources is not None else FontSources.discover()
        self.font_sizes = font_sizes or FontSizes()
        self.text = TextRenderer(self.theme, antialias=antialias)
        self.engine = LayoutEngine(self.theme, self.layout, self.text)

    def compose(self, source: Image.Image, stats: StatRecord) -> Image.Image:
        """
        Build the finished badge in memory.

        Args:
            source: decoded emblem artwork of any size
            stats: name and counters to display

        Raises:
            FontLoadError: if the typefaces cannot be parsed
        """
        canvas = Canvas(*self.layout.size)

        # Aspect-fill the emblem so the canvas is fully covered without distortion
        canvas.paste(frame_source(source, self.layout.size))

        compose_backdrop(canvas, self.theme, self.layout)

        with FontSet.load(self.font_sources, self.font_sizes) as fonts:
            self.engine.draw(canvas, stats, fonts)

        return canvas.image

    def render(self, source_path: str | Path, stats: StatRecord, output_path: str | Path) -> Path:
        """
        Render the badge to a PNG file.

        Nothing is written unless every step succeeds.

        Args:
            source_path: path to the emblem JPEG/PNG
            stats: name and counters to display
            output_path: where to save the badge PNG

        Returns:
            The output path
        """
        source = load_source(source_path)
        image = self.compose(source, stats)

        output_path = Path(output_path)
        self._save(image, output_path)
        logger.info("Badge saved to %s", output_path)
        return output_path

    @staticmethod
    def _save(image: Image.Image, output_path: Path) -> None:
        tmp_path = output_path.with_name(f".{output_path.name}.tmp")
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            image.save(tmp_path, "PNG")
            os.replace(tmp_path, output_path)
        except (OSError, ValueError) as e:
            with contextlib.suppress(OSError):
                tmp_path.unlink(missing_ok=True)
            raise OutputError(f"{output_path}: {e}") from e
