"""RGBA canvas with draw-over alpha compositing."""

from PIL import Image

from emblembadge.theme import Color


class Canvas:
    """Fixed-size RGBA canvas owned by a single render call."""

    def __init__(self, width: int, height: int, color: Color = (0, 0, 0, 0)):
        self._image = Image.new("RGBA", (width, height), color)

    @classmethod
    def from_image(cls, image: Image.Image) -> "Canvas":
        canvas = cls(image.width, image.height)
        canvas.paste(image)
        return canvas

    @property
    def image(self) -> Image.Image:
        return self._image

    @property
    def width(self) -> int:
        return self._image.width

    @property
    def height(self) -> int:
        return self._image.height

    @property
    def size(self) -> tuple[int, int]:
        return self._image.size

    def paste(self, layer: Image.Image, position: tuple[int, int] = (0, 0)) -> None:
        """Composite a layer over the canvas at position (alpha blending).

        Parts of the layer outside the canvas are clipped.
        """
        if layer.mode != "RGBA":
            layer = layer.convert("RGBA")

        x, y = position
        left = max(0, -x)
        top = max(0, -y)
        right = min(layer.width, self.width - x)
        bottom = min(layer.height, self.height - y)
        if right <= left or bottom <= top:
            return

        if (left, top, right, bottom) != (0, 0, layer.width, layer.height):
            layer = layer.crop((left, top, right, bottom))
        self._image.alpha_composite(layer, dest=(x + left, y + top))

    def fill_rect(self, x: int, y: int, width: int, height: int, color: Color) -> None:
        """Composite a solid rectangle over the canvas."""
        if width <= 0 or height <= 0:
            return
        self.paste(Image.new("RGBA", (width, height), color), (x, y))

    def pixel(self, x: int, y: int) -> Color:
        return self._image.getpixel((x, y))
