"""Aspect-fill framing of the background artwork."""

from pathlib import Path

from PIL import Image, UnidentifiedImageError

from emblembadge.errors import ImageLoadError


def crop_box(
    src_width: int, src_height: int, target_width: int, target_height: int
) -> tuple[int, int, int, int]:
    """
    Centred crop rectangle of the source with the target's aspect ratio.

    A source wider than the target loses equal margins left and right and
    keeps its full height; a taller one loses top and bottom and keeps its
    full width.

    Returns:
        (left, top, right, bottom) in source pixels
    """
    # Cross-multiplied so an exact aspect match keeps the whole source
    if src_width * target_height > src_height * target_width:
        new_width = max(1, src_height * target_width // target_height)
        offset_x = (src_width - new_width) // 2
        return (offset_x, 0, offset_x + new_width, src_height)

    new_height = max(1, src_width * target_height // target_width)
    offset_y = (src_height - new_height) // 2
    return (0, offset_y, src_width, offset_y + new_height)


def frame_source(image: Image.Image, size: tuple[int, int]) -> Image.Image:
    """Crop the image to the target aspect and scale it to exactly fill size."""
    box = crop_box(image.width, image.height, *size)
    return image.convert("RGBA").resize(size, Image.Resampling.BILINEAR, box=box)


def load_source(path: str | Path) -> Image.Image:
    """Open and fully decode the background artwork."""
    try:
        with Image.open(path) as image:
            image.load()
            return image.copy()
    except (OSError, UnidentifiedImageError, Image.DecompressionBombError) as e:
        raise ImageLoadError(f"{path}: {e}") from e
