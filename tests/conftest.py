import pytest
from PIL import Image

from emblembadge.renderer import BadgeRenderer
from emblembadge.stats import StatRecord
from emblembadge.theme import Theme
from emblembadge.typography import FontSet, FontSources, TextRenderer


def make_emblem(width: int = 474, height: int = 96) -> Image.Image:
    """Blue-to-purple gradient the size of a Destiny 2 emblem banner."""
    img = Image.new("RGB", (width, height))
    pixels = img.load()
    for y in range(height):
        for x in range(width):
            pixels[x, y] = (
                50 + x * 100 // width,
                50 + y * 100 // height,
                150 + x * 100 // width,
            )
    return img


@pytest.fixture
def emblem_path(tmp_path):
    path = tmp_path / "emblem.jpg"
    make_emblem().save(path, "JPEG", quality=90)
    return path


@pytest.fixture
def font_sources():
    # Pillow's built-in scalable font keeps tests independent of installed fonts
    return FontSources()


@pytest.fixture
def fonts(font_sources):
    with FontSet.load(font_sources) as loaded:
        yield loaded


@pytest.fixture
def text_renderer():
    return TextRenderer(Theme())


@pytest.fixture
def renderer(font_sources):
    return BadgeRenderer(font_sources=font_sources)


@pytest.fixture
def sample_stats():
    return StatRecord(
        display_name="testuser",
        commits=150,
        pull_requests=42,
        issues=18,
        reviews=67,
        stars=23,
    )
