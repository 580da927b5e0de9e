import sys
from pathlib import Path

import pytest
from PIL import Image, ImageDraw

# Ensure the project root is on sys.path for direct pytest runs
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from greetcards.data.models import CardAssets  # noqa: E402
from greetcards.resources.fonts import FontDiscovery, FontLoader  # noqa: E402


@pytest.fixture(autouse=True)
def no_system_fonts(monkeypatch):
    # Keep renders independent of whatever fonts the machine has installed
    monkeypatch.setattr(FontDiscovery, "_font_cache", [])
    monkeypatch.setattr(FontDiscovery, "get_default_font", classmethod(lambda cls: None))


@pytest.fixture
def font_loader(tmp_path):
    return FontLoader(tmp_path / "fonts")


@pytest.fixture
def assets(font_loader):
    return CardAssets(fonts=font_loader)


@pytest.fixture
def photo():
    """A 400x300 photo with four colored quadrants."""
    img = Image.new("RGB", (400, 300), (200, 40, 40))
    draw = ImageDraw.Draw(img)
    draw.rectangle([(200, 0), (399, 149)], fill=(40, 200, 40))
    draw.rectangle([(0, 150), (199, 299)], fill=(40, 40, 200))
    draw.rectangle([(200, 150), (399, 299)], fill=(230, 230, 60))
    return img
