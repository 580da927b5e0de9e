"""Static asset loading.

Backgrounds, the logo and the template fonts are loaded once, concurrently,
before the first render. A missing or broken asset never stops a card from
rendering: each load ends as an AssetResult and the renderer falls back to
a gradient background, no logo, or the default font.

User photos are decoded here too, with their EXIF orientation applied.
"""

import io
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path

from PIL import Image, ImageOps, UnidentifiedImageError

from greetcards.config.models import CardTemplate, RenderConfig
from greetcards.data.models import AssetResult, CardAssets
from greetcards.resources.fonts import FontLoader
from greetcards.utils.constants import ASSET_LOAD_WORKERS
from greetcards.utils.exceptions import AssetLoadError, FontLoadError, ImageDecodeError
from greetcards.utils.logger import get_logger

logger = get_logger(__name__)

BACKGROUND = "background"
LOGO = "logo"


def load_image(path: str | Path, asset_name: str) -> Image.Image:
    """Open an image file fully into memory as RGBA.

    Raises:
        AssetLoadError: If the file is missing or not a decodable image
    """
    path = Path(path)
    if not path.is_file():
        raise AssetLoadError("File not found", asset_name=asset_name, path=str(path))

    try:
        with Image.open(path) as img:
            img.load()
            return img.convert("RGBA")
    except (OSError, UnidentifiedImageError) as e:
        raise AssetLoadError(f"Cannot decode image: {e}", asset_name=asset_name, path=str(path)) from e


def decode_image(data: bytes, source: str = "upload") -> Image.Image:
    """Decode photo bytes into an upright RGBA image.

    EXIF orientation is applied, so phone photos are not sideways.

    Raises:
        ImageDecodeError: If the bytes are not a decodable image
    """
    try:
        with Image.open(io.BytesIO(data)) as img:
            img.load()
            return ImageOps.exif_transpose(img).convert("RGBA")
    except (OSError, UnidentifiedImageError, Image.DecompressionBombError) as e:
        raise ImageDecodeError(f"Cannot decode image: {e}", source=source) from e


class AssetLoader:
    """Loads the static assets of a template in parallel.

    Example:
        >>> loader = AssetLoader(RenderConfig(assets_dir="assets"))
        >>> assets = loader.load(get_template("birthday"))
        >>> [r.name for r in assets.failures]
        ['logo']
    """

    def __init__(self, config: RenderConfig, max_workers: int = ASSET_LOAD_WORKERS):
        self.config = config
        self.max_workers = max_workers

    def load(self, template: CardTemplate) -> CardAssets:
        """Load every asset the template needs and wait for all of them.

        Args:
            template: Template whose assets to load

        Returns:
            CardAssets with whatever loaded, plus one AssetResult per asset
        """
        fonts = FontLoader(self.config.fonts_dir)
        assets = CardAssets(fonts=fonts)

        logger.debug(f"Loading assets for '{template.name}' from {self.config.assets_dir}")

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            future_to_name = {
                executor.submit(
                    load_image, self.config.asset_path(template.background.file), BACKGROUND
                ): BACKGROUND,
                executor.submit(load_image, self.config.asset_path(template.logo.file), LOGO): LOGO,
            }
            for face in template.fonts:
                future_to_name[executor.submit(fonts.resolve, face)] = f"font:{face.family}"

            for future in as_completed(future_to_name):
                name = future_to_name[future]
                try:
                    value = future.result()
                except (AssetLoadError, FontLoadError) as e:
                    logger.warning(f"{e}. Using fallback.")
                    assets.results.append(AssetResult(name, error=str(e)))
                    continue

                assets.results.append(AssetResult(name, value=value))
                if name == BACKGROUND:
                    assets.background = value
                elif name == LOGO:
                    assets.logo = value

        # Completion order varies; keep reports stable
        assets.results.sort(key=lambda result: result.name)

        loaded = sum(1 for result in assets.results if result.loaded)
        logger.info(f"Loaded {loaded}/{len(assets.results)} assets for '{template.name}'")
        return assets
