"""Interactive card editing session.

A session owns one card state for one template. Every mutator stands for
one user edit (a text field change, an uploaded photo, a slider move, the
reset button) and re-renders the card, exactly as the editing form does
after each input event.
"""

from pathlib import Path

from PIL import Image

from greetcards.config.models import RenderConfig
from greetcards.config.templates import get_template
from greetcards.data.models import CardAssets, CardState
from greetcards.io.exporter import CardExporter
from greetcards.rendering.generator import CardGenerator
from greetcards.resources.assets import AssetLoader, decode_image
from greetcards.utils.logger import get_logger

logger = get_logger(__name__)


class CardSession:
    """Single-writer owner of a card being edited.

    Assets are loaded once, in the constructor, unless they are passed in.
    Mutators update the state and refresh ``image``; ``export`` re-renders
    before writing so the file always matches the latest state.

    Attributes:
        config: Runtime settings
        template: Layout of this session's card
        assets: Loaded static assets
        state: The card state (read it, mutate it through the methods)
        image: Most recent render

    Example:
        >>> session = CardSession(RenderConfig(template="birthday"))
        >>> session.update(name="Ana Lima", date="14", month="MAR")
        >>> session.set_user_image(Path("ana.jpg").read_bytes())
        >>> session.export("cards/")
        PosixPath('cards/Birthday_Ana_Lima.png')
    """

    def __init__(
        self,
        config: RenderConfig | None = None,
        state: CardState | None = None,
        assets: CardAssets | None = None,
        generator: CardGenerator | None = None,
        exporter: CardExporter | None = None,
    ):
        self.config = config or RenderConfig()
        self.template = get_template(self.config.template)
        self.state = state or CardState(template=self.template.name)
        self.state.template = self.template.name

        self.assets = assets or AssetLoader(self.config).load(self.template)
        self.generator = generator or CardGenerator()
        self.exporter = exporter or CardExporter(self.config.output)

        self.image: Image.Image | None = None
        self.render()

    def render(self) -> Image.Image:
        """Re-run the whole pipeline for the current state."""
        self.image = self.generator.render(self.state.snapshot(), self.assets, self.template)
        return self.image

    def update(self, **fields) -> Image.Image:
        """Change text fields or adjustments and re-render.

        Raises:
            AttributeError: If a name is not a CardState field
        """
        if "template" in fields or "user_image" in fields:
            raise AttributeError("Use a new session to change template and set_user_image() for photos")

        self.state.update(**fields)
        return self.render()

    def set_user_image(self, data: bytes, source: str = "upload") -> Image.Image:
        """Decode uploaded bytes and use them as the card photo.

        On a decode failure the previous photo stays in place.

        Raises:
            ImageDecodeError: If the bytes are not a decodable image
        """
        photo = decode_image(data, source)
        logger.info(f"Loaded photo from {source}: {photo.width}x{photo.height}")

        self.state.user_image = photo
        return self.render()

    def clear_user_image(self) -> Image.Image:
        """Remove the photo; the placeholder is drawn instead."""
        self.state.user_image = None
        return self.render()

    def reset_adjustments(self) -> Image.Image:
        """Restore all photo adjustments to their defaults and re-render."""
        self.state.reset_adjustments()
        return self.render()

    @property
    def filename(self) -> str:
        return self.exporter.output_filename(self.template.file_prefix, self.state.name)

    def export(self, output_dir: str | Path) -> Path:
        """Render the current state and save it as a PNG.

        Raises:
            CardRenderError: If rendering fails (the previous image is kept)
            ExportError: If saving fails (no partial file is left)
        """
        image = self.render()
        return self.exporter.save(image, output_dir, self.filename)
