"""High-level card generator.

This module provides the render entry point: given a state and the loaded
assets it returns the finished card image, running the whole builder
pipeline every time.
"""

from PIL import Image

from greetcards.config.models import CardTemplate
from greetcards.config.templates import get_template
from greetcards.data.models import CardAssets, CardState
from greetcards.rendering.builder import CardBuilder
from greetcards.rendering.photo import PhotoCompositor
from greetcards.utils.exceptions import CardRenderError
from greetcards.utils.logger import get_logger

logger = get_logger(__name__)


class CardGenerator:
    """Renders card states into images.

    Rendering has no side effects and keeps nothing between calls, so the
    same state and assets always give the same pixels.

    Example:
        >>> generator = CardGenerator()
        >>> image = generator.render(CardState(template="birthday", name="Ana"), assets)
    """

    def __init__(self, photo_compositor: PhotoCompositor | None = None):
        self.photo_compositor = photo_compositor or PhotoCompositor()

    def render(
        self,
        state: CardState,
        assets: CardAssets,
        template: CardTemplate | None = None,
    ) -> Image.Image:
        """Render a card.

        Args:
            state: Card state to draw
            assets: Static assets of the template
            template: Layout to use (looked up from state.template if None)

        Returns:
            RGBA image of the full canvas

        Raises:
            CardRenderError: If any step fails
        """
        template = template or get_template(state.template)

        try:
            logger.debug(f"Rendering {template.name} card for: {state.name!r}")

            builder = CardBuilder(template, state, assets, self.photo_compositor)

            return (
                builder.create_canvas()
                .draw_background()
                .draw_logo()
                .draw_headline()
                .draw_quote()
                .draw_polaroid()
                .draw_captions()
                .draw_decorations()
                .draw_footer()
                .build()
            )

        except CardRenderError:
            raise
        except Exception as e:
            raise CardRenderError(
                f"Failed to render {template.name} card for '{state.name}'",
                details=str(e),
            ) from e
