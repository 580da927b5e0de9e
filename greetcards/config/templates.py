"""Card template definitions.

Each template is pure layout data: fonts, positions, sizes and colors.
Every literal belongs to exactly one template; the rendering code is shared.
"""

from greetcards.config.models import (
    Backdrop,
    BackgroundConfig,
    Badge,
    CardTemplate,
    FontFace,
    GradientSpec,
    LogoConfig,
    OutlineSquare,
    PolaroidConfig,
    QuoteBlock,
    ShadowConfig,
    TextBlock,
    TextRun,
    TextStyle,
)
from greetcards.utils.exceptions import ConfigurationError

LOGO_FILE = "kudometrics-logo.png"

# --- Anniversary ---

SCRIPTINA = FontFace("scriptin.ttf", "Scriptina")
FREDOKA = FontFace("fredoka-regular.ttf", "Fredoka-Regular")
FREDOKA_BOLD = FontFace("fredoka-bold.ttf", "Fredoka-Bold")
FREDOKA_SEMIEXPANDED = FontFace("fredoka_semiexpanded-regular.ttf", "Fredoka_SemiExpanded-Regular")
POPPINS = FontFace("poppins-regular.ttf", "Poppins-Regular")
POPPINS_MEDIUM = FontFace("poppins-medium.ttf", "Poppins-Medium")
POPPINS_SEMIBOLD = FontFace("poppins-semibold.ttf", "Poppins-SemiBold")
POPPINS_BOLD = FontFace("poppins-bold.ttf", "Poppins-Bold")
POPPINS_EXTRABOLD = FontFace("poppins-extrabold.ttf", "Poppins-ExtraBold")
POPPINS_EXTRALIGHT = FontFace("poppins-extralight.ttf", "Poppins-ExtraLight")

_TITLE_GRADIENT = GradientSpec(
    start=(48, 380),
    end=(448, 380),
    stops=((0.0, "#0A6BC0"), (1.0, "#069EE1")),
)

ANNIVERSARY = CardTemplate(
    name="anniversary",
    file_prefix="Anniversary",
    fonts=(
        SCRIPTINA,
        FREDOKA,
        FREDOKA_BOLD,
        FREDOKA_SEMIEXPANDED,
        POPPINS,
        POPPINS_MEDIUM,
        POPPINS_SEMIBOLD,
        POPPINS_BOLD,
        POPPINS_EXTRABOLD,
        POPPINS_EXTRALIGHT,
    ),
    background=BackgroundConfig(
        file="background.png",
        fallback=GradientSpec(
            start=(0, 0),
            end=(1080, 1080),
            stops=((0.0, "#f0f0f0"), (1.0, "#0047AB")),
        ),
    ),
    logo=LogoConfig(file=LOGO_FILE, box=(48, 48, 74, 82)),
    headline=(
        TextRun("Happy", (48, 250), TextStyle(SCRIPTINA, 78, "#707070")),
        TextRun("{year}", (48, 380), TextStyle(POPPINS_BOLD, 73, gradient=_TITLE_GRADIENT)),
        TextRun(
            "{suffix}",
            (0, 390),
            TextStyle(POPPINS, 60, gradient=_TITLE_GRADIENT),
            follows_previous=True,
        ),
        TextRun("Work", (48, 460), TextStyle(POPPINS_SEMIBOLD, 60, gradient=_TITLE_GRADIENT)),
        TextRun("Anniversary", (48, 520), TextStyle(POPPINS_SEMIBOLD, 60, gradient=_TITLE_GRADIENT)),
    ),
    quote=QuoteBlock(
        text="{quote}",
        position=(48, 610),
        style=TextStyle(POPPINS, 26, "#707070"),
        max_width=340,
        line_height=36,
    ),
    polaroid=PolaroidConfig(
        center=(760, 440),
        width=552,
        height=640,
        padding=24,
        image_height=500,
        rotation=12.43,
        frame_color="#ffffff",
        inset_color="#eeeeee",
        shadow=ShadowConfig(color="rgba(3, 32, 83, 0.45)", blur=30, offset_x=-30, offset_y=30),
        placeholder=TextBlock("Upload Image", (276, 270), TextStyle(POPPINS, 30, "#aaaaaa", "ma")),
        captions=(
            TextBlock(
                "{name}",
                (276, 564),
                TextStyle(FREDOKA_SEMIEXPANDED, 38, "#707070", "ma"),
                fit_sizes=(38, 28),
                max_width=504,
            ),
        ),
    ),
    captions=(
        TextBlock(
            "{designation}",
            (520, 820),
            TextStyle(POPPINS_EXTRABOLD, 36, "#ffffff"),
            fit_sizes=(36, 32, 28),
            max_width=480,
        ),
        TextBlock(
            "{department}",
            (520, 870),
            TextStyle(POPPINS_EXTRALIGHT, 30, "#ffffff"),
            fit_sizes=(30, 28, 24),
            max_width=480,
        ),
        TextBlock("DOJ : {doj}", (520, 920), TextStyle(POPPINS_MEDIUM, 20, "#ffffff")),
    ),
    decorations=(),
    footer=TextBlock("www.kudometrics.com", (1020, 1020), TextStyle(POPPINS, 24, "#707070", "ra")),
)

# --- Birthday ---

EPHESIS = FontFace("ephesis-regular.ttf", "Ephesis-Regular")
COMFORTAA = FontFace("comfortaa-regular.ttf", "Comfortaa-Regular")
COMFORTAA_BOLD = FontFace("comfortaa-bold.ttf", "Comfortaa-Bold")
PLAYBALL = FontFace("playball-regular.ttf", "Playball-Regular")

_BIRTHDAY_PINK = "#D400D4"

BIRTHDAY = CardTemplate(
    name="birthday",
    file_prefix="Birthday",
    fonts=(EPHESIS, COMFORTAA, COMFORTAA_BOLD, PLAYBALL),
    background=BackgroundConfig(
        file="birthday-background.png",
        fallback=GradientSpec(
            start=(0, 0),
            end=(1080, 1080),
            stops=((0.0, "#fdfcfd"), (1.0, "#f5eef5")),
        ),
    ),
    logo=LogoConfig(file=LOGO_FILE, box=(36, 28, 64, 72)),
    headline=(
        TextRun("Happy Birthday", (540, 140), TextStyle(EPHESIS, 96, _BIRTHDAY_PINK, "ms")),
    ),
    quote=QuoteBlock(
        text='"{quote}"',
        position=(540, 850),
        style=TextStyle(COMFORTAA, 28, "#444444", "ms"),
        max_width=800,
        line_height=36,
    ),
    polaroid=PolaroidConfig(
        center=(540, 490),
        width=480,
        height=600,
        padding=12,
        image_height=460,
        rotation=0,
        frame_color="#ffffff",
        inset_color="#f0f0f0",
        shadow=ShadowConfig(color="rgba(0, 0, 0, 0.2)", blur=40, offset_x=10, offset_y=20),
        placeholder=TextBlock("Upload Image", (240, 242), TextStyle(COMFORTAA, 30, "#aaaaaa", "mm")),
        captions=(
            TextBlock(
                "{department}",
                (27, 460),
                TextStyle(COMFORTAA, 24, "#ffffff", "ls"),
                backdrop=Backdrop(color="rgba(0, 0, 0, 0.7)", padding_x=15, top=-28, height=40),
            ),
            TextBlock("{name}", (240, 525), TextStyle(PLAYBALL, 46, _BIRTHDAY_PINK, "ms")),
            TextBlock("{designation}", (240, 560), TextStyle(PLAYBALL, 26, "#888888", "ms")),
        ),
    ),
    captions=(),
    decorations=(
        OutlineSquare(center=(780, 305), size=150, angle=15, color="#ffffff", width=2),
        Badge(
            box=(705, 230, 150, 150),
            color=_BIRTHDAY_PINK,
            texts=(
                TextBlock("{date}", (780, 295), TextStyle(COMFORTAA, 48, "#ffffff", "ms")),
                TextBlock("{month}", (780, 350), TextStyle(COMFORTAA, 48, "#ffffff", "ms")),
            ),
        ),
    ),
    footer=TextBlock(
        "WWW.KUDOMETRICS.COM",
        (540, 1040),
        TextStyle(COMFORTAA, 18, "#666666", "ms", letter_spacing=2),
    ),
)

TEMPLATES: dict[str, CardTemplate] = {
    ANNIVERSARY.name: ANNIVERSARY,
    BIRTHDAY.name: BIRTHDAY,
}


def get_template(name: str) -> CardTemplate:
    """Look up a template by key.

    Raises:
        ConfigurationError: If the template does not exist
    """
    template = TEMPLATES.get(name.lower().strip())
    if template is None:
        raise ConfigurationError(
            f"Unknown template (available: {', '.join(sorted(TEMPLATES))})",
            config_key="template",
            invalid_value=name,
        )
    return template
