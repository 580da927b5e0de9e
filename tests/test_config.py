import pytest

from greetcards.config.models import FontFace, GradientSpec, OutputConfig, RenderConfig, TextBlock, TextStyle
from greetcards.config.parser import ConfigParser
from greetcards.config.templates import TEMPLATES, get_template
from greetcards.config.validator import ConfigValidator, StateValidator
from greetcards.data.models import CardState
from greetcards.utils.exceptions import ConfigurationError

FACE = FontFace("poppins-regular.ttf", "Poppins-Regular")


def test_state_defaults():
    state = CardState()

    assert (state.year, state.suffix, state.date, state.month) == ("1", "st", "01", "JAN")
    assert state.quote == ""
    assert state.user_image is None
    assert not state.has_adjustments


def test_reset_adjustments_keeps_text_and_photo(photo):
    state = CardState(name="Jane", user_image=photo, zoom=2.5, rotation=-30, contrast=150)

    state.reset_adjustments()

    assert state.name == "Jane"
    assert state.user_image is photo
    assert (state.zoom, state.rotation, state.contrast) == (1.0, 0, 100)


def test_snapshot_is_independent():
    state = CardState(name="Jane")
    snapshot = state.snapshot()

    state.name = "Ana"

    assert snapshot.name == "Jane"


def test_state_update_rejects_unknown_field():
    with pytest.raises(AttributeError):
        CardState().update(nickname="JD")


@pytest.mark.parametrize("name", ["anniversary", "Birthday", " BIRTHDAY "])
def test_get_template(name):
    assert get_template(name).name == name.strip().lower()


def test_get_unknown_template_raises():
    with pytest.raises(ConfigurationError) as exc_info:
        get_template("farewell")

    assert exc_info.value.config_key == "template"


def test_templates_have_file_prefixes():
    assert {t.file_prefix for t in TEMPLATES.values()} == {"Anniversary", "Birthday"}


def test_fit_sizes_need_max_width():
    with pytest.raises(ValueError):
        TextBlock("{name}", (0, 0), TextStyle(FACE, 38), fit_sizes=(38, 28))


def test_fit_sizes_must_descend():
    with pytest.raises(ValueError):
        TextBlock("{name}", (0, 0), TextStyle(FACE, 38), fit_sizes=(28, 38), max_width=100)


def test_gradient_needs_two_stops():
    with pytest.raises(ValueError):
        GradientSpec((0, 0), (10, 0), ((0.0, "#fff"),))


def test_render_config_json_round_trip(tmp_path):
    config = RenderConfig(
        template="birthday",
        assets_dir=str(tmp_path),
        output=OutputConfig(compress_level=9, skip_existing=True),
        log_level="DEBUG",
    )
    path = tmp_path / "settings" / "card.json"

    config.to_json(path)
    loaded = RenderConfig.from_json(path)

    assert loaded == config
    assert isinstance(loaded.output, OutputConfig)


def test_parser_builds_state_from_given_options_only():
    config, state, extra = ConfigParser().parse_args(
        ["birthday", "out", "--name", "Ana Lima", "--date", "14", "--zoom", "1.5", "--compress-level", "9"]
    )

    assert config.template == "birthday"
    assert config.output.compress_level == 9
    assert state.template == "birthday"
    assert (state.name, state.date, state.zoom) == ("Ana Lima", "14", 1.5)
    assert state.month == "JAN"
    assert state.brightness == 0
    assert extra == {"output_dir": "out", "input_file": None, "photo": None}


def test_parser_logging_flags():
    quiet, _, _ = ConfigParser().parse_args(["anniversary", "out", "--quiet"])
    debug, _, _ = ConfigParser().parse_args(["anniversary", "out", "--debug"])

    assert quiet.log_level == "WARNING"
    assert debug.log_level == "DEBUG"
    assert debug.debug


def test_parser_reads_config_file(tmp_path):
    path = tmp_path / "card.json"
    RenderConfig(output=OutputConfig(compress_level=1)).to_json(path)

    config, _, _ = ConfigParser().parse_args(["birthday", "out", "--config", str(path)])

    assert config.output.compress_level == 1
    assert config.template == "birthday"


def test_state_validator_reports_out_of_range_values():
    warnings = StateValidator.validate(CardState(name="Ana", brightness=80, zoom=0.5))

    assert len(warnings) == 2
    assert any(message.startswith("brightness") for message in warnings)
    assert any(message.startswith("zoom") for message in warnings)


def test_state_validator_accepts_defaults_with_a_name():
    assert StateValidator.validate(CardState(name="Ana")) == []


def test_output_dir_is_created(tmp_path):
    target = tmp_path / "a" / "b"

    ConfigValidator.validate(RenderConfig(assets_dir=str(tmp_path)), output_dir=str(target))

    assert target.is_dir()


def test_output_dir_that_is_a_file_is_rejected(tmp_path):
    target = tmp_path / "file"
    target.write_text("x")

    with pytest.raises(ConfigurationError):
        ConfigValidator.validate_output_dir(str(target))


def test_assets_path_that_is_a_file_is_rejected(tmp_path):
    target = tmp_path / "file"
    target.write_text("x")

    with pytest.raises(ConfigurationError):
        ConfigValidator.validate_assets_dir(RenderConfig(assets_dir=str(target)))
