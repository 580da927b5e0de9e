import io

import pytest
from PIL import Image

from greetcards.config.models import RenderConfig
from greetcards.data.models import CardState
from greetcards.rendering.session import CardSession
from greetcards.utils.exceptions import ConfigurationError, ExportError, ImageDecodeError


def _png_bytes(image):
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def session(assets):
    return CardSession(RenderConfig(template="anniversary"), assets=assets)


def test_new_session_renders_immediately(session):
    assert session.image is not None
    assert session.image.size == (1080, 1080)
    assert session.state.template == "anniversary"


def test_template_comes_from_config(assets):
    state = CardState(template="anniversary", name="Ana")

    session = CardSession(RenderConfig(template="Birthday"), state=state, assets=assets)

    assert session.template.name == "birthday"
    assert session.state.template == "birthday"


def test_unknown_template_is_rejected(assets):
    with pytest.raises(ConfigurationError):
        CardSession(RenderConfig(template="farewell"), assets=assets)


def test_export_writes_named_card(session, tmp_path):
    session.update(name="Jane  Doe", year="5", suffix="th")

    path = session.export(tmp_path)

    assert path.name == "Anniversary_Jane_Doe.png"
    assert Image.open(path).size == (1080, 1080)


def test_update_changes_the_render(session):
    before = session.image.tobytes()

    session.update(name="Jane Doe")

    assert session.image.tobytes() != before


def test_update_rejects_unknown_fields(session):
    with pytest.raises(AttributeError):
        session.update(nickname="JD")


def test_update_cannot_swap_template(session):
    with pytest.raises(AttributeError):
        session.update(template="birthday")


def test_bad_upload_keeps_previous_photo(session, photo):
    session.set_user_image(_png_bytes(photo))
    kept = session.state.user_image

    with pytest.raises(ImageDecodeError):
        session.set_user_image(b"not an image")

    assert session.state.user_image is kept


def test_clear_user_image_restores_placeholder(session, photo):
    placeholder = session.image.tobytes()
    session.set_user_image(_png_bytes(photo))

    session.clear_user_image()

    assert session.state.user_image is None
    assert session.image.tobytes() == placeholder


def test_reset_adjustments(session, photo):
    session.set_user_image(_png_bytes(photo))
    original = session.image.tobytes()
    session.update(zoom=2.0, brightness=30, rotation=45)

    session.reset_adjustments()

    assert not session.state.has_adjustments
    assert session.image.tobytes() == original


def test_failed_export_keeps_last_image(session, tmp_path):
    blocker = tmp_path / "not_a_dir"
    blocker.write_text("x")
    image = session.image

    with pytest.raises(ExportError):
        session.export(blocker)

    assert session.image is not None
    assert session.image.tobytes() == image.tobytes()


def test_export_renders_the_latest_state(session, tmp_path):
    stale = session.image.tobytes()
    session.state.name = "Jane Doe"

    path = session.export(tmp_path)

    with Image.open(path) as exported:
        pixels = exported.convert("RGBA").tobytes()
    assert pixels != stale
    assert pixels == session.image.tobytes()
