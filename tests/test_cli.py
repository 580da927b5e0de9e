import pytest
from PIL import Image

import make_greeting_card


@pytest.fixture
def no_assets(tmp_path):
    return str(tmp_path / "no_assets")


def test_single_card(tmp_path, no_assets, photo):
    photo_path = tmp_path / "jane.png"
    photo.save(photo_path)
    out_dir = tmp_path / "cards"

    code = make_greeting_card.main(
        [
            "anniversary",
            str(out_dir),
            "--assets-dir",
            no_assets,
            "--name",
            "Jane Doe",
            "--year",
            "5",
            "--suffix",
            "th",
            "--photo",
            str(photo_path),
            "--zoom",
            "1.2",
        ]
    )

    assert code == 0
    card = out_dir / "Anniversary_Jane_Doe.png"
    assert card.is_file()
    assert Image.open(card).size == (1080, 1080)


def test_unreadable_photo_fails(tmp_path, no_assets):
    bad = tmp_path / "jane.jpg"
    bad.write_bytes(b"not a jpeg")

    code = make_greeting_card.main(
        ["birthday", str(tmp_path / "cards"), "--assets-dir", no_assets, "--name", "Ana", "--photo", str(bad)]
    )

    assert code == 1
    assert list((tmp_path / "cards").iterdir()) == []


def test_batch_reports_failed_rows(tmp_path, no_assets):
    sheet = tmp_path / "march.csv"
    sheet.write_text(
        "Name,Date,Month,Zoom,Brightness\n"
        "Ana Lima,05,MAR,1.2,\n"
        "Bo,14,MAR,huge,\n"
        "Cy,15,MAR,,inf\n"
        "Dee Ray,16,MAR,,5\n"
    )
    out_dir = tmp_path / "cards"

    code = make_greeting_card.main(
        ["birthday", str(out_dir), "--assets-dir", no_assets, "--input-file", str(sheet)]
    )

    assert code == 1
    assert sorted(p.name for p in out_dir.iterdir()) == ["Birthday_Ana_Lima.png", "Birthday_Dee_Ray.png"]


def test_batch_success(tmp_path, no_assets):
    sheet = tmp_path / "march.csv"
    sheet.write_text("Name,Date,Month\nAna Lima,05,MAR\nBo Chen,14,MAR\n")
    out_dir = tmp_path / "cards"

    code = make_greeting_card.main(
        ["birthday", str(out_dir), "--assets-dir", no_assets, "--input-file", str(sheet)]
    )

    assert code == 0
    assert sorted(p.name for p in out_dir.iterdir()) == ["Birthday_Ana_Lima.png", "Birthday_Bo_Chen.png"]


def test_missing_input_file_fails(tmp_path, no_assets):
    code = make_greeting_card.main(
        ["birthday", str(tmp_path / "cards"), "--assets-dir", no_assets, "--input-file", str(tmp_path / "x.csv")]
    )

    assert code == 1


def test_unknown_template_exits():
    with pytest.raises(SystemExit):
        make_greeting_card.main(["farewell", "cards/"])
