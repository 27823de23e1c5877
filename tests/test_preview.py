import pytest

from photog import preview
from photog.loader import create_album
from photog.options import BuildOptions
from photog.preview import build_preview, preview_count, select_images
from photog.website import generate

from conftest import make_jpeg, write_config


@pytest.mark.parametrize("requested, available, expected", [
    (9, 7, 6),
    (9, 9, 9),
    (9, 12, 9),
    (9, 3, 3),
    (6, 5, 3),
    (6, 20, 6),
    (3, 8, 3),
    (12, 20, 9),
    (9, 2, None),
])
def test_preview_count(requested, available, expected):
    assert preview_count(requested, available) == expected


def album_with(source, destination, names, parent_names=()):
    for name in parent_names:
        make_jpeg(source / name)
    for name in names:
        make_jpeg(source / "album" / name)
    root = create_album(source, destination=destination)
    return root.albums[0]


def test_select_images_excludes_parent_images(source, destination):
    album = album_with(source, destination, ["a.jpg", "best.jpg", "c.jpg", "d.jpg"], ["best.jpg"])
    thumbs = select_images(album)
    assert [t.name for t in thumbs] == ["a.jpg", "c.jpg", "d.jpg"]
    assert thumbs[0] == album.destination / "thumbnails" / "a.jpg"


def test_select_images_ignores_sub_albums(source, destination):
    make_jpeg(source / "album" / "inner" / "x.jpg")
    album = album_with(source, destination, ["a.jpg"])
    assert [t.name for t in select_images(album)] == ["a.jpg"]


def test_seven_images_make_a_preview_of_six(source, destination, runner, caplog):
    names = [f"{i}.jpg" for i in range(7)]
    album = album_with(source, destination, names)
    assert album.preview == 9

    assert build_preview(album, BuildOptions()) is True
    (call,) = runner.named("photog-preview")
    images, output = call[1:-1], call[-1]
    assert output == str(album.thumbnail)
    assert len(images) == 6
    assert len(set(images)) == 6
    assert set(images) <= {str(album.destination / "thumbnails" / n) for n in names}
    assert "Only 7 preview images available" in caplog.text


def test_preview_order_is_the_shuffled_order(source, destination, runner, monkeypatch):
    album = album_with(source, destination, ["a.jpg", "b.jpg", "c.jpg"])
    monkeypatch.setattr(preview.random, "shuffle", lambda items: items.reverse())
    build_preview(album, BuildOptions())
    thumbs = album.destination / "thumbnails"
    assert runner.calls == [[
        "photog-preview", str(thumbs / "c.jpg"), str(thumbs / "b.jpg"), str(thumbs / "a.jpg"), str(album.thumbnail),
    ]]


def test_too_few_images(source, destination, runner, caplog):
    album = album_with(source, destination, ["a.jpg", "b.jpg", "c.jpg"], ["b.jpg"])
    assert build_preview(album, BuildOptions()) is False
    assert runner.calls == []
    assert "Not enough images" in caplog.text


def test_configured_preview_size(source, destination, runner):
    write_config(source / "album", "preview = 3\n")
    album = album_with(source, destination, [f"{i}.jpg" for i in range(9)])
    build_preview(album, BuildOptions())
    (call,) = runner.named("photog-preview")
    assert len(call) == 5


def test_excluded_image_still_shown_on_album_page(source, destination, runner):
    make_jpeg(source / "best.jpg")
    for name in ("a.jpg", "best.jpg", "c.jpg", "d.jpg"):
        make_jpeg(source / "album" / name)
    generate(create_album(source, destination=destination))

    (call,) = runner.named("photog-preview")
    assert str(destination / "album" / "thumbnails" / "best.jpg") not in call
    html = (destination / "album" / "index.html").read_text()
    assert 'href="best.jpg"' in html
    assert 'src="thumbnails/best.jpg"' in html
