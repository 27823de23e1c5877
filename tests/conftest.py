import os
import time
from pathlib import Path

import pytest
from PIL import Image as PILImage

from photog import commands
from photog.errors import CollaboratorError
from photog.options import BuildOptions

# Sources are dated in the past, so that anything the build writes is newer
PAST = time.time() - 3600


def set_mtime(path, t):
    os.utime(path, (t, t))


def make_jpeg(path: Path, size=(60, 40), color=(120, 120, 120), mtime=PAST) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    PILImage.new("RGB", size, color).save(path, "JPEG")
    set_mtime(path, mtime)
    return path


def write_config(directory: Path, text: str, mtime=PAST) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / "photog.ini"
    path.write_text(text)
    set_mtime(path, mtime)
    return path


# --- Fake image commands -------------------------------------------------------
class FakeRunner:
    """Stands in for commands.run: records calls and writes the output file."""

    def __init__(self):
        self.calls = []
        self.fail_on = set()

    def __call__(self, command, *args, log=None):
        argv = [str(command), *(str(a) for a in args)]
        self.calls.append(argv)
        if command in self.fail_on:
            raise CollaboratorError(argv, 1)
        out = Path(args[-1])
        out.parent.mkdir(parents=True, exist_ok=True)
        PILImage.new("RGB", (30, 20), (10, 10, 10)).save(out, "JPEG")

    def named(self, command):
        return [argv for argv in self.calls if argv[0] == command]

    def outputs(self, command):
        return [argv[-1] for argv in self.named(command)]

    def reset(self):
        self.calls.clear()


@pytest.fixture()
def runner(monkeypatch):
    fake = FakeRunner()
    monkeypatch.setattr(commands, "run", fake)
    return fake


# --- Source trees -------------------------------------------------------------
@pytest.fixture()
def source(tmp_path):
    d = tmp_path / "pictures"
    d.mkdir()
    return d


@pytest.fixture()
def destination(tmp_path):
    return tmp_path / "public_html"


@pytest.fixture()
def site(source):
    """A small website: three root images and two albums."""
    for name in ("a.jpg", "b.jpg", "c.jpg"):
        make_jpeg(source / name)
    for name in ("h1.jpg", "h2.jpg", "h3.jpg", "h4.jpg"):
        make_jpeg(source / "holiday" / name)
    for name in ("w1.jpg", "w2.jpg", "w3.jpg"):
        make_jpeg(source / "work" / name)
    (source / "notes.txt").write_text("not a picture")
    return source


@pytest.fixture()
def options():
    return BuildOptions()
