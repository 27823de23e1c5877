"""The two kinds of node in a website tree: albums and images."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path


@dataclass(eq=False)
class Image:
    """One source photograph, published as a full-size image and a thumbnail."""

    source: Path
    name: str             # filename without extension, used as caption
    url: str              # absolute URL of the full-size image
    href: str             # filename, relative to the album page
    src: str              # thumbnail URL, relative to the album page
    destination: Path
    thumbnail: Path
    watermark: str = ""
    scale_command: str = "photog-scale"
    watermark_command: str = "photog-watermark"
    thumbnail_command: str = "photog-thumbnail"
    # Filled in by the builder, and only when the album page is rendered
    date: datetime | None = None
    width: int | None = None
    height: int | None = None
    extra: dict = field(default_factory=dict)

    type = "image"


@dataclass(eq=False)
class Album:
    """One source directory, published as one directory with an index page."""

    # Static
    source: Path
    config: Path
    name: str
    root: Path
    parent: Album | None
    # Dynamic
    slug: str
    url: str
    href: str
    src: str
    destination: Path
    thumbnail: Path
    index: Path
    unlisted: bool
    date: datetime
    protected: list[str]
    # Inherited
    title: str
    copyright: str
    template: str | None
    preview: int
    watermark: str
    sort: str
    fullscreen: bool
    oblivious: bool
    scale_command: str
    watermark_command: str
    thumbnail_command: str
    preview_command: str
    # Unrecognised photog.ini keys, passed through to the template
    extra: dict = field(default_factory=dict)
    items: list[Album | Image] = field(default_factory=list)
    width: int | None = None
    height: int | None = None

    type = "album"

    @property
    def is_root(self) -> bool:
        return self.parent is None

    @property
    def images(self) -> list[Image]:
        return [item for item in self.items if isinstance(item, Image)]

    @property
    def albums(self) -> list[Album]:
        return [item for item in self.items if isinstance(item, Album)]

    def __repr__(self):
        return f"<Album {self.url} ({len(self.items)} items)>"
