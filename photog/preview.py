"""
Album previews.

An album preview is a collage of 3, 6 or 9 thumbnails, picked at random
from the album's images. It is the picture of the album on its parent's
page.
"""

import random

from . import commands
from .nodes import Album
from .options import BuildOptions

PREVIEW_SIZES = (3, 6, 9)


def select_images(album: Album) -> list:
    """Thumbnails of the images that may appear in the album preview.

    Images whose filename also appears in the parent album are left out.
    That way the best pictures of an album can be shown on the parent page
    without showing up twice.
    """
    excluded = set()
    if album.parent is not None:
        excluded = {img.href for img in album.parent.images}
    return [img.thumbnail for img in album.images if img.href not in excluded]


def preview_count(requested: int, available: int) -> int | None:
    """Round the number of preview images down to 3, 6 or 9."""
    count = min(requested, available)
    sizes = [n for n in PREVIEW_SIZES if n <= count]
    return sizes[-1] if sizes else None


def build_preview(album: Album, options: BuildOptions) -> bool:
    """Create album.thumbnail from a random choice of the album's images.

    Returns False if there were not enough images, in which case an
    existing preview is left alone.
    """
    log = options.log
    images = select_images(album)
    if len(images) < PREVIEW_SIZES[0]:
        log.warning("Not enough images available in '%s' to create a preview", album.name)
        return False
    if len(images) < album.preview:
        log.warning("Only %d preview images available for '%s' (%d requested)",
                    len(images), album.name, album.preview)

    count = preview_count(album.preview, len(images))
    random.shuffle(images)

    log.info("%s", album.thumbnail)
    album.thumbnail.parent.mkdir(parents=True, exist_ok=True)
    return options.call(commands.preview, album.preview_command, images[:count], album.thumbnail)
