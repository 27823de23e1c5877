"""
Building the website.

``generate`` walks an album tree depth-first and compares every source
with its destination. Images are regenerated when their destination or
thumbnail is missing, or when the source is newer than the destination.
An album page and preview are regenerated when anything below the album
changed, when the album's photog.ini is newer than its page, or when one
of them is missing. Destination files without a source are deleted on
the way.

Running it twice in a row without changing any source does nothing the
second time.
"""

import os
import random
import shutil
from contextlib import contextmanager
from pathlib import Path

from . import commands
from .configure import STATIC_DIR, THUMBNAILS
from .errors import LockError
from .exif import exif_date, image_size
from .loader import list_dir
from .log import LogConfig
from .nodes import Album, Image
from .options import BuildOptions
from .preview import PREVIEW_SIZES, build_preview, select_images
from .templates import install_static, render_index

LOCK_FILE = ".photog.lock"


def generate(album: Album, options: BuildOptions | None = None) -> bool:
    """Create or update the website of the root album.

    Returns True if anything at the destination changed.
    """
    options = options or BuildOptions()
    with lock(album.root):
        if album.is_root:
            if STATIC_DIR not in album.protected:
                album.protected.append(STATIC_DIR)
            if install_static(album.root):
                options.log.info("/%s/", STATIC_DIR)
        return build_album(album, options)


def build_album(album: Album, options: BuildOptions) -> bool:
    """Update album and everything below it, children first."""
    changed = False
    for item in album.items:
        if isinstance(item, Image):
            changed = update_image(item, options) or changed
        else:
            changed = build_album(item, options) or changed
    return update_album(album, options, changed)


def update_image(img: Image, options: BuildOptions) -> bool:
    """Rebuild img if needed, return True if it was rebuilt."""
    update_needed = (
        not img.destination.is_file()
        or not img.thumbnail.is_file()
        or is_newer(img.source, img.destination)
    )
    if not update_needed:
        options.log.debug("Up to date: %s", img.url)
        return False
    build_image(img, options)
    return True


def update_album(album: Album, options: BuildOptions, changed: bool = False) -> bool:
    """Remove orphans, then rebuild album's preview and index if needed.

    ``changed`` tells whether any item of the album was rebuilt. Returns
    True if the parent page has to be rebuilt as well.
    """
    update_needed = (
        changed
        or not album.index.is_file()
        or is_newer(album.config, album.index)
    )
    if remove_orphans(album, options):
        update_needed = True
    # An album with too few images never gets a preview
    missing_preview = (
        not album.unlisted
        and not album.thumbnail.is_file()
        and len(select_images(album)) >= PREVIEW_SIZES[0]
    )

    if not (update_needed or missing_preview):
        options.log.debug("Up to date: %s", album.url)
        return False

    previewed = False
    if not album.unlisted:
        previewed = build_preview(album, options)
    build_index(album, options)
    return update_needed or previewed


def remove_orphans(album: Album, options: BuildOptions) -> bool:
    """Delete destination files of album that have no source.

    Files whose name is in album.protected are kept. Returns True if
    anything was deleted.
    """
    log = options.log
    expected = {album.index, album.thumbnail}
    for item in album.items:
        expected.add(item.destination)
        if isinstance(item, Image):
            expected.add(item.thumbnail)
    # Albums anywhere in the tree may have a url that puts them in here
    for other in all_albums(album):
        if album.destination in other.destination.parents:
            first = other.destination.relative_to(album.destination).parts[0]
            expected.add(album.destination / first)

    removed = False
    for directory in (album.destination, album.destination / THUMBNAILS):
        if not directory.is_dir():
            continue
        for path in list_dir(directory):
            if path in expected or path.name in album.protected:
                continue
            if not options.prune:
                log.warning("No source for '%s'", path)
                continue
            log.info("Removing %s", path)
            try:
                if path.is_dir() and not path.is_symlink():
                    shutil.rmtree(path)
                else:
                    path.unlink()
            except OSError as e:
                log.error("Cannot remove '%s': %s", path, e)
                continue
            removed = True
    return removed


def build_image(img: Image, options: BuildOptions):
    """Create the full-size image and the thumbnail of img."""
    options.log.info("%s", img.url)
    img.destination.parent.mkdir(parents=True, exist_ok=True)
    if img.watermark:
        options.call(commands.watermark, img.watermark_command,
                     img.source, img.watermark, img.destination)
    else:
        options.call(commands.scale, img.scale_command, img.source, img.destination)
    img.thumbnail.parent.mkdir(parents=True, exist_ok=True)
    options.call(commands.thumbnail, img.thumbnail_command, img.source, img.thumbnail)


def build_index(album: Album, options: BuildOptions):
    """Sort the album's items and render its index.html."""
    for item in album.items:
        item.width, item.height = image_size(item.thumbnail)
    sort_items(album, options.log)
    options.log.info("%s%s", album.url, album.index.name)
    render_index(album)


def sort_items(album: Album, log: LogConfig):
    """Sort album.items by date, reading the Exif dates of images first."""
    for item in album.items:
        if isinstance(item, Image) and item.date is None:
            item.date = exif_date(item.source, log)
    if album.sort == "random":
        random.shuffle(album.items)
    else:
        album.items.sort(key=lambda item: item.date, reverse=album.sort == "descending")


def is_newer(file1: Path, file2: Path) -> bool:
    """True if both files exist and file1 was modified after file2.

    Files with the same modification time are not newer than each other.
    """
    try:
        return file1.stat().st_mtime_ns > file2.stat().st_mtime_ns
    except FileNotFoundError:
        return False


@contextmanager
def lock(root: Path):
    """Hold an advisory lock on the website root while building it."""
    root.mkdir(parents=True, exist_ok=True)
    path = root / LOCK_FILE
    try:
        fd = os.open(path, os.O_CREAT | os.O_EXCL | os.O_WRONLY)
    except FileExistsError:
        raise LockError(
            f"Another build is using '{root}' (remove '{path}' if it isn't)"
        ) from None
    with os.fdopen(fd, "w") as f:
        f.write(f"{os.getpid()}\n")
    try:
        yield
    finally:
        path.unlink(missing_ok=True)


def all_albums(album: Album) -> list[Album]:
    """Every album in the tree that album belongs to."""
    top = album
    while top.parent is not None:
        top = top.parent
    albums = []
    pending = [top]
    while pending:
        current = pending.pop()
        albums.append(current)
        pending.extend(current.albums)
    return albums
