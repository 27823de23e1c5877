"""
Turning a source directory tree into a tree of albums and images.
"""

from pathlib import Path

from .configure import configure, configure_image
from .errors import ConfigError
from .log import LogConfig
from .nodes import Album


def create_album(source, parent: Album | None = None, destination=None, log: LogConfig | None = None) -> Album | None:
    """Create the album for source, with all of its items and sub-albums.

    Returns None if source is not an album (see ``configure``). The root
    album, the one without parent, is always created.
    """
    log = log or LogConfig()
    album = configure(source, parent, destination, log)
    if album is None:
        return None
    album.items = collect_items(album.source, album, log)
    return album


def collect_items(directory: Path, album: Album, log: LogConfig) -> list:
    """Create the items that the contents of directory contribute to album.

    Sub-directories that turn out not to be albums are looked into as well,
    their contents become items of album as if they were its own.
    """
    items = []
    seen = {}
    for path in list_dir(directory):
        if path.is_dir():
            sub = create_album(path, album, log=log)
            if sub is not None:
                items.append(sub)
            else:
                log.debug("Descending into %s (not an album)", path)
                for item in collect_items(path, album, log):
                    add_item(items, seen, item, log)
        else:
            img = configure_image(path, album)
            if img is not None:
                add_item(items, seen, img, log)
    return items


def add_item(items: list, seen: dict, item, log: LogConfig):
    if item.type == "image":
        if item.href in seen:
            log.warning("'%s' overrides '%s' in the same album", item.source, seen[item.href])
        seen[item.href] = item.source
    items.append(item)


def list_dir(directory) -> list[Path]:
    """Directories first, then files, both sorted case-insensitively.

    Hidden entries are left out.
    """
    directory = Path(directory)
    try:
        entries = [p for p in directory.iterdir() if not p.name.startswith(".")]
    except OSError as e:
        raise ConfigError(f"Cannot read contents of directory '{directory}': {e}") from e
    dirs = sorted((p for p in entries if p.is_dir()), key=lambda p: p.name.lower())
    files = sorted((p for p in entries if p.is_file()), key=lambda p: p.name.lower())
    return dirs + files
