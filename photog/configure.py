"""
Album and image configuration.

Every album variable belongs to one of three groups:

static
    Taken from the album's context. A photog.ini cannot change them
    (``source``, ``config``, ``name``, ``root``).
dynamic
    Set in the album's own photog.ini or calculated from the parent and
    the album itself. Never copied from the parent (``slug``, ``url``,
    ``href``, ``src``, ``destination``, ``thumbnail``, ``index``,
    ``unlisted``, ``date``, ``protected``).
inherited
    Set in the album's own photog.ini, else copied from the parent, else a
    default (see ``DEFAULTS``).

Keys that belong to none of these groups are kept in ``Album.extra`` so
that custom templates can use them. They are inherited by sub-albums too.
"""

from datetime import datetime
from pathlib import Path

from .config import CONFIG_FILE, read_config, random_slug, save_config
from .errors import ConfigError
from .log import LogConfig
from .nodes import Album, Image

THUMBNAILS = "thumbnails"
PREVIEW_NAME = "all.jpg"
INDEX_NAME = "index.html"
STATIC_DIR = "static"
PRIVATE = "private"

IMAGE_EXTENSIONS = {".jpg", ".jpeg"}
SORT_ORDERS = ("ascending", "descending", "random")

STATIC_KEYS = ("source", "config", "name", "root", "parent", "items", "type")

DEFAULTS = {
    "title": "My Photography Website",
    "copyright": "",
    "template": None,  # the built-in template
    "preview": 9,
    "watermark": "",
    "sort": "descending",
    "fullscreen": True,
    "oblivious": False,
    "scale_command": "photog-scale",
    "watermark_command": "photog-watermark",
    "thumbnail_command": "photog-thumbnail",
    "preview_command": "photog-preview",
}


def is_image(filename: str) -> bool:
    return Path(filename).suffix.lower() in IMAGE_EXTENSIONS


def configure(source, parent: Album | None = None, destination=None, log: LogConfig | None = None) -> Album | None:
    """Configure the album for the source directory, without its items.

    Returns None when the directory is not an album at all, which happens
    when it has no photog.ini and the parent is oblivious. ``destination``
    is the website root and is only used for the root album.
    """
    log = log or LogConfig()
    source = Path(source).absolute()
    if not source.is_dir():
        raise ConfigError(f"Source directory '{source}' does not exist")
    config = read_config(source)

    # Oblivious parents only recognise directories with a photog.ini
    if config is None:
        if parent is not None and parent.oblivious:
            return None
        config = {}

    # A private album gets a secret slug, saved right away so that it
    # survives into the next run
    if config.get("slug") == PRIVATE:
        config["slug"] = random_slug()
        config["unlisted"] = True
        save_config(source, {"slug": config["slug"], "unlisted": True})
        log.info("Generated secret URL for %s", source)

    where = source / CONFIG_FILE
    for key in STATIC_KEYS:
        if key in config:
            log.debug("Ignoring '%s' in %s", key, where)
            del config[key]

    # Static variables
    name = source.name
    if parent is not None:
        root = parent.root
        if "destination" in config:
            log.warning("Ignoring 'destination' in %s, set 'url' instead", where)
            del config["destination"]
    else:
        configured = config.pop("destination", None)
        root = destination or configured
        if not root:
            raise ConfigError(f"Destination not specified for '{source}'")
        root = Path(source, root) if destination is None else Path(root)
        root = root.absolute()

    # Dynamic variables
    slug = str(config.pop("slug", "") or name)
    if "url" in config:
        url = "/" + str(config.pop("url")).strip("/") + "/"
        url = url.replace("//", "/")
    elif parent is None:
        url = "/"
    else:
        url = f"{parent.url}{slug}/"
    href = str(config.pop("href", f"{slug}/"))
    src = str(config.pop("src", f"{href}{THUMBNAILS}/{PREVIEW_NAME}"))
    dest = root / url.lstrip("/")
    thumbnail = dest / str(config.pop("thumbnail", f"{THUMBNAILS}/{PREVIEW_NAME}"))
    index = dest / str(config.pop("index", INDEX_NAME))

    unlisted = config.pop("unlisted", False)
    if parent is None:
        unlisted = True
    elif not isinstance(unlisted, bool):
        raise ConfigError(f"'unlisted' must be true or false in {where}")

    if "date" in config:
        date = parse_date(config.pop("date"), where)
    else:
        date = datetime.fromtimestamp(source.stat().st_mtime)

    protected = parse_list(config.pop("protected", ""))
    protected += [INDEX_NAME, THUMBNAILS]
    if parent is None:
        protected.append(STATIC_DIR)

    # Inherited variables
    inherited = {}
    for key, default in DEFAULTS.items():
        if key in config:
            inherited[key] = config.pop(key)
            if key in ("template", "watermark") and inherited[key]:
                inherited[key] = str(source / str(inherited[key]))
        elif parent is not None:
            inherited[key] = getattr(parent, key)
        else:
            inherited[key] = default
    check_inherited(inherited, where)

    extra = dict(parent.extra) if parent is not None else {}
    extra.update(config)

    return Album(
        source=source,
        config=source / CONFIG_FILE,
        name=name,
        root=root,
        parent=parent,
        slug=slug,
        url=url,
        href=href,
        src=src,
        destination=dest,
        thumbnail=thumbnail,
        index=index,
        unlisted=unlisted,
        date=date,
        protected=protected,
        extra=extra,
        **inherited,
    )


def configure_image(source, album: Album) -> Image | None:
    """Configure an image of album, or return None if source isn't one."""
    source = Path(source)
    if not is_image(source.name):
        return None
    filename = source.name
    url = album.url + filename
    return Image(
        source=source,
        name=source.stem,
        url=url,
        href=filename,
        src=f"{THUMBNAILS}/{filename}",
        destination=album.root / url.lstrip("/"),
        thumbnail=album.destination / THUMBNAILS / filename,
        watermark=album.watermark,
        scale_command=album.scale_command,
        watermark_command=album.watermark_command,
        thumbnail_command=album.thumbnail_command,
    )


def parse_date(value, where) -> datetime:
    """Parse an ISO 8601 date or datetime into naive local time."""
    try:
        date = datetime.fromisoformat(str(value))
    except ValueError:
        raise ConfigError(f"Invalid date '{value}' in {where}") from None
    if date.tzinfo is not None:
        date = date.astimezone().replace(tzinfo=None)
    return date


def parse_list(value) -> list[str]:
    if not isinstance(value, str):
        return []
    return [name for name in value.replace(",", " ").split() if name]


def check_inherited(values: dict, where):
    preview = values["preview"]
    if isinstance(preview, bool) or not isinstance(preview, int) or preview < 3:
        raise ConfigError(f"'preview' must be 3, 6 or 9 in {where}")
    if values["sort"] not in SORT_ORDERS:
        raise ConfigError(f"'sort' must be one of {', '.join(SORT_ORDERS)} in {where}")
    for key in ("fullscreen", "oblivious"):
        if not isinstance(values[key], bool):
            raise ConfigError(f"'{key}' must be true or false in {where}")
    if not values["template"]:
        values["template"] = None
    for key in ("title", "copyright", "watermark"):
        values[key] = str(values[key])
