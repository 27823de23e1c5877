"""
Album pages.

An album's ``template`` is either None, for the built-in template below,
or the path to a Jinja2 template file. Templates get every album variable
(``title``, ``url``, ``items``, custom photog.ini keys, ...), the album
itself as ``album``, and a ``static()`` function that turns a path below
the website root into one relative to the page, so that the website also
works when it is opened from disk.
"""

import re
from functools import lru_cache
from pathlib import Path

import jinja2
from jinja2 import Environment, FileSystemLoader

from .configure import STATIC_DIR
from .errors import TemplateError
from .nodes import Album

_jinja_env = Environment(autoescape=True)


STYLESHEET = """\
/* ── reset & base ── */
*, *::before, *::after { box-sizing: border-box; }
body {
  margin: 0; padding: 24px;
  font-family: "Inter", "SF Pro Text", system-ui, -apple-system, sans-serif;
  font-size: 15px; line-height: 1.6;
  background: #0e0e0e; color: #c8c8c8;
  -webkit-font-smoothing: antialiased;
}
a { color: #7db8e0; text-decoration: none; transition: color 0.15s; }
a:hover { color: #aed4f0; }
h1 { font-size: 1.5em; font-weight: 500; letter-spacing: -0.01em; margin: 0 0 16px; }
.nav { margin-bottom: 12px; font-size: 0.88em; }
.nav a { color: #666; }
.nav a:hover { color: #aaa; }

/* ── album grid ── */
.grid { display: flex; flex-wrap: wrap; gap: 4px; align-items: flex-end; }
.grid a { display: block; position: relative; }
.grid img { height: 183px; width: auto; display: block; border-radius: 2px;
  transition: filter 0.25s ease; }
.grid a:hover img { filter: brightness(1.15); }
.grid .album span {
  position: absolute; left: 0; right: 0; bottom: 0; padding: 4px 8px;
  background: rgba(0,0,0,0.55); color: #ddd; font-size: 0.85em;
}

.copyright {
  font-size: 0.82em; color: #555; margin-top: 32px;
  padding-top: 16px; border-top: 1px solid #1a1a1a;
}

@media (max-width: 640px) {
  body { padding: 14px; }
  .grid img { height: 110px; }
}
"""

STATIC_FILES = {
    "photog.css": STYLESHEET,
}

INDEX_TEMPLATE = """\
<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<title>{{ title }}</title>
<link rel="stylesheet" href="{{ static('static/photog.css') }}">
</head>
<body>
{% if parent %}<div class="nav"><a href="../">&larr; back</a></div>{% endif %}
<h1>{{ title }}</h1>
<div class="grid">
{% for item in items %}
{% if item.type == 'album' %}
{% if not item.unlisted and item.width %}<a class="album" href="{{ item.href }}"><img src="{{ item.src }}" width="{{ item.width }}" height="{{ item.height }}" alt="" loading="lazy"><span>{{ item.title }}</span></a>{% endif %}
{% elif fullscreen %}<a href="{{ item.href }}" title="{{ item.name }}"><img src="{{ item.src }}" width="{{ item.width }}" height="{{ item.height }}" alt="{{ item.name }}" loading="lazy"></a>
{% else %}<img src="{{ item.src }}" width="{{ item.width }}" height="{{ item.height }}" alt="{{ item.name }}" loading="lazy">
{% endif %}
{% endfor %}
</div>
{% if copyright %}<div class="copyright">{{ copyright }}</div>{% endif %}
</body>
</html>
"""


def relative_root(url: str) -> str:
    """The relative path from the page at url back to the website root."""
    return re.sub(r"[^/]+/", "../", url).lstrip("/")


@lru_cache(maxsize=None)
def _file_env(directory: str) -> Environment:
    return Environment(loader=FileSystemLoader(directory), autoescape=True)


def load_template(path: str | None) -> jinja2.Template:
    try:
        if path is None:
            return _jinja_env.from_string(INDEX_TEMPLATE)
        template = Path(path)
        return _file_env(str(template.parent)).get_template(template.name)
    except jinja2.TemplateNotFound as e:
        raise TemplateError(f"Template not found: '{path}'") from e
    except jinja2.TemplateError as e:
        raise TemplateError(f"{path or 'built-in template'}: {e}") from e


def context(album: Album) -> dict:
    """The variables an album page is rendered with."""
    rel = relative_root(album.url)
    variables = dict(album.extra)
    variables.update({k: getattr(album, k) for k in album.__dataclass_fields__})
    variables["album"] = album
    variables["is_root"] = album.is_root
    variables["static"] = lambda path: rel + str(path)
    return variables


def render_index(album: Album):
    """Render album's index page to album.index."""
    template = load_template(album.template)
    try:
        html = template.render(context(album))
    except jinja2.TemplateError as e:
        raise TemplateError(f"{album.template or 'built-in template'}: {e}") from e
    album.index.parent.mkdir(parents=True, exist_ok=True)
    album.index.write_text(html, encoding="utf-8")


def install_static(root: Path) -> bool:
    """Write the static files into root/static, return True if any changed."""
    static_dir = root / STATIC_DIR
    static_dir.mkdir(parents=True, exist_ok=True)
    changed = False
    for name, content in STATIC_FILES.items():
        path = static_dir / name
        if not path.is_file() or path.read_text(encoding="utf-8") != content:
            path.write_text(content, encoding="utf-8")
            changed = True
    return changed
