"""
Photog! turns a directory tree of pictures into a photography website.

    from photog import create_album, generate

    website = create_album("/home/me/Pictures", destination="/home/me/public_html")
    generate(website)

The source tree is read first (``create_album``), the website is then
created or updated from the resulting albums (``generate``). Only what is
out of date is rebuilt.
"""

from .errors import CollaboratorError, ConfigError, LockError, PhotogError, TemplateError
from .loader import create_album
from .log import LogConfig
from .nodes import Album, Image
from .options import BuildOptions
from .website import generate

__version__ = "0.1.0"

__all__ = [
    "Album",
    "BuildOptions",
    "CollaboratorError",
    "ConfigError",
    "Image",
    "LockError",
    "LogConfig",
    "PhotogError",
    "TemplateError",
    "create_album",
    "generate",
]
