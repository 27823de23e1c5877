"""
Reading and writing photog.ini files.

A photog.ini is a list of ``key = value`` lines without section headers.
Lines starting with ``#`` or ``;`` are comments. Values that look like
booleans are turned into booleans, everything else stays a string and is
interpreted by the configure step.
"""

import configparser
import re
import secrets
from pathlib import Path

from .errors import ConfigError

CONFIG_FILE = "photog.ini"

BOOLEAN_KEYS = {"unlisted", "fullscreen", "oblivious", "locked"}
INTEGER_KEYS = {"preview"}
# Never turned into booleans, "title = On" is a title
STRING_KEYS = {
    "title", "copyright", "template", "watermark", "sort",
    "slug", "url", "href", "src", "destination", "thumbnail", "index", "date", "protected",
    "scale_command", "watermark_command", "thumbnail_command", "preview_command",
}

_TRUE = {"true", "yes", "on"}
_FALSE = {"false", "no", "off"}
_SECTION = "photog"

# [1-9][a-hjkp-z2-9]{15}: no zero, and none of i, l, m, n, o
SLUG_HEAD = "123456789"
SLUG_ALPHABET = "abcdefghjkpqrstuvwxyz23456789"
SLUG_LENGTH = 16


def config_path(directory) -> Path:
    return Path(directory) / CONFIG_FILE


def coerce(key: str, value: str):
    """Turn a raw photog.ini value into a bool, int or str."""
    token = value.strip()
    if key in STRING_KEYS:
        return token
    lowered = token.lower()
    if lowered in _TRUE or (key in BOOLEAN_KEYS and lowered == "1"):
        return True
    if lowered in _FALSE or (key in BOOLEAN_KEYS and lowered == "0"):
        return False
    if key in INTEGER_KEYS and re.fullmatch(r"[+-]?\d+", token):
        return int(token)
    return token


def read_config(directory) -> dict | None:
    """Parse the photog.ini in directory, or return None if there is none."""
    path = config_path(directory)
    if not path.is_file():
        return None

    parser = configparser.ConfigParser(
        delimiters=("=",),
        comment_prefixes=("#", ";"),
        interpolation=None,
        strict=True,
        default_section="photog:defaults",
    )
    parser.optionxform = str  # keep keys exactly as written
    try:
        text = path.read_text(encoding="utf-8")
        parser.read_string(f"[{_SECTION}]\n{text}", source=str(path))
    except (configparser.Error, OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Cannot parse '{path}': {e}") from e

    if parser.sections() != [_SECTION]:
        raise ConfigError(f"Cannot parse '{path}': section headers are not allowed")

    return {key: coerce(key, value) for key, value in parser.items(_SECTION)}


def format_value(value) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def save_config(directory, values: dict):
    """Write values into directory's photog.ini.

    Lines for keys that already exist are replaced in place, new keys are
    appended. Comments and unrelated keys are left untouched.
    """
    path = config_path(directory)
    lines = path.read_text(encoding="utf-8").splitlines() if path.is_file() else []
    pending = dict(values)

    out = []
    for line in lines:
        m = re.match(r"\s*([^=#;\s][^=]*?)\s*=", line)
        if m and m.group(1) in pending:
            key = m.group(1)
            out.append(f"{key} = {format_value(pending.pop(key))}")
        else:
            out.append(line)
    for key, value in pending.items():
        out.append(f"{key} = {format_value(value)}")

    try:
        path.write_text("\n".join(out) + "\n", encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Can't open '{path}' for writing: {e}") from e


def random_slug() -> str:
    """A secret URL segment, safe to read aloud or copy by hand."""
    tail = "".join(secrets.choice(SLUG_ALPHABET) for _ in range(SLUG_LENGTH - 1))
    return secrets.choice(SLUG_HEAD) + tail
