"""Reading capture dates and dimensions from image files."""

from datetime import datetime

from PIL import ExifTags, Image, UnidentifiedImageError

from .log import LogConfig

DATE_TIME_ORIGINAL = 0x9003
EXIF_DATE_FORMAT = "%Y:%m:%d %H:%M:%S"

# Images without a capture date sort before everything else
NO_DATE = datetime.min


def exif_date(path, log: LogConfig | None = None) -> datetime:
    """Return the DateTimeOriginal of the image at path."""
    log = log or LogConfig()
    try:
        with Image.open(path) as img:
            exif = img.getexif().get_ifd(ExifTags.IFD.Exif)
            value = exif.get(DATE_TIME_ORIGINAL)
    except (OSError, UnidentifiedImageError) as e:
        log.warning("Cannot read Exif data from '%s': %s", path, e)
        return NO_DATE

    if not value:
        log.warning("Exif tag 'DateTimeOriginal' missing from '%s'", path)
        return NO_DATE
    try:
        return datetime.strptime(str(value).strip("\x00 "), EXIF_DATE_FORMAT)
    except ValueError:
        log.warning("Invalid Exif date '%s' in '%s'", value, path)
        return NO_DATE


def image_size(path) -> tuple[int | None, int | None]:
    """Return (width, height) of the image at path, or (None, None)."""
    try:
        with Image.open(path) as img:
            return img.size
    except (OSError, UnidentifiedImageError):
        return None, None
