"""
The default image commands: photog-scale, photog-watermark,
photog-thumbnail and photog-preview.

Any other program taking the same arguments can be configured instead
(see the ``*_command`` album variables).
"""

import argparse
import sys

from PIL import Image, ImageFilter, ImageOps, UnidentifiedImageError

IMAGE_SIZE = 2160      # height of full-size images
THUMBNAIL_SIZE = 366   # height of thumbnails and album previews
QUALITY = 85
WATERMARK_MARGIN = 0.02


def _open(path) -> Image.Image:
    with Image.open(path) as img:
        return ImageOps.exif_transpose(img).convert("RGB")


def _fit_height(img: Image.Image, height: int) -> Image.Image:
    if img.height <= height:
        return img
    width = max(1, round(img.width * height / img.height))
    return img.resize((width, height), Image.Resampling.LANCZOS)


def scale(source, destination, height=IMAGE_SIZE):
    """Scale an image down to height pixels."""
    img = _fit_height(_open(source), height)
    img.save(destination, "JPEG", quality=QUALITY)


def watermark(source, watermark_file, destination, height=IMAGE_SIZE):
    """Scale an image and paste a (transparent) watermark in the lower right corner."""
    img = _fit_height(_open(source), height)
    with Image.open(watermark_file) as mark:
        mark = mark.convert("RGBA")
    if mark.width > img.width or mark.height > img.height:
        mark = ImageOps.contain(mark, img.size, Image.Resampling.LANCZOS)
    margin = round(min(img.size) * WATERMARK_MARGIN)
    x = max(0, img.width - mark.width - margin)
    y = max(0, img.height - mark.height - margin)
    img.paste(mark, (x, y), mark)
    img.save(destination, "JPEG", quality=QUALITY)


def thumbnail(source, destination, height=THUMBNAIL_SIZE):
    """Create a thumbnail, sharpened so that it doesn't look blurry."""
    img = _fit_height(_open(source), height)
    img = img.filter(ImageFilter.UnsharpMask(radius=1, percent=80, threshold=2))
    img.save(destination, "JPEG", quality=QUALITY)


def preview(images, destination, height=THUMBNAIL_SIZE):
    """Tile 3, 6 or 9 images into rows of three square crops."""
    if len(images) not in (3, 6, 9):
        raise ValueError(f"Need 3, 6 or 9 images, got {len(images)}")
    rows = len(images) // 3
    tile = height // rows
    out = Image.new("RGB", (tile * 3, tile * rows), "black")
    for i, path in enumerate(images):
        square = ImageOps.fit(_open(path), (tile, tile), Image.Resampling.LANCZOS)
        out.paste(square, ((i % 3) * tile, (i // 3) * tile))
    out.save(destination, "JPEG", quality=QUALITY)


def _run(func, parser: argparse.ArgumentParser, argv) -> int:
    args = parser.parse_args(argv)
    try:
        func(*vars(args).values())
    except (OSError, UnidentifiedImageError, ValueError) as e:
        print(f"{parser.prog}: {e}", file=sys.stderr)
        return 1
    return 0


def scale_main(argv=None) -> int:
    parser = argparse.ArgumentParser(prog="photog-scale", description=scale.__doc__)
    parser.add_argument("source")
    parser.add_argument("destination")
    return _run(scale, parser, argv)


def watermark_main(argv=None) -> int:
    parser = argparse.ArgumentParser(prog="photog-watermark", description=watermark.__doc__)
    parser.add_argument("source")
    parser.add_argument("watermark")
    parser.add_argument("destination")
    return _run(watermark, parser, argv)


def thumbnail_main(argv=None) -> int:
    parser = argparse.ArgumentParser(prog="photog-thumbnail", description=thumbnail.__doc__)
    parser.add_argument("source")
    parser.add_argument("destination")
    return _run(thumbnail, parser, argv)


def preview_main(argv=None) -> int:
    parser = argparse.ArgumentParser(prog="photog-preview", description=preview.__doc__)
    parser.add_argument("images", nargs="+")
    parser.add_argument("destination")
    return _run(preview, parser, argv)
