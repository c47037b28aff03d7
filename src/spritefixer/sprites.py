from __future__ import annotations

from pathlib import Path

from PIL import Image, UnidentifiedImageError

from .logging import get_logger

logger = get_logger(__name__)

IMAGE_EXTENSIONS = {".bmp", ".jpg", ".gif", ".png"}


class SpriteIOError(Exception):
    """Base class for sprite file errors."""


class SourceDirectoryError(SpriteIOError):
    """Raised when the source directory cannot be listed."""


class NoImagesFoundError(SourceDirectoryError):
    """Raised when the source directory holds no image files."""


class ImageDecodeError(SpriteIOError):
    """Raised when an image file cannot be decoded."""


class ImageSaveError(SpriteIOError):
    """Raised when a sprite cannot be written."""


def is_image_file(path: Path) -> bool:
    return path.is_file() and bool(path.stem) and path.suffix.lower() in IMAGE_EXTENSIONS


def find_image_files(directory: Path | str) -> list[Path]:
    """List image files directly inside ``directory``, sorted by name."""
    directory = Path(directory)
    if not directory.is_dir():
        raise SourceDirectoryError(f"Invalid source directory: {directory.resolve()}")

    try:
        files = sorted(path for path in directory.iterdir() if is_image_file(path))
    except OSError as exc:
        raise SourceDirectoryError(f"Unable to list {directory.resolve()}: {exc}") from exc

    if not files:
        raise NoImagesFoundError(f"No image files found in directory: {directory.resolve()}")

    logger.debug(f"Found {len(files)} image files in {directory}")
    return files


def load_image(path: Path | str) -> Image.Image:
    """Decode an image file into an RGBA image detached from the file."""
    try:
        with Image.open(path) as img:
            img.load()
            return img.convert("RGBA")
    except (OSError, UnidentifiedImageError, ValueError) as exc:
        raise ImageDecodeError(f"Unable to read image {path}: {exc}") from exc


def save_image(image: Image.Image, path: Path | str) -> bool:
    """
    Write ``image`` as PNG unless ``path`` already exists.

    Returns:
        True if the file was written, False if an existing file was kept
    """
    path = Path(path)
    if path.exists():
        logger.debug(f"Skipping {path}: file already exists")
        return False

    try:
        image.save(path, format="PNG")
    except (OSError, ValueError) as exc:
        raise ImageSaveError(f"Unable to save image {path}: {exc}") from exc
    return True
