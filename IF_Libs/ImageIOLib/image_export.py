"""
Image export for InstaFilter.

Encodes rendered images for sharing: to bytes for clipboard or share
targets, or to a file on disk.

Functions:
    normalize_format: Map a format name or extension to a Pillow format
    encode_image: Encode an image to bytes
    save_image: Write an image to disk
    default_export_name: Suggested file name for an exported photo
"""

import io
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from IF_Libs.constants import (
    ALPHA_LESS_FORMATS,
    DEFAULT_JPEG_QUALITY,
    DEFAULT_OUTPUT_FORMAT,
    OUTPUT_FILE_PREFIX,
)

logger = logging.getLogger(__name__)


def normalize_format(save_format: str) -> str:
    """
    Normalize a format name for Pillow.

    "jpg", ".jpg" and "JPEG" all become "JPEG"; other names are upper-cased.

    Raises:
        ValueError: If save_format is empty
    """
    name = str(save_format).strip().lstrip(".").upper()
    if not name:
        raise ValueError("save_format cannot be empty")
    # PIL uses "JPEG" not "JPG"
    if name == "JPG":
        name = "JPEG"
    return name


def _prepare(image: Any, save_format: str, quality: int) -> Dict[str, Any]:
    if not hasattr(image, "save"):
        raise TypeError(f"Expected PIL Image, got {type(image)}")

    kwargs: Dict[str, Any] = {"format": save_format}
    if save_format == "JPEG":
        kwargs["quality"] = max(1, min(100, int(quality)))
    return kwargs


def _flatten_for(image: Any, save_format: str) -> Any:
    if save_format in ALPHA_LESS_FORMATS and image.mode not in ("RGB", "L"):
        return image.convert("RGB")
    return image


def encode_image(
    image: Any,
    save_format: str = DEFAULT_OUTPUT_FORMAT,
    quality: int = DEFAULT_JPEG_QUALITY,
) -> bytes:
    """
    Encode an image to bytes.

    Args:
        image: PIL Image
        save_format: Target format (PNG, JPG, ...)
        quality: JPEG quality 1-100 (JPEG only)

    Returns:
        Encoded image data

    Raises:
        TypeError: If image not PIL Image
        ValueError: If the format is empty or unknown to Pillow
    """
    save_format = normalize_format(save_format)
    kwargs = _prepare(image, save_format, quality)

    buffer = io.BytesIO()
    try:
        _flatten_for(image, save_format).save(buffer, **kwargs)
    except KeyError as e:
        raise ValueError(f"Unknown image format: {save_format}") from e
    return buffer.getvalue()


def save_image(
    image: Any,
    path: Path,
    save_format: Optional[str] = None,
    quality: int = DEFAULT_JPEG_QUALITY,
) -> Path:
    """
    Save an image to disk.

    Args:
        image: PIL Image
        path: Destination file
        save_format: Target format; inferred from the extension when omitted
        quality: JPEG quality 1-100 (JPEG only)

    Returns:
        The path written

    Raises:
        OSError: If the destination directory does not exist
        ValueError: If the format cannot be determined
    """
    path = Path(path)
    if not path.parent.is_dir():
        raise OSError(f"Output directory does not exist: {path.parent}")

    if save_format is None:
        save_format = path.suffix or DEFAULT_OUTPUT_FORMAT
    save_format = normalize_format(save_format)
    kwargs = _prepare(image, save_format, quality)

    try:
        _flatten_for(image, save_format).save(path, **kwargs)
    except KeyError as e:
        raise ValueError(f"Unknown image format: {save_format}") from e

    logger.info(f"Saved image to {path}")
    return path


def default_export_name(source_name: Optional[str] = None, save_format: str = DEFAULT_OUTPUT_FORMAT) -> str:
    """Suggested file name, e.g. ``instafilter_beach.png``."""
    extension = ".jpg" if normalize_format(save_format) == "JPEG" else f".{normalize_format(save_format).lower()}"
    stem = Path(source_name).stem if source_name else "photo"
    return f"{OUTPUT_FILE_PREFIX}{stem}{extension}"
