"""
Image import for InstaFilter.

Decodes the photo the user picked into a Pillow image the pipeline can bind,
either directly or on a small worker pool so the control thread stays
responsive while large photos decode.

Classes:
    ImageAcquirer: Decodes images on a thread pool

Functions:
    load_image: Decode a path, bytes or binary file object
    is_supported_format: Check a path's extension
    get_supported_image_formats: Sorted list of supported extensions
"""

import concurrent.futures
import io
import logging
from pathlib import Path
from typing import Any, BinaryIO, Callable, List, Optional, Union

from PIL import Image, UnidentifiedImageError

from IF_Libs.constants import ACQUIRE_MAX_WORKERS, RENDER_MODE, SUPPORTED_STANDARD_IMAGES
from IF_Libs.errors import AcquisitionError

logger = logging.getLogger(__name__)

ImageSource = Union[str, Path, bytes, bytearray, BinaryIO]


def get_supported_image_formats() -> List[str]:
    return sorted(SUPPORTED_STANDARD_IMAGES)


def is_supported_format(file_path: Path) -> bool:
    return Path(file_path).suffix.lower() in SUPPORTED_STANDARD_IMAGES


def load_image(source: ImageSource) -> Any:
    """
    Decode an image into a fully loaded RGBA Pillow image.

    Args:
        source: Filesystem path, raw encoded bytes, or a binary file object

    Returns:
        PIL Image in RGBA mode, detached from the source

    Raises:
        AcquisitionError: If the file is missing or unsupported, or the data
            cannot be decoded
    """
    if isinstance(source, (str, Path)):
        file_path = Path(source)
        if not file_path.is_file():
            raise AcquisitionError(f"Image file not found: {file_path}")
        if not is_supported_format(file_path):
            raise AcquisitionError(
                f"Unsupported image format '{file_path.suffix}'. "
                f"Supported: {', '.join(get_supported_image_formats())}"
            )
        opener: Any = file_path
        description = str(file_path)
    elif isinstance(source, (bytes, bytearray)):
        if not source:
            raise AcquisitionError("Image data is empty")
        opener = io.BytesIO(bytes(source))
        description = f"<{len(source)} bytes>"
    elif hasattr(source, "read"):
        opener = source
        description = repr(source)
    else:
        raise AcquisitionError(f"Unsupported image source type: {type(source)}")

    try:
        with Image.open(opener) as img:
            img.load()
            image = img.convert(RENDER_MODE) if img.mode != RENDER_MODE else img.copy()
    except (UnidentifiedImageError, OSError, ValueError) as e:
        raise AcquisitionError(f"Failed to load image from {description}: {e}") from e

    logger.debug(f"Loaded image {description} ({image.width}x{image.height})")
    return image


class ImageAcquirer:
    """
    Decodes images on a background thread pool.

    Callbacks run on the worker thread; callers that own state on another
    thread must hand the result back themselves (the desktop window does so
    with a queued Qt signal).

    Example:
        >>> acquirer = ImageAcquirer()
        >>> acquirer.submit("photo.jpg", on_loaded=pipeline.bind_image)
    """

    def __init__(self, max_workers: int = ACQUIRE_MAX_WORKERS):
        self._executor = concurrent.futures.ThreadPoolExecutor(
            max_workers=max_workers,
            thread_name_prefix="image-acquire",
        )

    def submit(
        self,
        source: ImageSource,
        on_loaded: Optional[Callable[[Any], None]] = None,
        on_failed: Optional[Callable[[AcquisitionError], None]] = None,
    ) -> concurrent.futures.Future:
        """
        Start decoding ``source``.

        Args:
            source: Anything accepted by load_image
            on_loaded: Called with the decoded image
            on_failed: Called with the AcquisitionError on failure

        Returns:
            Future resolving to the decoded image
        """
        future = self._executor.submit(load_image, source)

        def _done(done: concurrent.futures.Future) -> None:
            if done.cancelled():
                return
            error = done.exception()
            if error is None:
                if on_loaded is not None:
                    on_loaded(done.result())
            elif isinstance(error, AcquisitionError):
                logger.warning(f"Image acquisition failed: {error}")
                if on_failed is not None:
                    on_failed(error)
            else:
                logger.error(f"Unexpected error while acquiring image: {error!r}")

        future.add_done_callback(_done)
        return future

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)
