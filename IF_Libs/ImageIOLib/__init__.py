"""
ImageIOLib - Image decode and encode at the application boundary

This module loads picked photos into Pillow images (synchronously or on a
worker pool) and encodes rendered output for sharing.
"""

from IF_Libs.ImageIOLib.image_import import (
    ImageAcquirer,
    get_supported_image_formats,
    is_supported_format,
    load_image,
)
from IF_Libs.ImageIOLib.image_export import (
    default_export_name,
    encode_image,
    normalize_format,
    save_image,
)

__all__ = [
    "ImageAcquirer",
    "get_supported_image_formats",
    "is_supported_format",
    "load_image",
    "default_export_name",
    "encode_image",
    "normalize_format",
    "save_image",
]
