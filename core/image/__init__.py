"""
Image processing utilities.

This package provides focused image utilities:
- converters: Data URL / base64 codec, probing and transcoding
- processors: Image operations (thumbnails)
"""

from core.image.converters import ImageConverters
from core.image.processors import ImageProcessors

__all__ = ["ImageConverters", "ImageProcessors"]
