"""
Image format conversion utilities.

Handles conversions between the representations used by the service:
- data URLs (data:<mime>;base64,<payload>) as stored on uploaded/generated images
- raw bytes as sent to and received from the generation service
- PIL images for probing and transcoding
"""

import base64
import binascii
import io
import logging
import re
from typing import Tuple

from PIL import Image, UnidentifiedImageError

from api.exceptions import InvalidEncodingError, InvalidImageException
from core.enums import OutputFormat

logger = logging.getLogger(__name__)

DATA_URL_PATTERN = re.compile(r"^data:(.+);base64,(.+)$")


class ImageConverters:
    """Utilities for converting between image representations."""

    @staticmethod
    def parse_data_url(data_url: str) -> Tuple[str, str]:
        """
        Split a data URL into its mime type and base64 payload.

        Args:
            data_url: String of the form data:<mime>;base64,<payload>

        Returns:
            Tuple of (mime_type, base64 payload)

        Raises:
            InvalidEncodingError: If the string does not have that shape
        """
        match = DATA_URL_PATTERN.match(data_url or "")
        if not match:
            raise InvalidEncodingError()
        return match.group(1), match.group(2)

    @staticmethod
    def decode_data_url(data_url: str) -> Tuple[str, bytes]:
        """
        Decode a data URL into (mime_type, raw bytes).

        Raises:
            InvalidEncodingError: On shape mismatch or a corrupt base64 payload
        """
        mime_type, payload = ImageConverters.parse_data_url(data_url)
        try:
            data = base64.b64decode(payload, validate=True)
        except (binascii.Error, ValueError) as e:
            raise InvalidEncodingError(f"Invalid base64 payload: {e}") from e
        return mime_type, data

    @staticmethod
    def to_base64(data: bytes) -> str:
        return base64.b64encode(data).decode("utf-8")

    @staticmethod
    def to_data_url(data: bytes, mime_type: str) -> str:
        """Build a data URL from raw bytes"""
        return f"data:{mime_type};base64,{ImageConverters.to_base64(data)}"

    @staticmethod
    def probe(data: bytes) -> Tuple[int, int, str]:
        """
        Read dimensions and format of an encoded image.

        Returns:
            Tuple of (width, height, PIL format name)

        Raises:
            InvalidImageException: If Pillow cannot identify the data
        """
        try:
            with Image.open(io.BytesIO(data)) as img:
                return img.width, img.height, img.format or ""
        except (UnidentifiedImageError, OSError) as e:
            raise InvalidImageException(str(e)) from e

    @staticmethod
    def transcode(data: bytes, target: OutputFormat, quality: int = 90) -> bytes:
        """
        Re-encode image bytes in the requested output format.

        Args:
            data: Encoded source image
            target: Output format
            quality: JPEG quality (1-100, ignored for PNG)

        Returns:
            Encoded bytes
        """
        try:
            with Image.open(io.BytesIO(data)) as img:
                if target == OutputFormat.JPEG and img.mode not in ("RGB", "L"):
                    img = img.convert("RGB")

                buffer = io.BytesIO()
                save_kwargs = {"format": target.pil_format}
                if target == OutputFormat.JPEG:
                    save_kwargs["quality"] = quality
                    save_kwargs["optimize"] = True

                img.save(buffer, **save_kwargs)
                return buffer.getvalue()

        except (UnidentifiedImageError, OSError) as e:
            logger.error(f"Failed to transcode image to {target.value}: {e}")
            raise InvalidImageException(str(e)) from e
