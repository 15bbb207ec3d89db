"""
Output naming for generated images.

The same name is used for on-screen labels and for the download file name,
so both always come from output_filename().
"""

import re
from typing import List, Sequence
from urllib.parse import quote

from core.constants import DownloadConstants
from core.gallery_buffer import GeneratedImage
from schemas import DownloadPlanItem, OutputSettings

EXTENSION_PATTERN = re.compile(r"\.[^/.]+$")


def strip_extension(name: str) -> str:
    """Remove only the trailing .ext component of a file name"""
    return EXTENSION_PATTERN.sub("", name, count=1)


def output_filename(original_name: str, settings: OutputSettings) -> str:
    """
    Build "<prefix><stem><suffix>.<format>".

    Example:
        >>> output_filename("photo.PNG", OutputSettings(prefix="tr_", suffix="_v2", format="jpeg"))
        'tr_photo_v2.jpeg'
    """
    stem = strip_extension(original_name)
    return f"{settings.prefix}{stem}{settings.suffix}.{settings.format.value}"


def content_disposition(filename: str) -> str:
    """
    Attachment header value for a download name.

    Carries an ASCII fallback in filename= and the exact UTF-8 name in
    filename* (RFC 6266 / RFC 5987), so non-Latin names survive latin-1
    header encoding.
    """
    fallback = "".join(
        c if c.isascii() and c.isprintable() else "_" for c in filename
    )
    fallback = fallback.replace("\\", "\\\\").replace('"', '\\"')
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename, safe='')}"


def build_download_schedule(
    images: Sequence[GeneratedImage],
    settings: OutputSettings,
    stagger_ms: int = DownloadConstants.DEFAULT_STAGGER_MS,
) -> List[DownloadPlanItem]:
    """
    Plan a batch download, one entry per image, each delayed by a fixed step
    after the previous one so the browser does not throttle the downloads.
    """
    return [
        DownloadPlanItem(
            image_id=image.id,
            filename=output_filename(image.original_name, settings),
            url=f"/api/gallery/{image.id}/download",
            delay_ms=index * stagger_ms,
        )
        for index, image in enumerate(images)
    ]
