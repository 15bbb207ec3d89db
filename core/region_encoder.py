"""
Region encoder for Image Translation Studio.

Converts drag gestures made on a rendered image into Selections in the
normalized 0-1000 coordinate space, and maps Selections back to display
pixels for overlay rendering.

The display size passed in must be the size the image is rendered at when
the gesture ends, not the source file resolution: the same Selection then
overlays correctly at any render size.
"""

import logging
import math
from typing import List, Optional

from core.constants import RegionConstants
from schemas import PixelRect, Point, Selection, Size

logger = logging.getLogger(__name__)

SCALE = RegionConstants.NORMALIZED_SCALE


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(value, high))


class RegionEncoder:
    """
    Encoder between display-pixel rectangles and normalized Selections.

    Provides:
    - encode_drag: drag gesture -> Selection (or None for noise)
    - to_pixels: Selection -> display-pixel rectangle
    """

    @staticmethod
    def encode_drag(
        start: Point,
        end: Point,
        display: Size,
        min_drag_px: float = RegionConstants.MIN_DRAG_PIXELS,
    ) -> Optional[Selection]:
        """
        Encode a drag gesture as a normalized Selection.

        Args:
            start: Pointer position at mouse-down (display pixels)
            end: Pointer position at mouse-up (display pixels)
            display: Rendered image size at mouse-up
            min_drag_px: Drags no larger than this in either axis are discarded

        Returns:
            Selection anchored at its top-left corner, or None for a degenerate drag
        """
        # Pointer positions outside the image are pinned to its edges
        x1 = _clamp(start.x, 0, display.width)
        y1 = _clamp(start.y, 0, display.height)
        x2 = _clamp(end.x, 0, display.width)
        y2 = _clamp(end.y, 0, display.height)

        x = min(x1, x2)
        y = min(y1, y2)
        width = abs(x2 - x1)
        height = abs(y2 - y1)

        if width <= min_drag_px or height <= min_drag_px:
            logger.debug(f"Discarded drag {width:.1f}x{height:.1f}px (noise threshold {min_drag_px}px)")
            return None

        norm_x = min(_round_half_up(x / display.width * SCALE), SCALE)
        norm_y = min(_round_half_up(y / display.height * SCALE), SCALE)
        norm_w = min(_round_half_up(width / display.width * SCALE), SCALE - norm_x)
        norm_h = min(_round_half_up(height / display.height * SCALE), SCALE - norm_y)

        if norm_w <= 0 or norm_h <= 0:
            logger.debug("Discarded drag that rounds to an empty normalized box")
            return None

        return Selection(x=norm_x, y=norm_y, width=norm_w, height=norm_h)

    @staticmethod
    def to_pixels(selection: Selection, display: Size) -> PixelRect:
        """
        Map a Selection to display pixels at the given render size.

        Args:
            selection: Normalized selection
            display: Current rendered image size

        Returns:
            PixelRect (unrounded)
        """
        return PixelRect(
            left=selection.x / SCALE * display.width,
            top=selection.y / SCALE * display.height,
            width=selection.width / SCALE * display.width,
            height=selection.height / SCALE * display.height,
        )

    @staticmethod
    def overlay(selections: List[Selection], display: Size) -> List[PixelRect]:
        """Map every selection of an image for overlay rendering"""
        return [RegionEncoder.to_pixels(s, display) for s in selections]
