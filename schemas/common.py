"""
Common data structures shared by all layers.

Selection is the normalized region model: integer coordinates in a fixed
0-1000 space that express fractions of the image width/height, independent
of the size the image is rendered at.
"""

from typing import Dict, Tuple

from pydantic import BaseModel, Field, model_validator

from core.constants import RegionConstants

SCALE = RegionConstants.NORMALIZED_SCALE


class Selection(BaseModel):
    """Rectangular region in normalized (0-1000) coordinates"""

    x: int = Field(..., ge=0, le=SCALE, description="Left edge")
    y: int = Field(..., ge=0, le=SCALE, description="Top edge")
    width: int = Field(..., ge=1, le=SCALE, description="Width")
    height: int = Field(..., ge=1, le=SCALE, description="Height")

    @model_validator(mode="after")
    def check_bounds(self) -> "Selection":
        if self.x + self.width > SCALE:
            raise ValueError(f"x + width exceeds {SCALE}: {self.x} + {self.width}")
        if self.y + self.height > SCALE:
            raise ValueError(f"y + height exceeds {SCALE}: {self.y} + {self.height}")
        return self

    @property
    def x2(self) -> int:
        """Right edge"""
        return self.x + self.width

    @property
    def y2(self) -> int:
        """Bottom edge"""
        return self.y + self.height

    def to_box(self) -> Tuple[int, int, int, int]:
        """Return (ymin, xmin, ymax, xmax)."""
        return (self.y, self.x, self.y2, self.x2)

    def to_dict(self) -> Dict[str, int]:
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}


class Point(BaseModel):
    """2D point in display pixels"""

    x: float
    y: float


class Size(BaseModel):
    """Displayed or stored image size"""

    width: float = Field(..., gt=0)
    height: float = Field(..., gt=0)


class PixelRect(BaseModel):
    """Rectangle in display pixels (overlay rendering)"""

    left: float
    top: float
    width: float
    height: float
