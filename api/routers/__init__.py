"""
API Routers for Image Translation Studio
"""

from . import gallery, image, system, translation

__all__ = ["image", "translation", "gallery", "system"]
