"""
Prompt builder for the image generation service.

Composes the per-image instruction sent with each remote call: an optional
hard restriction to the selected boxes, a styling directive and an export
directive matching the output settings.
"""

from typing import Optional, Sequence

from core.constants import GeminiConstants
from core.enums import OutputFormat, Resolution
from core.image_manager import UploadedImage
from schemas import OutputSettings, Selection

UNRESTRICTED_CLAUSE = "Translate all visible text in the image."

STYLING_DIRECTIVE = (
    "STYLING: Match the original font family, size, color, and orientation perfectly."
)


def format_boxes(selections: Sequence[Selection]) -> str:
    """Render selections as [ymin, xmin, ymax, xmax] boxes, in stored order"""
    return ", ".join(
        f"[ymin: {ymin}, xmin: {xmin}, ymax: {ymax}, xmax: {xmax}]"
        for ymin, xmin, ymax, xmax in (s.to_box() for s in selections)
    )


def build_restriction_clause(selections: Sequence[Selection]) -> str:
    if not selections:
        return UNRESTRICTED_CLAUSE

    return (
        "CRITICAL RESTRICTION: You MUST ONLY translate and modify text found within "
        f"the following normalized coordinate boxes: {format_boxes(selections)}. "
        "ANY TEXT OUTSIDE THESE BOXES MUST NOT BE TOUCHED. "
        "THE REST OF THE IMAGE BACKGROUND, COLORS, AND UNSELECTED TEXT MUST REMAIN "
        "EXACTLY AS THEY ARE."
    )


def build_export_directive(settings: OutputSettings) -> str:
    if settings.format == OutputFormat.JPEG:
        return f"Export as high-quality JPEG (Quality: {settings.quality}%)."
    return "Export as lossless PNG."


def build_prompt(
    instruction: str,
    image: UploadedImage,
    settings: OutputSettings,
    language: Optional[str] = None,
) -> str:
    """
    Compose the full prompt for one image.

    Args:
        instruction: Task text (already prefixed with a language directive if any)
        image: Source image; its selections decide the restriction clause
        settings: Output settings snapshot of the batch
        language: Target language of the pass; no language line without one

    Returns:
        Prompt text
    """
    lines = [f"TASK: {instruction}"]
    if language:
        lines.append(f"TARGET LANGUAGE: Ensure ALL translated text is in {language}.")
    lines.extend(
        [
            STYLING_DIRECTIVE,
            build_restriction_clause(image.selections),
            build_export_directive(settings),
            "OUTPUT: Provide the modified image.",
        ]
    )
    return "\n".join(lines)


def build_language_instruction(language: str, instruction: str = "") -> str:
    """Prefix the user instruction with an explicit target language directive"""
    return f"Translate all text in the images to {language} language. {instruction}".strip()


def resolve_image_size(resolution: Resolution) -> str:
    """Image size hint for the service; 'original' maps to the service floor"""
    if resolution == Resolution.ORIGINAL:
        return GeminiConstants.RESOLUTION_FLOOR
    return resolution.value
