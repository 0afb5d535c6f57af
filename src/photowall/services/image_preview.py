"""Local image previews for the upload form."""

import io

from PIL import Image, ImageOps, UnidentifiedImageError

from ..logging_config import get_logger

logger = get_logger(__name__)

PREVIEW_QUALITY = 85


def build_preview(image_data: bytes, max_size: int = 400) -> bytes | None:
    """
    Downscale an image for the upload preview.

    Nothing leaves the machine; the preview is a JPEG rendered from the bytes
    the user picked, with EXIF orientation applied.

    Args:
        image_data: Raw image bytes
        max_size: Bounding box edge in pixels

    Returns:
        bytes: JPEG preview, or None if Pillow cannot decode the data
    """
    if not image_data:
        return None

    try:
        with Image.open(io.BytesIO(image_data)) as image:
            preview = ImageOps.exif_transpose(image)
            preview.thumbnail((max_size, max_size), Image.Resampling.LANCZOS)

            if preview.mode not in ("RGB", "L"):
                preview = preview.convert("RGB")

            output = io.BytesIO()
            preview.save(output, format="JPEG", quality=PREVIEW_QUALITY)

    except (UnidentifiedImageError, OSError, ValueError) as e:
        logger.warning("preview_generation_failed", size=len(image_data), error=str(e))
        return None

    preview_bytes = output.getvalue()
    logger.debug("preview_generated", original_size=len(image_data), preview_size=len(preview_bytes))
    return preview_bytes
