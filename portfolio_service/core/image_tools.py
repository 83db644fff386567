# core/image_tools.py

import io
from pathlib import PurePath
from typing import Optional, Tuple

from PIL import Image, ImageOps

from ..schemas.pdf_schemas import (
    ImageCompressionOptions,
    ImageCompressionResult,
    ImageFormat,
)
from ..utils.exceptions import ImageProcessingError, ValidationFailure

# Pillow format name, file extension, media type
_FORMATS = {
    ImageFormat.JPEG: ("JPEG", ".jpg", "image/jpeg"),
    ImageFormat.PNG: ("PNG", ".png", "image/png"),
    ImageFormat.WEBP: ("WEBP", ".webp", "image/webp"),
}

_PILLOW_TO_FORMAT = {
    "JPEG": ImageFormat.JPEG,
    "MPO": ImageFormat.JPEG,
    "PNG": ImageFormat.PNG,
    "WEBP": ImageFormat.WEBP,
}


def fit_within(
    size: Tuple[int, int], max_width: Optional[int], max_height: Optional[int]
) -> Tuple[int, int]:
    """Shrink (never enlarge) a size to fit the bounds, preserving aspect ratio"""
    width, height = size
    ratio = 1.0
    if max_width and width > max_width:
        ratio = min(ratio, max_width / width)
    if max_height and height > max_height:
        ratio = min(ratio, max_height / height)
    return max(1, round(width * ratio)), max(1, round(height * ratio))


def compressed_name(filename: str, extension: str) -> str:
    return f"{PurePath(filename).stem or 'image'}-compressed{extension}"


def compress_image(
    data: bytes, filename: str, options: ImageCompressionOptions
) -> ImageCompressionResult:
    """
    Re-encode an image at a quality, optionally resized and converted

    Args:
        data: Source image bytes
        filename: Source file name, used for the output name
        options: Quality, bounds and output format

    Returns:
        ImageCompressionResult named ``<stem>-compressed.<ext>``
    """
    if not data:
        raise ValidationFailure("Choose an image to compress")

    try:
        with Image.open(io.BytesIO(data)) as source:
            source_format = source.format
            img = ImageOps.exif_transpose(source)
            img.load()
    except OSError as e:
        raise ImageProcessingError(f"Unsupported or corrupted image: {filename}", {"error": str(e)})

    target = options.output_format
    if target == ImageFormat.ORIGINAL:
        target = _PILLOW_TO_FORMAT.get(source_format or "", ImageFormat.JPEG)
    pillow_format, extension, media_type = _FORMATS[target]

    new_size = fit_within(img.size, options.max_width, options.max_height)
    if new_size != img.size:
        img = img.resize(new_size, Image.LANCZOS)

    save_kwargs = {"optimize": True}
    if target == ImageFormat.JPEG:
        img = _to_rgb(img)
        save_kwargs["quality"] = options.quality
    elif target == ImageFormat.WEBP:
        save_kwargs["quality"] = options.quality
    elif img.mode not in ("RGB", "RGBA", "L", "LA", "P"):
        img = img.convert("RGBA")

    out = io.BytesIO()
    try:
        img.save(out, pillow_format, **save_kwargs)
    except OSError as e:
        raise ImageProcessingError(f"Failed to encode image: {e}")

    return ImageCompressionResult(
        filename=compressed_name(filename, extension),
        content=out.getvalue(),
        media_type=media_type,
        width=img.width,
        height=img.height,
        original_size=len(data),
        compressed_size=out.tell(),
    )


def _to_rgb(img: Image.Image) -> Image.Image:
    if img.mode in ("RGBA", "LA", "P"):
        rgba = img.convert("RGBA")
        background = Image.new("RGB", rgba.size, "white")
        background.paste(rgba, mask=rgba.split()[-1])
        return background
    if img.mode != "RGB":
        return img.convert("RGB")
    return img
