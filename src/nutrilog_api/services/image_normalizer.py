"""Meal photo normalization.

Uploaded photos are shrunk so the longer edge is at most ``max_dimension``
pixels and re-encoded as JPEG. The result is stored inline in the meal
document and sent to the vision model, so it has to stay small.
"""

import base64
import binascii
import io
import logging
import math
from dataclasses import dataclass

from PIL import Image, ImageOps, UnidentifiedImageError

from nutrilog_api.core.exceptions import DecodeError

logger = logging.getLogger(__name__)

MAX_IMAGE_DIMENSION = 800
JPEG_QUALITY = 0.7

DATA_URL_PREFIX = "data:image/jpeg;base64,"


@dataclass(frozen=True)
class NormalizedImage:
    """Re-encoded photo plus its final pixel size."""

    data_url: str
    width: int
    height: int

    @property
    def jpeg_bytes(self) -> bytes:
        return base64.b64decode(self.data_url[len(DATA_URL_PREFIX):])


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def target_size(width: int, height: int, max_dimension: int = MAX_IMAGE_DIMENSION) -> tuple[int, int]:
    """
    Output size for an image of ``width`` x ``height``.

    The longer edge is clamped to ``max_dimension`` and the other edge
    scaled to keep the aspect ratio. Images already inside the bound keep
    their size.
    """
    if width > height:
        if width > max_dimension:
            height = _round_half_up(height * max_dimension / width)
            width = max_dimension
    elif height > max_dimension:
        width = _round_half_up(width * max_dimension / height)
        height = max_dimension
    return max(width, 1), max(height, 1)


def decode_data_url(data_url: str) -> bytes:
    """
    Raw bytes of a ``data:<mime>;base64,<payload>`` string.

    Raises:
        DecodeError: If the string is not a base64 data URL
    """
    header, sep, payload = data_url.partition(",")
    if not sep or not header.startswith("data:") or not header.endswith(";base64"):
        raise DecodeError("Image must be a base64 data URL")
    try:
        return base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise DecodeError("Image data URL has an invalid base64 payload") from e


def normalize_image(
    data: bytes,
    max_dimension: int = MAX_IMAGE_DIMENSION,
    quality: float = JPEG_QUALITY,
) -> NormalizedImage:
    """
    Downsample and recompress an uploaded photo.

    Args:
        data: Raw bytes of any format Pillow can read
        max_dimension: Bound on the longer edge in pixels
        quality: Lossy quality in ``(0, 1]``

    Returns:
        NormalizedImage with a JPEG data URL

    Raises:
        DecodeError: If the bytes are not a readable image
    """
    try:
        with Image.open(io.BytesIO(data)) as img:
            img.load()
            # Phone photos carry their rotation in EXIF
            img = ImageOps.exif_transpose(img)
            if img.mode != "RGB":
                img = _flatten(img)

            width, height = target_size(img.width, img.height, max_dimension)
            if (width, height) != img.size:
                img = img.resize((width, height), Image.Resampling.LANCZOS)

            buffer = io.BytesIO()
            img.save(buffer, format="JPEG", quality=_round_half_up(quality * 100))
    except (UnidentifiedImageError, OSError, Image.DecompressionBombError) as e:
        logger.warning(f"Rejected upload that is not a decodable image: {e}")
        raise DecodeError(details={"reason": str(e)}) from e

    encoded = base64.b64encode(buffer.getvalue()).decode("ascii")
    logger.debug(f"Normalized image to {width}x{height}, {buffer.tell()} bytes")
    return NormalizedImage(
        data_url=DATA_URL_PREFIX + encoded,
        width=width,
        height=height,
    )


def ensure_bounded(
    data_url: str,
    max_dimension: int = MAX_IMAGE_DIMENSION,
    quality: float = JPEG_QUALITY,
) -> str:
    """
    Return ``data_url`` unchanged if it is already a bounded JPEG.

    Anything else (oversized, another format) goes through
    :func:`normalize_image`, so stored images always respect the bound.

    Raises:
        DecodeError: If the data URL does not hold a readable image
    """
    data = decode_data_url(data_url)
    try:
        with Image.open(io.BytesIO(data)) as img:
            fmt, size = img.format, img.size
    except (UnidentifiedImageError, OSError, Image.DecompressionBombError) as e:
        raise DecodeError(details={"reason": str(e)}) from e

    if data_url.startswith(DATA_URL_PREFIX) and fmt == "JPEG" and max(size) <= max_dimension:
        return data_url
    return normalize_image(data, max_dimension, quality).data_url


def _flatten(img: Image.Image) -> Image.Image:
    """Convert to RGB, compositing any transparency onto white."""
    if img.mode in ("RGBA", "LA") or (img.mode == "P" and "transparency" in img.info):
        rgba = img.convert("RGBA")
        background = Image.new("RGB", rgba.size, (255, 255, 255))
        background.paste(rgba, mask=rgba.getchannel("A"))
        return background
    return img.convert("RGB")
