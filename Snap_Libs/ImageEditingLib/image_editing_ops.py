"""
Core image editing operations for Snapshot.

This module provides the low-level Pillow and NumPy operations that a
filter transform is built from, plus decoding and encoding of the byte
payloads that records store.

Functions:
    decode_image: Decode an encoded image payload into an RGB image
    encode_image: Encode an image into a byte payload
    resize_to_height: Scale an image to a target height, keeping aspect ratio
    apply_gaussian_blur: Gaussian blur with a pixel radius
    adjust_brightness: Brightness multiplier
    adjust_contrast: Contrast multiplier
    adjust_saturation: Saturation multiplier
    apply_warmth: Shift the red/blue balance
    apply_sepia: Blend towards a sepia tone
    apply_vignette: Darken the corners with a radial falloff
"""

from io import BytesIO
from typing import Any

import numpy as np
from PIL import Image, ImageEnhance, ImageFilter

from Snap_Libs.constants import (
    IMAGE_FORMAT,
    IMAGE_MODE,
    JPEG_QUALITY,
    MAX_BLUR_RADIUS,
    SEPIA_MATRIX,
    WARMTH_SHIFT_LEVELS,
)


def _require_image(image: Any) -> None:
    if not hasattr(image, "convert") or not hasattr(image, "size"):
        raise TypeError(f"Expected PIL Image, got {type(image)}")


def _to_array(image: Any) -> np.ndarray:
    return np.asarray(image.convert(IMAGE_MODE), dtype=np.float32)


def _from_array(pixels: np.ndarray) -> Any:
    return Image.fromarray(np.clip(pixels, 0, 255).astype(np.uint8))


def decode_image(payload: bytes) -> Any:
    """
    Decode an encoded image payload.

    Args:
        payload: Encoded image bytes (any format Pillow can read)

    Returns:
        A fully loaded RGB PIL Image

    Raises:
        TypeError: If payload is not bytes
        OSError: If Pillow cannot identify or read the payload
    """
    if not isinstance(payload, (bytes, bytearray)):
        raise TypeError(f"Expected bytes, got {type(payload)}")

    with Image.open(BytesIO(payload)) as image:
        image.load()
        return image.convert(IMAGE_MODE)


def encode_image(image: Any, image_format: str = IMAGE_FORMAT) -> bytes:
    """
    Encode an image into a byte payload.

    JPEG has no alpha channel, so images are flattened to RGB first.

    Args:
        image: PIL Image to encode
        image_format: Pillow format name (default: JPEG)

    Returns:
        The encoded bytes
    """
    _require_image(image)

    save_format = image_format.upper()
    if save_format == "JPG":
        save_format = "JPEG"

    save_kwargs = {}
    if save_format == "JPEG":
        image = image.convert(IMAGE_MODE)
        save_kwargs["quality"] = JPEG_QUALITY

    buffer = BytesIO()
    image.save(buffer, format=save_format, **save_kwargs)
    return buffer.getvalue()


def resize_to_height(image: Any, height: int) -> Any:
    """
    Scale an image so that its height matches the target.

    The width follows the source aspect ratio and is never below one pixel.

    Raises:
        ValueError: If height is not positive
    """
    _require_image(image)

    if height <= 0:
        raise ValueError(f"height must be > 0, got {height}")

    source_width, source_height = image.size
    if source_height == height:
        return image.copy()

    width = max(1, round(source_width * height / source_height))
    return image.resize((width, height), Image.Resampling.LANCZOS)


def apply_gaussian_blur(image: Any, radius: float) -> Any:
    """
    Apply Gaussian blur to image.

    A radius of zero returns an unmodified copy.

    Raises:
        ValueError: If radius is negative or above the blur limit
    """
    _require_image(image)

    if not (0 <= radius <= MAX_BLUR_RADIUS):
        raise ValueError(f"radius must be 0 <= r <= {MAX_BLUR_RADIUS}, got {radius}")

    if radius == 0:
        return image.copy()

    return image.filter(ImageFilter.GaussianBlur(radius=radius))


def adjust_brightness(image: Any, factor: float) -> Any:
    _require_image(image)
    return ImageEnhance.Brightness(image).enhance(factor)


def adjust_contrast(image: Any, factor: float) -> Any:
    _require_image(image)
    return ImageEnhance.Contrast(image).enhance(factor)


def adjust_saturation(image: Any, factor: float) -> Any:
    _require_image(image)
    return ImageEnhance.Color(image).enhance(factor)


def apply_warmth(image: Any, amount: float) -> Any:
    """
    Shift the red/blue balance of an image.

    Args:
        image: PIL Image
        amount: -1.0 (cool) to 1.0 (warm); 0 leaves the image unchanged

    Returns:
        New RGB PIL Image
    """
    _require_image(image)

    pixels = _to_array(image)
    shift = WARMTH_SHIFT_LEVELS * amount
    pixels[..., 0] += shift
    pixels[..., 2] -= shift
    return _from_array(pixels)


def apply_sepia(image: Any, amount: float) -> Any:
    """
    Blend an image towards its sepia-toned version.

    Args:
        image: PIL Image
        amount: 0.0 (untouched) to 1.0 (full sepia)

    Returns:
        New RGB PIL Image
    """
    _require_image(image)

    pixels = _to_array(image)
    toned = pixels @ np.asarray(SEPIA_MATRIX, dtype=np.float32).T
    blended = pixels * (1.0 - amount) + toned * amount
    return _from_array(blended)


def apply_vignette(image: Any, strength: float) -> Any:
    """
    Darken an image towards its corners.

    The falloff is radial from the image center: the center keeps full
    brightness and the corners are scaled by ``1 - strength``.

    Args:
        image: PIL Image
        strength: 0.0 (no vignette) to 1.0 (black corners)

    Returns:
        New RGB PIL Image
    """
    _require_image(image)

    pixels = _to_array(image)
    height, width = pixels.shape[:2]

    ys = np.linspace(-1.0, 1.0, height, dtype=np.float32)[:, None]
    xs = np.linspace(-1.0, 1.0, width, dtype=np.float32)[None, :]
    distance = np.sqrt(xs ** 2 + ys ** 2) / np.sqrt(2.0)

    falloff = 1.0 - strength * distance ** 2
    return _from_array(pixels * falloff[..., None])
