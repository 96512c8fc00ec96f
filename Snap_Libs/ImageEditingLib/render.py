"""
Rendering of edited images for Snapshot.

Records hold encoded byte payloads; rendering decodes the original, runs it
through a filter transform at an optional target height, and encodes the
result again.

Functions:
    render_filtered: Render synchronously
    render_filtered_async: Render in a worker thread
"""

import asyncio
import logging
from typing import Awaitable, Callable, Optional

from PIL import Image

from Snap_Libs.constants import IMAGE_FORMAT
from Snap_Libs.errors import RenderError
from Snap_Libs.ImageEditingLib.filter_transform import FilterTransform
from Snap_Libs.ImageEditingLib.image_editing_ops import decode_image, encode_image

logger = logging.getLogger(__name__)

# Type alias for an async renderer: (source, transform, height) -> encoded image
Renderer = Callable[[bytes, FilterTransform, Optional[int]], Awaitable[bytes]]


def render_filtered(
    source: bytes,
    transform: FilterTransform,
    height: Optional[int] = None,
    image_format: str = IMAGE_FORMAT,
) -> bytes:
    """
    Render an encoded source image through a filter transform.

    Args:
        source: Encoded original image
        transform: Edits to apply
        height: Optional target height; None keeps the source size
        image_format: Output format (default: JPEG)

    Returns:
        The encoded rendered image

    Raises:
        TypeError: If transform is not a FilterTransform
        RenderError: If decoding, filtering, or encoding fails
    """
    if not isinstance(transform, FilterTransform):
        raise TypeError(f"Expected FilterTransform, got {type(transform)}")

    try:
        image = decode_image(source)
        rendered = transform.apply(image, height)
        payload = encode_image(rendered, image_format)
    except (OSError, ValueError, TypeError, Image.DecompressionBombError) as e:
        raise RenderError(f"Could not render image: {e}") from e

    logger.debug(f"Rendered {rendered.size[0]}x{rendered.size[1]} image ({len(payload)} bytes)")
    return payload


async def render_filtered_async(
    source: bytes,
    transform: FilterTransform,
    height: Optional[int] = None,
) -> bytes:
    """Run :func:`render_filtered` without blocking the event loop."""
    return await asyncio.to_thread(render_filtered, source, transform, height)
