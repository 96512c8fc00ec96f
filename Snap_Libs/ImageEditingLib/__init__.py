"""
ImageEditingLib - Filter transforms and rendering

This module provides the filter transform applied to a record's original
image and the renderer that produces edited images and thumbnails.
"""

from Snap_Libs.ImageEditingLib.filter_transform import FilterTransform
from Snap_Libs.ImageEditingLib.image_editing_ops import (
    decode_image,
    encode_image,
    resize_to_height,
)
from Snap_Libs.ImageEditingLib.render import (
    Renderer,
    render_filtered,
    render_filtered_async,
)

__all__ = [
    "FilterTransform",
    "decode_image",
    "encode_image",
    "resize_to_height",
    "Renderer",
    "render_filtered",
    "render_filtered_async",
]
