"""
Tests for rendering encoded images through filter transforms.
"""

import pytest
from PIL import Image

from Snap_Libs.errors import RenderError
from Snap_Libs.ImageEditingLib.filter_transform import FilterTransform
from Snap_Libs.ImageEditingLib.image_editing_ops import decode_image
from Snap_Libs.ImageEditingLib.render import render_filtered, render_filtered_async


class TestRenderFiltered:
    """Tests for render_filtered function."""

    def test_full_size_render(self, sample_jpeg):
        """Test a render without height keeps the source size."""
        payload = render_filtered(sample_jpeg, FilterTransform(sepia=1.0))

        assert payload[:2] == b"\xff\xd8"
        assert decode_image(payload).size == (400, 300)

    def test_thumbnail_render(self, sample_png):
        """Test a render with height scales to that height."""
        payload = render_filtered(sample_png, FilterTransform(), height=200)

        assert decode_image(payload).size == (267, 200)

    def test_png_output(self, sample_jpeg):
        """Test the output format can be chosen."""
        payload = render_filtered(sample_jpeg, FilterTransform(), image_format="PNG")

        assert payload.startswith(b"\x89PNG")

    def test_is_deterministic(self, sample_jpeg):
        """Test the same input renders to the same bytes."""
        transform = FilterTransform(warmth=0.5, vignette=0.3)

        assert render_filtered(sample_jpeg, transform) == render_filtered(sample_jpeg, transform)

    def test_undecodable_source_raises_render_error(self):
        """Test an undecodable source raises RenderError."""
        with pytest.raises(RenderError) as excinfo:
            render_filtered(b"not an image", FilterTransform())

        assert isinstance(excinfo.value.__cause__, OSError)

    def test_oversized_source_raises_render_error(self, sample_jpeg, monkeypatch):
        """Test an image over Pillow's pixel limit becomes a RenderError."""
        monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 1000)

        with pytest.raises(RenderError) as excinfo:
            render_filtered(sample_jpeg, FilterTransform())

        assert isinstance(excinfo.value.__cause__, Image.DecompressionBombError)

    def test_rejects_non_transform(self, sample_jpeg):
        """Test a non-FilterTransform raises TypeError."""
        with pytest.raises(TypeError):
            render_filtered(sample_jpeg, {"sepia": 1.0})


class TestRenderFilteredAsync:
    """Tests for render_filtered_async function."""

    async def test_matches_sync_render(self, sample_jpeg):
        """Test the async render matches the sync one."""
        transform = FilterTransform(brightness=1.3)

        result = await render_filtered_async(sample_jpeg, transform, 200)

        assert result == render_filtered(sample_jpeg, transform, 200)

    async def test_propagates_render_error(self):
        """Test render errors propagate from the worker thread."""
        with pytest.raises(RenderError):
            await render_filtered_async(b"garbage", FilterTransform())
