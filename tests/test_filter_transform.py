"""
Unit tests for the FilterTransform value type.

Tests the persisted form, clamping of parameters, and applying a
transform to a Pillow image.
"""

import pytest
from PIL import Image

from Snap_Libs.ImageEditingLib.filter_transform import FilterTransform


class TestPersistedForm:
    """Tests for to_dict / from_dict."""

    def test_to_dict_lists_every_parameter(self):
        """Should list every parameter by name."""
        data = FilterTransform(sepia=0.5).to_dict()

        assert data == {
            "brightness": 1.0,
            "contrast": 1.0,
            "saturation": 1.0,
            "warmth": 0.0,
            "sepia": 0.5,
            "vignette": 0.0,
            "blur": 0.0,
        }

    def test_from_dict_restores_equal_transform(self):
        """Should restore an equal transform."""
        transform = FilterTransform(brightness=1.2, warmth=-0.3, blur=2.0)

        assert FilterTransform.from_dict(transform.to_dict()) == transform

    def test_from_dict_ignores_unknown_keys(self):
        """Should ignore keys that are not parameters."""
        transform = FilterTransform.from_dict({"sepia": 0.25, "hue": 12, "name": "x"})

        assert transform == FilterTransform(sepia=0.25)

    def test_from_dict_skips_non_numbers(self):
        """Should fall back to defaults for unusable values."""
        transform = FilterTransform.from_dict({"brightness": "bright", "contrast": True, "sepia": "0.5"})

        assert transform.brightness == 1.0
        assert transform.contrast == 1.0
        assert transform.sepia == 0.5

    def test_from_empty_dict_is_identity(self):
        """Should give the identity transform for an empty mapping."""
        assert FilterTransform.from_dict({}).is_identity()


class TestClamping:
    """Parameters are clamped into their valid ranges on construction."""

    def test_clamps_ranges(self):
        """Should clamp every parameter into its range."""
        transform = FilterTransform(
            brightness=10, contrast=-1, warmth=3, sepia=2, vignette=-0.5, blur=500,
        )

        assert transform.brightness == 4.0
        assert transform.contrast == 0.0
        assert transform.warmth == 1.0
        assert transform.sepia == 1.0
        assert transform.vignette == 0.0
        assert transform.blur == 100.0

    def test_is_immutable(self):
        """Should reject attribute assignment."""
        transform = FilterTransform()

        with pytest.raises(AttributeError):
            transform.sepia = 1.0


class TestApply:
    """Tests for FilterTransform.apply."""

    def test_identity_returns_equal_copy(self, sample_image):
        """Should return an equal copy for the identity transform."""
        result = FilterTransform().apply(sample_image)

        assert result is not sample_image
        assert result.tobytes() == sample_image.tobytes()

    def test_height_resizes(self, sample_image):
        """Should resize to the requested height."""
        result = FilterTransform(sepia=1.0).apply(sample_image, height=200)

        assert result.size == (267, 200)

    def test_height_without_edits_resizes(self, sample_image):
        """Should resize even without edits."""
        result = FilterTransform().apply(sample_image, height=150)

        assert result.size == (200, 150)

    def test_applies_adjustments(self):
        """Should apply brightness to the pixels."""
        image = Image.new("RGB", (10, 10), (100, 100, 100))

        result = FilterTransform(brightness=0.5).apply(image)

        assert result.getpixel((5, 5)) == (50, 50, 50)

    def test_combined_edits_change_pixels(self, sample_image):
        """Should change pixels when several edits combine."""
        transform = FilterTransform(contrast=1.5, saturation=0.2, warmth=0.4, vignette=0.6, blur=3)

        result = transform.apply(sample_image)

        assert result.size == sample_image.size
        assert result.tobytes() != sample_image.tobytes()
