"""
Filter transform for Snapshot.

A filter transform describes the edits applied to an original image to
produce its edited version and thumbnail. It is an immutable value: editing
a record means assigning a new transform, which invalidates the record's
derived images.

Classes:
    FilterTransform: Edit parameters plus their persisted form
"""

from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, Optional

from Snap_Libs.constants import (
    MAX_BLUR_RADIUS,
    MAX_ENHANCE_FACTOR,
    MAX_WARMTH,
    MIN_ENHANCE_FACTOR,
    MIN_WARMTH,
)
from Snap_Libs.ImageEditingLib.image_editing_ops import (
    adjust_brightness,
    adjust_contrast,
    adjust_saturation,
    apply_gaussian_blur,
    apply_sepia,
    apply_vignette,
    apply_warmth,
    resize_to_height,
)


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


@dataclass(frozen=True)
class FilterTransform:
    """Edit parameters for an image.

    Attributes:
        brightness: Brightness multiplier (1.0 = unchanged)
        contrast: Contrast multiplier (1.0 = unchanged)
        saturation: Saturation multiplier (1.0 = unchanged, 0.0 = greyscale)
        warmth: Red/blue balance, -1.0 (cool) to 1.0 (warm)
        sepia: Sepia blend, 0.0 to 1.0
        vignette: Corner darkening, 0.0 to 1.0
        blur: Gaussian blur radius in pixels at full size
    """
    brightness: float = 1.0
    contrast: float = 1.0
    saturation: float = 1.0
    warmth: float = 0.0
    sepia: float = 0.0
    vignette: float = 0.0
    blur: float = 0.0

    def __post_init__(self) -> None:
        for factor_name in ("brightness", "contrast", "saturation"):
            value = float(getattr(self, factor_name))
            object.__setattr__(
                self, factor_name, _clamp(value, MIN_ENHANCE_FACTOR, MAX_ENHANCE_FACTOR)
            )
        object.__setattr__(self, "warmth", _clamp(float(self.warmth), MIN_WARMTH, MAX_WARMTH))
        object.__setattr__(self, "sepia", _clamp(float(self.sepia), 0.0, 1.0))
        object.__setattr__(self, "vignette", _clamp(float(self.vignette), 0.0, 1.0))
        object.__setattr__(self, "blur", _clamp(float(self.blur), 0.0, MAX_BLUR_RADIUS))

    def to_dict(self) -> Dict[str, float]:
        """Convert to the persisted plain-mapping form."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FilterTransform":
        """
        Create from the persisted plain-mapping form.

        Unknown keys are ignored and values that are not numbers fall back
        to the field default, so records written by other versions load.
        """
        known = {field.name for field in fields(cls)}
        normalized: Dict[str, float] = {}
        for key, value in data.items():
            if key not in known or isinstance(value, bool):
                continue
            try:
                normalized[key] = float(value)
            except (TypeError, ValueError):
                continue
        return cls(**normalized)

    def is_identity(self) -> bool:
        """True when applying this transform leaves an image unchanged."""
        return self == FilterTransform()

    def apply(self, image: Any, height: Optional[int] = None) -> Any:
        """
        Render an image through this transform.

        When a height is given the image is scaled first and the blur radius
        is scaled with it, so a thumbnail looks like a small edited image.

        Args:
            image: Source PIL Image
            height: Optional target height in pixels

        Returns:
            New RGB PIL Image
        """
        result = image
        blur = self.blur
        if height is not None:
            scale = height / image.size[1]
            result = resize_to_height(result, height)
            blur = min(MAX_BLUR_RADIUS, blur * scale)

        if blur > 0:
            result = apply_gaussian_blur(result, blur)
        if self.brightness != 1.0:
            result = adjust_brightness(result, self.brightness)
        if self.contrast != 1.0:
            result = adjust_contrast(result, self.contrast)
        if self.saturation != 1.0:
            result = adjust_saturation(result, self.saturation)
        if self.warmth != 0.0:
            result = apply_warmth(result, self.warmth)
        if self.sepia > 0:
            result = apply_sepia(result, self.sepia)
        if self.vignette > 0:
            result = apply_vignette(result, self.vignette)

        return result.copy() if result is image else result
