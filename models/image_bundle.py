"""In-memory image handed between the benchmark and codecs."""

from dataclasses import dataclass, field, replace
from typing import Dict, Iterator, Optional, Tuple

import numpy as np

from models.color_encoding import ColorEncoding
from utils.constants import DEFAULT_INTENSITY_TARGET


@dataclass
class ImageMetadata:
    """Per-image metadata that codecs may or may not preserve."""

    bits_per_sample: int = 8
    intensity_target: float = DEFAULT_INTENSITY_TARGET
    color_encoding: ColorEncoding = field(default_factory=ColorEncoding)

    def __post_init__(self):
        if not (1 <= self.bits_per_sample <= 16):
            raise ValueError(f"bits_per_sample must be 1-16, got {self.bits_per_sample}")
        if self.intensity_target <= 0:
            raise ValueError(f"intensity_target must be > 0, got {self.intensity_target}")


@dataclass
class ImageBundle:
    """Float pixels in [0, 1], shape (H, W, C), plus metadata.

    C is 1 for gray, 3 for RGB and 4 for RGB with alpha.
    """

    pixels: np.ndarray
    metadata: ImageMetadata = field(default_factory=ImageMetadata)

    def __post_init__(self):
        pixels = np.asarray(self.pixels, dtype=np.float32)
        if pixels.ndim == 2:
            pixels = pixels[:, :, np.newaxis]
        if pixels.ndim != 3 or pixels.shape[2] not in (1, 3, 4):
            raise ValueError(f"Expected (H, W, C) with C in 1, 3, 4, got shape {pixels.shape}")
        expected = self.metadata.color_encoding.num_channels
        if pixels.shape[2] not in (expected, expected + 1):
            raise ValueError(
                f"{pixels.shape[2]} channels do not match encoding "
                f"{self.metadata.color_encoding.description}"
            )
        self.pixels = pixels

    @classmethod
    def from_uint8(cls, image: np.ndarray, **metadata) -> "ImageBundle":
        if 'color_encoding' not in metadata:
            is_gray = image.ndim == 2 or image.shape[2] == 1
            metadata['color_encoding'] = ColorEncoding.srgb(is_gray=is_gray)
        return cls(image.astype(np.float32) / 255.0, ImageMetadata(**metadata))

    def to_uint8(self) -> np.ndarray:
        return np.round(np.clip(self.pixels, 0.0, 1.0) * 255.0).astype(np.uint8)

    @property
    def xsize(self) -> int:
        return self.pixels.shape[1]

    @property
    def ysize(self) -> int:
        return self.pixels.shape[0]

    @property
    def has_alpha(self) -> bool:
        return self.pixels.shape[2] > self.metadata.color_encoding.num_channels

    def copy(self) -> "ImageBundle":
        return ImageBundle(self.pixels.copy(), replace(self.metadata))


class ColorHints:
    """Key/value hints telling a loader how to interpret a file."""

    def __init__(self, hints: Optional[Dict[str, str]] = None):
        self._hints: Dict[str, str] = dict(hints or {})

    def add(self, key: str, value: str) -> None:
        self._hints[key] = value

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self._hints.get(key, default)

    def __iter__(self) -> Iterator[Tuple[str, str]]:
        return iter(self._hints.items())

    def __len__(self) -> int:
        return len(self._hints)

    def __repr__(self) -> str:
        return f"ColorHints({self._hints!r})"
