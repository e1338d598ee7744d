"""Synthetic images for codec round trips."""

from typing import Optional

import numpy as np

from models.image_bundle import ImageBundle


def generate_colored_checkerboard(size: int = 256, block_size: int = 32) -> np.ndarray:
    """High-contrast checkerboard, uint8 RGB."""
    idx = np.arange(size) // block_size
    mask = (idx[:, None] + idx[None, :]) % 2 == 1
    img = np.full((size, size, 3), 30, dtype=np.uint8)
    img[mask] = [220, 220, 220]
    return img


def generate_gradient(size: int = 256) -> np.ndarray:
    """Smooth diagonal gradient, uint8 RGB."""
    t = (np.arange(size)[:, None] + np.arange(size)[None, :]) / max(2 * size - 2, 1)
    img = np.stack([40 + t * 180, 60 + t * 140, 120 + t * 100], axis=-1)
    return np.clip(img, 0, 255).astype(np.uint8)


def generate_chroma_stripes(size: int = 256) -> np.ndarray:
    """Saturated vertical color bars, uint8 RGB."""
    colors = np.array([
        [180, 40, 40],
        [40, 160, 40],
        [40, 80, 180],
        [180, 180, 40],
        [180, 40, 180],
        [40, 180, 180],
    ], dtype=np.uint8)
    bar = np.minimum(np.arange(size) * len(colors) // size, len(colors) - 1)
    return np.broadcast_to(colors[bar][None, :, :], (size, size, 3)).copy()


def generate_noise(size: int = 64, seed: int = 0) -> np.ndarray:
    """Uniform random RGB noise, uint8."""
    rng = np.random.default_rng(seed)
    return rng.integers(0, 256, (size, size, 3), dtype=np.uint8)


def generate_demo_image(key: str, size: int = 256, **metadata) -> Optional[ImageBundle]:
    """Synthetic sRGB image by key."""
    generators = {
        "checkerboard": generate_colored_checkerboard,
        "gradient": generate_gradient,
        "chroma_stripes": generate_chroma_stripes,
        "noise": generate_noise,
    }
    if key not in generators:
        return None
    return ImageBundle.from_uint8(generators[key](size), **metadata)
