"""Image I/O using OpenCV."""

import logging
from concurrent.futures import Executor
from functools import partial
from pathlib import Path
from typing import Callable, Optional

import cv2
import numpy as np

from engines.color_space import convert_pixels, parse_description
from engines.errors import CodecIOError, ColorConversionError
from models.color_encoding import ColorEncoding
from models.image_bundle import ColorHints, ImageBundle, ImageMetadata
from utils.constants import HIGH_BIT_DEPTH_EXTENSIONS

logger = logging.getLogger(__name__)

BAND_ROWS = 64


def _map_bands(func: Callable[[np.ndarray], np.ndarray], array: np.ndarray,
               pool: Optional[Executor]) -> np.ndarray:
    """Apply func to horizontal bands of array, in parallel when a pool is given."""
    if pool is None or array.shape[0] <= BAND_ROWS:
        return func(array)
    bands = [array[i:i + BAND_ROWS] for i in range(0, array.shape[0], BAND_ROWS)]
    return np.concatenate(list(pool.map(func, bands)), axis=0)


def _normalize(band: np.ndarray, maxval: float) -> np.ndarray:
    return band.astype(np.float32) / maxval


def _to_opencv_order(data: np.ndarray) -> np.ndarray:
    channels = data.shape[2]
    if channels == 1:
        return data[:, :, 0]
    if channels == 3:
        return cv2.cvtColor(data, cv2.COLOR_RGB2BGR)
    return cv2.cvtColor(data, cv2.COLOR_RGBA2BGRA)


def _from_opencv_order(data: np.ndarray) -> np.ndarray:
    if data.ndim == 2:
        return data[:, :, np.newaxis]
    if data.shape[2] == 3:
        return cv2.cvtColor(data, cv2.COLOR_BGR2RGB)
    if data.shape[2] == 4:
        return cv2.cvtColor(data, cv2.COLOR_BGRA2RGBA)
    raise CodecIOError(f"Unsupported channel count {data.shape[2]}")


def encode_to_file(
    image: ImageBundle,
    color_encoding: ColorEncoding,
    bits_per_sample: int,
    path: str,
    pool: Optional[Executor] = None,
) -> None:
    """Write image to path in color_encoding; format is chosen by the file extension."""
    src = image.metadata.color_encoding
    if color_encoding.is_gray and image.has_alpha:
        raise ColorConversionError(
            f"Cannot stage an image with alpha as {color_encoding.description}"
        )
    pixels = _map_bands(partial(convert_pixels, src=src, dst=color_encoding), image.pixels, pool)

    extension = Path(path).suffix.lstrip('.').lower()
    if bits_per_sample > 8 and extension in HIGH_BIT_DEPTH_EXTENSIONS:
        dtype, maxval = np.uint16, 65535.0
    else:
        dtype, maxval = np.uint8, 255.0
    data = np.round(np.clip(pixels, 0.0, 1.0) * maxval).astype(dtype)

    try:
        ok = cv2.imwrite(str(path), _to_opencv_order(data))
    except cv2.error as e:
        raise CodecIOError(f"Could not encode {path}: {e}") from e
    if not ok:
        raise CodecIOError(f"Could not encode {path}")
    logger.debug("Encoded %dx%d %s image to %s", image.xsize, image.ysize,
                 color_encoding.description, path)


def _apply_hints(pixels: np.ndarray, encoding: ColorEncoding) -> np.ndarray:
    color_channels = pixels.shape[2] if pixels.shape[2] in (1, 3) else 3
    if encoding.is_gray and color_channels == 3:
        if pixels.shape[2] == 4 or not np.array_equal(pixels[:, :, 0], pixels[:, :, 1]) \
                or not np.array_equal(pixels[:, :, 0], pixels[:, :, 2]):
            raise ColorConversionError("Gray color_space hint for a color image")
        return pixels[:, :, :1]
    if not encoding.is_gray and color_channels == 1:
        return np.repeat(pixels, 3, axis=2)
    return pixels


def load_from_file(
    path: str,
    hints: Optional[ColorHints] = None,
    pool: Optional[Executor] = None,
) -> ImageBundle:
    """Read path; the 'color_space' hint says which encoding the samples are in (default sRGB)."""
    data = cv2.imread(str(path), cv2.IMREAD_UNCHANGED)
    if data is None:
        raise CodecIOError(f"Could not load image from {path}")

    if data.dtype == np.uint8:
        bits, maxval = 8, 255.0
    elif data.dtype == np.uint16:
        bits, maxval = 16, 65535.0
    else:
        raise CodecIOError(f"Unsupported sample type {data.dtype} in {path}")

    pixels = _from_opencv_order(data)
    pixels = _map_bands(partial(_normalize, maxval=maxval), pixels, pool)

    hint = hints.get("color_space") if hints is not None else None
    if hint:
        encoding = parse_description(hint)
        pixels = _apply_hints(pixels, encoding)
    else:
        encoding = ColorEncoding.srgb(is_gray=pixels.shape[2] == 1)

    return ImageBundle(pixels, ImageMetadata(bits_per_sample=bits, color_encoding=encoding))


def load_image(path: str) -> ImageBundle:
    """Load image as sRGB."""
    return load_from_file(path)


def save_image(image: ImageBundle, path: str) -> None:
    """Save image in its own encoding."""
    encode_to_file(image, image.metadata.color_encoding, image.metadata.bits_per_sample, path)
