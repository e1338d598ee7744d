"""Color encoding descriptions and pixel conversion between encodings."""

import numpy as np

from engines.errors import ColorConversionError
from models.color_encoding import ColorEncoding
from models.image_bundle import ImageBundle, ImageMetadata
from utils.constants import (
    DCI_GAMMA,
    RENDERING_INTENTS,
    RGB_TO_XYZ,
    TRANSFER_FUNCTIONS,
    WHITE_POINTS,
)

_ALIASES = {
    "srgb": "RGB_D65_SRG_Rel_SRG",
    "linearsrgb": "RGB_D65_SRG_Rel_Lin",
    "displayp3": "RGB_D65_DCI_Per_SRG",
    "rec2020": "RGB_D65_202_Rel_709",
    "gray": "Gra_D65_Rel_SRG",
    "grey": "Gra_D65_Rel_SRG",
}


def _parse_transfer(token: str):
    if token in TRANSFER_FUNCTIONS:
        return token, None
    if token.startswith('g'):
        try:
            gamma = float(token[1:])
        except ValueError:
            raise ColorConversionError(f"Invalid gamma {token!r}") from None
        if not (0.0 < gamma <= 1.0):
            raise ColorConversionError(f"Gamma must be in (0, 1], got {gamma}")
        return "gamma", gamma
    raise ColorConversionError(f"Unsupported transfer function {token!r}")


def parse_description(description: str) -> ColorEncoding:
    """Parse e.g. 'RGB_D65_SRG_Rel_SRG', 'Gra_D65_Rel_Lin' or an alias like 'sRGB'."""
    text = description.strip()
    text = _ALIASES.get(text.lower(), text)
    fields = text.split('_')

    if fields[0] == "Gra" and len(fields) == 4:
        color_space, white_point, intent, transfer = fields
        primaries = "SRG"
    elif fields[0] == "RGB" and len(fields) == 5:
        color_space, white_point, primaries, intent, transfer = fields
    else:
        raise ColorConversionError(f"Malformed color description {description!r}")

    if white_point not in WHITE_POINTS:
        raise ColorConversionError(f"Unsupported white point {white_point!r}")
    if primaries not in RGB_TO_XYZ:
        raise ColorConversionError(f"Unsupported primaries {primaries!r}")
    if intent not in RENDERING_INTENTS:
        raise ColorConversionError(f"Unsupported rendering intent {intent!r}")
    transfer_function, gamma = _parse_transfer(transfer)

    return ColorEncoding(
        color_space=color_space,
        white_point=white_point,
        primaries=primaries,
        rendering_intent=intent,
        transfer_function=transfer_function,
        gamma=gamma,
    )


def _validate(encoding: ColorEncoding) -> None:
    # Encodings built by hand bypass parse_description.
    parse_description(encoding.description)


def to_linear(values: np.ndarray, encoding: ColorEncoding) -> np.ndarray:
    """Decode transfer function."""
    v = np.clip(values.astype(np.float64), 0.0, 1.0)
    tf = encoding.transfer_function
    if tf == "Lin":
        return v
    if tf == "SRG":
        return np.where(v <= 0.04045, v / 12.92, ((v + 0.055) / 1.055) ** 2.4)
    if tf == "709":
        return np.where(v < 0.081, v / 4.5, ((v + 0.099) / 1.099) ** (1.0 / 0.45))
    if tf == "DCI":
        return v ** DCI_GAMMA
    if tf == "gamma":
        return v ** (1.0 / encoding.gamma)
    raise ColorConversionError(f"Unsupported transfer function {tf!r}")


def from_linear(values: np.ndarray, encoding: ColorEncoding) -> np.ndarray:
    """Encode transfer function."""
    v = np.clip(values.astype(np.float64), 0.0, 1.0)
    tf = encoding.transfer_function
    if tf == "Lin":
        return v
    if tf == "SRG":
        return np.where(v <= 0.0031308, v * 12.92, 1.055 * v ** (1.0 / 2.4) - 0.055)
    if tf == "709":
        return np.where(v < 0.018, v * 4.5, 1.099 * v ** 0.45 - 0.099)
    if tf == "DCI":
        return v ** (1.0 / DCI_GAMMA)
    if tf == "gamma":
        return v ** encoding.gamma
    raise ColorConversionError(f"Unsupported transfer function {tf!r}")


def convert_pixels(pixels: np.ndarray, src: ColorEncoding, dst: ColorEncoding) -> np.ndarray:
    """Convert (H, W, C) pixels from src to dst encoding; an alpha channel passes through."""
    _validate(src)
    _validate(dst)
    if pixels.ndim != 3 or pixels.shape[2] < src.num_channels:
        raise ColorConversionError(
            f"Pixels of shape {pixels.shape} do not match {src.description}"
        )
    if src == dst:
        return pixels.astype(np.float32, copy=True)

    color = pixels[:, :, :src.num_channels]
    alpha = pixels[:, :, src.num_channels:]
    linear = to_linear(color, src)

    if src.is_gray and not dst.is_gray:
        linear = np.repeat(linear, 3, axis=2)
    elif not src.is_gray and dst.is_gray:
        luminance = RGB_TO_XYZ[src.primaries][1]
        linear = (linear @ luminance)[:, :, np.newaxis]
    elif not src.is_gray and src.primaries != dst.primaries:
        matrix = np.linalg.inv(RGB_TO_XYZ[dst.primaries]) @ RGB_TO_XYZ[src.primaries]
        linear = linear @ matrix.T

    encoded = from_linear(np.clip(linear, 0.0, 1.0), dst)
    return np.concatenate([encoded, alpha], axis=2).astype(np.float32)


def convert_image(image: ImageBundle, encoding: ColorEncoding) -> ImageBundle:
    """Return a copy of image in another encoding; other metadata is kept."""
    pixels = convert_pixels(image.pixels, image.metadata.color_encoding, encoding)
    metadata = ImageMetadata(
        bits_per_sample=image.metadata.bits_per_sample,
        intensity_target=image.metadata.intensity_target,
        color_encoding=encoding,
    )
    return ImageBundle(pixels, metadata)
