"""Codec engines: external-tool adapter, color conversion, parameter parsing."""

from .errors import (
    CustomCodecError,
    ConfigurationError,
    ColorConversionError,
    CodecIOError,
    ExternalToolError,
)
from .color_space import parse_description, convert_pixels, convert_image, to_linear, from_linear

__all__ = [
    'CustomCodecError',
    'ConfigurationError',
    'ColorConversionError',
    'CodecIOError',
    'ExternalToolError',
    'parse_description',
    'convert_pixels',
    'convert_image',
    'to_linear',
    'from_linear',
]
