"""Data models for codec configuration and images."""

from .codec_options import CustomCodecOptions, add_command_line_options
from .color_encoding import ColorEncoding
from .image_bundle import ColorHints, ImageBundle, ImageMetadata
from .invocation_template import CodecInvocationTemplate, ParserStage

__all__ = [
    'CustomCodecOptions',
    'add_command_line_options',
    'ColorEncoding',
    'ColorHints',
    'ImageBundle',
    'ImageMetadata',
    'CodecInvocationTemplate',
    'ParserStage',
]
