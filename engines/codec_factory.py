"""Build codecs from benchmark method strings like 'custom:jpg:cjpeg:djpeg:-q:80'."""

from typing import Optional

from engines.command import CommandRunner, run_command
from engines.custom_codec import CustomCodec
from engines.errors import ConfigurationError
from engines.image_codec import ImageCodec
from models.codec_options import CustomCodecOptions


def create_image_codec(method: str, options: Optional[CustomCodecOptions] = None,
                       runner: Optional[CommandRunner] = None) -> ImageCodec:
    name, *params = method.split(':')
    if name == "custom":
        codec = CustomCodec(options or CustomCodecOptions(), runner or run_command)
    else:
        raise ConfigurationError(f"Unknown codec {name!r}")
    codec.parse_parameters(params)
    return codec
