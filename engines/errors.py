"""Exceptions raised by codec adapters."""


class CustomCodecError(RuntimeError):
    ...


class ConfigurationError(CustomCodecError):
    """Codec parameters or options are missing or invalid."""


class ColorConversionError(ConfigurationError):
    """Colorspace description cannot be parsed or converted to."""


class CodecIOError(CustomCodecError):
    """Reading or writing a scratch file failed."""


class ExternalToolError(CustomCodecError):
    """External command could not be launched or exited non-zero."""
