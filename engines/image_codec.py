"""Base class for codecs driven by the benchmark."""

from concurrent.futures import Executor
from typing import Iterable, Optional

from engines.errors import ConfigurationError
from models.image_bundle import ImageBundle
from utils.metrics import SpeedStats

# Parameter prefix -> attribute holding its value
GENERIC_PARAMS = {
    'q': 'quality_target',
    'd': 'distance_target',
    'r': 'bitrate_target',
}


class ImageCodec:
    """Codec configured from ':'-separated parameters.

    Subclasses implement compress/decompress and may claim parameters by
    overriding parse_param, falling back to the generic knobs below.
    """

    def __init__(self):
        self._description = ""
        self.quality_target: Optional[float] = None
        self.distance_target: Optional[float] = None
        self.bitrate_target: Optional[float] = None

    @property
    def description(self) -> str:
        return self._description

    def parse_param(self, param: str) -> None:
        """Generic knobs: q<quality>, d<distance>, r<bits per pixel>."""
        attribute = GENERIC_PARAMS.get(param[:1])
        if attribute is None:
            raise ConfigurationError(f"Unrecognized codec parameter {param!r}")
        try:
            value = float(param[1:])
        except ValueError:
            raise ConfigurationError(f"Invalid value in codec parameter {param!r}") from None
        setattr(self, attribute, value)
        self._description = f"{self._description}:{param}" if self._description else param

    def parse_parameters(self, params: Iterable[str]) -> None:
        for param in params:
            self.parse_param(param)

    def compress(self, filename: str, image: ImageBundle, pool: Optional[Executor] = None,
                 speed_stats: Optional[SpeedStats] = None) -> bytes:
        raise NotImplementedError

    def decompress(self, filename: str, compressed: bytes, pool: Optional[Executor] = None,
                   speed_stats: Optional[SpeedStats] = None) -> ImageBundle:
        raise NotImplementedError
