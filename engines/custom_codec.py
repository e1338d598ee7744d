"""Codec that delegates compression to external command-line tools.

Configured with positional parameters:

    <extension>:<compress command>:<decompress command>[:<extra arg>...]

Compress runs ``compress [extra args...] <staging input> <encoded output>``;
decompress runs ``decompress <encoded input> <staging output>``. Staging
files use the format from ``CustomCodecOptions.extension``. A tool may write
its own elapsed seconds to ``<output stem>.time`` in the working directory;
that value is reported instead of the measured wall-clock time.
"""

import logging
from concurrent.futures import Executor
from functools import partial
from typing import Optional, Sequence

from engines.color_space import parse_description
from engines.command import CommandRunner, run_command
from engines.errors import CodecIOError, ConfigurationError, ExternalToolError
from engines.image_codec import ImageCodec
from engines.param_parser import InvocationTemplateParser
from models.codec_options import CustomCodecOptions
from models.color_encoding import ColorEncoding
from models.image_bundle import ColorHints, ImageBundle
from models.invocation_template import CodecInvocationTemplate
from utils.constants import DEFAULT_INTENSITY_TARGET
from utils.image_io import encode_to_file, load_from_file
from utils.metrics import SpeedStats, report_codec_running_time
from utils.temp_files import TemporaryFile

logger = logging.getLogger(__name__)


def get_base_name(filename: str) -> str:
    """Strip directory and the last extension."""
    name = filename.replace('\\', '/').rsplit('/', 1)[-1]
    dot = name.rfind('.')
    return name[:dot] if dot != -1 else name


def _read_file(path: str) -> bytes:
    try:
        with open(path, "rb") as f:
            data = f.read()
    except OSError as e:
        raise CodecIOError(f"Could not read {path}: {e}") from e
    if not data:
        raise CodecIOError(f"Codec produced no output in {path}")
    return data


def _write_file(data: bytes, path: str) -> None:
    try:
        with open(path, "wb") as f:
            f.write(data)
    except OSError as e:
        raise CodecIOError(f"Could not write {path}: {e}") from e


class CustomCodec(ImageCodec):
    """Runs an external compressor/decompressor pair as a benchmark codec.

    Not safe for concurrent compress/decompress calls on one instance: the
    intensity target and staging encoding saved by compress are used by decompress.
    """

    def __init__(self, options: CustomCodecOptions, runner: CommandRunner = run_command):
        super().__init__()
        self.options = options
        self._runner = runner
        self._parser = InvocationTemplateParser(partial(ImageCodec.parse_param, self))
        self.saved_intensity_target = DEFAULT_INTENSITY_TARGET
        self.saved_color_encoding: Optional[ColorEncoding] = None

    @property
    def template(self) -> CodecInvocationTemplate:
        return self._parser.template

    @property
    def description(self) -> str:
        return self.template.description

    @property
    def is_configured(self) -> bool:
        return self._parser.is_configured

    def parse_param(self, param: str) -> None:
        self._parser.parse_param(param)

    def _require_configured(self) -> None:
        if not self.is_configured:
            raise ConfigurationError(
                "Custom codec needs extension, compress command and decompress command, "
                f"got {self.template.description!r}"
            )

    def _run(self, command: str, args: Sequence[str]) -> None:
        if not self._runner(command, args, self.options.quiet):
            raise ExternalToolError(f"External codec command failed: {command}")

    def compress(self, filename: str, image: ImageBundle, pool: Optional[Executor] = None,
                 speed_stats: Optional[SpeedStats] = None) -> bytes:
        self._require_configured()
        speed_stats = speed_stats if speed_stats is not None else SpeedStats()
        template = self.template
        basename = get_base_name(filename)

        with TemporaryFile(basename, self.options.extension, self.options.temp_dir) as in_filename, \
                TemporaryFile(basename, template.extension, self.options.temp_dir) as encoded_filename:
            self.saved_intensity_target = image.metadata.intensity_target

            bits = image.metadata.bits_per_sample
            c_enc = image.metadata.color_encoding
            if self.options.colorspace:
                c_enc = parse_description(self.options.colorspace)
            self.saved_color_encoding = c_enc
            encode_to_file(image, c_enc, bits, in_filename, pool)

            arguments = template.compress_argv(in_filename, encoded_filename)
            speed_stats.set_image_size(image.xsize, image.ysize)
            report_codec_running_time(
                lambda: self._run(template.compress_command, arguments),
                encoded_filename, speed_stats,
            )
            compressed = _read_file(encoded_filename)

        logger.debug("%s compressed %s to %d bytes", self.description, filename, len(compressed))
        return compressed

    def decompress(self, filename: str, compressed: bytes, pool: Optional[Executor] = None,
                   speed_stats: Optional[SpeedStats] = None) -> ImageBundle:
        self._require_configured()
        speed_stats = speed_stats if speed_stats is not None else SpeedStats()
        template = self.template
        basename = get_base_name(filename)

        with TemporaryFile(basename, template.extension, self.options.temp_dir) as encoded_filename, \
                TemporaryFile(basename, self.options.extension, self.options.temp_dir) as out_filename:
            _write_file(compressed, encoded_filename)
            arguments = template.decompress_argv(encoded_filename, out_filename)
            report_codec_running_time(
                lambda: self._run(template.decompress_command, arguments),
                out_filename, speed_stats,
            )

            # Staging files carry no color metadata.
            hints = ColorHints()
            if self.options.colorspace:
                hints.add("color_space", self.options.colorspace)
            elif self.saved_color_encoding is not None:
                hints.add("color_space", self.saved_color_encoding.description)
            image = load_from_file(out_filename, hints, pool)

        # Staging formats may not carry the intensity target.
        image.metadata.intensity_target = self.saved_intensity_target
        speed_stats.set_image_size(image.xsize, image.ysize)
        return image
