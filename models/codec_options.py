"""Process-wide options shared by every custom codec instance."""

import argparse
import os
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class CustomCodecOptions:
    """Staging format, colorspace override and console behaviour for external tools."""

    extension: str = "png"
    colorspace: str = ""
    quiet: bool = False
    temp_dir: Optional[str] = None

    def __post_init__(self):
        if not self.extension:
            raise ValueError("Staging extension must not be empty")
        if self.extension.startswith('.'):
            raise ValueError(f"Staging extension must not start with a dot, got {self.extension!r}")
        if self.temp_dir is not None and not os.path.isdir(self.temp_dir):
            raise ValueError(f"Temporary directory does not exist: {self.temp_dir}")

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "CustomCodecOptions":
        return cls(
            extension=args.custom_codec_extension,
            colorspace=args.custom_codec_colorspace,
            quiet=args.custom_codec_quiet,
            temp_dir=args.custom_codec_tmpdir,
        )


def add_command_line_options(parser: argparse.ArgumentParser) -> None:
    """Register the custom codec flags on an argument parser."""
    group = parser.add_argument_group("custom codec")
    group.add_argument(
        "--custom_codec_extension", default="png",
        help="Converts input and output of codec to this file type (default: png).",
    )
    group.add_argument(
        "--custom_codec_colorspace", default="",
        help="If not empty, converts input and output of codec to this colorspace.",
    )
    group.add_argument(
        "--custom_codec_quiet", action="store_true",
        help="Hide stdout and stderr of the custom codec.",
    )
    group.add_argument(
        "--custom_codec_tmpdir", default=None,
        help="Directory for scratch files exchanged with the codec (default: system temp dir).",
    )
