"""Shared utilities."""

from .constants import DEFAULT_INTENSITY_TARGET, RGB_TO_XYZ
from .metrics import (
    SpeedStats,
    bits_per_pixel,
    compute_psnr_ssim,
    report_codec_running_time,
    time_filename,
)

__all__ = [
    'DEFAULT_INTENSITY_TARGET',
    'RGB_TO_XYZ',
    'SpeedStats',
    'bits_per_pixel',
    'compute_psnr_ssim',
    'report_codec_running_time',
    'time_filename',
]
