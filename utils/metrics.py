"""Metrics: PSNR, SSIM, codec speed statistics and running-time reporting."""

import logging
import math
import os
import time
from pathlib import Path
from typing import Callable, Dict, List, Optional

import numpy as np
from skimage.metrics import peak_signal_noise_ratio, structural_similarity

logger = logging.getLogger(__name__)


def compute_psnr_ssim(original: np.ndarray, reconstructed: np.ndarray) -> Dict[str, float]:
    """Compute PSNR and SSIM on float (H, W, C) images in [0, 1]."""
    if original.shape != reconstructed.shape:
        raise ValueError(f"Shape mismatch: {original.shape} vs {reconstructed.shape}")
    original = original.astype(np.float64)
    reconstructed = reconstructed.astype(np.float64)

    if np.array_equal(original, reconstructed):
        psnr = float('inf')
    else:
        psnr = float(peak_signal_noise_ratio(original, reconstructed, data_range=1.0))

    # SSIM needs 7x7 windows
    if min(original.shape[:2]) < 7:
        ssim = float('nan')
    else:
        ssim = float(structural_similarity(
            original, reconstructed, channel_axis=2, data_range=1.0
        ))
    return {'psnr': psnr, 'ssim': ssim}


def bits_per_pixel(compressed_size: int, xsize: int, ysize: int) -> float:
    return compressed_size * 8.0 / max(xsize * ysize, 1)


class SpeedStats:
    """Collects elapsed times of codec runs for one image."""

    def __init__(self):
        self.elapsed: List[float] = []
        self.xsize = 0
        self.ysize = 0

    def notify_elapsed(self, seconds: float) -> None:
        if not math.isfinite(seconds) or seconds <= 0:
            logger.warning("Ignoring invalid elapsed time %r", seconds)
            return
        self.elapsed.append(float(seconds))

    def set_image_size(self, xsize: int, ysize: int) -> None:
        self.xsize = xsize
        self.ysize = ysize

    def summary(self) -> Optional[Dict[str, float]]:
        """Min/max/median/total seconds and median-based megapixels per second."""
        if not self.elapsed:
            return None
        times = np.array(self.elapsed)
        median = float(np.median(times))
        megapixels = self.xsize * self.ysize / 1e6
        return {
            'count': len(times),
            'min': float(times.min()),
            'max': float(times.max()),
            'median': median,
            'total': float(times.sum()),
            'mps': megapixels / median if megapixels else 0.0,
        }


def time_filename(output_filename: str) -> Path:
    """Sidecar timing file: output stem + '.time', relative to the working directory."""
    return Path(Path(output_filename).stem + ".time")


def _read_reported_time(path: Path) -> Optional[float]:
    try:
        content = path.read_text()
    except OSError:
        return None
    tokens = content.split()
    try:
        value = float(tokens[0]) if tokens else None
    except ValueError:
        value = None
    if value is None or not math.isfinite(value):
        logger.warning("Ignoring unparseable timing file %s: %r", path, content[:40])
        return None
    return value


def report_codec_running_time(
    function: Callable[[], None],
    output_filename: str,
    speed_stats: SpeedStats,
    clock: Callable[[], float] = time.perf_counter,
) -> float:
    """Run function and report its elapsed time, preferring a self-reported one.

    If function raises nothing is reported. The sidecar named after
    output_filename is removed whenever it exists.
    """
    start = clock()
    function()
    end = clock()

    sidecar = time_filename(output_filename)
    exists = sidecar.exists()
    reported = _read_reported_time(sidecar) if exists else None
    if reported is not None:
        elapsed = reported
        logger.debug("Using codec-reported time %.6fs from %s", elapsed, sidecar)
    else:
        elapsed = end - start
        logger.debug("Using measured time %.6fs", elapsed)
    speed_stats.notify_elapsed(elapsed)

    if exists:
        try:
            os.remove(sidecar)
        except OSError as e:
            logger.warning("Could not remove timing file %s: %s", sidecar, e)
    return elapsed
