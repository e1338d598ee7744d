"""
Custom Codec Bench
Round-trips an image through external command-line codecs.
"""

import argparse
import logging
import sys
from concurrent.futures import ThreadPoolExecutor

from engines.codec_factory import create_image_codec
from engines.color_space import convert_image
from engines.errors import CustomCodecError
from models.codec_options import CustomCodecOptions, add_command_line_options
from utils.image_io import load_image
from utils.metrics import SpeedStats, bits_per_pixel, compute_psnr_ssim
from utils.test_images import generate_demo_image

logger = logging.getLogger("custom_codec_bench")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Compress and decompress an image with an external codec.",
        epilog="Example: python main.py photo.png custom:jpg:cjpeg:djpeg:-quality:90",
    )
    parser.add_argument("image", help="Input image path, or a synthetic key with --synthetic")
    parser.add_argument("codec", help="Codec method, e.g. custom:<ext>:<compress>:<decompress>[:args]")
    parser.add_argument("--synthetic", action="store_true",
                        help="Treat IMAGE as checkerboard, gradient, chroma_stripes or noise.")
    parser.add_argument("--intensity_target", type=float, default=None,
                        help="Override the input's intensity target (nits).")
    parser.add_argument("--num_threads", type=int, default=0,
                        help="Worker threads for staging-file encoding (0 = none).")
    parser.add_argument("-v", "--verbose", action="store_true")
    add_command_line_options(parser)
    return parser


def _format_speed(summary) -> str:
    if summary is None:
        return "n/a"
    return f"{summary['median'] * 1000.0:.2f} ms ({summary['mps']:.2f} MP/s)"


def run(args: argparse.Namespace) -> int:
    options = CustomCodecOptions.from_args(args)
    codec = create_image_codec(args.codec, options)

    if args.synthetic:
        image = generate_demo_image(args.image)
        if image is None:
            logger.error("Unknown synthetic image %r", args.image)
            return 1
        filename = f"{args.image}.png"
    else:
        image = load_image(args.image)
        filename = args.image
    if args.intensity_target is not None:
        image.metadata.intensity_target = args.intensity_target

    encode_stats, decode_stats = SpeedStats(), SpeedStats()
    pool = ThreadPoolExecutor(max_workers=args.num_threads) if args.num_threads > 0 else None
    try:
        compressed = codec.compress(filename, image, pool, encode_stats)
        decoded = codec.decompress(filename, compressed, pool, decode_stats)
    finally:
        if pool is not None:
            pool.shutdown()

    decoded = convert_image(decoded, image.metadata.color_encoding)
    if decoded.pixels.shape != image.pixels.shape:
        logger.error("Decoded shape %s differs from input %s", decoded.pixels.shape, image.pixels.shape)
        return 1
    quality = compute_psnr_ssim(image.pixels, decoded.pixels)

    print(f"Codec:      {codec.description}")
    print(f"Image:      {image.xsize}x{image.ysize}")
    print(f"Size:       {len(compressed)} bytes")
    print(f"BPP:        {bits_per_pixel(len(compressed), image.xsize, image.ysize):.4f}")
    print(f"PSNR:       {quality['psnr']:.2f} dB")
    print(f"SSIM:       {quality['ssim']:.4f}")
    print(f"Intensity:  {decoded.metadata.intensity_target:g} nits")
    print(f"Compress:   {_format_speed(encode_stats.summary())}")
    print(f"Decompress: {_format_speed(decode_stats.summary())}")
    return 0


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )
    try:
        return run(args)
    except (CustomCodecError, ValueError) as e:
        logger.error("%s", e)
        return 1


if __name__ == '__main__':
    sys.exit(main())
