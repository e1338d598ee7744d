"""Tests for staging-file encoding and loading."""

from concurrent.futures import ProcessPoolExecutor, ThreadPoolExecutor

import cv2
import numpy as np
import pytest

from engines.color_space import parse_description, to_linear
from engines.errors import CodecIOError, ColorConversionError
from models.color_encoding import ColorEncoding
from models.image_bundle import ColorHints, ImageBundle
from utils.image_io import encode_to_file, load_from_file, load_image, save_image
from utils.test_images import generate_gradient, generate_noise


def test_png_round_trip_is_lossless(tmp_path):
    image = ImageBundle.from_uint8(generate_noise(32))
    path = str(tmp_path / "noise.png")
    save_image(image, path)
    loaded = load_image(path)
    assert np.array_equal(loaded.to_uint8(), image.to_uint8())
    assert loaded.metadata.bits_per_sample == 8
    assert loaded.metadata.color_encoding == ColorEncoding.srgb()


def test_channel_order_matches_opencv(tmp_path):
    image = ImageBundle.from_uint8(np.array([[[255, 0, 0]]], dtype=np.uint8))
    path = str(tmp_path / "red.png")
    save_image(image, path)
    assert cv2.imread(path).tolist() == [[[0, 0, 255]]]


def test_high_bit_depth_uses_16_bit_png(tmp_path):
    image = ImageBundle.from_uint8(generate_gradient(16), bits_per_sample=12)
    path = str(tmp_path / "gradient.png")
    save_image(image, path)
    assert cv2.imread(path, cv2.IMREAD_UNCHANGED).dtype == np.uint16
    assert load_image(path).metadata.bits_per_sample == 16


def test_high_bit_depth_falls_back_to_8_bit(tmp_path):
    image = ImageBundle.from_uint8(generate_gradient(16), bits_per_sample=16)
    path = str(tmp_path / "gradient.bmp")
    save_image(image, path)
    assert cv2.imread(path, cv2.IMREAD_UNCHANGED).dtype == np.uint8


def test_encode_converts_to_requested_encoding(tmp_path):
    image = ImageBundle.from_uint8(generate_gradient(16))
    linear = ColorEncoding.linear_srgb()
    path = str(tmp_path / "linear.png")
    encode_to_file(image, linear, 8, path)
    written = cv2.cvtColor(cv2.imread(path), cv2.COLOR_BGR2RGB)
    expected = np.round(to_linear(image.pixels, image.metadata.color_encoding) * 255)
    assert np.abs(written.astype(int) - expected.astype(int)).max() <= 1


def test_color_space_hint_sets_encoding(tmp_path):
    path = str(tmp_path / "img.png")
    save_image(ImageBundle.from_uint8(generate_noise(8)), path)
    hints = ColorHints()
    hints.add("color_space", "LinearSRGB")
    loaded = load_from_file(path, hints)
    assert loaded.metadata.color_encoding == parse_description("LinearSRGB")


def test_gray_file_with_rgb_hint(tmp_path):
    path = str(tmp_path / "gray.png")
    cv2.imwrite(path, np.full((4, 4), 100, dtype=np.uint8))
    loaded = load_from_file(path, ColorHints({"color_space": "sRGB"}))
    assert loaded.pixels.shape == (4, 4, 3)
    assert load_image(path).metadata.color_encoding.is_gray


def test_color_file_with_gray_hint_rejected(tmp_path):
    path = str(tmp_path / "noise.png")
    save_image(ImageBundle.from_uint8(generate_noise(8)), path)
    with pytest.raises(ColorConversionError):
        load_from_file(path, ColorHints({"color_space": "Gray"}))


def test_alpha_round_trip(tmp_path):
    rgba = np.random.default_rng(3).integers(0, 256, (8, 8, 4), dtype=np.uint8)
    image = ImageBundle.from_uint8(rgba)
    path = str(tmp_path / "alpha.png")
    save_image(image, path)
    loaded = load_image(path)
    assert loaded.has_alpha
    assert np.array_equal(loaded.to_uint8(), rgba)


def test_pool_gives_same_result(tmp_path):
    image = ImageBundle.from_uint8(generate_gradient(200))
    linear = ColorEncoding.linear_srgb()
    serial, parallel = str(tmp_path / "serial.png"), str(tmp_path / "parallel.png")
    encode_to_file(image, linear, 8, serial)
    with ThreadPoolExecutor(max_workers=4) as pool:
        encode_to_file(image, linear, 8, parallel, pool)
        loaded = load_from_file(parallel, pool=pool)
    assert np.array_equal(cv2.imread(serial), cv2.imread(parallel))
    assert loaded.pixels.shape == (200, 200, 3)


def test_process_pool_gives_same_result(tmp_path):
    image = ImageBundle.from_uint8(generate_gradient(200))
    linear = ColorEncoding.linear_srgb()
    serial, parallel = str(tmp_path / "serial.png"), str(tmp_path / "parallel.png")
    encode_to_file(image, linear, 8, serial)
    with ProcessPoolExecutor(max_workers=2) as pool:
        encode_to_file(image, linear, 8, parallel, pool)
        loaded = load_from_file(parallel, pool=pool)
    assert np.array_equal(cv2.imread(serial), cv2.imread(parallel))
    assert loaded.pixels.shape == (200, 200, 3)


def test_gray_encoding_with_alpha_rejected(tmp_path):
    rgba = ImageBundle.from_uint8(np.full((4, 4, 4), 200, dtype=np.uint8))
    path = tmp_path / "gray.png"
    with pytest.raises(ColorConversionError):
        encode_to_file(rgba, ColorEncoding.srgb(is_gray=True), 8, str(path))
    assert not path.exists()


def test_missing_file_raises(tmp_path):
    with pytest.raises(CodecIOError):
        load_image(str(tmp_path / "missing.png"))


def test_unknown_extension_raises(tmp_path):
    with pytest.raises(CodecIOError):
        save_image(ImageBundle.from_uint8(generate_noise(8)), str(tmp_path / "img.unknownext"))
