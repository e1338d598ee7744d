"""Colorimetric constants."""

import numpy as np

# Linear RGB -> CIE XYZ, D65 white point
RGB_TO_XYZ = {
    "SRG": np.array([
        [0.4123908, 0.3575843, 0.1804808],
        [0.2126390, 0.7151687, 0.0721923],
        [0.0193308, 0.1191948, 0.9505322],
    ]),
    "202": np.array([
        [0.6369580, 0.1446169, 0.1688810],
        [0.2627002, 0.6779981, 0.0593017],
        [0.0000000, 0.0280727, 1.0609851],
    ]),
    "DCI": np.array([
        [0.4865709, 0.2656677, 0.1982173],
        [0.2289746, 0.6917385, 0.0792869],
        [0.0000000, 0.0451134, 1.0439444],
    ]),
}

WHITE_POINTS = ("D65",)
RENDERING_INTENTS = ("Per", "Rel", "Sat", "Abs")
TRANSFER_FUNCTIONS = ("SRG", "Lin", "709", "DCI")

DCI_GAMMA = 2.6

# Formats OpenCV can write with 16 bits per sample
HIGH_BIT_DEPTH_EXTENSIONS = ("png", "tif", "tiff", "ppm", "pgm", "pnm")

DEFAULT_INTENSITY_TARGET = 255.0
