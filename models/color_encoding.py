"""Color encoding of pixel data."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ColorEncoding:
    """Colorspace, white point, primaries, rendering intent and transfer function.

    ``transfer_function`` is one of SRG, Lin, 709, DCI or ``gamma``; for
    ``gamma`` the exponent is in ``gamma`` (encoded = linear ** gamma).
    """

    color_space: str = "RGB"
    white_point: str = "D65"
    primaries: str = "SRG"
    rendering_intent: str = "Rel"
    transfer_function: str = "SRG"
    gamma: Optional[float] = None

    @property
    def is_gray(self) -> bool:
        return self.color_space == "Gra"

    @property
    def num_channels(self) -> int:
        return 1 if self.is_gray else 3

    @property
    def description(self) -> str:
        if self.transfer_function == "gamma":
            transfer = f"g{self.gamma:g}"
        else:
            transfer = self.transfer_function
        if self.is_gray:
            return "_".join(["Gra", self.white_point, self.rendering_intent, transfer])
        return "_".join([
            self.color_space, self.white_point, self.primaries, self.rendering_intent, transfer
        ])

    @classmethod
    def srgb(cls, is_gray: bool = False) -> "ColorEncoding":
        return cls(color_space="Gra" if is_gray else "RGB")

    @classmethod
    def linear_srgb(cls, is_gray: bool = False) -> "ColorEncoding":
        return cls(color_space="Gra" if is_gray else "RGB", transfer_function="Lin")
