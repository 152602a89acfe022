import math
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

import numpy as np
from PIL import Image

from asciiramp.errors import InvalidImage, InvalidRamp

DEFAULT_SCALE = 0.05
DEFAULT_FILENAME = "ascii-art.txt"

# Monospace glyph cells are roughly twice as tall as they are wide
ASPECT_CORRECTION = 0.5

# Single-channel modes holding 16-bit (or wider) samples
WIDE_GRAY_MODES = {"I", "F", "I;16", "I;16L", "I;16B", "I;16N"}


@dataclass(frozen=True)
class ImageBuffer:
    """Decoded RGBA pixels, row-major, top-to-bottom, four bytes per pixel."""

    width: int
    height: int
    pixels: bytes

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise InvalidImage(f"Image dimensions must be positive, got {self.width}x{self.height}")
        expected = self.width * self.height * 4
        if len(self.pixels) != expected:
            raise InvalidImage(f"Expected {expected} bytes of RGBA data, got {len(self.pixels)}")

    @classmethod
    def from_image(cls, image: Image.Image) -> "ImageBuffer":
        if image.width <= 0 or image.height <= 0:
            raise InvalidImage(f"Image has no pixels: {image.width}x{image.height}")
        if image.mode in WIDE_GRAY_MODES:
            # Pillow clips 16-bit and float samples at 255 when converting, so drop the low byte first
            wide = np.asarray(image, dtype=np.float64)
            image = Image.fromarray(np.clip(wide / 256, 0, 255).astype(np.uint8))
        rgba = image.convert("RGBA")
        return cls(width=rgba.width, height=rgba.height, pixels=rgba.tobytes())

    @classmethod
    def from_array(cls, array: np.ndarray) -> "ImageBuffer":
        """Build a buffer from an (height, width, 4) uint8 array."""
        if array.ndim != 3 or array.shape[2] != 4:
            raise InvalidImage(f"Expected an (height, width, 4) array, got shape {array.shape}")
        height, width, _ = array.shape
        return cls(width=width, height=height, pixels=np.ascontiguousarray(array, dtype=np.uint8).tobytes())

    def to_array(self) -> np.ndarray:
        """Read-only (height, width, 4) uint8 view of the pixels."""
        return np.frombuffer(self.pixels, dtype=np.uint8).reshape(self.height, self.width, 4)

    def to_image(self) -> Image.Image:
        return Image.frombytes("RGBA", (self.width, self.height), self.pixels)


@dataclass(frozen=True)
class DensityRamp:
    """Characters ordered from the darkest mapping to the lightest."""

    chars: str

    def __post_init__(self):
        if not self.chars:
            raise InvalidRamp("Density ramp must contain at least one character")

    def __len__(self) -> int:
        return len(self.chars)

    def __getitem__(self, index: int) -> str:
        return self.chars[index]

    def reversed(self) -> "DensityRamp":
        return DensityRamp(self.chars[::-1])

    @classmethod
    def coerce(cls, ramp: "DensityRamp | str | Iterable[str]") -> "DensityRamp":
        if isinstance(ramp, DensityRamp):
            return ramp
        if isinstance(ramp, str):
            return cls(ramp)
        return cls("".join(ramp))


@dataclass(frozen=True)
class RenderParams:
    scale: float = DEFAULT_SCALE
    invert: bool = False

    def __post_init__(self):
        if not math.isfinite(self.scale) or self.scale <= 0:
            raise ValueError(f"Scale must be a positive number, got {self.scale!r}")

    def grid_size(self, width: int, height: int) -> tuple[int, int]:
        """Return (columns, rows) of the character grid for a source of the given size."""
        exact_cols = width * self.scale
        exact_rows = height * self.scale * ASPECT_CORRECTION
        if not (math.isfinite(exact_cols) and math.isfinite(exact_rows)):
            raise ValueError(f"Scale {self.scale!r} is too large for a {width}x{height} image")
        return max(math.floor(exact_cols), 0), max(math.floor(exact_rows), 0)


@dataclass(frozen=True)
class AsciiArt:
    lines: tuple[str, ...] = ()

    def __str__(self) -> str:
        return self.text

    @property
    def text(self) -> str:
        return "\n".join(self.lines)

    @property
    def width(self) -> int:
        return len(self.lines[0]) if self.lines else 0

    @property
    def height(self) -> int:
        return len(self.lines)

    def save(self, path: str | Path = DEFAULT_FILENAME) -> Path:
        """Write the art as plain text, no header, platform default encoding.

        Every row, the last included, ends with a line break.
        """
        path = Path(path)
        with path.open("w") as f:
            f.writelines(line + "\n" for line in self.lines)
        return path
