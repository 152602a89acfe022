import numpy as np
import pytest

from asciiramp.model import ImageBuffer


def solid(width, height, rgb, alpha=255):
    """Build an ImageBuffer filled with one colour."""
    array = np.empty((height, width, 4), dtype=np.uint8)
    array[:, :, :3] = rgb
    array[:, :, 3] = alpha
    return ImageBuffer.from_array(array)


class RecordingSampler:
    """Sampler that returns a fixed colour grid and records each request."""

    def __init__(self, rgb=(0, 0, 0)):
        self.rgb = rgb
        self.calls = []

    def sample(self, image, width, height):
        self.calls.append((image.width, image.height, width, height))
        return solid(width, height, self.rgb)


class FailingSampler:
    def sample(self, image, width, height):
        raise RuntimeError("canvas lost")


@pytest.fixture
def gray_image():
    return solid(20, 20, (128, 128, 128))


@pytest.fixture
def gradient_image():
    """A 40x40 horizontal black-to-white gradient."""
    ramp = np.linspace(0, 255, 40).astype(np.uint8)
    array = np.empty((40, 40, 4), dtype=np.uint8)
    array[:, :, :3] = ramp[None, :, None]
    array[:, :, 3] = 255
    return ImageBuffer.from_array(array)
