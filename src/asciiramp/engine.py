from __future__ import annotations

from typing import Protocol, runtime_checkable

from asciiramp.model import ImageBuffer


@runtime_checkable
class ImageSampler(Protocol):
    def sample(self, image: ImageBuffer, width: int, height: int) -> ImageBuffer:
        """Resample an image into a width x height destination grid."""
        ...
