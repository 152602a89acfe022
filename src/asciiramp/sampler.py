from PIL import Image

from asciiramp.model import ImageBuffer


class PillowSampler:
    """Nearest-neighbour resampling through Pillow, standing in for a canvas draw."""

    def sample(self, image: ImageBuffer, width: int, height: int) -> ImageBuffer:
        if width <= 0 or height <= 0:
            raise ValueError(f"Sample grid must be positive, got {width}x{height}")
        source = image.to_image()
        if source.size == (width, height):
            return image
        resized = source.resize((width, height), Image.Resampling.NEAREST)
        return ImageBuffer.from_image(resized)
