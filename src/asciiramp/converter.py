import logging
from collections.abc import Iterable

from asciiramp.charsets import DEFAULT_DENSITY
from asciiramp.engine import ImageSampler
from asciiramp.errors import ConversionFailed
from asciiramp.model import DEFAULT_SCALE, AsciiArt, DensityRamp, ImageBuffer, RenderParams
from asciiramp.sampler import PillowSampler
from asciiramp.sampling import map_rows
from asciiramp.source import ImageSource, load_image

logger = logging.getLogger(__name__)


def convert(
    image: ImageBuffer,
    params: RenderParams,
    ramp: DensityRamp | str | Iterable[str],
    sampler: ImageSampler | None = None,
) -> AsciiArt:
    """Render an image as one line of ramp characters per grid row.

    The grid is ``floor(width * scale)`` columns by ``floor(height * scale * 0.5)``
    rows. Each cell takes the character at ``floor(L / 255 * (len(ramp) - 1))``
    where L is the cell's perceptual luma; ``params.invert`` reverses the ramp first.

    Raises InvalidRamp for an empty ramp and ConversionFailed when the sampler fails.
    """
    ramp = DensityRamp.coerce(ramp)
    if params.invert:
        ramp = ramp.reversed()

    cols, rows = params.grid_size(image.width, image.height)
    logger.debug("Converting %dx%d image to %dx%d grid", image.width, image.height, cols, rows)
    if cols == 0 or rows == 0:
        return AsciiArt()

    if sampler is None:
        sampler = PillowSampler()
    try:
        sampled = sampler.sample(image, cols, rows)
    except Exception as exc:
        raise ConversionFailed(f"Sampling to {cols}x{rows} failed: {exc}") from exc
    if (sampled.width, sampled.height) != (cols, rows):
        raise ConversionFailed(f"Sampler returned {sampled.width}x{sampled.height}, expected {cols}x{rows}")

    return AsciiArt(lines=tuple(map_rows(sampled.to_array(), ramp.chars)))


def image_to_ascii(
    image: ImageSource,
    scale: float = DEFAULT_SCALE,
    invert: bool = False,
    density: DensityRamp | str = DEFAULT_DENSITY,
    sampler: ImageSampler | None = None,
) -> str:
    buffer = load_image(image)
    art = convert(buffer, RenderParams(scale=scale, invert=invert), density, sampler=sampler)
    return art.text
