import io
import logging
from pathlib import Path
from typing import BinaryIO

from PIL import Image, UnidentifiedImageError

from asciiramp.errors import ConversionFailed, InvalidImage
from asciiramp.model import ImageBuffer

logger = logging.getLogger(__name__)

ImageSource = ImageBuffer | Image.Image | str | Path | bytes | BinaryIO


def load_image(source: ImageSource) -> ImageBuffer:
    """Decode a path, encoded bytes, file object or Pillow image into an RGBA buffer."""
    if isinstance(source, ImageBuffer):
        return source
    if isinstance(source, Image.Image):
        return ImageBuffer.from_image(source)

    if isinstance(source, bytes):
        fp = io.BytesIO(source)
        name = f"<{len(source)} bytes>"
    elif isinstance(source, (str, Path)):
        fp = Path(source)
        name = str(fp)
        if not fp.is_file():
            raise InvalidImage(f"File not found: {fp}")
    else:
        fp = source
        name = getattr(source, "name", repr(source))

    try:
        with Image.open(fp) as image:
            image.load()
            buffer = ImageBuffer.from_image(image)
            logger.debug("Decoded %s: %s %dx%d", name, image.format, image.width, image.height)
    except UnidentifiedImageError as exc:
        raise InvalidImage(f"Cannot identify image data in {name}") from exc
    except (OSError, SyntaxError) as exc:
        # Pillow reports truncated or corrupt data as OSError, some plugins as SyntaxError
        raise InvalidImage(f"Cannot decode {name}: {exc}") from exc
    except InvalidImage:
        raise
    except Exception as exc:
        raise ConversionFailed(f"Decoder failed on {name}: {exc}") from exc
    return buffer
