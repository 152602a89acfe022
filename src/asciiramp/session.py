import logging
import threading
from collections.abc import Callable
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from pathlib import Path

from asciiramp.charsets import DEFAULT_DENSITY
from asciiramp.converter import convert
from asciiramp.engine import ImageSampler
from asciiramp.errors import ConversionFailed, InvalidImage
from asciiramp.model import DEFAULT_FILENAME, DEFAULT_SCALE, AsciiArt, ImageBuffer, RenderParams
from asciiramp.source import ImageSource, load_image

logger = logging.getLogger(__name__)

DEFAULT_FONT_SIZE = 5


class ConversionSession:
    """Keeps the current art in step with the latest image and parameters.

    Images are decoded on an executor. Only the most recent ``load`` is ever
    applied: a decode that finishes after a newer one was requested is dropped.
    Any change to scale, invert or density re-renders; ``font_size`` is display
    state only and never does.
    """

    def __init__(
        self,
        scale: float = DEFAULT_SCALE,
        invert: bool = False,
        density: str = DEFAULT_DENSITY,
        font_size: int = DEFAULT_FONT_SIZE,
        sampler: ImageSampler | None = None,
        executor: Executor | None = None,
        loader: Callable[[ImageSource], ImageBuffer] = load_image,
    ):
        self.params = RenderParams(scale=scale, invert=invert)
        self.density = density
        self.font_size = font_size
        self.image: ImageBuffer | None = None
        self.art: AsciiArt | None = None
        self.error: Exception | None = None
        self.renders = 0

        self._sampler = sampler
        self._loader = loader
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(max_workers=1, thread_name_prefix="asciiramp-decode")
        self._lock = threading.Lock()
        self._generation = 0
        # Generation of the last load whose decode finished, successfully or not
        self._settled = 0

    @property
    def pending(self) -> bool:
        """True while the most recent ``load`` is still decoding."""
        with self._lock:
            return self._settled != self._generation

    def __enter__(self) -> "ConversionSession":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_executor:
            self._executor.shutdown(wait=True)

    def load(self, source: ImageSource) -> "Future[AsciiArt | None]":
        """Decode ``source`` in the background and render it unless superseded.

        The future resolves to the new art, or None when a newer load won.
        """
        with self._lock:
            self._generation += 1
            generation = self._generation
        return self._executor.submit(self._decode, source, generation)

    def update(
        self,
        scale: float | None = None,
        invert: bool | None = None,
        density: str | None = None,
        font_size: int | None = None,
    ) -> AsciiArt | None:
        with self._lock:
            if font_size is not None:
                self.font_size = font_size
            params = RenderParams(
                scale=self.params.scale if scale is None else scale,
                invert=self.params.invert if invert is None else invert,
            )
            changed = params != self.params or (density is not None and density != self.density)
            self.params = params
            if density is not None:
                self.density = density
            if not changed:
                return self.art
            return self._render()

    def save(self, path: str | Path = DEFAULT_FILENAME) -> Path:
        with self._lock:
            art = self.art
        if art is None:
            raise ConversionFailed("No ascii art to save")
        return art.save(path)

    def _decode(self, source: ImageSource, generation: int) -> AsciiArt | None:
        try:
            image = self._loader(source)
        except (InvalidImage, ConversionFailed) as exc:
            with self._lock:
                if generation != self._generation:
                    logger.debug("Ignoring failed decode %d, superseded by %d", generation, self._generation)
                    return None
                self._settled = generation
                self.image = None
                self._fail(exc)
            raise

        with self._lock:
            if generation != self._generation:
                logger.debug("Discarding decode %d, superseded by %d", generation, self._generation)
                return None
            self._settled = generation
            self.image = image
            return self._render()

    def _render(self) -> AsciiArt | None:
        if self.image is None:
            return None
        try:
            art = convert(self.image, self.params, self.density, sampler=self._sampler)
        except (ValueError, ConversionFailed) as exc:
            # ValueError covers InvalidRamp and grids too large to compute
            self._fail(exc)
            raise
        self.art = art
        self.error = None
        self.renders += 1
        return art

    def _fail(self, exc: Exception) -> None:
        logger.debug("Conversion failed: %s", exc)
        self.art = None
        self.error = exc
