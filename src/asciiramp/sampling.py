import numpy as np

# Perceptual luma weights (0.299, 0.587, 0.114) in thousandths. Keeping the sum in
# integers makes floor((L / 255) * n) exact, so pure white always lands on the last index.
LUMA_WEIGHTS = np.array([299, 587, 114], dtype=np.int64)
LUMA_SCALE = 1000
MAX_SCALED_LUMA = 255 * LUMA_SCALE


def scaled_luminance(pixels: np.ndarray) -> np.ndarray:
    """Luma of an (..., 4) RGBA array in thousandths (0 to 255000). Alpha is ignored."""
    return pixels[..., :3].astype(np.int64) @ LUMA_WEIGHTS


def luminance(pixels: np.ndarray) -> np.ndarray:
    """Luma of an (..., 4) RGBA array as floats in 0-255."""
    return scaled_luminance(pixels) / LUMA_SCALE


def ramp_indices(pixels: np.ndarray, ramp_length: int) -> np.ndarray:
    """Map each pixel to floor((L / 255) * (ramp_length - 1)), clamped to the ramp."""
    if ramp_length < 1:
        raise ValueError(f"Ramp length must be at least 1, got {ramp_length}")
    indices = scaled_luminance(pixels) * (ramp_length - 1) // MAX_SCALED_LUMA
    return np.clip(indices, 0, ramp_length - 1)


def map_rows(pixels: np.ndarray, chars: str) -> list[str]:
    """Turn an (rows, cols, 4) RGBA array into one string per row."""
    lookup = np.array(list(chars))
    indices = ramp_indices(pixels, len(chars))
    return ["".join(row.tolist()) for row in lookup[indices]]
