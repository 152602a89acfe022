import math
import os
import sys


def get_terminal_size() -> tuple[int, int]:
    """Return (columns, rows) of the terminal, or (80, 24) if not a tty."""
    if not sys.stdout.isatty():
        return (80, 24)
    size = os.get_terminal_size()
    return (size.columns, size.lines)


def fit_scale(image_width: int, columns: int | None = None) -> float:
    """Scale that renders an image of ``image_width`` pixels exactly ``columns`` characters wide."""
    if columns is None:
        columns = get_terminal_size()[0]
    if image_width <= 0 or columns <= 0:
        raise ValueError(f"Cannot fit width {image_width} into {columns} columns")
    scale = columns / image_width
    # The rounded quotient can land a hair under columns once multiplied back
    while math.floor(image_width * scale) < columns:
        scale = math.nextafter(scale, math.inf)
    return scale
