import argparse
import logging
import math
import sys

from asciiramp.charsets import DEFAULT_DENSITY, PRESETS
from asciiramp.converter import convert
from asciiramp.errors import ConversionFailed
from asciiramp.model import DEFAULT_SCALE, RenderParams
from asciiramp.source import load_image
from asciiramp.terminal import fit_scale


def _positive_float(value: str) -> float:
    try:
        number = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a number: {value!r}")
    if not (number > 0 and math.isfinite(number)):
        raise argparse.ArgumentTypeError(f"must be a finite number greater than 0: {value!r}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Render an image as ASCII art using a density ramp")
    parser.add_argument("image", help="Path to input image")
    size = parser.add_mutually_exclusive_group()
    size.add_argument(
        "-s",
        "--scale",
        type=_positive_float,
        default=DEFAULT_SCALE,
        help=f"Characters per source pixel horizontally (default: {DEFAULT_SCALE})",
    )
    size.add_argument("--fit", action="store_true", help="Pick the scale that fills the terminal width")
    ramp = parser.add_mutually_exclusive_group()
    ramp.add_argument(
        "-d", "--density", default=None, help=f"Characters from dark to light (default: {DEFAULT_DENSITY!r})"
    )
    ramp.add_argument("-p", "--preset", choices=sorted(PRESETS), default=None, help="Use a named density ramp")
    parser.add_argument("-i", "--invert", action="store_true", default=False, help="Reverse the density ramp")
    parser.add_argument("-o", "--output", default=None, help="Write the art to this file instead of stdout")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output to stderr")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.preset is not None:
        density = PRESETS[args.preset]
    elif args.density is not None:
        density = args.density
    else:
        density = DEFAULT_DENSITY

    try:
        image = load_image(args.image)
        scale = fit_scale(image.width) if args.fit else args.scale
        art = convert(image, RenderParams(scale=scale, invert=args.invert), density)
    except ValueError as exc:
        # InvalidImage, InvalidRamp, or a scale too large for the image
        print(f"asciiramp: {exc}", file=sys.stderr)
        return 1
    except ConversionFailed as exc:
        print(f"asciiramp: {exc} ({exc.__cause__!r})", file=sys.stderr)
        return 2

    if args.output is not None:
        path = art.save(args.output)
        logging.getLogger(__name__).debug("Wrote %d lines to %s", art.height, path)
    else:
        print(art.text)
    return 0


if __name__ == "__main__":
    sys.exit(main())
