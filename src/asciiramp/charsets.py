# All ramps run dark -> light: index 0 is drawn for black pixels.
DEFAULT_DENSITY = "@%#*+=-:. "

DETAILED = "$@B%8&WM#*oahkbdpqwmZO0QLCJUYXzcvunxrjft/\\|()1{}[]?-_+~<>i!lI;:,\"^`'. "

# Block elements: full block through the shades to blank
BLOCKS = "█▓▒░ "

BINARY = "# "

PRESETS = {
    "standard": DEFAULT_DENSITY,
    "detailed": DETAILED,
    "blocks": BLOCKS,
    "binary": BINARY,
}
