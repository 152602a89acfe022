class InvalidImage(ValueError):
    """The source image is missing, undecodable or has no pixels."""


class InvalidRamp(ValueError):
    """The density ramp has no characters."""


class ConversionFailed(RuntimeError):
    """The sampling backend failed. The original exception is chained as ``__cause__``."""
