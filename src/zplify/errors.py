"""Exceptions raised by the ^GFA graphic converters."""


class ConversionError(Exception):
    """Base exception for image to ZPL conversion errors."""

    pass


class EncodingRangeError(ConversionError):
    """Raised when a run count has no entry in the compression alphabet."""

    def __init__(self, count: int) -> None:
        self.count = count
        super().__init__(f"Run count {count} is outside the encodable range 1-400")


class InvalidDimensionError(ConversionError):
    """Raised when a pixel source reports negative or inconsistent dimensions."""

    pass


class DecompressionError(ConversionError):
    """Raised when compressed hex-ASCII data is malformed."""

    pass
