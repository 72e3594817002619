"""Conversion configuration models."""

from pydantic import BaseModel, ConfigDict, Field

# Sum of the three 8-bit channels of a pure white pixel
MAX_CHANNEL_SUM = 768

# Historical default, described as "50%" although 50% of 768 is 384
DEFAULT_BLACK_LIMIT = 380


def percentage_to_black_limit(percentage: int) -> int:
    """Map a blackness percentage onto a channel-sum threshold."""
    return percentage * MAX_CHANNEL_SUM // 100


class ConversionConfig(BaseModel):
    """Options for a single image to ^GFA conversion.

    Instances are immutable, so one config can be shared between threads
    and passed into any number of conversions.
    """

    model_config = ConfigDict(frozen=True)

    compress: bool = False
    # None keeps DEFAULT_BLACK_LIMIT; 100 or more makes every pixel black
    blackness_percentage: int | None = Field(default=None, ge=0)

    @property
    def black_limit(self) -> int:
        """Channel-sum threshold at or below which a pixel prints black."""
        if self.blackness_percentage is None:
            return DEFAULT_BLACK_LIMIT
        return percentage_to_black_limit(self.blackness_percentage)
