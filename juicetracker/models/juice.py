"""Juice tasting entry and the closed set of juice colors."""
import math
from dataclasses import dataclass
from enum import Enum

# id of a juice that has not been persisted yet
NEW_JUICE_ID = 0
MAX_RATING = 5


class JuiceColor(Enum):
    """Selectable juice colors: (display label, ARGB display value)."""
    Red = ("Red", 0xFFFF0000)
    Blue = ("Blue", 0xFF0000FF)
    Green = ("Green", 0xFF00FF00)
    Cyan = ("Cyan", 0xFF00FFFF)
    Yellow = ("Yellow", 0xFFFFFF00)
    Magenta = ("Magenta", 0xFFFF00FF)

    @property
    def label(self) -> str:
        return self.value[0]

    @property
    def argb(self) -> int:
        return self.value[1]

    @property
    def hex(self) -> str:
        """Display value as #AARRGGBB."""
        return f"#{self.argb:08X}"

    @classmethod
    def default(cls) -> "JuiceColor":
        return next(iter(cls))

    @classmethod
    def from_name(cls, name: str) -> "JuiceColor":
        """Look up by member name; raises KeyError if unknown."""
        return cls[name]


@dataclass(frozen=True)
class Juice:
    """One tasting entry. id == NEW_JUICE_ID until the store assigns one."""
    id: int
    name: str
    description: str
    color: JuiceColor = JuiceColor.Red
    rating: int = 0

    @property
    def is_new(self) -> bool:
        return self.id <= NEW_JUICE_ID


def clamp_rating(value: float) -> int:
    """Rating bar values are truncated to whole stars and kept in [0, MAX_RATING].

    Raises ValueError for non-numeric, NaN or infinite values.
    """
    try:
        number = float(value)
    except TypeError:
        raise ValueError(f"Rating must be a number, got {value!r}")
    if not math.isfinite(number):
        raise ValueError(f"Rating must be finite, got {value!r}")
    return max(0, min(MAX_RATING, int(number)))


def rating_description(rating: int) -> str:
    """Text for a row's star display, e.g. '1 star' or '4 stars'."""
    return f"{rating} star" if rating == 1 else f"{rating} stars"
