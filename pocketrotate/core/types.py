"""
PocketRotate — core contracts.

Orientation keywords are the ones reported by iio-sensor-proxy.
Transform codes are the ones understood by hyprctl for monitors,
touch devices and tablets.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class Orientation(str, Enum):
    NORMAL = "normal"
    RIGHT_UP = "right-up"
    LEFT_UP = "left-up"
    BOTTOM_UP = "bottom-up"
    UNDEFINED = "undefined"

    @classmethod
    def from_keyword(cls, text: str) -> "Orientation":
        """Exact keyword lookup. Anything unknown is UNDEFINED."""
        try:
            return cls(text.strip())
        except ValueError:
            return cls.UNDEFINED


# Order matters: first substring hit wins.
KEYWORD_ORDER: Tuple[Orientation, ...] = (
    Orientation.NORMAL,
    Orientation.RIGHT_UP,
    Orientation.LEFT_UP,
    Orientation.BOTTOM_UP,
)

TRANSFORMS = {
    Orientation.LEFT_UP: 0,
    Orientation.BOTTOM_UP: 1,
    Orientation.RIGHT_UP: 2,
    Orientation.NORMAL: 3,
}


def transform_for(orientation: Orientation) -> Optional[int]:
    return TRANSFORMS.get(orientation)


def match_keyword(text: str) -> Optional[Orientation]:
    """
    Loose match: the keyword may appear anywhere in `text`.
    Returns None if no keyword is present.
    """
    for o in KEYWORD_ORDER:
        if o.value in text:
            return o
    return None


@dataclass
class ControlState:
    """
    State owned by the control loop.
    last_applied=None means the next known orientation must be applied.
    """
    enabled: bool = True
    last_applied: Optional[Orientation] = None

    def disable(self) -> None:
        self.enabled = False
        self.last_applied = None

    def should_apply(self, orientation: Optional[Orientation]) -> bool:
        if orientation is None or transform_for(orientation) is None:
            return False
        return orientation != self.last_applied
