"""
Disposal zones and drop classification.
NO UI DEPENDENCIES.
"""
from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterable, Optional, Tuple

from .placement import Rect
from .constants import SCREEN_HEIGHT, SCREEN_WIDTH, ZONE_WIDTH


class ZoneKind(Enum):
    """The two bins a newspaper can be dropped into."""
    DISCARD = auto()  # left: fabricated stories go in the trash
    ARCHIVE = auto()  # right: genuine stories go in the cart


@dataclass(frozen=True)
class DropZone:
    kind: ZoneKind
    rect: Rect


DISCARD_ZONE = DropZone(ZoneKind.DISCARD, Rect(0, 0, ZONE_WIDTH, SCREEN_HEIGHT))
ARCHIVE_ZONE = DropZone(ZoneKind.ARCHIVE, Rect(SCREEN_WIDTH - ZONE_WIDTH, 0, ZONE_WIDTH, SCREEN_HEIGHT))

# Checked in order; a paper touching both counts as a discard
DEFAULT_ZONES: Tuple[DropZone, ...] = (DISCARD_ZONE, ARCHIVE_ZONE)


def find_drop_zone(rect: Rect, zones: Iterable[DropZone] = DEFAULT_ZONES) -> Optional[DropZone]:
    """
    Return the first zone the rectangle overlaps, or None.
    Overlap is enough; the paper does not need to be fully inside.
    """
    for zone in zones:
        if rect.intersects(zone.rect):
            return zone
    return None


def is_correct_drop(kind: ZoneKind, is_true: bool) -> bool:
    """Fake stories belong in discard, true stories in archive."""
    if kind == ZoneKind.DISCARD:
        return not is_true
    return is_true
