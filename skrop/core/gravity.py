from enum import Enum, StrEnum
from types import MappingProxyType
from typing import Mapping


class Gravity(Enum):
    """
    Placement understood by the native engine.
    """

    CENTRE = "centre"
    NORTH = "north"
    EAST = "east"
    SOUTH = "south"
    WEST = "west"


class CropAnchor(StrEnum):
    NORTH = "north"
    SOUTH = "south"
    EAST = "east"
    WEST = "west"
    CENTER = "center"


class OverlayGravity(StrEnum):
    NE = "NE"
    NC = "NC"
    NW = "NW"
    CE = "CE"
    CC = "CC"
    CW = "CW"
    SE = "SE"
    SC = "SC"
    SW = "SW"


CROP_ANCHOR_GRAVITY: Mapping[CropAnchor, Gravity] = MappingProxyType(
    {
        CropAnchor.NORTH: Gravity.NORTH,
        CropAnchor.SOUTH: Gravity.SOUTH,
        CropAnchor.EAST: Gravity.EAST,
        CropAnchor.WEST: Gravity.WEST,
        CropAnchor.CENTER: Gravity.CENTRE,
    }
)

VERTICAL_GRAVITY: Mapping[OverlayGravity, Gravity] = MappingProxyType(
    {
        OverlayGravity.NE: Gravity.NORTH,
        OverlayGravity.NC: Gravity.NORTH,
        OverlayGravity.NW: Gravity.NORTH,
        OverlayGravity.CE: Gravity.CENTRE,
        OverlayGravity.CC: Gravity.CENTRE,
        OverlayGravity.CW: Gravity.CENTRE,
        OverlayGravity.SE: Gravity.SOUTH,
        OverlayGravity.SC: Gravity.SOUTH,
        OverlayGravity.SW: Gravity.SOUTH,
    }
)

HORIZONTAL_GRAVITY: Mapping[OverlayGravity, Gravity] = MappingProxyType(
    {
        OverlayGravity.NE: Gravity.EAST,
        OverlayGravity.NC: Gravity.CENTRE,
        OverlayGravity.NW: Gravity.WEST,
        OverlayGravity.CE: Gravity.EAST,
        OverlayGravity.CC: Gravity.CENTRE,
        OverlayGravity.CW: Gravity.WEST,
        OverlayGravity.SE: Gravity.EAST,
        OverlayGravity.SC: Gravity.CENTRE,
        OverlayGravity.SW: Gravity.WEST,
    }
)

# Long spellings accepted in filter declarations alongside the two-letter codes
_VERTICAL_NAMES = {"north": "N", "center": "C", "south": "S"}
_HORIZONTAL_NAMES = {"east": "E", "center": "C", "west": "W"}

OVERLAY_GRAVITY_ALIASES: Mapping[str, OverlayGravity] = MappingProxyType(
    {
        f"{v}-{h}": OverlayGravity(_VERTICAL_NAMES[v] + _HORIZONTAL_NAMES[h])
        for v in _VERTICAL_NAMES
        for h in _HORIZONTAL_NAMES
    }
)


def lookup_overlay_gravity(token: str) -> OverlayGravity | None:
    """
    Resolves either the two-letter code (``NE``) or the long form
    (``north-east``) of an overlay gravity. Returns None for unknown tokens.
    """
    if token in OVERLAY_GRAVITY_ALIASES:
        return OVERLAY_GRAVITY_ALIASES[token]
    try:
        return OverlayGravity(token)
    except ValueError:
        return None


def lookup_crop_anchor(token: str) -> CropAnchor | None:
    try:
        return CropAnchor(token)
    except ValueError:
        return None
