from dataclasses import dataclass
from typing import Tuple
from skrop.core.gravity import Gravity
from skrop.core.types import ImageSize


@dataclass(frozen=True)
class Margins:
    top: int = 0
    right: int = 0
    bottom: int = 0
    left: int = 0


def _half(val: int) -> int:
    # truncates toward zero, also for negative free space
    return int(val / 2)


def compute_overlay_offset(
    source: ImageSize,
    overlay: ImageSize,
    vertical: Gravity,
    horizontal: Gravity,
    margins: Margins,
) -> Tuple[int, int]:
    """
    Absolute (left, top) position of an overlay inside the source image.

    Margins shrink the area the overlay is placed in. Centered placement
    centers the overlay within that area; north/west stick to the leading
    margin, south/east to the trailing one.
    """
    if vertical == Gravity.NORTH:
        top = margins.top
    elif vertical == Gravity.CENTRE:
        top = (
            margins.top
            + _half(source.height - margins.top - margins.bottom)
            - _half(overlay.height)
        )
    elif vertical == Gravity.SOUTH:
        top = source.height - margins.bottom - overlay.height
    else:
        raise ValueError(f"Not a vertical gravity: {vertical}")

    if horizontal == Gravity.WEST:
        left = margins.left
    elif horizontal == Gravity.CENTRE:
        left = (
            margins.left
            + _half(source.width - margins.left - margins.right)
            - _half(overlay.width)
        )
    elif horizontal == Gravity.EAST:
        left = source.width - margins.right - overlay.width
    else:
        raise ValueError(f"Not a horizontal gravity: {horizontal}")

    return left, top
