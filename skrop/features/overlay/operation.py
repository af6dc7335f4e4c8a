from dataclasses import dataclass, field, replace
from typing import Any, ClassVar, Sequence
from skrop.core.errors import InvalidEnumValueError
from skrop.core.gravity import (
    HORIZONTAL_GRAVITY,
    VERTICAL_GRAVITY,
    Gravity,
    OverlayGravity,
    lookup_overlay_gravity,
)
from skrop.core.interfaces import ISourceImage
from skrop.core.stage import OverlaySpec, TransformStage
from skrop.core.validation import (
    check_arg_count,
    clamp,
    parse_float_arg,
    parse_int_arg,
    parse_string_arg,
)
from skrop.features.overlay.logic import Margins, compute_overlay_offset
from skrop.infrastructure.filesystem.assets import read_asset
from skrop.infrastructure.native.pillow_engine import image_size
from skrop.kernel.system.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class OverlayImageOperation:
    """
    overlayImage(path, opacity, gravity[, top, right, bottom, left])

    Composites the image stored at `path` over the response image. Margins
    are consumed in CSS order: top, right, bottom, left.
    """

    name: ClassVar[str] = "overlayImage"

    file: str
    opacity: float
    gravity: OverlayGravity
    margins: Margins = field(default_factory=Margins)

    @classmethod
    def create(cls, args: Sequence[Any]) -> "OverlayImageOperation":
        check_arg_count(cls.name, args, 3, 7)

        file = parse_string_arg(cls.name, args, 0)
        opacity = clamp(parse_float_arg(cls.name, args, 1), 0.0, 1.0)

        token = parse_string_arg(cls.name, args, 2)
        gravity = lookup_overlay_gravity(token)
        if gravity is None:
            raise InvalidEnumValueError(cls.name, token, [g.value for g in OverlayGravity])

        if len(args) == 3:
            return cls(file=file, opacity=opacity, gravity=gravity)

        margins = Margins(
            top=parse_int_arg(cls.name, args, 3),
            right=parse_int_arg(cls.name, args, 4),
            bottom=parse_int_arg(cls.name, args, 5),
            left=parse_int_arg(cls.name, args, 6),
        )
        return cls(file=file, opacity=opacity, gravity=gravity, margins=margins)

    @property
    def vertical_gravity(self) -> Gravity:
        return VERTICAL_GRAVITY[self.gravity]

    @property
    def horizontal_gravity(self) -> Gravity:
        return HORIZONTAL_GRAVITY[self.gravity]

    def create_options(self, image: ISourceImage) -> TransformStage:
        orig_size = image.size()

        buf = read_asset(self.file)
        over_size = image_size(buf)

        left, top = compute_overlay_offset(
            orig_size,
            over_size,
            self.vertical_gravity,
            self.horizontal_gravity,
            self.margins,
        )
        logger.debug(
            f"Create options for overlay {self.file}: {over_size.width}x{over_size.height} at ({left}, {top})"
        )

        return TransformStage(
            overlay=OverlaySpec(buf=buf, opacity=self.opacity, left=left, top=top)
        )

    def can_be_merged(self, accumulated: TransformStage, desired: TransformStage) -> bool:
        # mergeable when no size is set and the overlay slot is free or holds the same overlay
        return (
            accumulated.width == 0
            and accumulated.height == 0
            and (
                accumulated.overlay.is_empty()
                or accumulated.overlay.matches(desired.overlay)
            )
        )

    def merge(self, accumulated: TransformStage, desired: TransformStage) -> TransformStage:
        accumulated.overlay = replace(desired.overlay)
        return accumulated
