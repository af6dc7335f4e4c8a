from dataclasses import dataclass
from typing import Any, ClassVar, Sequence
from skrop.core.errors import InvalidEnumValueError, InvalidParameterTypeError
from skrop.core.gravity import CROP_ANCHOR_GRAVITY, CropAnchor, lookup_crop_anchor
from skrop.core.interfaces import ISourceImage
from skrop.core.stage import TransformStage
from skrop.core.validation import check_arg_count, parse_int_arg
from skrop.kernel.system.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class CropOperation:
    """
    crop(width, height[, anchor])

    Scales the image to cover width x height and cuts away what sticks out,
    keeping the side named by the anchor.
    """

    name: ClassVar[str] = "crop"

    width: int
    height: int
    anchor: CropAnchor = CropAnchor.CENTER

    @classmethod
    def create(cls, args: Sequence[Any]) -> "CropOperation":
        check_arg_count(cls.name, args, 2, 3)

        width = parse_int_arg(cls.name, args, 0)
        height = parse_int_arg(cls.name, args, 1)

        if width < 0:
            raise InvalidParameterTypeError(cls.name, 0, width, "a non-negative integer")
        if height < 0:
            raise InvalidParameterTypeError(cls.name, 1, height, "a non-negative integer")

        if len(args) == 2:
            return cls(width=width, height=height)

        anchor = lookup_crop_anchor(args[2]) if isinstance(args[2], str) else None
        if anchor is None:
            raise InvalidEnumValueError(cls.name, args[2], [a.value for a in CropAnchor])

        return cls(width=width, height=height, anchor=anchor)

    def create_options(self, image: ISourceImage) -> TransformStage:
        logger.debug(f"Create options for crop {self}")

        return TransformStage(
            width=self.width,
            height=self.height,
            gravity=CROP_ANCHOR_GRAVITY[self.anchor],
            crop=True,
        )

    def can_be_merged(self, accumulated: TransformStage, desired: TransformStage) -> bool:
        if accumulated.width == 0 and accumulated.height == 0 and not accumulated.crop:
            return True
        return (
            accumulated.width == desired.width
            and accumulated.height == desired.height
            and accumulated.crop == desired.crop
        )

    def merge(self, accumulated: TransformStage, desired: TransformStage) -> TransformStage:
        accumulated.width = desired.width
        accumulated.height = desired.height
        accumulated.gravity = desired.gravity
        accumulated.crop = desired.crop
        return accumulated
