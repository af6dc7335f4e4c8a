from dataclasses import dataclass
from typing import Any, ClassVar, Sequence
from skrop.core.errors import InvalidParameterTypeError
from skrop.core.interfaces import ISourceImage
from skrop.core.stage import TransformStage
from skrop.core.validation import check_arg_count, parse_int_arg
from skrop.kernel.system.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ResizeOperation:
    """
    resize(width, height)

    Scales the image without cropping. A zero dimension follows the aspect
    ratio of the other one.
    """

    name: ClassVar[str] = "resize"

    width: int
    height: int

    @classmethod
    def create(cls, args: Sequence[Any]) -> "ResizeOperation":
        check_arg_count(cls.name, args, 2)

        width = parse_int_arg(cls.name, args, 0)
        height = parse_int_arg(cls.name, args, 1)

        if width < 0:
            raise InvalidParameterTypeError(cls.name, 0, width, "a non-negative integer")
        if height < 0:
            raise InvalidParameterTypeError(cls.name, 1, height, "a non-negative integer")
        if width == 0 and height == 0:
            raise InvalidParameterTypeError(cls.name, 0, width, "non-zero when height is 0")

        return cls(width=width, height=height)

    def create_options(self, image: ISourceImage) -> TransformStage:
        logger.debug(f"Create options for resize {self}")
        return TransformStage(width=self.width, height=self.height, crop=False)

    def can_be_merged(self, accumulated: TransformStage, desired: TransformStage) -> bool:
        if not accumulated.has_dimensions() and not accumulated.crop:
            return True
        return (
            accumulated.width == desired.width
            and accumulated.height == desired.height
            and not accumulated.crop
        )

    def merge(self, accumulated: TransformStage, desired: TransformStage) -> TransformStage:
        accumulated.width = desired.width
        accumulated.height = desired.height
        accumulated.crop = False
        return accumulated
