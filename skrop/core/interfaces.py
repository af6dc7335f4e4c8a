from typing import ClassVar, Protocol, Sequence, runtime_checkable
from skrop.core.stage import TransformStage
from skrop.core.types import ImageSize


class ISourceImage(Protocol):
    """
    Handle on the image carried in the response body.
    """

    data: bytes

    def size(self) -> ImageSize: ...


@runtime_checkable
class IImageOperation(Protocol):
    """
    One configured filter declaration.

    Instances are immutable and shared by every request on the route. The
    merge engine only ever talks to this interface.
    """

    name: ClassVar[str]

    def create_options(self, image: ISourceImage) -> TransformStage: ...

    def can_be_merged(
        self, accumulated: TransformStage, desired: TransformStage
    ) -> bool: ...

    def merge(
        self, accumulated: TransformStage, desired: TransformStage
    ) -> TransformStage: ...


class IOperationFactory(Protocol):
    name: ClassVar[str]

    @classmethod
    def create(cls, args: Sequence[object]) -> IImageOperation: ...


class INativeEngine(Protocol):
    """
    Executes stages against encoded image bytes.
    """

    def size(self, data: bytes) -> ImageSize: ...

    def execute(self, stage: TransformStage, data: bytes) -> bytes: ...
