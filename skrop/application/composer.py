from typing import Callable, List, Optional, Sequence
from skrop.core.interfaces import IImageOperation, ISourceImage
from skrop.core.stage import TransformStage
from skrop.kernel.system.logging import get_logger

logger = get_logger(__name__)

# Runs a finished stage and returns the image later operations are derived against
StageRunner = Callable[[TransformStage, ISourceImage], ISourceImage]


def compose_stages(
    operations: Sequence[IImageOperation],
    image: ISourceImage,
    run_stage: Optional[StageRunner] = None,
) -> List[TransformStage]:
    """
    Groups an ordered chain of operations into the fewest native stages.

    Walks the chain once, left to right. Each operation's desired options are
    folded into the current stage when the operation says they can be,
    otherwise the current stage is closed and a new one started. There is no
    reordering or lookahead, so the result renders the same as running every
    operation on its own, provided each can_be_merged is conservative.

    With `run_stage`, every closed stage is executed right away and the
    following operations derive their options from its output, so options
    that depend on the image size (overlay offsets) match the image they are
    applied to. Without it, all options are derived from `image`.

    Any error raised while deriving options or running a stage aborts the
    whole composition.
    """
    stages: List[TransformStage] = []
    current = TransformStage()

    def flush(stage: TransformStage, image: ISourceImage) -> ISourceImage:
        stages.append(stage)
        if run_stage is None:
            return image
        return run_stage(stage, image)

    for op in operations:
        desired = op.create_options(image)

        if not current.is_empty() and op.can_be_merged(current, desired):
            op.merge(current, desired)
            continue

        if not current.is_empty():
            logger.debug(f"Flushing stage {len(stages)} before {op.name}")
            image = flush(current, image)
            current = TransformStage()

        op.merge(current, desired)

    if not current.is_empty():
        flush(current, image)

    logger.debug(f"Composed {len(operations)} operations into {len(stages)} stages")
    return stages
