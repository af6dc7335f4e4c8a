from typing import List, Optional, Sequence, Tuple
from skrop.application.composer import compose_stages
from skrop.core.errors import FilterExecutionError
from skrop.core.interfaces import IImageOperation, INativeEngine, ISourceImage
from skrop.core.stage import TransformStage
from skrop.infrastructure.native.pillow_engine import PillowEngine, SourceImage
from skrop.kernel.system.logging import get_logger

logger = get_logger(__name__)


def run_stages(
    operations: Sequence[IImageOperation], body: bytes, engine: INativeEngine
) -> Tuple[List[TransformStage], bytes]:
    """
    Composes and executes the chain, returning the stages and the final bytes.
    Each stage runs as soon as it is closed, so the next operations see its
    output.
    """
    data = body
    executed = 0

    def run_stage(stage: TransformStage, image: ISourceImage) -> ISourceImage:
        nonlocal data, executed
        executed += 1
        try:
            data = engine.execute(stage, image.data)
        except FilterExecutionError as e:
            logger.error(f"Stage {executed} failed: {e}")
            raise
        return SourceImage(data, engine.size)

    try:
        stages = compose_stages(operations, SourceImage(body, engine.size), run_stage)
    except FilterExecutionError as e:
        logger.error(f"Failed to apply filter chain: {e}")
        raise

    return stages, data


def handle_image_response(
    operations: Sequence[IImageOperation],
    body: bytes,
    engine: Optional[INativeEngine] = None,
) -> bytes:
    """
    Applies a filter chain to a response body and returns the new body.

    Stages are executed in order, each one reading the previous one's output.
    Errors are logged and re-raised; whether the caller then passes the
    original body through or fails the response is its own decision.
    """
    if not operations:
        return body

    engine = engine or PillowEngine()
    stages, data = run_stages(operations, body, engine)

    logger.debug(f"Processed image with {len(stages)} stages, {len(body)} -> {len(data)} bytes")
    return data
