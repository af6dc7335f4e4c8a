import io
import numpy as np
from PIL import Image, ImageOps, UnidentifiedImageError
from typing import Callable, Optional, Tuple
from skrop.core.errors import SizeQueryFailureError, StageExecutionError
from skrop.core.gravity import Gravity
from skrop.core.stage import OverlaySpec, TransformStage
from skrop.core.types import ImageSize
from skrop.kernel.system.config import APP_CONFIG
from skrop.kernel.system.logging import get_logger

logger = get_logger(__name__)

# ImageOps.fit centering, (horizontal, vertical)
GRAVITY_CENTERING = {
    Gravity.CENTRE: (0.5, 0.5),
    Gravity.NORTH: (0.5, 0.0),
    Gravity.SOUTH: (0.5, 1.0),
    Gravity.EAST: (1.0, 0.5),
    Gravity.WEST: (0.0, 0.5),
}


def image_size(data: bytes) -> ImageSize:
    """
    Reads the pixel dimensions from the image header without decoding pixels.
    """
    try:
        with Image.open(io.BytesIO(data)) as img:
            width, height = img.size
    except (UnidentifiedImageError, OSError, ValueError) as e:
        raise SizeQueryFailureError(f"cannot determine image size: {e}") from e
    return ImageSize(width=width, height=height)


class SourceImage:
    """
    The image carried in a response body. Size is queried once and reused
    by every operation that needs it during the same request.
    """

    def __init__(
        self, data: bytes, size_query: Callable[[bytes], ImageSize] = image_size
    ):
        self.data = data
        self._size_query = size_query
        self._size: Optional[ImageSize] = None

    def size(self) -> ImageSize:
        if self._size is None:
            self._size = self._size_query(self.data)
        return self._size


def _target_size(img: Image.Image, width: int, height: int) -> Tuple[int, int]:
    """
    A zero dimension is derived from the other one keeping the aspect ratio.
    """
    w, h = img.size
    if width and height:
        return width, height
    if width:
        return width, max(1, round(h * width / w))
    return max(1, round(w * height / h)), height


def _apply_overlay(img: Image.Image, overlay: OverlaySpec) -> Image.Image:
    with Image.open(io.BytesIO(overlay.buf)) as src:
        layer = src.convert("RGBA")

    rgba = np.asarray(layer).copy()
    rgba[..., 3] = (rgba[..., 3].astype(np.float32) * overlay.opacity).astype(np.uint8)
    layer = Image.fromarray(rgba)

    base = img.convert("RGBA")
    canvas = Image.new("RGBA", base.size, (0, 0, 0, 0))
    canvas.paste(layer, (overlay.left, overlay.top))
    return Image.alpha_composite(base, canvas)


class PillowEngine:
    """
    Reference native engine. Applies, in order: overlay, then crop or resize.
    """

    def __init__(self, jpeg_quality: Optional[int] = None):
        self.jpeg_quality = jpeg_quality or APP_CONFIG.jpeg_quality

    def size(self, data: bytes) -> ImageSize:
        return image_size(data)

    def execute(self, stage: TransformStage, data: bytes) -> bytes:
        try:
            img = Image.open(io.BytesIO(data))
            img.load()
        except (UnidentifiedImageError, OSError) as e:
            raise SizeQueryFailureError(f"cannot decode image: {e}") from e

        fmt = img.format or "PNG"

        try:
            img = self._render(stage, img, fmt)
            out = self._encode(img, fmt)
        except (ValueError, OSError) as e:
            raise StageExecutionError(f"cannot apply stage {stage.describe()}: {e}") from e

        logger.debug(f"Executed stage {stage.describe()} -> {img.size}")
        return out

    def _render(self, stage: TransformStage, img: Image.Image, fmt: str) -> Image.Image:
        mode = img.mode

        # overlay offsets refer to the stage input, so it goes first
        if not stage.overlay.is_empty():
            img = _apply_overlay(img, stage.overlay)
            if fmt == "JPEG" or mode not in ("RGBA", "LA", "P"):
                img = img.convert("RGB")

        if stage.has_dimensions():
            size = _target_size(img, stage.width, stage.height)
            if stage.crop:
                img = ImageOps.fit(
                    img,
                    size,
                    method=Image.Resampling.LANCZOS,
                    centering=GRAVITY_CENTERING[stage.gravity],
                )
            else:
                img = img.resize(size, Image.Resampling.LANCZOS)

        return img

    def _encode(self, img: Image.Image, fmt: str) -> bytes:
        buffer = io.BytesIO()
        if fmt == "JPEG":
            if img.mode not in ("RGB", "L"):
                img = img.convert("RGB")
            img.save(buffer, format=fmt, quality=self.jpeg_quality)
        else:
            img.save(buffer, format=fmt)
        return buffer.getvalue()
