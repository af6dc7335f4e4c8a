import io
from PIL import Image
from skrop.core.types import ImageSize


def make_image(width: int, height: int, fmt: str = "PNG", color=(200, 30, 30, 255)) -> bytes:
    mode = "RGBA" if fmt == "PNG" else "RGB"
    img = Image.new(mode, (width, height), color[: len(mode)])
    buffer = io.BytesIO()
    img.save(buffer, format=fmt)
    return buffer.getvalue()


def open_image(data: bytes) -> Image.Image:
    img = Image.open(io.BytesIO(data))
    img.load()
    return img


class FakeImage:
    """Source image stand-in with a fixed size."""

    def __init__(self, width: int, height: int, data: bytes = b""):
        self.data = data
        self._size = ImageSize(width, height)
        self.size_calls = 0

    def size(self):
        self.size_calls += 1
        return self._size


def is_close(pixel, color, tol: int = 8) -> bool:
    return all(abs(a - b) <= tol for a, b in zip(pixel, color))
