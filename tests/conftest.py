import pytest
from helpers import make_image


@pytest.fixture
def source_png():
    return make_image(1000, 500)


@pytest.fixture
def overlay_file(tmp_path):
    path = tmp_path / "overlay.png"
    path.write_bytes(make_image(100, 50, color=(0, 0, 255, 255)))
    return str(path)
