import pytest
from helpers import FakeImage
from skrop.core.errors import InvalidParameterCountError, InvalidParameterTypeError
from skrop.core.stage import OverlaySpec, TransformStage
from skrop.features.resize import ResizeOperation


def test_create():
    op = ResizeOperation.create([640, 0])
    assert (op.width, op.height) == (640, 0)


@pytest.mark.parametrize("args", [[640], [640, 480, 1]])
def test_invalid_count(args):
    with pytest.raises(InvalidParameterCountError):
        ResizeOperation.create(args)


@pytest.mark.parametrize("args", [[-1, 100], [100, -1], [0, 0], ["big", 100]])
def test_invalid_dimensions(args):
    with pytest.raises(InvalidParameterTypeError):
        ResizeOperation.create(args)


def test_create_options():
    opts = ResizeOperation.create([640, 480]).create_options(FakeImage(1, 1))
    assert (opts.width, opts.height, opts.crop) == (640, 480, False)


def test_merge_rules():
    op = ResizeOperation.create([640, 480])
    desired = op.create_options(FakeImage(1, 1))

    with_overlay = TransformStage(overlay=OverlaySpec(buf=b"x", opacity=1.0))
    assert op.can_be_merged(with_overlay, desired)
    assert op.can_be_merged(TransformStage(width=640, height=480), desired)
    assert not op.can_be_merged(TransformStage(width=320, height=240), desired)
    assert not op.can_be_merged(TransformStage(width=640, height=480, crop=True), desired)

    op.merge(with_overlay, desired)
    assert (with_overlay.width, with_overlay.height, with_overlay.crop) == (640, 480, False)
    assert not with_overlay.overlay.is_empty()
