import pytest
from helpers import FakeImage
from skrop.application.composer import compose_stages
from skrop.core.errors import ResourceUnavailableError
from skrop.core.gravity import Gravity
from skrop.core.stage import TransformStage
from skrop.features.crop import CropOperation
from skrop.features.overlay import OverlayImageOperation
from skrop.features.resize import ResizeOperation


@pytest.fixture
def image():
    return FakeImage(1000, 500)


def test_empty_chain(image):
    assert compose_stages([], image) == []


def test_single_crop(image):
    stages = compose_stages([CropOperation.create([200, 100])], image)
    assert len(stages) == 1
    assert stages[0].crop is True
    assert (stages[0].width, stages[0].height) == (200, 100)


def test_identical_crops_share_a_stage(image):
    ops = [CropOperation.create([200, 100]), CropOperation.create([200, 100, "north"])]
    stages = compose_stages(ops, image)
    assert len(stages) == 1
    assert (stages[0].width, stages[0].height) == (200, 100)
    assert stages[0].gravity == Gravity.NORTH


def test_different_crops_keep_their_order(image):
    ops = [CropOperation.create([200, 100]), CropOperation.create([50, 100])]
    stages = compose_stages(ops, image)
    assert [(s.width, s.height, s.crop) for s in stages] == [(200, 100, True), (50, 100, True)]


def test_overlay_then_crop_is_one_stage(image, overlay_file):
    ops = [
        OverlayImageOperation.create([overlay_file, 0.5, "CC"]),
        CropOperation.create([200, 100]),
    ]
    stages = compose_stages(ops, image)

    assert len(stages) == 1
    assert stages[0].crop is True
    assert (stages[0].width, stages[0].height) == (200, 100)
    assert (stages[0].overlay.left, stages[0].overlay.top) == (450, 225)
    assert stages[0].overlay.opacity == 0.5


def test_crop_then_overlay_needs_two_stages(image, overlay_file):
    ops = [
        CropOperation.create([200, 100]),
        OverlayImageOperation.create([overlay_file, 0.5, "CC"]),
    ]
    stages = compose_stages(ops, image)

    assert len(stages) == 2
    assert stages[0].crop and stages[0].overlay.is_empty()
    assert not stages[1].has_dimensions() and not stages[1].overlay.is_empty()


def test_repeated_overlay_folds(image, overlay_file):
    op = OverlayImageOperation.create([overlay_file, 0.5, "SE"])
    assert len(compose_stages([op, op], image)) == 1


def test_greedy_without_lookahead(image):
    ops = [
        CropOperation.create([200, 100]),
        CropOperation.create([50, 50]),
        CropOperation.create([200, 100]),
    ]
    assert len(compose_stages(ops, image)) == 3


def test_resize_chain(image, overlay_file):
    ops = [
        OverlayImageOperation.create([overlay_file, 1.0, "NW"]),
        ResizeOperation.create([500, 0]),
        CropOperation.create([100, 100]),
    ]
    stages = compose_stages(ops, image)
    assert len(stages) == 2
    assert (stages[0].width, stages[0].crop) == (500, False)
    assert not stages[0].overlay.is_empty()
    assert (stages[1].width, stages[1].height, stages[1].crop) == (100, 100, True)


def test_derivation_error_aborts(image, tmp_path):
    ops = [
        CropOperation.create([200, 100]),
        OverlayImageOperation.create([str(tmp_path / "gone.png"), 1.0, "NE"]),
    ]
    with pytest.raises(ResourceUnavailableError):
        compose_stages(ops, image)


class RecordingOperation:
    """Operation that never merges and records every call."""

    name = "record"

    def __init__(self, calls):
        self.calls = calls

    def create_options(self, image):
        self.calls.append("create_options")
        return TransformStage(width=1)

    def can_be_merged(self, accumulated, desired):
        self.calls.append("can_be_merged")
        return False

    def merge(self, accumulated, desired):
        self.calls.append("merge")
        accumulated.width = desired.width
        return accumulated


def test_engine_only_uses_the_operation_interface(image):
    calls = []
    stages = compose_stages([RecordingOperation(calls), RecordingOperation(calls)], image)

    assert len(stages) == 2
    # the predicate is not consulted against an empty stage
    assert calls == ["create_options", "merge", "create_options", "can_be_merged", "merge"]


def test_operations_are_not_modified(image, overlay_file):
    ops = [CropOperation.create([200, 100]), OverlayImageOperation.create([overlay_file, 0.5, "CC"])]
    before = list(ops)
    compose_stages(ops, image)
    compose_stages(ops, FakeImage(300, 300))
    assert ops == before


def test_run_stage_feeds_later_derivations(image, overlay_file):
    executed = []

    def run_stage(stage, img):
        executed.append((stage.width, stage.height))
        return FakeImage(stage.width, stage.height)

    ops = [
        CropOperation.create([200, 100]),
        OverlayImageOperation.create([overlay_file, 1.0, "SE"]),
    ]
    stages = compose_stages(ops, image, run_stage)

    assert executed == [(200, 100), (0, 0)]
    assert (stages[1].overlay.left, stages[1].overlay.top) == (100, 50)


def test_run_stage_not_called_after_derivation_error(image, tmp_path):
    executed = []
    ops = [
        CropOperation.create([200, 100]),
        OverlayImageOperation.create([str(tmp_path / "gone.png"), 1.0, "NE"]),
    ]
    with pytest.raises(ResourceUnavailableError):
        compose_stages(ops, image, lambda stage, img: executed.append(stage) or img)
    assert executed == []
