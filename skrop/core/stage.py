from dataclasses import dataclass, field
from typing import Any, Dict
from skrop.core.gravity import Gravity


@dataclass
class OverlaySpec:
    """
    Image composited on top of a stage's output at an absolute offset.
    """

    buf: bytes = b""
    opacity: float = 0.0
    left: int = 0
    top: int = 0

    def is_empty(self) -> bool:
        return not self.buf and self.opacity == 0.0 and self.left == 0 and self.top == 0

    def matches(self, other: "OverlaySpec") -> bool:
        """
        Loose equality used when deciding whether two overlays may share a stage.
        Content is compared by length only, two different assets of the same
        size at the same position are treated as the same overlay.
        """
        return (
            self.opacity == other.opacity
            and self.top == other.top
            and self.left == other.left
            and len(self.buf) == len(other.buf)
        )


@dataclass
class TransformStage:
    """
    Accumulated configuration for one native engine invocation.
    Zero values mean "no constraint".
    """

    width: int = 0
    height: int = 0
    crop: bool = False
    gravity: Gravity = Gravity.CENTRE
    overlay: OverlaySpec = field(default_factory=OverlaySpec)

    def has_dimensions(self) -> bool:
        return self.width != 0 or self.height != 0

    def is_empty(self) -> bool:
        return not self.has_dimensions() and not self.crop and self.overlay.is_empty()

    def describe(self) -> Dict[str, Any]:
        """
        JSON friendly summary; overlay content is reported by length.
        """
        return {
            "width": self.width,
            "height": self.height,
            "crop": self.crop,
            "gravity": self.gravity.value,
            "overlay": None
            if self.overlay.is_empty()
            else {
                "bytes": len(self.overlay.buf),
                "opacity": self.overlay.opacity,
                "left": self.overlay.left,
                "top": self.overlay.top,
            },
        }
