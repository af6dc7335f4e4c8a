from skrop.features.overlay.logic import Margins, compute_overlay_offset
from skrop.features.overlay.operation import OverlayImageOperation

__all__ = ["Margins", "OverlayImageOperation", "compute_overlay_offset"]
