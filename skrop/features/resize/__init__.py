from skrop.features.resize.operation import ResizeOperation

__all__ = ["ResizeOperation"]
