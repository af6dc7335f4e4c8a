from skrop.features.crop.operation import CropOperation

__all__ = ["CropOperation"]
