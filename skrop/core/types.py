from dataclasses import dataclass


@dataclass(frozen=True)
class ImageSize:
    """
    Pixel dimensions of an encoded image.
    """

    width: int
    height: int


@dataclass
class AppConfig:
    asset_dir: str
    jpeg_quality: int
    log_level: str
