import os
from skrop.core.types import AppConfig


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def load_config() -> AppConfig:
    """
    Builds the application configuration from SKROP_* environment variables.
    """
    return AppConfig(
        asset_dir=os.path.abspath(os.getenv("SKROP_ASSET_DIR", ".")),
        jpeg_quality=max(1, min(100, _env_int("SKROP_JPEG_QUALITY", 90))),
        log_level=os.getenv("SKROP_LOG_LEVEL", "INFO").upper(),
    )


# Global application constants
APP_CONFIG = load_config()
