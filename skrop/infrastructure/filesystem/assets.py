import os
from skrop.core.errors import ResourceUnavailableError
from skrop.kernel.system.config import APP_CONFIG
from skrop.kernel.system.logging import get_logger

logger = get_logger(__name__)


def resolve_asset_path(path: str) -> str:
    """
    Relative asset paths are resolved against the configured asset directory.
    """
    if os.path.isabs(path):
        return path
    return os.path.join(APP_CONFIG.asset_dir, path)


def read_asset(path: str) -> bytes:
    """
    Reads the full content of an auxiliary image (e.g. an overlay).
    """
    full_path = resolve_asset_path(path)
    try:
        with open(full_path, "rb") as f:
            return f.read()
    except OSError as e:
        logger.error(f"Failed to read asset {full_path}: {e}")
        raise ResourceUnavailableError(full_path, e.strerror or str(e)) from e
