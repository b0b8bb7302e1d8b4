"""Load asset files from a local folder."""

import logging
from pathlib import Path

from mintpipe.content_store.models import AssetFile

logger = logging.getLogger(__name__)


def list_asset_paths(folder: Path | str) -> list[Path]:
    """List regular, non-hidden files in a folder, sorted by name.

    Raises:
        FileNotFoundError: If the folder does not exist
        NotADirectoryError: If the path is not a directory
    """
    path = Path(folder).resolve()
    if not path.exists():
        raise FileNotFoundError(f"Asset folder not found: {path}")
    if not path.is_dir():
        raise NotADirectoryError(f"Asset path is not a directory: {path}")

    return sorted(
        (p for p in path.iterdir() if p.is_file() and not p.name.startswith(".")),
        key=lambda p: p.name,
    )


def load_asset_files(folder: Path | str) -> list[AssetFile]:
    """Read every asset in a folder into memory, in listing order."""
    assets = [AssetFile(name=p.name, content=p.read_bytes()) for p in list_asset_paths(folder)]
    logger.info(f"Loaded {len(assets)} asset files from {folder}")
    return assets
