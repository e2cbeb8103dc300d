"""Copies a source image folder into the public images directory."""
import shutil
from pathlib import Path
from typing import Union
from loguru import logger


def mirror_directory(source: Union[str, Path], destination: Union[str, Path]) -> int:
    """
    Copy every regular file from source into destination.

    Existing files with the same name are overwritten; files that only exist
    in destination are kept. Subdirectories are not descended into.

    Args:
        source: Folder holding the original images
        destination: Public images folder served to clients

    Returns:
        Number of files copied
    """
    source = Path(source)
    destination = Path(destination)

    if not source.is_dir():
        logger.error(f"Source image folder does not exist: {source}")
        raise FileNotFoundError(f"Source image folder not found: {source}")

    destination.mkdir(parents=True, exist_ok=True)

    copied = 0
    for entry in sorted(source.iterdir(), key=lambda p: p.name):
        if not entry.is_file():
            continue
        dest_path = destination / entry.name
        try:
            shutil.copy2(entry, dest_path)
        except OSError as e:
            logger.error(f"Failed to copy {entry} to {dest_path}: {e}")
            raise
        logger.debug(f"Copied {entry} to {dest_path}")
        copied += 1

    logger.info(f"Mirrored {copied} files from {source} to {destination}")
    return copied
