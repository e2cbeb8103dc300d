"""Directory listing that turns image files into API records."""
from pathlib import Path
from typing import Dict, Iterable, List, Union
from loguru import logger

from shared.models import ImageRecord, ImageState


class ImageDirectoryError(RuntimeError):
    """Raised when the images directory cannot be listed."""


class ImageCatalog:
    """Enumerates the public images directory.

    IDs are positional: the n-th file in name order gets ID ``str(n)``,
    starting at 1. Adding or removing a file shifts the IDs after it.
    """

    def __init__(self, images_dir: Union[str, Path], src_prefix: str = "/images"):
        self.images_dir = Path(images_dir)
        self.src_prefix = src_prefix.rstrip("/")

    def list_files(self) -> List[str]:
        """Return the names of regular files in the images directory, sorted."""
        try:
            entries = sorted(self.images_dir.iterdir(), key=lambda p: p.name)
        except FileNotFoundError:
            logger.error(f"Images directory does not exist: {self.images_dir}")
            raise ImageDirectoryError(f"Images directory not found: {self.images_dir}")
        except NotADirectoryError:
            logger.error(f"Images path is not a directory: {self.images_dir}")
            raise ImageDirectoryError(f"Images path is not a directory: {self.images_dir}")
        except PermissionError as e:
            logger.error(f"Cannot read images directory {self.images_dir}: {e}")
            raise ImageDirectoryError(f"Images directory is not readable: {self.images_dir}")

        return [entry.name for entry in entries if entry.is_file()]

    def build_records(self, states: Iterable[ImageState]) -> List[ImageRecord]:
        """Combine the file listing with stored like/featured state."""
        by_id: Dict[str, ImageState] = {}
        for state in states:
            # First entry wins
            by_id.setdefault(state.id, state)

        records = []
        for index, filename in enumerate(self.list_files()):
            image_id = str(index + 1)
            state = by_id.get(image_id)
            records.append(ImageRecord(
                id=image_id,
                src=f"{self.src_prefix}/{filename}",
                alt=filename,
                likes=state.likes if state else 0,
                is_featured=state.is_featured if state else False,
            ))
        return records
