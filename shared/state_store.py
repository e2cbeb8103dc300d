"""Like/featured state persistence: in memory or in a flat JSON file."""
import json
import os
import tempfile
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterable, List, Optional, Union
from loguru import logger
from pydantic import ValidationError

from shared.models import ImageState


class StateFileError(RuntimeError):
    """Raised when the JSON state file cannot be read or parsed."""


def _find(states: List[ImageState], image_id: str) -> Optional[ImageState]:
    for state in states:
        if state.id == image_id:
            return state
    return None


def _apply_like(states: List[ImageState], image_id: str) -> ImageState:
    state = _find(states, image_id)
    if state is None:
        state = ImageState(id=image_id, likes=1, is_featured=False)
        states.append(state)
    else:
        state.likes = 1 if state.likes == 0 else 0
    return state


def _apply_featured(states: List[ImageState], image_id: str) -> ImageState:
    state = _find(states, image_id)
    if state is None:
        state = ImageState(id=image_id, likes=0, is_featured=True)
        states.append(state)
    else:
        state.is_featured = not state.is_featured
    return state


class ImageStateStore(ABC):
    """Interface shared by the state backends."""

    backend = "base"

    def __init__(self):
        self._lock = threading.Lock()

    @abstractmethod
    def load(self) -> List[ImageState]:
        """Return a snapshot of every stored state."""
        pass

    def find(self, image_id: str) -> Optional[ImageState]:
        return _find(self.load(), image_id)

    @abstractmethod
    def toggle_like(self, image_id: str) -> ImageState:
        """Like the image, or unlike it if already liked."""
        pass

    @abstractmethod
    def toggle_featured(self, image_id: str) -> ImageState:
        """Flip the featured flag."""
        pass


class MemoryStateStore(ImageStateStore):
    """Keeps state in process memory; lost on restart."""

    backend = "memory"

    def __init__(self, initial: Optional[Iterable[ImageState]] = None):
        super().__init__()
        self._states: List[ImageState] = [s.model_copy() for s in (initial or [])]

    def load(self) -> List[ImageState]:
        with self._lock:
            return [s.model_copy() for s in self._states]

    def toggle_like(self, image_id: str) -> ImageState:
        with self._lock:
            state = _apply_like(self._states, image_id)
            logger.info(f"Image {image_id} likes -> {state.likes}")
            return state.model_copy()

    def toggle_featured(self, image_id: str) -> ImageState:
        with self._lock:
            state = _apply_featured(self._states, image_id)
            logger.info(f"Image {image_id} featured -> {state.is_featured}")
            return state.model_copy()


class JsonFileStateStore(ImageStateStore):
    """Reads the JSON file on every call and rewrites it on every toggle."""

    backend = "json"

    def __init__(self, path: Union[str, Path], initial: Optional[Iterable[ImageState]] = None):
        super().__init__()
        self.path = Path(path)
        self._initial: List[ImageState] = [s.model_copy() for s in (initial or [])]

    def _read(self) -> List[ImageState]:
        if not self.path.exists():
            return [s.model_copy() for s in self._initial]

        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.error(f"Invalid JSON in state file {self.path}: {e}")
            raise StateFileError(f"Invalid JSON in state file {self.path}: {e}")
        except OSError as e:
            logger.error(f"Could not read state file {self.path}: {e}")
            raise StateFileError(f"Could not read state file {self.path}: {e}")

        if not isinstance(raw, list):
            logger.error(f"State file {self.path} does not contain a JSON list")
            raise StateFileError(f"State file {self.path} must contain a JSON list")

        try:
            return [ImageState.model_validate(item) for item in raw]
        except ValidationError as e:
            logger.error(f"Malformed entry in state file {self.path}: {e}")
            raise StateFileError(f"Malformed entry in state file {self.path}")

    def _write(self, states: List[ImageState]):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = json.dumps([s.to_json() for s in states], indent=2)
        fd, tmp_name = tempfile.mkstemp(dir=str(self.path.parent), prefix=".image-data-", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            os.replace(tmp_name, self.path)
        except OSError:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise

    def load(self) -> List[ImageState]:
        with self._lock:
            return self._read()

    def toggle_like(self, image_id: str) -> ImageState:
        with self._lock:
            states = self._read()
            state = _apply_like(states, image_id)
            self._write(states)
            logger.info(f"Image {image_id} likes -> {state.likes} ({self.path.name})")
            return state

    def toggle_featured(self, image_id: str) -> ImageState:
        with self._lock:
            states = self._read()
            state = _apply_featured(states, image_id)
            self._write(states)
            logger.info(f"Image {image_id} featured -> {state.is_featured} ({self.path.name})")
            return state


def build_state_store(settings) -> ImageStateStore:
    """Create the state backend selected by STATE_BACKEND."""
    if settings.state_backend == "json":
        path = settings.get_state_path()
        logger.info(f"Using JSON state file: {path}")
        return JsonFileStateStore(path, settings.image_data)
    logger.info(f"Using in-memory state ({len(settings.image_data)} seeded entries)")
    return MemoryStateStore(settings.image_data)
