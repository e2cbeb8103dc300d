"""Gallery operations used by the GraphQL resolvers."""
from typing import List, Optional

from shared.catalog import ImageCatalog
from shared.models import ImageRecord
from shared.state_store import ImageStateStore


class GalleryService:
    """Joins the directory listing with the like/featured state store."""

    def __init__(self, catalog: ImageCatalog, store: ImageStateStore):
        self.catalog = catalog
        self.store = store

    def list_images(self) -> List[ImageRecord]:
        return self.catalog.build_records(self.store.load())

    def get_image(self, image_id: str) -> Optional[ImageRecord]:
        for record in self.list_images():
            if record.id == image_id:
                return record
        return None

    def like_image(self, image_id: str) -> Optional[ImageRecord]:
        """Toggle the like flag; None if no file currently has this ID."""
        self.store.toggle_like(image_id)
        return self.get_image(image_id)

    def mark_featured(self, image_id: str) -> Optional[ImageRecord]:
        """Toggle the featured flag; None if no file currently has this ID."""
        self.store.toggle_featured(image_id)
        return self.get_image(image_id)
