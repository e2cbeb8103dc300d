"""GraphQL types and resolvers for the image gallery."""
from typing import List, Optional

import strawberry
from strawberry.types import Info

from shared.gallery import GalleryService
from shared.models import ImageRecord


@strawberry.type
class Image:
    id: strawberry.ID
    src: str
    alt: str
    likes: int
    is_featured: bool

    @classmethod
    def from_record(cls, record: Optional[ImageRecord]) -> Optional["Image"]:
        if record is None:
            return None
        return cls(
            id=strawberry.ID(record.id),
            src=record.src,
            alt=record.alt,
            likes=record.likes,
            is_featured=record.is_featured,
        )


def _gallery(info: Info) -> GalleryService:
    return info.context["gallery"]


@strawberry.type
class Query:
    @strawberry.field(description="All images in the public images directory.")
    def images(self, info: Info) -> Optional[List[Optional[Image]]]:
        return [Image.from_record(record) for record in _gallery(info).list_images()]


@strawberry.type
class Mutation:
    @strawberry.mutation(description="Like an image, or unlike it if already liked.")
    def like_image(self, info: Info, id: strawberry.ID) -> Optional[Image]:
        return Image.from_record(_gallery(info).like_image(str(id)))

    @strawberry.mutation(description="Mark an image as featured, or clear the mark.")
    def mark_featured(self, info: Info, id: strawberry.ID) -> Optional[Image]:
        return Image.from_record(_gallery(info).mark_featured(str(id)))


schema = strawberry.Schema(query=Query, mutation=Mutation)
