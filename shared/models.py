"""Data models for the image gallery API."""
from typing import Any
from pydantic import BaseModel, ConfigDict, Field, field_validator


class ImageState(BaseModel):
    """Persisted like/featured state for one image ID."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    likes: int = 0
    is_featured: bool = Field(default=False, alias="isFeatured")

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        # Numeric IDs from IMAGE_DATA become strings
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    def to_json(self) -> dict:
        return self.model_dump(by_alias=True)


class ImageRecord(BaseModel):
    """An image as exposed through the API."""
    id: str
    src: str
    alt: str
    likes: int = 0
    is_featured: bool = False
