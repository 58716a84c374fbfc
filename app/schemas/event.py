from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class EventCreate(BaseModel):
    title: str = Field(min_length=1, max_length=100)
    description: str = Field(min_length=1, max_length=500)
    category: str = Field(min_length=1, max_length=50)
    date: datetime
    featured: bool = False
    order: int = Field(default=0, ge=0)


class EventUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, min_length=1, max_length=500)
    category: Optional[str] = Field(default=None, min_length=1, max_length=50)
    date: Optional[datetime] = None
    featured: Optional[bool] = None
    order: Optional[int] = Field(default=None, ge=0)
    is_active: Optional[bool] = None


class EventFilters(BaseModel):
    category: Optional[str] = None
    featured: Optional[bool] = None
    is_active: bool = True


class EventImage(BaseModel):
    url: str
    public_id: str = Field(serialization_alias="publicId")


class EventOut(BaseModel):
    id: int
    title: str
    description: str
    category: str
    date: datetime
    featured: bool
    order: int
    is_active: bool = Field(serialization_alias="isActive")
    image: EventImage
    created_at: datetime = Field(serialization_alias="createdAt")
    updated_at: datetime = Field(serialization_alias="updatedAt")

    model_config = ConfigDict(from_attributes=True)

    @classmethod
    def from_model(cls, event) -> "EventOut":
        return cls(
            id=event.id,
            title=event.title,
            description=event.description,
            category=event.category,
            date=event.date,
            featured=event.featured,
            order=event.order,
            is_active=event.is_active,
            image=EventImage(url=event.image_url, public_id=event.image_public_id),
            created_at=event.created_at,
            updated_at=event.updated_at,
        )

    def to_json(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)
