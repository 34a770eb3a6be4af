from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator, model_validator
from pydantic.alias_generators import to_camel

from app.models.announcement import Announcement
from app.schemas.category import CategoryResponse

TITLE_MAX_LENGTH = 255


class AnnouncementInput(BaseModel):
    """Field rules shared by create and partial update payloads.

    Validators skip None so the update model can tell an omitted field from
    a supplied one; explicit nulls are rejected separately.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @field_validator("title", check_fields=False)
    @classmethod
    def validate_title(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        if not v.strip():
            raise ValueError("Title is required")
        if len(v) > TITLE_MAX_LENGTH:
            raise ValueError(f"Title must be at most {TITLE_MAX_LENGTH} characters")
        return v

    @field_validator("content", check_fields=False)
    @classmethod
    def validate_content(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        if not v.strip():
            raise ValueError("Content is required")
        return v

    @field_validator("publication_date", check_fields=False)
    @classmethod
    def validate_publication_date(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        if not v.strip():
            raise ValueError("Publication date is required")
        return v

    @field_validator("category_ids", check_fields=False)
    @classmethod
    def validate_category_ids(cls, v: Optional[list[int]]) -> Optional[list[int]]:
        if v is None:
            return v
        if not v:
            raise ValueError("At least one category is required")
        # association is a set; keep the first occurrence of each id
        return list(dict.fromkeys(v))


class AnnouncementCreate(AnnouncementInput):
    title: str
    content: str
    publication_date: str
    category_ids: list[int]


class AnnouncementUpdate(AnnouncementInput):
    """Partial update. Only fields present in the request body are applied;
    use ``model_dump(exclude_unset=True)`` to get them.
    """

    title: Optional[str] = None
    content: Optional[str] = None
    publication_date: Optional[str] = None
    category_ids: Optional[list[int]] = None

    @model_validator(mode="after")
    def reject_explicit_nulls(self):
        nulls = sorted(
            to_camel(name)
            for name in self.model_fields_set
            if getattr(self, name) is None
        )
        if nulls:
            raise ValueError(f"Fields cannot be null: {', '.join(nulls)}")
        return self


class AnnouncementResponse(BaseModel):
    id: int
    title: str
    content: str
    publication_date: datetime
    created_at: datetime
    updated_at: datetime
    categories: list[CategoryResponse]

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )

    @field_validator("publication_date", "created_at", "updated_at")
    @classmethod
    def as_utc(cls, v: datetime) -> datetime:
        # SQLite hands timestamps back without tzinfo; they are stored as UTC
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v.astimezone(timezone.utc)


def to_announcement_response(announcement: Announcement) -> AnnouncementResponse:
    """Flatten the join-table rows into a plain ``[{id, name}]`` list."""
    return AnnouncementResponse(
        id=announcement.id,
        title=announcement.title,
        content=announcement.content,
        publication_date=announcement.publication_date,
        created_at=announcement.created_at,
        updated_at=announcement.updated_at,
        categories=[
            CategoryResponse(id=link.category.id, name=link.category.name)
            for link in announcement.categories
        ],
    )
