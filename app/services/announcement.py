import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session
from sqlalchemy.sql import func

from app.errors import NotFoundError
from app.models.announcement import Announcement, AnnouncementCategory
from app.schemas.announcement import (
    AnnouncementCreate,
    AnnouncementResponse,
    AnnouncementUpdate,
    to_announcement_response,
)
from app.services.category import CategoryService
from app.utils.dates import parse_publication_date

logger = logging.getLogger(__name__)


class AnnouncementService:
    def __init__(self, db: Session):
        self.db = db

    def _get_or_404(self, announcement_id: int) -> Announcement:
        announcement = self.db.execute(
            select(Announcement).where(Announcement.id == announcement_id)
        ).scalar_one_or_none()
        if not announcement:
            raise NotFoundError(f"Announcement with ID {announcement_id} not found")
        return announcement

    def get_announcements(
        self, search: Optional[str] = None, category_id: Optional[int] = None
    ) -> list[AnnouncementResponse]:
        query = select(Announcement)
        if search:
            query = query.where(
                Announcement.title.icontains(search, autoescape=True)
                | Announcement.content.icontains(search, autoescape=True)
            )
        if category_id:
            query = query.where(
                Announcement.categories.any(
                    AnnouncementCategory.category_id == category_id
                )
            )
        query = query.order_by(Announcement.updated_at.desc(), Announcement.id.desc())

        announcements = self.db.execute(query).scalars().all()
        return [to_announcement_response(a) for a in announcements]

    def get_announcement(self, announcement_id: int) -> AnnouncementResponse:
        return to_announcement_response(self._get_or_404(announcement_id))

    def create_announcement(
        self, announcement_data: AnnouncementCreate
    ) -> AnnouncementResponse:
        CategoryService(self.db).validate_category_ids(announcement_data.category_ids)
        publication_date = parse_publication_date(announcement_data.publication_date)

        new_announcement = Announcement(
            title=announcement_data.title,
            content=announcement_data.content,
            publication_date=publication_date,
            categories=[
                AnnouncementCategory(category_id=category_id)
                for category_id in announcement_data.category_ids
            ],
        )
        # parent row and join rows go out in one commit
        self.db.add(new_announcement)
        self.db.commit()
        self.db.refresh(new_announcement)

        logger.info(
            "Created announcement %s with categories %s",
            new_announcement.id,
            announcement_data.category_ids,
        )
        return to_announcement_response(new_announcement)

    def update_announcement(
        self, announcement_id: int, announcement_data: AnnouncementUpdate
    ) -> AnnouncementResponse:
        announcement = self._get_or_404(announcement_id)
        update_data = announcement_data.model_dump(exclude_unset=True)

        # validate everything before touching the row
        if "category_ids" in update_data:
            CategoryService(self.db).validate_category_ids(update_data["category_ids"])
        if "publication_date" in update_data:
            update_data["publication_date"] = parse_publication_date(
                update_data["publication_date"]
            )

        if "title" in update_data:
            announcement.title = update_data["title"]
        if "content" in update_data:
            announcement.content = update_data["content"]
        if "publication_date" in update_data:
            announcement.publication_date = update_data["publication_date"]
        if "category_ids" in update_data:
            # full replace: drop every existing link, then insert the new set
            announcement.categories.clear()
            self.db.flush()
            announcement.categories.extend(
                AnnouncementCategory(category_id=category_id)
                for category_id in update_data["category_ids"]
            )
        announcement.updated_at = func.now()

        self.db.commit()
        self.db.refresh(announcement)

        logger.info(
            "Updated announcement %s fields=%s",
            announcement_id,
            sorted(update_data),
        )
        return to_announcement_response(announcement)

    def delete_announcement(self, announcement_id: int) -> AnnouncementResponse:
        announcement = self._get_or_404(announcement_id)
        deleted = to_announcement_response(announcement)

        self.db.delete(announcement)
        self.db.commit()

        logger.info("Deleted announcement %s", announcement_id)
        return deleted
