from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Query, status

from app.dependencies import broadcaster_dependency, db_dependency
from app.errors import ValidationError
from app.services.announcement import AnnouncementService
from app.schemas.announcement import (
    AnnouncementCreate,
    AnnouncementUpdate,
    AnnouncementResponse,
)

router = APIRouter(prefix="/announcements", tags=["announcements"])


@router.get("", status_code=status.HTTP_200_OK, response_model=list[AnnouncementResponse])
def get_announcements(
    db: db_dependency,
    search: Optional[str] = Query(None, description="Case-insensitive match on title or content"),
    category: Optional[str] = Query(None, description="Only announcements tagged with this category id"),
):
    # an empty "?category=" means no filter, same as leaving it out
    category_id = None
    if category and category.strip():
        try:
            category_id = int(category)
        except ValueError:
            raise ValidationError("category must be an integer")
    return AnnouncementService(db).get_announcements(search=search, category_id=category_id)


@router.get("/{announcement_id}", status_code=status.HTTP_200_OK, response_model=AnnouncementResponse)
def get_announcement(announcement_id: int, db: db_dependency):
    return AnnouncementService(db).get_announcement(announcement_id)


@router.post("", status_code=status.HTTP_201_CREATED, response_model=AnnouncementResponse)
def create_announcement(
    announcement_data: AnnouncementCreate,
    db: db_dependency,
    background_tasks: BackgroundTasks,
    broadcaster: broadcaster_dependency,
):
    announcement = AnnouncementService(db).create_announcement(announcement_data)
    # pushed after the response is sent so slow websocket clients never hold up the request
    background_tasks.add_task(broadcaster.notify_created, announcement)
    return announcement


@router.patch("/{announcement_id}", status_code=status.HTTP_200_OK, response_model=AnnouncementResponse)
def update_announcement(
    announcement_id: int,
    announcement_data: AnnouncementUpdate,
    db: db_dependency,
):
    return AnnouncementService(db).update_announcement(announcement_id, announcement_data)


@router.delete("/{announcement_id}", status_code=status.HTTP_200_OK, response_model=AnnouncementResponse)
def delete_announcement(announcement_id: int, db: db_dependency):
    return AnnouncementService(db).delete_announcement(announcement_id)
