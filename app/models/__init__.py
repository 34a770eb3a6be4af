# Import all models so they're registered with Base.metadata
from app.models.category import Category
from app.models.announcement import Announcement, AnnouncementCategory

__all__ = [
    "Category",
    "Announcement",
    "AnnouncementCategory",
]
