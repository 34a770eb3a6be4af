import json
import logging
from datetime import datetime
from typing import Any, Iterable, Optional, Union

from app.client.api import AnnouncementsAPI
from app.client.cache import QueryCache
from app.config import settings
from app.schemas.announcement import TITLE_MAX_LENGTH
from app.utils.dates import format_publication_date, publication_date_error
from app.websocket.announcements import ANNOUNCEMENT_CREATED

logger = logging.getLogger(__name__)

LIST_KEY = ("announcements", "list")
DETAIL_KEY = ("announcements", "detail")
CATEGORIES_KEY = ("categories",)


def validate_form(
    title: str, content: str, publication_date: str, category_ids: list[int]
) -> dict[str, str]:
    """Check a create/edit form before sending it; returns field -> message."""
    errors = {}

    if not title.strip():
        errors["title"] = "Please enter a title for the announcement."
    elif len(title) > TITLE_MAX_LENGTH:
        errors["title"] = f"Title must be at most {TITLE_MAX_LENGTH} characters."

    if not content.strip():
        errors["content"] = "Please enter the announcement content."

    if not publication_date.strip():
        errors["publicationDate"] = "Please specify a publication date."
    else:
        date_error = publication_date_error(publication_date)
        if date_error:
            errors["publicationDate"] = date_error

    if not category_ids:
        errors["categories"] = "Please select at least one category."

    return errors


def form_values(announcement: dict) -> dict:
    """Turn an announcement response into the payload shape of the edit form."""
    published = datetime.fromisoformat(announcement["publicationDate"].replace("Z", "+00:00"))
    return {
        "title": announcement["title"],
        "content": announcement["content"],
        "publicationDate": format_publication_date(published),
        "categoryIds": [c["id"] for c in announcement["categories"]],
    }


class AnnouncementSync:
    """Cached reads and cache-invalidating writes over :class:`AnnouncementsAPI`.

    The server stays the source of truth: mutations and real-time events only
    drop cache entries, and the next read re-fetches.
    """

    def __init__(
        self,
        api: Optional[AnnouncementsAPI] = None,
        cache: Optional[QueryCache] = None,
        announcement_ttl: Optional[float] = 30,
        category_ttl: Optional[float] = None,
    ):
        self.api = api if api is not None else AnnouncementsAPI()
        self.cache = cache if cache is not None else QueryCache()
        self.announcement_ttl = announcement_ttl
        self.category_ttl = (
            category_ttl if category_ttl is not None else settings.CATEGORY_CACHE_SECONDS
        )

    def _cached(self, key: tuple, ttl: Optional[float], fetch):
        hit, value = self.cache.get(key)
        if hit:
            return value
        value = fetch()
        self.cache.set(key, value, ttl)
        return value

    # reads

    def list_announcements(self, search: Optional[str] = None, category: Optional[int] = None):
        key = LIST_KEY + (search or None, category or None)
        return self._cached(
            key,
            self.announcement_ttl,
            lambda: self.api.get_announcements(search=search, category=category),
        )

    def get_announcement(self, announcement_id: int):
        return self._cached(
            DETAIL_KEY + (announcement_id,),
            self.announcement_ttl,
            lambda: self.api.get_announcement(announcement_id),
        )

    def get_categories(self):
        return self._cached(CATEGORIES_KEY, self.category_ttl, self.api.get_categories)

    # writes

    def create_announcement(self, data: dict):
        created = self.api.create_announcement(data)
        self.invalidate_lists()
        return created

    def update_announcement(self, announcement_id: int, data: dict):
        updated = self.api.update_announcement(announcement_id, data)
        self.invalidate_lists()
        self.cache.invalidate(DETAIL_KEY + (announcement_id,))
        return updated

    def delete_announcement(self, announcement_id: int):
        deleted = self.api.delete_announcement(announcement_id)
        self.invalidate_lists()
        self.cache.invalidate(DETAIL_KEY + (announcement_id,))
        return deleted

    def invalidate_lists(self) -> None:
        self.cache.invalidate(LIST_KEY)

    # real-time

    def handle_event(self, message: Union[str, bytes, dict]) -> bool:
        """Apply one real-time message; returns True when it invalidated lists.

        The payload is never cached or displayed, it only marks lists stale.
        """
        if not isinstance(message, dict):
            try:
                message = json.loads(message)
            except ValueError:
                logger.warning("Ignoring malformed real-time message: %r", message)
                return False
        if not isinstance(message, dict) or message.get("event") != ANNOUNCEMENT_CREATED:
            return False
        self.invalidate_lists()
        return True

    def listen(self, messages: Iterable[Any]) -> int:
        """Feed every message from a connection into :meth:`handle_event`.

        Pass any iterable of frames, e.g. ``iter(ws.recv, "")`` for a
        websocket-client connection. Returns the number of creation events seen.
        """
        seen = 0
        for message in messages:
            if self.handle_event(message):
                seen += 1
        return seen
