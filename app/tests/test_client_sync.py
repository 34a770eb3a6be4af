import json

import pytest

from app.client.api import (
    AnnouncementsAPI,
    ClientNotFoundError,
    ClientRequestError,
    ClientValidationError,
)
from app.client.cache import QueryCache
from app.client.sync import AnnouncementSync, form_values, validate_form


class CountingAPI(AnnouncementsAPI):
    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.calls = []

    def _request(self, method, path, params=None, json=None):
        self.calls.append((method, path))
        return super()._request(method, path, params=params, json=json)


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


PAYLOAD = {
    "title": "Road works",
    "content": "Main Street closed",
    "publicationDate": "06/15/2025 10:00",
    "categoryIds": [1],
}


@pytest.fixture()
def api(client):
    return CountingAPI(base_url="http://testserver", session=client)


@pytest.fixture()
def sync(api):
    return AnnouncementSync(api=api, announcement_ttl=None, category_ttl=300)


def _gets(api, path):
    return sum(1 for method, p in api.calls if method == "GET" and p == path)


def test_list_is_cached_per_filter(sync, api, categories):
    sync.create_announcement(PAYLOAD)
    api.calls.clear()

    first = sync.list_announcements()
    again = sync.list_announcements()
    filtered = sync.list_announcements(search="road")

    assert first == again
    assert len(filtered) == 1
    assert api.calls == [("GET", "/announcements"), ("GET", "/announcements")]


def test_create_invalidates_lists(sync, api, categories):
    assert sync.list_announcements() == []
    sync.list_announcements(category=1)

    sync.create_announcement(PAYLOAD)

    assert len(sync.list_announcements()) == 1
    assert len(sync.list_announcements(category=1)) == 1
    assert _gets(api, "/announcements") == 4


def test_update_invalidates_lists_and_detail(sync, api, categories):
    created = sync.create_announcement(PAYLOAD)
    assert sync.get_announcement(created["id"])["title"] == "Road works"
    sync.list_announcements()

    sync.update_announcement(created["id"], {"title": "Road works postponed"})

    assert sync.get_announcement(created["id"])["title"] == "Road works postponed"
    assert sync.list_announcements()[0]["title"] == "Road works postponed"
    assert _gets(api, f"/announcements/{created['id']}") == 2


def test_delete_invalidates_detail(sync, categories):
    created = sync.create_announcement(PAYLOAD)
    sync.get_announcement(created["id"])

    sync.delete_announcement(created["id"])

    with pytest.raises(ClientNotFoundError):
        sync.get_announcement(created["id"])
    assert sync.list_announcements() == []


def test_created_event_only_invalidates_lists(sync, api, categories):
    created = sync.create_announcement(PAYLOAD)
    sync.get_announcement(created["id"])
    sync.list_announcements()
    api.calls.clear()

    event = json.dumps({"event": "announcement:created", "data": {"id": -1, "title": "ignored"}})
    assert sync.handle_event(event) is True

    listed = sync.list_announcements()
    sync.get_announcement(created["id"])
    # the list comes from the server, not from the event payload
    assert [a["id"] for a in listed] == [created["id"]]
    assert api.calls == [("GET", "/announcements")]


def test_unrelated_or_malformed_events_are_ignored(sync, api, categories):
    sync.list_announcements()
    assert sync.handle_event({"event": "something:else"}) is False
    assert sync.handle_event("not json") is False
    sync.list_announcements()
    assert _gets(api, "/announcements") == 1


def test_listen_counts_creation_events(sync):
    messages = [
        json.dumps({"event": "announcement:created", "data": {}}),
        json.dumps({"event": "other"}),
        {"event": "announcement:created", "data": {}},
    ]
    assert sync.listen(messages) == 2


def test_categories_cached_for_longer(api, db_session, categories):
    clock = FakeClock()
    sync = AnnouncementSync(
        api=api, cache=QueryCache(clock=clock), announcement_ttl=0, category_ttl=300
    )

    sync.get_categories()
    sync.list_announcements()
    clock.now += 60
    sync.get_categories()
    sync.list_announcements()
    assert _gets(api, "/categories") == 1
    assert _gets(api, "/announcements") == 2

    clock.now += 300
    sync.get_categories()
    assert _gets(api, "/categories") == 2


def test_error_taxonomy(api, categories):
    with pytest.raises(ClientValidationError) as exc:
        api.create_announcement({**PAYLOAD, "categoryIds": [9999]})
    assert "9999" in exc.value.message
    assert exc.value.status_code == 400

    with pytest.raises(ClientValidationError) as exc:
        api.create_announcement({**PAYLOAD, "title": "", "categoryIds": []})
    assert "Title is required" in exc.value.errors
    assert "At least one category is required" in exc.value.errors

    with pytest.raises(ClientNotFoundError):
        api.get_announcement(31337)


def test_server_errors_become_request_errors():
    class BrokenSession:
        def request(self, method, url, **kwargs):
            return _Response(503, {"detail": "Database connection error. Please try again."})

    api = AnnouncementsAPI(base_url="http://example", session=BrokenSession())
    with pytest.raises(ClientRequestError) as exc:
        api.get_categories()
    assert exc.value.status_code == 503
    assert "Database connection error" in exc.value.message


class _Response:
    def __init__(self, status_code, body):
        self.status_code = status_code
        self._body = body

    def json(self):
        return self._body


def test_validate_form():
    assert validate_form("T", "C", "06/15/2025 10:00", [1]) == {}

    errors = validate_form(" ", "", "02/30/2025 10:00", [])
    assert set(errors) == {"title", "content", "publicationDate", "categories"}
    assert "does not exist" in errors["publicationDate"]

    assert "255" in validate_form("x" * 256, "C", "06/15/2025 10:00", [1])["title"]
    assert validate_form("T", "C", "", [1]) == {
        "publicationDate": "Please specify a publication date."
    }


def test_form_values_round_trip(sync, categories):
    created = sync.create_announcement({**PAYLOAD, "categoryIds": [2, 1]})
    assert form_values(created) == {
        "title": "Road works",
        "content": "Main Street closed",
        "publicationDate": "06/15/2025 10:00",
        "categoryIds": [1, 2],
    }


def test_injected_cache_is_used_even_when_empty(api):
    cache = QueryCache()
    sync = AnnouncementSync(api=api, cache=cache)
    assert sync.cache is cache
    assert sync.api is api


def test_validate_form_rejects_padded_date():
    errors = validate_form("T", "C", " 06/15/2025 10:00 ", [1])
    assert "MM/DD/YYYY HH:mm" in errors["publicationDate"]
