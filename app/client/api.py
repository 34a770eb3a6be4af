from typing import Any, Optional

import requests

from app.config import settings


class ClientError(Exception):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ClientValidationError(ClientError):
    """HTTP 400; ``errors`` lists one message per rejected field."""

    def __init__(self, message: str, errors: list[str]):
        super().__init__(message, 400)
        self.errors = errors


class ClientNotFoundError(ClientError):
    def __init__(self, message: str):
        super().__init__(message, 404)


class ClientRequestError(ClientError):
    """Anything else: server errors, rate limits, transport failures. Safe to retry."""


class AnnouncementsAPI:
    """Thin wrapper over the announcements REST endpoints.

    ``session`` only needs a requests-style ``request(method, url, params=, json=, timeout=)``;
    any object with that signature (a ``requests.Session``, FastAPI's
    ``TestClient``) works.
    """

    def __init__(self, base_url: Optional[str] = None, session=None, timeout: float = 10):
        self.base_url = (base_url or settings.API_URL).rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def _request(self, method: str, path: str, params: Optional[dict] = None, json: Any = None):
        try:
            res = self.session.request(
                method,
                f"{self.base_url}{path}",
                params=params,
                json=json,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise ClientRequestError(f"Request failed: {e}") from e

        if res.status_code < 400:
            return res.json()

        try:
            body = res.json()
        except ValueError:
            body = {}
        detail = body.get("detail") if isinstance(body, dict) else None
        message = detail if isinstance(detail, str) and detail else f"HTTP {res.status_code}"

        if res.status_code == 400:
            errors = body.get("errors") if isinstance(body, dict) else None
            raise ClientValidationError(message, errors or [message])
        if res.status_code == 404:
            raise ClientNotFoundError(message)
        raise ClientRequestError(message, res.status_code)

    def get_announcements(self, search: Optional[str] = None, category: Optional[int] = None):
        params = {}
        if search:
            params["search"] = search
        if category:
            params["category"] = category
        return self._request("GET", "/announcements", params=params or None)

    def get_announcement(self, announcement_id: int):
        return self._request("GET", f"/announcements/{announcement_id}")

    def create_announcement(self, data: dict):
        return self._request("POST", "/announcements", json=data)

    def update_announcement(self, announcement_id: int, data: dict):
        return self._request("PATCH", f"/announcements/{announcement_id}", json=data)

    def delete_announcement(self, announcement_id: int):
        return self._request("DELETE", f"/announcements/{announcement_id}")

    def get_categories(self):
        return self._request("GET", "/categories")
