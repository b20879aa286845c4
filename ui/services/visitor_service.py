from __future__ import annotations

"""Visitor service: HTTP access to the `visitors` REST collection.

All network I/O is localized here so the manager and the Streamlit
components never touch httpx directly. Failures are translated into the
exceptions in `src.errors`:

- transport problems (refused connection, DNS, timeout) -> `ApiConnectionError`
- non-2xx responses -> `ServerStatusError` carrying status and body `message`
- bodies that are not the expected JSON shape -> `InvalidResponseError`
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

from src.config import Settings
from src.errors import ApiConnectionError, InvalidResponseError, ServerStatusError
from src.visitor_model import Visitor


logger = logging.getLogger(__name__)

RESOURCE = "visitors"


def _error_message(response: httpx.Response) -> Optional[str]:
    """Return the `message` field of a JSON error body, if present."""
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return None


class VisitorService:
    """Client for `GET/POST /visitors` and `PUT/DELETE /visitors/{id}`.

    Args:
        api_url: API root, e.g. `http://localhost:8083/api`.
        timeout: Request timeout in seconds, or None to wait indefinitely.
        transport: Optional httpx transport (tests pass `httpx.MockTransport`).
    """

    def __init__(
        self,
        api_url: str,
        *,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.api_url = api_url.rstrip("/")
        self._client = httpx.Client(
            base_url=self.api_url,
            timeout=timeout,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs: Any) -> "VisitorService":
        return cls(settings.api_url, timeout=settings.timeout, **kwargs)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "VisitorService":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # --- Collection operations ---
    def list_visitors(self) -> List[Visitor]:
        """Fetch the whole collection."""
        response = self._request("GET", f"/{RESOURCE}")
        body = self._json(response)
        if not isinstance(body, list):
            raise InvalidResponseError(
                f"Expected a JSON array of visitors, got {type(body).__name__}",
                status_code=response.status_code,
            )
        return [Visitor.from_api(item) for item in body]

    def create_visitor(self, payload: Dict[str, Any]) -> Optional[Visitor]:
        """Create a record; the server assigns its id."""
        response = self._request("POST", f"/{RESOURCE}", json=payload)
        return self._optional_record(response)

    def update_visitor(self, visitor_id: Any, payload: Dict[str, Any]) -> Optional[Visitor]:
        """Replace the editable fields of record `visitor_id`."""
        response = self._request("PUT", f"/{RESOURCE}/{visitor_id}", json=payload)
        return self._optional_record(response)

    def delete_visitor(self, visitor_id: Any) -> None:
        """Remove record `visitor_id`. Any response body is ignored."""
        self._request("DELETE", f"/{RESOURCE}/{visitor_id}")

    # --- Helpers ---
    def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        logger.debug("%s %s%s", method, self.api_url, path)
        try:
            response = self._client.request(method, path, **kwargs)
        except httpx.TransportError as exc:
            raise ApiConnectionError(f"{method} {self.api_url}{path} failed: {exc}") from exc
        if response.is_error:
            raise ServerStatusError(response.status_code, _error_message(response))
        return response

    @staticmethod
    def _json(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            raise InvalidResponseError("Response body is not valid JSON", status_code=response.status_code) from exc

    def _optional_record(self, response: httpx.Response) -> Optional[Visitor]:
        """Parse a returned record when the server sends one.

        Empty, non-JSON or record-less bodies yield None; the write itself
        already succeeded.
        """
        if not response.content:
            return None
        try:
            body = response.json()
        except ValueError:
            # Write succeeded; a non-JSON acknowledgement carries no record
            logger.debug("Ignoring non-JSON body from %s %s", response.request.method, response.request.url)
            return None
        if isinstance(body, dict) and body.get("id") is not None:
            return Visitor.from_api(body)
        return None
