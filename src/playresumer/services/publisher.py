"""Android Publisher API (v3) edit operations."""

from typing import Any, Dict, Optional, Protocol
from urllib.parse import quote

import requests
from google.auth.exceptions import RefreshError, TransportError
from google.auth.transport.requests import AuthorizedSession

from playresumer.errors import AuthenticationError, PublisherApiError

API_BASE = "https://androidpublisher.googleapis.com/androidpublisher/v3"
DEFAULT_REQUEST_TIMEOUT = 60.0


class PublisherClient(Protocol):
    """The four edit operations the resume workflow needs."""

    def insert_edit(self, package_name: str) -> Dict[str, Any]:
        ...

    def get_track(self, package_name: str, edit_id: str, track: str) -> Dict[str, Any]:
        ...

    def update_track(
        self,
        package_name: str,
        edit_id: str,
        track: str,
        body: Dict[str, Any],
    ) -> Dict[str, Any]:
        ...

    def commit_edit(self, package_name: str, edit_id: str) -> Dict[str, Any]:
        ...


class AndroidPublisherClient:
    """REST client for edits, authorized through a google-auth session."""

    def __init__(
        self,
        session,
        logger,
        timeout: Optional[float] = DEFAULT_REQUEST_TIMEOUT,
        api_base: str = API_BASE,
    ):
        self.session = session
        self.logger = logger
        self.timeout = timeout
        self.api_base = api_base.rstrip("/")

    @classmethod
    def from_credentials(cls, credentials, logger, timeout: Optional[float] = DEFAULT_REQUEST_TIMEOUT):
        return cls(AuthorizedSession(credentials), logger=logger, timeout=timeout)

    def insert_edit(self, package_name: str) -> Dict[str, Any]:
        return self._request("POST", self._edits_url(package_name), body={})

    def get_track(self, package_name: str, edit_id: str, track: str) -> Dict[str, Any]:
        return self._request("GET", self._track_url(package_name, edit_id, track))

    def update_track(
        self,
        package_name: str,
        edit_id: str,
        track: str,
        body: Dict[str, Any],
    ) -> Dict[str, Any]:
        return self._request("PUT", self._track_url(package_name, edit_id, track), body=body)

    def commit_edit(self, package_name: str, edit_id: str) -> Dict[str, Any]:
        url = f"{self._edits_url(package_name)}/{quote(edit_id, safe='')}:commit"
        return self._request("POST", url)

    def _edits_url(self, package_name: str) -> str:
        return f"{self.api_base}/applications/{quote(package_name, safe='')}/edits"

    def _track_url(self, package_name: str, edit_id: str, track: str) -> str:
        return (
            f"{self._edits_url(package_name)}/{quote(edit_id, safe='')}"
            f"/tracks/{quote(track, safe='')}"
        )

    def _request(self, method: str, url: str, body: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        self.logger.debug("%s %s", method, url)
        try:
            response = self.session.request(method, url, json=body, timeout=self.timeout)
        except (RefreshError, TransportError) as exc:
            raise AuthenticationError(f"Authentication with Google failed: {exc}") from exc
        except requests.RequestException as exc:
            raise PublisherApiError(f"Request {method} {url} failed: {exc}") from exc

        if response.status_code >= 400:
            raise PublisherApiError(
                f"HTTP {response.status_code} {method} {url}: {self._error_message(response)}",
                status_code=response.status_code,
            )

        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as exc:
            raise PublisherApiError(f"Invalid JSON response from {method} {url}: {exc}") from exc

    @staticmethod
    def _error_message(response) -> str:
        try:
            payload = response.json()
        except ValueError:
            return response.text or response.reason or "no response body"

        error = payload.get("error") if isinstance(payload, dict) else None
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
        return response.text or response.reason or "no response body"
