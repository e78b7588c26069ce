"""Credential resolution for the Android Publisher API."""

import json
from pathlib import Path
from typing import Any, Dict, Optional

import google.auth
from google.auth.exceptions import GoogleAuthError

from playresumer.errors import CredentialsError, MissingCredentialsError

ANDROIDPUBLISHER_SCOPE = "https://www.googleapis.com/auth/androidpublisher"

MISSING_CREDENTIALS_MESSAGE = (
    "Either google-account-json-file-path or google-account-json must be provided. "
    "You can also use GOOGLE_APPLICATION_CREDENTIALS environment variable "
    "(e.g., set by google-github-actions/auth)."
)


class CredentialResolver:
    """Picks one credential source and parses it.

    Sources are checked in a fixed order: the ambient credentials path
    (``GOOGLE_APPLICATION_CREDENTIALS``), then inline JSON, then the JSON
    file path input. Lower sources are never read once a higher one is set.
    """

    def __init__(self, logger):
        self.logger = logger

    def resolve(
        self,
        environment_path: Optional[str],
        account_json: Optional[str],
        account_json_file_path: Optional[str],
    ) -> Dict[str, Any]:
        if not environment_path and not account_json and not account_json_file_path:
            raise MissingCredentialsError(MISSING_CREDENTIALS_MESSAGE)

        if environment_path:
            self.logger.info(
                "Using GOOGLE_APPLICATION_CREDENTIALS for authentication: %s",
                environment_path,
            )
            return self._load_file(environment_path, "GOOGLE_APPLICATION_CREDENTIALS")

        if account_json:
            self.logger.info("Using google-account-json for authentication")
            return self._parse(account_json, "google-account-json")

        self.logger.info(
            "Using google-account-json-file-path for authentication: %s",
            account_json_file_path,
        )
        return self._load_file(account_json_file_path, "google-account-json-file-path")

    def _load_file(self, path: str, label: str) -> Dict[str, Any]:
        try:
            raw = Path(path).read_text(encoding="utf-8")
        except OSError as exc:
            raise CredentialsError(f"Could not read credentials from {label} '{path}': {exc}") from exc
        return self._parse(raw, label)

    @staticmethod
    def _parse(raw: str, label: str) -> Dict[str, Any]:
        try:
            parsed = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise CredentialsError(f"Invalid JSON in {label}: {exc}") from exc

        if not isinstance(parsed, dict):
            raise CredentialsError(f"Credentials from {label} must be a JSON object.")
        return parsed


def build_credentials(info: Dict[str, Any]):
    """Loads scoped google-auth credentials from a parsed credentials mapping."""
    try:
        credentials, _project_id = google.auth.load_credentials_from_dict(
            info,
            scopes=[ANDROIDPUBLISHER_SCOPE],
        )
    except (GoogleAuthError, ValueError) as exc:
        raise CredentialsError(f"Could not load Google credentials: {exc}") from exc
    return credentials
