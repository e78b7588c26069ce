"""Shared domain models for play-release-resumer."""

from dataclasses import dataclass
from typing import Optional

STATUS_COMPLETED = "completed"
STATUS_IN_PROGRESS = "inProgress"
STATUS_HALTED = "halted"


@dataclass(frozen=True)
class ResumeRequest:
    """Inputs for a single resume run."""

    package_name: str
    version_name: str
    track: str
    google_account_json: Optional[str] = None
    google_account_json_file_path: Optional[str] = None
    application_credentials: Optional[str] = None


@dataclass(frozen=True)
class ResumeResult:
    """Outcome of a committed resume."""

    package_name: str
    version_name: str
    track: str
    edit_id: str
    previous_status: Optional[str]
    new_status: str
    user_fraction: Optional[float] = None
