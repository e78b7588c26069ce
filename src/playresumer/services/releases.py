"""Release lookup and status transition for a track."""

from typing import Any, Dict, List, Sequence

from playresumer.errors import ReleaseNotFoundError
from playresumer.models import STATUS_COMPLETED, STATUS_IN_PROGRESS

Release = Dict[str, Any]


class ReleaseService:
    """Finds the release to resume and rewrites its status."""

    def __init__(self, logger):
        self.logger = logger

    def locate(self, releases: Sequence[Release], version_name: str, track: str) -> int:
        """Returns the index of the first release named ``version_name``."""
        match_index = None
        for index, release in enumerate(releases):
            version_codes = release.get("versionCodes") or []
            self.logger.debug(
                "Checking release with version codes: %s",
                ", ".join(str(code) for code in version_codes),
            )
            if release.get("name") != version_name:
                continue
            if match_index is None:
                match_index = index
            else:
                self.logger.warning(
                    "Track %s has more than one release named %s; only the first one is resumed.",
                    track,
                    version_name,
                )
                break

        if match_index is None:
            raise ReleaseNotFoundError(
                f"Release with version name {version_name} not found in track {track}"
            )
        return match_index

    @staticmethod
    def resolve_status(release: Release) -> str:
        if release.get("userFraction"):
            return STATUS_IN_PROGRESS
        return STATUS_COMPLETED

    @staticmethod
    def with_status(releases: Sequence[Release], index: int, status: str) -> List[Release]:
        """Copies the release list, changing only the status at ``index``."""
        updated = list(releases)
        updated[index] = {**releases[index], "status": status}
        return updated
