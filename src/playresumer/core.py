import logging
from typing import Any, Callable, Dict, Optional

from rich.console import Console
from rich.markup import escape

from .errors import EditCreationError, ResumerError
from .models import STATUS_HALTED, ResumeRequest, ResumeResult
from .services.credentials import CredentialResolver, build_credentials
from .services.publisher import DEFAULT_REQUEST_TIMEOUT, AndroidPublisherClient, PublisherClient
from .services.releases import ReleaseService

console = Console()
logger = logging.getLogger("playresumer")

ClientFactory = Callable[[Dict[str, Any]], PublisherClient]


class ReleaseResumer:
    """Resumes a halted staged rollout inside a single Play Console edit."""

    def __init__(
        self,
        package_name: str,
        version_name: str,
        track: str,
        google_account_json: Optional[str] = None,
        google_account_json_file_path: Optional[str] = None,
        application_credentials: Optional[str] = None,
        request_timeout: Optional[float] = DEFAULT_REQUEST_TIMEOUT,
        client_factory: Optional[ClientFactory] = None,
    ):
        self.request = ResumeRequest(
            package_name=package_name,
            version_name=version_name,
            track=track,
            google_account_json=google_account_json,
            google_account_json_file_path=google_account_json_file_path,
            application_credentials=application_credentials,
        )
        self.request_timeout = request_timeout
        self.credential_resolver = CredentialResolver(logger=logger)
        self.release_service = ReleaseService(logger=logger)
        self.client_factory = client_factory or self._build_client
        self.result: Optional[ResumeResult] = None
        self.failure_message: Optional[str] = None

    def _build_client(self, credentials_info: Dict[str, Any]) -> PublisherClient:
        credentials = build_credentials(credentials_info)
        return AndroidPublisherClient.from_credentials(
            credentials,
            logger=logger,
            timeout=self.request_timeout,
        )

    def resume(self) -> ResumeResult:
        """Runs the edit workflow, raising on the first failure."""
        request = self.request
        package_name = request.package_name
        version_name = request.version_name
        track = request.track

        logger.info("Package name: %s", package_name)
        logger.info("Version name: %s", version_name)
        logger.info("Track: %s", track)

        credentials_info = self.credential_resolver.resolve(
            environment_path=request.application_credentials,
            account_json=request.google_account_json,
            account_json_file_path=request.google_account_json_file_path,
        )
        client = self.client_factory(credentials_info)

        logger.info("Creating edit...")
        edit = client.insert_edit(package_name) or {}
        edit_id = edit.get("id")
        if not edit_id:
            raise EditCreationError("Failed to create edit")
        logger.info("Edit created with ID: %s", edit_id)

        logger.info("Getting track info for: %s", track)
        track_data = client.get_track(package_name, edit_id, track) or {}
        releases = track_data.get("releases") or []
        logger.info("Found %s releases in track %s", len(releases), track)

        index = self.release_service.locate(releases, version_name, track)
        target = releases[index]
        previous_status = target.get("status")
        logger.info("Found release: %s", target.get("name"))
        logger.info("Current status: %s", previous_status)
        if previous_status != STATUS_HALTED:
            logger.warning(
                "Release %s is '%s', not '%s'. Updating it anyway.",
                version_name,
                previous_status,
                STATUS_HALTED,
            )

        new_status = self.release_service.resolve_status(target)
        user_fraction = target.get("userFraction")
        logger.info(
            "user_fraction: %s, setting status to: %s",
            user_fraction if user_fraction is not None else "not set",
            new_status,
        )

        updated_releases = self.release_service.with_status(releases, index, new_status)

        logger.info("Updating track %s to resume release %s...", track, version_name)
        client.update_track(
            package_name,
            edit_id,
            track,
            {"track": track, "releases": updated_releases},
        )

        logger.info("Committing edit...")
        client.commit_edit(package_name, edit_id)

        logger.info("Successfully resumed release %s in track %s", version_name, track)
        console.print(
            f"[green]Resumed {escape(package_name)} {escape(version_name)} "
            f"on {escape(track)} ({escape(new_status)}).[/green]"
        )
        return ResumeResult(
            package_name=package_name,
            version_name=version_name,
            track=track,
            edit_id=edit_id,
            previous_status=previous_status,
            new_status=new_status,
            user_fraction=user_fraction,
        )

    def run(self) -> int:
        """Runs ``resume`` and turns any failure into a message and exit code."""
        try:
            self.result = self.resume()
            return 0
        except KeyboardInterrupt:
            self.failure_message = "Operation cancelled by user."
            console.print(f"[bold red]{self.failure_message}[/bold red]")
            logger.info("Operation cancelled by user")
            return 1
        except ResumerError as exc:
            self.failure_message = self._describe(exc)
            console.print(f"[bold red]Error:[/bold red] {escape(self.failure_message)}")
            logger.error(self.failure_message)
            return 1
        except Exception as exc:
            self.failure_message = self._describe(exc)
            console.print(f"[bold red]Unexpected error:[/bold red] {escape(self.failure_message)}")
            logger.exception("Unexpected error")
            return 1

    @staticmethod
    def _describe(exc: BaseException) -> str:
        message = str(exc).strip()
        return message or type(exc).__name__
