"""Domain errors for play-release-resumer."""

from typing import Optional


class ResumerError(RuntimeError):
    """Raised when the release cannot be resumed."""


class MissingCredentialsError(ResumerError):
    """No credential source was supplied."""


class CredentialsError(ResumerError):
    """A credential source could not be read, parsed or loaded."""


class AuthenticationError(ResumerError):
    """Google rejected the credentials while obtaining an access token."""


class EditCreationError(ResumerError):
    """The edit insert call returned no usable edit id."""


class ReleaseNotFoundError(ResumerError):
    """The requested version name is absent from the track."""


class PublisherApiError(ResumerError):
    """A call to the Android Publisher API failed."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code
