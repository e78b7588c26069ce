import json

import pytest

from playresumer.errors import CredentialsError, MissingCredentialsError
from playresumer.services.credentials import (
    MISSING_CREDENTIALS_MESSAGE,
    CredentialResolver,
    build_credentials,
)


class RecordingLogger:
    def __init__(self):
        self.messages = []

    def info(self, message, *args, **_kwargs):
        self.messages.append(message % args if args else message)


@pytest.fixture
def resolver():
    return CredentialResolver(logger=RecordingLogger())


def write_json(path, payload):
    path.write_text(json.dumps(payload), encoding="utf-8")
    return str(path)


def test_environment_path_wins_over_explicit_inputs(tmp_path, resolver):
    env_file = write_json(tmp_path / "adc.json", {"source": "environment"})

    resolved = resolver.resolve(
        environment_path=env_file,
        account_json="not json at all",
        account_json_file_path=str(tmp_path / "missing.json"),
    )

    assert resolved == {"source": "environment"}
    assert "GOOGLE_APPLICATION_CREDENTIALS" in resolver.logger.messages[0]


def test_inline_json_wins_over_file_path(tmp_path, resolver):
    resolved = resolver.resolve(
        environment_path=None,
        account_json='{"source": "inline"}',
        account_json_file_path=str(tmp_path / "missing.json"),
    )

    assert resolved == {"source": "inline"}
    assert resolver.logger.messages == ["Using google-account-json for authentication"]


def test_file_path_is_used_when_it_is_the_only_source(tmp_path, resolver):
    key_file = write_json(tmp_path / "key.json", {"type": "service_account"})

    resolved = resolver.resolve(
        environment_path="",
        account_json="",
        account_json_file_path=key_file,
    )

    assert resolved == {"type": "service_account"}
    assert key_file in resolver.logger.messages[0]


def test_missing_sources_raise_instructive_error(resolver):
    with pytest.raises(MissingCredentialsError) as exc_info:
        resolver.resolve(environment_path=None, account_json="", account_json_file_path=None)

    assert str(exc_info.value) == MISSING_CREDENTIALS_MESSAGE
    assert str(exc_info.value).startswith(
        "Either google-account-json-file-path or google-account-json must be provided."
    )


def test_unreadable_file_raises_credentials_error(tmp_path, resolver):
    with pytest.raises(CredentialsError, match="Could not read credentials"):
        resolver.resolve(
            environment_path=None,
            account_json=None,
            account_json_file_path=str(tmp_path / "missing.json"),
        )


def test_invalid_inline_json_raises_credentials_error(resolver):
    with pytest.raises(CredentialsError, match="Invalid JSON in google-account-json"):
        resolver.resolve(environment_path=None, account_json="{oops", account_json_file_path=None)


def test_non_object_json_is_rejected(tmp_path, resolver):
    key_file = tmp_path / "key.json"
    key_file.write_text("[1, 2, 3]", encoding="utf-8")

    with pytest.raises(CredentialsError, match="must be a JSON object"):
        resolver.resolve(environment_path=str(key_file), account_json=None, account_json_file_path=None)


def test_build_credentials_rejects_unknown_credential_type():
    with pytest.raises(CredentialsError, match="Could not load Google credentials"):
        build_credentials({"type": "not-a-real-type"})
