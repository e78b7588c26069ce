import copy

import pytest

from playresumer.errors import ReleaseNotFoundError
from playresumer.services.releases import ReleaseService


class DummyLogger:
    def __init__(self):
        self.warnings = []

    def debug(self, *_args, **_kwargs):
        return None

    def warning(self, message, *args, **_kwargs):
        self.warnings.append(message % args)


@pytest.fixture
def service():
    return ReleaseService(logger=DummyLogger())


def test_locate_returns_index_of_exact_name_match(service):
    releases = [
        {"name": "1.0.0", "status": "completed", "versionCodes": ["1"]},
        {"name": "1.1.0", "status": "halted", "versionCodes": ["2"], "userFraction": 0.2},
    ]

    assert service.locate(releases, "1.1.0", "production") == 1


def test_locate_does_not_match_on_prefix(service):
    releases = [{"name": "1.0.0-beta", "status": "halted"}]

    with pytest.raises(ReleaseNotFoundError):
        service.locate(releases, "1.0.0", "beta")


def test_locate_reports_version_and_track_when_missing(service):
    with pytest.raises(ReleaseNotFoundError) as exc_info:
        service.locate([], "2.0.0", "internal")

    assert str(exc_info.value) == "Release with version name 2.0.0 not found in track internal"


def test_locate_takes_first_duplicate_and_warns(service):
    releases = [
        {"name": "3.0.0", "status": "halted"},
        {"name": "3.0.0", "status": "draft"},
    ]

    assert service.locate(releases, "3.0.0", "production") == 0
    assert service.logger.warnings
    assert "more than one release named 3.0.0" in service.logger.warnings[0]


def test_resolve_status_with_user_fraction_is_in_progress():
    assert ReleaseService.resolve_status({"name": "1.0.0", "userFraction": 0.1}) == "inProgress"


@pytest.mark.parametrize("release", [{"name": "1.0.0"}, {"name": "1.0.0", "userFraction": 0}])
def test_resolve_status_without_user_fraction_is_completed(release):
    assert ReleaseService.resolve_status(release) == "completed"


def test_with_status_changes_only_the_target_release():
    releases = [
        {"name": "0.9.0", "status": "completed", "versionCodes": ["7"]},
        {"name": "1.0.0", "status": "halted", "versionCodes": ["8"], "userFraction": 0.5},
        {"name": "1.1.0", "status": "draft", "versionCodes": ["9"], "releaseNotes": []},
    ]
    original = copy.deepcopy(releases)

    updated = ReleaseService.with_status(releases, 1, "inProgress")

    assert releases == original
    assert updated[0] == original[0]
    assert updated[2] == original[2]
    assert updated[1] == {
        "name": "1.0.0",
        "status": "inProgress",
        "versionCodes": ["8"],
        "userFraction": 0.5,
    }
    assert [release["name"] for release in updated] == ["0.9.0", "1.0.0", "1.1.0"]


def test_with_status_does_not_add_user_fraction():
    updated = ReleaseService.with_status([{"name": "1.0.0", "status": "halted"}], 0, "completed")

    assert updated == [{"name": "1.0.0", "status": "completed"}]
    assert "userFraction" not in updated[0]
