from __future__ import annotations

import pytest


SAMPLE = (
    "# Changelog\n"
    "\n"
    "## [Unreleased]\n"
    "\n"
    "foo\n"
    "\n"
    "## [1.0.0] - 2020-01-01\n"
    "\n"
    "- Initial release\n"
)


@pytest.fixture
def write_changelog(tmp_path):
    def _write(text: str = SAMPLE, name: str = "CHANGELOG.md"):
        path = tmp_path / name
        path.write_bytes(text.encode("utf-8"))
        return path

    return _write


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in (
        "CHANGELOG_FILENAME",
        "CHANGELOG_STRICT_LATEST",
        "CHANGELOG_ADD_UNRELEASED",
        "CHANGELOG_KEEP_UNRELEASED",
        "CHANGELOG_ADD_VERSION_URL",
        "CHANGELOG_REPOSITORY_URL_FORMAT",
        "CHANGELOG_UNRELEASED_VERSION_URL_FORMAT",
        "CHANGELOG_RELEASED_VERSION_URL_FORMAT",
        "CHANGELOG_FIRST_VERSION_URL_FORMAT",
        "CHANGELOG_HEAD",
    ):
        monkeypatch.delenv(name, raising=False)
