from __future__ import annotations

import pytest

from changelog_release.errors import MissingRepositoryDescriptorError
from changelog_release.links import add_version_urls, format_template, repository_url


URL_FORMATS = dict(
    unreleased_url_format="{repositoryUrl}/compare/{tagName}...{head}",
    released_url_format="{repositoryUrl}/compare/{previousTag}...{tagName}",
    first_url_format="{repositoryUrl}/releases/tag/{tagName}",
)
REPO_URL = "https://github.com/acme/widget"


def test_format_template_substitutes_known_names() -> None:
    assert format_template("{a}-{b}", {"a": 1, "b": "x"}) == "1-x"


def test_format_template_leaves_unknown_placeholders() -> None:
    assert format_template("{repositoryUrl}/tree/{branch}", {"repositoryUrl": "u"}) == "u/tree/{branch}"


def test_repository_url_from_mapping() -> None:
    repo = {"host": "github.com", "repository": "acme/widget"}
    assert repository_url("https://{host}/{repository}", repo) == REPO_URL


def test_repository_url_without_repo() -> None:
    with pytest.raises(MissingRepositoryDescriptorError):
        repository_url("https://{host}/{repository}", None)


def test_repository_url_missing_field() -> None:
    with pytest.raises(MissingRepositoryDescriptorError, match="repository"):
        repository_url("https://{host}/{repository}", {"host": "github.com"})


def test_first_release_appends_single_version_link() -> None:
    result = add_version_urls(
        "## [1.0.0] - 2023-05-02\n\n- init",
        eol="\n",
        repository_url=REPO_URL,
        version="1.0.0",
        tag_name="v1.0.0",
        head="HEAD",
        **URL_FORMATS,
    )
    assert result.splitlines()[-2:] == [
        f"[unreleased]: {REPO_URL}/compare/v1.0.0...HEAD",
        f"[1.0.0]: {REPO_URL}/releases/tag/v1.0.0",
    ]
    assert result.count("[1.0.0]:") == 1


def test_release_link_inserted_before_previous_link() -> None:
    changelog = (
        "## [1.1.0] - 2023-05-02\n\n- new\n\n## [1.0.0] - 2020-01-01\n\n- init\n\n"
        f"[Unreleased]: {REPO_URL}/compare/v1.0.0...HEAD\n"
        f"[1.0.0]: {REPO_URL}/releases/tag/v1.0.0"
    )
    result = add_version_urls(
        changelog,
        eol="\n",
        repository_url=REPO_URL,
        version="1.1.0",
        tag_name="v1.1.0",
        head="HEAD",
        latest_version="1.0.0",
        latest_tag="v1.0.0",
        **URL_FORMATS,
    )
    assert result.splitlines()[-3:] == [
        f"[unreleased]: {REPO_URL}/compare/v1.1.0...HEAD",
        f"[1.1.0]: {REPO_URL}/compare/v1.0.0...v1.1.0",
        f"[1.0.0]: {REPO_URL}/releases/tag/v1.0.0",
    ]
    assert "[Unreleased]:" not in result


def test_release_link_appended_without_previous_link() -> None:
    result = add_version_urls(
        "## [1.1.0] - 2023-05-02\n\n- new",
        eol="\r\n",
        repository_url=REPO_URL,
        version="1.1.0",
        tag_name="v1.1.0",
        head="main",
        latest_version="1.0.0",
        latest_tag="v1.0.0",
        **URL_FORMATS,
    )
    assert result.endswith(
        f"\r\n[unreleased]: {REPO_URL}/compare/v1.1.0...main"
        f"\r\n[1.1.0]: {REPO_URL}/compare/v1.0.0...v1.1.0"
    )


def test_unreleased_link_for_other_head_is_kept() -> None:
    changelog = f"- new\n\n[unreleased]: {REPO_URL}/compare/v1.0.0...develop"
    result = add_version_urls(
        changelog,
        eol="\n",
        repository_url=REPO_URL,
        version="1.0.0",
        tag_name="v1.0.0",
        head="HEAD",
        **URL_FORMATS,
    )
    assert f"[unreleased]: {REPO_URL}/compare/v1.0.0...develop" in result
    assert f"[unreleased]: {REPO_URL}/compare/v1.0.0...HEAD" in result
