from __future__ import annotations

import logging
import re
from typing import Mapping, Optional

from .errors import MissingRepositoryDescriptorError


PLACEHOLDER_RE = re.compile(r"\{([0-9a-zA-Z_]+)\}")


def format_template(template: str, values: Mapping[str, object]) -> str:
    """Expand ``{name}`` placeholders; names missing from ``values`` are left as-is."""

    def _sub(match: re.Match) -> str:
        key = match.group(1)
        value = values.get(key)
        if value is None:
            logging.debug(f"Placeholder {match.group(0)} left unresolved")
            return match.group(0)
        return str(value)

    return PLACEHOLDER_RE.sub(_sub, template)


def unreleased_link_pattern(head: str) -> re.Pattern:
    return re.compile(
        r"^\[unreleased\]:[^\r\n]*" + re.escape(head) + r"[^\r\n]*",
        re.IGNORECASE | re.MULTILINE,
    )


def add_version_urls(
    changelog: str,
    *,
    eol: str,
    repository_url: str,
    version: str,
    tag_name: str,
    head: str,
    unreleased_url_format: str,
    released_url_format: str,
    first_url_format: str,
    latest_version: Optional[str] = None,
    latest_tag: Optional[str] = None,
) -> str:
    """Add or update the reference-style compare links at the bottom of the changelog."""
    updated = changelog

    unreleased_url = format_template(
        unreleased_url_format,
        {"repositoryUrl": repository_url, "tagName": tag_name, "head": head},
    )
    unreleased_link = f"[unreleased]: {unreleased_url}"
    pattern = unreleased_link_pattern(head)
    if pattern.search(updated):
        logging.debug("Updating existing [unreleased] link")
        updated = pattern.sub(lambda _: unreleased_link, updated, count=1)
    else:
        logging.debug("Appending [unreleased] link")
        updated = f"{updated}{eol}{unreleased_link}"

    # First tagged version: nothing to compare against
    if not latest_tag:
        first_url = format_template(
            first_url_format, {"repositoryUrl": repository_url, "tagName": tag_name}
        )
        logging.debug(f"Appending first release link for {version}")
        return f"{updated}{eol}[{version}]: {first_url}"

    release_url = format_template(
        released_url_format,
        {"repositoryUrl": repository_url, "previousTag": latest_tag, "tagName": tag_name},
    )
    release_link = f"[{version}]: {release_url}"
    latest_link = f"[{latest_version}]:"
    if latest_version and latest_link in updated:
        logging.debug(f"Inserting {version} link before {latest_link}")
        return updated.replace(latest_link, f"{release_link}{eol}{latest_link}", 1)
    logging.debug(f"No link for {latest_version} found, appending {version} link")
    return f"{updated}{eol}{release_link}"


def repository_url(url_format: str, repo: Optional[Mapping[str, object]]) -> str:
    if not repo:
        raise MissingRepositoryDescriptorError(
            "Repository information is required to build version URLs"
        )
    missing = [
        name for name in PLACEHOLDER_RE.findall(url_format) if not repo.get(name)
    ]
    if missing:
        raise MissingRepositoryDescriptorError(
            f"Repository information is missing {', '.join(missing)} for {url_format!r}"
        )
    return format_template(url_format, repo)
