from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from .errors import (
    EmptyUnreleasedSectionError,
    MissingFileError,
    MissingPreviousReleaseError,
    MissingUnreleasedSectionError,
)


UNRELEASED_LABEL = "Unreleased"
UNRELEASED_TITLE = f"## [{UNRELEASED_LABEL}]"
RELEASE_TITLE_PREFIX = "## ["
RELEASE_HEADING_RE = re.compile(r"^## \[", re.MULTILINE)


def release_title(version: str) -> str:
    return f"{RELEASE_TITLE_PREFIX}{version}]"


def detect_newline(text: str) -> str:
    """Return the end-of-line sequence used by the first line break in ``text``."""
    if not text:
        return os.linesep
    index = text.find("\n")
    if index == -1:
        return "\n"
    if index > 0 and text[index - 1] == "\r":
        return "\r\n"
    return "\n"


@dataclass(frozen=True)
class ChangelogDocument:
    path: Path
    content: str
    eol: str

    @property
    def filename(self) -> str:
        return self.path.name

    @property
    def unreleased_start(self) -> int:
        # Index right after the first Unreleased heading
        return self.content.index(UNRELEASED_TITLE) + len(UNRELEASED_TITLE)


def load(path: Union[str, Path]) -> ChangelogDocument:
    changelog_path = Path(path).resolve()
    logging.debug(f"Reading changelog from {changelog_path}")
    try:
        # newline="" keeps \r\n intact so the detected style survives the rewrite
        with open(changelog_path, encoding="utf-8", newline="") as fh:
            content = fh.read()
    except (OSError, UnicodeDecodeError) as e:
        raise MissingFileError(f"Could not read {changelog_path}: {e}") from e

    if UNRELEASED_TITLE not in content:
        raise MissingUnreleasedSectionError(
            f'Missing "{UNRELEASED_LABEL}" section in {changelog_path.name}.'
        )

    occurrences = content.count(UNRELEASED_TITLE)
    if occurrences > 1:
        logging.warning(
            f'Found {occurrences} "{UNRELEASED_LABEL}" headings in {changelog_path.name}, using the first one'
        )
    if RELEASE_HEADING_RE.search(content, 0, content.find(UNRELEASED_TITLE)):
        logging.warning(
            f'A release heading appears before the "{UNRELEASED_LABEL}" section in {changelog_path.name}'
        )

    eol = detect_newline(content)
    logging.info(f"Loaded {changelog_path.name} ({len(content)} chars, eol={eol!r})")
    return ChangelogDocument(path=changelog_path, content=content, eol=eol)


def extract_unreleased(
    doc: ChangelogDocument,
    latest_version: Optional[str],
    strict_latest: bool = True,
) -> str:
    """Return the trimmed entries between the Unreleased heading and the previous release.

    In strict mode the section must be closed by ``## [<latest_version>]``. Otherwise
    any ``## [`` heading closes it, and the section runs to the end of the file when
    none follows.
    """
    content = doc.content
    start = doc.unreleased_start

    if strict_latest:
        previous_title = release_title(latest_version) if latest_version else None
        if previous_title is None or previous_title not in content:
            raise MissingPreviousReleaseError(
                f'Missing section for previous release ("{latest_version}") in {doc.filename}.'
            )
        end = content.find(previous_title, start)
        if end == -1:
            raise MissingPreviousReleaseError(
                f'Section for previous release ("{latest_version}") comes before '
                f'"{UNRELEASED_LABEL}" in {doc.filename}.'
            )
    else:
        end = content.find(RELEASE_TITLE_PREFIX, start)
        if end == -1:
            end = len(content)

    section = content[start:end].strip()
    if not section:
        raise EmptyUnreleasedSectionError(
            f'There are no entries under "{UNRELEASED_LABEL}" section in {doc.filename}.'
        )
    logging.debug(f"Extracted {len(section)} chars of unreleased notes")
    return section
