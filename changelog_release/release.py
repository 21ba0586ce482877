from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import date
from typing import Dict, Optional

from .changelog import UNRELEASED_TITLE, ChangelogDocument, extract_unreleased
from .config import Config
from .errors import AlreadyPromotedError, MissingRepositoryDescriptorError
from .links import add_version_urls, repository_url


SCP_REMOTE_RE = re.compile(r"^(?:[^@/]+@)?(?P<host>[^:/]+):(?P<path>[^/].*)$")


@dataclass(frozen=True)
class Repository:
    host: str
    repository: str

    @property
    def owner(self) -> str:
        return self.repository.rsplit("/", 1)[0] if "/" in self.repository else ""

    @property
    def project(self) -> str:
        return self.repository.rsplit("/", 1)[-1]

    def as_dict(self) -> Dict[str, str]:
        return {
            "host": self.host,
            "repository": self.repository,
            "owner": self.owner,
            "project": self.project,
        }

    @classmethod
    def parse(cls, value: str) -> "Repository":
        """Build a descriptor from ``host/owner/project``, an https URL or a scp-style remote."""
        raw = value.strip()
        if "://" in raw:
            netloc, _, path = raw.split("://", 1)[1].partition("/")
            # Drop credentials, if any
            raw = f"{netloc.rsplit('@', 1)[-1]}/{path}"
        else:
            m = SCP_REMOTE_RE.match(raw)
            if m:
                raw = f"{m.group('host')}/{m.group('path')}"

        raw = raw.strip("/")
        if raw.endswith(".git"):
            raw = raw[: -len(".git")]
        host, _, path = raw.partition("/")
        if not host or not path:
            raise MissingRepositoryDescriptorError(
                f"Cannot read host and repository path from {value!r}"
            )
        return cls(host=host, repository=path)


@dataclass(frozen=True)
class ReleaseContext:
    version: str
    tag_name: str
    latest_version: Optional[str] = None
    latest_tag: Optional[str] = None
    repo: Optional[Repository] = None
    is_dry_run: bool = False


def format_date(day: date) -> str:
    return f"{day.year:04d}-{day.month:02d}-{day.day:02d}"


def promote(
    doc: ChangelogDocument,
    ctx: ReleaseContext,
    config: Config,
    today: Optional[date] = None,
) -> Optional[str]:
    """Turn the Unreleased heading into a dated release heading.

    Returns the full new changelog text, or ``None`` when nothing should be
    written (dry run or ``keep_unreleased``).
    """
    if ctx.is_dry_run or config.keep_unreleased:
        logging.info("Keeping the Unreleased section as-is, changelog will not be rewritten")
        return None

    release_heading = f"## [{ctx.version}] - {format_date(today or date.today())}"
    if config.add_unreleased:
        release_heading = f"{UNRELEASED_TITLE}{doc.eol}{doc.eol}{release_heading}"
    logging.info(f"Promoting Unreleased to {ctx.version} in {doc.filename}")
    changelog = doc.content.replace(UNRELEASED_TITLE, release_heading, 1)

    if config.add_version_url:
        repo = ctx.repo.as_dict() if ctx.repo else None
        changelog = add_version_urls(
            changelog,
            eol=doc.eol,
            repository_url=repository_url(config.repository_url_format, repo),
            version=ctx.version,
            tag_name=ctx.tag_name,
            head=config.head,
            unreleased_url_format=config.unreleased_version_url_format,
            released_url_format=config.released_version_url_format,
            first_url_format=config.first_version_url_format,
            latest_version=ctx.latest_version,
            latest_tag=ctx.latest_tag,
        )

    return changelog.strip() + doc.eol


class Release:
    """State for one release run against one changelog document."""

    def __init__(self, doc: ChangelogDocument, ctx: ReleaseContext, config: Config) -> None:
        self.doc = doc
        self.ctx = ctx
        self.config = config
        self._changelog: Optional[str] = None
        self.promoted = False

    def changelog(self) -> str:
        if self._changelog is None:
            self._changelog = extract_unreleased(
                self.doc, self.ctx.latest_version, self.config.strict_latest
            )
        else:
            logging.debug("Reusing extracted release notes")
        return self._changelog

    def promote(self, today: Optional[date] = None) -> Optional[str]:
        if self.promoted:
            raise AlreadyPromotedError(
                f"{self.doc.filename} was already promoted to {self.ctx.version} in this run"
            )
        updated = promote(self.doc, self.ctx, self.config, today=today)
        self.promoted = True
        return updated

    def write(self, today: Optional[date] = None) -> bool:
        """Promote and overwrite the changelog file. Returns False when nothing was written."""
        updated = self.promote(today=today)
        if updated is None:
            return False
        with open(self.doc.path, "w", encoding="utf-8", newline="") as fh:
            fh.write(updated)
        logging.info(f"Wrote {len(updated)} chars to {self.doc.path}")
        return True
