import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv


TRUE_VALUES = {"1", "true", "yes", "on"}
FALSE_VALUES = {"0", "false", "no", "off"}


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    value = raw.strip().lower()
    if value in TRUE_VALUES:
        return True
    if value in FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean (got {raw!r})")


@dataclass(frozen=True)
class Config:
    filename: str = "CHANGELOG.md"
    strict_latest: bool = True
    add_unreleased: bool = False
    keep_unreleased: bool = False
    add_version_url: bool = False
    repository_url_format: str = "https://{host}/{repository}"
    unreleased_version_url_format: str = "{repositoryUrl}/compare/{tagName}...{head}"
    released_version_url_format: str = "{repositoryUrl}/compare/{previousTag}...{tagName}"
    first_version_url_format: str = "{repositoryUrl}/releases/tag/{tagName}"
    head: str = "HEAD"

    @classmethod
    def from_env(cls) -> "Config":
        logging.debug("Loading configuration...")
        load_dotenv()
        defaults = cls()
        cfg = cls(
            filename=os.getenv("CHANGELOG_FILENAME", "").strip() or defaults.filename,
            strict_latest=_env_bool("CHANGELOG_STRICT_LATEST", defaults.strict_latest),
            add_unreleased=_env_bool("CHANGELOG_ADD_UNRELEASED", defaults.add_unreleased),
            keep_unreleased=_env_bool("CHANGELOG_KEEP_UNRELEASED", defaults.keep_unreleased),
            add_version_url=_env_bool("CHANGELOG_ADD_VERSION_URL", defaults.add_version_url),
            repository_url_format=os.getenv("CHANGELOG_REPOSITORY_URL_FORMAT", "").strip()
            or defaults.repository_url_format,
            unreleased_version_url_format=os.getenv("CHANGELOG_UNRELEASED_VERSION_URL_FORMAT", "").strip()
            or defaults.unreleased_version_url_format,
            released_version_url_format=os.getenv("CHANGELOG_RELEASED_VERSION_URL_FORMAT", "").strip()
            or defaults.released_version_url_format,
            first_version_url_format=os.getenv("CHANGELOG_FIRST_VERSION_URL_FORMAT", "").strip()
            or defaults.first_version_url_format,
            head=os.getenv("CHANGELOG_HEAD", "").strip() or defaults.head,
        )
        logging.debug(
            f"Loaded config: filename={cfg.filename}, strict_latest={cfg.strict_latest}, "
            f"add_unreleased={cfg.add_unreleased}, add_version_url={cfg.add_version_url}"
        )
        return cfg

    def validate(self) -> None:
        problems = []
        if not self.filename.strip():
            problems.append("filename")
        if not self.head.strip():
            problems.append("head")
        if problems:
            logging.error(f"Invalid configuration, empty values for: {', '.join(problems)}")
            raise RuntimeError("Invalid configuration, empty values for: " + ", ".join(problems))
        logging.debug("Configuration validation passed")
