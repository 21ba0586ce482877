from .changelog import ChangelogDocument, extract_unreleased, load
from .config import Config
from .errors import (
    AlreadyPromotedError,
    ChangelogError,
    EmptyUnreleasedSectionError,
    MissingFileError,
    MissingPreviousReleaseError,
    MissingRepositoryDescriptorError,
    MissingUnreleasedSectionError,
)
from .release import Release, ReleaseContext, Repository, promote

__all__ = [
    "AlreadyPromotedError",
    "ChangelogDocument",
    "ChangelogError",
    "Config",
    "EmptyUnreleasedSectionError",
    "MissingFileError",
    "MissingPreviousReleaseError",
    "MissingRepositoryDescriptorError",
    "MissingUnreleasedSectionError",
    "Release",
    "ReleaseContext",
    "Repository",
    "extract_unreleased",
    "load",
    "promote",
]
