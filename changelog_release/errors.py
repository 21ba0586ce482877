from __future__ import annotations


class ChangelogError(Exception):
    """Base class for every failure raised while reading or promoting a changelog."""


class MissingFileError(ChangelogError):
    pass


class MissingUnreleasedSectionError(ChangelogError):
    pass


class MissingPreviousReleaseError(ChangelogError):
    pass


class EmptyUnreleasedSectionError(ChangelogError):
    pass


class MissingRepositoryDescriptorError(ChangelogError):
    pass


class AlreadyPromotedError(ChangelogError):
    pass
