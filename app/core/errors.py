"""Domain exception hierarchy.

Repositories and services raise these; ``app.main`` maps each class to an
HTTP status code so route handlers stay free of translation boilerplate.
"""


class TalentDirectoryError(Exception):
    """Base class for every business-level failure."""


class NotFoundError(TalentDirectoryError):
    """An id or talent id does not resolve to a stored record."""


class ConflictError(TalentDirectoryError):
    """A unique key (talent id, user email) is already taken."""


class InvalidDataError(TalentDirectoryError):
    """Input is structurally valid but violates a business rule."""


class PreconditionFailedError(TalentDirectoryError):
    """The notifier was invoked before its inputs were ready."""


class EmailDeliveryError(TalentDirectoryError):
    """The SMTP transport rejected or failed to deliver a message."""


class TransientStoreError(TalentDirectoryError):
    """The underlying storage call failed; the caller decides whether to retry."""
