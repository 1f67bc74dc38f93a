"""Error kinds of the relation-fetch lifecycle."""

from __future__ import annotations


class RelationError(RuntimeError):
    """Base class for related-entry lookup errors."""


class NoIdentifierError(RelationError):
    """Raised when a pivot entry has no DOI to look relations up by."""


class FetchError(RelationError):
    """Raised by fetch services on transport or payload failures."""

    def __init__(self, message: str, *, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause


class FetchTimeout(FetchError):
    """Raised when a fetch cycle outlives its configured timeout."""


class FetchCancelled(RelationError):  # noqa: N818
    """Raised by fetch services that stopped because their token was cancelled.

    Cancellation is a normal outcome, not a failure, and is never shown to the user.
    """
