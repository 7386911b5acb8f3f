"""Domain layer exceptions."""

from __future__ import annotations

from datetime import date


class DomainError(Exception):
    """Root of all domain errors."""


class ValidationError(DomainError):
    """Input rejected before any write happened."""


class DuplicateSourceError(DomainError):
    """The same source already has a post for this URL."""

    def __init__(self, existing_post_id: str, existing_date: date | None):
        self.existing_post_id = existing_post_id
        self.existing_date = existing_date
        super().__init__(
            f"Post URL already analyzed for this source (post {existing_post_id}, "
            f"published {existing_date.isoformat() if existing_date else 'unknown'})"
        )


class NoDataError(DomainError):
    """No posts exist for the requested report date."""

    def __init__(self, report_date: date):
        self.report_date = report_date
        super().__init__(f"No posts found for {report_date.isoformat()}")


class ExternalServiceError(DomainError):
    """An external AI service failed, returned garbage, or is not configured."""


class StorageError(DomainError):
    """The datastore could not complete a read or write."""


class NotFoundError(DomainError):
    """A referenced post or report does not exist."""
