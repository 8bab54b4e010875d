"""Domain exceptions for site content resolution.

Defines domain-level exceptions independent of the HTTP layer. The
presentation layer maps them to responses in exception handlers.

Taxonomy:
    SlugNotFoundException: a slug resolves to no known apartado (terminal 404).
    ContentTransportException: the content backend failed while fetching a
        required level (network error or 5xx).
Partial degradation of a grandchild fetch is never raised; it is recorded
on the resolution (see application.dtos.page.PartialDegradation).
"""

from typing import Any


class SiteContentException(Exception):
    """Base exception for all site content errors.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. slug, parent_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON body used by the HTTP exception handler."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(SiteContentException):
    """Raised when a backend payload or caller input is malformed."""

    def __init__(self, message: str, field: str | None = None) -> None:
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class ResourceNotFoundException(SiteContentException):
    """Raised when a single entity requested by id does not exist."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Entity kind (e.g. 'categoria').
            resource_id: The id that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class SlugNotFoundException(SiteContentException):
    """Raised when a route slug matches no apartado by name or reserved alias."""

    def __init__(self, slug: str) -> None:
        super().__init__(
            f"No page found for slug: {slug}",
            "SLUG_NOT_FOUND",
            {"slug": slug},
        )


class ContentTransportException(SiteContentException):
    """Raised when the content backend is unreachable or answers with an error.

    The caller decides whether to retry; nothing here retries automatically.
    """

    def __init__(
        self,
        resource: str,
        reason: str,
        parent_id: str | None = None,
        status_code: int | None = None,
    ) -> None:
        """Initialize with the failed resource and reason.

        Args:
            resource: What was being fetched (e.g. 'secciones').
            reason: Short description of the failure.
            parent_id: Optional owning parent id of the fetch.
            status_code: HTTP status when the backend answered.
        """
        details: dict[str, Any] = {"resource": resource, "reason": reason}
        if parent_id is not None:
            details["parent_id"] = parent_id
        if status_code is not None:
            details["status_code"] = status_code
        super().__init__(
            f"Failed to fetch {resource}: {reason}",
            "TRANSPORT_ERROR",
            details,
        )
        self.status_code = status_code
