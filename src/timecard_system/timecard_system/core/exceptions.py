class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


BadRequest = ValidationError


class Unauthenticated(DomainError):
    """Raised when a request carries no valid principal."""


class MissingTenant(DomainError):
    """Raised when no organization can be resolved for a request."""


class TenantMismatch(DomainError):
    """Raised when a caller asks for an organization other than its own."""


class NotFound(DomainError):
    """Raised when a requested record does not exist for the tenant."""


class Conflict(DomainError):
    """Raised when a write collides with an existing record."""


class StorageUnavailable(DomainError):
    """Raised when the data store fails.

    ``busy`` marks transient lock contention so handlers can answer 503.
    """

    def __init__(self, message: str = "Storage unavailable", *, busy: bool = False):
        super().__init__(message)
        self.busy = busy


class IdentityProviderError(DomainError):
    """Raised when the identity provider cannot be read."""


class MetadataUpdateFailed(DomainError):
    """Raised when subscription metadata cannot be written back."""


class ConcurrentModification(DomainError):
    """Raised when metadata changed between read and write."""


class BillingProviderError(DomainError):
    """Raised when the billing provider call fails."""
