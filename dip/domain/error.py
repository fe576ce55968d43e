"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error."""

    pass


class SigningError(DomainError):
    """Bridging token could not be signed (shared secret unavailable).

    Fatal: not recoverable per request.
    """

    pass


class SyncError(DomainError):
    """Local user upsert failed."""

    def __init__(self, email: str, reason: str):
        self.email = email
        self.reason = reason
        super().__init__(f"Failed to sync user {email}: {reason}")


class SessionConflictError(DomainError):
    """Session conflict resolution itself failed.

    Callers fail open and treat it as no conflict.
    """

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")
