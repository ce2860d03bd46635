from typing import Optional


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or a required field is blank."""

    def __init__(self, message: str, *, entity: Optional[str] = None):
        super().__init__(message)
        self.entity = entity


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class InvalidRole(ValidationError):
    pass


class InvalidRelationKind(ValidationError):
    pass


class DuplicateEmail(DomainError):
    pass


class DuplicateMealSlot(DomainError):
    pass


class DuplicateLink(DomainError):
    pass


class InvalidTimeRange(ValidationError):
    pass


class InvalidDateRange(ValidationError):
    pass


class LastAdminProtected(DomainError):
    pass


class GroupHasChildren(DomainError):
    pass


class TeacherHasSchedule(DomainError):
    pass


class TeacherAlreadyLinked(DomainError):
    pass


class NotFound(DomainError):
    pass


class TeacherNotFound(NotFound):
    pass


class ConstraintViolation(DomainError):
    """A storage-level unique/foreign-key constraint rejected the write."""


class UploadRejected(ValidationError):
    pass
