"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class NotFoundError(DomainException):
    """Referenced business, application or notification does not exist"""

    pass


class ValidationError(DomainException):
    """Required field missing or malformed for the requested operation"""

    pass


class ConflictError(ValidationError):
    """Value collides with an existing record (e.g. a taken payment slug)"""

    pass


class UpstreamError(DomainException):
    """Persistence or network dependency failed"""

    pass


class BankAPIError(UpstreamError):
    """Bank verification API returned an error or is unavailable"""

    pass
