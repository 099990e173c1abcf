"""
Base exception classes for the application.

Exception hierarchy follows the layer structure:
- Core layer (fetcher, loader, index) raises technical exceptions
- Service layer lets them through or raises domain exceptions
- API layer transforms them to HTTP responses (see api/exception_handlers.py)
"""


class AppException(Exception):
    """
    Base exception for all application-specific exceptions.

    All custom exceptions should inherit from this class.
    This allows for easy catching of all app exceptions if needed.
    """

    def __init__(self, message: str = "An application error occurred"):
        self.message = message
        super().__init__(self.message)


# ============================================================================
# DOMAIN EXCEPTIONS (raised by service layer)
# ============================================================================


class ValidationError(AppException):
    """
    Raised when a request payload violates the check contract.

    Typically maps to HTTP 400
    """

    pass


class BadRequest(ValidationError):
    """
    Raised when a check payload is empty or cannot be decoded.

    Returned to the caller before the index is touched.
    """

    pass


# ============================================================================
# INDEX EXCEPTIONS
# ============================================================================


class MalformedAddress(AppException):
    """
    Raised when an address or prefix string cannot be parsed.

    The loader skips feed entries that raise it; a query batch containing
    one fails as a whole (HTTP 500).
    """

    pass


# ============================================================================
# DUMP ACQUISITION EXCEPTIONS
# ============================================================================


class DumpError(AppException):
    """Base exception for dump download/read errors."""

    pass


class FetchError(DumpError):
    """
    Raised when downloading the dump fails.

    Examples:
    - Connection refused / DNS failure / timeout
    - Non-200 response status
    - Destination file could not be written
    """

    pass


class DumpReadError(DumpError):
    """
    Raised when a downloaded dump file cannot be opened or read.

    Fatal during the initial load, skipped during periodic refresh.
    """

    pass
