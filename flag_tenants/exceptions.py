"""
Custom exception hierarchy for the feature-flag tenant editor.

Hierarchy:

    TenantFlagError (base)
    ├── UsageError         : bad command-line arguments
    ├── AuthenticationError: login failed or session data incomplete
    ├── NetworkError       : non-success HTTP status or transport failure
    ├── ParseError         : malformed JSON, CSRF token extraction failure
    └── FlagNotFoundError  : no feature flag with the requested name

Rules:
    - Every TenantFlagError is terminal: nothing below the CLI catches and
      continues. The CLI maps all of them to exit status 1.
    - Everything else (AttributeError, TypeError, etc.): let it propagate.
"""
from typing import Optional


class TenantFlagError(Exception):
    """Base exception for all tenant editor errors."""
    pass


class UsageError(TenantFlagError):
    """Raised for invalid tenant ID lists or unknown functions."""
    pass


class AuthenticationError(TenantFlagError):
    """Raised when login fails or yields no cookies, CSRF token or session id."""
    pass


class NetworkError(TenantFlagError):
    """Non-success HTTP response or transport exception.

    Carries the status code and response body when a response was received.
    """

    def __init__(self, message: str, status_code: Optional[int] = None, body: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body

    def __str__(self) -> str:
        base = super().__str__()
        if self.status_code is None:
            return base
        return f"{base} (status={self.status_code}, body={self.body!r})"


class ParseError(TenantFlagError):
    """Raised when a response body cannot be parsed as expected."""
    pass


class FlagNotFoundError(TenantFlagError):
    """Raised when the feature flag list has no entry with the requested name."""

    def __init__(self, flag_name: str):
        super().__init__(f"Feature flag not found: {flag_name}")
        self.flag_name = flag_name
