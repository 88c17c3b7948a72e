from typing import Dict, List, Optional

from .models import AuthErrorDetail

MAX_RESPONSE_EXCERPT = 512


class SymbologyError(Exception):
    """Raised when the platform answers with an unexpected status."""

    def __init__(
        self,
        message: str,
        status_code: int = 0,
        response: str = "",
        headers: Optional[Dict[str, List[str]]] = None,
    ):
        super().__init__(
            f"{message}\n\nStatus: {status_code}\nResponse: \n"
            f"{response[:MAX_RESPONSE_EXCERPT]}"
        )
        self.status_code = status_code
        self.response = response
        self.headers = headers or {}


class AuthorizationError(SymbologyError):
    """OAuth2 error body returned by the token endpoint."""

    def __init__(
        self,
        message: str,
        status_code: int,
        response: str,
        result: AuthErrorDetail,
        headers: Optional[Dict[str, List[str]]] = None,
    ):
        super().__init__(message, status_code, response, headers)
        self.result = result


class EmptyResponseError(SymbologyError):
    """The conversion call completed without a body."""


class OperationCancelled(Exception):
    """The user interrupted an operation in progress."""
