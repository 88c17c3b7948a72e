"""
Interactive sign-in loop.

The loop keeps asking for credentials until the token endpoint hands back a
token or the user presses Ctrl+C. Every attempt runs against a fresh
``AuthorizeClient`` and the credentials on the config are wiped after each
one, successful or not.
"""

import logging
from enum import Enum
from typing import Callable, Optional, Tuple

from pydantic import BaseModel
from rich.console import Console

from .auth import AuthorizeClient
from .cancellation import CancellationToken, run_sync
from .config import Config
from .errors import AuthorizationError, OperationCancelled
from .models import AuthErrorDetail, Token

logger = logging.getLogger(__name__)

SEPARATOR = "============================="


class AttemptKind(str, Enum):
    TOKEN = "token"
    AUTH_ERROR = "auth_error"
    FAILURE = "failure"
    CANCELLED = "cancelled"


class LoginAttempt(BaseModel):
    kind: AttemptKind
    token: Optional[Token] = None
    status_code: Optional[int] = None
    detail: Optional[AuthErrorDetail] = None
    error_type: Optional[str] = None
    message: Optional[str] = None


class Prompter:
    """Reads credentials from the terminal."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def ask(self, label: str) -> str:
        return self.console.input(f"{label}:")

    def ask_secret(self, label: str) -> str:
        return self.console.input(f"{label}:", password=True)


class LoginOrchestrator:
    def __init__(
        self,
        config: Config,
        prompter: Optional[Prompter] = None,
        client_factory: Callable[[Config], AuthorizeClient] = AuthorizeClient,
        cancel_token: Optional[CancellationToken] = None,
        console: Optional[Console] = None,
    ):
        self.config = config
        self.console = console or Console()
        self.prompter = prompter or Prompter(self.console)
        self.client_factory = client_factory
        self.cancel_token = cancel_token or CancellationToken()

    def attempt_login(self) -> Tuple[bool, Optional[Token]]:
        """Loop until a token is obtained or the user cancels.

        Returns ``(True, token)`` on success and ``(False, None)`` when the
        login was cancelled.
        """
        token: Optional[Token] = None
        with self.cancel_token.interrupt_handler():
            while token is None and not self.cancel_token.cancelled:
                try:
                    token = self._run_once()
                except KeyboardInterrupt:
                    self.cancel_token.cancel()

        if self.cancel_token.cancelled or token is None:
            return False, None
        return True, token

    def _run_once(self) -> Optional[Token]:
        self.console.print("\nSign in to the data platform. Press Ctrl+C to cancel")
        self.console.print(SEPARATOR)

        if self.cancel_token.cancelled:
            return None

        try:
            self._collect_credentials()
        except EOFError:
            self.cancel_token.cancel()

        self.console.print(SEPARATOR)
        if self.cancel_token.cancelled:
            return None

        self.console.print("Logging in to the server, please wait")
        try:
            attempt = self._attempt()
        finally:
            self.config.clear_credentials()

        return self._handle_attempt(attempt)

    def _collect_credentials(self) -> None:
        config = self.config
        if not config.username:
            config.username = self.prompter.ask("Machine ID or Username(Email)")
        else:
            self.console.print(f"Machine ID or Username(Email):{config.username}")

        if not config.client_id:
            config.client_id = self.prompter.ask("Enter Client ID/AppKey")
        else:
            self.console.print(f"Client ID:{config.client_id}")

        if (
            not self.cancel_token.cancelled
            and not config.refresh_token
            and not config.password
        ):
            config.password = self.prompter.ask_secret("Enter Password")

    def _attempt(self) -> LoginAttempt:
        try:
            return run_sync(self._grant(), self.cancel_token)
        except OperationCancelled:
            return LoginAttempt(kind=AttemptKind.CANCELLED)

    async def _grant(self) -> LoginAttempt:
        config = self.config
        try:
            async with self.client_factory(config) as auth_client:
                if config.refresh_token:
                    token = await auth_client.refresh_grant(
                        config.username, config.refresh_token.get_secret_value()
                    )
                else:
                    password = config.password.get_secret_value() if config.password else ""
                    token = await auth_client.password_grant(
                        config.username, password, config.client_id
                    )
        except AuthorizationError as e:
            return LoginAttempt(
                kind=AttemptKind.AUTH_ERROR, status_code=e.status_code, detail=e.result
            )
        except Exception as e:
            return LoginAttempt(
                kind=AttemptKind.FAILURE, error_type=type(e).__name__, message=str(e)
            )
        if token is None:
            return LoginAttempt(
                kind=AttemptKind.FAILURE,
                error_type="EmptyToken",
                message="Token endpoint returned no token",
            )
        return LoginAttempt(kind=AttemptKind.TOKEN, token=token)

    def _handle_attempt(self, attempt: LoginAttempt) -> Optional[Token]:
        if attempt.kind is AttemptKind.TOKEN:
            logger.debug("Login succeeded")
            return attempt.token
        if attempt.kind is AttemptKind.AUTH_ERROR:
            detail = attempt.detail or AuthErrorDetail()
            self.console.print(
                f"Login Failed! Status Code:{attempt.status_code} "
                f"Error:{detail.error} {detail.error_description} {detail.error_uri}"
            )
        elif attempt.kind is AttemptKind.FAILURE:
            self.console.print(f"\nGet {attempt.error_type} Error {attempt.message}")
        else:
            logger.debug("Login attempt cancelled")
        return None
