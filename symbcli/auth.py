import json
import logging
from typing import Dict, Optional
import aiohttp
from pydantic import ValidationError
from .config import Config
from .errors import AuthorizationError, SymbologyError
from .models import AuthErrorDetail, Token

logger = logging.getLogger(__name__)

DEFAULT_AUTH_BASE_URL = "https://api.refinitiv.com/auth/oauth2/v1"
TOKEN_PATH = "/token"
DEFAULT_SCOPE = "trapi"


class AuthorizeClient:
    """OAuth2 token endpoint client.

    Used as an async context manager: the aiohttp session lives only for the
    ``async with`` block, so every login attempt gets a fresh one.
    """

    def __init__(self, config: Config):
        self.config = config
        self.base_url = (config.auth_base_url or DEFAULT_AUTH_BASE_URL).rstrip("/")
        self.session: Optional[aiohttp.ClientSession] = None

    async def __aenter__(self):
        self.session = aiohttp.ClientSession(
            timeout=aiohttp.ClientTimeout(total=self.config.timeout),
            trust_env=self.config.proxy.trust_env,
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if self.session:
            await self.session.close()

    async def password_grant(self, username: str, password: str, client_id: str) -> Token:
        """Get a new access token and refresh token with the password grant."""
        return await self._request_token(
            {
                "grant_type": "password",
                "username": username,
                "password": password,
                "client_id": client_id,
                "scope": DEFAULT_SCOPE,
                "takeExclusiveSignOnControl": "true",
            }
        )

    async def refresh_grant(self, username: str, refresh_token: str) -> Token:
        """Exchange a refresh token for a new access token."""
        return await self._request_token(
            {
                "grant_type": "refresh_token",
                "username": username,
                "refresh_token": refresh_token,
                "client_id": username,
            }
        )

    async def _request_token(self, form: Dict[str, str]) -> Token:
        if not self.session:
            raise RuntimeError(
                "Client session not initialized. Use async with context."
            )

        url = f"{self.base_url}{TOKEN_PATH}"
        logger.debug("Requesting %s grant from %s", form["grant_type"], url)
        async with self.session.request(
            "POST",
            url,
            data=form,
            headers={"Accept": "application/json"},
            **self.config.proxy.request_kwargs(),
        ) as response:
            status = response.status
            body = await response.text()

        if 200 <= status < 300:
            return Token.model_validate_json(body)

        raise _error_from_response(status, body)


def _error_from_response(status: int, body: str) -> SymbologyError:
    try:
        detail = AuthErrorDetail.model_validate(json.loads(body))
    except (ValueError, ValidationError):
        return SymbologyError(
            "The HTTP status code of the response was not expected", status, body
        )
    if detail.error is None:
        return SymbologyError(
            "The HTTP status code of the response was not expected", status, body
        )
    return AuthorizationError("Authorization failed", status, body, detail)
