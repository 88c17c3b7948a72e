import asyncio
import json
import logging
from typing import Any, Dict, List, Optional
import aiohttp
from pydantic import ValidationError
from rich.console import Console
from .config import Config
from .errors import SymbologyError
from .models import ConversionResult, ConvertRequest, FieldEnum, MessageFormat

logger = logging.getLogger(__name__)

DEFAULT_SYMBOLOGY_BASE_URL = "https://api.refinitiv.com/discovery/symbology/v1"
CONVERT_PATH = "/convert"


class SymbologyClient:
    def __init__(self, config: Config, access_token: str):
        self.config = config
        self.access_token = access_token
        self.base_url = (
            config.symbology_base_url or DEFAULT_SYMBOLOGY_BASE_URL
        ).rstrip("/")
        self.session: Optional[aiohttp.ClientSession] = None
        self.console = Console()

    async def __aenter__(self):
        self.session = aiohttp.ClientSession(
            timeout=aiohttp.ClientTimeout(total=self.config.timeout),
            trust_env=self.config.proxy.trust_env,
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if self.session:
            await self.session.close()

    def _get_auth_headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.access_token}",
            "Accept": "application/json",
        }

    async def _make_request(
        self,
        method: str,
        params: Dict[str, str],
        data: Optional[Dict[str, Any]] = None,
    ) -> Optional[ConversionResult]:
        if not self.session:
            raise RuntimeError(
                "Client session not initialized. Use async with context."
            )

        url = f"{self.base_url}{CONVERT_PATH}"
        logger.debug("%s %s params=%s", method, url, params)

        try:
            with self.console.status("Making request..."):
                async with self.session.request(
                    method,
                    url,
                    params=params,
                    json=data,
                    headers=self._get_auth_headers(),
                    **self.config.proxy.request_kwargs(),
                ) as response:
                    status = response.status
                    body = await response.text()
                    headers = {k: [v] for k, v in dict(response.headers or {}).items()}
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise SymbologyError(
                f"Request to {url} failed: {type(e).__name__} {e}"
            ) from e

        if not 200 <= status < 300:
            raise SymbologyError(
                "The HTTP status code of the response was not expected",
                status,
                body,
                headers,
            )

        if not body or not body.strip():
            return None
        try:
            payload = json.loads(body)
            if payload is None:
                return None
            return ConversionResult.model_validate(payload)
        except (ValueError, ValidationError) as e:
            raise SymbologyError(
                "Could not deserialize the response body", status, body, headers
            ) from e

    async def post_convert(
        self,
        request: ConvertRequest,
        message_format: MessageFormat = MessageFormat.NO_MESSAGES,
    ) -> Optional[ConversionResult]:
        return await self._make_request(
            "POST",
            {"format": message_format.value},
            data=request.model_dump(mode="json"),
        )

    async def get_convert(
        self,
        universe: str,
        to: List[FieldEnum],
        message_format: MessageFormat = MessageFormat.NO_MESSAGES,
    ) -> Optional[ConversionResult]:
        params = {"universe": universe, "format": message_format.value}
        if to:
            params["to"] = ",".join(field.value for field in to)
        return await self._make_request("GET", params)
