from typing import Optional

from rich.console import Console

from .cancellation import CancellationToken, run_sync
from .client import SymbologyClient
from .config import Config
from .errors import EmptyResponseError
from .models import ConversionResult, ConvertRequest, MessageFormat
from .output import print_request


def fetch_by_post(
    client: SymbologyClient,
    request: ConvertRequest,
    config: Config,
    cancel_token: CancellationToken,
    message_format: MessageFormat = MessageFormat.NO_MESSAGES,
    console: Optional[Console] = None,
) -> ConversionResult:
    """Convert with an HTTP POST. An empty result is an error."""
    if config.verbose:
        print_request(request, console)

    async def _post():
        async with client:
            return await client.post_convert(request, message_format)

    result = run_sync(_post(), cancel_token)
    if result is None:
        raise EmptyResponseError("The conversion service returned no data")
    return result


def fetch_by_get(
    client: SymbologyClient,
    request: ConvertRequest,
    config: Config,
    cancel_token: CancellationToken,
    message_format: MessageFormat = MessageFormat.NO_MESSAGES,
    console: Optional[Console] = None,
) -> Optional[ConversionResult]:
    """Convert with an HTTP GET. Returns None when the service sends nothing."""
    if config.verbose:
        print_request(request, console)

    async def _get():
        async with client:
            return await client.get_convert(
                ",".join(request.universe), request.to, message_format
            )

    return run_sync(_get(), cancel_token)
