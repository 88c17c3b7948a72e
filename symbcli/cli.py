"""
Command line entry point: sign in, convert symbols and print or export the
resulting table.
"""

import logging
from enum import Enum
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from typer import Option

from .cancellation import CancellationToken
from .client import SymbologyClient
from .config import Config
from .errors import OperationCancelled, SymbologyError
from .fetch import fetch_by_get, fetch_by_post
from .login import LoginOrchestrator
from .models import FieldEnum, MessageFormat
from .output import print_config, print_response, print_token
from .request_builder import build_convert_request

app = typer.Typer(help="Symbology conversion console client")
console = Console()


class HttpMethod(str, Enum):
    GET = "get"
    POST = "post"


def setup_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def load_config(
    config_path: Optional[Path] = None,
    universe: Optional[str] = None,
    to: Optional[str] = None,
    universe_file: Optional[Path] = None,
    json_request: Optional[Path] = None,
    csv_path: Optional[Path] = None,
    with_messages: bool = False,
    verbose: bool = False,
    debug: bool = False,
    access_token: Optional[str] = None,
) -> Config:
    """Load the configuration file and apply command line overrides."""
    config = Config.load(config_path)
    if universe:
        config.universe = universe
    if to:
        config.to_fields = to
    if universe_file:
        config.universe_list_file = universe_file
    if json_request:
        config.use_json_request_file = True
        config.json_request_file = json_request
    if csv_path:
        config.export_to_csv = True
        config.csv_file_path = csv_path
    if with_messages:
        config.message_format = MessageFormat.WITH_MESSAGES
    if verbose:
        config.verbose = True
    if debug:
        config.debug = True
    if access_token:
        config.access_token = access_token
    return config


def _login(config: Config) -> str:
    success, token = LoginOrchestrator(config, console=console).attempt_login()
    if not success:
        console.print("[yellow]Login cancelled[/yellow]")
        raise typer.Exit(1)
    if config.verbose:
        print_token(token, console)
    return token.access_token


@app.command()
def convert(
    config_path: Optional[Path] = Option(None, "--config", help="Path to config file"),
    universe: Optional[str] = Option(None, help="Comma separated list of instruments"),
    to: Optional[str] = Option(None, help="Comma separated list of target fields"),
    universe_file: Optional[Path] = Option(
        None, help="File with one instrument per line (max 99)"
    ),
    json_request: Optional[Path] = Option(
        None, help="JSON file with 'universe' and 'to' arrays"
    ),
    csv_path: Optional[Path] = Option(None, "--csv", help="Export the result to CSV"),
    method: HttpMethod = Option(HttpMethod.POST, help="HTTP method used for /convert"),
    with_messages: bool = Option(False, help="Ask the service for diagnostic messages"),
    verbose: bool = Option(False, help="Print request and response bodies"),
    debug: bool = Option(False, help="Enable debug logging"),
    access_token: Optional[str] = Option(None, help="Skip login and use this token"),
) -> None:
    """Convert instrument identifiers."""
    config = load_config(
        config_path,
        universe=universe,
        to=to,
        universe_file=universe_file,
        json_request=json_request,
        csv_path=csv_path,
        with_messages=with_messages,
        verbose=verbose,
        debug=debug,
        access_token=access_token,
    )
    setup_logging(config.debug)

    request = build_convert_request(config, console)
    if config.verbose:
        print_config(config, request, console)

    if config.access_token:
        token = config.access_token.get_secret_value()
    else:
        token = _login(config)

    client = SymbologyClient(config, token)
    cancel_token = CancellationToken()
    try:
        with cancel_token.interrupt_handler():
            if method is HttpMethod.GET:
                result = fetch_by_get(
                    client, request, config, cancel_token, config.message_format, console
                )
            else:
                result = fetch_by_post(
                    client, request, config, cancel_token, config.message_format, console
                )
    except (SymbologyError, OperationCancelled) as e:
        console.print(f"[red]Error:[/red] {str(e)}")
        raise typer.Exit(1)
    except KeyboardInterrupt:
        console.print("[yellow]Cancelled[/yellow]")
        raise typer.Exit(1)
    except Exception as e:
        console.print(f"[red]Error:[/red] {type(e).__name__} {str(e)}")
        raise typer.Exit(1)

    if result is None:
        console.print("[yellow]The conversion service returned no data[/yellow]")
        return
    print_response(result, config, console)


@app.command()
def login(
    config_path: Optional[Path] = Option(None, "--config", help="Path to config file"),
    debug: bool = Option(False, help="Enable debug logging"),
) -> None:
    """Sign in and print the token."""
    config = load_config(config_path, debug=debug)
    setup_logging(config.debug)
    success, token = LoginOrchestrator(config, console=console).attempt_login()
    if not success:
        console.print("[yellow]Login cancelled[/yellow]")
        raise typer.Exit(1)
    print_token(token, console)


@app.command()
def fields() -> None:
    """List the field names accepted by --to."""
    for field in FieldEnum:
        console.print(field.value)


def main() -> None:
    """Main entry point for the CLI."""
    app()
