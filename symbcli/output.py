import csv
import logging
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from .config import Config
from .models import ConversionResult, ConvertRequest, Token

logger = logging.getLogger(__name__)

NULL_CELL = "null"
CSV_NULL = "NULL"


def _console(console: Optional[Console]) -> Console:
    return console or Console()


def print_request(request: Optional[ConvertRequest], console: Optional[Console] = None) -> None:
    console = _console(console)
    if request is None:
        console.print("ConvertRequest should not be null")
        return
    console.print(Panel(request.to_json(), title="JSON Request Body"))


def print_token(token: Optional[Token], console: Optional[Console] = None) -> None:
    console = _console(console)
    if token is None:
        console.print("It's null token object")
        return

    table = Table(show_header=True, header_style="bold magenta", title="Token Details")
    table.add_column("Key", style="dim")
    table.add_column("Value")
    table.add_row("AccessToken", token.access_token)
    table.add_row("Expired", str(token.expires_in))
    table.add_row("RefreshToken", str(token.refresh_token))
    table.add_row("Scope", str(token.scope))
    table.add_row("TokenType", str(token.token_type))
    console.print(table)


def print_config(
    config: Optional[Config],
    request: Optional[ConvertRequest],
    console: Optional[Console] = None,
) -> None:
    """Dump the effective configuration. Secrets stay masked."""
    console = _console(console)
    if config is None or request is None:
        console.print(
            "Unable to print configuration because Config or ConvertRequest object is null"
        )
        return

    table = Table(show_header=True, header_style="bold magenta", title="Application Configuration")
    table.add_column("Key", style="dim")
    table.add_column("Value")
    table.add_row("Universe", ",".join(request.universe))
    table.add_row(
        "To",
        ",".join(field.value for field in request.to)
        if request.to
        else "No valid field list, all fields are returned instead",
    )
    table.add_row(
        "Use JSON File", f"{config.json_request_file or ''} {config.use_json_request_file}"
    )
    table.add_row("Export to CSV File", f"{config.csv_file_path} {config.export_to_csv}")
    if config.access_token:
        table.add_row("Username", str(config.username))
        table.add_row("AccessToken", str(config.access_token))
    if config.refresh_token:
        table.add_row("RefreshToken", str(config.refresh_token))
    if config.symbology_base_url:
        table.add_row("Symbology Base URL", config.symbology_base_url)
    if config.auth_base_url:
        table.add_row("Authorization Base URL", config.auth_base_url)
    if config.proxy.server:
        table.add_row("Proxy Server", config.proxy.server)
    table.add_row("Use Proxy Server", str(config.proxy.use_proxy))
    console.print(table)


def export_csv(result: ConversionResult, path: Path) -> None:
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f, lineterminator="\n")
        writer.writerow([header.title for header in result.headers])
        for row in result.data:
            writer.writerow([CSV_NULL if value is None else value for value in row])


def print_response(
    result: Optional[ConversionResult],
    config: Config,
    console: Optional[Console] = None,
) -> None:
    console = _console(console)
    if result is None:
        return

    if config.verbose:
        console.print(Panel(result.to_json(), title="Response Body in JSON Format"))

    console.rule("Universe List")
    for entity in result.universe:
        console.print(f"Common Name:{escape(str(entity.common_name))}")
        console.print(f"Instrument:{escape(str(entity.instrument))}")
        console.print(f"Organization Perm ID:{escape(str(entity.organization_perm_id))}")
        console.print(f"Reporting Currency:{escape(str(entity.reporting_currency))}")
    console.rule()

    console.print(f"\nRow Count: {result.row_count}")
    table = Table(show_header=True, header_style="bold magenta")
    for header in result.headers:
        table.add_column(escape(f"{header.title}({header.name})"))
    for row in result.data:
        table.add_row(*[NULL_CELL if value is None else escape(str(value)) for value in row])
    console.print(table)

    if result.messages is not None:
        console.print("\tMessage")
        console.print("\t\tCodes")
        for codes in result.messages.codes:
            console.print(f"\t\t [{', '.join(str(code) for code in codes)}]")
        console.print("\t\tDescription")
        for description in result.messages.descriptions:
            console.print(f"\t\t\tCode:{description.code}")
            console.print(f"\t\t\tDescription:{escape(description.description)}")
    console.rule()

    if not config.export_to_csv:
        return

    console.print(f"\nExport the data to CSV file {config.csv_file_path}")
    try:
        export_csv(result, config.csv_file_path)
    except Exception as e:
        logger.error("%s : %s", type(e).__name__, e)
        return
    console.print(f"Writing data to {config.csv_file_path} complete")
