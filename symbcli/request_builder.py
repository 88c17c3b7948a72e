import json
import logging
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from jsonschema import ValidationError, validate
from rich.console import Console

from .config import Config
from .models import ConvertRequest, FieldEnum

logger = logging.getLogger(__name__)

MAX_UNIVERSE_FILE_ENTRIES = 99

REQUEST_FILE_SCHEMA = {
    "type": "object",
    "properties": {
        "universe": {"type": "array", "items": {"type": "string"}},
        "to": {"type": "array", "items": {"type": "string"}},
    },
}


def split_csv(value: Optional[str]) -> List[str]:
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


def parse_fields(values: Iterable[str]) -> Tuple[List[FieldEnum], str]:
    """
    Map raw field names to FieldEnum members. Unknown names are dropped and
    reported in the returned message, which is empty when all are valid.
    """
    fields: List[FieldEnum] = []
    invalid: List[str] = []
    for value in values:
        field = FieldEnum.lookup(value)
        if field is None:
            invalid.append(value)
        else:
            fields.append(field)

    if not invalid:
        return fields, ""
    valid_names = ", ".join(member.value for member in FieldEnum)
    return fields, (
        f"Invalid field(s) removed from the request: {', '.join(invalid)}. "
        f"Valid values are: {valid_names}"
    )


def read_universe_file(path: Path, limit: int = MAX_UNIVERSE_FILE_ENTRIES) -> List[str]:
    universe: List[str] = []
    with open(path, encoding="utf-8") as f:
        for line in f:
            if len(universe) >= limit:
                break
            item = line.strip()
            if item:
                universe.append(item)
    return universe


def _apply_fields(request: ConvertRequest, values: List[str]) -> None:
    request.to, error_message = parse_fields(values)
    if error_message:
        logger.warning(error_message)


def build_convert_request(
    config: Config, console: Optional[Console] = None
) -> ConvertRequest:
    """
    Build the conversion request from the configuration. Errors are logged
    and whatever was parsed up to that point is returned.
    """
    console = console or Console()
    request = ConvertRequest()
    try:
        if config.use_json_request_file:
            console.print(
                f"Reading and processing request message from {config.json_request_file}"
            )
            with open(config.json_request_file, encoding="utf-8") as f:
                data = json.load(f)
            validate(instance=data, schema=REQUEST_FILE_SCHEMA)
            request.universe = list(data.get("universe", []))
            _apply_fields(request, list(data.get("to", [])))
        else:
            request.universe = split_csv(config.universe)
            _apply_fields(request, split_csv(config.to_fields))

        if config.universe_list_file:
            request.universe = read_universe_file(config.universe_list_file)
    except (OSError, TypeError, ValueError, ValidationError) as e:
        logger.error("Unable to convert json data to request message: %s", e)

    return request
