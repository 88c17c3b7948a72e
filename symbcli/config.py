from typing import Any, Dict, Optional
from pathlib import Path
import json
import aiohttp
from pydantic import BaseModel, ConfigDict, Field, SecretStr
from rich.console import Console
from .models import MessageFormat

console = Console()

DEFAULT_CONFIG_PATH = Path.home() / ".symbcli" / "config.json"


class ProxyConfig(BaseModel):
    use_proxy: bool = False
    server: Optional[str] = None
    username: Optional[str] = None
    password: Optional[SecretStr] = None

    def request_kwargs(self) -> Dict[str, Any]:
        """Per-request proxy arguments for aiohttp."""
        if not self.use_proxy or not self.server:
            return {}
        kwargs: Dict[str, Any] = {"proxy": self.server}
        if self.username and self.password:
            kwargs["proxy_auth"] = aiohttp.BasicAuth(
                self.username, self.password.get_secret_value()
            )
        return kwargs

    @property
    def trust_env(self) -> bool:
        # no explicit proxy credentials: fall back to the environment's
        return self.use_proxy and not (self.username or self.password)


class Config(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    username: Optional[str] = None
    client_id: Optional[str] = None
    password: Optional[SecretStr] = None
    refresh_token: Optional[SecretStr] = None
    access_token: Optional[SecretStr] = None
    proxy: ProxyConfig = Field(default_factory=ProxyConfig)
    auth_base_url: Optional[str] = None
    symbology_base_url: Optional[str] = None
    timeout: int = 30
    verbose: bool = False
    debug: bool = False
    export_to_csv: bool = False
    csv_file_path: Path = Path("symbology.csv")
    use_json_request_file: bool = False
    json_request_file: Optional[Path] = None
    universe: Optional[str] = None
    universe_list_file: Optional[Path] = None
    to_fields: Optional[str] = None
    message_format: MessageFormat = MessageFormat.NO_MESSAGES

    def clear_credentials(self) -> None:
        self.username = None
        self.password = None
        self.refresh_token = None
        self.client_id = None

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "Config":
        if config_path is None:
            config_path = DEFAULT_CONFIG_PATH

        if not config_path.exists():
            return cls()

        try:
            with open(config_path) as f:
                data = json.load(f)
            return cls(**data)
        except Exception as e:
            console.print(f"[red]Error loading config: {e}[/red]")
            return cls()

    def save(self, config_path: Optional[Path] = None) -> None:
        if config_path is None:
            config_path = DEFAULT_CONFIG_PATH
        config_path.parent.mkdir(parents=True, exist_ok=True)

        def default(obj):
            if isinstance(obj, SecretStr):
                return obj.get_secret_value()
            if isinstance(obj, Path):
                return str(obj)
            raise TypeError(
                f"Object of type {obj.__class__.__name__} is not JSON serializable"
            )

        with open(config_path, "w") as f:
            json.dump(self.model_dump(), f, indent=2, default=default)
