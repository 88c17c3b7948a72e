import aiohttp
from pathlib import Path
from symbcli.config import Config, ProxyConfig
from symbcli.models import MessageFormat


def test_config_creation():
    config = Config()
    assert config.username is None
    assert config.timeout == 30
    assert config.verbose is False
    assert config.export_to_csv is False
    assert config.message_format == MessageFormat.NO_MESSAGES
    assert config.proxy.use_proxy is False


def test_password_assignment_is_secret():
    config = Config()
    config.password = "hunter2"
    assert config.password.get_secret_value() == "hunter2"
    assert "hunter2" not in str(config.password)


def test_clear_credentials():
    config = Config(
        username="user@example.com",
        client_id="app-key",
        password="secret",
        refresh_token="refresh",
        access_token="access",
    )
    config.clear_credentials()
    assert config.username is None
    assert config.client_id is None
    assert config.password is None
    assert config.refresh_token is None
    # the access token is not a login credential
    assert config.access_token.get_secret_value() == "access"


def test_proxy_disabled_has_no_kwargs():
    proxy = ProxyConfig(server="http://proxy:8080")
    assert proxy.request_kwargs() == {}
    assert proxy.trust_env is False


def test_proxy_with_credentials():
    proxy = ProxyConfig(
        use_proxy=True, server="http://proxy:8080", username="bob", password="pw"
    )
    kwargs = proxy.request_kwargs()
    assert kwargs["proxy"] == "http://proxy:8080"
    assert kwargs["proxy_auth"] == aiohttp.BasicAuth("bob", "pw")
    assert proxy.trust_env is False


def test_proxy_without_credentials_trusts_environment():
    proxy = ProxyConfig(use_proxy=True, server="http://proxy:8080")
    assert proxy.request_kwargs() == {"proxy": "http://proxy:8080"}
    assert proxy.trust_env is True


def test_config_save_load(tmp_path):
    config_path = tmp_path / "config.json"
    config = Config(
        username="user@example.com",
        password="secret",
        proxy=ProxyConfig(use_proxy=True, server="http://proxy:8080"),
        csv_file_path=tmp_path / "out.csv",
        message_format=MessageFormat.WITH_MESSAGES,
    )

    config.save(config_path)
    loaded_config = Config.load(config_path)

    assert loaded_config.username == config.username
    assert loaded_config.password.get_secret_value() == "secret"
    assert loaded_config.proxy.server == "http://proxy:8080"
    assert loaded_config.csv_file_path == tmp_path / "out.csv"
    assert loaded_config.message_format == MessageFormat.WITH_MESSAGES


def test_load_missing_file_gives_defaults(tmp_path):
    config = Config.load(tmp_path / "missing.json")
    assert config == Config()


def test_load_broken_file_gives_defaults(tmp_path):
    config_path = tmp_path / "config.json"
    config_path.write_text("{not json")
    config = Config.load(config_path)
    assert config.username is None
    assert config.csv_file_path == Path("symbology.csv")
