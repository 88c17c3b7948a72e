import pytest
from symbcli.cancellation import CancellationToken
from symbcli.config import Config
from symbcli.errors import EmptyResponseError
from symbcli.fetch import fetch_by_get, fetch_by_post
from symbcli.models import ConversionResult, ConvertRequest, FieldEnum, MessageFormat

RESULT = ConversionResult(
    headers=[{"name": "ISIN", "title": "ISIN"}], data=[["US4592001014"]]
)


class FakeSymbologyClient:
    def __init__(self, result):
        self.result = result
        self.calls = []
        self.open = False

    async def __aenter__(self):
        self.open = True
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        self.open = False

    async def post_convert(self, request, message_format):
        self.calls.append(("post", request, message_format))
        return self.result

    async def get_convert(self, universe, to, message_format):
        self.calls.append(("get", universe, to, message_format))
        return self.result


@pytest.fixture
def convert_request():
    return ConvertRequest(universe=["IBM.N", "MSFT.O"], to=[FieldEnum.ISIN])


def test_fetch_by_post(convert_request, console):
    client = FakeSymbologyClient(RESULT)
    result = fetch_by_post(client, convert_request, Config(), CancellationToken(), console=console)
    assert result == RESULT
    assert client.calls == [("post", convert_request, MessageFormat.NO_MESSAGES)]
    assert client.open is False


def test_fetch_by_post_null_result_raises(convert_request, console):
    client = FakeSymbologyClient(None)
    with pytest.raises(EmptyResponseError):
        fetch_by_post(client, convert_request, Config(), CancellationToken(), console=console)


def test_fetch_by_get(convert_request, console):
    client = FakeSymbologyClient(RESULT)
    result = fetch_by_get(
        client,
        convert_request,
        Config(),
        CancellationToken(),
        MessageFormat.WITH_MESSAGES,
        console=console,
    )
    assert result == RESULT
    assert client.calls == [
        ("get", "IBM.N,MSFT.O", [FieldEnum.ISIN], MessageFormat.WITH_MESSAGES)
    ]


def test_fetch_by_get_null_result_returns_none(convert_request, console):
    client = FakeSymbologyClient(None)
    assert fetch_by_get(client, convert_request, Config(), CancellationToken(), console=console) is None


def test_verbose_prints_request(convert_request, console):
    client = FakeSymbologyClient(RESULT)
    fetch_by_get(client, convert_request, Config(verbose=True), CancellationToken(), console=console)
    output = console.file.getvalue()
    assert "JSON Request Body" in output
    assert '"IBM.N"' in output


def test_quiet_does_not_print_request(convert_request, console):
    client = FakeSymbologyClient(RESULT)
    fetch_by_post(client, convert_request, Config(), CancellationToken(), console=console)
    assert console.file.getvalue() == ""
