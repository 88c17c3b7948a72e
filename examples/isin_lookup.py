"""
Sample script: convert a couple of RICs to ISIN and CUSIP with HTTP GET
"""

from symbcli import Config, LoginOrchestrator, SymbologyClient
from symbcli.cancellation import CancellationToken
from symbcli.fetch import fetch_by_get
from symbcli.output import print_response
from symbcli.request_builder import build_convert_request


def main():
    """
    Lookup runner
    """
    config = Config.load()
    config.universe = "IBM.N,MSFT.O"
    config.to_fields = "ISIN,CUSIP"

    success, token = LoginOrchestrator(config).attempt_login()
    if not success:
        return

    request = build_convert_request(config)
    client = SymbologyClient(config, token.access_token)
    result = fetch_by_get(client, request, config, CancellationToken())
    print_response(result, config)


if __name__ == "__main__":
    main()
