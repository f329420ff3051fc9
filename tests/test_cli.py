import json
import logging
from http import HTTPStatus

import pytest

from ipgeolocate.cli import build_parser, main
from ipgeolocate.logger import LOGGER_NAME, log_config
from ipgeolocate.transport import FetchResponse
from tests.common import IP_API_PAYLOAD, IPWHOIS_PAYLOAD, StubTransport


class _RoutingTransport(StubTransport):
    """Returns the public IP for the ifconfig.io URL and a fixed body for everything else."""

    def __init__(self, body: str, public_ip: str = "1.1.1.1\n") -> None:
        super().__init__(body)
        self._public_ip = public_ip

    def fetch(self, url: str) -> FetchResponse:
        if "ifconfig.io" in url:
            self.urls.append(url)
            return FetchResponse(status_code=HTTPStatus.OK, body=self._public_ip)
        return super().fetch(url)


def test_cli_prints_city_and_country(capsys: pytest.CaptureFixture[str]) -> None:
    transport = StubTransport(json.dumps(IP_API_PAYLOAD))

    exit_code = main(["1.1.1.1"], transport=transport)

    assert exit_code == 0
    assert capsys.readouterr().out.strip() == "ipapi: 1.1.1.1 - Sydney (Australia)"
    assert transport.urls == ["http://ip-api.com/json/1.1.1.1"]


def test_cli_selects_service(capsys: pytest.CaptureFixture[str]) -> None:
    transport = StubTransport(json.dumps(IPWHOIS_PAYLOAD))

    exit_code = main(["1.1.1.1", "--service", "ipwhois"], transport=transport)

    assert exit_code == 0
    assert capsys.readouterr().out.strip() == "ipwhois: 1.1.1.1 - Sydney (Australia)"


def test_cli_all_fields(capsys: pytest.CaptureFixture[str]) -> None:
    transport = StubTransport(json.dumps(IPWHOIS_PAYLOAD))

    main(["1.1.1.1", "-s", "ipwhois", "--all"], transport=transport)

    out = capsys.readouterr().out
    assert "Latitude: -33.8688197" in out
    assert "Country Code: AU" in out
    assert "Timezone (GMT): GMT +10:00" in out
    assert "IP type: IPv4" in out


def test_cli_without_address_uses_public_ip(capsys: pytest.CaptureFixture[str]) -> None:
    transport = _RoutingTransport(json.dumps(IP_API_PAYLOAD))

    exit_code = main([], transport=transport)

    out = capsys.readouterr().out
    assert exit_code == 0
    assert "No IP address set, using network IP address 1.1.1.1" in out
    assert transport.urls == ["http://ifconfig.io/ip", "http://ip-api.com/json/1.1.1.1"]


def test_cli_reports_errors(capsys: pytest.CaptureFixture[str]) -> None:
    transport = StubTransport("Service Unavailable", status_code=HTTPStatus.SERVICE_UNAVAILABLE)

    exit_code = main(["8.8.8.8"], transport=transport)

    assert exit_code == 1
    assert "Error getting data: Couldn't connect to ip-api.com" in capsys.readouterr().err


def test_cli_rejects_unknown_service() -> None:
    with pytest.raises(SystemExit):
        build_parser().parse_args(["1.1.1.1", "--service", "IpApi"])


@pytest.mark.parametrize("level", ["bogus", "TRACE"])
def test_cli_rejects_unknown_log_level(level: str) -> None:
    with pytest.raises(SystemExit):
        build_parser().parse_args(["1.1.1.1", "--log-level", level])


def test_cli_log_level_is_case_insensitive() -> None:
    assert build_parser().parse_args(["1.1.1.1", "--log-level", "debug"]).log_level == "DEBUG"


def test_cli_log_level_does_not_leak_into_shared_config(capsys: pytest.CaptureFixture[str]) -> None:
    before = {name: settings["level"] for name, settings in log_config["loggers"].items()}

    exit_code = main(["1.1.1.1", "--log-level", "ERROR"], transport=StubTransport(json.dumps(IP_API_PAYLOAD)))

    assert exit_code == 0
    assert {name: settings["level"] for name, settings in log_config["loggers"].items()} == before
    assert logging.getLogger(LOGGER_NAME).level == logging.ERROR
