# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import json
import logging

import pytest

from perfprobe.cli import main as cli_main
from perfprobe.cli.main import EXIT_INVALID_INPUT, EXIT_OK, EXIT_PROBE_FAILED, _pretty_print, build_parser
from perfprobe.config import ProbeSettings
from perfprobe.errors import ProbeTimeoutError, TransportError
from perfprobe.http import HttpResponse, StubHttpClient
from perfprobe.log import TRANSPORT_LOGGERS, setup_logging
from perfprobe.models import ProbeRequest, ProbeResult
from perfprobe.runtime import PerfProbe
from perfprobe.server import main as server_main


class DummyClient:
    def __init__(self):
        self.closed = False

    def request(self, request):  # noqa: ANN001
        return HttpResponse(ok=True, status_code=200, headers={"content-length": "321"}, url=request.url)

    def close(self) -> None:
        self.closed = True


def test_build_parser_and_pretty_print(capsys):
    args = build_parser().parse_args(["https://example.com", "--region", "tokyo", "--json", "--simulate", "--timeout", "11"])
    assert args.url == "https://example.com"
    assert args.region == "tokyo"
    assert args.json is True
    assert args.simulate is True
    assert args.timeout == 11.0

    _pretty_print(
        ProbeResult(
            region="tokyo",
            first_contentful_paint=2000,
            resource_size=2048,
            tti=3000,
            dns_time=10,
            tcp_time=20,
            test_time="2025/01/01 00:00:00",
        )
    )
    out = capsys.readouterr().out
    assert "Region: tokyo" in out
    assert "First contentful paint: 2000 ms" in out
    assert "2.0 KiB" in out


def test_cli_json_simulated_run(capsys):
    code = cli_main.main(["https://example.com", "--region", "hangzhou", "--simulate", "--json"])
    assert code == EXIT_OK
    data = json.loads(capsys.readouterr().out)
    assert data["region"] == "hangzhou"
    assert 990 <= data["firstContentfulPaint"] <= 1210
    assert data["tti"] >= data["firstContentfulPaint"]


def test_cli_rejects_non_https(capsys):
    code = cli_main.main(["http://example.com", "--simulate"])
    assert code == EXIT_INVALID_INPUT
    assert "HTTPS" in capsys.readouterr().err


def test_cli_reports_probe_failure(monkeypatch, capsys):
    captured = {}

    class FailingRuntime:
        def __init__(self, settings):
            captured["settings"] = settings

        def probe(self, url, region):  # noqa: ARG002
            raise ProbeTimeoutError("Request timed out (3s)")

        def __enter__(self):
            return self

        def __exit__(self, *_):
            return None

    monkeypatch.setattr(cli_main, "PerfProbe", FailingRuntime)
    code = cli_main.main(["https://example.com", "--ignore-ssl-errors", "--timeout", "3"])
    assert code == EXIT_PROBE_FAILED
    assert "Request timed out" in capsys.readouterr().err
    assert captured["settings"].verify_ssl is False
    assert captured["settings"].timeout == 3.0


def test_perfprobe_runtime_probe_and_run():
    client = DummyClient()
    with PerfProbe(ProbeSettings(), http_client=client) as runtime:
        result = runtime.run(ProbeRequest(url="https://example.com", region="beijing"))
        assert result.resource_size == 321
    assert client.closed is True


def test_perfprobe_runtime_simulation_needs_no_client():
    runtime = PerfProbe(ProbeSettings(strategy="simulate"))
    assert runtime.http_client is None
    assert runtime.probe("https://example.com", "mars").region == "mars"
    runtime.close()


def test_probe_request_from_mapping():
    assert ProbeRequest.from_mapping({"url": " https://a.test ", "region": "beijing"}) == ProbeRequest(
        url="https://a.test", region="beijing"
    )
    assert ProbeRequest.from_mapping({"url": "https://a.test"}) is None
    assert ProbeRequest.from_mapping({"url": 1, "region": "x"}) is None
    assert ProbeRequest.from_mapping(None) is None


def test_region_label_is_echoed_verbatim():
    request = ProbeRequest.from_mapping({"url": "https://a.test", "region": " Beijing "})
    assert request.region == " Beijing "
    assert ProbeRequest.from_mapping({"url": "https://a.test", "region": "   "}) is None


def test_probe_result_to_dict_uses_wire_names():
    result = ProbeResult(
        region="beijing",
        first_contentful_paint=1,
        resource_size=2,
        tti=3,
        dns_time=4,
        tcp_time=5,
        test_time="2025/01/01 00:00:00",
    )
    assert result.to_dict() == {
        "region": "beijing",
        "firstContentfulPaint": 1,
        "resourceSize": 2,
        "tti": 3,
        "dnsTime": 4,
        "tcpTime": 5,
        "testTime": "2025/01/01 00:00:00",
    }


def test_probe_result_rejects_tti_before_fcp():
    with pytest.raises(ValueError):
        ProbeResult(region="x", first_contentful_paint=10, resource_size=0, tti=5, dns_time=0, tcp_time=0, test_time="t")


def test_server_main_wires_uvicorn(monkeypatch):
    calls = {}

    def fake_run(app, host, port, log_level):
        calls.update(app=app, host=host, port=port, log_level=log_level)

    monkeypatch.setattr(server_main.uvicorn, "run", fake_run)
    monkeypatch.setattr(server_main, "setup_logging", lambda level=None: None)
    assert server_main.main(["--simulate", "--port", "9001", "--host", "127.0.0.1"]) == 0
    assert calls["port"] == 9001
    assert calls["host"] == "127.0.0.1"
    assert isinstance(calls["app"].state.perfprobe, PerfProbe)
    assert calls["app"].state.perfprobe.settings.strategy == "simulate"


def test_stub_client_unconfigured_url_is_reported():
    runtime = PerfProbe(ProbeSettings(), http_client=StubHttpClient())
    with pytest.raises(TransportError, match="No stubbed response configured"):
        runtime.probe("https://unconfigured.test", "beijing")


def test_setup_logging_quiets_transport_loggers_unless_debug():
    setup_logging("INFO")
    assert all(logging.getLogger(name).level == logging.WARNING for name in TRANSPORT_LOGGERS)
    setup_logging("debug")
    assert all(logging.getLogger(name).level == logging.DEBUG for name in TRANSPORT_LOGGERS)
