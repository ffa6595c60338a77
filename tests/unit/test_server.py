# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import random

import pytest
from fastapi.testclient import TestClient

from perfprobe.config import ProbeSettings
from perfprobe.errors import ErrorCategory
from perfprobe.http import HttpResponse, StubHttpClient
from perfprobe.runtime import PerfProbe
from perfprobe.server import PERFORMANCE_TEST_PATH, create_app

URL = "https://example.com"
NUMERIC_FIELDS = ("firstContentfulPaint", "resourceSize", "tti", "dnsTime", "tcpTime")


@pytest.fixture
def stub_client():
    return StubHttpClient({URL: HttpResponse(ok=True, status_code=200, headers={"content-length": "2048"})})


@pytest.fixture
def client(stub_client):
    runtime = PerfProbe(ProbeSettings(), http_client=stub_client, rng=random.Random(5))
    return TestClient(create_app(runtime))


def _assert_cors(response, origin="*"):
    assert response.headers["access-control-allow-origin"] == origin
    assert response.headers["access-control-allow-methods"] == "GET, POST, OPTIONS, PUT, DELETE"
    assert response.headers["access-control-allow-headers"] == "Content-Type, Authorization, X-Requested-With"
    assert response.headers["access-control-allow-credentials"] == "true"
    assert response.headers["access-control-max-age"] == "86400"


def test_performance_test_success(client, stub_client):
    response = client.post(PERFORMANCE_TEST_PATH, json={"url": URL, "region": "beijing"})

    assert response.status_code == 200
    payload = response.json()
    assert payload["code"] == 200
    assert payload["msg"] == "测试成功"
    data = payload["data"]
    assert data["region"] == "beijing"
    for field in NUMERIC_FIELDS:
        assert isinstance(data[field], int)
        assert data[field] >= 0
    assert data["tti"] >= data["firstContentfulPaint"]
    assert data["resourceSize"] == 2048
    assert data["testTime"]
    assert len(stub_client.requests) == 1
    _assert_cors(response)


def test_simulated_runtime_end_to_end():
    runtime = PerfProbe(ProbeSettings(strategy="simulate"), rng=random.Random(9))
    assert runtime.http_client is None
    response = TestClient(create_app(runtime)).post(PERFORMANCE_TEST_PATH, json={"url": URL, "region": "hangzhou"})
    assert response.status_code == 200
    assert 990 <= response.json()["data"]["firstContentfulPaint"] <= 1210


def test_region_is_echoed_unchanged(client):
    response = client.post(PERFORMANCE_TEST_PATH, json={"url": f"  {URL} ", "region": " Tokyo "})
    assert response.status_code == 200
    assert response.json()["data"]["region"] == " Tokyo "


def test_options_preflight_returns_204_with_cors(client):
    response = client.options(PERFORMANCE_TEST_PATH, headers={"Origin": "https://app.example"})
    assert response.status_code == 204
    assert response.content == b""
    _assert_cors(response, origin="https://app.example")


@pytest.mark.parametrize(
    ("method", "path"),
    [("GET", PERFORMANCE_TEST_PATH), ("PUT", PERFORMANCE_TEST_PATH), ("POST", "/other"), ("GET", "/docs")],
)
def test_unknown_routes_return_404_envelope(client, method, path):
    response = client.request(method, path)
    assert response.status_code == 404
    assert response.json() == {"code": 404, "msg": "接口不存在"}
    _assert_cors(response)


@pytest.mark.parametrize(
    "body",
    [{"url": URL}, {"region": "beijing"}, {"url": "", "region": "beijing"}, {"url": URL, "region": None}, ["x"]],
)
def test_missing_parameters_return_400(client, stub_client, body):
    response = client.post(PERFORMANCE_TEST_PATH, json=body)
    assert response.status_code == 400
    assert response.json() == {"code": 400, "msg": "缺少参数：url或region"}
    assert stub_client.requests == []


def test_malformed_json_returns_400(client):
    response = client.post(PERFORMANCE_TEST_PATH, content=b"{not json", headers={"Content-Type": "application/json"})
    assert response.status_code == 400


def test_non_https_url_returns_500_with_validation_message(client, stub_client):
    response = client.post(PERFORMANCE_TEST_PATH, json={"url": "http://example.com", "region": "beijing"})
    assert response.status_code == 500
    payload = response.json()
    assert payload["code"] == 500
    assert "HTTPS" in payload["msg"]
    assert stub_client.requests == []


def test_probe_failure_returns_500_with_classified_message(stub_client, client):
    stub_client.add(URL, HttpResponse(ok=False, error_message="timed out", error_category=ErrorCategory.TIMEOUT))
    response = client.post(PERFORMANCE_TEST_PATH, json={"url": URL, "region": "beijing"})
    assert response.status_code == 500
    assert response.json()["msg"].startswith("Request timed out")


def test_unexpected_error_returns_500(monkeypatch, client):
    def explode(_self, _request):
        raise RuntimeError("kaboom")

    monkeypatch.setattr(PerfProbe, "run", explode)
    response = client.post(PERFORMANCE_TEST_PATH, json={"url": URL, "region": "beijing"})
    assert response.status_code == 500
    assert response.json() == {"code": 500, "msg": "kaboom"}


def test_lifespan_builds_and_closes_owned_runtime(monkeypatch):
    monkeypatch.setenv("PERFPROBE_STRATEGY", "simulate")
    app = create_app()
    with TestClient(app) as test_client:
        assert isinstance(app.state.perfprobe, PerfProbe)
        response = test_client.post(PERFORMANCE_TEST_PATH, json={"url": URL, "region": "tokyo"})
        assert response.status_code == 200
    assert app.state.perfprobe is None
