"""Tests for the HTTP decode and checksum routes."""

import pytest
from fastapi.testclient import TestClient

from server.main import app

RMC_VALID = "$GPRMC,080701.00,A,3128.7540,N,14257.6714,W,27.6,107.5,180607,13.1,E,A*2D"
GGA_VALID = "$GPGGA,025425.494,3509.0743,N,14207.6314,W,1,04,2.3,530.3,M,-21.9,M,0.0,0000*45"


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


def test_decode_merges_sentences(client: TestClient) -> None:
    response = client.post("/decode", json={"sentences": [RMC_VALID, GGA_VALID]})
    assert response.status_code == 200
    body = response.json()
    assert body["ok"] is True
    fix = body["fix"]
    assert fix["types"] == ["GPRMC", "GPGGA"]
    assert fix["last_type"] == "GPGGA"
    assert fix["lat"] == pytest.approx(35.15123833, abs=1e-7)
    assert fix["speed_knots"] == pytest.approx(27.6)
    assert fix["alt"] == pytest.approx(530.3)
    assert fix["ddmmyy"] == 180607
    assert fix["hhmmss"] == 25425
    assert fix["status_code"] is None


def test_decode_reports_failure(client: TestClient) -> None:
    response = client.post("/decode", json={"sentences": [RMC_VALID[:-2] + "00", "$GTUID,abc"]})
    body = response.json()
    assert body["ok"] is False
    assert body["fix"]["types"] == ["GTUID"]
    assert body["fix"]["mobile_id"] == "abc"


def test_decode_ignore_checksum(client: TestClient) -> None:
    response = client.post(
        "/decode",
        json={"sentences": [RMC_VALID[:-2] + "00"], "ignore_checksum": True},
    )
    body = response.json()
    assert body["ok"] is True
    assert body["fix"]["checksum_ok"] is False
    assert body["fix"]["fixtime"] == 1182154021


def test_decode_empty_batch(client: TestClient) -> None:
    body = client.post("/decode", json={"sentences": []}).json()
    assert body["ok"] is False
    assert body["fix"]["types"] == []


def test_decode_rejects_bad_body(client: TestClient) -> None:
    assert client.post("/decode", json={"sentence": RMC_VALID}).status_code == 422


def test_checksum(client: TestClient) -> None:
    body = client.post("/checksum", json={"text": RMC_VALID}).json()
    assert body == {"checksum": "2D", "valid": True}


def test_checksum_of_payload(client: TestClient) -> None:
    body = client.post("/checksum", json={"text": "GPZDA,125653.00,13,09,2007,00,00"}).json()
    assert body == {"checksum": "6E", "valid": False}
