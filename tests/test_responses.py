import json
from pathlib import Path

from invoice_mock.context import RequestEcho
from invoice_mock.errors import INVALID_REQUEST, MOCK_ERROR
from invoice_mock.fixtures import Fixture
from invoice_mock.responses import build_body, compose_invoice_response, error_response


ECHO = RequestEcho(msisdn="11959597475", page=2, limit=10)


def _fixture(**kwargs):
    return Fixture(path=Path("x.json"), **kwargs)


def test_body_gets_request_echo_last():
    body = build_body({"invoices": [], "total": 0}, ECHO)
    assert list(body) == ["invoices", "total", "request"]
    assert body["request"] == {"msisdn": "11959597475", "page": 2, "limit": 10}


def test_existing_request_field_is_overwritten_in_place():
    body = build_body({"request": "stale", "invoices": []}, ECHO)
    assert list(body) == ["request", "invoices"]
    assert body["request"]["msisdn"] == "11959597475"


def test_source_body_is_not_mutated():
    source = {"invoices": []}
    build_body(source, ECHO)
    assert source == {"invoices": []}


def test_defaults_to_200_without_extra_headers():
    response = compose_invoice_response(_fixture(body={"invoices": []}), ECHO)
    assert response.status_code == 200
    assert response.headers["content-type"] == "application/json"
    assert "x-mock" not in response.headers


def test_fixture_status_and_headers_are_applied():
    fixture = _fixture(body={"invoices": []}, status=503, headers={"Retry-After": "30", "X-Mock": "yes"})
    response = compose_invoice_response(fixture, ECHO)
    assert response.status_code == 503
    assert response.headers["retry-after"] == "30"
    assert response.headers["x-mock"] == "yes"
    assert json.loads(response.body) == {
        "invoices": [],
        "request": {"msisdn": "11959597475", "page": 2, "limit": 10},
    }


def test_error_response_shape():
    response = error_response(INVALID_REQUEST, "en")
    assert response.status_code == 400
    assert json.loads(response.body) == {
        "code": "INVALID_REQUEST",
        "message": INVALID_REQUEST.message("en"),
    }


def test_error_messages_are_localized():
    assert MOCK_ERROR.message("pt-BR") == "Erro no mock"
    assert MOCK_ERROR.message("en") == "Mock error"
    assert MOCK_ERROR.message("de") == "Erro no mock"
    assert MOCK_ERROR.message(None) == "Erro no mock"
