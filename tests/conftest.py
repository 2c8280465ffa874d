"""Pytest fixtures: a throwaway fixture directory and an app bound to it."""

import json

import pytest
from fastapi.testclient import TestClient

from invoice_mock.config import MockConfig
from invoice_mock.server import create_app


DEFAULT_DOC = {"invoices": [{"id": "INV-DEFAULT", "amount": 10.5}], "total": 1}


def write_fixture(root, name, document):
    path = root / f"{name}.json"
    if isinstance(document, str):
        path.write_text(document, encoding="utf-8")
    else:
        path.write_text(json.dumps(document), encoding="utf-8")
    return path


@pytest.fixture
def mocks_dir(tmp_path):
    root = tmp_path / "mocks"
    root.mkdir()
    write_fixture(root, "default", DEFAULT_DOC)
    write_fixture(root, "11959597475", {"invoices": [], "__status": 200})
    return root


@pytest.fixture
def add_fixture(mocks_dir):
    """Write ``<mocks_dir>/<name>.json``; strings are written verbatim."""

    def _add(name, document):
        return write_fixture(mocks_dir, name, document)

    return _add


@pytest.fixture
def config(mocks_dir):
    return MockConfig(mocks_dir=mocks_dir)


@pytest.fixture
def client(config):
    return TestClient(create_app(config))
