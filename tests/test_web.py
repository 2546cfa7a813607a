import pytest
from fastapi.testclient import TestClient

from booktracker.web import app as web_app


@pytest.fixture
def client(tmp_path, monkeypatch):
    monkeypatch.setattr(web_app.settings, "catalog_path", tmp_path / "catalog.txt")
    monkeypatch.setattr(web_app.settings, "catalog_extensions", (".txt",))
    monkeypatch.setattr(web_app.settings, "error_log_name", "errors.log")
    return TestClient(web_app.app)


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


def test_add_and_list(client, tmp_path):
    resp = client.post("/api/operation", json={"operation": "Zeta:Z:9780000000009:1"})
    assert resp.status_code == 200
    client.post("/api/operation", json={"operation": "Alpha:A:9780000000001:2"})

    books = client.get("/api/books").json()["books"]
    assert [b["title"] for b in books] == ["Alpha", "Zeta"]
    assert (tmp_path / "catalog.txt").read_text().splitlines()[0] == "Alpha:A:9780000000001:2"


def test_title_search(client, tmp_path):
    (tmp_path / "catalog.txt").write_text("Dune:Frank Herbert:9780441172719:4\n")

    data = client.post("/api/operation", json={"operation": "dune"}).json()

    assert data["kind"] == "title_search"
    assert data["succeeded"] is True
    assert data["matches"][0]["copies"] == 4


def test_duplicate_isbn(client, tmp_path):
    (tmp_path / "catalog.txt").write_text("A:X:1234567890123:1\nB:Y:1234567890123:1\n")

    data = client.post("/api/operation", json={"operation": "1234567890123"}).json()

    assert data["succeeded"] is False
    assert data["operation_failure"]["kind"] == "DuplicateISBN"
    assert data["operation_failure"]["count"] == 2


def test_list_reports_rejected_lines(client, tmp_path):
    (tmp_path / "catalog.txt").write_text("Dune:Frank Herbert:9780441172719:4\nBad:Author:12:2\n")

    data = client.get("/api/books").json()

    assert len(data["books"]) == 1
    assert data["rejected"] == 1
    assert "InvalidISBN" in (tmp_path / "errors.log").read_text()


@pytest.mark.parametrize("body", [{}, {"operation": "   "}, {"operation": 5}])
def test_operation_required(client, body):
    assert client.post("/api/operation", json=body).status_code == 400


def test_invalid_json(client):
    resp = client.post(
        "/api/operation", content=b"not json", headers={"content-type": "application/json"}
    )
    assert resp.status_code == 400


def test_bad_catalog_extension(client, tmp_path, monkeypatch):
    monkeypatch.setattr(web_app.settings, "catalog_path", tmp_path / "catalog.csv")
    assert client.post("/api/operation", json={"operation": "dune"}).status_code == 400
    assert client.get("/api/books").status_code == 400


def test_security_headers(client):
    resp = client.get("/health")
    assert resp.headers["X-Content-Type-Options"] == "nosniff"
    assert resp.headers["X-Frame-Options"] == "DENY"
    assert resp.headers["Referrer-Policy"] == "strict-origin-when-cross-origin"
