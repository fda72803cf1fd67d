import pytest

from page_inspector.errors import MainFetchError
from page_inspector.inspector.models import (
    Initiator,
    InspectionReport,
    MainDocument,
    ProbeResult,
)
from page_inspector.inspector import PageInspector
from page_inspector.web.app import create_app


class StubInspector(PageInspector):
    """PageInspector with the network part replaced."""

    def __init__(self, outcome):
        super().__init__()
        self.outcome = outcome
        self.seen = []

    async def inspect(self, url):
        self.validate_url(url)
        self.seen.append(url)
        if isinstance(self.outcome, Exception):
            raise self.outcome
        return self.outcome


REPORT = InspectionReport(
    fetched_url="https://example.com/",
    main=MainDocument(status=200, ok=True, content_type="text/html", time_ms=12),
    resources=[
        ProbeResult(
            url="https://example.com/a.png",
            status=200,
            ok=True,
            content_type="image/png",
            size=3,
            time_ms=4,
            method_tried="HEAD",
            initiator=Initiator.IMG,
        )
    ],
    note="Limited to 200 resources.",
)


@pytest.fixture()
def make_client():
    def _make(outcome=REPORT):
        inspector = StubInspector(outcome)
        app = create_app(inspector)
        app.config["TESTING"] = True
        return app.test_client(), inspector

    return _make


def test_health(make_client):
    client, _ = make_client()
    response = client.get("/health")
    assert response.status_code == 200
    assert response.get_data(as_text=True) == "ok"


def test_index_page(make_client):
    client, _ = make_client()
    response = client.get("/")
    assert response.status_code == 200
    assert b"Page Inspector" in response.data


def test_inspect_returns_report(make_client):
    client, inspector = make_client()

    response = client.post("/api/inspect", json={"url": "https://example.com/"})

    assert response.status_code == 200
    data = response.get_json()
    assert data["fetchedUrl"] == "https://example.com/"
    assert data["main"]["timeMs"] == 12
    assert data["resources"][0]["initiator"] == "img"
    assert data["resources"][0]["methodTried"] == "HEAD"
    assert inspector.seen == ["https://example.com/"]


@pytest.mark.parametrize("body", [None, {}, {"url": ""}, {"url": "   "}, {"url": 5}, ["x"]])
def test_missing_url_is_a_bad_request(make_client, body):
    client, inspector = make_client()

    if body is None:
        response = client.post("/api/inspect", data="not json", content_type="text/plain")
    else:
        response = client.post("/api/inspect", json=body)

    assert response.status_code == 400
    assert response.get_json()["error"] == "Missing url in body"
    assert inspector.seen == []


def test_blocked_url_is_a_bad_request(make_client):
    client, inspector = make_client()

    response = client.post("/api/inspect", json={"url": "http://127.0.0.1:8080/"})

    assert response.status_code == 400
    assert "blocked" in response.get_json()["error"]
    assert inspector.seen == []


def test_main_fetch_failure_is_a_bad_gateway(make_client):
    client, _ = make_client(MainFetchError("https://example.com/", "Connection refused"))

    response = client.post("/api/inspect", json={"url": "https://example.com/"})

    assert response.status_code == 502
    assert response.get_json() == {
        "error": "Failed to fetch target URL",
        "detail": "Connection refused",
    }


def test_unexpected_failure_is_an_internal_error(make_client):
    client, _ = make_client(RuntimeError("kaboom"))

    response = client.post("/api/inspect", json={"url": "https://example.com/"})

    assert response.status_code == 500
    assert response.get_json() == {"error": "Internal error", "detail": "kaboom"}


def test_oversized_body_is_rejected(make_client):
    client, _ = make_client()

    response = client.post(
        "/api/inspect",
        data="x" * (2 * 1024 * 1024 + 1),
        content_type="application/json",
    )

    assert response.status_code == 413
