"""HTTP surface tests via the FastAPI TestClient.

The completion service is the recording fake from ``conftest.py``; page
fetches are patched at ``fetch_page`` so no network is touched.
"""

from __future__ import annotations

from typing import Generator
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from gateway.api.app import create_app
from gateway.scraper.errors import FetchTimeoutError, NotHtmlError
from gateway.scraper.models import FetchedPage

_URL = "https://example.com/articles/one"

_PAGE_HTML = """\
<html><head><title>One</title></head>
<body>
  <h1>A headline that is long enough</h1>
  <p>First paragraph with plenty of words for the rewrite step to consider.</p>
  <p>Second paragraph describing the article topic in a little more depth.</p>
  <script>steal()</script>
</body></html>
"""


def _page(html: str = _PAGE_HTML) -> FetchedPage:
    return FetchedPage(url=_URL, html=html, status_code=200, content_type="text/html")


@pytest.fixture()
def fake(make_client):
    return make_client(reply='{"0": "Short headline for everyone"}')


@pytest.fixture()
def client(fake) -> Generator[TestClient, None, None]:
    app = create_app(completion_client=fake)
    with TestClient(app) as c:
        yield c


# ---------------------------------------------------------------------------
# /transform
# ---------------------------------------------------------------------------

class TestTransformEndpoint:
    def test_missing_url_is_400_plain_text(self, client: TestClient) -> None:
        resp = client.get("/transform")
        assert resp.status_code == 400
        assert resp.text == "Missing URL"
        assert resp.headers["content-type"].startswith("text/plain")

    def test_non_http_url_is_400(self, client: TestClient) -> None:
        resp = client.get("/transform", params={"url": "ftp://example.com/x"})
        assert resp.status_code == 400
        assert resp.text == "Invalid URL"

    def test_unknown_mode_is_400(self, client: TestClient) -> None:
        resp = client.get("/transform", params={"url": _URL, "mode": "loud"})
        assert resp.status_code == 400
        assert resp.text == "Invalid mode"

    @pytest.mark.parametrize(
        "url", ["http://example.com:abc/", "https://" + "a" * 70 + ".com/"]
    )
    def test_url_httpx_cannot_request_is_400(self, client: TestClient, url: str) -> None:
        resp = client.get("/transform", params={"url": url})
        assert resp.status_code == 400
        assert resp.text == "Invalid URL"

    def test_invalid_url_never_fetches(self, client: TestClient) -> None:
        with patch("gateway.pipeline.transform.fetch_page") as fetch:
            client.get("/transform", params={"url": "javascript:alert(1)"})
        fetch.assert_not_called()

    def test_success_headers_and_body(self, client: TestClient, fake) -> None:
        with patch("gateway.pipeline.transform.fetch_page", return_value=_page()):
            resp = client.get("/transform", params={"url": _URL, "mode": "simplified"})

        assert resp.status_code == 200
        assert resp.headers["content-type"] == "text/html; charset=utf-8"
        assert resp.headers["cache-control"] == "no-store, max-age=0"
        assert resp.headers["x-frame-options"] == "SAMEORIGIN"
        assert "Short headline for everyone" in resp.text
        assert "steal()" not in resp.text
        assert '<base href="https://example.com/articles/"' in resp.text
        assert len(fake.calls) == 1

    def test_mode_defaults_to_simplified(self, client: TestClient, fake) -> None:
        with patch("gateway.pipeline.transform.fetch_page", return_value=_page()):
            resp = client.get("/transform", params={"url": _URL})
        assert "Georgia, serif" in resp.text
        assert len(fake.calls) == 1

    def test_dyslexia_never_calls_model(self, client: TestClient, fake) -> None:
        with patch("gateway.pipeline.transform.fetch_page", return_value=_page()):
            resp = client.get("/transform", params={"url": _URL, "mode": "dyslexia"})
        assert "OpenDyslexic" in resp.text
        assert fake.calls == []

    @pytest.mark.parametrize(
        "error, message",
        [
            (NotHtmlError("application/pdf"), "appear to be a webpage"),
            (FetchTimeoutError(), "took too long to respond"),
        ],
    )
    def test_fetch_failures_are_200_error_pages(
        self, client: TestClient, error: Exception, message: str
    ) -> None:
        with patch("gateway.pipeline.transform.fetch_page", side_effect=error):
            resp = client.get("/transform", params={"url": _URL, "mode": "original"})

        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith("text/html")
        assert message in resp.text
        assert "Page Could Not Be Loaded" in resp.text


# ---------------------------------------------------------------------------
# /summary
# ---------------------------------------------------------------------------

class TestSummaryEndpoint:
    def test_missing_url_is_400_json(self, client: TestClient) -> None:
        resp = client.get("/summary")
        assert resp.status_code == 400
        assert resp.json() == {"error": "Missing URL"}

    def test_url_httpx_cannot_request_is_400(self, client: TestClient) -> None:
        resp = client.get("/summary", params={"url": "http://example.com:abc/"})
        assert resp.status_code == 400
        assert resp.json() == {"error": "Invalid URL"}

    def test_success_shape(self, make_client) -> None:
        fake = make_client(
            reply='{"bullets": ["One thing.", "Two things.", "Three things."]}'
        )
        app = create_app(completion_client=fake)
        long_page = "<p>" + "Plenty of article words here. " * 20 + "</p>"
        with TestClient(app) as c, patch(
            "gateway.pipeline.summary.fetch_page", return_value=_page(long_page)
        ):
            resp = c.get("/summary", params={"url": _URL})

        assert resp.status_code == 200
        assert resp.json() == {
            "bullets": ["One thing.", "Two things.", "Three things."],
            "readingTime": "~1 min",
        }

    def test_failure_degrades_to_empty(self, client: TestClient) -> None:
        with patch(
            "gateway.pipeline.summary.fetch_page", side_effect=FetchTimeoutError()
        ):
            resp = client.get("/summary", params={"url": _URL})

        assert resp.status_code == 200
        assert resp.json() == {"bullets": [], "readingTime": ""}

    def test_short_page_skips_model(self, client: TestClient, fake) -> None:
        with patch(
            "gateway.pipeline.summary.fetch_page",
            return_value=_page("<p>Hardly any text.</p>"),
        ):
            resp = client.get("/summary", params={"url": _URL})

        assert resp.json() == {"bullets": [], "readingTime": ""}
        assert fake.calls == []


def test_health(client: TestClient) -> None:
    assert client.get("/health").json() == {"status": "ok"}


def test_cors_allows_any_origin(client: TestClient) -> None:
    resp = client.get("/health", headers={"Origin": "https://toolbar.example.org"})
    assert resp.headers["access-control-allow-origin"] == "*"
