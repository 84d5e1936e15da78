# =============================================================================
# API Route Tests
# =============================================================================
"""
Tests for the HTTP surface of the scraper.

The scraper service dependency is overridden with one whose HTTP client talks
to an httpx.MockTransport, so no request leaves the process.
"""

from typing import Callable

import httpx
import pytest
from fastapi.testclient import TestClient

from posting_scraper.api.main import create_app
from posting_scraper.api.routes import scrape
from posting_scraper.services.scraper import JobScraperService
from posting_scraper.services.scraper.fetcher import PageFetcher
from posting_scraper.services.scraper.registry import SiteConfig, SiteRegistry

from tests.conftest import JOB_SENTENCE, NAV_SENTENCE


GOOGLE_URL = "https://careers.google.com/jobs/results/123-software-engineer"
GENERIC_URL = "https://jobs.example.com/openings/42"


@pytest.fixture
def make_client() -> Callable[[httpx.MockTransport], TestClient]:
    """Build a TestClient whose scraper fetches through the given transport."""

    def _factory(transport: httpx.MockTransport) -> TestClient:
        app = create_app()

        async def override_scraper_service():
            async with httpx.AsyncClient(transport=transport) as http_client:
                yield JobScraperService(fetcher=PageFetcher(http_client=http_client))

        app.dependency_overrides[scrape.get_scraper_service] = override_scraper_service
        return TestClient(app)

    return _factory


class TestScrapeAdvanced:
    """Tests for POST /api/scrape-advanced."""

    def test_success_response_shape(self, make_client, html_transport, google_job_html: str) -> None:
        """Test that a successful scrape returns the camelCase payload."""
        client = make_client(html_transport(google_job_html))

        response = client.post("/api/scrape-advanced", json={"url": GOOGLE_URL, "strategy": "targeted"})

        assert response.status_code == 200
        data = response.json()
        assert set(data) == {"success", "content", "url", "contentLength", "method", "hostname", "timestamp"}
        assert data["success"] is True
        assert data["url"] == GOOGLE_URL
        assert data["hostname"] == "careers.google.com"
        assert data["method"] == "specialized-careers.google.com"
        assert data["contentLength"] == len(data["content"])
        assert JOB_SENTENCE in data["content"]
        assert NAV_SENTENCE not in data["content"]

    def test_strategy_defaults_to_auto(self, make_client, html_transport, short_target_html: str) -> None:
        """Test that omitting the strategy runs auto with its fallback."""
        client = make_client(html_transport(short_target_html))

        response = client.post("/api/scrape-advanced", json={"url": GENERIC_URL})

        assert response.status_code == 200
        assert response.json()["method"] == "basic-fallback"

    def test_missing_url(self, make_client, html_transport) -> None:
        """Test that a body without a URL is a 400."""
        client = make_client(html_transport(""))

        response = client.post("/api/scrape-advanced", json={})

        assert response.status_code == 400
        assert response.json() == {"error": "URL is required"}

    def test_invalid_url(self, make_client, html_transport) -> None:
        """Test that a non-http URL is a 400."""
        client = make_client(html_transport(""))

        response = client.post("/api/scrape-advanced", json={"url": "ftp://example.com/job"})

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid URL provided"

    def test_unknown_strategy(self, make_client, html_transport) -> None:
        """Test that an unknown strategy is rejected as a bad request body."""
        client = make_client(html_transport(""))

        response = client.post("/api/scrape-advanced", json={"url": GENERIC_URL, "strategy": "fast"})

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid request body"

    def test_non_json_body(self, make_client, html_transport) -> None:
        """Test that a body that is not JSON is a 400."""
        client = make_client(html_transport(""))

        response = client.post(
            "/api/scrape-advanced",
            content="url=https://jobs.example.com",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid request body"

    def test_extra_keys_ignored(self, make_client, html_transport, google_job_html: str) -> None:
        """Test that unknown body keys do not fail the request."""
        client = make_client(html_transport(google_job_html))

        response = client.post("/api/scrape-advanced", json={"url": GOOGLE_URL, "source": "extension"})

        assert response.status_code == 200

    def test_upstream_not_found(self, make_client, html_transport, google_job_html: str) -> None:
        """Test that an upstream 404 is reported as a failed fetch without content."""
        client = make_client(html_transport(google_job_html, status_code=404))

        response = client.post("/api/scrape-advanced", json={"url": GOOGLE_URL})

        assert response.status_code == 400
        data = response.json()
        assert data["error"] == "Failed to fetch webpage: 404 Not Found"
        assert data["details"] == "HTTP 404: Not Found"
        assert "content" not in data

    def test_timeout(self, make_client, failing_transport) -> None:
        """Test that a fetch timeout is a 408."""
        client = make_client(failing_transport(httpx.ConnectTimeout))

        response = client.post("/api/scrape-advanced", json={"url": GOOGLE_URL})

        assert response.status_code == 408
        assert response.json()["error"] == "Request timeout - webpage took too long to load"

    def test_connection_failure(self, make_client, failing_transport) -> None:
        """Test that an unreachable host is a 400."""
        client = make_client(failing_transport(httpx.ConnectError))

        response = client.post("/api/scrape-advanced", json={"url": GOOGLE_URL})

        assert response.status_code == 400
        assert response.json()["error"] == "Could not connect to the website. Please check the URL."

    def test_content_too_short(self, make_client, html_transport, boilerplate_html: str) -> None:
        """Test that pages without real text are a 400 naming the method."""
        client = make_client(html_transport(boilerplate_html))

        response = client.post("/api/scrape-advanced", json={"url": GENERIC_URL})

        assert response.status_code == 400
        assert response.json() == {
            "error": "Could not extract meaningful content from webpage",
            "method": "basic-fallback",
        }

    def test_unclassified_failure(self, make_client, failing_transport) -> None:
        """Test that unexpected failures are a 500."""
        client = make_client(failing_transport(RuntimeError, "boom"))

        response = client.post("/api/scrape-advanced", json={"url": GOOGLE_URL})

        assert response.status_code == 500
        assert response.json()["error"] == "Failed to scrape webpage"

    def test_get_not_allowed(self, make_client, html_transport) -> None:
        """Test that GET is a 405 with an error body."""
        client = make_client(html_transport(""))

        response = client.get("/api/scrape-advanced")

        assert response.status_code == 405
        assert response.json() == {"error": "Method not allowed"}


class TestScrapeJob:
    """Tests for POST /api/scrape-job."""

    def test_whole_page_without_enhancement(self, make_client, html_transport, google_job_html: str) -> None:
        """Test that the single-strategy endpoint returns raw whole-page text."""
        client = make_client(html_transport(google_job_html))

        response = client.post("/api/scrape-job", json={"url": GOOGLE_URL, "strategy": "targeted"})

        assert response.status_code == 200
        data = response.json()
        assert data["method"] == "basic"
        assert NAV_SENTENCE in data["content"]
        assert not data["content"].startswith("Source:")

    def test_upstream_status_mirrored(self, make_client, html_transport, google_job_html: str) -> None:
        """Test that the upstream status becomes the response status."""
        client = make_client(html_transport(google_job_html, status_code=404))

        response = client.post("/api/scrape-job", json={"url": GOOGLE_URL})

        assert response.status_code == 404
        assert response.json()["error"] == "Failed to fetch webpage: 404 Not Found"


class TestCors:
    """Tests for CORS and preflight handling."""

    @pytest.mark.parametrize("path", ["/api/scrape-advanced", "/api/scrape-job"])
    def test_bare_options(self, make_client, html_transport, path: str) -> None:
        """Test that OPTIONS answers 200 with an empty body."""
        client = make_client(html_transport(""))

        response = client.options(path)

        assert response.status_code == 200
        assert response.content == b""

    def test_preflight(self, make_client, html_transport) -> None:
        """Test that browser preflights are allowed from any origin."""
        client = make_client(html_transport(""))

        response = client.options(
            "/api/scrape-advanced",
            headers={
                "Origin": "https://app.example.org",
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "Content-Type",
            },
        )

        assert response.status_code == 200
        assert response.content == b""
        assert response.headers["access-control-allow-origin"] == "*"
        assert "POST" in response.headers["access-control-allow-methods"]

    def test_preflight_without_request_headers(self, make_client, html_transport) -> None:
        """Test that a minimal browser preflight is also answered without a body."""
        client = make_client(html_transport(""))

        response = client.options(
            "/api/scrape-job",
            headers={"Origin": "https://a.example", "Access-Control-Request-Method": "POST"},
        )

        assert response.status_code == 200
        assert response.content == b""

    def test_error_responses_carry_cors_header(self, make_client, html_transport) -> None:
        """Test that failures are readable by browser clients too."""
        client = make_client(html_transport(""))

        response = client.post(
            "/api/scrape-advanced",
            json={},
            headers={"Origin": "https://app.example.org"},
        )

        assert response.status_code == 400
        assert response.headers["access-control-allow-origin"] == "*"


class TestInfoEndpoints:
    """Tests for supported sites, health and root endpoints."""

    def test_supported_sites(self, make_client, html_transport) -> None:
        """Test that the registry is listed in match order."""
        client = make_client(html_transport(""))

        response = client.get("/api/supported-sites")

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 15
        assert data["sites"][0]["domain"] == "jobs.apple.com"
        assert {"domain": "careers.google.com", "company": "Google"} in data["sites"]

    def test_supported_sites_opens_no_scraper(self) -> None:
        """Test that listing sites never builds a scraper service or HTTP client."""
        app = create_app()
        opened: list = []

        async def recording_scraper_service():
            opened.append(True)
            yield None

        app.dependency_overrides[scrape.get_scraper_service] = recording_scraper_service

        response = TestClient(app).get("/api/supported-sites")

        assert response.status_code == 200
        assert opened == []

    def test_supported_sites_uses_registry_dependency(self) -> None:
        """Test that the listing reflects the injected registry."""
        app = create_app()
        registry = SiteRegistry((
            SiteConfig(
                domain="jobs.acme.com",
                content_selectors=(".job",),
                noise_selectors=("nav",),
                company="Acme",
            ),
        ))
        app.dependency_overrides[scrape.get_site_registry] = lambda: registry

        data = TestClient(app).get("/api/supported-sites").json()

        assert data == {"sites": [{"domain": "jobs.acme.com", "company": "Acme"}], "total": 1}

    def test_health(self, make_client, html_transport) -> None:
        """Test the basic health check."""
        client = make_client(html_transport(""))

        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_detailed_health(self, make_client, html_transport) -> None:
        """Test that the detailed health check reports the scraper component."""
        client = make_client(html_transport(""))

        response = client.get("/health/detailed")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["supported_sites"] == 15
        assert 15.0 <= data["timeout_seconds"] <= 20.0

    def test_basic_health_omits_scraper_details(self, make_client, html_transport) -> None:
        """Test that the liveness check stays minimal."""
        client = make_client(html_transport(""))

        data = client.get("/health").json()

        assert "supported_sites" not in data
        assert "timeout_seconds" not in data

    def test_root(self, make_client, html_transport) -> None:
        """Test the root information endpoint."""
        client = make_client(html_transport(""))

        response = client.get("/")

        assert response.status_code == 200
        assert response.json()["health"] == "/health"
