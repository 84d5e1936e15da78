# =============================================================================
# Shared Test Fixtures
# =============================================================================
"""
Fixtures shared by the scraper test suite.

No test touches the network: HTTP traffic goes through httpx.MockTransport.
"""

from typing import Callable, Optional

import httpx
import pytest


# -----------------------------------------------------------------------------
# Page Content
# -----------------------------------------------------------------------------
JOB_SENTENCE = "Build planet scale storage systems in Go and Rust for teams worldwide."
NAV_SENTENCE = "Navigation menu link for Careers Home Teams Locations Students."
FOOTER_SENTENCE = "Footer legal notice Sitemap Help Accessibility Press corner."
WRAPPER_SENTENCE = "Our hiring team reviews every application within two weeks of receipt."


@pytest.fixture
def job_text() -> str:
    """About 570 characters of job description text."""
    return " ".join([JOB_SENTENCE] * 8)


@pytest.fixture
def google_job_html(job_text: str) -> str:
    """
    A careers.google.com-shaped page.

    The job description lives in a ``.job-description`` div surrounded by
    roughly 2000 characters of navigation and footer text.
    """
    nav = " ".join([NAV_SENTENCE] * 16)
    footer = " ".join([FOOTER_SENTENCE] * 16)
    return (
        "<html><head><title>Software Engineer</title>"
        '<script>var tracking = "SCRIPT_MARKER";</script>'
        "<style>.job-description { color: #202124; }</style></head>"
        f"<body><nav>{nav}</nav>"
        f'<div class="job-description"><p>{job_text}</p></div>'
        f"<footer>{footer}</footer></body></html>"
    )


@pytest.fixture
def short_target_html() -> str:
    """A page whose only job selector match is short, with long text elsewhere."""
    wrapper = " ".join([WRAPPER_SENTENCE] * 6)
    return (
        "<html><body>"
        '<div class="job-description"><p>Senior Engineer, Remote.</p></div>'
        f'<div class="wrapper"><p>{wrapper}</p></div>'
        "</body></html>"
    )


@pytest.fixture
def boilerplate_html() -> str:
    """About 3000 characters of markup with almost no extractable text."""
    style = ".nav-item { color: #333; margin: 0 4px; }\n" * 40
    script = "window.dataLayer = window.dataLayer || [];\n" * 30
    return (
        f"<html><head><style>{style}</style><script>{script}</script></head>"
        '<body><nav><a href="/">Home</a> <a href="/about">About</a></nav>'
        "<footer>Copyright</footer></body></html>"
    )


# -----------------------------------------------------------------------------
# HTTP Mocking
# -----------------------------------------------------------------------------
@pytest.fixture
def html_transport() -> Callable[..., httpx.MockTransport]:
    """
    Build a mock transport serving a fixed response.

    Returns:
        Factory taking (body, status_code, calls) where calls, if given, is a
        list that records every request.
    """

    def _factory(
        body: str = "",
        status_code: int = 200,
        calls: Optional[list] = None,
    ) -> httpx.MockTransport:
        def handler(request: httpx.Request) -> httpx.Response:
            if calls is not None:
                calls.append(request)
            return httpx.Response(
                status_code,
                text=body,
                headers={"Content-Type": "text/html; charset=utf-8"},
            )

        return httpx.MockTransport(handler)

    return _factory


@pytest.fixture
def failing_transport() -> Callable[[Exception], httpx.MockTransport]:
    """Build a mock transport that raises the given exception type."""

    def _factory(exc_type: type, message: str = "transport failure") -> httpx.MockTransport:
        def handler(request: httpx.Request) -> httpx.Response:
            if issubclass(exc_type, httpx.RequestError):
                raise exc_type(message, request=request)
            raise exc_type(message)

        return httpx.MockTransport(handler)

    return _factory
