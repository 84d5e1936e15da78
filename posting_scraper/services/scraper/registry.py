# =============================================================================
# Site Registry
# =============================================================================
"""
Static table of per-site extraction rules.

Each entry maps a hostname fragment to the CSS selectors that isolate the job
description on that site, the selectors of page furniture to discard first,
and the employer name to stamp on the extracted text.

Matching is substring-based in both directions:

- the hostname contains the fragment (``careers.google.com`` matches
  ``careers.google.com``; ``uk.indeed.com`` matches ``indeed.com``), or
- the fragment contains the hostname with a leading ``www.`` removed.

The second branch exists for path-style fragments such as
``linkedin.com/jobs``, which can never appear inside a hostname. It is
imprecise: a bare ``google.com`` host also matches ``careers.google.com``.
That is a known accuracy tradeoff of the heuristic.

The first match in registration order wins, so more specific fragments must be
registered before more general ones.

Note: Job board HTML structures change frequently. Selector lists are ordered
by confidence and are expected to degrade gracefully.
"""

import logging
from dataclasses import dataclass
from typing import Iterator, Optional


# -----------------------------------------------------------------------------
# Logging Configuration
# -----------------------------------------------------------------------------
logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Site Configuration
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class SiteConfig:
    """
    Extraction rules for a single job site.

    Attributes:
        domain: Hostname fragment the configuration matches.
        content_selectors: CSS selectors for the job description, best first.
        noise_selectors: CSS selectors of subtrees removed before extraction.
        company: Canonical employer name for the site.
    """

    domain: str
    content_selectors: tuple[str, ...]
    noise_selectors: tuple[str, ...]
    company: str

    def matches(self, hostname: str) -> bool:
        """
        Check whether this configuration applies to a hostname.

        Args:
            hostname: Lower-cased hostname without scheme or path.

        Returns:
            True if either string contains the other (``www.`` stripped).
        """
        if not hostname:
            return False
        bare_host = hostname[4:] if hostname.startswith("www.") else hostname
        return self.domain in hostname or (bool(bare_host) and bare_host in self.domain)


# -----------------------------------------------------------------------------
# Registry
# -----------------------------------------------------------------------------
class SiteRegistry:
    """
    Immutable, ordered collection of site configurations.

    Built once at import time and shared by every request. It is never
    mutated, so concurrent lookups need no locking.
    """

    def __init__(self, configs: tuple[SiteConfig, ...]) -> None:
        self._configs = tuple(configs)

    def __iter__(self) -> Iterator[SiteConfig]:
        return iter(self._configs)

    def __len__(self) -> int:
        return len(self._configs)

    def lookup(self, hostname: Optional[str]) -> Optional[SiteConfig]:
        """
        Find the configuration for a hostname.

        Args:
            hostname: Hostname of the job page.

        Returns:
            The first matching configuration, or None.
        """
        if not hostname:
            return None

        host = hostname.strip().lower()
        try:
            for config in self._configs:
                if config.matches(host):
                    logger.debug(f"Site registry matched {host} -> {config.domain}")
                    return config
        except Exception as e:
            logger.warning(f"Site registry lookup failed for {host}: {e}")
        return None


def _site(
    domain: str,
    content: list[str],
    noise: list[str],
    company: str,
) -> SiteConfig:
    return SiteConfig(
        domain=domain,
        content_selectors=tuple(content),
        noise_selectors=tuple(noise),
        company=company,
    )


# -----------------------------------------------------------------------------
# Default Site Table
# -----------------------------------------------------------------------------
SITE_CONFIGS: tuple[SiteConfig, ...] = (
    _site(
        "jobs.apple.com",
        ["#jdp-job-description", ".job-description-content", ".jd-info", ".job-summary"],
        [".apply-button", ".share-job", ".job-actions", "nav", "footer"],
        "Apple",
    ),
    _site(
        "careers.google.com",
        ['[data-section="description"]', ".job-description", ".gc-job-detail__content"],
        [".gc-job-detail__apply", ".gc-job-detail__share", "nav", "footer"],
        "Google",
    ),
    _site(
        "amazon.jobs",
        [".job-detail", ".job-description", '[data-test="job-description"]'],
        [".apply-button-container", ".job-alert", "nav", "footer"],
        "Amazon",
    ),
    _site(
        "careers.microsoft.com",
        [
            ".job-description-container",
            ".job-details",
            '[data-automation-id="jobPostingDescription"]',
        ],
        [".apply-section", ".job-share", "nav", "footer"],
        "Microsoft",
    ),
    _site(
        "jobs.netflix.com",
        [".job-description", ".job-posting-content", ".position-content"],
        [".apply-now", ".share-job", "nav", "footer"],
        "Netflix",
    ),
    _site(
        "careers.meta.com",
        ['[data-testid="job-description"]', ".job-description", ".position-details"],
        [".apply-button", ".job-share", "nav", "footer"],
        "Meta",
    ),
    _site(
        "jobs.lever.co",
        [".section-wrapper", ".job-description", ".content"],
        [".apply-button", ".postings-share", "nav", "footer"],
        "Various (Lever)",
    ),
    _site(
        "boards.greenhouse.io",
        [".job-post-content", ".application-details", ".job-description"],
        [".application-form", ".job-post-apply", "nav", "footer"],
        "Various (Greenhouse)",
    ),
    _site(
        "linkedin.com/jobs",
        [".jobs-description-content__text", ".jobs-box__html-content", ".job-details"],
        [".jobs-apply-button", ".jobs-save-button", ".jobs-share", "nav", "footer"],
        "Various (LinkedIn)",
    ),
    _site(
        "indeed.com",
        [
            ".jobsearch-jobDescriptionText",
            ".jobsearch-JobComponent-description",
            "#jobDescriptionText",
        ],
        [".jobsearch-IndeedApplyButton", ".jobsearch-JobMetadataFooter", "nav", "footer"],
        "Various (Indeed)",
    ),
    _site(
        "glassdoor.com",
        [".jobDescriptionContent", ".desc", ".job-description-content"],
        [".apply-btn", ".job-actions", "nav", "footer"],
        "Various (Glassdoor)",
    ),
    _site(
        "wellfound.com",
        [".job-description", ".startup-job-listing", ".job-content"],
        [".apply-button", ".job-share", "nav", "footer"],
        "Various (Wellfound)",
    ),
    _site(
        "myworkdayjobs.com",
        [
            '[data-automation-id="jobPostingDescription"]',
            ".jobPostingDescription",
            ".job-description",
        ],
        ['[data-automation-id="applyButton"]', "nav", "footer"],
        "Various (Workday)",
    ),
    _site(
        "workday.com",
        [
            '[data-automation-id="jobPostingDescription"]',
            ".jobPostingDescription",
            ".job-description",
        ],
        ['[data-automation-id="applyButton"]', "nav", "footer"],
        "Various (Workday)",
    ),
    _site(
        "bamboohr.com",
        [".BambooHR-ATS-Description", ".job-description"],
        [".BambooHR-ATS-Apply", "nav", "footer"],
        "Various (BambooHR)",
    ),
)

DEFAULT_REGISTRY = SiteRegistry(SITE_CONFIGS)


def lookup(hostname: Optional[str], registry: SiteRegistry = DEFAULT_REGISTRY) -> Optional[SiteConfig]:
    """Look up a hostname in the default (or a given) site registry."""
    return registry.lookup(hostname)
