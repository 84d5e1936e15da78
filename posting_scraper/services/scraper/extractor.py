# =============================================================================
# Targeted Content Extractor
# =============================================================================
"""
Isolate the job description subtree of a job posting page.

Works on a parsed document tree (BeautifulSoup with the lxml parser) and CSS
selectors (soupsieve), never on regular expressions over markup:

1. If a site configuration is given, remove every subtree matching one of its
   noise selectors (navigation, apply buttons, share widgets, footers).
2. Walk the site's content selectors in order. The text of the matched
   subtrees is normalized and the first selector producing more than
   ``MIN_SUBSTANTIVE_LENGTH`` characters wins.
3. Otherwise walk the generic fallback selectors with the same threshold.
4. Otherwise return None so the caller can normalize the whole page.

Any parsing or selector error is logged and treated as "no result".
"""

import logging
from dataclasses import dataclass
from typing import Optional

import soupsieve
from bs4 import BeautifulSoup, Tag

from posting_scraper.services.scraper.normalizer import html_to_text
from posting_scraper.services.scraper.registry import SiteConfig


# -----------------------------------------------------------------------------
# Logging Configuration
# -----------------------------------------------------------------------------
logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Constants
# -----------------------------------------------------------------------------
MIN_SUBSTANTIVE_LENGTH = 200  # characters a selector must yield to be accepted

GENERIC_CONTENT_SELECTORS: tuple[str, ...] = (
    '[class*="job-description"]',
    '[class*="job-detail"]',
    '[class*="job-content"]',
    '[class*="position-description"]',
    '[id*="job-description"]',
    '[data-testid*="job"]',
    "main",
    ".content",
)


# -----------------------------------------------------------------------------
# Extraction Result
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class TargetedContent:
    """
    Text isolated by a selector.

    Attributes:
        text: Normalized text of the matched subtree(s).
        selector: The selector that produced the text.
        site: The site configuration that supplied the selector, or None when
            a generic fallback selector won.
    """

    text: str
    selector: str
    site: Optional[SiteConfig] = None


# -----------------------------------------------------------------------------
# Targeted Extractor
# -----------------------------------------------------------------------------
class TargetedExtractor:
    """
    Selector-based job description extractor.

    Holds no per-request state; one instance can serve concurrent requests.

    Example:
        extractor = TargetedExtractor()
        result = extractor.extract(html, lookup("boards.greenhouse.io"))
        if result:
            print(result.selector, len(result.text))
    """

    def __init__(
        self,
        fallback_selectors: tuple[str, ...] = GENERIC_CONTENT_SELECTORS,
        min_length: int = MIN_SUBSTANTIVE_LENGTH,
    ) -> None:
        self.fallback_selectors = tuple(fallback_selectors)
        self.min_length = min_length

    def extract(
        self,
        html: str,
        site: Optional[SiteConfig] = None,
    ) -> Optional[TargetedContent]:
        """
        Extract the job description text from a page.

        Args:
            html: Raw page HTML.
            site: Matched site configuration, if any.

        Returns:
            The isolated text with the winning selector, or None when no
            selector produced substantive content.
        """
        if not html:
            return None

        try:
            soup = BeautifulSoup(html, "lxml")

            if site:
                self._remove_noise(soup, site.noise_selectors)
                found = self._first_substantive(soup, site.content_selectors)
                if found:
                    text, selector = found
                    logger.debug(f"Site selector {selector!r} matched for {site.domain}")
                    return TargetedContent(text=text, selector=selector, site=site)

            found = self._first_substantive(soup, self.fallback_selectors)
            if found:
                text, selector = found
                logger.debug(f"Generic selector {selector!r} matched")
                return TargetedContent(text=text, selector=selector)

        except Exception as e:
            logger.warning(f"Targeted extraction failed: {e}")

        return None

    # -------------------------------------------------------------------------
    # Private Methods
    # -------------------------------------------------------------------------
    def _remove_noise(self, soup: BeautifulSoup, selectors: tuple[str, ...]) -> None:
        for selector in selectors:
            try:
                elements = soup.select(selector)
            except soupsieve.SelectorSyntaxError as e:
                logger.debug(f"Skipping invalid noise selector {selector!r}: {e}")
                continue
            for element in elements:
                element.decompose()

    def _first_substantive(
        self,
        soup: BeautifulSoup,
        selectors: tuple[str, ...],
    ) -> Optional[tuple[str, str]]:
        """
        Return the text and selector of the first substantive match.

        Args:
            soup: Parsed document.
            selectors: CSS selectors to try in priority order.

        Returns:
            Tuple of (text, selector) or None.
        """
        for selector in selectors:
            try:
                elements = soup.select(selector)
            except soupsieve.SelectorSyntaxError as e:
                logger.debug(f"Skipping invalid content selector {selector!r}: {e}")
                continue

            text = self._text_of(elements)
            if len(text) > self.min_length:
                return text, selector

        return None

    @staticmethod
    def _text_of(elements: list[Tag]) -> str:
        """
        Normalize and join the text of matched elements.

        Elements nested inside another matched element are skipped so that
        their text is not counted twice.
        """
        if not elements:
            return ""

        matched = {id(element) for element in elements}
        outermost = [
            element
            for element in elements
            if not any(id(parent) in matched for parent in element.parents)
        ]

        texts = [html_to_text(str(element)) for element in outermost]
        return " ".join(text for text in texts if text)
