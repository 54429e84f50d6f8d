"""
Restrict harvested links to requested reporting years.
"""

import logging
from datetime import datetime
from typing import List, Optional

from src.scraper.models import LinkCandidate

logger = logging.getLogger(__name__)


def build_year_set(start_year: Optional[int] = None, stop_year: Optional[int] = None) -> List[str]:
    """
    Turn CLI-style start/stop years into the list of years to keep.

    Args:
        start_year: First year (inclusive), or None
        stop_year: Last year (inclusive), only used with start_year

    Returns:
        Non-empty list of 4-digit year strings, ascending. Defaults to the
        current calendar year.
    """
    for year in (start_year, stop_year):
        if year is not None and not 1000 <= year <= 9999:
            raise ValueError(f"Year must have 4 digits: {year}")

    if start_year is None:
        return [str(datetime.now().year)]

    if stop_year is None:
        return [str(start_year)]

    if stop_year < start_year:
        logger.warning(f"⚠ Stop year {stop_year} is before start year {start_year}, swapping")
        start_year, stop_year = stop_year, start_year

    return [str(y) for y in range(start_year, stop_year + 1)]


def link_matches_year(link: LinkCandidate, year: str) -> bool:
    """A link matches when the year appears anywhere in its URL or visible text."""
    return year in link.url.lower() or year in link.text.lower()


def filter_links_by_year(links: List[LinkCandidate], years: List[str]) -> List[LinkCandidate]:
    """Keep links matching at least one requested year, preserving order."""
    return [link for link in links if any(link_matches_year(link, y) for y in years)]
