"""
Find ESG report PDFs for companies by probing their likely ESG pages.

For each company the scraper:
1. Builds candidate page URLs (guessed from the name, or from a web search)
2. Fetches every candidate and keeps pages that are not soft-404s
3. Harvests PDF-like links from each valid page
4. Follows up to 3 reporting/disclosure/download links one level deeper
5. Filters the collected links down to the requested years

Every candidate is tried, even after a working page is found. A failed fetch
or rejected page only skips that candidate.
"""

import json
import sys
import time
import logging
from pathlib import Path
from typing import List, Optional, Tuple

# Add parent directory to path for imports
sys.path.append(str(Path(__file__).parent.parent.parent))
from config.settings import (
    MAX_SEARCH_RESULTS, MAX_SUBPAGES, OUTPUT_FILENAME, PAGE_TIMEOUT_MS, REQUEST_DELAY
)
from src.scraper.models import CandidateUrl, LinkCandidate, ScrapeResult
from src.scraper.url_candidates import generate_esg_urls
from src.scraper.page_fetcher import FetchError, PlaywrightPageFetcher
from src.scraper.page_validator import is_valid_page
from src.scraper.link_harvester import generate_safe_filename, harvest_pdf_links
from src.scraper.page_signals import extract_page_signals
from src.scraper.search_engine import search_for_esg_pages
from src.scraper.year_filter import build_year_set, filter_links_by_year

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

SUBPAGE_KEYWORDS = ['reporting', 'disclosure', 'download', 'reports']


class PageSourcingStrategy:
    """Produces the ordered list of page URLs to probe for a company."""

    name = 'base'

    def candidates(self, company_name: str) -> List[CandidateUrl]:
        raise NotImplementedError


class DirectUrlGuess(PageSourcingStrategy):
    """Guess URLs from the company name (overrides first)."""

    name = 'direct'

    def candidates(self, company_name: str) -> List[CandidateUrl]:
        return generate_esg_urls(company_name)


class SearchEngineQuery(PageSourcingStrategy):
    """Use DuckDuckGo hits for ESG queries as the pages to probe."""

    name = 'search'

    def __init__(self, max_results: int = MAX_SEARCH_RESULTS):
        self.max_results = max_results

    def candidates(self, company_name: str) -> List[CandidateUrl]:
        try:
            hits = search_for_esg_pages(company_name)
        except Exception as e:
            logger.warning(f"⚠ Search strategy failed for {company_name}: {e}")
            return []
        return [CandidateUrl(url=h['url'], name_form='search') for h in hits[:self.max_results]]


STRATEGIES = {
    DirectUrlGuess.name: DirectUrlGuess,
    SearchEngineQuery.name: SearchEngineQuery,
}


def select_subpages(links: List[LinkCandidate], limit: int = MAX_SUBPAGES) -> List[LinkCandidate]:
    """Pick the first few harvested links whose text suggests a reports page."""
    selected = [
        link for link in links
        if any(k in link.text.lower() for k in SUBPAGE_KEYWORDS)
    ]
    return selected[:limit]


def apply_year_filter(results: List[ScrapeResult], years: List[str]) -> List[ScrapeResult]:
    """
    Narrow every result's PDF links to the requested years, in place.

    Results left without any link are kept with an empty pdf_links list.
    """
    for result in results:
        result.pdf_links = filter_links_by_year(result.pdf_links, years)
    return results


class ESGScraper:
    """Sequential probe -> validate -> harvest -> follow-subpages pipeline."""

    def __init__(
        self,
        fetcher,
        strategy: Optional[PageSourcingStrategy] = None,
        page_timeout_ms: int = PAGE_TIMEOUT_MS,
        request_delay: float = REQUEST_DELAY,
        max_subpages: int = MAX_SUBPAGES
    ):
        self.fetcher = fetcher
        self.strategy = strategy or DirectUrlGuess()
        self.page_timeout_ms = page_timeout_ms
        self.request_delay = request_delay
        self.max_subpages = max_subpages

    def _probe(self, url: str, company_name: str) -> Tuple[Optional[ScrapeResult], List[LinkCandidate]]:
        """Fetch, validate and harvest one URL. Returns (result or None, harvested links)."""
        try:
            page = self.fetcher.fetch(url, self.page_timeout_ms)

            if not is_valid_page(page.title, page.html):
                logger.info(f"  ✗ Page not found or invalid: {page.title!r}")
                return None, []

            logger.info(f"  ✓ Found working page: {page.title}")
            links = harvest_pdf_links(page)
            if not links:
                logger.info(f"  No PDF-like links on {url}")
                return None, []

            result = ScrapeResult(
                company=company_name,
                source_title=page.title,
                source_url=url,
                extracted_data=extract_page_signals(page, company_name),
                pdf_links=links,
            )
        except FetchError as e:
            logger.warning(f"  ⚠ Could not access {url}: {e}")
            return None, []
        except Exception as e:
            logger.warning(f"  ⚠ Error scraping {url}: {e}")
            return None, []

        logger.info(f"  📄 Found {len(links)} PDFs on {url}")
        return result, links

    def follow_subpages(self, links: List[LinkCandidate], company_name: str) -> List[ScrapeResult]:
        """Probe the selected subpages one level deep, independently of each other."""
        results = []
        for link in select_subpages(links, self.max_subpages):
            logger.info(f"  Following subpage: {link.text} -> {link.url}")
            result, _ = self._probe(link.url, company_name)
            if result:
                results.append(result)
        return results

    def scrape_company(
        self,
        company_name: str,
        seed_url: Optional[str] = None,
        results: Optional[List[ScrapeResult]] = None
    ) -> List[ScrapeResult]:
        """
        Probe every candidate page for one company.

        Args:
            company_name: Company to search for
            seed_url: Optional known page, probed before the strategy's candidates
            results: List to append to as pages are scraped

        Returns:
            Unfiltered results in probing order
        """
        logger.info(f"\n{'='*60}")
        logger.info(f"Scraping ESG data for: {company_name} ({self.strategy.name})")
        logger.info(f"{'='*60}")

        candidates = self.strategy.candidates(company_name)
        if seed_url:
            candidates = [CandidateUrl(url=seed_url, name_form='seed')] + candidates

        if results is None:
            results = []
        for i, candidate in enumerate(candidates, 1):
            logger.info(f"[{i}/{len(candidates)}] Trying: {candidate.url}")
            result, links = self._probe(candidate.url, company_name)
            if result is None:
                continue
            results.append(result)
            results.extend(self.follow_subpages(links, company_name))

        return results

    def run(
        self,
        companies: List[str],
        years: List[str],
        results: Optional[List[ScrapeResult]] = None,
        seed_url: Optional[str] = None
    ) -> List[ScrapeResult]:
        """
        Scrape companies one at a time and year-filter each company's results.

        Args:
            companies: Company names, processed in order
            years: Year strings to keep (see build_year_set)
            results: List to append to, so callers keep partial results
            seed_url: Optional known page probed first for every company

        Returns:
            The results list
        """
        if results is None:
            results = []

        for idx, company in enumerate(companies):
            if idx > 0:
                time.sleep(self.request_delay)

            company_results: List[ScrapeResult] = []
            try:
                self.scrape_company(company, seed_url=seed_url, results=company_results)
            finally:
                total = sum(len(r.pdf_links) for r in company_results)
                logger.info(f"📊 Total PDFs found before filtering: {total}")
                logger.info(f"🔍 Filtering for years: {', '.join(years)}")

                apply_year_filter(company_results, years)
                logger.info(f"✓ {company}: {sum(len(r.pdf_links) for r in company_results)} PDFs kept")
                results.extend(company_results)

        return results


def save_results(results: List[ScrapeResult], filename: str = OUTPUT_FILENAME) -> Optional[Path]:
    """Write results as a JSON array. Returns the path, or None if writing failed."""
    filepath = Path(filename)
    try:
        with open(filepath, 'w', encoding='utf-8') as f:
            json.dump([r.to_dict() for r in results], f, indent=2, ensure_ascii=False)
    except OSError as e:
        logger.error(f"✗ Error saving PDF URL results: {e}")
        return None
    logger.info(f"💾 PDF URL results saved to: {filepath}")
    return filepath


def format_report(results: List[ScrapeResult]) -> str:
    """Human readable summary of a run."""
    if not results:
        return "No results to generate report for"

    lines = [
        "ESG Scraping Report",
        "=" * 50,
        f"Total results: {len(results)}",
    ]
    for index, result in enumerate(results, 1):
        data = result.extracted_data
        lines.extend([
            "",
            f"{index}. {result.company}",
            f"   Source: {result.source_title}",
            f"   URL: {result.source_url}",
            f"   PDF links: {len(result.pdf_links)}",
            f"   Environmental metrics: {len(data.get('environmental', {}))}",
            f"   Social metrics: {len(data.get('social', {}))}",
            f"   Governance metrics: {len(data.get('governance', {}))}",
        ])
    return "\n".join(lines)


def process_found_pdfs(results: List[ScrapeResult], output_dir: Path, processor=None) -> List[Path]:
    """
    Download, chunk and keyword-tag every direct PDF link in the results.

    Failures are logged and skipped. Returns the JSONL files written.
    """
    if processor is None:
        from src.processor.pdf_processor import process_pdf as processor
    from src.processor.pdf_processor import save_to_jsonl

    output_dir = Path(output_dir)
    written = []
    for result in results:
        for link in result.pdf_links:
            if not link.is_direct_pdf:
                continue
            filename = generate_safe_filename(result.company, link.text, link.url)
            data = processor(link.url, filename, result.company)
            if not data:
                logger.warning(f"  ⚠ Skipping {link.url}: processing failed")
                continue
            path = save_to_jsonl(data, output_dir / f"{Path(filename).stem}.jsonl")
            if path:
                written.append(path)
    return written


def run_pipeline(
    companies: List[str],
    start_year: Optional[int] = None,
    stop_year: Optional[int] = None,
    output: str = OUTPUT_FILENAME,
    strategy: str = DirectUrlGuess.name,
    seed_url: Optional[str] = None,
    fetcher=None
) -> List[ScrapeResult]:
    """
    Complete run: scrape all companies, filter by year, save JSON.

    Errors are logged rather than raised, and whatever was collected is
    written to `output` even if the run stops early.
    """
    years = build_year_set(start_year, stop_year)
    results: List[ScrapeResult] = []

    try:
        with (fetcher or PlaywrightPageFetcher()) as f:
            scraper = ESGScraper(f, strategy=STRATEGIES[strategy]())
            scraper.run(companies, years, results=results, seed_url=seed_url)
    except Exception as e:
        logger.error(f"✗ Main execution error: {e}")
    finally:
        save_results(results, output)

    return results
