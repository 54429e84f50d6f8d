"""
Search engine-based discovery of company ESG pages using DuckDuckGo.
Finds sustainability / ESG landing pages to probe when URL guessing is not wanted.
"""
from duckduckgo_search import DDGS
import logging
import time

logger = logging.getLogger(__name__)

QUERY_TEMPLATES = [
    '"{company_name}" sustainability report',
    '"{company_name}" ESG report',
    '"{company_name}" corporate responsibility',
    '"{company_name}" impact report',
]

ESG_KEYWORDS = [
    'esg', 'environmental', 'social', 'governance', 'sustainability',
    'csr', 'corporate social responsibility', 'impact report',
    'sustainability report', 'esg report', 'annual report'
]


def search_duckduckgo(query: str, max_results: int = 5) -> list:
    results = []
    with DDGS() as ddgs:
        for r in ddgs.text(query, max_results=max_results):
            results.append({
                'url': r['href'],
                'title': r.get('title') or r['href'],
                'snippet': r.get('body', ''),
                'source': 'duckduckgo'
            })
    return results


def deduplicate_urls(results: list) -> list:
    seen = set()
    unique = []
    for r in results:
        u = r['url'].rstrip('/')
        if u not in seen:
            seen.add(u)
            unique.append(r)
    return unique


def is_esg_related(title: str, snippet: str) -> bool:
    text = f"{title} {snippet}".lower()
    return any(keyword in text for keyword in ESG_KEYWORDS)


def search_for_esg_pages(
    company_name: str,
    max_results_per_query: int = 5,
    delay: float = 0.7
) -> list:
    """
    Run the ESG query templates for a company and keep ESG-looking hits.

    Args:
        company_name: Company name to search for
        max_results_per_query: Hits requested per query
        delay: Pause between queries in seconds

    Returns:
        Deduplicated list of result dicts ('url', 'title', 'snippet', 'source'),
        in query order
    """
    results = []
    for tpl in QUERY_TEMPLATES:
        q = tpl.format(company_name=company_name)
        try:
            results.extend(search_duckduckgo(q, max_results=max_results_per_query))
            time.sleep(delay)
        except Exception as e:
            logger.warning(f"  ⚠ Search failed for {q!r}: {e}")
            continue
    esg_results = [r for r in deduplicate_urls(results) if is_esg_related(r['title'], r['snippet'])]
    logger.info(f"  ✓ Search found {len(esg_results)} ESG-related pages for {company_name}")
    return esg_results
