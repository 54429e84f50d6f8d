"""
Page-level ESG keyword signals.

Only keyword presence is recorded, no metric values are extracted.
"""

from typing import Dict

from bs4 import BeautifulSoup

from src.scraper.models import FetchedPage

# category -> (label, trigger terms)
PAGE_SIGNALS = {
    'environmental': [
        ('carbon_footprint', 'carbon', ['carbon', 'emissions']),
        ('energy', 'energy', ['energy', 'renewable']),
        ('waste', 'waste', ['waste', 'recycling']),
        ('water', 'water', ['water']),
    ],
    'social': [
        ('diversity', 'diversity', ['diversity', 'inclusion']),
        ('workforce', 'workforce', ['employee', 'workforce']),
        ('community', 'community', ['community', 'philanthropy']),
        ('safety', 'safety', ['safety', 'health']),
    ],
    'governance': [
        ('board', 'board', ['board', 'director']),
        ('ethics', 'ethics', ['ethics', 'compliance']),
        ('transparency', 'transparency', ['transparency', 'disclosure']),
    ],
}


def extract_page_signals(page: FetchedPage, company_name: str) -> Dict[str, Dict]:
    """
    Scan a page's visible text for ESG topic keywords.

    Returns:
        Dict with 'environmental', 'social', 'governance' hit maps and a
        'general' block (title, company, url, and table count when present)
    """
    soup = BeautifulSoup(page.html, 'lxml')
    for element in soup(['script', 'style']):
        element.decompose()

    body = soup.body or soup
    text = body.get_text(separator=' ').lower()

    data: Dict[str, Dict] = {category: {} for category in PAGE_SIGNALS}
    for category, signals in PAGE_SIGNALS.items():
        for key, label, terms in signals:
            if any(term in text for term in terms):
                data[category][key] = f"Found {label}-related data"

    data['general'] = {
        'title': page.title,
        'company': company_name,
        'url': page.final_url,
    }
    tables = soup.find_all('table')
    if tables:
        data['general']['tables'] = len(tables)

    return data
