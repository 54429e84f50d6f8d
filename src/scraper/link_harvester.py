"""
Harvest possible PDF report links from a rendered page.

Every anchor is scored with four independent signals (direct PDF, download
wording, report wording, button shape). The inclusion rule is
high-recall: false positives are expected and are narrowed later by the year
filter and by whoever reads the output.
"""

import re
import logging
from urllib.parse import urljoin
from typing import List

from bs4 import BeautifulSoup

from src.scraper.models import FetchedPage, LinkCandidate

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

DOWNLOAD_TERMS = ['download', 'get', 'view', 'open', 'access']
REPORT_TERMS = [
    'report', 'sustainability', 'esg', 'performance', 'summary',
    'disclosure', 'statement', 'document', 'publication'
]
BUTTON_TERMS = ['btn', 'button']
SHORT_TEXT_LENGTH = 20  # shorter visible text usually means a button


def score_anchor(url: str, text: str, title: str = '', class_name: str = '', dom_id: str = '') -> LinkCandidate:
    """
    Compute the four link signals for one anchor.

    Args:
        url: Absolute href of the anchor
        text: Visible text (trimmed)
        title: title attribute
        class_name: class attribute (space separated)
        dom_id: id attribute

    Returns:
        LinkCandidate with all flags set (inclusion is decided by might_be_pdf)
    """
    href = url.lower()
    text_l = text.lower()
    title_l = title.lower()
    class_l = class_name.lower()
    id_l = dom_id.lower()
    fields = (text_l, title_l, class_l, id_l)

    return LinkCandidate(
        url=url,
        text=text,
        title=title,
        class_name=class_name,
        id=dom_id,
        is_direct_pdf='.pdf' in href,
        is_download_link=any(term in f for f in fields for term in DOWNLOAD_TERMS),
        is_report_link=any(term in f for f in fields for term in REPORT_TERMS),
        is_button_link=(
            any(term in class_l or term in id_l for term in BUTTON_TERMS)
            or len(text) < SHORT_TEXT_LENGTH
        ),
    )


def might_be_pdf(link: LinkCandidate) -> bool:
    """Inclusion rule for harvested anchors."""
    href = link.url.lower()
    text = link.text.lower()

    mentions_pdf = 'pdf' in text or 'pdf' in href
    mentions_download = 'download' in text

    if link.is_direct_pdf:
        return True
    if link.is_download_link and mentions_pdf:
        return True
    if link.is_report_link and (mentions_pdf or mentions_download):
        return True
    if link.is_button_link and (mentions_pdf or mentions_download):
        return True

    fields = (text, link.title.lower(), link.class_name.lower(), link.id.lower(), href)
    return any('pdf' in f for f in fields)


def harvest_pdf_links(page: FetchedPage) -> List[LinkCandidate]:
    """
    Extract anchors that might lead to a PDF report, in document order.

    Args:
        page: Fetched page (relative hrefs resolve against page.final_url)

    Returns:
        List of LinkCandidate
    """
    soup = BeautifulSoup(page.html, 'html.parser')
    anchors = soup.find_all('a', href=True)
    logger.debug(f"  Total links found on page: {len(anchors)}")

    links: List[LinkCandidate] = []
    others: List[str] = []

    for a in anchors:
        full_url = urljoin(page.final_url, a['href'].strip())
        classes = a.get('class') or []
        if isinstance(classes, str):
            classes = [classes]

        link = score_anchor(
            url=full_url,
            text=a.get_text().strip(),
            title=a.get('title') or '',
            class_name=' '.join(classes),
            dom_id=a.get('id') or '',
        )

        if might_be_pdf(link):
            links.append(link)
            logger.debug(
                f"  {len(links)}. \"{link.text}\" -> {link.url} "
                f"(direct={link.is_direct_pdf}, download={link.is_download_link}, "
                f"report={link.is_report_link}, button={link.is_button_link})"
            )
        else:
            others.append(full_url)

    logger.info(f"  Found {len(links)} potential PDF links on {page.final_url}")
    logger.debug(f"  Sample of other links ({len(others)}): {others[:10]}")
    return links


def generate_safe_filename(company_name: str, link_text: str, url: str, max_text_length: int = 50) -> str:
    """
    Build a filesystem-safe PDF filename for a harvested link.

    Uses the URL's last path segment when it already names a PDF, otherwise
    the sanitized link text. Always ends with .pdf.
    """
    clean_company = re.sub(r'[^a-zA-Z0-9]', '_', company_name).lower()
    clean_text = re.sub(r'[^a-zA-Z0-9]', '_', link_text).lower()[:max_text_length]

    url_filename = url.rstrip('/').split('/')[-1]
    if url_filename and '.pdf' in url_filename.lower():
        filename = re.sub(r'[^a-zA-Z0-9._-]', '_', url_filename.split('?')[0])
    else:
        filename = f"{clean_text}.pdf"

    if not filename.lower().endswith('.pdf'):
        filename += '.pdf'

    return f"{clean_company}_{filename}"
