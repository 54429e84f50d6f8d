"""
Decide whether a fetched page is a real content page or a soft-404.

Corporate sites often answer 200 for missing pages, so the decision is made
from the title and HTML alone.
"""

import re
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.append(str(Path(__file__).parent.parent.parent))
from config.settings import ERROR_SCAN_WINDOW, MIN_CONTENT_LENGTH

ERROR_INDICATORS = [
    '404', 'not found', 'page not found', 'error', 'does not exist',
    'page unavailable', 'access denied', 'forbidden', 'unauthorized',
    'server error', 'internal server error', 'service unavailable'
]

ANCHOR_TAG = re.compile(r'<a[\s>]')


def is_valid_page(
    title: str,
    html: str,
    min_content_length: int = MIN_CONTENT_LENGTH,
    error_scan_window: int = ERROR_SCAN_WINDOW
) -> bool:
    """
    Check that a page is not an error, placeholder or stub page.

    Args:
        title: Rendered page title
        html: Full rendered HTML
        min_content_length: HTML must be longer than this many characters
        error_scan_window: Leading HTML characters scanned for error phrases

    Returns:
        True if the page looks like real content
    """
    title_lower = (title or '').lower()
    html = html or ''
    html_lower = html.lower()

    if any(indicator in title_lower for indicator in ERROR_INDICATORS):
        return False

    # Error banners usually render near the top of the document
    first_part = html_lower[:error_scan_window]
    if any(indicator in first_part for indicator in ERROR_INDICATORS):
        return False

    has_content = len(html) > min_content_length
    has_links = ANCHOR_TAG.search(html_lower) is not None
    has_body = '<body' in html_lower and '</body>' in html_lower

    return has_content and has_links and has_body
