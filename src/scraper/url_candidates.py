"""
Guess ESG/sustainability page URLs for a company from its name.

No I/O happens here. The order of the returned candidates is the order they
are probed in, so hand-curated overrides come first, then the generated
domain-template x path-suffix cross product.
"""

import re
from typing import Dict, List, Tuple

from src.scraper.models import CandidateUrl

# Paths where ESG content is commonly published
PATH_SUFFIXES = [
    '/sustainability', '/esg', '/environmental', '/corporate-responsibility',
    '/responsibility', '/impact', '/about/sustainability', '/about/esg',
    '/investors/sustainability', '/investors/esg'
]

# (host template, suffixes appended). Subdomain hosts only get a few suffixes
# or none at all.
WWW_TEMPLATES: List[Tuple[str, List[str]]] = [
    ('https://www.{name}.com', PATH_SUFFIXES),
    ('https://investors.{name}.com', ['/sustainability', '/esg']),
    ('https://sustainability.{name}.com', ['']),
    ('https://esg.{name}.com', ['']),
]
BARE_TEMPLATES: List[Tuple[str, List[str]]] = [
    ('https://{name}.com', PATH_SUFFIXES),
]

# Known-good pages keyed by a lower-case substring of the company name.
# Checked in order; only the first matching group is used.
URL_OVERRIDES: List[Tuple[str, List[str]]] = [
    ('boeing', [
        'https://www.boeing.com/sustainability',
        'https://www.boeing.com/about/sustainability',
        'https://www.boeing.com/company/sustainability',
    ]),
    ('apple', [
        'https://www.apple.com/environment',
        'https://www.apple.com/supplier-responsibility',
        'https://www.apple.com/accessibility',
    ]),
    ('microsoft', [
        'https://www.microsoft.com/en-us/corporate-responsibility',
        'https://www.microsoft.com/en-us/sustainability',
        'https://www.microsoft.com/en-us/accessibility',
    ]),
]


def normalize_company_name(company_name: str) -> Dict[str, str]:
    """
    Build the name forms used for host names.

    Args:
        company_name: Free-text company name (e.g., "Energy Recovery")

    Returns:
        Dict with 'clean' (lower-case alphanumerics only), 'concatenated',
        'hyphenated' and 'underscored' forms of the whitespace-split words
    """
    lowered = company_name.lower()
    words = lowered.split()
    return {
        'clean': re.sub(r'[^a-z0-9]', '', lowered),
        'concatenated': ''.join(words),
        'hyphenated': '-'.join(words),
        'underscored': '_'.join(words),
    }


def get_url_overrides(company_name: str) -> List[str]:
    """Return the first matching override group for a company, or []."""
    name_lower = company_name.lower()
    for key, urls in URL_OVERRIDES:
        if key in name_lower:
            return list(urls)
    return []


def _expand(templates: List[Tuple[str, List[str]]], name: str, name_form: str) -> List[CandidateUrl]:
    candidates = []
    for host, suffixes in templates:
        for suffix in suffixes:
            candidates.append(CandidateUrl(
                url=host.format(name=name) + suffix,
                name_form=name_form,
                path_suffix=suffix,
            ))
    return candidates


def generate_esg_urls(company_name: str) -> List[CandidateUrl]:
    """
    Generate candidate ESG page URLs for a company, in probing order.

    Underscored names are not used for hosts since underscores are not valid
    in host names. Duplicates (e.g., when clean and concatenated forms are
    equal) are kept.

    Args:
        company_name: Company name as given by the user

    Returns:
        List of CandidateUrl, overrides first
    """
    forms = normalize_company_name(company_name)

    candidates = [
        CandidateUrl(url=u, name_form='override')
        for u in get_url_overrides(company_name)
    ]

    for form in ('clean', 'concatenated', 'hyphenated'):
        candidates.extend(_expand(WWW_TEMPLATES, forms[form], form))

    for form in ('clean', 'concatenated', 'hyphenated'):
        candidates.extend(_expand(BARE_TEMPLATES, forms[form], form))

    return candidates
