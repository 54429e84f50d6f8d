"""Data models for the ESG page scraping pipeline."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, List


@dataclass
class CandidateUrl:
    """A guessed URL plus the name form and path suffix it was built from."""

    url: str
    name_form: str
    path_suffix: str = ""


@dataclass
class FetchedPage:
    """A rendered page as returned by the page fetcher."""

    title: str
    html: str
    final_url: str


@dataclass
class LinkCandidate:
    """One anchor element scored as a possible PDF report link."""

    url: str
    text: str
    title: str = ""
    class_name: str = ""
    id: str = ""
    is_direct_pdf: bool = False
    is_download_link: bool = False
    is_report_link: bool = False
    is_button_link: bool = False

    def to_dict(self) -> Dict:
        return {
            'url': self.url,
            'text': self.text,
            'title': self.title,
            'class_name': self.class_name,
            'id': self.id,
            'is_direct_pdf': self.is_direct_pdf,
            'is_download_link': self.is_download_link,
            'is_report_link': self.is_report_link,
            'is_button_link': self.is_button_link,
        }


@dataclass
class ScrapeResult:
    """PDF-like links harvested from one validated page."""

    company: str
    source_title: str
    source_url: str
    extracted_data: Dict
    pdf_links: List[LinkCandidate] = field(default_factory=list)
    scraped_at: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())

    def to_dict(self) -> Dict:
        """Shape written to the output JSON file."""
        return {
            'company': self.company,
            'source': self.source_title,
            'url': self.source_url,
            'pdf_links': [link.to_dict() for link in self.pdf_links],
        }
