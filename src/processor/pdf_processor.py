"""
PDF Processing - download an ESG report, extract its text, split it into
overlapping chunks and tag each chunk with ESG keyword hits.

Output shape:
    {
        "metadata": {company, source_url, pdf_filename, total_pages, total_chunks,
                     total_text_length, pdf_info, esg_keywords, processed_at},
        "chunks": [{id, company, source_url, pdf_filename, chunk_index, text,
                    text_length, start_sentence, end_sentence, esg_keywords,
                    created_at}, ...]
    }
"""

import re
import sys
import json
import shutil
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional

import fitz  # pymupdf
import requests

# Add parent directory to path for imports
sys.path.append(str(Path(__file__).parent.parent.parent))
from config.settings import CHUNK_OVERLAP, CHUNK_SIZE, DOWNLOAD_DIR, DOWNLOAD_TIMEOUT, USER_AGENT

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Overlap is given in characters, carried over as whole sentences
CHARS_PER_SENTENCE = 50

ESG_KEYWORDS = {
    'environmental': {
        'carbon': ['carbon', 'emissions', 'co2', 'greenhouse gas', 'climate change', 'carbon footprint'],
        'energy': ['energy', 'renewable', 'solar', 'wind', 'hydroelectric', 'energy efficiency'],
        'waste': ['waste', 'recycling', 'circular economy', 'zero waste', 'landfill'],
        'water': ['water', 'water usage', 'water conservation', 'water footprint'],
        'biodiversity': ['biodiversity', 'ecosystem', 'conservation', 'wildlife', 'habitat'],
    },
    'social': {
        'diversity': ['diversity', 'inclusion', 'equity', 'representation', 'minority'],
        'workforce': ['employee', 'workforce', 'labor', 'human rights', 'working conditions'],
        'community': ['community', 'philanthropy', 'charitable', 'social impact', 'local'],
        'safety': ['safety', 'health', 'occupational', 'workplace safety', 'wellness'],
        'supply_chain': ['supply chain', 'supplier', 'vendor', 'procurement', 'sourcing'],
    },
    'governance': {
        'board': ['board', 'director', 'governance', 'leadership', 'executive'],
        'ethics': ['ethics', 'compliance', 'corruption', 'bribery', 'integrity'],
        'transparency': ['transparency', 'disclosure', 'reporting', 'accountability'],
        'risk': ['risk', 'risk management', 'compliance risk', 'operational risk'],
        'stakeholder': ['stakeholder', 'shareholder', 'investor', 'engagement'],
    },
}


def download_pdf(url: str, filename: str, download_dir: Path = DOWNLOAD_DIR, timeout: int = DOWNLOAD_TIMEOUT) -> Optional[Path]:
    """
    Download a PDF to download_dir/filename.

    Returns:
        Path of the saved file, or None on failure
    """
    download_dir = Path(download_dir)
    try:
        logger.info(f"📥 Downloading PDF: {filename}")
        response = requests.get(url, headers={'User-Agent': USER_AGENT}, timeout=timeout)
        response.raise_for_status()

        download_dir.mkdir(parents=True, exist_ok=True)
        filepath = download_dir / filename
        filepath.write_bytes(response.content)

        logger.info(f"  ✓ PDF downloaded: {filepath}")
        return filepath
    except requests.exceptions.RequestException as e:
        logger.error(f"  ✗ Failed to download PDF {url}: {e}")
        return None
    except OSError as e:
        logger.error(f"  ✗ Failed to save PDF {filename}: {e}")
        return None


def extract_text_from_pdf(filepath: Path) -> Optional[Dict]:
    """
    Extract plain text from a PDF with PyMuPDF.

    Returns:
        Dict with 'text', 'pages' and 'info' (document metadata), or None
    """
    try:
        logger.info(f"📄 Extracting text from: {Path(filepath).name}")
        doc = fitz.open(filepath)
        try:
            text = "\n".join(page.get_text() for page in doc)
            return {
                'text': text,
                'pages': doc.page_count,
                'info': dict(doc.metadata or {}),
            }
        finally:
            doc.close()
    except Exception as e:
        logger.error(f"  ✗ Failed to extract text from {filepath}: {e}")
        return None


def split_sentences(text: str) -> List[str]:
    return [s.strip() for s in re.split(r'[.!?]+', text) if s.strip()]


def chunk_text(text: str, chunk_size: int = CHUNK_SIZE, overlap: int = CHUNK_OVERLAP) -> List[Dict]:
    """
    Split text into sentence-aligned chunks of about chunk_size characters.

    Each chunk after the first repeats the last `overlap // 50` sentences of
    the previous one. start_sentence / end_sentence are the indexes of the
    first and last sentence in the chunk.
    """
    sentences = split_sentences(text)
    overlap_count = overlap // CHARS_PER_SENTENCE

    chunks = []
    current = ''
    start = 0

    for i, sentence in enumerate(sentences):
        if current and len(current) + len(sentence) > chunk_size:
            chunks.append({
                'id': len(chunks),
                'text': current.strip(),
                'start_sentence': start,
                'end_sentence': i - 1,
            })
            start = max(0, i - overlap_count)
            current = '. '.join(sentences[start:i] + [sentence])
        else:
            current += ('. ' if current else '') + sentence

    if current.strip():
        chunks.append({
            'id': len(chunks),
            'text': current.strip(),
            'start_sentence': start,
            'end_sentence': len(sentences) - 1,
        })

    return chunks


def extract_esg_keywords(text: str) -> Dict[str, Dict[str, List[str]]]:
    """Return matched terms per ESG category/subcategory (only subcategories with hits)."""
    lower_text = text.lower()
    found = {category: {} for category in ESG_KEYWORDS}
    for category, subcategories in ESG_KEYWORDS.items():
        for subcategory, terms in subcategories.items():
            matches = [term for term in terms if term in lower_text]
            if matches:
                found[category][subcategory] = matches
    return found


def process_pdf(url: str, filename: str, company_name: str, download_dir: Path = DOWNLOAD_DIR) -> Optional[Dict]:
    """
    Download, extract, chunk and keyword-tag one PDF.

    Returns:
        Dict with 'metadata' and 'chunks', or None if download/extraction failed
    """
    filepath = download_pdf(url, filename, download_dir)
    if not filepath:
        return None

    pdf_data = extract_text_from_pdf(filepath)
    if not pdf_data:
        return None

    text = pdf_data['text']
    chunks = chunk_text(text)
    now = datetime.now(timezone.utc).isoformat()

    processed_chunks = [
        {
            'id': f"{filename}_chunk_{chunk['id']}",
            'company': company_name,
            'source_url': url,
            'pdf_filename': filename,
            'chunk_index': chunk['id'],
            'text': chunk['text'],
            'text_length': len(chunk['text']),
            'start_sentence': chunk['start_sentence'],
            'end_sentence': chunk['end_sentence'],
            'esg_keywords': extract_esg_keywords(chunk['text']),
            'created_at': now,
        }
        for chunk in chunks
    ]

    logger.info(f"  ✓ {filename}: {pdf_data['pages']} pages, {len(chunks)} chunks")

    return {
        'metadata': {
            'company': company_name,
            'source_url': url,
            'pdf_filename': filename,
            'total_pages': pdf_data['pages'],
            'total_chunks': len(chunks),
            'total_text_length': len(text),
            'pdf_info': pdf_data['info'],
            'esg_keywords': extract_esg_keywords(text),
            'processed_at': now,
        },
        'chunks': processed_chunks,
    }


def save_to_jsonl(data: Dict, filepath: Path) -> Optional[Path]:
    """
    Save metadata to <stem>_metadata.json and chunks as JSON Lines.

    Returns:
        Path of the JSONL file, or None on failure
    """
    filepath = Path(filepath)
    try:
        filepath.parent.mkdir(parents=True, exist_ok=True)
        metadata_path = filepath.with_name(f"{filepath.stem}_metadata.json")
        metadata_path.write_text(json.dumps(data['metadata'], indent=2, default=str), encoding='utf-8')

        with open(filepath, 'w', encoding='utf-8') as f:
            for chunk in data['chunks']:
                f.write(json.dumps(chunk) + '\n')
    except OSError as e:
        logger.error(f"✗ Error saving JSONL: {e}")
        return None

    logger.info(f"💾 Saved to JSONL: {filepath}")
    return filepath


def cleanup_downloads(download_dir: Path = DOWNLOAD_DIR):
    shutil.rmtree(download_dir, ignore_errors=True)
    logger.info("🧹 Cleaned up downloads directory")
