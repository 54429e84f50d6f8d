"""
Configuration settings for the ESG PDF finder
"""
import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Paths
BASE_DIR = Path(__file__).parent.parent
DOWNLOAD_DIR = Path(os.getenv("ESG_DOWNLOAD_DIR", BASE_DIR / "downloads"))

# Output
OUTPUT_FILENAME = os.getenv("ESG_OUTPUT_FILENAME", "esg-pdf-urls.json")

# Scraping Configuration
REQUEST_DELAY = float(os.getenv("ESG_REQUEST_DELAY", "2"))  # seconds between companies
PAGE_TIMEOUT_MS = int(os.getenv("ESG_PAGE_TIMEOUT_MS", "15000"))
HEADLESS = os.getenv("ESG_HEADLESS", "true").lower() not in ("0", "false", "no")
MAX_SUBPAGES = 3
MAX_SEARCH_RESULTS = 5  # search hits probed per company with the search strategy

# Page validation thresholds
MIN_CONTENT_LENGTH = 500
ERROR_SCAN_WINDOW = 2000

# PDF processing
CHUNK_SIZE = 2000
CHUNK_OVERLAP = 200
DOWNLOAD_TIMEOUT = 30

# User agent for requests (appears as a normal browser)
USER_AGENT = 'Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36'

HEADERS = {
    'User-Agent': USER_AGENT,
    'Accept': 'text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8',
    'Accept-Language': 'en-US,en;q=0.9',
    'Accept-Encoding': 'gzip, deflate',
    'Connection': 'keep-alive',
}
