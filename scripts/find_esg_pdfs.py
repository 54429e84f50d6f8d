"""
Find ESG report PDFs for a company by probing its likely sustainability pages.

Guesses the company's ESG page URLs (or finds them with a web search), keeps
pages that are real content, collects PDF-like links (following up to 3
reporting subpages) and keeps links for the requested years.

Usage:
    python scripts/find_esg_pdfs.py                          # Boeing, current year
    python scripts/find_esg_pdfs.py "Apple Inc" 2023         # single year
    python scripts/find_esg_pdfs.py "Acme Corp" 2021 2023    # inclusive range
    python scripts/find_esg_pdfs.py --companies "Apple Inc,Tesla Inc" 2024 -v
    python scripts/find_esg_pdfs.py Patagonia 2024 --strategy search
    python scripts/find_esg_pdfs.py Boeing 2024 --process-pdfs
"""

import sys
import argparse
import logging
from pathlib import Path

# Add parent directory to path for imports
sys.path.append(str(Path(__file__).parent.parent))
from config.settings import OUTPUT_FILENAME
from src.scraper.esg_scraper import STRATEGIES, format_report, process_found_pdfs, run_pipeline


def four_digit_year(value: str) -> int:
    if not (value.isdigit() and len(value) == 4):
        raise argparse.ArgumentTypeError(f"expected a 4-digit year, got {value!r}")
    return int(value)


def main():
    """Main function to find ESG PDF links for companies."""
    parser = argparse.ArgumentParser(description='Find ESG report PDFs on company websites')
    parser.add_argument('company', nargs='?', default='Boeing',
                        help='Company name (default: Boeing)')
    parser.add_argument('start_year', nargs='?', type=four_digit_year,
                        help='Year to keep, or first year of a range (default: current year)')
    parser.add_argument('stop_year', nargs='?', type=four_digit_year,
                        help='Last year of the range (inclusive)')
    parser.add_argument('--companies', type=str, default='',
                        help='Comma-separated company names (overrides the positional company)')
    parser.add_argument('--strategy', choices=sorted(STRATEGIES), default='direct',
                        help='How to find pages: guess URLs (direct) or web search (search)')
    parser.add_argument('--seed-url', type=str, default='',
                        help='Optional known ESG page to probe first')
    parser.add_argument('--output', type=str, default=OUTPUT_FILENAME,
                        help=f'Output JSON file (default: {OUTPUT_FILENAME})')
    parser.add_argument('--process-pdfs', action='store_true',
                        help='Download found PDFs and write keyword-tagged text chunks')
    parser.add_argument('--chunks-dir', type=str, default='chunks',
                        help='Where --process-pdfs writes JSONL files (default: chunks)')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Verbose (INFO) logging')
    parser.add_argument('-vv', '--very-verbose', action='store_true',
                        help='Very verbose (DEBUG) logging')

    args = parser.parse_args()

    # Set logging level
    if args.very_verbose:
        logging.getLogger().setLevel(logging.DEBUG)
    elif args.verbose:
        logging.getLogger().setLevel(logging.INFO)
    else:
        logging.getLogger().setLevel(logging.WARNING)

    companies = [c.strip() for c in args.companies.split(',') if c.strip()] or [args.company]

    print("=" * 80)
    print("ESG PDF Finder")
    print("=" * 80)
    print(f"Companies: {', '.join(companies)}")
    print()

    results = run_pipeline(
        companies,
        start_year=args.start_year,
        stop_year=args.stop_year,
        output=args.output,
        strategy=args.strategy,
        seed_url=args.seed_url or None,
    )

    print(format_report(results))
    print()
    print(f"PDF links saved to: {args.output}")

    if args.process_pdfs and results:
        written = process_found_pdfs(results, Path(args.chunks_dir))
        print(f"Processed PDFs: {len(written)} (see {args.chunks_dir}/)")


if __name__ == "__main__":
    main()
