"""
Download one ESG PDF, chunk its text and tag chunks with ESG keywords.

Usage:
    python scripts/process_pdf.py https://example.com/report-2024.pdf "Apple Inc"
    python scripts/process_pdf.py URL COMPANY --output apple_2024.jsonl --cleanup
"""

import sys
import argparse
from pathlib import Path

# Add parent directory to path for imports
sys.path.append(str(Path(__file__).parent.parent))
from src.processor.pdf_processor import cleanup_downloads, process_pdf, save_to_jsonl
from src.scraper.link_harvester import generate_safe_filename


def main():
    parser = argparse.ArgumentParser(description='Process an ESG PDF into keyword-tagged text chunks')
    parser.add_argument('url', help='PDF URL')
    parser.add_argument('company', help='Company name')
    parser.add_argument('--output', type=str, default='',
                        help='JSONL output path (default: derived from the URL)')
    parser.add_argument('--cleanup', action='store_true',
                        help='Delete the downloads directory afterwards')
    args = parser.parse_args()

    filename = generate_safe_filename(args.company, '', args.url)
    output = Path(args.output) if args.output else Path(f"{Path(filename).stem}.jsonl")

    try:
        result = process_pdf(args.url, filename, args.company)
        if not result:
            print("❌ PDF processing failed")
            return

        metadata = result['metadata']
        print(f"📄 PDF: {metadata['pdf_filename']}")
        print(f"📊 Pages: {metadata['total_pages']}")
        print(f"📝 Total Text Length: {metadata['total_text_length']}")
        print(f"🔢 Chunks: {metadata['total_chunks']}")

        print("\n🔍 ESG Keywords Found:")
        for category, subcategories in metadata['esg_keywords'].items():
            if subcategories:
                print(f"  {category.upper()}:")
                for subcategory, keywords in subcategories.items():
                    print(f"    {subcategory}: {', '.join(keywords)}")

        save_to_jsonl(result, output)
        print(f"\n💾 Saved: {output}")
    finally:
        if args.cleanup:
            cleanup_downloads()


if __name__ == "__main__":
    main()
