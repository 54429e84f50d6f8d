from src.scraper.models import FetchedPage
from src.scraper.page_signals import extract_page_signals


def test_keyword_hits_and_general_block():
    html = """
    <html>
      <head><title>Acme ESG</title><script>var water = 1;</script></head>
      <body>
        <h1>Carbon emissions</h1>
        <p>Our board of directors oversees the program.</p>
        <table><tr><td>2023</td></tr></table>
      </body>
    </html>
    """
    page = FetchedPage(title="Acme ESG", html=html, final_url="https://www.acme.com/esg")

    data = extract_page_signals(page, "Acme")

    assert data['environmental'] == {'carbon_footprint': 'Found carbon-related data'}
    assert data['governance'] == {'board': 'Found board-related data'}
    assert data['social'] == {}
    assert data['general'] == {
        'title': "Acme ESG",
        'company': "Acme",
        'url': "https://www.acme.com/esg",
        'tables': 1,
    }


def test_no_tables_key_without_tables():
    page = FetchedPage(title="t", html="<html><body><p>Employee safety</p></body></html>", final_url="https://a.com")
    data = extract_page_signals(page, "A")
    assert 'tables' not in data['general']
    assert set(data['social']) == {'workforce', 'safety'}
