import src.scraper.search_engine as se


class FakeDDGS:
    def __init__(self, queries):
        self.queries = queries

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        return False

    def text(self, query, max_results=5):
        self.queries.append(query)
        # Same hits for every query, so dedupe has work to do
        return [
            {'href': 'https://example.com/sustainability/', 'title': 'Sustainability at Example', 'body': ''},
            {'href': 'https://example.com/sustainability', 'title': 'Sustainability', 'body': ''},
            {'href': 'https://example.com/careers', 'title': 'Careers', 'body': 'Join our team'},
            {'href': 'https://example.com/investors', 'title': 'Investors', 'body': 'Download the ESG report'},
        ]


def test_search_dedupes_and_keeps_esg_hits(monkeypatch):
    queries = []
    monkeypatch.setattr(se, "DDGS", lambda: FakeDDGS(queries))

    results = se.search_for_esg_pages("Example Corp", delay=0)

    assert len(queries) == len(se.QUERY_TEMPLATES)
    assert all('"Example Corp"' in q for q in queries)
    urls = [r['url'] for r in results]
    assert urls == ['https://example.com/sustainability/', 'https://example.com/investors']
    assert all(r['source'] == 'duckduckgo' for r in results)


def test_failing_query_is_skipped(monkeypatch):
    calls = []

    def flaky(query, max_results=5):
        calls.append(query)
        if len(calls) == 1:
            raise RuntimeError("202 Ratelimit")
        return [{'url': 'https://example.com/esg', 'title': 'ESG', 'snippet': '', 'source': 'duckduckgo'}]

    monkeypatch.setattr(se, "search_duckduckgo", flaky)

    results = se.search_for_esg_pages("Example Corp", delay=0)

    assert len(calls) == len(se.QUERY_TEMPLATES)
    assert [r['url'] for r in results] == ['https://example.com/esg']


def test_is_esg_related():
    assert se.is_esg_related("2023 Impact Report", "")
    assert se.is_esg_related("Home", "Our CSR commitments")
    assert not se.is_esg_related("Careers", "Open roles")
