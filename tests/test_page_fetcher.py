import pytest

import src.scraper.page_fetcher as pf


class FakePage:
    def __init__(self, html_map):
        self.html_map = html_map
        self.routes = []
        self._url = ""

    def route(self, pattern, handler):
        self.routes.append((pattern, handler))

    def goto(self, url, wait_until='domcontentloaded', timeout=15000):
        if url not in self.html_map:
            raise pf.PlaywrightTimeout(f"Timeout {timeout}ms exceeded.")
        self._url = self.html_map[url].get('redirect', url)

    def wait_for_load_state(self, state, timeout=3000):
        raise pf.PlaywrightTimeout("networkidle never reached")

    def title(self):
        return self.html_map[self._url]['title']

    def content(self):
        return self.html_map[self._url]['html']

    @property
    def url(self):
        return self._url


class FakeContext:
    def __init__(self, page):
        self.page = page

    def new_page(self):
        return self.page


class FakeBrowser:
    def __init__(self, page):
        self.page = page
        self.closed = False
        self.context_kwargs = None

    def new_context(self, **kwargs):
        self.context_kwargs = kwargs
        return FakeContext(self.page)

    def close(self):
        self.closed = True


class FakeChromium:
    def __init__(self, browser):
        self.browser = browser

    def launch(self, headless=True, args=None):
        self.browser.headless = headless
        return self.browser


class FakePlaywright:
    def __init__(self, browser):
        self.chromium = FakeChromium(browser)
        self.stopped = False

    def start(self):
        return self

    def stop(self):
        self.stopped = True


class FakeStealth:
    applied = []

    def apply_stealth_sync(self, page):
        FakeStealth.applied.append(page)


@pytest.fixture
def fake_browser(monkeypatch):
    html_map = {
        "https://acme.com/esg": {'redirect': "https://www.acme.com/esg"},
        "https://www.acme.com/esg": {'title': "ESG | Acme", 'html': "<html><body>ESG</body></html>"},
    }
    page = FakePage(html_map)
    browser = FakeBrowser(page)
    playwright = FakePlaywright(browser)
    monkeypatch.setattr(pf, "sync_playwright", lambda: playwright)
    monkeypatch.setattr(pf, "Stealth", FakeStealth)
    return playwright, browser, page


def test_fetch_returns_rendered_page(fake_browser):
    _, browser, page = fake_browser

    with pf.PlaywrightPageFetcher(headless=True) as fetcher:
        result = fetcher.fetch("https://acme.com/esg")

    assert result.title == "ESG | Acme"
    assert result.html == "<html><body>ESG</body></html>"
    assert result.final_url == "https://www.acme.com/esg"
    assert browser.context_kwargs['viewport'] == {'width': 1366, 'height': 768}
    assert page in FakeStealth.applied
    assert [p for p, _ in page.routes] == ['**/*']


def test_navigation_timeout_raises_fetch_error(fake_browser):
    with pf.PlaywrightPageFetcher() as fetcher:
        with pytest.raises(pf.FetchError) as excinfo:
            fetcher.fetch("https://nowhere.acme.com", timeout_ms=100)

    assert excinfo.value.url == "https://nowhere.acme.com"
    assert "100ms" in str(excinfo.value)


def test_fetch_before_start_is_an_error():
    with pytest.raises(RuntimeError):
        pf.PlaywrightPageFetcher().fetch("https://acme.com")


def test_close_releases_browser(fake_browser):
    playwright, browser, _ = fake_browser

    fetcher = pf.PlaywrightPageFetcher().start()
    fetcher.close()

    assert browser.closed
    assert playwright.stopped
    with pytest.raises(RuntimeError):
        fetcher.fetch("https://acme.com/esg")


def test_blocked_resource_types_are_aborted():
    class Request:
        def __init__(self, resource_type):
            self.resource_type = resource_type

    class Route:
        def __init__(self, resource_type):
            self.request = Request(resource_type)
            self.action = None

        def abort(self):
            self.action = 'abort'

        def continue_(self):
            self.action = 'continue'

    image, document = Route('image'), Route('document')
    pf.PlaywrightPageFetcher._route(image)
    pf.PlaywrightPageFetcher._route(document)

    assert image.action == 'abort'
    assert document.action == 'continue'


def test_failed_launch_stops_driver(monkeypatch):
    class BrokenChromium:
        def launch(self, headless=True, args=None):
            raise pf.PlaywrightError("Executable doesn't exist at /ms-playwright/chromium")

    playwright = FakePlaywright(FakeBrowser(None))
    playwright.chromium = BrokenChromium()
    monkeypatch.setattr(pf, "sync_playwright", lambda: playwright)

    with pytest.raises(pf.PlaywrightError):
        with pf.PlaywrightPageFetcher():
            pass

    assert playwright.stopped
