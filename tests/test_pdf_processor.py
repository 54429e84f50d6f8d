import json

import fitz
import requests

import src.processor.pdf_processor as pp


class FakeResponse:
    def __init__(self, content=b"%PDF-1.4 fake", status_error=None):
        self.content = content
        self.status_error = status_error

    def raise_for_status(self):
        if self.status_error:
            raise self.status_error


def test_chunks_overlap_by_whole_sentences():
    text = ". ".join(f"Sentence number {i:02d}" for i in range(10)) + "."

    chunks = pp.chunk_text(text, chunk_size=60, overlap=100)

    assert len(chunks) == 8
    assert (chunks[0]['start_sentence'], chunks[0]['end_sentence']) == (0, 2)
    assert (chunks[1]['start_sentence'], chunks[1]['end_sentence']) == (1, 3)
    assert (chunks[-1]['start_sentence'], chunks[-1]['end_sentence']) == (7, 9)
    assert chunks[1]['text'].startswith("Sentence number 01")
    assert [c['id'] for c in chunks] == list(range(8))


def test_chunk_empty_text():
    assert pp.chunk_text("") == []
    assert pp.chunk_text(" . ! ") == []


def test_keyword_categories_always_present():
    found = pp.extract_esg_keywords("Our Scope 1 carbon emissions and supplier audits.")
    assert set(found) == {'environmental', 'social', 'governance'}
    assert found['environmental']['carbon'] == ['carbon', 'emissions']
    assert found['social']['supply_chain'] == ['supplier']
    assert found['governance'] == {}


def test_download_pdf_writes_file(tmp_path, monkeypatch):
    seen = {}

    def fake_get(url, headers=None, timeout=None):
        seen['url'] = url
        seen['headers'] = headers
        return FakeResponse()

    monkeypatch.setattr(pp.requests, "get", fake_get)

    path = pp.download_pdf("https://acme.com/esg.pdf", "acme_esg.pdf", tmp_path / "downloads")

    assert path == tmp_path / "downloads" / "acme_esg.pdf"
    assert path.read_bytes() == b"%PDF-1.4 fake"
    assert 'User-Agent' in seen['headers']


def test_download_pdf_http_error_returns_none(tmp_path, monkeypatch):
    monkeypatch.setattr(
        pp.requests, "get",
        lambda url, headers=None, timeout=None: FakeResponse(status_error=requests.exceptions.HTTPError("404"))
    )
    assert pp.download_pdf("https://acme.com/missing.pdf", "x.pdf", tmp_path) is None
    assert not (tmp_path / "x.pdf").exists()


def test_extract_text_from_real_pdf(tmp_path):
    path = tmp_path / "report.pdf"
    doc = fitz.open()
    page = doc.new_page()
    page.insert_text((72, 72), "Carbon emissions fell in 2023.")
    doc.save(path)
    doc.close()

    data = pp.extract_text_from_pdf(path)

    assert data['pages'] == 1
    assert "Carbon emissions" in data['text']
    assert isinstance(data['info'], dict)


def test_extract_text_from_broken_file_returns_none(tmp_path):
    path = tmp_path / "broken.pdf"
    path.write_bytes(b"not a pdf")
    assert pp.extract_text_from_pdf(path) is None


def test_process_pdf_and_save(tmp_path, monkeypatch):
    monkeypatch.setattr(pp, "download_pdf", lambda url, filename, download_dir: tmp_path / filename)
    monkeypatch.setattr(pp, "extract_text_from_pdf", lambda path: {
        'text': "Board oversight of climate risk. Employee safety improved.",
        'pages': 3,
        'info': {'title': 'Acme ESG'},
    })

    data = pp.process_pdf("https://acme.com/esg.pdf", "acme_esg.pdf", "Acme", tmp_path)

    meta = data['metadata']
    assert meta['company'] == "Acme"
    assert meta['total_pages'] == 3
    assert meta['total_chunks'] == 1
    assert meta['esg_keywords']['governance']['board'] == ['board']
    chunk = data['chunks'][0]
    assert chunk['id'] == "acme_esg.pdf_chunk_0"
    assert chunk['source_url'] == "https://acme.com/esg.pdf"

    out = pp.save_to_jsonl(data, tmp_path / "out" / "acme_esg.jsonl")

    lines = out.read_text().splitlines()
    assert [json.loads(l)['id'] for l in lines] == ["acme_esg.pdf_chunk_0"]
    saved_meta = json.loads((tmp_path / "out" / "acme_esg_metadata.json").read_text())
    assert saved_meta['pdf_info'] == {'title': 'Acme ESG'}


def test_process_pdf_download_failure(tmp_path, monkeypatch):
    monkeypatch.setattr(pp, "download_pdf", lambda url, filename, download_dir: None)
    assert pp.process_pdf("https://acme.com/esg.pdf", "x.pdf", "Acme", tmp_path) is None
