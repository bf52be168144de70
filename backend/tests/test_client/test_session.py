import io
import json

import httpx
import pytest
from docx import Document
from PIL import Image

from docextract.client import ApiError, ExtractionSession, ExtractionStatus, ExtractorClient, SessionError

EXTRACTION_BODY = {
    "pages": [{"page": 1, "text": "first page"}, {"page": 2, "text": "second\npage"}],
    "meta": {"fileType": "application/pdf", "pageCount": 2, "processingTimeMs": 1234},
}


def make_client(handler) -> ExtractorClient:
    return ExtractorClient(base_url="http://test", transport=httpx.MockTransport(handler))


def ok_handler(request: httpx.Request) -> httpx.Response:
    if request.url.path == "/api/extract":
        return httpx.Response(200, json=EXTRACTION_BODY)
    if request.url.path == "/api/download":
        payload = json.loads(request.content)
        doc = Document()
        for line in payload["text"].split("\n"):
            doc.add_paragraph(line)
        buffer = io.BytesIO()
        doc.save(buffer)
        return httpx.Response(200, content=buffer.getvalue())
    return httpx.Response(404, json={"error": "API endpoint not found"})


@pytest.fixture
def pdf_path(tmp_path, sample_pdf_bytes):
    path = tmp_path / "doc.pdf"
    path.write_bytes(sample_pdf_bytes)
    return path


@pytest.fixture
def session() -> ExtractionSession:
    return ExtractionSession(make_client(ok_handler))


class TestStatusProgression:
    def test_starts_idle(self, session):
        assert session.status == ExtractionStatus.IDLE
        assert session.result is None

    def test_successful_extraction(self, session, pdf_path):
        seen = []
        session.subscribe(seen.append)

        session.select_file(pdf_path)
        status = session.extract()

        assert status == ExtractionStatus.SUCCESS
        assert seen == [
            ExtractionStatus.SELECTED,
            ExtractionStatus.UPLOADING,
            ExtractionStatus.PROCESSING,
            ExtractionStatus.SUCCESS,
        ]
        assert session.result.meta.page_count == 2
        assert session.editable_text == "--- Page 1 ---\nfirst page\n\n--- Page 2 ---\nsecond\npage"

    def test_change_file_only_from_selected(self, session, pdf_path):
        session.select_file(pdf_path)
        session.change_file()
        assert session.status == ExtractionStatus.IDLE
        assert session.file is None

        with pytest.raises(SessionError):
            session.change_file()

    def test_terminal_statuses_require_reset(self, session, pdf_path):
        session.select_file(pdf_path)
        session.extract()

        with pytest.raises(SessionError):
            session.select_file(pdf_path)
        with pytest.raises(SessionError):
            session.extract()
        with pytest.raises(SessionError):
            session.change_file()

        session.reset()
        assert session.status == ExtractionStatus.IDLE
        assert session.result is None
        assert session.editable_text == ""

    def test_extract_requires_selection(self, session):
        with pytest.raises(SessionError):
            session.extract()

    def test_rejects_unsupported_file(self, session, tmp_path):
        path = tmp_path / "notes.txt"
        path.write_text("hello")

        with pytest.raises(SessionError):
            session.select_file(path)
        assert session.status == ExtractionStatus.IDLE


class TestErrorReporting:
    def test_json_error_message(self, pdf_path):
        def handler(request):
            return httpx.Response(
                500,
                json={"error": "Could not convert PDF.", "details": "Incorrect password"},
            )

        session = ExtractionSession(make_client(handler))
        session.select_file(pdf_path)

        assert session.extract() == ExtractionStatus.ERROR
        assert session.error_message == "Could not convert PDF."

    def test_non_json_error_is_connectivity(self, pdf_path):
        def handler(request):
            return httpx.Response(502, text="<html>Bad Gateway</html>", headers={"Content-Type": "text/html"})

        session = ExtractionSession(make_client(handler))
        session.select_file(pdf_path)
        session.extract()

        assert session.status == ExtractionStatus.ERROR
        assert session.error_message == (
            "Server connection failed (502). Please check if the backend is running."
        )

    def test_html_success_response_ends_in_error(self, pdf_path):
        def handler(request):
            return httpx.Response(200, text="<html>index</html>", headers={"Content-Type": "text/html"})

        session = ExtractionSession(make_client(handler))
        session.select_file(pdf_path)

        assert session.extract() == ExtractionStatus.ERROR
        assert session.error_message == (
            "Server connection failed (200). Please check if the backend is running."
        )

    def test_malformed_result_ends_in_error(self, pdf_path):
        def handler(request):
            return httpx.Response(200, json={"pages": [{"page": 0}]})

        session = ExtractionSession(make_client(handler))
        session.select_file(pdf_path)
        session.extract()

        assert session.status == ExtractionStatus.ERROR
        assert session.result is None

    def test_unexpected_client_failure_ends_in_error(self, session, pdf_path, monkeypatch):
        def explode(*args, **kwargs):
            raise RuntimeError("socket closed")

        monkeypatch.setattr(session.client, "extract", explode)
        session.select_file(pdf_path)

        assert session.extract() == ExtractionStatus.ERROR
        assert session.error_message == "An unknown error occurred during processing."

    def test_unreachable_backend(self, pdf_path):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        session = ExtractionSession(make_client(handler))
        session.select_file(pdf_path)
        session.extract()

        assert session.status == ExtractionStatus.ERROR
        assert "Please check if the backend is running" in session.error_message

    def test_download_error(self):
        def handler(request):
            return httpx.Response(400, json={"error": "Unsupported format requested."})

        with make_client(handler) as client:
            with pytest.raises(ApiError) as exc_info:
                client.download("text", "odt")

        assert exc_info.value.status_code == 400
        assert exc_info.value.message == "Unsupported format requested."


class TestExport:
    @pytest.fixture
    def done(self, session, pdf_path) -> ExtractionSession:
        session.select_file(pdf_path)
        session.extract()
        return session

    def test_txt_matches_editable_text(self, done):
        done.editable_text = "edited\r\nby hand\n\n  indented\n"

        filename, content = done.export("txt")

        assert filename == "extracted_text.txt"
        assert content == "edited\r\nby hand\n\n  indented\n".encode("utf-8")

    def test_txt_unicode(self, done):
        done.editable_text = "café naïve résumé"

        assert done.export("txt")[1].decode("utf-8") == "café naïve résumé"

    @pytest.mark.parametrize("fmt,pil_format", [("png", "PNG"), ("jpeg", "JPEG")])
    def test_image_export(self, done, fmt, pil_format):
        filename, content = done.export(fmt)

        assert filename == f"extracted_text.{fmt}"
        with Image.open(io.BytesIO(content)) as image:
            assert image.format == pil_format
            assert image.width == 1600

    def test_image_grows_with_text(self, done):
        _, short = done.export("png")
        done.editable_text = "\n".join(f"line {i}" for i in range(50))
        _, tall = done.export("png")

        with Image.open(io.BytesIO(short)) as a, Image.open(io.BytesIO(tall)) as b:
            assert b.height > a.height

    def test_docx_round_trip_sends_edited_text(self, done):
        done.editable_text = "line1\nline2"

        filename, content = done.export("docx")

        assert filename == "extracted_text.docx"
        assert [p.text for p in Document(io.BytesIO(content)).paragraphs] == ["line1", "line2"]

    def test_export_requires_success(self, session):
        with pytest.raises(SessionError):
            session.export("txt")

    def test_unknown_format(self, done):
        with pytest.raises(SessionError):
            done.export("gif")
