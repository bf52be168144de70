import io
from pathlib import Path
from typing import AsyncGenerator
from unittest.mock import patch

import pytest
import pytest_asyncio
from docx import Document
from httpx import ASGITransport, AsyncClient
from PIL import Image

from docextract.config import Settings


@pytest.fixture
def app_settings(tmp_path: Path) -> Settings:
    return Settings(
        upload_dir=tmp_path / "uploads",
        static_dir=tmp_path / "dist",
    )


@pytest_asyncio.fixture(scope="function")
async def client(app_settings: Settings) -> AsyncGenerator[AsyncClient, None]:
    from docextract.dependencies import get_settings
    from docextract.main import app

    app.dependency_overrides[get_settings] = lambda: app_settings

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def fake_tesseract():
    """Stand-in for the tesseract binary; yields the image_to_string mock."""
    with patch("pytesseract.get_tesseract_version", return_value="5.3.0"), patch(
        "pytesseract.image_to_string", return_value="Recognized text\n"
    ) as image_to_string:
        yield image_to_string


def make_image(color: str = "white", size: tuple[int, int] = (64, 32)) -> Image.Image:
    return Image.new("RGB", size, color)


@pytest.fixture
def sample_png_bytes() -> bytes:
    buffer = io.BytesIO()
    make_image().save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def sample_jpeg_bytes() -> bytes:
    buffer = io.BytesIO()
    make_image().save(buffer, format="JPEG")
    return buffer.getvalue()


@pytest.fixture
def sample_docx_bytes() -> bytes:
    doc = Document()
    doc.add_paragraph("Quarterly report")
    doc.add_paragraph("Revenue grew in every region.")
    buffer = io.BytesIO()
    doc.save(buffer)
    return buffer.getvalue()


@pytest.fixture
def sample_pdf_bytes() -> bytes:
    """Minimal valid single-page PDF."""
    return b"""%PDF-1.0
1 0 obj
<< /Type /Catalog /Pages 2 0 R >>
endobj
2 0 obj
<< /Type /Pages /Kids [3 0 R] /Count 1 >>
endobj
3 0 obj
<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] /Contents 4 0 R /Resources << /Font << /F1 5 0 R >> >> >>
endobj
4 0 obj
<< /Length 44 >>
stream
BT /F1 12 Tf 100 700 Td (Hello World) Tj ET
endstream
endobj
5 0 obj
<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>
endobj
xref
0 6
0000000000 65535 f
0000000009 00000 n
0000000058 00000 n
0000000115 00000 n
0000000266 00000 n
0000000360 00000 n
trailer
<< /Size 6 /Root 1 0 R >>
startxref
441
%%EOF"""
