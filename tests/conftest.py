# tests/conftest.py

import io

import pytest
from PIL import Image
from PyPDF2 import PdfWriter


def make_pdf(
    pages: int = 3, password: str = None, title: str = None, algorithm: str = None
) -> bytes:
    """Build a PDF of blank pages, optionally encrypted (RC4 unless ``algorithm``) or titled"""
    writer = PdfWriter()
    for index in range(pages):
        writer.add_blank_page(width=200 + index, height=300)
    if title:
        writer.add_metadata({"/Title": title, "/Author": "Tester"})
    if password:
        if algorithm:
            writer.encrypt(password, algorithm=algorithm)
        else:
            writer.encrypt(password)
    buffer = io.BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


def make_image(
    size=(64, 48), color=(200, 30, 30), fmt: str = "PNG", mode: str = "RGB"
) -> bytes:
    """Build a solid colour image in the given format"""
    fill = color if mode != "RGBA" else color + (128,)
    img = Image.new(mode, size, fill)
    buffer = io.BytesIO()
    img.save(buffer, fmt)
    return buffer.getvalue()


def make_image_pdf(size=(120, 80)) -> bytes:
    """Build a single page PDF embedding a JPEG"""
    img = Image.new("RGB", size, (10, 120, 200))
    buffer = io.BytesIO()
    img.save(buffer, "PDF", resolution=72.0)
    return buffer.getvalue()


@pytest.fixture
def sample_pdf() -> bytes:
    return make_pdf(5)


@pytest.fixture
def upload_dir(tmp_path):
    return str(tmp_path / "uploads")
