# tests/test_upload_service.py

"""
Tests for chunked uploads and their use by the PDF service.
"""

import io

import pytest
from PyPDF2 import PdfReader

from portfolio_service.schemas.pdf_schemas import (
    CompressionLevel,
    ImageToPdfOptions,
    NamedFile,
    SplitMode,
)
from portfolio_service.services.pdf_service import PdfService
from portfolio_service.services.upload_service import UploadService
from portfolio_service.utils.exceptions import (
    PayloadTooLargeError,
    UploadError,
    ValidationFailure,
)

from .conftest import make_image, make_pdf


class TestUploadService:
    """Test cases for chunk storage and assembly."""

    def test_assemble_in_index_order(self, upload_dir):
        service = UploadService(upload_dir, max_upload_bytes=1024)

        service.save_chunk("up1", 1, b"world")
        response = service.save_chunk("up1", 0, b"hello ")
        assembled = service.assemble("up1", "../../greeting.txt")

        assert response.received_bytes == 11
        assert assembled.filename == "greeting.txt"
        assert assembled.size == 11
        assert service.read(assembled.temp_key) == ("greeting.txt", b"hello world")

    def test_size_limit(self, upload_dir):
        service = UploadService(upload_dir, max_upload_bytes=8)

        service.save_chunk("big", 0, b"12345")
        with pytest.raises(PayloadTooLargeError):
            service.save_chunk("big", 1, b"67890")

        with pytest.raises(UploadError, match="No chunks received"):
            service.assemble("big", "big.bin")

    def test_resent_chunk_counted_once(self, upload_dir):
        service = UploadService(upload_dir, max_upload_bytes=8)

        service.save_chunk("retry", 0, b"12345")
        response = service.save_chunk("retry", 0, b"123456")
        assembled = service.assemble("retry", "retry.bin")

        assert response.received_bytes == 6
        assert service.read(assembled.temp_key) == ("retry.bin", b"123456")

    def test_numeric_chunk_order(self, upload_dir):
        service = UploadService(upload_dir, max_upload_bytes=1024)

        service.save_chunk("many", 1000000, b"c")
        service.save_chunk("many", 2, b"b")
        service.save_chunk("many", 0, b"a")
        assembled = service.assemble("many", "abc.txt")

        assert service.read(assembled.temp_key) == ("abc.txt", b"abc")

    def test_invalid_ids(self, upload_dir):
        service = UploadService(upload_dir, max_upload_bytes=1024)

        with pytest.raises(ValidationFailure, match="Invalid uploadId"):
            service.save_chunk("../escape", 0, b"x")
        with pytest.raises(ValidationFailure, match="Invalid chunkIndex"):
            service.save_chunk("ok", -1, b"x")
        with pytest.raises(ValidationFailure, match="Invalid tempKey"):
            service.read("a/b")

    def test_unknown_temp_key(self, upload_dir):
        service = UploadService(upload_dir, max_upload_bytes=1024)
        with pytest.raises(UploadError, match="Unknown tempKey"):
            service.read("deadbeef")

    def test_discard_and_cleanup(self, upload_dir):
        service = UploadService(upload_dir, max_upload_bytes=1024)
        service.save_chunk("u", 0, b"data")
        key = service.assemble("u", "a.bin").temp_key

        service.discard(key)
        with pytest.raises(UploadError):
            service.read(key)

        service.save_chunk("pending", 0, b"data")
        service.cleanup()
        with pytest.raises(UploadError):
            service.assemble("pending", "a.bin")


class TestPdfService:
    """Test cases for limits and output naming in the PDF service."""

    def make_service(self, upload_dir, **limits) -> PdfService:
        self.uploads = UploadService(upload_dir, max_upload_bytes=10 * 1024 * 1024)
        return PdfService(self.uploads, **limits)

    def test_split_output_name(self, upload_dir):
        service = self.make_service(upload_dir)
        result = service.split(NamedFile(name="report.pdf", content=make_pdf(3)), SplitMode.PAGES)

        assert result.name == "report_split.zip"

    def test_missing_file(self, upload_dir):
        service = self.make_service(upload_dir)
        with pytest.raises(ValidationFailure, match="select a PDF file to split"):
            service.split(None, SplitMode.PAGES)

    def test_rejects_non_pdf(self, upload_dir):
        service = self.make_service(upload_dir)
        with pytest.raises(ValidationFailure, match="valid PDF file"):
            service.compress(NamedFile(name="a.txt", content=b"hello"), CompressionLevel.LOW)

    def test_pdf_size_limit(self, upload_dir):
        service = self.make_service(upload_dir, max_pdf_size_bytes=10)
        with pytest.raises(PayloadTooLargeError, match="too large"):
            service.info(NamedFile(name="a.pdf", content=make_pdf(1)))

    def test_decrypt_output_name(self, upload_dir):
        service = self.make_service(upload_dir)
        result = service.decrypt(
            NamedFile(name="locked.pdf", content=make_pdf(1, password="pw")), "pw"
        )
        assert result.name == "locked_unlocked.pdf"

    def test_images_to_pdf_with_temp_keys(self, upload_dir):
        service = self.make_service(upload_dir)
        self.uploads.save_chunk("img", 0, make_image((30, 20)))
        key = self.uploads.assemble("img", "chunked.png").temp_key

        result = service.images_to_pdf(
            [NamedFile(name="direct.png", content=make_image())],
            ImageToPdfOptions(),
            [key],
        )

        assert result.name == "images.pdf"
        assert len(PdfReader(io.BytesIO(result.content)).pages) == 2
        # consumed uploads are discarded
        with pytest.raises(UploadError):
            self.uploads.read(key)

    def test_image_count_limit(self, upload_dir):
        service = self.make_service(upload_dir, max_image_files=1)
        images = [NamedFile(name=f"{i}.png", content=make_image()) for i in range(2)]

        with pytest.raises(ValidationFailure, match="Too many files"):
            service.images_to_pdf(images, ImageToPdfOptions())

    def test_info(self, upload_dir):
        service = self.make_service(upload_dir)
        info = service.info(NamedFile(name="a.pdf", content=make_pdf(2)))

        assert info.page_count == 2
        assert info.encrypted is False
        assert info.filename == "a.pdf"
