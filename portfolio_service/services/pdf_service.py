# services/pdf_service.py

from typing import List, Optional, Sequence

from ..core.config import settings
from ..core import image_tools, pdf_tools
from ..schemas.pdf_schemas import (
    CompressionLevel,
    CompressionResult,
    ImageCompressionOptions,
    ImageCompressionResult,
    ImageToPdfOptions,
    MergeResult,
    NamedFile,
    PdfInfoResponse,
    SplitMode,
    SplitResult,
)
from ..utils.exceptions import PayloadTooLargeError, ValidationFailure
from .upload_service import UploadService
from common.logger import LoggerFactory, LoggerType, LogLevel


class PdfService:
    """
    PDF converter and image tools with upload limits applied.
    """

    def __init__(
        self,
        upload_service: UploadService,
        max_pdf_size_bytes: int = 100 * 1024 * 1024,
        max_image_files: int = 100,
        max_total_upload_bytes: int = 1024 * 1024 * 1024,
    ):
        """
        Initialize PDF service

        Args:
            upload_service: Store holding chunked uploads referenced by tempKey
            max_pdf_size_bytes: Largest accepted single PDF
            max_image_files: Most images per image-to-PDF conversion
            max_total_upload_bytes: Largest combined image-to-PDF input
        """
        self.upload_service = upload_service
        self.max_pdf_size_bytes = max_pdf_size_bytes
        self.max_image_files = max_image_files
        self.max_total_upload_bytes = max_total_upload_bytes
        self.logger = LoggerFactory.get_logger(
            name="pdf-service",
            logger_type=LoggerType.STANDARD,
            level=LogLevel.INFO,
            file_level=LogLevel.DEBUG,
            log_file=f"{settings.log_file_path}pdf_service.log",
        )

    def _check_pdf(self, item: Optional[NamedFile], missing_message: str) -> NamedFile:
        if item is None or not item.content:
            raise ValidationFailure(missing_message)
        if not item.name.lower().endswith(".pdf") and not item.content.startswith(b"%PDF"):
            raise ValidationFailure("Please select a valid PDF file.")
        if item.size > self.max_pdf_size_bytes:
            raise PayloadTooLargeError(
                f"{item.name} is too large. Please use files smaller than "
                f"{self.max_pdf_size_bytes // (1024 * 1024)}MB."
            )
        return item

    def split(
        self,
        item: Optional[NamedFile],
        mode: SplitMode,
        ranges: Optional[str] = None,
        every: Optional[int] = None,
    ) -> NamedFile:
        """Split a PDF and bundle the parts as ``<stem>_split.zip``"""
        item = self._check_pdf(item, "Please select a PDF file to split.")
        result: SplitResult = pdf_tools.split_pdf(item.content, mode, ranges, every)
        self.logger.info(f"Split {item.name}: {result.message}")
        return NamedFile(
            name=f"{pdf_tools.stem(item.name)}_split.zip",
            content=pdf_tools.build_zip(result.files),
        )

    def merge(self, items: Sequence[NamedFile]) -> MergeResult:
        for item in items:
            if item.size > self.max_pdf_size_bytes:
                raise PayloadTooLargeError(
                    f"{item.name} is too large. Please use files smaller than "
                    f"{self.max_pdf_size_bytes // (1024 * 1024)}MB."
                )
        result = pdf_tools.merge_pdfs(items)
        if result.skipped_files:
            self.logger.warning(f"Skipped unreadable files: {result.skipped_files}")
        self.logger.info(f"Merged {len(result.merged_files)} files, {result.page_count} pages")
        return result

    def compress(self, item: Optional[NamedFile], level: CompressionLevel) -> CompressionResult:
        item = self._check_pdf(item, "Please select a PDF file to compress.")
        result = pdf_tools.compress_pdf(item.content, level)
        self.logger.info(
            f"Compressed {item.name} at {level.value}: {result.original_size} -> "
            f"{result.compressed_size} bytes ({result.reduction_percent}%)"
        )
        return result

    def compressed_name(self, filename: str) -> str:
        return f"{pdf_tools.stem(filename)}_compressed.pdf"

    def decrypt(self, item: Optional[NamedFile], password: str) -> NamedFile:
        item = self._check_pdf(item, "Please select a PDF file to unlock.")
        content = pdf_tools.decrypt_pdf(item.content, password)
        return NamedFile(name=f"{pdf_tools.stem(item.name)}_unlocked.pdf", content=content)

    def pdf_to_images(self, item: Optional[NamedFile]) -> NamedFile:
        item = self._check_pdf(item, "Please select a PDF file to convert.")
        images = pdf_tools.extract_images(item.content)
        self.logger.info(f"Extracted {len(images)} images from {item.name}")
        return NamedFile(
            name=f"{pdf_tools.stem(item.name)}_images.zip",
            content=pdf_tools.build_zip(images),
        )

    def images_to_pdf(
        self,
        items: Sequence[NamedFile],
        options: ImageToPdfOptions,
        temp_keys: Sequence[str] = (),
    ) -> NamedFile:
        """
        Convert direct uploads followed by assembled uploads into one PDF

        Args:
            items: Images uploaded with the request
            options: Page layout and quality
            temp_keys: Keys of chunked uploads to include after ``items``

        Returns:
            NamedFile ``images.pdf``
        """
        images: List[NamedFile] = list(items)
        for key in temp_keys:
            name, content = self.upload_service.read(key)
            images.append(NamedFile(name=name, content=content))

        if len(images) > self.max_image_files:
            raise ValidationFailure(f"Too many files selected (max {self.max_image_files})")
        if sum(i.size for i in images) > self.max_total_upload_bytes:
            raise PayloadTooLargeError("Selected files exceed total size limit (1 GB)")

        content = pdf_tools.images_to_pdf(images, options)
        for key in temp_keys:
            self.upload_service.discard(key)

        self.logger.info(f"Converted {len(images)} images to PDF ({len(content)} bytes)")
        return NamedFile(name="images.pdf", content=content)

    def info(self, item: Optional[NamedFile]) -> PdfInfoResponse:
        item = self._check_pdf(item, "Please select a PDF file.")
        page_count, encrypted, title, author = pdf_tools.pdf_info(item.content)
        return PdfInfoResponse(
            filename=item.name,
            size=item.size,
            page_count=page_count,
            encrypted=encrypted,
            title=title,
            author=author,
        )

    def compress_image(
        self, item: Optional[NamedFile], options: ImageCompressionOptions
    ) -> ImageCompressionResult:
        if item is None:
            raise ValidationFailure("Choose an image to compress")
        result = image_tools.compress_image(item.content, item.name, options)
        self.logger.info(
            f"Compressed image {item.name}: {result.original_size} -> {result.compressed_size} bytes"
        )
        return result
