# routers/pdf_router.py

import asyncio
from typing import List, Optional
from urllib.parse import quote

from fastapi import APIRouter, Depends, File, Form, UploadFile

from ..core.config import settings
from ..schemas.pdf_schemas import (
    AssembleUploadResponse,
    CompressionLevel,
    ImageToPdfOptions,
    NamedFile,
    Orientation,
    PageSize,
    PdfInfoResponse,
    SplitMode,
    UploadChunkResponse,
)
from ..services.pdf_service import PdfService
from ..services.upload_service import UploadService
from ..utils.dependencies import get_pdf_service, get_upload_service
from ..utils.exceptions import PortfolioServiceError
from ..utils.http_errors import to_http_exception
from ..utils.responses import attachment_response
from common.logger import LoggerFactory, LoggerType, LogLevel

router = APIRouter(prefix="/tools/pdf-converter", tags=["pdf"])

logger = LoggerFactory.get_logger(
    name="pdf-router",
    logger_type=LoggerType.STANDARD,
    level=LogLevel.INFO,
    file_level=LogLevel.DEBUG,
    log_file=f"{settings.log_file_path}pdf_router.log",
)


async def to_named_file(upload: Optional[UploadFile]) -> Optional[NamedFile]:
    if upload is None:
        return None
    return NamedFile(name=upload.filename or "upload", content=await upload.read())


@router.post("/merge")
async def merge_pdfs(
    files: Optional[List[UploadFile]] = File(None),
    pdf_service: PdfService = Depends(get_pdf_service),
):
    """Merge PDFs in upload order into ``merged.pdf``"""
    items = [await to_named_file(f) for f in files or []]
    try:
        result = await asyncio.to_thread(pdf_service.merge, items)
    except PortfolioServiceError as e:
        raise to_http_exception(e)

    headers = {"X-Page-Count": str(result.page_count)}
    if result.skipped_files:
        # header values must stay latin-1
        headers["X-Skipped-Files"] = ",".join(
            quote(name) for name in result.skipped_files
        )
    return attachment_response(result.content, "merged.pdf", "application/pdf", headers)


@router.post("/split")
async def split_pdf(
    file: Optional[UploadFile] = File(None),
    mode: SplitMode = Form(SplitMode.PAGES),
    ranges: Optional[str] = Form(None),
    every: Optional[int] = Form(None),
    pdf_service: PdfService = Depends(get_pdf_service),
):
    """
    Split a PDF into a ZIP of parts

    - **mode**: ``pages``, ``ranges`` (e.g. "1-3,5,7-10") or ``every`` (N pages)
    """
    try:
        item = await to_named_file(file)
        archive = await asyncio.to_thread(pdf_service.split, item, mode, ranges, every)
    except PortfolioServiceError as e:
        raise to_http_exception(e)
    return attachment_response(archive.content, archive.name, "application/zip")


@router.post("/compress")
async def compress_pdf(
    file: Optional[UploadFile] = File(None),
    level: CompressionLevel = Form(CompressionLevel.MEDIUM),
    pdf_service: PdfService = Depends(get_pdf_service),
):
    item = await to_named_file(file)
    try:
        result = await asyncio.to_thread(pdf_service.compress, item, level)
    except PortfolioServiceError as e:
        raise to_http_exception(e)

    headers = {
        "X-Original-Size": str(result.original_size),
        "X-Compressed-Size": str(result.compressed_size),
        "X-Compression-Ratio": str(result.reduction_percent),
    }
    return attachment_response(
        result.content, pdf_service.compressed_name(item.name), "application/pdf", headers
    )


@router.post("/decrypt")
async def decrypt_pdf(
    file: Optional[UploadFile] = File(None),
    password: str = Form(""),
    pdf_service: PdfService = Depends(get_pdf_service),
):
    """Remove the password from a protected PDF"""
    try:
        item = await to_named_file(file)
        result = await asyncio.to_thread(pdf_service.decrypt, item, password)
    except PortfolioServiceError as e:
        raise to_http_exception(e)
    return attachment_response(result.content, result.name, "application/pdf")


@router.post("/pdf-to-images")
async def pdf_to_images(
    file: Optional[UploadFile] = File(None),
    pdf_service: PdfService = Depends(get_pdf_service),
):
    """Extract embedded images as a ZIP"""
    try:
        item = await to_named_file(file)
        archive = await asyncio.to_thread(pdf_service.pdf_to_images, item)
    except PortfolioServiceError as e:
        raise to_http_exception(e)
    return attachment_response(archive.content, archive.name, "application/zip")


@router.post("/image-to-pdf")
async def image_to_pdf(
    files: Optional[List[UploadFile]] = File(None),
    tempKeys: Optional[List[str]] = Form(None),
    pageSize: PageSize = Form(PageSize.AUTO),
    orientation: Orientation = Form(Orientation.PORTRAIT),
    margin: float = Form(0),
    quality: int = Form(80),
    pdf_service: PdfService = Depends(get_pdf_service),
):
    """
    Convert images to a PDF

    Images may be sent directly as ``files`` or referenced through ``tempKeys``
    returned by ``assemble-upload``.
    """
    try:
        options = ImageToPdfOptions(
            page_size=pageSize, orientation=orientation, margin=margin, quality=quality
        )
    except ValueError as e:
        raise to_http_exception(PortfolioServiceError(str(e)))

    items = [await to_named_file(f) for f in files or []]
    try:
        result = await asyncio.to_thread(
            pdf_service.images_to_pdf, items, options, temp_keys=tempKeys or []
        )
    except PortfolioServiceError as e:
        raise to_http_exception(e)
    return attachment_response(result.content, result.name, "application/pdf")


@router.post("/upload-chunk", response_model=UploadChunkResponse)
async def upload_chunk(
    uploadId: str = Form(...),
    chunkIndex: int = Form(...),
    chunk: UploadFile = File(...),
    upload_service: UploadService = Depends(get_upload_service),
) -> UploadChunkResponse:
    try:
        data = await chunk.read()
        return await asyncio.to_thread(upload_service.save_chunk, uploadId, chunkIndex, data)
    except PortfolioServiceError as e:
        raise to_http_exception(e)


@router.post("/assemble-upload", response_model=AssembleUploadResponse)
async def assemble_upload(
    uploadId: str = Form(...),
    filename: str = Form("upload"),
    upload_service: UploadService = Depends(get_upload_service),
) -> AssembleUploadResponse:
    try:
        return await asyncio.to_thread(upload_service.assemble, uploadId, filename)
    except PortfolioServiceError as e:
        raise to_http_exception(e)


@router.post("/info", response_model=PdfInfoResponse)
async def pdf_info(
    file: Optional[UploadFile] = File(None),
    pdf_service: PdfService = Depends(get_pdf_service),
) -> PdfInfoResponse:
    try:
        item = await to_named_file(file)
        return await asyncio.to_thread(pdf_service.info, item)
    except PortfolioServiceError as e:
        raise to_http_exception(e)
