# routers/image_router.py

import asyncio
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile

from ..schemas.pdf_schemas import ImageCompressionOptions, ImageFormat
from ..services.pdf_service import PdfService
from ..utils.dependencies import get_pdf_service
from ..utils.exceptions import PortfolioServiceError
from ..utils.http_errors import to_http_exception
from ..utils.responses import attachment_response
from .pdf_router import to_named_file

router = APIRouter(prefix="/api/image", tags=["image"])


@router.post("/compress")
async def compress_image(
    file: Optional[UploadFile] = File(None),
    quality: int = Form(80),
    width: Optional[int] = Form(None),
    height: Optional[int] = Form(None),
    format: ImageFormat = Form(ImageFormat.JPEG),
    pdf_service: PdfService = Depends(get_pdf_service),
):
    """
    Compress an image

    - **quality**: 1-100
    - **width** / **height**: optional bounds, aspect ratio preserved
    - **format**: ``jpeg``, ``png``, ``webp`` or ``original``
    """
    try:
        options = ImageCompressionOptions(
            quality=quality, max_width=width, max_height=height, output_format=format
        )
    except ValueError as e:
        raise to_http_exception(PortfolioServiceError(str(e)))

    try:
        item = await to_named_file(file)
        result = await asyncio.to_thread(pdf_service.compress_image, item, options)
    except PortfolioServiceError as e:
        raise to_http_exception(e)

    headers = {
        "X-Original-Size": str(result.original_size),
        "X-Compressed-Size": str(result.compressed_size),
        "X-Image-Width": str(result.width),
        "X-Image-Height": str(result.height),
    }
    return attachment_response(result.content, result.filename, result.media_type, headers)
