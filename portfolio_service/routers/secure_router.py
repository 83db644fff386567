# routers/secure_router.py

import asyncio
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile

from ..core.config import settings
from ..schemas.crypto_schemas import MediaKind, TextCryptoRequest, TextCryptoResponse
from ..services.crypto_service import CryptoService
from ..utils.dependencies import get_crypto_service
from ..utils.exceptions import PortfolioServiceError
from ..utils.http_errors import to_http_exception
from ..utils.responses import attachment_response
from common.logger import LoggerFactory, LoggerType, LogLevel

router = APIRouter(prefix="/tools", tags=["secure"])

logger = LoggerFactory.get_logger(
    name="secure-router",
    logger_type=LoggerType.STANDARD,
    level=LogLevel.INFO,
    file_level=LogLevel.DEBUG,
    log_file=f"{settings.log_file_path}secure_router.log",
)


async def _read_upload(file: Optional[UploadFile]) -> Optional[bytes]:
    if file is None:
        return None
    return await file.read()


@router.post("/file-secure/encrypt")
async def encrypt_file(
    file: Optional[UploadFile] = File(None),
    passphrase: str = Form(""),
    media: MediaKind = Form(MediaKind.FILE),
    crypto_service: CryptoService = Depends(get_crypto_service),
):
    """Encrypt an upload; the response is the ``.enc`` envelope"""
    data = await _read_upload(file)
    try:
        result = await asyncio.to_thread(
            crypto_service.encrypt_file,
            data,
            file.filename if file else None,
            passphrase,
            media=media,
            content_type=file.content_type if file else None,
        )
    except PortfolioServiceError as e:
        raise to_http_exception(e)
    return attachment_response(result.content, result.filename)


@router.post("/file-secure/decrypt")
async def decrypt_file(
    file: Optional[UploadFile] = File(None),
    passphrase: str = Form(""),
    media: MediaKind = Form(MediaKind.FILE),
    crypto_service: CryptoService = Depends(get_crypto_service),
):
    """Decrypt an envelope; the response carries the embedded file name"""
    blob = await _read_upload(file)
    try:
        result = await asyncio.to_thread(
            crypto_service.decrypt_file, blob, passphrase, media=media
        )
    except PortfolioServiceError as e:
        raise to_http_exception(e)

    headers = {}
    media_type = "application/octet-stream"
    if result.is_pdf is not None:
        headers["X-Is-Pdf"] = "true" if result.is_pdf else "false"
        if result.is_pdf:
            media_type = "application/pdf"
    return attachment_response(result.content, result.filename, media_type, headers)


@router.post("/text-secure/encrypt", response_model=TextCryptoResponse)
async def encrypt_text(
    request: TextCryptoRequest,
    crypto_service: CryptoService = Depends(get_crypto_service),
) -> TextCryptoResponse:
    try:
        return TextCryptoResponse(
            result=crypto_service.encrypt_text(request.text, request.passphrase)
        )
    except PortfolioServiceError as e:
        raise to_http_exception(e)


@router.post("/text-secure/decrypt", response_model=TextCryptoResponse)
async def decrypt_text(
    request: TextCryptoRequest,
    crypto_service: CryptoService = Depends(get_crypto_service),
) -> TextCryptoResponse:
    try:
        return TextCryptoResponse(
            result=crypto_service.decrypt_text(request.text, request.passphrase)
        )
    except PortfolioServiceError as e:
        logger.warning(f"Text decryption failed: {e.message}")
        raise to_http_exception(e)
