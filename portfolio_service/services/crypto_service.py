# services/crypto_service.py

from typing import Optional

from ..core.config import settings
from ..core import file_envelope, text_cipher
from ..schemas.crypto_schemas import CryptoFileResult, MediaKind
from ..utils.exceptions import ValidationFailure
from common.logger import LoggerFactory, LoggerType, LogLevel

_MISSING_FILE_MESSAGES = {
    MediaKind.FILE: "Choose a file to encrypt",
    MediaKind.IMAGE: "Choose an image to encrypt",
    MediaKind.AUDIO: "Choose an audio file to encrypt",
    MediaKind.VIDEO: "Choose a video to encrypt",
    MediaKind.PDF: "Choose a PDF to encrypt",
}

_CONTENT_TYPE_PREFIXES = {
    MediaKind.IMAGE: "image/",
    MediaKind.AUDIO: "audio/",
    MediaKind.VIDEO: "video/",
}


class CryptoService:
    """File and text encryption tools"""

    def __init__(self, iterations: int = file_envelope.DEFAULT_ITERATIONS):
        self.iterations = iterations
        self.logger = LoggerFactory.get_logger(
            name="crypto-service",
            logger_type=LoggerType.STANDARD,
            level=LogLevel.INFO,
            file_level=LogLevel.DEBUG,
            log_file=f"{settings.log_file_path}crypto_service.log",
        )

    def encrypt_file(
        self,
        data: Optional[bytes],
        filename: Optional[str],
        passphrase: str,
        media: MediaKind = MediaKind.FILE,
        content_type: Optional[str] = None,
    ) -> CryptoFileResult:
        """
        Encrypt an uploaded file into the envelope format

        Args:
            data: File contents
            filename: Original file name
            passphrase: User passphrase
            media: Which file-secure tool is in use
            content_type: Upload content type, checked for media tools

        Returns:
            CryptoFileResult named ``<filename>.enc``
        """
        if not data or not filename:
            raise ValidationFailure(_MISSING_FILE_MESSAGES[media])
        if not passphrase:
            raise ValidationFailure("Enter a passphrase")

        self._check_media(data, filename, media, content_type)

        blob = file_envelope.encrypt_file(data, filename, passphrase, self.iterations)
        self.logger.info(f"Encrypted {media.value} ({len(data)} bytes)")
        return CryptoFileResult(filename=f"{filename}.enc", content=blob, media=media)

    def decrypt_file(
        self,
        blob: Optional[bytes],
        passphrase: str,
        media: MediaKind = MediaKind.FILE,
    ) -> CryptoFileResult:
        """
        Decrypt an envelope back to the original file

        Returns:
            CryptoFileResult named after the embedded filename
        """
        if not blob:
            raise ValidationFailure("Choose an encrypted .enc file")
        if not passphrase:
            raise ValidationFailure("Enter the passphrase")

        filename, data = file_envelope.decrypt_file(blob, passphrase, self.iterations)

        is_pdf = None
        if media == MediaKind.PDF:
            is_pdf = file_envelope.looks_like_pdf(data)
            if not is_pdf:
                self.logger.warning(f"Decrypted {filename} does not start with %PDF")

        self.logger.info(f"Decrypted {media.value} {filename} ({len(data)} bytes)")
        return CryptoFileResult(filename=filename, content=data, media=media, is_pdf=is_pdf)

    def encrypt_text(self, text: str, passphrase: str) -> str:
        return text_cipher.encrypt_text(text, passphrase)

    def decrypt_text(self, ciphertext: str, passphrase: str) -> str:
        return text_cipher.decrypt_text(ciphertext, passphrase)

    def _check_media(
        self,
        data: bytes,
        filename: str,
        media: MediaKind,
        content_type: Optional[str],
    ) -> None:
        if media == MediaKind.PDF:
            if not (file_envelope.looks_like_pdf(data) or filename.lower().endswith(".pdf")):
                raise ValidationFailure("Selected file is not a PDF")
            return

        prefix = _CONTENT_TYPE_PREFIXES.get(media)
        if prefix and content_type and not content_type.startswith(prefix):
            raise ValidationFailure(f"Selected file is not a {media.value} file")
