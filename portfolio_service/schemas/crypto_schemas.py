# schemas/crypto_schemas.py

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class MediaKind(str, Enum):
    """File flavours offered by the file-secure tools; all share one envelope"""

    FILE = "file"
    IMAGE = "image"
    AUDIO = "audio"
    VIDEO = "video"
    PDF = "pdf"


class TextCryptoRequest(BaseModel):
    text: str = Field("", description="Plain text or base64 ciphertext")
    passphrase: str = Field("", description="Passphrase")


class TextCryptoResponse(BaseModel):
    result: str = Field(..., description="Ciphertext or recovered plain text")


class CryptoFileResult(BaseModel):
    """Output of a file encryption or decryption"""

    filename: str = Field(..., description="Download name")
    content: bytes = Field(..., description="Output bytes")
    media: MediaKind = MediaKind.FILE
    is_pdf: Optional[bool] = Field(
        None, description="For PDF decryption, whether the output starts with %PDF"
    )
