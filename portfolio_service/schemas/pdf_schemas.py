# schemas/pdf_schemas.py

from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class SplitMode(str, Enum):
    PAGES = "pages"
    RANGES = "ranges"
    EVERY = "every"


class CompressionLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    MAXIMUM = "maximum"


COMPRESSION_QUALITY: Dict[CompressionLevel, float] = {
    CompressionLevel.LOW: 0.90,
    CompressionLevel.MEDIUM: 0.75,
    CompressionLevel.HIGH: 0.60,
    CompressionLevel.MAXIMUM: 0.45,
}


class PageSize(str, Enum):
    AUTO = "auto"
    A4 = "A4"
    LETTER = "letter"


class Orientation(str, Enum):
    PORTRAIT = "portrait"
    LANDSCAPE = "landscape"


class ImageFormat(str, Enum):
    JPEG = "jpeg"
    PNG = "png"
    WEBP = "webp"
    ORIGINAL = "original"


class NamedFile(BaseModel):
    """An in-memory output file"""

    name: str
    content: bytes

    @property
    def size(self) -> int:
        return len(self.content)


class SplitResult(BaseModel):
    files: List[NamedFile]
    page_count: int
    message: str


class MergeResult(BaseModel):
    content: bytes
    page_count: int
    merged_files: List[str] = Field(default_factory=list)
    skipped_files: List[str] = Field(default_factory=list)


class CompressionResult(BaseModel):
    content: bytes
    level: CompressionLevel
    original_size: int
    compressed_size: int
    reduction_percent: float = Field(..., description="Never negative")


class ImageToPdfOptions(BaseModel):
    page_size: PageSize = PageSize.AUTO
    orientation: Orientation = Orientation.PORTRAIT
    margin: float = Field(0, ge=0, le=200, description="Margin in points")
    quality: int = Field(80, ge=1, le=100, description="JPEG quality")


class ImageCompressionOptions(BaseModel):
    quality: int = Field(80, ge=1, le=100)
    max_width: Optional[int] = Field(None, ge=1)
    max_height: Optional[int] = Field(None, ge=1)
    output_format: ImageFormat = ImageFormat.JPEG


class ImageCompressionResult(BaseModel):
    filename: str
    content: bytes
    media_type: str
    width: int
    height: int
    original_size: int
    compressed_size: int


class PdfInfoResponse(BaseModel):
    filename: Optional[str] = None
    size: int
    page_count: int
    encrypted: bool
    title: Optional[str] = None
    author: Optional[str] = None


class UploadChunkResponse(BaseModel):
    upload_id: str
    chunk_index: int
    received_bytes: int


class AssembleUploadResponse(BaseModel):
    temp_key: str
    filename: str
    size: int
