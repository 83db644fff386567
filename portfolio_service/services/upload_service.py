# services/upload_service.py

import json
import re
import shutil
import uuid
from pathlib import Path
from typing import Tuple

from ..core.config import settings
from ..schemas.pdf_schemas import AssembleUploadResponse, UploadChunkResponse
from ..utils.exceptions import PayloadTooLargeError, UploadError, ValidationFailure
from common.logger import LoggerFactory, LoggerType, LogLevel

_ID_RE = re.compile(r"^[A-Za-z0-9_-]{1,64}$")


def _chunk_index(path: Path) -> int:
    return int(path.name.rsplit("_", 1)[1])


class UploadService:
    """
    Chunked uploads for large files.

    Chunks land under ``<temp_dir>/chunks/<upload_id>/``; assembling joins them
    in index order into ``<temp_dir>/files/<temp_key>`` and returns the key.
    """

    def __init__(self, temp_dir: str, max_upload_bytes: int):
        self.temp_dir = Path(temp_dir)
        self.max_upload_bytes = max_upload_bytes
        self.chunks_dir = self.temp_dir / "chunks"
        self.files_dir = self.temp_dir / "files"
        self.chunks_dir.mkdir(parents=True, exist_ok=True)
        self.files_dir.mkdir(parents=True, exist_ok=True)
        self.logger = LoggerFactory.get_logger(
            name="upload-service",
            logger_type=LoggerType.STANDARD,
            level=LogLevel.INFO,
            file_level=LogLevel.DEBUG,
            log_file=f"{settings.log_file_path}upload_service.log",
        )

    def _check_id(self, value: str, label: str) -> str:
        if not value or not _ID_RE.match(value):
            raise ValidationFailure(f"Invalid {label}")
        return value

    def _upload_size(self, upload_dir: Path) -> int:
        return sum(p.stat().st_size for p in upload_dir.glob("chunk_*"))

    def save_chunk(self, upload_id: str, chunk_index: int, data: bytes) -> UploadChunkResponse:
        """
        Store one chunk of an upload

        Args:
            upload_id: Client chosen upload identifier
            chunk_index: Zero-based chunk position
            data: Chunk bytes

        Returns:
            UploadChunkResponse with bytes received so far
        """
        self._check_id(upload_id, "uploadId")
        if chunk_index < 0:
            raise ValidationFailure("Invalid chunkIndex")

        upload_dir = self.chunks_dir / upload_id
        upload_dir.mkdir(parents=True, exist_ok=True)

        chunk_path = upload_dir / f"chunk_{chunk_index}"
        replaced = chunk_path.stat().st_size if chunk_path.is_file() else 0
        received = self._upload_size(upload_dir) - replaced + len(data)
        if received > self.max_upload_bytes:
            shutil.rmtree(upload_dir, ignore_errors=True)
            raise PayloadTooLargeError("Upload exceeds the maximum allowed size")

        chunk_path.write_bytes(data)
        self.logger.debug(f"Stored chunk {chunk_index} of {upload_id} ({len(data)} bytes)")
        return UploadChunkResponse(
            upload_id=upload_id, chunk_index=chunk_index, received_bytes=received
        )

    def assemble(self, upload_id: str, filename: str) -> AssembleUploadResponse:
        """Join an upload's chunks into a temp file and return its key"""
        self._check_id(upload_id, "uploadId")
        upload_dir = self.chunks_dir / upload_id
        chunks = []
        if upload_dir.is_dir():
            chunks = sorted(upload_dir.glob("chunk_*"), key=_chunk_index)
        if not chunks:
            raise UploadError(f"No chunks received for upload {upload_id}")

        temp_key = uuid.uuid4().hex
        target = self.files_dir / temp_key
        size = 0
        with target.open("wb") as out:
            for chunk in chunks:
                data = chunk.read_bytes()
                size += len(data)
                out.write(data)
        shutil.rmtree(upload_dir, ignore_errors=True)

        name = Path(filename or "upload").name
        (self.files_dir / f"{temp_key}.json").write_text(
            json.dumps({"filename": name, "size": size}), encoding="utf-8"
        )
        self.logger.info(f"Assembled upload {upload_id} into {temp_key} ({size} bytes)")
        return AssembleUploadResponse(temp_key=temp_key, filename=name, size=size)

    def read(self, temp_key: str) -> Tuple[str, bytes]:
        """Return (filename, bytes) of an assembled upload"""
        self._check_id(temp_key, "tempKey")
        target = self.files_dir / temp_key
        meta_path = self.files_dir / f"{temp_key}.json"
        if not target.is_file() or not meta_path.is_file():
            raise UploadError(f"Unknown tempKey: {temp_key}")
        meta = json.loads(meta_path.read_text(encoding="utf-8"))
        return meta["filename"], target.read_bytes()

    def discard(self, temp_key: str) -> None:
        self._check_id(temp_key, "tempKey")
        for path in (self.files_dir / temp_key, self.files_dir / f"{temp_key}.json"):
            if path.exists():
                path.unlink()

    def cleanup(self) -> None:
        """Remove every pending chunk and assembled file"""
        shutil.rmtree(self.temp_dir, ignore_errors=True)
        self.chunks_dir.mkdir(parents=True, exist_ok=True)
        self.files_dir.mkdir(parents=True, exist_ok=True)
