# utils/responses.py

from typing import Dict, Optional
from urllib.parse import quote

from fastapi.responses import Response


def attachment_response(
    content: bytes,
    filename: str,
    media_type: str = "application/octet-stream",
    headers: Optional[Dict[str, str]] = None,
) -> Response:
    """Build a download response, encoding non-ASCII file names per RFC 5987"""
    ascii_name = filename.encode("ascii", "ignore").decode("ascii") or "download"
    disposition = (
        f"attachment; filename=\"{ascii_name}\"; filename*=UTF-8''{quote(filename)}"
    )
    all_headers = {"Content-Disposition": disposition}
    if headers:
        all_headers.update(headers)
    return Response(content=content, media_type=media_type, headers=all_headers)
