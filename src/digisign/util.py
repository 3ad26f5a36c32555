from __future__ import annotations

import re
from typing import Optional
from urllib.parse import unquote

_SAFE = re.compile(r"[^a-zA-Z0-9._-]+")
_FILENAME_STAR = re.compile(r"filename\*\s*=\s*[^']*'[^']*'([^;]+)", re.IGNORECASE)
_FILENAME = re.compile(r'filename\s*=\s*"?([^";]+)"?', re.IGNORECASE)


def guess_extension(content_type: Optional[str]) -> str:
    if not content_type:
        return "bin"
    ct = content_type.split(";")[0].strip().lower()
    return {
        "application/pdf": "pdf",
        "application/zip": "zip",
        "application/json": "json",
        "application/xml": "xml",
        "text/plain": "txt",
        "text/html": "html",
        "image/png": "png",
        "image/jpeg": "jpg",
    }.get(ct, "bin")


def safe_filename(name: str, max_len: int = 120) -> str:
    cleaned = _SAFE.sub("_", name).strip("._-")
    if not cleaned:
        cleaned = "document"
    return cleaned[:max_len]


def filename_from_disposition(header: Optional[str]) -> Optional[str]:
    """Extract the filename from a Content-Disposition header, RFC 5987 form first."""
    if not header:
        return None
    match = _FILENAME_STAR.search(header)
    if match:
        return unquote(match.group(1).strip())
    match = _FILENAME.search(header)
    if match:
        return match.group(1).strip()
    return None
