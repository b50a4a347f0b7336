from __future__ import annotations

from io import BytesIO
from typing import Literal
from zipfile import BadZipFile, ZipFile

DocumentKind = Literal["pdf", "docx", "unknown"]

PDF_CONTENT_TYPE = "application/pdf"
DOCX_CONTENT_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"

PDF_MAGIC = b"%PDF-"
ZIP_MAGICS = (b"PK\x03\x04", b"PK\x05\x06", b"PK\x07\x08")


def _normalize_content_type(content_type: str | None) -> str:
    return (content_type or "").split(";")[0].strip().lower()


def extension_from_filename(filename: str | None) -> str:
    name = (filename or "").strip()
    if "." not in name:
        return ""
    return name.rsplit(".", 1)[-1].lower()[:20]


def _is_zip_payload(content: bytes) -> bool:
    return any(content.startswith(prefix) for prefix in ZIP_MAGICS)


def _zip_has_paths(content: bytes, prefixes: tuple[str, ...]) -> bool:
    try:
        with ZipFile(BytesIO(content)) as archive:
            names = archive.namelist()
    except (BadZipFile, OSError):
        return False
    return any(any(name.startswith(prefix) for prefix in prefixes) for name in names)


def declared_kind(filename: str | None, content_type: str | None) -> DocumentKind:
    """What the client says the upload is, from content type then extension."""
    normalized = _normalize_content_type(content_type)
    if normalized == PDF_CONTENT_TYPE:
        return "pdf"
    if normalized == DOCX_CONTENT_TYPE:
        return "docx"
    ext = extension_from_filename(filename)
    if ext == "pdf":
        return "pdf"
    if ext in {"docx", "doc"}:
        return "docx"
    return "unknown"


def sniff_kind(content: bytes) -> DocumentKind:
    if content.startswith(PDF_MAGIC):
        return "pdf"
    if _is_zip_payload(content) and _zip_has_paths(content, ("word/",)):
        return "docx"
    return "unknown"
