"""PDF résumé text extraction on top of pypdf.

``PdfEngineHandle`` owns the one-time setup of the PDF engine. A failed setup
is remembered and reported as ``ExtractorUnavailableError`` until ``reset()``
is called, so callers can tell "retry after reload" apart from a bad file.
"""

from __future__ import annotations

import asyncio
import logging
import re
import threading
from dataclasses import dataclass
from io import BytesIO
from typing import Any

from fastapi import status

from ats_analyzer.core.timeouts import with_timeout
from ats_analyzer.services import file_security

logger = logging.getLogger(__name__)

MSG_PASSWORD = "Este PDF está protegido. Por favor, remova a senha e tente novamente."
MSG_CORRUPT = "O arquivo PDF está corrompido. Por favor, tente outro arquivo."
MSG_DOCX = "Por favor, converta o arquivo DOCX para PDF antes de enviar."
MSG_UNSUPPORTED = "Formato não suportado. Por favor, envie um arquivo PDF."
MSG_ENGINE = (
    "Falha ao inicializar o processador de PDF. "
    "Por favor, recarregue a página e tente novamente."
)

_HORIZONTAL_WS_RE = re.compile(r"[^\S\r\n]+")
_EXCESS_BREAKS_RE = re.compile(r"\n{3,}")


class ExtractionError(ValueError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "extraction_failed"


class PasswordProtectedError(ExtractionError):
    code = "password_protected"

    def __init__(self, message: str = MSG_PASSWORD):
        super().__init__(message)


class CorruptDocumentError(ExtractionError):
    code = "corrupt_document"

    def __init__(self, message: str = MSG_CORRUPT):
        super().__init__(message)


class UnsupportedDocumentError(ExtractionError):
    code = "unsupported_format"

    def __init__(self, message: str = MSG_UNSUPPORTED):
        super().__init__(message)


class UploadTooLargeError(ExtractionError):
    status_code = 413
    code = "file_too_large"

    def __init__(self, max_bytes: int):
        megabytes = max_bytes / (1024 * 1024)
        super().__init__(
            f"O arquivo é muito grande. Por favor, envie um arquivo de até {megabytes:g}MB."
        )
        self.max_bytes = max_bytes


class ExtractorUnavailableError(ExtractionError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    code = "engine_unavailable"

    def __init__(self, message: str = MSG_ENGINE):
        super().__init__(message)


@dataclass(frozen=True)
class ExtractedText:
    text: str
    pages: int


class PdfEngineHandle:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._reader_cls: Any = None
        self._failure: Exception | None = None

    @property
    def ready(self) -> bool:
        return self._reader_cls is not None

    def ensure_ready(self) -> Any:
        with self._lock:
            if self._reader_cls is not None:
                return self._reader_cls
            if self._failure is not None:
                raise ExtractorUnavailableError() from self._failure
            try:
                self._reader_cls = self._load_reader()
            except Exception as exc:
                self._failure = exc
                logger.error("pdf_engine_init_failed: %s", exc)
                raise ExtractorUnavailableError() from exc
            logger.info("pdf_engine_ready")
            return self._reader_cls

    def reset(self) -> None:
        with self._lock:
            self._reader_cls = None
            self._failure = None

    def _load_reader(self) -> Any:
        from pypdf import PdfReader

        return PdfReader


def _page_lines(page: Any) -> list[str]:
    """Group text fragments into lines by vertical position, top to bottom, left to right."""
    rows: dict[int, list[tuple[float, str]]] = {}

    def visit(text: str, cm: list[float], tm: list[float], _font: Any, _size: Any) -> None:
        if not text or not text.strip():
            return
        x = tm[4] * cm[0] + tm[5] * cm[2] + cm[4]
        y = tm[4] * cm[1] + tm[5] * cm[3] + cm[5]
        rows.setdefault(round(y), []).append((x, text.strip()))

    plain = page.extract_text(visitor_text=visit) or ""
    if not rows:
        return [line for line in plain.splitlines() if line.strip()]

    lines: list[str] = []
    for _y, fragments in sorted(rows.items(), key=lambda item: item[0], reverse=True):
        fragments.sort(key=lambda fragment: fragment[0])
        lines.append(" ".join(text for _x, text in fragments))
    return lines


def clean_extracted_text(text: str) -> str:
    collapsed = _HORIZONTAL_WS_RE.sub(" ", text or "")
    lines = [line.strip() for line in collapsed.split("\n")]
    return _EXCESS_BREAKS_RE.sub("\n\n", "\n".join(lines)).strip()


class PdfTextExtractor:
    def __init__(
        self,
        engine: PdfEngineHandle,
        *,
        load_timeout_s: float = 60.0,
        page_timeout_s: float = 30.0,
    ) -> None:
        self._engine = engine
        self._load_timeout_s = load_timeout_s
        self._page_timeout_s = page_timeout_s

    @property
    def engine(self) -> PdfEngineHandle:
        return self._engine

    def _check_format(self, content: bytes, filename: str, content_type: str | None) -> None:
        declared = file_security.declared_kind(filename, content_type)
        sniffed = file_security.sniff_kind(content)
        if declared == "docx" or sniffed == "docx":
            raise UnsupportedDocumentError(MSG_DOCX)
        if declared != "pdf":
            raise UnsupportedDocumentError()
        if sniffed != "pdf":
            raise CorruptDocumentError()

    def _open(self, content: bytes) -> Any:
        reader_cls = self._engine.ensure_ready()
        from pypdf.errors import PdfReadError, PyPdfError

        try:
            reader = reader_cls(BytesIO(content))
        except PdfReadError as exc:
            if "password" in str(exc).lower() or "encrypt" in str(exc).lower():
                raise PasswordProtectedError() from exc
            raise CorruptDocumentError() from exc
        except (PyPdfError, ValueError, TypeError, KeyError, OSError) as exc:
            raise CorruptDocumentError() from exc

        if reader.is_encrypted:
            try:
                unlocked = reader.decrypt("")
            except (PdfReadError, NotImplementedError) as exc:
                raise PasswordProtectedError() from exc
            except PyPdfError as exc:
                logger.warning("pdf_decrypt_failed error=%s", type(exc).__name__)
                raise CorruptDocumentError() from exc
            if not unlocked:
                raise PasswordProtectedError()
        return reader

    async def extract(
        self,
        content: bytes,
        *,
        filename: str = "curriculo.pdf",
        content_type: str | None = file_security.PDF_CONTENT_TYPE,
    ) -> ExtractedText:
        self._check_format(content, filename, content_type)

        reader = await with_timeout(
            asyncio.to_thread(self._open, content),
            self._load_timeout_s,
            "carregamento do PDF",
        )
        from pypdf.errors import FileNotDecryptedError, PyPdfError

        try:
            page_count = len(reader.pages)
        except FileNotDecryptedError as exc:
            raise PasswordProtectedError() from exc
        except (PyPdfError, ValueError, KeyError) as exc:
            raise CorruptDocumentError() from exc

        page_texts: list[str] = []
        for index in range(page_count):
            try:
                page = reader.pages[index]
                lines = await with_timeout(
                    asyncio.to_thread(_page_lines, page),
                    self._page_timeout_s,
                    f"leitura da página {index + 1}",
                )
            except FileNotDecryptedError as exc:
                raise PasswordProtectedError() from exc
            except (PyPdfError, ValueError, KeyError) as exc:
                raise CorruptDocumentError() from exc
            page_text = "\n".join(lines)
            logger.debug("pdf_page_extracted page=%s/%s chars=%s", index + 1, page_count, len(page_text))
            page_texts.append(page_text)

        text = clean_extracted_text("\n\n".join(page_texts))
        logger.info("pdf_extracted pages=%s chars=%s", page_count, len(text))
        return ExtractedText(text=text, pages=page_count)
