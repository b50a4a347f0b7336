from __future__ import annotations

from functools import lru_cache

from ats_analyzer.ai.factory import get_ai_client
from ats_analyzer.ai.types import AIClient
from ats_analyzer.core.config import settings
from ats_analyzer.services.pdf_extractor import PdfEngineHandle, PdfTextExtractor


@lru_cache(maxsize=1)
def get_pdf_extractor() -> PdfTextExtractor:
    return PdfTextExtractor(
        PdfEngineHandle(),
        load_timeout_s=settings.pdf_load_timeout_s,
        page_timeout_s=settings.pdf_page_timeout_s,
    )


def get_analysis_client() -> AIClient:
    return get_ai_client()
