from __future__ import annotations

import logging

from ats_analyzer.ai.types import AIClient
from ats_analyzer.parsing.analysis_parser import parse_analysis, reply_body
from ats_analyzer.schemas.analysis import AnalysisMetadata, AnalysisRequest, AnalysisResponse
from ats_analyzer.services.analysis_client import request_analysis
from ats_analyzer.services.analysis_view import build_analysis_view
from ats_analyzer.services.pdf_extractor import ExtractedText, PdfTextExtractor

logger = logging.getLogger(__name__)


async def analyze_resume(
    request: AnalysisRequest,
    client: AIClient,
    *,
    timeout_s: float,
) -> AnalysisResponse:
    reply = await request_analysis(request, client, timeout_s=timeout_s)

    structured = parse_analysis(reply_body(reply.content))

    return AnalysisResponse(
        raw_analysis=reply.content,
        structured_analysis=structured,
        display=build_analysis_view(structured),
        metadata=AnalysisMetadata(
            processing_time=reply.processing_time_ms,
            text_length=reply.text_length,
            industry=request.industry,
            experience_level=request.experience_level,
        ),
    )


async def extract_resume_text(
    extractor: PdfTextExtractor,
    content: bytes,
    *,
    filename: str,
    content_type: str | None,
) -> ExtractedText:
    logger.info("resume_upload_received file_size=%s content_type=%s", len(content), content_type)
    return await extractor.extract(content, filename=filename, content_type=content_type)
