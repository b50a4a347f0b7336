from fastapi import APIRouter, Depends, File, Form, Request, UploadFile
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from ats_analyzer.ai.types import AIClient
from ats_analyzer.api.dependencies import get_analysis_client, get_pdf_extractor
from ats_analyzer.core.config import settings
from ats_analyzer.core.rate_limit import rate_limit
from ats_analyzer.schemas.analysis import AnalysisOptions, AnalysisRequest, AnalysisResponse, ExtractTextResponse
from ats_analyzer.services.analysis_service import analyze_resume, extract_resume_text
from ats_analyzer.services.pdf_extractor import PdfTextExtractor, UploadTooLargeError

router = APIRouter()

UPLOAD_CHUNK_BYTES = 1024 * 64


async def _read_upload(file: UploadFile, max_bytes: int) -> bytes:
    chunks: list[bytes] = []
    total = 0
    while True:
        chunk = await file.read(UPLOAD_CHUNK_BYTES)
        if not chunk:
            break
        total += len(chunk)
        if total > max_bytes:
            raise UploadTooLargeError(max_bytes)
        chunks.append(chunk)
    return b"".join(chunks)


@router.post("/analyze", response_model=AnalysisResponse)
@rate_limit()
async def analyze(
    request: Request,
    payload: AnalysisRequest,
    client: AIClient = Depends(get_analysis_client),
):
    _ = request
    return await analyze_resume(payload, client, timeout_s=settings.analysis_timeout_s)


@router.post("/extract-text", response_model=ExtractTextResponse)
async def extract_text(
    request: Request,
    file: UploadFile = File(...),
    extractor: PdfTextExtractor = Depends(get_pdf_extractor),
):
    _ = request
    filename = file.filename or "curriculo.pdf"
    content = await _read_upload(file, settings.max_upload_bytes)
    extracted = await extract_resume_text(
        extractor,
        content,
        filename=filename,
        content_type=file.content_type,
    )
    return ExtractTextResponse(
        filename=filename,
        text=extracted.text,
        characters=len(extracted.text),
        pages=extracted.pages,
    )


@router.post("/analyze-file", response_model=AnalysisResponse)
@rate_limit()
async def analyze_file(
    request: Request,
    file: UploadFile = File(...),
    industry: str | None = Form(default=None),
    experience_level: str | None = Form(default=None, alias="experienceLevel"),
    job_description: str | None = Form(default=None, alias="jobDescription"),
    extractor: PdfTextExtractor = Depends(get_pdf_extractor),
    client: AIClient = Depends(get_analysis_client),
):
    _ = request
    try:
        options = AnalysisOptions(
            industry=industry,
            experience_level=experience_level,
            job_description=job_description or None,
        )
    except ValidationError as exc:
        raise RequestValidationError(exc.errors()) from exc

    filename = file.filename or "curriculo.pdf"
    content = await _read_upload(file, settings.max_upload_bytes)
    extracted = await extract_resume_text(
        extractor,
        content,
        filename=filename,
        content_type=file.content_type,
    )

    try:
        payload = AnalysisRequest(text=extracted.text, **options.model_dump())
    except ValidationError as exc:
        raise RequestValidationError(exc.errors()) from exc

    return await analyze_resume(payload, client, timeout_s=settings.analysis_timeout_s)
