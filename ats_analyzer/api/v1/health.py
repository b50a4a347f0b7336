from fastapi import APIRouter, Depends

from ats_analyzer.api.dependencies import get_pdf_extractor
from ats_analyzer.services.pdf_extractor import PdfTextExtractor

router = APIRouter()

@router.get("/health", summary="Health Check", description="Check the health status of the application.")
async def health_check(extractor: PdfTextExtractor = Depends(get_pdf_extractor)):
    return {"status": "healthy", "pdf_engine": "ready" if extractor.engine.ready else "not_ready"}
