from contextlib import asynccontextmanager
import logging

from ats_analyzer.api.dependencies import get_pdf_extractor
from ats_analyzer.services.pdf_extractor import ExtractorUnavailableError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app):
    extractor = get_pdf_extractor()
    try:
        extractor.engine.ensure_ready()
    except ExtractorUnavailableError:
        # Uploads answer 503 until the process is restarted or the engine reset.
        logger.warning("pdf_engine_unavailable_at_startup")
    app.state.pdf_extractor = extractor
    yield
