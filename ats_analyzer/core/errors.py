from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ats_analyzer.core.timeouts import OperationTimeoutError
from ats_analyzer.services.analysis_client import AnalysisRequestError
from ats_analyzer.services.pdf_extractor import ExtractionError

logger = logging.getLogger(__name__)

_FIELD_MESSAGES = {
    ("text", "string_too_short"): "O currículo deve ter pelo menos 500 caracteres",
    ("text", "string_too_long"): "O currículo deve ter no máximo 10000 caracteres",
    ("text", "missing"): "O texto do currículo é obrigatório",
    ("jobDescription", "string_too_long"): "A descrição da vaga deve ter no máximo 1000 caracteres",
    ("industry", "literal_error"): "Área inválida",
    ("experienceLevel", "literal_error"): "Nível de experiência inválido",
}


def _field_name(loc: tuple[Any, ...] | list[Any]) -> str:
    parts = [str(part) for part in loc if part not in {"body", "form"}]
    return ".".join(parts) or "body"


def field_errors(errors: list[dict[str, Any]]) -> list[dict[str, str]]:
    items: list[dict[str, str]] = []
    for error in errors:
        field = _field_name(error.get("loc", ()))
        message = _FIELD_MESSAGES.get((field, error.get("type", "")), error.get("msg", "Valor inválido"))
        items.append({"field": field, "message": message})
    return items


async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = field_errors(list(exc.errors()))
    logger.info("request_validation_failed path=%s fields=%s", request.url.path, [d["field"] for d in details])
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Dados inválidos", "details": details},
    )


async def _analysis_error_handler(request: Request, exc: AnalysisRequestError) -> JSONResponse:
    logger.warning(
        "analysis_failed path=%s status=%s upstream_status=%s",
        request.url.path,
        exc.status_code,
        exc.upstream_status,
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": str(exc),
            "details": {
                "message": "Falha no serviço de análise",
                "upstreamStatus": exc.upstream_status,
            },
        },
    )


async def _extraction_error_handler(request: Request, exc: ExtractionError) -> JSONResponse:
    logger.info("extraction_failed path=%s code=%s", request.url.path, exc.code)
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc), "details": {"code": exc.code}},
    )


async def _timeout_error_handler(request: Request, exc: OperationTimeoutError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc), "details": {"operation": exc.operation, "seconds": exc.seconds}},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.add_exception_handler(AnalysisRequestError, _analysis_error_handler)
    app.add_exception_handler(ExtractionError, _extraction_error_handler)
    app.add_exception_handler(OperationTimeoutError, _timeout_error_handler)
