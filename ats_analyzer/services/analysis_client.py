from __future__ import annotations

import logging
import time
from dataclasses import dataclass

import openai
from fastapi import status

from ats_analyzer.ai.types import AIClient, AIClientNotConfigured
from ats_analyzer.core.timeouts import OperationTimeoutError, with_timeout
from ats_analyzer.schemas.analysis import AnalysisRequest
from ats_analyzer.services.prompts import build_analysis_messages, sanitize_resume_text

logger = logging.getLogger(__name__)

ANALYSIS_TEMPERATURE = 0.2
ANALYSIS_MAX_TOKENS = 2000

_RATE_LIMIT_PHRASES = ("rate limit", "quota")


class AnalysisRequestError(RuntimeError):
    def __init__(
        self,
        message: str,
        *,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        upstream_status: int | None = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.upstream_status = upstream_status


@dataclass(frozen=True)
class AnalysisReply:
    content: str
    processing_time_ms: int
    text_length: int
    model: str


def status_for_failure(message: str, upstream_status: int | None = None) -> int:
    lowered = (message or "").lower()
    if upstream_status == status.HTTP_429_TOO_MANY_REQUESTS:
        return status.HTTP_429_TOO_MANY_REQUESTS
    if any(phrase in lowered for phrase in _RATE_LIMIT_PHRASES):
        return status.HTTP_429_TOO_MANY_REQUESTS
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def _request_error(message: str, upstream_status: int | None = None) -> AnalysisRequestError:
    return AnalysisRequestError(
        message,
        status_code=status_for_failure(message, upstream_status),
        upstream_status=upstream_status,
    )


async def request_analysis(
    request: AnalysisRequest,
    client: AIClient,
    *,
    timeout_s: float,
) -> AnalysisReply:
    sanitized = sanitize_resume_text(request.text)
    messages = build_analysis_messages(request, sanitized)

    started = time.perf_counter()
    try:
        completion = await with_timeout(
            client.complete(messages, temperature=ANALYSIS_TEMPERATURE, max_tokens=ANALYSIS_MAX_TOKENS),
            timeout_s,
            "análise do currículo",
        )
    except OperationTimeoutError:
        raise
    except AIClientNotConfigured as exc:
        logger.error("analysis_client_not_configured: %s", exc)
        raise AnalysisRequestError("Serviço de análise não configurado") from exc
    except openai.APITimeoutError as exc:
        raise OperationTimeoutError("análise do currículo", timeout_s) from exc
    except openai.APIStatusError as exc:
        logger.warning("analysis_request_failed upstream_status=%s: %s", exc.status_code, exc.message)
        raise _request_error(f"API Error: {exc.message}", exc.status_code) from exc
    except openai.APIError as exc:
        logger.warning("analysis_request_failed: %s", exc)
        raise _request_error(f"API Error: {exc}") from exc

    elapsed_ms = int((time.perf_counter() - started) * 1000)
    if not completion.content.strip():
        logger.warning("analysis_request_empty model=%s elapsed_ms=%s", completion.model, elapsed_ms)
        raise _request_error("API Error: resposta vazia do serviço de análise")

    logger.info(
        "analysis_request_done industry=%s level=%s text_len=%s reply_len=%s elapsed_ms=%s",
        request.industry,
        request.experience_level,
        len(sanitized),
        len(completion.content),
        elapsed_ms,
    )
    return AnalysisReply(
        content=completion.content,
        processing_time_ms=elapsed_ms,
        text_length=len(sanitized),
        model=completion.model,
    )
