from dataclasses import dataclass

from ats_analyzer.core.config import settings

DEFAULT_BASE_URLS = {
    "deepseek": "https://api.deepseek.com/v1",
    "openai": None,
}


@dataclass(frozen=True)
class AIConfig:
    provider: str
    model: str
    base_url: str | None
    api_key: str | None
    timeout_s: float


def load_ai_config() -> AIConfig:
    provider = settings.ai_provider
    base_url = settings.ai_base_url or DEFAULT_BASE_URLS.get(provider)
    return AIConfig(
        provider=provider,
        model=settings.ai_model,
        base_url=base_url,
        api_key=(settings.ai_api_key or "").strip() or None,
        timeout_s=settings.analysis_timeout_s,
    )
