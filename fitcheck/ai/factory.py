from fitcheck.ai.providers.openai_provider import OpenAIProvider
from fitcheck.ai.types import AIClient
from fitcheck.core.config import Settings
from fitcheck.core.errors import ConfigurationError


def get_ai_client(settings: Settings) -> AIClient:
    if not settings.openai_configured:
        raise ConfigurationError("OpenAI API key not configured")

    return OpenAIProvider(
        model=settings.openai_model,
        api_key=settings.openai_api_key or "",
        base_url=settings.openai_base_url,
        timeout_s=settings.openai_timeout_s,
    )
