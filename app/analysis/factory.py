from typing import ClassVar

from app.analysis.analyzer import LlmDocumentAnalyzer
from app.analysis.base import BaseDocumentAnalyzer
from app.analysis.openai_client_adapter import OpenAIClientAdapter
from app.analysis.synthetic_analyzer import SyntheticDocumentAnalyzer
from app.config.settings import Settings
from app.logging.logger import Log


class DocumentAnalyzerFactory:
    """Creates the configured document analyzer."""

    OPENAI_COMPATIBLE_BASE_URLS: ClassVar[dict[str, str]] = {
        "openrouter": "https://openrouter.ai/api/v1",
        "groq": "https://api.groq.com/openai/v1",
        "together": "https://api.together.xyz/v1",
        "deepseek": "https://api.deepseek.com/v1",
        "ollama": "http://localhost:11434/v1",
    }

    @classmethod
    def create(cls, settings: Settings) -> BaseDocumentAnalyzer:
        """Create a configured analyzer from application settings."""
        provider = settings.analysis_provider.lower()
        if provider == "synthetic":
            return SyntheticDocumentAnalyzer(expiring_soon_days=settings.expiring_soon_days)
        base_url = cls._resolve_base_url(provider, settings)
        if provider == "openai" and not settings.openai_api_key:
            Log.warning("openai_api_key is not set, using synthetic analysis")
            return SyntheticDocumentAnalyzer(expiring_soon_days=settings.expiring_soon_days)
        client = OpenAIClientAdapter(
            api_key=settings.openai_api_key,
            timeout_seconds=settings.openai_timeout_seconds,
            base_url=base_url,
        )
        return LlmDocumentAnalyzer(
            client=client,
            model=settings.openai_model_name,
            temperature=settings.openai_temperature,
            max_tokens=settings.openai_max_tokens,
            provider_name=provider,
            expiring_soon_days=settings.expiring_soon_days,
        )

    @classmethod
    def _resolve_base_url(cls, provider: str, settings: Settings) -> str | None:
        if provider == "openai":
            return settings.openai_base_url
        if provider == "openai_compatible":
            url = (settings.openai_base_url or "").strip()
            if not url:
                raise ValueError(
                    "openai_base_url is required for analysis_provider=openai_compatible"
                )
            return url
        default_base_url = cls.OPENAI_COMPATIBLE_BASE_URLS.get(provider)
        if default_base_url is not None:
            return settings.openai_base_url or default_base_url
        supported = [
            "openai",
            "openai_compatible",
            "synthetic",
            *sorted(cls.OPENAI_COMPATIBLE_BASE_URLS),
        ]
        raise ValueError(f"Unknown analysis provider '{provider}'. Choose from: {supported}")
