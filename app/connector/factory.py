from typing import ClassVar

from app.config.settings import Settings
from app.connector.base import BaseSourceConnector
from app.connector.demo_adapter import DemoSourceConnector
from app.connector.opentext_adapter import OpenTextConnector


class SourceConnectorFactory:
    """Creates the configured document source adapter."""

    PROVIDERS: ClassVar[tuple[str, ...]] = ("opentext", "demo")

    @classmethod
    def create(cls, settings: Settings) -> BaseSourceConnector:
        provider = settings.source_provider.lower()
        if provider == "demo":
            return DemoSourceConnector()
        if provider == "opentext":
            return OpenTextConnector(
                base_url=settings.opentext_base_url,
                username=settings.opentext_username,
                password=settings.opentext_password,
                page_size=settings.opentext_page_size,
                timeout_seconds=settings.opentext_timeout_seconds,
            )
        raise ValueError(
            f"Unknown source provider '{provider}'. Choose from: {list(cls.PROVIDERS)}"
        )
