import pytest
from pydantic import ValidationError

from app.config.settings import Settings


class TestSettingsDefaults:
    def test_default_app_env(self) -> None:
        s = Settings()
        assert s.app_env == "dev"

    def test_default_db_port(self) -> None:
        s = Settings()
        assert s.db_port == 5432

    def test_default_db_database(self) -> None:
        s = Settings()
        assert s.db_database == "document_analytics"

    def test_default_processing_limits(self) -> None:
        s = Settings()
        assert s.processing_max_retries == 3
        assert s.processing_concurrency == 3

    def test_default_schedule_is_every_four_hours(self) -> None:
        s = Settings()
        assert s.schedule_interval_seconds == 4 * 60 * 60
        assert s.schedule_enabled is True

    def test_default_providers(self) -> None:
        s = Settings()
        assert s.source_provider == "opentext"
        assert s.ocr_provider == "ocr_space"
        assert s.analysis_provider == "openai"

    def test_default_openai_model(self) -> None:
        s = Settings()
        assert s.openai_model_name == "gpt-4"
        assert s.openai_max_tokens == 2000
        assert s.openai_temperature == 0.1

    def test_default_ocr_size_limit_is_ten_mebibytes(self) -> None:
        s = Settings()
        assert s.ocr_max_file_size_bytes == 10 * 1024 * 1024

    def test_default_expiring_soon_window(self) -> None:
        s = Settings()
        assert s.expiring_soon_days == 30


class TestSettingsFromEnv:
    def test_loads_app_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("APP_ENV", "production")
        s = Settings()
        assert s.app_env == "production"

    def test_loads_log_level(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        s = Settings()
        assert s.log_level == "DEBUG"

    def test_loads_db_host(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DB_HOST", "db.example.com")
        s = Settings()
        assert s.db_host == "db.example.com"

    def test_loads_concurrency(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PROCESSING_CONCURRENCY", "5")
        s = Settings()
        assert s.processing_concurrency == 5

    def test_loads_schedule_enabled_flag(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SCHEDULE_ENABLED", "false")
        s = Settings()
        assert s.schedule_enabled is False

    def test_loads_openai_base_url(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("OPENAI_BASE_URL", "http://llm.local/v1")
        s = Settings()
        assert s.openai_base_url == "http://llm.local/v1"


class TestSettingsValidation:
    def test_invalid_db_port_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DB_PORT", "not_a_number")
        with pytest.raises(ValidationError):
            Settings()

    def test_invalid_max_retries_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PROCESSING_MAX_RETRIES", "abc")
        with pytest.raises(ValidationError):
            Settings()

    @pytest.mark.parametrize(
        "env_var",
        [
            "PROCESSING_CONCURRENCY",
            "PROCESSING_MAX_RETRIES",
            "SCHEDULE_INTERVAL_SECONDS",
            "OPENTEXT_PAGE_SIZE",
            "DB_MAX_CONNECTIONS",
        ],
    )
    def test_zero_count_raises(self, monkeypatch: pytest.MonkeyPatch, env_var: str) -> None:
        monkeypatch.setenv(env_var, "0")
        with pytest.raises(ValidationError):
            Settings()

    def test_negative_expiring_soon_window_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("EXPIRING_SOON_DAYS", "-1")
        with pytest.raises(ValidationError):
            Settings()
