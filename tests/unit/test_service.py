from unittest.mock import AsyncMock

import pytest

from app.config.settings import Settings
from app.database.memory_store import InMemoryRecordStore
from app.main import run
from app.worker.service import DocumentAnalyticsService, build_service


def _make_settings(**overrides: object) -> Settings:
    values: dict[str, object] = {
        "store_backend": "memory",
        "source_provider": "demo",
        "ocr_provider": "synthetic",
        "analysis_provider": "synthetic",
        "schedule_enabled": False,
    }
    values.update(overrides)
    return Settings(**values)  # type: ignore[arg-type]


def _make_service(**overrides: object) -> DocumentAnalyticsService:
    return build_service(_make_settings(**overrides))


class TestDocumentAnalyticsService:
    @pytest.mark.asyncio
    async def test_start_and_stop(self) -> None:
        service = _make_service()
        started = await service.start()
        assert started["status"] == "started"
        assert service.is_running is True
        stopped = await service.stop()
        assert stopped["status"] == "stopped"
        assert service.is_running is False

    @pytest.mark.asyncio
    async def test_start_schedules_when_enabled(self) -> None:
        service = _make_service(schedule_enabled=True)
        await service.start()
        status = await service.get_status()
        assert status["active_schedule"]["is_scheduled"] is True
        await service.stop()

    @pytest.mark.asyncio
    async def test_trigger_sync_completes(self) -> None:
        service = _make_service()
        await service.start()
        outcome = await service.trigger_sync()
        assert outcome["status"] == "completed"
        assert outcome["result"]["processed"] == 3
        stats = await service.get_stats()
        assert stats.total_documents == 3
        assert stats.synthetic_documents == 3
        status = await service.get_status()
        assert status["last_job"]["status"] == "completed"
        await service.stop()

    @pytest.mark.asyncio
    async def test_status_before_any_run(self) -> None:
        service = _make_service()
        status = await service.get_status()
        assert status["running"] is False
        assert status["last_job"] is None

    @pytest.mark.asyncio
    async def test_health_is_degraded_in_offline_mode(self) -> None:
        service = _make_service()
        health = await service.health_check()
        assert health["status"] == "degraded"
        assert health["subsystems"]["database"]["status"] == "healthy"
        assert health["subsystems"]["source"]["status"] == "demo_mode"
        assert health["subsystems"]["llm"]["degraded"] is True

    @pytest.mark.asyncio
    async def test_health_is_unhealthy_without_database(self) -> None:
        service = _make_service()
        service._store.ping = AsyncMock(side_effect=RuntimeError("refused"))  # type: ignore[method-assign]
        health = await service.health_check()
        assert health["status"] == "unhealthy"
        assert health["subsystems"]["database"]["error"] == "refused"

    @pytest.mark.asyncio
    async def test_processing_stats(self) -> None:
        service = _make_service()
        await service.trigger_sync()
        stats = await service.get_processing_stats()
        assert len(stats["recent_jobs"]) == 1
        assert stats["document_stats"]["total_documents"] == 3

    def test_build_service_uses_memory_store(self) -> None:
        service = _make_service()
        assert isinstance(service._store, InMemoryRecordStore)


class TestRun:
    @pytest.mark.asyncio
    async def test_single_sync_without_schedule(self) -> None:
        service = _make_service()
        await run(service, schedule_enabled=False)
        stats = await service.get_stats()
        assert stats.total_documents == 3
        assert service.is_running is False
