import asyncio

from app.config.settings import Settings
from app.logging.logger import Log
from app.worker.service import DocumentAnalyticsService, build_service


async def run(service: DocumentAnalyticsService, schedule_enabled: bool) -> None:
    """Start the service and keep it alive until cancelled.

    With scheduling disabled a single sync runs and the process exits.
    """
    await service.start()
    try:
        if schedule_enabled:
            await asyncio.Event().wait()
        else:
            outcome = await service.trigger_sync()
            Log.info(f"Sync finished: {outcome}")
    finally:
        await service.stop()


def main() -> None:
    """Entry point: load settings -> build dependencies -> run the scheduler."""
    settings = Settings()
    Log.configure(settings.log_level)
    service = build_service(settings)
    try:
        asyncio.run(run(service, settings.schedule_enabled))
    except KeyboardInterrupt:
        Log.info("Worker shutting down gracefully")


if __name__ == "__main__":
    main()
