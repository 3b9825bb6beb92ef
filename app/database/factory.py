from app.config.settings import Settings
from app.database.base import BaseRecordStore
from app.database.connection import Database
from app.database.memory_store import InMemoryRecordStore
from app.database.postgres_store import PostgresRecordStore


class RecordStoreFactory:
    """Creates the configured record store."""

    @classmethod
    def create(cls, settings: Settings) -> BaseRecordStore:
        backend = settings.store_backend.lower()
        if backend == "postgres":
            return PostgresRecordStore(Database.from_settings(settings))
        if backend == "memory":
            return InMemoryRecordStore()
        supported = ["memory", "postgres"]
        raise ValueError(f"Unknown store backend '{backend}'. Choose from: {supported}")
