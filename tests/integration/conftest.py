import os
import uuid
from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio

from app.config.settings import Settings
from app.database.connection import Database
from app.database.postgres_store import PostgresRecordStore

TEST_PREFIX = "itest-"


def _test_settings() -> Settings:
    return Settings(db_database=os.environ.get("DB_DATABASE", "document_analytics_test"))


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest_asyncio.fixture
async def pg_store(test_settings: Settings) -> AsyncGenerator[PostgresRecordStore, None]:
    db = Database.from_settings(test_settings)
    store = PostgresRecordStore(db)
    try:
        await store.init()
    except Exception as e:
        await db.close()
        pytest.skip(f"PostgreSQL test DB not available: {e}. Set DB_* env to run.")
    try:
        yield store
    finally:
        async with db.connection() as conn:
            like = f"{TEST_PREFIX}%"
            await conn.execute("DELETE FROM ocr_metadata WHERE document_id LIKE %s", (like,))
            await conn.execute("DELETE FROM document_analysis WHERE document_id LIKE %s", (like,))
            await conn.execute("DELETE FROM sync_jobs WHERE job_id LIKE %s", (like,))
            await conn.execute("DELETE FROM job_execution_log WHERE job_id LIKE %s", (like,))
        await store.close()


@pytest.fixture
def unique_id() -> str:
    return f"{TEST_PREFIX}{uuid.uuid4().hex[:12]}"
