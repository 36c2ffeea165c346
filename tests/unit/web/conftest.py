"""
Web API 테스트 fixture

임시 DB와 테스트용 설정으로 의존성을 교체한 httpx 클라이언트.
"""

from pathlib import Path

import httpx
import pytest_asyncio

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.config.loader import get_settings
from web.app import app
from web.dependencies import get_app_settings, get_db, get_db_write


@pytest_asyncio.fixture
async def client(db: SQLiteAdapter, temp_settings_file: Path) -> httpx.AsyncClient:
    """의존성이 교체된 API 클라이언트"""

    async def _db():
        yield db

    app.dependency_overrides[get_db] = _db
    app.dependency_overrides[get_db_write] = _db
    app.dependency_overrides[get_app_settings] = lambda: get_settings(temp_settings_file)

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
