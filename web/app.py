"""
FastAPI 애플리케이션

라우터 등록 및 앱 설정.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from core.config.loader import get_settings
from core.logging import setup_logging

# 로깅 설정 (콘솔 + 파일)
setup_logging("web")

from web.routes import (
    anggota,
    health,
    keuangan,
    pengaturan,
    pengumuman,
    pinjaman,
    transaksi_log,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """앱 생명주기 관리"""
    from adapters.db.sqlite_adapter import SQLiteAdapter, init_schema
    from core.storage.config_store import init_default_configs

    settings = get_settings()

    # 시작 시 - DB 스키마 및 기본 설정 초기화
    async with SQLiteAdapter(settings.db_path) as db:
        await init_schema(db)
        await init_default_configs(db)

    logger.info(
        f"Web 시작: {settings.koperasi_name} ({settings.mode.value}, db={settings.db_path})"
    )

    yield

    logger.info("Web 종료")


app = FastAPI(
    title="Koperasi API",
    description="Koperasi 회원 장부 관리 API",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# CORS 설정 (개발용)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# =========================================================================
# API 라우터 등록
# =========================================================================

app.include_router(health.router)
app.include_router(keuangan.router)
app.include_router(transaksi_log.router)
app.include_router(anggota.router)
app.include_router(pengaturan.router)
app.include_router(pengumuman.router)
app.include_router(pinjaman.router)
