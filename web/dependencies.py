"""
의존성 주입

라우트는 요청마다 자신의 DB 연결을 연다.
조회는 읽기 전용 연결, 장부 변경은 쓰기 연결을 사용한다.
"""

from typing import AsyncGenerator

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.config.loader import Settings, get_settings


def get_app_settings() -> Settings:
    return get_settings()


def _adapter(readonly: bool) -> SQLiteAdapter:
    return SQLiteAdapter(get_settings().db_path, readonly=readonly)


async def get_db() -> AsyncGenerator[SQLiteAdapter, None]:
    """읽기 전용 연결 (장부, 보고서, 로그, 회원 조회)"""
    async with _adapter(readonly=True) as db:
        yield db


async def get_db_write() -> AsyncGenerator[SQLiteAdapter, None]:
    """쓰기 연결 (배치 게시, 과거 거래 수정, 보고서 삭제, 설정 저장)

    각 store 메서드가 자체 트랜잭션을 열므로 여기서는 연결만 관리한다.
    """
    async with _adapter(readonly=False) as db:
        yield db
