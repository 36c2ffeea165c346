"""
DB 스키마 초기화

테이블 생성, 기본 설정 저장, 기간 레지스트리 재구성.
여러 번 실행해도 안전.

사용법:
    python -m scripts.init_db --mode development
    python -m scripts.init_db --mode production
"""

import argparse
import asyncio
import logging

from adapters.db.sqlite_adapter import SQLiteAdapter, get_db_path, init_schema
from core.ledger import MonthlyReportService
from core.logging import setup_logging
from core.storage.config_store import init_default_configs
from core.types import AppMode

logger = logging.getLogger(__name__)

EXPECTED_TABLES = (
    "anggota",
    "keuangan",
    "keuangan_history",
    "transaksi_log",
    "posting_period",
    "config_store",
    "pengumuman",
    "pengajuan_pinjaman",
)


async def verify_schema(db: SQLiteAdapter) -> bool:
    """필수 테이블 존재 확인"""
    missing = [t for t in EXPECTED_TABLES if not await db.table_exists(t)]
    if missing:
        logger.error(f"누락된 테이블: {missing}")
        return False
    return True


async def main(mode: str, rebuild_periods: bool = False) -> None:
    """초기화 실행

    Args:
        mode: production 또는 development
        rebuild_periods: 이력에서 기간 레지스트리 재구성 여부
    """
    db_path = get_db_path(AppMode(mode.lower()))
    logger.info(f"초기화 시작: {db_path}")

    async with SQLiteAdapter(db_path) as db:
        await init_schema(db)
        await init_default_configs(db)

        if rebuild_periods:
            periods = await MonthlyReportService(db).rebuild_posted_periods()
            logger.info(f"기간 레지스트리 재구성: {len(periods)}개")

        if not await verify_schema(db):
            raise RuntimeError("스키마 검증 실패")

    logger.info("초기화 완료")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="DB 스키마 초기화")
    parser.add_argument(
        "--mode",
        choices=[m.value for m in AppMode],
        default=AppMode.DEVELOPMENT.value,
        help="운영 모드 (기본: development)",
    )
    parser.add_argument(
        "--rebuild-periods",
        action="store_true",
        help="이력에서 게시된 기간 레지스트리 재구성",
    )
    args = parser.parse_args()

    setup_logging("cli")
    asyncio.run(main(args.mode, args.rebuild_periods))
