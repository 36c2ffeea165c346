"""
누락 거래 로그 동기화

이력은 있지만 거래 로그가 없는 (회원, 기간)마다 로그를 생성한다.

사용법:
    python -m scripts.sync_logs --mode development
    python -m scripts.sync_logs --mode production --dry-run
"""

import argparse
import asyncio
import logging

from adapters.db.sqlite_adapter import SQLiteAdapter, get_db_path
from core.ledger import LedgerStore, TransactionLogStore, synchronize_missing_logs
from core.logging import setup_logging
from core.types import AppMode

logger = logging.getLogger(__name__)


async def count_missing(db: SQLiteAdapter) -> int:
    """로그가 없는 이력 수"""
    logged = await TransactionLogStore(db).list_logged_keys()
    history = await LedgerStore(db).list_all_history()
    return sum(1 for r in history if (r.no_anggota, r.periode) not in logged)


async def main(mode: str, dry_run: bool = False) -> None:
    db_path = get_db_path(AppMode(mode.lower()))
    logger.info(f"로그 동기화 시작: {db_path}")

    async with SQLiteAdapter(db_path) as db:
        if dry_run:
            logger.info(f"[dry-run] 로그 누락 이력: {await count_missing(db)}건")
            return

        result = await synchronize_missing_logs(db)

    logger.info(
        f"로그 동기화 완료: 생성 {result.created}건, "
        f"거래 금액 0 이력 {len(result.zero_movement)}건"
    )


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="누락 거래 로그 동기화")
    parser.add_argument(
        "--mode",
        choices=[m.value for m in AppMode],
        default=AppMode.DEVELOPMENT.value,
        help="운영 모드 (기본: development)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="생성하지 않고 누락 건수만 출력",
    )
    args = parser.parse_args()

    setup_logging("cli")
    asyncio.run(main(args.mode, args.dry_run))
