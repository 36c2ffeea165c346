"""
로그 정합성 복구

로그 기록이 실패했거나 로그 도입 이전에 게시된 이력에 대해
누락된 거래 로그를 이력으로부터 생성한다.

이력은 게시로만 생기므로 거래 금액이 모두 0인 이력도 로그를 만든다.
이 경우는 zero_movement로 따로 집계해 확인할 수 있게 한다.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from core.ledger.log_store import TransactionLogStore
from core.ledger.store import LedgerStore

if TYPE_CHECKING:
    from adapters.db.sqlite_adapter import SQLiteAdapter

logger = logging.getLogger(__name__)


@dataclass
class SyncResult:
    """누락 로그 동기화 결과

    Attributes:
        created: 생성된 로그 수
        zero_movement: 그중 거래 금액이 모두 0인 이력 (회원번호, 기간)
    """

    created: int = 0
    zero_movement: list[tuple[str, str]] = field(default_factory=list)


async def synchronize_missing_logs(
    db: SQLiteAdapter,
    store: LedgerStore | None = None,
    logs: TransactionLogStore | None = None,
) -> SyncResult:
    """로그가 없는 이력마다 로그 생성

    Returns:
        SyncResult
    """
    store = store or LedgerStore(db)
    logs = logs or TransactionLogStore(db)
    result = SyncResult()

    async with db.transaction():
        logged = await logs.list_logged_keys()

        for report in await store.list_all_history():
            if (report.no_anggota, report.periode) in logged:
                continue

            await logs.create_log_from_history(report)
            result.created += 1

            if report.mutasi.is_zero():
                result.zero_movement.append((report.no_anggota, report.periode))

    if result.zero_movement:
        logger.warning(
            f"Logs created for zero-movement history: {result.zero_movement}"
        )
    logger.info(f"Missing logs synchronized: {result.created} created")
    return result
