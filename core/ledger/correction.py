"""
수정 엔진

과거 거래 로그의 금액을 수정하고, 수정된 기간부터 최신 기간까지
기초/기말 잔액을 순서대로 다시 계산한다 (cascade).

전체 과정이 트랜잭션 1개로 실행된다.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from core.ledger.balance import recompute
from core.ledger.errors import HistoryNotFoundError, LogNotFoundError
from core.ledger.log_store import TransactionLogStore
from core.ledger.models import MonthlyReport, Mutasi
from core.ledger.store import LedgerStore
from core.utils.timezone import now_utc_iso

if TYPE_CHECKING:
    from adapters.db.sqlite_adapter import SQLiteAdapter

logger = logging.getLogger(__name__)


class CorrectionEngine:
    """수정 엔진

    Args:
        db: SQLite 어댑터
        store: 장부 저장소
        logs: 거래 로그 저장소
    """

    def __init__(
        self,
        db: SQLiteAdapter,
        store: LedgerStore | None = None,
        logs: TransactionLogStore | None = None,
    ):
        self.db = db
        self.store = store or LedgerStore(db)
        self.logs = logs or TransactionLogStore(db)

    async def correct_transaction(
        self,
        log_id: str,
        corrected: Mutasi,
        editor: str,
    ) -> list[str]:
        """거래 수정 및 전파

        Args:
            log_id: 수정할 로그 ID
            corrected: 수정된 거래 금액 (전체 값)
            editor: 수정자 이름

        Returns:
            다시 계산된 기간 목록 (오름차순, 변경 없으면 빈 목록)

        Raises:
            LogNotFoundError: 로그 없음
            AmountValidationError: 유한하지 않은 금액
            HistoryNotFoundError: 로그 기간의 이력 없음
        """
        corrected.validate()

        async with self.db.transaction():
            log = await self.logs.get_log(log_id)
            if log is None:
                raise LogNotFoundError(log_id)

            delta = corrected - log.mutasi
            edited_at = now_utc_iso()

            if delta.is_zero():
                await self.logs.mark_edited(log_id, editor, edited_at)
                logger.info(f"Correction without change: {log_id} by {editor}")
                return []

            history = await self.store.list_history(
                log.no_anggota, from_periode=log.periode
            )
            if not history or history[0].periode != log.periode:
                raise HistoryNotFoundError(log.no_anggota, log.periode)

            recomputed: list[MonthlyReport] = []
            for report in history:
                if not recomputed:
                    updated = recompute(
                        report.with_changes(mutasi=report.mutasi + delta)
                    )
                else:
                    updated = recompute(report, awal=recomputed[-1].akhir)
                await self.store.put_history(updated)
                recomputed.append(updated)

            await self.store.put_current(recomputed[-1])
            await self.logs.update_log(log_id, corrected, editor, edited_at)

        periods = [r.periode for r in recomputed]
        changed = {name: str(amount) for name, amount in delta.non_zero().items()}
        logger.info(
            f"Transaction corrected: {log_id} ({log.no_anggota}) by {editor}, "
            f"delta={changed}, recomputed {periods}"
        )
        return periods
