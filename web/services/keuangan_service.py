"""
Keuangan 서비스

월간 배치 게시 + 거래 로그 기록, 과거 거래 수정, 월간 보고서 관리.
"""

import logging
from dataclasses import dataclass

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.ledger import (
    BatchResult,
    CorrectionEngine,
    DeleteReportResult,
    LedgerStore,
    MonthlyRecalculationEngine,
    MonthlyReportService,
    Mutasi,
    SyncResult,
    TransactionEntry,
    TransactionLogStore,
    synchronize_missing_logs,
)
from core.storage.anggota_store import MemberDirectory

logger = logging.getLogger(__name__)


@dataclass
class PostingOutcome:
    """게시 결과 + 로그 기록 실패 수"""

    result: BatchResult
    log_failures: int = 0


class KeuanganService:
    """Keuangan 서비스

    Args:
        db: SQLite 어댑터
    """

    def __init__(self, db: SQLiteAdapter):
        self.db = db
        self.store = LedgerStore(db)
        self.logs = TransactionLogStore(db)
        self.members = MemberDirectory(db)
        self.reports = MonthlyReportService(db, store=self.store, logs=self.logs)

    async def post_batch(
        self,
        entries: list[TransactionEntry],
        periode: str,
    ) -> PostingOutcome:
        """월간 배치 게시 후 성공한 회원마다 로그 기록

        로그 기록 실패는 게시를 되돌리지 않는다.
        누락된 로그는 synchronize_missing_logs로 복구.
        """
        engine = MonthlyRecalculationEngine(self.db, members=self.members, store=self.store)
        result = await engine.post_monthly_batch(entries, periode)

        outcome = PostingOutcome(result=result)
        for entry in result.posted:
            try:
                await self.logs.create_log(
                    no_anggota=entry.no_anggota,
                    periode=periode,
                    admin_nama=entry.admin_nama or "",
                    mutasi=entry.mutasi,
                    nama_anggota=entry.nama_anggota or "",
                    tanggal_transaksi=entry.tanggal_transaksi,
                )
            except Exception as e:
                outcome.log_failures += 1
                logger.error(
                    f"Log write failed after posting: {entry.no_anggota} ({periode}): {e}"
                )

        return outcome

    async def correct(self, log_id: str, corrected: Mutasi, editor: str) -> list[str]:
        """과거 거래 수정"""
        engine = CorrectionEngine(self.db, store=self.store, logs=self.logs)
        return await engine.correct_transaction(log_id, corrected, editor)

    async def delete_monthly_report(self, periode: str) -> DeleteReportResult:
        return await self.reports.delete_monthly_report(periode)

    async def synchronize_logs(self) -> SyncResult:
        return await synchronize_missing_logs(self.db, store=self.store, logs=self.logs)
