"""누락 로그 동기화 통합 테스트"""

from decimal import Decimal

import pytest

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.constants import Defaults
from core.ledger import (
    LedgerStore,
    MonthlyReport,
    Mutasi,
    TransactionLogStore,
    synchronize_missing_logs,
)


def _history(no_anggota: str, periode: str, wajib: str = "0", admin: str | None = None) -> MonthlyReport:
    return MonthlyReport(
        no_anggota=no_anggota,
        periode=periode,
        admin_nama=admin,
        mutasi=Mutasi(transaksi_simpanan_wajib=Decimal(wajib)),
    )


class TestSynchronizeMissingLogs:
    """이력 기준 로그 생성"""

    @pytest.mark.asyncio
    async def test_creates_missing_only(self, db: SQLiteAdapter) -> None:
        store = LedgerStore(db)
        logs = TransactionLogStore(db)
        await store.put_history(_history("AK-001", "2024-01", "100", admin="Budi"))
        await store.put_history(_history("AK-001", "2024-02", "50"))
        await logs.create_log("AK-001", "2024-01", "Budi", Mutasi())

        result = await synchronize_missing_logs(db)

        assert result.created == 1
        created = await logs.list_by_period("2024-02")
        assert len(created) == 1
        assert created[0].admin_nama == Defaults.SYSTEM_ADMIN_NAME
        assert created[0].mutasi.transaksi_simpanan_wajib == Decimal("50")

    @pytest.mark.asyncio
    async def test_idempotent(self, db: SQLiteAdapter) -> None:
        await LedgerStore(db).put_history(_history("AK-001", "2024-01", "100"))

        first = await synchronize_missing_logs(db)
        second = await synchronize_missing_logs(db)

        assert first.created == 1
        assert second.created == 0

    @pytest.mark.asyncio
    async def test_zero_movement_reported(self, db: SQLiteAdapter) -> None:
        """거래 금액이 모두 0인 이력도 로그를 만들고 따로 보고"""
        await LedgerStore(db).put_history(_history("AK-002", "2024-01"))

        result = await synchronize_missing_logs(db)

        assert result.created == 1
        assert result.zero_movement == [("AK-002", "2024-01")]
