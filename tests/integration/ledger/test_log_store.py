"""TransactionLogStore 통합 테스트"""

from decimal import Decimal

import pytest

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.constants import Defaults
from core.ledger.log_store import TransactionLogStore, total_setoran
from core.ledger.models import MonthlyReport, Mutasi
from core.types import LogType


def _mutasi(wajib: str) -> Mutasi:
    return Mutasi(transaksi_simpanan_wajib=Decimal(wajib))


class TestCreateLog:
    """로그 생성 테스트"""

    @pytest.mark.asyncio
    async def test_create_and_get(self, db: SQLiteAdapter) -> None:
        logs = TransactionLogStore(db)

        created = await logs.create_log(
            no_anggota="AK-001",
            periode="2024-01",
            admin_nama="Budi",
            mutasi=_mutasi("100000"),
            nama_anggota="Siti",
            tanggal_transaksi="2024-01-15",
        )
        loaded = await logs.get_log(created.log_id)

        assert loaded == created
        assert loaded.log_type == LogType.NEW
        assert loaded.log_time is not None
        assert loaded.jumlah_setoran == Decimal("100000")

    @pytest.mark.asyncio
    async def test_unique_ids(self, db: SQLiteAdapter) -> None:
        logs = TransactionLogStore(db)

        a = await logs.create_log("AK-001", "2024-01", "Budi", _mutasi("1"))
        b = await logs.create_log("AK-001", "2024-01", "Budi", _mutasi("1"))

        assert a.log_id != b.log_id

    @pytest.mark.asyncio
    async def test_from_history_defaults_admin(self, db: SQLiteAdapter) -> None:
        """관리자 이름이 없는 이력은 시스템 작업자로 기록"""
        logs = TransactionLogStore(db)
        report = MonthlyReport(no_anggota="AK-001", periode="2024-01", mutasi=_mutasi("5"))

        log = await logs.create_log_from_history(report)

        assert log.admin_nama == Defaults.SYSTEM_ADMIN_NAME
        assert log.mutasi == report.mutasi

    @pytest.mark.asyncio
    async def test_from_history_requires_periode(self, db: SQLiteAdapter) -> None:
        with pytest.raises(ValueError):
            await TransactionLogStore(db).create_log_from_history(MonthlyReport.empty("AK-001"))

    @pytest.mark.asyncio
    async def test_get_missing(self, db: SQLiteAdapter) -> None:
        assert await TransactionLogStore(db).get_log("nope") is None


class TestQueries:
    """로그 조회 테스트"""

    @pytest.mark.asyncio
    async def test_filters(self, db: SQLiteAdapter) -> None:
        logs = TransactionLogStore(db)
        await logs.create_log("AK-001", "2024-01", "Budi", _mutasi("100"))
        await logs.create_log("AK-002", "2024-01", "Ani", _mutasi("200"))
        await logs.create_log("AK-001", "2024-02", "Budi", _mutasi("300"))

        assert len(await logs.list_logs()) == 3
        assert len(await logs.list_logs(no_anggota="AK-001")) == 2
        assert len(await logs.list_by_period("2024-01")) == 2
        assert len(await logs.list_logs(limit=1)) == 1
        assert [l.periode for l in await logs.list_by_member("AK-001")] == ["2024-02", "2024-01"]
        assert await logs.list_periods() == ["2024-02", "2024-01"]
        assert await logs.list_logged_keys() == {
            ("AK-001", "2024-01"),
            ("AK-002", "2024-01"),
            ("AK-001", "2024-02"),
        }

    @pytest.mark.asyncio
    async def test_admin_rekap(self, db: SQLiteAdapter) -> None:
        """관리자별 정산 합계"""
        logs = TransactionLogStore(db)
        await logs.create_log("AK-001", "2024-01", "Budi", _mutasi("100000"))
        await logs.create_log("AK-002", "2024-01", "Budi", _mutasi("50000"))
        await logs.create_log("AK-003", "2024-01", "Ani", _mutasi("70000"))

        budi = await logs.list_by_admin_period("Budi", "2024-01")

        assert len(budi) == 2
        assert total_setoran(budi) == Decimal("150000")


class TestUpdate:
    """로그 수정/삭제 테스트"""

    @pytest.mark.asyncio
    async def test_update_log(self, db: SQLiteAdapter) -> None:
        logs = TransactionLogStore(db)
        created = await logs.create_log("AK-001", "2024-01", "Budi", _mutasi("100000"))

        updated = await logs.update_log(created.log_id, _mutasi("80000"), edited_by="Ani")
        loaded = await logs.get_log(created.log_id)

        assert updated is True
        assert loaded.log_type == LogType.EDIT
        assert loaded.edited_by == "Ani"
        assert loaded.edited_at is not None
        assert loaded.mutasi.transaksi_simpanan_wajib == Decimal("80000")
        assert loaded.admin_nama == "Budi"

    @pytest.mark.asyncio
    async def test_update_missing(self, db: SQLiteAdapter) -> None:
        assert await TransactionLogStore(db).update_log("nope", _mutasi("1"), "Ani") is False

    @pytest.mark.asyncio
    async def test_mark_edited_keeps_amounts(self, db: SQLiteAdapter) -> None:
        logs = TransactionLogStore(db)
        created = await logs.create_log("AK-001", "2024-01", "Budi", _mutasi("100000"))

        await logs.mark_edited(created.log_id, edited_by="Ani")
        loaded = await logs.get_log(created.log_id)

        assert loaded.log_type == LogType.EDIT
        assert loaded.mutasi == created.mutasi

    @pytest.mark.asyncio
    async def test_delete_by_period(self, db: SQLiteAdapter) -> None:
        logs = TransactionLogStore(db)
        await logs.create_log("AK-001", "2024-01", "Budi", _mutasi("1"))
        await logs.create_log("AK-002", "2024-01", "Budi", _mutasi("1"))
        await logs.create_log("AK-001", "2024-02", "Budi", _mutasi("1"))

        assert await logs.delete_logs_by_period("2024-01") == 2
        assert await logs.list_periods() == ["2024-02"]
