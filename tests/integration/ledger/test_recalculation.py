"""월간 재계산 엔진 통합 테스트"""

from decimal import Decimal

import pytest

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.constants import Defaults
from core.ledger import (
    LedgerStore,
    MonthlyRecalculationEngine,
    Mutasi,
    PeriodFormatError,
    Saldo,
    TransactionEntry,
)
from core.ledger.balance import is_balanced
from core.storage.anggota_store import Anggota, MemberDirectory


def _entry(no_anggota: str, admin: str = "Budi", **amounts: str) -> TransactionEntry:
    return TransactionEntry(
        no_anggota=no_anggota,
        mutasi=Mutasi.from_dict(amounts),
        admin_nama=admin,
    )


class TestFirstPosting:
    """첫 게시"""

    @pytest.mark.asyncio
    async def test_opening_is_zero(self, db: SQLiteAdapter) -> None:
        """이전 이력이 없으면 기초 잔액 0"""
        engine = MonthlyRecalculationEngine(db)

        result = await engine.post_monthly_batch(
            [_entry("AK-001", transaksi_simpanan_wajib="100000", transaksi_simpanan_pokok="25000")],
            "2024-01",
        )

        store = LedgerStore(db)
        history = await store.get_history("AK-001", "2024-01")
        current = await store.get_current("AK-001")

        assert result.success_count == 1
        assert result.is_complete_success
        assert history.awal == Saldo.zero()
        assert history.akhir.simpanan_wajib == Decimal("100000")
        assert history.jumlah_setoran == Decimal("125000")
        assert history.admin_nama == "Budi"
        assert history.tanggal_transaksi is not None
        assert current == history
        assert is_balanced(history)

    @pytest.mark.asyncio
    async def test_registers_period(self, db: SQLiteAdapter) -> None:
        engine = MonthlyRecalculationEngine(db)

        await engine.post_monthly_batch([_entry("AK-001", transaksi_niaga="1")], "2024-01")

        assert await LedgerStore(db).list_periods() == ["2024-01"]

    @pytest.mark.asyncio
    async def test_no_anggota_normalized(self, db: SQLiteAdapter) -> None:
        engine = MonthlyRecalculationEngine(db)

        result = await engine.post_monthly_batch(
            [_entry(" ak-001 ", transaksi_simpanan_wajib="1")], "2024-01"
        )

        assert result.posted[0].no_anggota == "AK-001"
        assert await LedgerStore(db).get_current("AK-001") is not None


class TestSubsequentPosting:
    """연속 게시"""

    @pytest.mark.asyncio
    async def test_opening_from_previous_closing(self, db: SQLiteAdapter) -> None:
        engine = MonthlyRecalculationEngine(db)
        await engine.post_monthly_batch(
            [_entry("AK-001", transaksi_simpanan_wajib="100000")], "2024-01"
        )

        await engine.post_monthly_batch(
            [
                _entry(
                    "AK-001",
                    transaksi_simpanan_wajib="50000",
                    transaksi_pengambilan_simpanan_wajib="20000",
                )
            ],
            "2024-02",
        )

        february = await LedgerStore(db).get_history("AK-001", "2024-02")
        assert february.awal.simpanan_wajib == Decimal("100000")
        assert february.akhir.simpanan_wajib == Decimal("130000")

    @pytest.mark.asyncio
    async def test_skipped_month_keeps_balance(self, db: SQLiteAdapter) -> None:
        """거래 없는 달을 건너뛰어도 잔액이 이어짐"""
        engine = MonthlyRecalculationEngine(db)
        await engine.post_monthly_batch(
            [_entry("AK-001", transaksi_simpanan_wajib="100000")], "2024-01"
        )

        await engine.post_monthly_batch(
            [_entry("AK-001", transaksi_simpanan_wajib="10000")], "2024-04"
        )

        april = await LedgerStore(db).get_history("AK-001", "2024-04")
        assert april.awal.simpanan_wajib == Decimal("100000")
        assert april.akhir.simpanan_wajib == Decimal("110000")

    @pytest.mark.asyncio
    async def test_same_period_merges(self, db: SQLiteAdapter) -> None:
        """같은 기간에 다시 게시하면 거래 금액을 더함"""
        engine = MonthlyRecalculationEngine(db)
        await engine.post_monthly_batch(
            [_entry("AK-001", transaksi_simpanan_wajib="50000")], "2024-01"
        )

        await engine.post_monthly_batch(
            [_entry("AK-001", admin="Ani", transaksi_simpanan_wajib="50000", transaksi_niaga="2000")],
            "2024-01",
        )

        store = LedgerStore(db)
        history = await store.list_history("AK-001")
        assert len(history) == 1
        assert history[0].mutasi.transaksi_simpanan_wajib == Decimal("100000")
        assert history[0].mutasi.transaksi_niaga == Decimal("2000")
        assert history[0].akhir.simpanan_wajib == Decimal("100000")
        assert history[0].admin_nama == "Ani"

    @pytest.mark.asyncio
    async def test_backfill_does_not_move_current(self, db: SQLiteAdapter) -> None:
        """현재 장부보다 앞선 기간 게시는 현재 장부를 바꾸지 않음"""
        engine = MonthlyRecalculationEngine(db)
        await engine.post_monthly_batch(
            [_entry("AK-001", transaksi_simpanan_wajib="100000")], "2024-03"
        )

        await engine.post_monthly_batch(
            [_entry("AK-001", transaksi_simpanan_wajib="5000")], "2024-01"
        )

        store = LedgerStore(db)
        current = await store.get_current("AK-001")
        assert current.periode == "2024-03"
        assert current.akhir.simpanan_wajib == Decimal("100000")
        assert await store.get_history("AK-001", "2024-01") is not None


class TestNameResolution:
    """회원 이름 확정"""

    @pytest.mark.asyncio
    async def test_from_directory(self, db: SQLiteAdapter) -> None:
        members = MemberDirectory(db)
        await members.add(Anggota(no_anggota="AK-001", nama="Siti"))
        engine = MonthlyRecalculationEngine(db, members=members)

        result = await engine.post_monthly_batch(
            [_entry("AK-001", transaksi_simpanan_wajib="1")], "2024-01"
        )

        assert result.posted[0].nama_anggota == "Siti"
        assert (await LedgerStore(db).get_current("AK-001")).nama_anggota == "Siti"

    @pytest.mark.asyncio
    async def test_entry_name_wins(self, db: SQLiteAdapter) -> None:
        members = MemberDirectory(db)
        await members.add(Anggota(no_anggota="AK-001", nama="Siti"))
        engine = MonthlyRecalculationEngine(db, members=members)
        entry = TransactionEntry(no_anggota="AK-001", nama_anggota="Siti Aminah")

        result = await engine.post_monthly_batch([entry], "2024-01")

        assert result.posted[0].nama_anggota == "Siti Aminah"

    @pytest.mark.asyncio
    async def test_fallback_name(self, db: SQLiteAdapter) -> None:
        engine = MonthlyRecalculationEngine(db, members=MemberDirectory(db))

        result = await engine.post_monthly_batch([_entry("AK-404")], "2024-01")

        assert result.posted[0].nama_anggota == Defaults.MEMBER_NAME_FALLBACK


class TestFailures:
    """실패 처리"""

    @pytest.mark.asyncio
    async def test_invalid_period_rejects_batch(self, db: SQLiteAdapter) -> None:
        engine = MonthlyRecalculationEngine(db)

        with pytest.raises(PeriodFormatError):
            await engine.post_monthly_batch(
                [_entry("AK-001", transaksi_simpanan_wajib="1")], "2024-13"
            )

        assert await LedgerStore(db).list_current() == []

    @pytest.mark.asyncio
    async def test_partial_failure(self, db: SQLiteAdapter) -> None:
        """한 회원 실패는 다른 회원 게시를 막지 않음, 기간은 등록되지 않음"""
        engine = MonthlyRecalculationEngine(db)

        result = await engine.post_monthly_batch(
            [
                _entry("AK-001", transaksi_simpanan_wajib="100000"),
                _entry("", transaksi_simpanan_wajib="100000"),
                _entry("AK-002", transaksi_simpanan_wajib="50000"),
            ],
            "2024-01",
        )

        store = LedgerStore(db)
        assert result.success_count == 2
        assert result.error_count == 1
        assert result.errors[0].no_anggota == ""
        assert [e.no_anggota for e in result.posted] == ["AK-001", "AK-002"]
        assert await store.get_current("AK-002") is not None
        assert await store.list_periods() == []

    @pytest.mark.asyncio
    async def test_empty_batch(self, db: SQLiteAdapter) -> None:
        result = await MonthlyRecalculationEngine(db).post_monthly_batch([], "2024-01")

        assert result.success_count == 0
        assert await LedgerStore(db).list_periods() == []

    @pytest.mark.asyncio
    async def test_non_finite_amount_fails_member(self, db: SQLiteAdapter) -> None:
        """NaN 금액 입력은 해당 회원만 실패, 장부에 기록되지 않음"""
        engine = MonthlyRecalculationEngine(db)

        result = await engine.post_monthly_batch(
            [
                TransactionEntry(
                    no_anggota="AK-001",
                    mutasi=Mutasi(transaksi_simpanan_wajib=Decimal("NaN")),
                ),
                _entry("AK-002", transaksi_simpanan_wajib="50000"),
            ],
            "2024-01",
        )

        store = LedgerStore(db)
        assert result.success_count == 1
        assert result.error_count == 1
        assert result.errors[0].no_anggota == "AK-001"
        assert "transaksi_simpanan_wajib" in result.errors[0].error
        assert await store.get_history("AK-001", "2024-01") is None
        assert await store.get_current("AK-001") is None
        assert is_balanced(await store.get_current("AK-002"))
