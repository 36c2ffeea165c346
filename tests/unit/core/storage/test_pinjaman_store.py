"""대출 신청 저장소 테스트"""

from decimal import Decimal

import pytest

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.storage.pinjaman_store import InvalidStatusTransitionError, LoanApplicationStore
from core.types import LoanApplicationStatus


async def _submit(store: LoanApplicationStore):
    return await store.submit(
        no_anggota="ak-001",
        jenis_pinjaman="Berjangka",
        jumlah=Decimal("5000000"),
        jangka_waktu=12,
        nama_anggota="Siti",
        keperluan="Modal usaha",
    )


class TestSubmit:
    """대출 신청"""

    @pytest.mark.asyncio
    async def test_submit_pending(self, db: SQLiteAdapter) -> None:
        store = LoanApplicationStore(db)

        created = await _submit(store)
        loaded = await store.get(created.pengajuan_id)

        assert loaded == created
        assert loaded.no_anggota == "AK-001"
        assert loaded.is_pending
        assert loaded.jumlah == Decimal("5000000")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("jumlah,jangka", [(Decimal("0"), 12), (Decimal("100"), 0)])
    async def test_invalid_amount_or_term(self, db: SQLiteAdapter, jumlah, jangka) -> None:
        with pytest.raises(ValueError):
            await LoanApplicationStore(db).submit("AK-001", "Khusus", jumlah, jangka)


class TestStatusTransition:
    """승인/거절 상태 전이"""

    @pytest.mark.asyncio
    async def test_approve(self, db: SQLiteAdapter) -> None:
        store = LoanApplicationStore(db)
        created = await _submit(store)

        approved = await store.update_status(
            created.pengajuan_id, LoanApplicationStatus.DISETUJUI, diputuskan_oleh="Ketua"
        )

        assert approved.status == LoanApplicationStatus.DISETUJUI
        assert approved.diputuskan_at is not None
        assert await store.get(created.pengajuan_id) == approved

    @pytest.mark.asyncio
    async def test_decided_cannot_change(self, db: SQLiteAdapter) -> None:
        store = LoanApplicationStore(db)
        created = await _submit(store)
        await store.update_status(created.pengajuan_id, LoanApplicationStatus.DITOLAK)

        with pytest.raises(InvalidStatusTransitionError):
            await store.update_status(created.pengajuan_id, LoanApplicationStatus.DISETUJUI)

    @pytest.mark.asyncio
    async def test_cannot_reset_to_pending(self, db: SQLiteAdapter) -> None:
        store = LoanApplicationStore(db)
        created = await _submit(store)

        with pytest.raises(InvalidStatusTransitionError):
            await store.update_status(created.pengajuan_id, LoanApplicationStatus.MENUNGGU)

    @pytest.mark.asyncio
    async def test_missing(self, db: SQLiteAdapter) -> None:
        result = await LoanApplicationStore(db).update_status(
            "nope", LoanApplicationStatus.DISETUJUI
        )

        assert result is None

    @pytest.mark.asyncio
    async def test_list_by_status(self, db: SQLiteAdapter) -> None:
        store = LoanApplicationStore(db)
        first = await _submit(store)
        await _submit(store)
        await store.update_status(first.pengajuan_id, LoanApplicationStatus.DISETUJUI)

        assert len(await store.list_by_status()) == 2
        assert len(await store.list_by_status(LoanApplicationStatus.MENUNGGU)) == 1
