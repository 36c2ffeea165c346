"""
대출 신청 저장소

pengajuan_pinjaman 테이블 관리.

상태 전이:
    Menunggu Persetujuan → Disetujui
    Menunggu Persetujuan → Ditolak
결정된 신청은 다시 변경할 수 없다.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, replace
from decimal import Decimal
from typing import TYPE_CHECKING, Any

from core.types import LoanApplicationStatus
from core.utils.timezone import now_utc_iso

if TYPE_CHECKING:
    from adapters.db.sqlite_adapter import SQLiteAdapter

logger = logging.getLogger(__name__)


class InvalidStatusTransitionError(ValueError):
    """허용되지 않는 상태 변경"""


@dataclass(frozen=True)
class PengajuanPinjaman:
    """대출 신청"""

    pengajuan_id: str
    no_anggota: str
    nama_anggota: str
    jenis_pinjaman: str
    jumlah: Decimal
    jangka_waktu: int
    keperluan: str | None
    status: LoanApplicationStatus
    tanggal_pengajuan: str
    diputuskan_oleh: str | None = None
    diputuskan_at: str | None = None

    @property
    def is_pending(self) -> bool:
        return self.status == LoanApplicationStatus.MENUNGGU

    def to_dict(self) -> dict[str, Any]:
        return {
            "pengajuan_id": self.pengajuan_id,
            "no_anggota": self.no_anggota,
            "nama_anggota": self.nama_anggota,
            "jenis_pinjaman": self.jenis_pinjaman,
            "jumlah": str(self.jumlah),
            "jangka_waktu": self.jangka_waktu,
            "keperluan": self.keperluan,
            "status": self.status.value,
            "tanggal_pengajuan": self.tanggal_pengajuan,
            "diputuskan_oleh": self.diputuskan_oleh,
            "diputuskan_at": self.diputuskan_at,
        }


_COLUMNS = """
    pengajuan_id, no_anggota, nama_anggota, jenis_pinjaman, jumlah,
    jangka_waktu, keperluan, status, tanggal_pengajuan, diputuskan_oleh, diputuskan_at
"""


def _row_to_pengajuan(row: tuple[Any, ...]) -> PengajuanPinjaman:
    return PengajuanPinjaman(
        pengajuan_id=row[0],
        no_anggota=row[1],
        nama_anggota=row[2],
        jenis_pinjaman=row[3],
        jumlah=Decimal(row[4]),
        jangka_waktu=row[5],
        keperluan=row[6],
        status=LoanApplicationStatus(row[7]),
        tanggal_pengajuan=row[8],
        diputuskan_oleh=row[9],
        diputuskan_at=row[10],
    )


class LoanApplicationStore:
    """대출 신청 저장소

    Args:
        db: SQLite 어댑터
    """

    def __init__(self, db: SQLiteAdapter):
        self.db = db

    async def submit(
        self,
        no_anggota: str,
        jenis_pinjaman: str,
        jumlah: Decimal,
        jangka_waktu: int,
        nama_anggota: str = "",
        keperluan: str | None = None,
    ) -> PengajuanPinjaman:
        """대출 신청 (대기 상태로 생성)

        Raises:
            ValueError: 금액 또는 기간이 0 이하
        """
        if jumlah <= 0:
            raise ValueError(f"jumlah must be positive: {jumlah}")
        if jangka_waktu <= 0:
            raise ValueError(f"jangka_waktu must be positive: {jangka_waktu}")

        pengajuan = PengajuanPinjaman(
            pengajuan_id=uuid.uuid4().hex,
            no_anggota=no_anggota.strip().upper(),
            nama_anggota=nama_anggota,
            jenis_pinjaman=jenis_pinjaman,
            jumlah=jumlah,
            jangka_waktu=jangka_waktu,
            keperluan=keperluan,
            status=LoanApplicationStatus.MENUNGGU,
            tanggal_pengajuan=now_utc_iso(),
        )

        async with self.db.transaction():
            await self.db.execute(
                f"""
                INSERT INTO pengajuan_pinjaman ({_COLUMNS})
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    pengajuan.pengajuan_id,
                    pengajuan.no_anggota,
                    pengajuan.nama_anggota,
                    pengajuan.jenis_pinjaman,
                    str(pengajuan.jumlah),
                    pengajuan.jangka_waktu,
                    pengajuan.keperluan,
                    pengajuan.status.value,
                    pengajuan.tanggal_pengajuan,
                    None,
                    None,
                ),
            )

        logger.info(
            f"Loan application submitted: {pengajuan.pengajuan_id} "
            f"({pengajuan.no_anggota}, {jumlah})"
        )
        return pengajuan

    async def get(self, pengajuan_id: str) -> PengajuanPinjaman | None:
        row = await self.db.fetchone(
            f"SELECT {_COLUMNS} FROM pengajuan_pinjaman WHERE pengajuan_id = ?",
            (pengajuan_id,),
        )
        return _row_to_pengajuan(row) if row else None

    async def list_by_status(
        self,
        status: LoanApplicationStatus | None = None,
    ) -> list[PengajuanPinjaman]:
        """신청 목록 (신청일 최신순)"""
        if status is not None:
            rows = await self.db.fetchall(
                f"""
                SELECT {_COLUMNS} FROM pengajuan_pinjaman
                WHERE status = ?
                ORDER BY tanggal_pengajuan DESC
                """,
                (status.value,),
            )
        else:
            rows = await self.db.fetchall(
                f"""
                SELECT {_COLUMNS} FROM pengajuan_pinjaman
                ORDER BY tanggal_pengajuan DESC
                """
            )
        return [_row_to_pengajuan(row) for row in rows]

    async def update_status(
        self,
        pengajuan_id: str,
        status: LoanApplicationStatus,
        diputuskan_oleh: str | None = None,
    ) -> PengajuanPinjaman | None:
        """승인/거절

        Returns:
            변경된 신청 (없으면 None)

        Raises:
            InvalidStatusTransitionError: 대기 상태가 아니거나 대상 상태가 결정 상태가 아님
        """
        if status == LoanApplicationStatus.MENUNGGU:
            raise InvalidStatusTransitionError(f"Cannot set status to {status.value}")

        async with self.db.transaction():
            existing = await self.get(pengajuan_id)
            if existing is None:
                return None
            if not existing.is_pending:
                raise InvalidStatusTransitionError(
                    f"Application already decided: {pengajuan_id} ({existing.status.value})"
                )

            decided_at = now_utc_iso()
            await self.db.execute(
                """
                UPDATE pengajuan_pinjaman SET
                    status = ?, diputuskan_oleh = ?, diputuskan_at = ?
                WHERE pengajuan_id = ?
                """,
                (status.value, diputuskan_oleh, decided_at, pengajuan_id),
            )

        logger.info(f"Loan application {status.value}: {pengajuan_id} by {diputuskan_oleh}")
        return replace(
            existing,
            status=status,
            diputuskan_oleh=diputuskan_oleh,
            diputuskan_at=decided_at,
        )
