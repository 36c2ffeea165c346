"""
거래 로그 저장소

transaksi_log 테이블 관리.
월간 배치 게시(NEW)와 과거 거래 수정(EDIT)의 감사 추적.
"""

from __future__ import annotations

import json
import logging
import uuid
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Iterable

from core.constants import Defaults
from core.ledger.models import ZERO, MonthlyReport, Mutasi, TransactionLog
from core.types import LogType
from core.utils.timezone import now_utc_iso

if TYPE_CHECKING:
    from adapters.db.sqlite_adapter import SQLiteAdapter

logger = logging.getLogger(__name__)


_COLUMNS = """
    log_id, no_anggota, nama_anggota, periode, admin_nama,
    tanggal_transaksi, log_type, mutasi_json, log_time, edited_by, edited_at
"""


def _row_to_log(row: tuple[Any, ...]) -> TransactionLog:
    return TransactionLog(
        log_id=row[0],
        no_anggota=row[1],
        nama_anggota=row[2],
        periode=row[3],
        admin_nama=row[4],
        tanggal_transaksi=row[5],
        log_type=LogType(row[6]),
        mutasi=Mutasi.from_dict(json.loads(row[7])),
        log_time=row[8],
        edited_by=row[9],
        edited_at=row[10],
    )


def total_setoran(logs: Iterable[TransactionLog]) -> Decimal:
    """로그 목록의 총 납입액 합계 (관리자별 정산용)"""
    return sum((log.jumlah_setoran for log in logs), ZERO)


class TransactionLogStore:
    """거래 로그 저장소

    Args:
        db: SQLite 어댑터
    """

    def __init__(self, db: SQLiteAdapter):
        self.db = db

    async def create_log(
        self,
        no_anggota: str,
        periode: str,
        admin_nama: str,
        mutasi: Mutasi,
        nama_anggota: str = "",
        tanggal_transaksi: str | None = None,
        log_type: LogType = LogType.NEW,
    ) -> TransactionLog:
        """로그 생성

        Returns:
            생성된 로그 (log_id, log_time 포함)
        """
        log = TransactionLog(
            log_id=uuid.uuid4().hex,
            no_anggota=no_anggota,
            nama_anggota=nama_anggota,
            periode=periode,
            admin_nama=admin_nama,
            mutasi=mutasi,
            tanggal_transaksi=tanggal_transaksi,
            log_type=log_type,
            log_time=now_utc_iso(),
        )

        async with self.db.transaction():
            await self.db.execute(
                f"""
                INSERT INTO transaksi_log ({_COLUMNS}, jumlah_setoran)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    log.log_id,
                    log.no_anggota,
                    log.nama_anggota,
                    log.periode,
                    log.admin_nama,
                    log.tanggal_transaksi,
                    log.log_type.value,
                    json.dumps(mutasi.to_dict()),
                    log.log_time,
                    None,
                    None,
                    str(log.jumlah_setoran),
                ),
            )

        logger.debug(f"Transaction log created: {log.log_id} ({no_anggota}, {periode})")
        return log

    async def create_log_from_history(self, report: MonthlyReport) -> TransactionLog:
        """이력으로부터 로그 생성

        로그 없이 게시된 이력도 수정 엔진에서 다룰 수 있도록 한다.

        Raises:
            ValueError: periode가 없는 장부
        """
        if not report.periode:
            raise ValueError(f"History entry requires periode: {report.no_anggota}")

        return await self.create_log(
            no_anggota=report.no_anggota,
            periode=report.periode,
            admin_nama=report.admin_nama or Defaults.SYSTEM_ADMIN_NAME,
            mutasi=report.mutasi,
            nama_anggota=report.nama_anggota,
            tanggal_transaksi=report.tanggal_transaksi,
        )

    async def get_log(self, log_id: str) -> TransactionLog | None:
        row = await self.db.fetchone(
            f"SELECT {_COLUMNS} FROM transaksi_log WHERE log_id = ?",
            (log_id,),
        )
        return _row_to_log(row) if row else None

    async def list_logs(
        self,
        no_anggota: str | None = None,
        periode: str | None = None,
        limit: int | None = None,
    ) -> list[TransactionLog]:
        """로그 목록 (최신순)

        Args:
            no_anggota: 회원번호 필터
            periode: 기간 필터
            limit: 최대 개수
        """
        conditions = []
        params: list[Any] = []
        if no_anggota:
            conditions.append("no_anggota = ?")
            params.append(no_anggota)
        if periode:
            conditions.append("periode = ?")
            params.append(periode)

        sql = f"SELECT {_COLUMNS} FROM transaksi_log"
        if conditions:
            sql += " WHERE " + " AND ".join(conditions)
        sql += " ORDER BY log_time DESC"
        if limit:
            sql += " LIMIT ?"
            params.append(limit)

        rows = await self.db.fetchall(sql, tuple(params))
        return [_row_to_log(row) for row in rows]

    async def list_by_period(self, periode: str) -> list[TransactionLog]:
        return await self.list_logs(periode=periode)

    async def list_by_member(self, no_anggota: str) -> list[TransactionLog]:
        """회원 로그 (최근 기간 먼저)"""
        rows = await self.db.fetchall(
            f"""
            SELECT {_COLUMNS} FROM transaksi_log
            WHERE no_anggota = ?
            ORDER BY periode DESC, log_time DESC
            """,
            (no_anggota,),
        )
        return [_row_to_log(row) for row in rows]

    async def list_by_admin_period(
        self,
        admin_nama: str,
        periode: str,
    ) -> list[TransactionLog]:
        """관리자가 해당 기간에 입력한 로그 (정산용)"""
        rows = await self.db.fetchall(
            f"""
            SELECT {_COLUMNS} FROM transaksi_log
            WHERE admin_nama = ? AND periode = ?
            ORDER BY no_anggota, log_time
            """,
            (admin_nama, periode),
        )
        return [_row_to_log(row) for row in rows]

    async def list_periods(self) -> list[str]:
        """로그가 있는 기간 목록 (최신순)"""
        rows = await self.db.fetchall(
            "SELECT DISTINCT periode FROM transaksi_log ORDER BY periode DESC"
        )
        return [row[0] for row in rows]

    async def list_logged_keys(self) -> set[tuple[str, str]]:
        """로그가 있는 (회원번호, 기간) 쌍"""
        rows = await self.db.fetchall(
            "SELECT DISTINCT no_anggota, periode FROM transaksi_log"
        )
        return {(row[0], row[1]) for row in rows}

    async def update_log(
        self,
        log_id: str,
        mutasi: Mutasi,
        edited_by: str,
        edited_at: str | None = None,
    ) -> bool:
        """수정된 거래 금액으로 로그 갱신 (EDIT로 전환)

        Returns:
            갱신 여부 (로그가 없으면 False)
        """
        async with self.db.transaction():
            cursor = await self.db.execute(
                """
                UPDATE transaksi_log SET
                    mutasi_json = ?,
                    jumlah_setoran = ?,
                    log_type = ?,
                    edited_by = ?,
                    edited_at = ?
                WHERE log_id = ?
                """,
                (
                    json.dumps(mutasi.to_dict()),
                    str(mutasi.jumlah_setoran),
                    LogType.EDIT.value,
                    edited_by,
                    edited_at or now_utc_iso(),
                    log_id,
                ),
            )
        return cursor.rowcount > 0

    async def mark_edited(
        self,
        log_id: str,
        edited_by: str,
        edited_at: str | None = None,
    ) -> bool:
        """금액 변경 없이 수정 메타데이터만 갱신"""
        async with self.db.transaction():
            cursor = await self.db.execute(
                """
                UPDATE transaksi_log SET
                    log_type = ?,
                    edited_by = ?,
                    edited_at = ?
                WHERE log_id = ?
                """,
                (LogType.EDIT.value, edited_by, edited_at or now_utc_iso(), log_id),
            )
        return cursor.rowcount > 0

    async def delete_logs_by_period(self, periode: str) -> int:
        """기간의 로그 전체 삭제

        Returns:
            삭제된 로그 수
        """
        async with self.db.transaction():
            cursor = await self.db.execute(
                "DELETE FROM transaksi_log WHERE periode = ?",
                (periode,),
            )
        deleted = cursor.rowcount
        logger.info(f"Transaction logs deleted: {periode} ({deleted})")
        return deleted
