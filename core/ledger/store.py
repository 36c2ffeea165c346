"""
장부 저장소

회원별 현재 장부(keuangan), 월간 이력(keuangan_history),
게시된 기간 레지스트리(posting_period) 저장 및 조회.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

from core.ledger.models import MonthlyReport

if TYPE_CHECKING:
    from adapters.db.sqlite_adapter import SQLiteAdapter

logger = logging.getLogger(__name__)


def _dump(report: MonthlyReport) -> str:
    return json.dumps(report.to_dict(), ensure_ascii=False)


def _load(data_json: str) -> MonthlyReport:
    return MonthlyReport.from_dict(json.loads(data_json))


class LedgerStore:
    """장부 저장소

    쓰기 메서드는 각자 transaction()으로 감싸져 있다.
    엔진이 바깥 트랜잭션을 열고 호출하면 그 트랜잭션에 합류한다.

    Args:
        db: SQLite 어댑터
    """

    def __init__(self, db: SQLiteAdapter):
        self.db = db

    # -------------------------------------------------------------------------
    # 현재 장부 (keuangan)
    # -------------------------------------------------------------------------

    async def get_current(self, no_anggota: str) -> MonthlyReport | None:
        """회원의 현재 장부 조회

        Returns:
            현재 장부 (없으면 None)
        """
        row = await self.db.fetchone(
            "SELECT data_json FROM keuangan WHERE no_anggota = ?",
            (no_anggota,),
        )
        return _load(row[0]) if row else None

    async def put_current(self, report: MonthlyReport) -> None:
        """현재 장부 저장 (덮어쓰기)"""
        async with self.db.transaction():
            await self.db.execute(
                """
                INSERT INTO keuangan (no_anggota, nama_anggota, periode, data_json)
                VALUES (?, ?, ?, ?)
                ON CONFLICT(no_anggota) DO UPDATE SET
                    nama_anggota = excluded.nama_anggota,
                    periode = excluded.periode,
                    data_json = excluded.data_json,
                    updated_at = datetime('now')
                """,
                (
                    report.no_anggota,
                    report.nama_anggota,
                    report.periode,
                    _dump(report),
                ),
            )
        logger.debug(f"Saved current ledger: {report.no_anggota} ({report.periode})")

    async def list_current(self) -> list[MonthlyReport]:
        """전체 회원의 현재 장부 (회원번호 순)"""
        rows = await self.db.fetchall(
            "SELECT data_json FROM keuangan ORDER BY no_anggota"
        )
        return [_load(row[0]) for row in rows]

    # -------------------------------------------------------------------------
    # 월간 이력 (keuangan_history)
    # -------------------------------------------------------------------------

    async def get_history(
        self,
        no_anggota: str,
        periode: str,
    ) -> MonthlyReport | None:
        """회원의 특정 기간 이력 조회"""
        row = await self.db.fetchone(
            """
            SELECT data_json FROM keuangan_history
            WHERE no_anggota = ? AND periode = ?
            """,
            (no_anggota, periode),
        )
        return _load(row[0]) if row else None

    async def put_history(self, report: MonthlyReport) -> None:
        """이력 저장 (같은 회원/기간이면 덮어쓰기)

        Raises:
            ValueError: periode가 없는 장부
        """
        if not report.periode:
            raise ValueError(f"History entry requires periode: {report.no_anggota}")

        async with self.db.transaction():
            await self.db.execute(
                """
                INSERT INTO keuangan_history (no_anggota, periode, data_json)
                VALUES (?, ?, ?)
                ON CONFLICT(no_anggota, periode) DO UPDATE SET
                    data_json = excluded.data_json,
                    updated_at = datetime('now')
                """,
                (report.no_anggota, report.periode, _dump(report)),
            )
        logger.debug(f"Saved history: {report.no_anggota} ({report.periode})")

    async def delete_history(self, no_anggota: str, periode: str) -> bool:
        """이력 삭제

        Returns:
            삭제 여부
        """
        async with self.db.transaction():
            cursor = await self.db.execute(
                "DELETE FROM keuangan_history WHERE no_anggota = ? AND periode = ?",
                (no_anggota, periode),
            )
        return cursor.rowcount > 0

    async def get_previous_history(
        self,
        no_anggota: str,
        periode: str,
    ) -> MonthlyReport | None:
        """periode 직전의 이력 (periode보다 앞선 가장 최근 기간)

        거래가 없던 달을 건너뛰어도 마지막 기말 잔액을 이어받는다.
        """
        row = await self.db.fetchone(
            """
            SELECT data_json FROM keuangan_history
            WHERE no_anggota = ? AND periode < ?
            ORDER BY periode DESC
            LIMIT 1
            """,
            (no_anggota, periode),
        )
        return _load(row[0]) if row else None

    async def list_history(
        self,
        no_anggota: str,
        from_periode: str | None = None,
    ) -> list[MonthlyReport]:
        """회원 이력 목록 (기간 오름차순)

        Args:
            no_anggota: 회원번호
            from_periode: 이 기간 이후만 (포함)
        """
        if from_periode:
            rows = await self.db.fetchall(
                """
                SELECT data_json FROM keuangan_history
                WHERE no_anggota = ? AND periode >= ?
                ORDER BY periode ASC
                """,
                (no_anggota, from_periode),
            )
        else:
            rows = await self.db.fetchall(
                """
                SELECT data_json FROM keuangan_history
                WHERE no_anggota = ?
                ORDER BY periode ASC
                """,
                (no_anggota,),
            )
        return [_load(row[0]) for row in rows]

    async def list_history_periods(self, no_anggota: str) -> list[str]:
        """회원의 이력 기간 목록 (오름차순)"""
        rows = await self.db.fetchall(
            """
            SELECT periode FROM keuangan_history
            WHERE no_anggota = ?
            ORDER BY periode ASC
            """,
            (no_anggota,),
        )
        return [row[0] for row in rows]

    async def list_members_in_period(self, periode: str) -> list[str]:
        """해당 기간에 이력이 있는 회원번호 목록"""
        rows = await self.db.fetchall(
            """
            SELECT no_anggota FROM keuangan_history
            WHERE periode = ?
            ORDER BY no_anggota
            """,
            (periode,),
        )
        return [row[0] for row in rows]

    async def list_all_history(self) -> list[MonthlyReport]:
        """전체 이력 (회원, 기간 순)"""
        rows = await self.db.fetchall(
            """
            SELECT data_json FROM keuangan_history
            ORDER BY no_anggota, periode
            """
        )
        return [_load(row[0]) for row in rows]

    async def list_distinct_history_periods(self) -> list[str]:
        """이력에 존재하는 모든 기간 (중복 제거)"""
        rows = await self.db.fetchall(
            "SELECT DISTINCT periode FROM keuangan_history"
        )
        return [row[0] for row in rows]

    # -------------------------------------------------------------------------
    # 게시된 기간 레지스트리 (posting_period)
    # -------------------------------------------------------------------------

    async def register_period(self, periode: str) -> None:
        """기간 등록 (이미 있으면 무시)"""
        async with self.db.transaction():
            await self.db.execute(
                "INSERT OR IGNORE INTO posting_period (periode) VALUES (?)",
                (periode,),
            )

    async def unregister_period(self, periode: str) -> None:
        """기간 등록 해제"""
        async with self.db.transaction():
            await self.db.execute(
                "DELETE FROM posting_period WHERE periode = ?",
                (periode,),
            )

    async def list_periods(self) -> list[str]:
        """등록된 기간 목록 (최신순)"""
        rows = await self.db.fetchall(
            "SELECT periode FROM posting_period ORDER BY periode DESC"
        )
        return [row[0] for row in rows]

    async def replace_periods(self, periods: list[str]) -> None:
        """레지스트리를 주어진 기간 목록으로 교체"""
        async with self.db.transaction():
            await self.db.execute("DELETE FROM posting_period")
            await self.db.executemany(
                "INSERT OR IGNORE INTO posting_period (periode) VALUES (?)",
                [(p,) for p in periods],
            )
        logger.info(f"Posting period registry replaced: {len(periods)} periods")
