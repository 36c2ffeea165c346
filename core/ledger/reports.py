"""
월간 보고서 서비스

게시된 기간 목록, 회원별 보고서 조회, 월간 보고서 삭제.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from core.ledger.balance import opening_from, recompute
from core.ledger.errors import PeriodFormatError
from core.ledger.log_store import TransactionLogStore
from core.ledger.models import MonthlyReport
from core.ledger.store import LedgerStore
from core.utils.period import is_valid_period, sort_periods

if TYPE_CHECKING:
    from adapters.db.sqlite_adapter import SQLiteAdapter

logger = logging.getLogger(__name__)


@dataclass
class DeleteReportResult:
    """월간 보고서 삭제 결과"""

    periode: str
    members: list[str] = field(default_factory=list)
    deleted_logs: int = 0


class MonthlyReportService:
    """월간 보고서 서비스

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

    # -------------------------------------------------------------------------
    # 게시된 기간
    # -------------------------------------------------------------------------

    async def list_posted_periods(self) -> list[str]:
        """게시된 기간 목록 (최신순)"""
        return await self.store.list_periods()

    async def rebuild_posted_periods(self) -> list[str]:
        """이력에서 기간 레지스트리 재구성

        이력에 있는 YYYY-MM 형식의 기간만 등록한다.

        Returns:
            재구성된 기간 목록 (최신순)
        """
        periods = sort_periods(
            await self.store.list_distinct_history_periods(), descending=True
        )
        await self.store.replace_periods(periods)
        logger.info(f"Posted periods rebuilt: {periods}")
        return periods

    # -------------------------------------------------------------------------
    # 회원별 조회
    # -------------------------------------------------------------------------

    async def get_current(self, no_anggota: str) -> MonthlyReport | None:
        return await self.store.get_current(no_anggota)

    async def list_current(self) -> list[MonthlyReport]:
        """전체 회원의 현재 장부 (회원번호 순)"""
        return await self.store.list_current()

    async def get_history(self, no_anggota: str) -> list[MonthlyReport]:
        """회원 이력 전체 (오름차순)"""
        return await self.store.list_history(no_anggota)

    async def get_available_report_periods(self, no_anggota: str) -> list[str]:
        """회원의 보고서 기간 목록 (최신순)"""
        periods = await self.store.list_history_periods(no_anggota)
        return sort_periods(periods, descending=True)

    async def get_monthly_report(
        self,
        no_anggota: str,
        periode: str,
    ) -> MonthlyReport | None:
        """회원의 월간 보고서

        Raises:
            PeriodFormatError: 기간 형식 오류
        """
        if not is_valid_period(periode):
            raise PeriodFormatError(periode)
        return await self.store.get_history(no_anggota, periode)

    # -------------------------------------------------------------------------
    # 삭제
    # -------------------------------------------------------------------------

    async def delete_monthly_report(self, periode: str) -> DeleteReportResult:
        """월간 보고서 삭제

        해당 기간에 이력이 있는 모든 회원에 대해:
        1. 이력 삭제
        2. 이후 기간을 직전 기말 잔액(없으면 0)부터 다시 계산
        3. 현재 장부 = 남은 최신 이력 (없으면 잔액 0 장부)
        마지막으로 기간의 로그를 삭제하고 레지스트리에서 제거.

        Raises:
            PeriodFormatError: 기간 형식 오류
        """
        if not is_valid_period(periode):
            raise PeriodFormatError(periode)

        result = DeleteReportResult(periode=periode)

        async with self.db.transaction():
            members = await self.store.list_members_in_period(periode)

            for no_anggota in members:
                removed = await self.store.get_history(no_anggota, periode)
                await self.store.delete_history(no_anggota, periode)

                previous = await self.store.get_previous_history(no_anggota, periode)
                opening = opening_from(previous)
                latest = previous

                for later in await self.store.list_history(no_anggota, from_periode=periode):
                    updated = recompute(later, awal=opening)
                    await self.store.put_history(updated)
                    opening = updated.akhir
                    latest = updated

                if latest is None:
                    nama = removed.nama_anggota if removed else ""
                    latest = MonthlyReport.empty(no_anggota, nama)
                await self.store.put_current(latest)
                result.members.append(no_anggota)

            result.deleted_logs = await self.logs.delete_logs_by_period(periode)
            await self.store.unregister_period(periode)

        logger.info(
            f"Monthly report deleted: {periode} "
            f"(members={len(result.members)}, logs={result.deleted_logs})"
        )
        return result
