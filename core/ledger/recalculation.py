"""
월간 재계산 엔진

관리자가 입력한 월간 거래 배치를 회원별 장부에 반영.

처리 순서 (회원 1명당 트랜잭션 1개):
1. 이름 확정 (입력값 → 회원 명부 → 기본 표시 이름)
2. 현재 장부 / 대상 기간 이력 / 직전 이력 조회
3. 기초 잔액 = 직전 이력의 기말 잔액 (없으면 0)
4. 같은 기간의 기존 거래에 더해서 합침
5. 기말 잔액 재계산 후 이력 저장
6. 대상 기간이 현재 장부 기간과 같거나 이후일 때만 현재 장부 갱신

한 회원의 실패는 errors에 기록하고 다음 회원으로 진행.
로그 기록은 호출 측 책임.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import TYPE_CHECKING, Iterable

from core.constants import Defaults
from core.ledger.balance import compute_closing, opening_from
from core.ledger.errors import MemberValidationError, PeriodFormatError
from core.ledger.models import (
    BatchError,
    BatchResult,
    MonthlyReport,
    TransactionEntry,
)
from core.ledger.store import LedgerStore
from core.utils.period import is_same_or_after, is_valid_period
from core.utils.timezone import today_wib

if TYPE_CHECKING:
    from adapters.db.sqlite_adapter import SQLiteAdapter
    from core.storage.anggota_store import MemberDirectory

logger = logging.getLogger(__name__)


class MonthlyRecalculationEngine:
    """월간 재계산 엔진

    Args:
        db: SQLite 어댑터
        members: 회원 명부 (이름 조회용, 없으면 입력값/기본 이름만 사용)
        store: 장부 저장소 (없으면 db로 생성)
    """

    def __init__(
        self,
        db: SQLiteAdapter,
        members: MemberDirectory | None = None,
        store: LedgerStore | None = None,
    ):
        self.db = db
        self.members = members
        self.store = store or LedgerStore(db)

    async def post_monthly_batch(
        self,
        entries: Iterable[TransactionEntry],
        periode: str,
    ) -> BatchResult:
        """월간 거래 배치 게시

        Args:
            entries: 회원별 거래 입력
            periode: 대상 기간 (YYYY-MM)

        Returns:
            BatchResult (성공/실패 수, 실패 목록, 게시된 입력)

        Raises:
            PeriodFormatError: 기간 형식 오류 (어떤 회원도 처리 전)
        """
        if not is_valid_period(periode):
            raise PeriodFormatError(periode)

        name_map = await self.members.get_name_map() if self.members else {}
        result = BatchResult()

        for entry in entries:
            no_anggota = (entry.no_anggota or "").strip().upper()
            try:
                if not no_anggota:
                    raise MemberValidationError("Missing no_anggota")
                entry.mutasi.validate()

                nama = (
                    entry.nama_anggota
                    or name_map.get(no_anggota)
                    or Defaults.MEMBER_NAME_FALLBACK
                )
                resolved = replace(entry, no_anggota=no_anggota, nama_anggota=nama)
                await self._post_member(resolved, periode)

            except Exception as e:
                result.error_count += 1
                result.errors.append(BatchError(no_anggota=no_anggota, error=str(e)))
                logger.error(
                    f"Posting failed: {no_anggota or '(empty)'} ({periode}): {e}"
                )
                continue

            result.success_count += 1
            result.posted.append(resolved)

        if result.is_complete_success:
            await self.store.register_period(periode)

        logger.info(
            f"Monthly batch posted: {periode} "
            f"(success={result.success_count}, errors={result.error_count})"
        )
        return result

    async def _post_member(self, entry: TransactionEntry, periode: str) -> MonthlyReport:
        """회원 1명 게시 (트랜잭션 1개)"""
        no_anggota = entry.no_anggota

        async with self.db.transaction():
            current = await self.store.get_current(no_anggota)
            existing = await self.store.get_history(no_anggota, periode)
            previous = await self.store.get_previous_history(no_anggota, periode)

            awal = opening_from(previous)
            mutasi = entry.mutasi + existing.mutasi if existing else entry.mutasi

            report = MonthlyReport(
                no_anggota=no_anggota,
                nama_anggota=entry.nama_anggota or "",
                periode=periode,
                tanggal_transaksi=(
                    entry.tanggal_transaksi
                    or (existing.tanggal_transaksi if existing else None)
                    or today_wib()
                ),
                admin_nama=entry.admin_nama or (existing.admin_nama if existing else None),
                awal=awal,
                mutasi=mutasi,
                akhir=compute_closing(awal, mutasi),
            )

            await self.store.put_history(report)

            current_periode = current.periode if current else None
            if is_same_or_after(periode, current_periode):
                await self.store.put_current(report)
            else:
                # 이후 기간은 재계산되지 않음 (수정 엔진으로 전파)
                logger.warning(
                    f"Backfill behind latest period: {no_anggota} "
                    f"{periode} < {current_periode}, later periods not recascaded"
                )

        return report
