"""
잔액 계산

저축: akhir = awal + 입금 - 인출
대출: akhir = awal - 상환 + 추가 대출

DB 접근 없는 순수 함수만 둔다. 배치 엔진과 수정 엔진이 같은 계산을 공유.
"""

from core.ledger.models import MonthlyReport, Mutasi, Saldo
from core.ledger.types import ALL_REKENING, credit_field, debit_field


def compute_closing(awal: Saldo, mutasi: Mutasi) -> Saldo:
    """기초 잔액과 거래로 기말 잔액 계산"""
    values = {}
    for r in ALL_REKENING:
        values[r.value] = (
            awal.get(r) + mutasi.get(credit_field(r)) - mutasi.get(debit_field(r))
        )
    return Saldo(**values)


def opening_from(previous: MonthlyReport | None) -> Saldo:
    """직전 기간의 기말 잔액 (없으면 0)"""
    if previous is None:
        return Saldo.zero()
    return previous.akhir


def recompute(report: MonthlyReport, awal: Saldo | None = None) -> MonthlyReport:
    """기말 잔액 재계산

    Args:
        report: 대상 장부
        awal: 새 기초 잔액 (None이면 기존 기초 유지)
    """
    opening = report.awal if awal is None else awal
    return report.with_changes(
        awal=opening,
        akhir=compute_closing(opening, report.mutasi),
    )


def is_balanced(report: MonthlyReport) -> bool:
    """잔액 불변식 검증 (akhir가 awal과 거래로 설명되는지)"""
    return compute_closing(report.awal, report.mutasi) == report.akhir
