"""
기간(periode) 유틸리티

월별 장부의 기간 키는 "YYYY-MM" 문자열.
0 패딩된 고정 길이 형식이므로 문자열 비교가 곧 시간 순서 비교.
"""

import re
from collections.abc import Iterable

from core.constants import PERIOD_PATTERN

_PERIOD_RE = re.compile(PERIOD_PATTERN)


def is_valid_period(period: str | None) -> bool:
    """기간 형식 검증

    Example:
        >>> is_valid_period("2024-01")
        True
        >>> is_valid_period("2024-13")
        False
        >>> is_valid_period("2024-1")
        False
    """
    if not period or not isinstance(period, str):
        return False
    return _PERIOD_RE.match(period) is not None


def is_same_or_after(period: str, reference: str | None) -> bool:
    """period가 reference와 같거나 이후인지

    reference가 없으면(기록된 기간 없음) 항상 True.
    """
    if not reference:
        return True
    return period >= reference


def sort_periods(periods: Iterable[str], descending: bool = False) -> list[str]:
    """유효한 기간만 골라 정렬 (중복 제거)"""
    valid = {p for p in periods if is_valid_period(p)}
    return sorted(valid, reverse=descending)
