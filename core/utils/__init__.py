"""
유틸리티 패키지

기간(periode) 처리, 타임존 처리 등 공통 유틸리티
"""

from core.utils.period import (
    is_valid_period,
    is_same_or_after,
    sort_periods,
)
from core.utils.timezone import (
    WIB,
    to_wib,
    now_utc,
    now_utc_iso,
    today_wib,
)

__all__ = [
    "is_valid_period",
    "is_same_or_after",
    "sort_periods",
    "WIB",
    "to_wib",
    "now_utc",
    "now_utc_iso",
    "today_wib",
]
